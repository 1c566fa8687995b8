"""Properties app package.

This app encapsulates the property catalog: the property model, its
listing filters, and the catalog service that keeps stored property
images in step with the database.
"""
