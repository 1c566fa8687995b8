"""Users app package.

This app holds the account model (email login, ``user``/``admin`` roles),
registration and login endpoints, the credential service and the access
policy consulted by every other app. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout the
project.
"""
