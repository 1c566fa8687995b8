"""Development settings for the Holiday Rentals API.

This module extends the base settings with development specific
configuration, such as enabling debug, allowing all hosts and storing
uploaded images on the local filesystem. Do not use these settings in
production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Keep uploaded images under MEDIA_ROOT unless S3 is explicitly configured
RENTALS['MEDIA_STORE'] = os.environ.get('MEDIA_STORE', 'shared.infrastructure.media.FileSystemMediaStore')  # noqa: F405
