"""Test settings for the Holiday Rentals API.

The test database is a file so that threads opened by concurrency tests
share it with the main test connection. Images go to a throwaway
directory through the filesystem media store.
"""

import tempfile

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES['default'] = {  # noqa: F405
    'ENGINE': 'django.db.backends.sqlite3',
    'NAME': BASE_DIR / 'test.sqlite3',  # noqa: F405
    'OPTIONS': {'timeout': 20},
    'TEST': {'NAME': BASE_DIR / 'test_db.sqlite3'},  # noqa: F405
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

MEDIA_ROOT = tempfile.mkdtemp(prefix='rentals-media-')

RENTALS = {  # noqa: F405
    **RENTALS,  # noqa: F405
    'MEDIA_STORE': 'shared.infrastructure.media.FileSystemMediaStore',
    'BOOKING_LOCK_TIMEOUT': 10.0,
}

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

LOGGING['root']['level'] = 'CRITICAL'  # noqa: F405
LOGGING['loggers']['apps']['level'] = 'WARNING'  # noqa: F405
