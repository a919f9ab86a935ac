"""
Development settings - used for local development.
"""
from .base import *

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

# The example apps run on devices and emulators hitting the laptop's address
ALLOWED_HOSTS = ['*']

# CORS settings for local development
CORS_ALLOW_ALL_ORIGINS = True

REQUEST_LOGGING_ENABLED = True

LOGGING['handlers']['console']['formatter'] = 'verbose'
