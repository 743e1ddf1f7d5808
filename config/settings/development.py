"""
Development settings for the overlay composition service.
"""

from .base import *

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

# Logging - More verbose in development
LOGGING['root']['level'] = 'DEBUG'
LOGGING['loggers']['apps.compositions']['level'] = 'DEBUG'
LOGGING['loggers']['apps.api']['level'] = 'DEBUG'
