"""
Base settings for the overlay composition service.
These settings are shared across all environments.
"""

import os
from pathlib import Path
import environ

# Initialize environment variables
env = environ.Env(
    DEBUG=(bool, False)
)

# Build paths inside the project
# BASE_DIR is three levels up from this file
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Read .env file
environ.Env.read_env(os.path.join(BASE_DIR, '.env'))

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env('SECRET_KEY', default='django-insecure-3w!k0c8n7$r^x2vq5h@e1m9z6t4y_oj&lpa+fbsdgu-ic')

# Application definition
INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',

    # Third party apps
    'rest_framework',

    # Local apps
    'apps.core',
    'apps.compositions',
    'apps.api',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'apps.core.middleware.RequestLoggingMiddleware',
]

ROOT_URLCONF = 'config.urls'

WSGI_APPLICATION = 'config.wsgi.application'

# No model is persisted; every asset lives in Cloudinary
DATABASES = {}

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Cloudinary Configuration
# CLOUDINARY_URL is honoured by the SDK when the explicit credentials are empty
CLOUDINARY_CLOUD_NAME = env('CLOUDINARY_CLOUD_NAME', default='')
CLOUDINARY_API_KEY = env('CLOUDINARY_API_KEY', default='')
CLOUDINARY_API_SECRET = env('CLOUDINARY_API_SECRET', default='')

CLOUDINARY_STORAGE = {
    'FOLDER': env('CLOUDINARY_FOLDER', default='chroma-key-overlays'),
    'UPLOAD_TIMEOUT': env.int('CLOUDINARY_UPLOAD_TIMEOUT', default=300),  # 5 minutes
    'API_TIMEOUT': env.int('CLOUDINARY_API_TIMEOUT', default=60),
}

# Overlay composition
COMPOSITION = {
    # The foreground video has a solid background colour (the chroma key)
    'FOREGROUND_PATH': env(
        'COMPOSITION_FOREGROUND_PATH',
        default=str(BASE_DIR / 'static' / 'videos' / 'foreground.mp4'),
    ),
    'BACKGROUND_PATH': env(
        'COMPOSITION_BACKGROUND_PATH',
        default=str(BASE_DIR / 'static' / 'videos' / 'background.mp4'),
    ),
    'CHROMA_KEY_COLOR': env('COMPOSITION_CHROMA_KEY_COLOR', default='#6adb47'),
    'TARGET_WIDTH': env.int('COMPOSITION_TARGET_WIDTH', default=500),
    'OVERLAY_SCALE': env.float('COMPOSITION_OVERLAY_SCALE', default=0.6),
    'TRANSPARENCY_TOLERANCE': env.int('COMPOSITION_TRANSPARENCY_TOLERANCE', default=20),
    'GRAVITY': env('COMPOSITION_GRAVITY', default='north'),
    'OUTPUT_DURATION': env.float('COMPOSITION_OUTPUT_DURATION', default=15.0),
    'CLEANUP_FAILURE_IS_FATAL': env.bool('COMPOSITION_CLEANUP_FAILURE_IS_FATAL', default=True),
}

# Django REST Framework
REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'apps.api.exceptions.custom_exception_handler',
}

# Logging Configuration
LOG_DIR = Path(env('LOG_DIR', default=str(BASE_DIR / 'logs')))
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{levelname}] {asctime} {name} {module} {message}',
            'style': '{',
            'datefmt': '%Y-%m-%d %H:%M:%S',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'compositions.log',
            'maxBytes': 10485760,  # 10MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console', 'file'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
        'apps.compositions': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
        'apps.api': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
        'apps.core': {
            'handlers': ['console', 'file'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}
