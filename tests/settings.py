"""
Minimal Django settings for running tests.
"""

from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

SECRET_KEY = 'test-secret-key-for-theme-toggle-tests'

DEBUG = True

ALLOWED_HOSTS = ['testserver']

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.staticfiles',
    'theme_toggle',
]

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Sessions live in the local-memory cache so tests need no database
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}
SESSION_ENGINE = 'django.contrib.sessions.backends.cache'

MIDDLEWARE = [
    'django.contrib.sessions.middleware.SessionMiddleware',
    'theme_toggle.middleware.ThemeMiddleware',
]

ROOT_URLCONF = 'tests.urls'

STATIC_URL = '/static/'
STATICFILES_DIRS = [BASE_DIR / 'static']

# Channels configuration
CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'theme_toggle.context_processors.theme',
            ],
        },
    },
]

THEME_TOGGLE_CONFIG = {
    'preference_backend': 'session',
}

USE_TZ = True
