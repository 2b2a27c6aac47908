"""
Django test settings for task_escalator project.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

JWT_SECRET_KEY = 'test-jwt-secret-key-that-is-long-enough-for-hs256'

# Calls are recorded in apps.notifications.backends.outbox
CALL_BACKEND = 'apps.notifications.backends.LocMemCallBackend'

Q_CLUSTER = dict(Q_CLUSTER, sync=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['null'],
            'level': 'DEBUG',
            'propagate': True,
        },
    },
}
