"""Settings used by the pytest suite.

SQLite database, fast password hashing and no outbound WhatsApp traffic.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

# File-backed so threads get their own connections. IMMEDIATE makes a
# second writer wait for the first to commit instead of failing.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test.sqlite3',
        'OPTIONS': {
            'transaction_mode': 'IMMEDIATE',
            'timeout': 20,
        },
        'TEST': {
            'NAME': BASE_DIR / 'test.sqlite3',
        },
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

WHATSAPP_TOKEN = 'test-token'
WHATSAPP_API_URL = 'https://whatsapp.test/v18.0/000'
RECONCILIATION_STRICTNESS = 'lenient'

# Notification tests enable delivery explicitly and patch requests.post
NOTIFICATIONS_ENABLED = False
