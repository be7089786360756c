"""Development settings for the Turlink project.

Enables debug, allows all hosts and logs verbosely. Do not use these
settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

# Run Celery tasks inline so no broker is needed locally
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

LOGGING['loggers']['apps']['level'] = 'DEBUG'  # noqa: F405
