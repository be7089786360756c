import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("turlink")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Clear customer tracking links whose validity window has passed - hourly
    "cleanup-expired-tracking-tokens": {
        "task": "reservations.cleanup_expired_tracking_tokens",
        "schedule": crontab(minute=30),
    },
}

app.conf.timezone = "Europe/Istanbul"
