"""Celery tasks for reservations."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import clear_expired_tracking_tokens

logger = logging.getLogger(__name__)


@shared_task(name="reservations.cleanup_expired_tracking_tokens")
def cleanup_expired_tracking_tokens() -> dict[str, int]:
    """
    Müşteri takip bağlantılarını süresi dolunca geçersiz kılar.

    Celery Beat ile saatte bir çalışır.

    Returns:
        dict: {"cleared": temizlenen token sayısı}
    """
    cleared = clear_expired_tracking_tokens()
    if cleared:
        logger.info(f"Cleared {cleared} expired tracking tokens")
    return {"cleared": cleared}
