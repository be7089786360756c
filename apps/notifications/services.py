"""Notification dispatcher for the partner exchange.

Messages go out through the WhatsApp Business Cloud API. Delivery is
fire-and-forget from the exchange's point of view: ``send`` never raises,
it returns a DeliveryResult the caller may surface as a warning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

import requests
from django.conf import settings  # type: ignore

from shared.masking import mask_phone

from .models import NotificationLog

if TYPE_CHECKING:  # pragma: no cover
    from apps.exchange.models import ReservationRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    success: bool
    error: Optional[str] = None
    skipped: bool = False

    @property
    def warning(self) -> Optional[str]:
        if self.success or self.skipped:
            return None
        return f"Bildirim gönderilemedi: {self.error}"


# ============================================================================
# WHATSAPP DELIVERY
# ============================================================================

def send_whatsapp_message(phone_number: str, text: str) -> DeliveryResult:
    """
    WhatsApp Business API üzerinden metin mesajı gönderir.

    Args:
        phone_number: Alıcı telefon numarası (uluslararası format)
        text: Mesaj metni

    Returns:
        DeliveryResult: başarı durumu ve varsa hata açıklaması
    """
    if not settings.WHATSAPP_TOKEN or not settings.WHATSAPP_API_URL:
        logger.warning("WhatsApp credentials are not configured; message not sent")
        return DeliveryResult(success=False, error="WhatsApp yapılandırılmamış")

    url = f"{settings.WHATSAPP_API_URL}/messages"
    headers = {
        "Authorization": f"Bearer {settings.WHATSAPP_TOKEN}",
        "Content-Type": "application/json",
    }
    payload = {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": phone_number.lstrip("+"),
        "type": "text",
        "text": {
            "preview_url": False,
            "body": text,
        },
    }

    try:
        response = requests.post(url, headers=headers, json=payload, timeout=settings.WHATSAPP_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Error sending WhatsApp message to {mask_phone(phone_number)}: {e}", exc_info=True)
        return DeliveryResult(success=False, error=str(e))

    logger.info(f"WhatsApp message sent to {mask_phone(phone_number)}")
    return DeliveryResult(success=True)


def send(phone: str, message: str) -> DeliveryResult:
    """Dispatcher entry point: deliver ``message`` to ``phone``."""

    if not settings.NOTIFICATIONS_ENABLED:
        return DeliveryResult(success=False, skipped=True, error="disabled")
    if not phone:
        return DeliveryResult(success=False, error="Telefon numarası yok")
    return send_whatsapp_message(phone, message)


# ============================================================================
# RESERVATION REQUEST MESSAGES
# ============================================================================

def sender_phone(request: "ReservationRequest") -> str:
    """The requesting user's phone, else the origin tenant's contact phone."""

    user = request.requested_by
    if user is not None and user.phone:
        return user.phone
    if request.origin_tenant is not None:
        return request.origin_tenant.contact_phone
    return ""


def build_status_message(request: "ReservationRequest", event: str) -> str:
    activity = request.activity.name
    when = f"{request.date:%d.%m.%Y} {request.time:%H:%M}"
    header = f"{activity} - {when} - {request.customer_name} ({request.guests} kişi)"

    if event == "approved":
        return f"✅ Rezervasyon talebiniz onaylandı.\n{header}"
    if event == "rejected":
        note = f"\nNot: {request.process_notes}" if request.process_notes else ""
        return f"❌ Rezervasyon talebiniz reddedildi.\n{header}{note}"
    if event == "converted":
        reservation_id = request.converted_reservation_id
        return f"📋 Talebiniz rezervasyona dönüştürüldü (#{reservation_id}).\n{header}"
    return f"Rezervasyon talebinizin durumu güncellendi: {request.get_status_display()}\n{header}"


def notify_request_status(request: "ReservationRequest", event: str) -> DeliveryResult:
    """Tell the sending side what happened to its request and log the attempt."""

    phone = sender_phone(request)
    message = build_status_message(request, event)
    result = send(phone, message)

    if result.skipped:
        status = NotificationLog.Status.SKIPPED
    elif result.success:
        status = NotificationLog.Status.SENT
    else:
        status = NotificationLog.Status.FAILED
        logger.warning(f"Notification for request {request.pk} ({event}) failed: {result.error}")

    NotificationLog.objects.create(
        tenant_id=request.origin_tenant_id,
        reservation_request=request,
        event=event,
        phone=phone,
        message=message,
        status=status,
        error=result.error or "",
    )
    return result
