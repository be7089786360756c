"""Tests for WhatsApp delivery of request status updates."""

from __future__ import annotations

from unittest import mock

import pytest
import requests
from django.urls import reverse
from rest_framework.test import APIClient

from apps.exchange import services as exchange
from apps.notifications import services
from apps.notifications.models import NotificationLog


@pytest.fixture
def pending(sender_user, activity, share, slot_date, slot_time):
    return exchange.create_request(
        sender_user,
        activity,
        slot_date=slot_date,
        slot_time=slot_time,
        customer_name="Murat Aydın",
        customer_phone="+905554443322",
        guests=2,
    )


@mock.patch("apps.notifications.services.requests.post")
def test_send_posts_text_message(mock_post, settings):
    settings.NOTIFICATIONS_ENABLED = True
    mock_post.return_value.raise_for_status.return_value = None

    result = services.send("+905321112233", "Merhaba")

    assert result.success
    assert result.warning is None
    url = mock_post.call_args.args[0]
    payload = mock_post.call_args.kwargs["json"]
    assert url == "https://whatsapp.test/v18.0/000/messages"
    assert payload["to"] == "905321112233"
    assert payload["text"]["body"] == "Merhaba"
    assert mock_post.call_args.kwargs["timeout"] == 10


@mock.patch("apps.notifications.services.requests.post", side_effect=requests.Timeout("timed out"))
def test_send_failure_is_returned_not_raised(mock_post, settings):
    settings.NOTIFICATIONS_ENABLED = True
    result = services.send("+905321112233", "Merhaba")

    assert not result.success
    assert "timed out" in result.warning


@mock.patch("apps.notifications.services.requests.post")
def test_unconfigured_channel_fails_without_calling_out(mock_post, settings):
    settings.NOTIFICATIONS_ENABLED = True
    settings.WHATSAPP_TOKEN = ""
    result = services.send("+905321112233", "Merhaba")

    assert not result.success
    mock_post.assert_not_called()


@mock.patch("apps.notifications.services.requests.post")
def test_disabled_delivery_is_skipped(mock_post):
    result = services.send("+905321112233", "Merhaba")

    assert result.skipped
    assert result.warning is None
    mock_post.assert_not_called()


@pytest.mark.django_db
def test_sender_phone_prefers_requesting_user(pending, sender, sender_user):
    assert services.sender_phone(pending) == "+905321112233"

    sender_user.phone = None
    sender_user.save(update_fields=["phone"])
    pending.refresh_from_db()
    assert services.sender_phone(pending) == sender.contact_phone


@pytest.mark.django_db
def test_rejection_message_carries_note(pending, receiver_user):
    rejected = exchange.reject(pending.pk, receiver_user, "Seans iptal")

    message = services.build_status_message(rejected, "rejected")

    assert "reddedildi" in message
    assert "Seans iptal" in message
    assert "Murat Aydın (2 kişi)" in message


@pytest.mark.django_db
@mock.patch("apps.notifications.services.requests.post")
def test_notify_logs_each_attempt(mock_post, pending, receiver_user, sender, settings):
    settings.NOTIFICATIONS_ENABLED = True
    approved = exchange.approve(pending.pk, receiver_user)
    mock_post.return_value.raise_for_status.return_value = None
    services.notify_request_status(approved, "approved")

    mock_post.side_effect = requests.ConnectionError("refused")
    result = services.notify_request_status(approved, "approved")

    assert result.warning
    logs = list(NotificationLog.objects.order_by("pk"))
    assert [log.status for log in logs] == ["sent", "failed"]
    assert all(log.tenant_id == sender.pk for log in logs)
    assert logs[1].error == "refused"


@pytest.mark.django_db
@mock.patch("apps.notifications.services.requests.post", side_effect=requests.ConnectionError("refused"))
def test_failed_delivery_keeps_transition(mock_post, pending, receiver_user, settings):
    settings.NOTIFICATIONS_ENABLED = True
    client = APIClient()
    client.force_authenticate(receiver_user)

    response = client.post(reverse("reservation-request-reject", args=[pending.pk]), {}, format="json")

    assert response.status_code == 200
    assert response.data["status"] == "rejected"
    assert response.data["warnings"] == ["Bildirim gönderilemedi: refused"]
    pending.refresh_from_db()
    assert pending.status == "rejected"


@pytest.mark.django_db
def test_log_visible_to_both_tenants(pending, receiver_user, sender_user):
    services.notify_request_status(pending, "approved")
    client = APIClient()

    for user in (sender_user, receiver_user):
        client.force_authenticate(user)
        response = client.get(reverse("notification-list"))
        assert [row["status"] for row in response.data] == ["skipped"]
