"""API tests for partnerships, shares and shared availability."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.partners.models import ActivityShare, Partnership
from apps.tenants.models import Activity, Tenant
from apps.users.models import User


class PartnerAPITests(APITestCase):
    def setUp(self) -> None:
        self.receiver = Tenant.objects.create(name="Kapadokya Balon", slug="kapadokya")
        self.sender = Tenant.objects.create(name="Ege Tur", slug="ege")
        self.receiver_user = User.objects.create_user(
            email="owner@kapadokya.test",
            password="StrongPass123",
            tenant=self.receiver,
            role=User.RoleChoices.OWNER,
        )
        self.sender_user = User.objects.create_user(
            email="owner@ege.test",
            password="StrongPass123",
            tenant=self.sender,
            role=User.RoleChoices.OWNER,
        )
        self.activity = Activity.objects.create(
            tenant=self.receiver,
            name="Balon turu",
            price=Decimal("1200.00"),
            default_times=["06:00"],
            default_capacity=8,
        )

    def test_invite_and_accept_over_api(self) -> None:
        self.client.force_authenticate(self.sender_user)
        response = self.client.post(
            reverse("partnership-list"),
            {"partnerTenantId": self.receiver.pk},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        code = response.data["inviteCode"]
        self.assertTrue(code)

        self.client.force_authenticate(self.receiver_user)
        listed = self.client.get(reverse("partnership-list"))
        self.assertIsNone(listed.data[0]["inviteCode"])

        response = self.client.post(reverse("partnership-accept"), {"inviteCode": code}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "active")

    def test_share_and_browse_availability(self) -> None:
        partnership = Partnership.objects.create(
            tenant=self.sender,
            partner_tenant=self.receiver,
            status=Partnership.Status.ACTIVE,
        )
        self.client.force_authenticate(self.receiver_user)
        response = self.client.post(
            reverse("activity-share-list"),
            {"activityId": self.activity.pk, "partnershipId": partnership.pk, "partnerUnitPrice": "1000.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(ActivityShare.objects.count(), 1)

        self.client.force_authenticate(self.sender_user)
        day = date.today() + timedelta(days=2)
        response = self.client.get(
            reverse("shared-availability"),
            {"startDate": str(day), "endDate": str(day + timedelta(days=1))},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 1)
        capacities = response.data[0]["activities"][0]["capacities"]
        self.assertEqual(len(capacities), 2)
        self.assertEqual(capacities[0]["availableSlots"], 8)

    def test_cannot_share_someone_elses_activity(self) -> None:
        partnership = Partnership.objects.create(
            tenant=self.sender,
            partner_tenant=self.receiver,
            status=Partnership.Status.ACTIVE,
        )
        self.client.force_authenticate(self.sender_user)
        response = self.client.post(
            reverse("activity-share-list"),
            {"activityId": self.activity.pk, "partnershipId": partnership.pk},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_revoke_endpoint(self) -> None:
        partnership = Partnership.objects.create(
            tenant=self.sender,
            partner_tenant=self.receiver,
            status=Partnership.Status.ACTIVE,
        )
        self.client.force_authenticate(self.receiver_user)
        response = self.client.post(reverse("partnership-revoke", args=[partnership.pk]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "revoked")

    def test_availability_rejects_inverted_range(self) -> None:
        self.client.force_authenticate(self.sender_user)
        response = self.client.get(
            reverse("shared-availability"),
            {"startDate": "2030-05-10", "endDate": "2030-05-01"},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "invalid_input")
