import django.db.models.deletion
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ReservationRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("time", models.TimeField()),
                ("customer_name", models.CharField(max_length=255)),
                ("customer_phone", models.CharField(max_length=32)),
                ("guests", models.PositiveIntegerField()),
                ("notes", models.TextField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Beklemede"),
                            ("approved", "Onaylandı"),
                            ("rejected", "Reddedildi"),
                            ("converted", "Rezervasyona dönüştürüldü"),
                            ("cancelled", "İptal edildi"),
                            ("deleted", "Silindi"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                (
                    "payment_collection_type",
                    models.CharField(
                        choices=[
                            ("receiver_full", "Tamamı alıcı acentede"),
                            ("sender_full", "Tamamı gönderen acentede"),
                            ("sender_partial", "Kısmi ödeme gönderen acentede"),
                        ],
                        default="receiver_full",
                        max_length=16,
                    ),
                ),
                ("amount_collected_by_sender", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                (
                    "unit_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Talep anındaki partner kişi başı fiyatı.",
                        max_digits=12,
                    ),
                ),
                ("currency", models.CharField(default="TRY", max_length=3)),
                (
                    "origin_kind",
                    models.CharField(
                        choices=[("viewer", "İzleyici"), ("partner", "Partner"), ("unknown", "Bilinmiyor")],
                        default="unknown",
                        max_length=16,
                    ),
                ),
                ("processed_at", models.DateTimeField(blank=True, null=True)),
                ("process_notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner_tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="incoming_requests",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "activity",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservation_requests",
                        to="tenants.activity",
                    ),
                ),
                (
                    "origin_tenant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="outgoing_requests",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "requested_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sent_reservation_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "processed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="processed_reservation_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Rezervasyon talebi",
                "verbose_name_plural": "Rezervasyon talepleri",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["owner_tenant", "status"], name="request_owner_status"),
                    models.Index(fields=["origin_tenant", "status"], name="request_origin_status"),
                ],
            },
        ),
    ]
