import django.db.models.deletion
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("exchange", "0001_initial"),
        ("reservations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PartnerTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("guest_count", models.PositiveIntegerField()),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("currency", models.CharField(default="TRY", max_length=3)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=12)),
                ("payment_collection_type", models.CharField(max_length=16)),
                ("amount_collected_by_sender", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Aktif"), ("retired", "Silindi (arşiv)")],
                        default="active",
                        max_length=16,
                    ),
                ),
                (
                    "deletion_status",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("pending", "Silme onayı bekliyor"),
                            ("approved", "Silme onaylandı"),
                            ("rejected", "Silme reddedildi"),
                        ],
                        max_length=16,
                        null=True,
                    ),
                ),
                ("deletion_rejection_reason", models.TextField(blank=True, null=True)),
                ("deletion_requested_at", models.DateTimeField(blank=True, null=True)),
                ("deletion_resolved_at", models.DateTimeField(blank=True, null=True)),
                ("version", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "sender_tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sent_partner_transactions",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "receiver_tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="received_partner_transactions",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "reservation_request",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="partner_transaction",
                        to="exchange.reservationrequest",
                    ),
                ),
                (
                    "reservation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="partner_transactions",
                        to="reservations.reservation",
                    ),
                ),
                (
                    "activity",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="partner_transactions",
                        to="tenants.activity",
                    ),
                ),
                (
                    "deletion_requested_by_tenant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Partner işlemi",
                "verbose_name_plural": "Partner işlemleri",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["sender_tenant", "status"], name="ptx_sender_status"),
                    models.Index(fields=["receiver_tenant", "status"], name="ptx_receiver_status"),
                ],
            },
        ),
    ]
