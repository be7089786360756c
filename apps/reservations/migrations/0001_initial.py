import django.db.models.deletion
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("exchange", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_name", models.CharField(max_length=255)),
                ("customer_phone", models.CharField(blank=True, max_length=32)),
                ("customer_email", models.EmailField(blank=True, max_length=254)),
                ("date", models.DateField()),
                ("time", models.TimeField()),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        help_text="Toplam tutar.",
                        max_digits=12,
                    ),
                ),
                ("currency", models.CharField(default="TRY", max_length=3)),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Beklemede"), ("confirmed", "Onaylandı"), ("cancelled", "İptal edildi")],
                        default="confirmed",
                        max_length=16,
                    ),
                ),
                (
                    "source",
                    models.CharField(
                        choices=[("direct", "Doğrudan"), ("external", "Harici kanal"), ("partner", "Partner talebi")],
                        default="direct",
                        max_length=16,
                    ),
                ),
                (
                    "external_id",
                    models.CharField(
                        blank=True,
                        help_text="Harici satış kanalındaki sipariş numarası.",
                        max_length=100,
                        null=True,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("tracking_token", models.CharField(blank=True, editable=False, max_length=32, null=True, unique=True)),
                ("tracking_token_expires_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reservations",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "activity",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="tenants.activity",
                    ),
                ),
                (
                    "source_request",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservation",
                        to="exchange.reservationrequest",
                    ),
                ),
            ],
            options={
                "verbose_name": "Rezervasyon",
                "verbose_name_plural": "Rezervasyonlar",
                "ordering": ["-date", "-time"],
                "indexes": [
                    models.Index(fields=["tenant", "activity", "date", "time"], name="reservation_slot_key"),
                    models.Index(fields=["status"], name="reservation_status"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("tenant", "external_id"), name="reservation_unique_external_id"),
                ],
            },
        ),
    ]
