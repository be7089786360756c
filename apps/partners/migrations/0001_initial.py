import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Partnership",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Onay bekliyor"), ("active", "Aktif"), ("revoked", "İptal edildi")],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("invite_code", models.CharField(editable=False, max_length=32, unique=True)),
                ("accepted_at", models.DateTimeField(blank=True, null=True)),
                ("revoked_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_partnerships",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "partner_tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_partnerships",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "revoked_by",
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
                "verbose_name": "Ortaklık",
                "verbose_name_plural": "Ortaklıklar",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("tenant", "partner_tenant"), name="partnership_unique_pair"),
                    models.CheckConstraint(
                        condition=models.Q(("tenant", models.F("partner_tenant")), _negated=True),
                        name="partnership_distinct_tenants",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ActivityShare",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "partner_unit_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Ortağa özel kişi başı fiyat. Boşsa aktivitenin fiyatı kullanılır.",
                        max_digits=12,
                        null=True,
                    ),
                ),
                ("currency", models.CharField(blank=True, max_length=3)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "activity",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="shares",
                        to="tenants.activity",
                    ),
                ),
                (
                    "partnership",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="shares",
                        to="partners.partnership",
                    ),
                ),
            ],
            options={
                "verbose_name": "Paylaşılan aktivite",
                "verbose_name_plural": "Paylaşılan aktiviteler",
                "ordering": ["activity_id"],
                "constraints": [
                    models.UniqueConstraint(fields=("activity", "partnership"), name="activity_share_unique"),
                ],
            },
        ),
    ]
