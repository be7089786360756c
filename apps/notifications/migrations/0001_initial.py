import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("exchange", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="NotificationLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("event", models.CharField(max_length=32)),
                ("channel", models.CharField(default="whatsapp", max_length=16)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("message", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[("sent", "Gönderildi"), ("failed", "Başarısız"), ("skipped", "Atlandı")],
                        max_length=16,
                    ),
                ),
                ("error", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notification_logs",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "reservation_request",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="notification_logs",
                        to="exchange.reservationrequest",
                    ),
                ),
            ],
            options={
                "verbose_name": "Bildirim kaydı",
                "verbose_name_plural": "Bildirim kayıtları",
                "ordering": ["-created_at"],
            },
        ),
    ]
