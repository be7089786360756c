import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
        ("reservations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Dispatch",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("dispatch_date", models.DateField()),
                ("dispatch_time", models.TimeField(blank=True, null=True)),
                ("customer_name", models.CharField(blank=True, max_length=255)),
                ("guest_count", models.PositiveIntegerField(default=1)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="dispatches",
                        to="tenants.tenant",
                    ),
                ),
                (
                    "reservation",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="dispatches",
                        to="reservations.reservation",
                    ),
                ),
                (
                    "activity",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="dispatches",
                        to="tenants.activity",
                    ),
                ),
            ],
            options={
                "verbose_name": "Operasyon kaydı",
                "verbose_name_plural": "Operasyon kayıtları",
                "ordering": ["-dispatch_date", "-created_at"],
                "indexes": [models.Index(fields=["tenant", "dispatch_date"], name="dispatch_tenant_date")],
            },
        ),
    ]
