import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="CapacitySlot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("time", models.TimeField()),
                ("total_slots", models.PositiveIntegerField()),
                ("booked_slots", models.PositiveIntegerField(default=0)),
                ("version", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "activity",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="capacity_slots",
                        to="tenants.activity",
                    ),
                ),
                (
                    "tenant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="capacity_slots",
                        to="tenants.tenant",
                    ),
                ),
            ],
            options={
                "verbose_name": "Kontenjan",
                "verbose_name_plural": "Kontenjanlar",
                "ordering": ["date", "time"],
                "indexes": [models.Index(fields=["activity", "date"], name="capacity_slot_activity_date")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("tenant", "activity", "date", "time"),
                        name="capacity_slot_unique_key",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("booked_slots__lte", models.F("total_slots"))),
                        name="capacity_slot_not_overbooked",
                    ),
                ],
            },
        ),
    ]
