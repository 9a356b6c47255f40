from decimal import Decimal

import django.core.validators
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Offer",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("company_name", models.CharField(max_length=255)),
                ("ticker", models.CharField(max_length=16, unique=True)),
                ("sector", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "price_per_share",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0.01"))
                        ],
                    ),
                ),
                ("total_shares", models.PositiveIntegerField()),
                ("available_shares", models.PositiveIntegerField()),
                (
                    "status",
                    models.CharField(
                        choices=[("open", "Open"), ("closed", "Closed")],
                        default="open",
                        max_length=10,
                    ),
                ),
                ("ipo_date", models.DateField()),
            ],
            options={
                "db_table": "offers",
                "ordering": ["company_name"],
                "indexes": [
                    models.Index(fields=["status"], name="offers_status_idx"),
                    models.Index(fields=["sector"], name="offers_sector_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(price_per_share__gt=0),
                        name="offers_price_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(available_shares__gte=0)
                        & models.Q(available_shares__lte=models.F("total_shares")),
                        name="offers_available_within_total",
                    ),
                ],
            },
        ),
    ]
