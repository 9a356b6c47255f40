import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid6
from django.conf import settings
from django.db import migrations, models

STAGE_CHOICES = [
    ("PENDING_REVIEW", "Pending Review"),
    ("COMPLIANCE_CHECK", "Compliance Check"),
    ("APPROVED", "Approved"),
    ("ALLOCATED", "Allocated"),
    ("SETTLED", "Settled"),
    ("REJECTED", "Rejected"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("offers", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
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
                (
                    "shares_requested",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)]
                    ),
                ),
                ("total_cost", models.DecimalField(decimal_places=2, max_digits=18)),
                (
                    "stage",
                    models.CharField(
                        choices=STAGE_CHOICES,
                        default="PENDING_REVIEW",
                        max_length=20,
                    ),
                ),
                (
                    "offer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="offers.offer",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["user", "-created_at"], name="orders_user_created_idx"
                    ),
                    models.Index(fields=["user", "stage"], name="orders_user_stage_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(shares_requested__gte=1),
                        name="orders_shares_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderStageHistory",
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
                (
                    "from_stage",
                    models.CharField(
                        blank=True, choices=STAGE_CHOICES, max_length=20, null=True
                    ),
                ),
                ("to_stage", models.CharField(choices=STAGE_CHOICES, max_length=20)),
                ("note", models.TextField(blank=True, null=True)),
                ("changed_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stage_history",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_stage_history",
                "ordering": ["changed_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["order", "changed_at"], name="osh_order_changed_idx"
                    ),
                ],
            },
        ),
    ]
