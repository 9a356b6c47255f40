"""Order and OrderStageHistory models.

Business rules implemented:
- Orders start in ``PENDING_REVIEW``; the stage only moves along
  ``VALID_TRANSITIONS`` (enforced at service layer).
- ``shares_requested`` and ``total_cost`` are fixed at creation:
  ``total_cost`` snapshots ``shares_requested * offer.price_per_share``.
- Every stage write is paired with exactly one ``OrderStageHistory`` row.
- History rows are append-only: never updated, never deleted.
- Orders are never deleted; user and offer FKs use PROTECT.
"""

from __future__ import annotations

from typing import Any

import structlog
import uuid6
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import (
    INITIAL_STAGE,
    OrderStage,
    is_terminal_stage,
    is_valid_transition,
    pipeline_index,
)
from modules.orders.exceptions import HistoryEntryImmutable

logger = structlog.get_logger(__name__)


class Order(BaseModel):
    """Order aggregate root: one investor's request for shares of one offer."""

    user: models.ForeignKey = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    offer: models.ForeignKey = models.ForeignKey(
        "offers.Offer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    shares_requested: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    total_cost: models.DecimalField = models.DecimalField(
        max_digits=18,
        decimal_places=2,
    )
    stage: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStage.choices,
        default=INITIAL_STAGE,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="orders_user_created_idx"),
            models.Index(fields=["user", "stage"], name="orders_user_stage_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(shares_requested__gte=1),
                name="orders_shares_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        """Return ``True`` if the order is in a terminal stage."""
        return is_terminal_stage(self.stage)

    @property
    def pipeline_index(self) -> int:
        return pipeline_index(self.stage)

    def can_transition_to(self, new_stage: str) -> bool:
        """Check whether moving to *new_stage* is a legal edge."""
        return is_valid_transition(self.stage, new_stage)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"Order {self.id} ({self.stage})"


class OrderStageHistoryQuerySet(models.QuerySet):
    """Blocks the bulk paths that would bypass the per-instance guards."""

    def update(self, **kwargs: Any) -> int:
        logger.error("order.history_mutation_blocked", bulk=True)
        raise HistoryEntryImmutable("History entries cannot be modified.")

    def delete(self) -> tuple[int, dict[str, int]]:
        logger.error("order.history_mutation_blocked", bulk=True)
        raise HistoryEntryImmutable("History entries cannot be deleted.")


class OrderStageHistory(models.Model):
    """Append-only ledger of stage transitions.

    ``from_stage`` is ``None`` only for the entry written at order
    inception.  Ordered ascending by ``changed_at`` (``id`` as a UUIDv7
    tie-breaker), so the rows of one order replay its full path and the
    last row's ``to_stage`` equals ``Order.stage``.

    Does not extend ``BaseModel``: an entry has no ``updated_at``.

    Instance ``save``/``delete`` and the ``update``/``delete`` of the
    default QuerySet (and so ``bulk_update``) raise
    ``HistoryEntryImmutable``.  Raw SQL is not guarded.

    ``changed_at`` defaults to the insert time and may be given
    explicitly on insert; the seed command backdates entries this way.
    """

    id = models.UUIDField(primary_key=True, default=uuid6.uuid7, editable=False)
    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.PROTECT,
        related_name="stage_history",
    )
    from_stage: models.CharField = models.CharField(  # noqa: DJ01
        max_length=20,
        choices=OrderStage.choices,
        null=True,
        blank=True,
    )
    to_stage: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStage.choices,
    )
    note: models.TextField = models.TextField(null=True, blank=True)  # noqa: DJ01
    changed_at: models.DateTimeField = models.DateTimeField(default=timezone.now)

    objects = OrderStageHistoryQuerySet.as_manager()

    class Meta:
        db_table = "order_stage_history"
        ordering = ["changed_at", "id"]
        indexes = [
            models.Index(
                fields=["order", "changed_at"],
                name="osh_order_changed_idx",
            ),
        ]

    # ------------------------------------------------------------------
    # Immutability
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            logger.error("order.history_mutation_blocked", entry_id=str(self.id))
            raise HistoryEntryImmutable(f"History entry {self.id} cannot be modified.")
        super().save(*args, **kwargs)

    def delete(self, *args: Any, **kwargs: Any):
        logger.error("order.history_mutation_blocked", entry_id=str(self.id))
        raise HistoryEntryImmutable(f"History entry {self.id} cannot be deleted.")

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.order_id} : {self.from_stage} -> {self.to_stage}"
