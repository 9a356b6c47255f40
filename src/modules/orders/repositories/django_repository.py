"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Methods do
not open their own transactions: ``OrderService`` owns the unit of work
and every write here joins it.

Concurrency control on stage updates uses ``select_for_update()`` on the
order row (no ``version`` column exists on the model).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.orders.constants import INITIAL_STAGE
from modules.orders.models import Order, OrderStageHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(
        self,
        user_id: Any,
        offer_id: UUID,
        shares_requested: int,
        total_cost: Decimal,
    ) -> Order:
        order = Order(
            user_id=user_id,
            offer_id=offer_id,
            shares_requested=shares_requested,
            total_cost=total_cost,
            stage=INITIAL_STAGE,
        )
        order.save()
        logger.info("order.inserted", order_id=str(order.id))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_for_user(self, id: str, user_id: Any) -> Optional[Order]:
        """Owned order with ``offer`` joined and ``stage_history`` prefetched.

        History follows ``OrderStageHistory.Meta.ordering`` (ascending).
        Returns ``None`` for non-existent, foreign or malformed IDs.
        """
        try:
            return (
                Order.objects.select_related("offer")
                .prefetch_related("stage_history")
                .filter(id=id, user_id=user_id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str, user_id: Any) -> Optional[Order]:
        """Owned order with a row-level lock on the order row only.

        Returns ``None`` for non-existent, foreign or malformed IDs.
        """
        try:
            return (
                Order.objects.select_for_update()
                .filter(id=id, user_id=user_id)
                .first()
            )
        except (ValueError, ValidationError):
            return None

    def list_for_user(
        self, user_id: Any, stage: Optional[str] = None
    ) -> "models.QuerySet[Order]":
        queryset = Order.objects.filter(user_id=user_id)
        if stage:
            queryset = queryset.filter(stage=stage)
        return queryset.order_by("-created_at", "-id")

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, entity: Order) -> Order:
        """Persist the mutable part of an order: its stage."""
        entity.save(update_fields=["stage"])
        logger.info("order.saved", order_id=str(entity.id), stage=entity.stage)
        return entity

    # ------------------------------------------------------------------
    # Stage history (append-only)
    # ------------------------------------------------------------------

    def add_history(
        self,
        order_id: UUID,
        from_stage: Optional[str],
        to_stage: str,
        note: Optional[str] = None,
    ) -> OrderStageHistory:
        entry = OrderStageHistory.objects.create(
            order_id=order_id,
            from_stage=from_stage,
            to_stage=to_stage,
            note=note,
        )
        logger.info(
            "order.history_added",
            order_id=str(order_id),
            from_stage=from_stage,
            to_stage=to_stage,
        )
        return entry
