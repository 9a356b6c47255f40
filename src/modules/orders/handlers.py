"""Event handlers for Orders domain events.

These are the observability hook for the order lifecycle: the service
publishes events, and tracing/audit concerns subscribe here instead of
being threaded through service signatures.
"""

from __future__ import annotations

import structlog

from modules.orders.events import OrderCreated, OrderStageChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderCreatedHandler(IEventHandler[OrderCreated]):
    def handle(self, event: OrderCreated) -> None:
        logger.info("order.event.created", **event.to_log_fields())


class OrderStageChangedHandler(IEventHandler[OrderStageChanged]):
    def handle(self, event: OrderStageChanged) -> None:
        logger.info("order.event.stage_changed", **event.to_log_fields())


order_created_handler = OrderCreatedHandler()
order_stage_changed_handler = OrderStageChangedHandler()
