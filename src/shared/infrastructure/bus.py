"""In-memory event bus implementation."""

from __future__ import annotations

from typing import Dict, Iterable, List, Type

import structlog
from django.db import transaction

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """In-process bus: handlers run synchronously, in subscription order.

    ``publish_on_commit`` defers delivery until the surrounding database
    transaction commits, so handlers never observe state that is later
    rolled back.  Outside a transaction Django runs the callback at once.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        handlers = self._handlers.get(type(event), [])
        logger.debug(
            "event_bus.publish",
            event_name=event.event_name,
            handler_count=len(handlers),
        )
        for handler in handlers:
            handler.handle(event)

    def publish_on_commit(self, events: Iterable[DomainEvent]) -> None:
        pending = list(events)

        def _deliver() -> None:
            for event in pending:
                self.publish(event)

        transaction.on_commit(_deliver)


event_bus = InMemoryEventBus()
