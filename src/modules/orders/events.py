"""Domain events for the Orders bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    """Raised once an order and its inventory decrement are committed."""

    user_id: int
    offer_id: UUID
    shares_requested: int


@dataclass(frozen=True, kw_only=True)
class OrderStageChanged(DomainEvent):
    """Raised once a stage transition and its history entry are committed."""

    from_stage: str
    to_stage: str
    note: Optional[str] = None
