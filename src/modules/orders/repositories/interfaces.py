"""Order repository interface.

Declares exactly what the order lifecycle needs: creation, owner-scoped
look-ups (plain and locking), persisting a stage change and the
append-only stage history.

Every read takes the owner's ``user_id``.  There is no "get any order by
id" method: ownership scoping is part of the query, not a check applied
afterwards.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable, Optional
from uuid import UUID

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderStageHistory


class IOrderRepository(ABC):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderStageHistory entries.
    Mutations must run inside the caller's atomic block.
    """

    @abstractmethod
    def create(
        self,
        user_id: Any,
        offer_id: UUID,
        shares_requested: int,
        total_cost: Decimal,
    ) -> Order:
        """Insert a new order in its initial stage."""

    @abstractmethod
    def get_for_user(self, id: str, user_id: Any) -> Optional[Order]:
        """Retrieve an owned order with its offer and ascending history."""

    @abstractmethod
    def get_for_update(self, id: str, user_id: Any) -> Optional[Order]:
        """Retrieve an owned order with a row-level lock (SELECT FOR UPDATE)."""

    @abstractmethod
    def list_for_user(self, user_id: Any, stage: Optional[str] = None) -> Iterable[Order]:
        """List a user's orders newest first, optionally for one stage."""

    @abstractmethod
    def save(self, entity: Order) -> Order:
        """Persist a stage change on an order fetched with ``get_for_update``."""

    @abstractmethod
    def add_history(
        self,
        order_id: UUID,
        from_stage: Optional[str],
        to_stage: str,
        note: Optional[str] = None,
    ) -> OrderStageHistory:
        """Append one entry to the order's stage history."""
