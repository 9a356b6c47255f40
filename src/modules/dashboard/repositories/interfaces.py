"""Dashboard read-model interface.

The dashboard owns no table: it aggregates the ``orders`` and ``offers``
tables for one user.  Every method is scoped by ``user_id``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

if TYPE_CHECKING:
    from modules.orders.models import Order


class IDashboardRepository(ABC):
    """Aggregate queries over a single user's orders."""

    @abstractmethod
    def summarize(self, user_id: Any) -> Tuple[int, Decimal]:
        """Return ``(order count, sum of total_cost)`` for the user."""

    @abstractmethod
    def count_by_stage(self, user_id: Any) -> Dict[str, int]:
        """Return ``{stage: count}`` for stages holding at least one order."""

    @abstractmethod
    def recent_orders(self, user_id: Any, limit: int) -> List[Order]:
        """Return the user's ``limit`` newest orders with their offer joined."""
