"""Dashboard service layer.

Computes a user's portfolio summary from their orders at call time.
Nothing is cached: the figures always reflect committed state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import structlog
from django.conf import settings
from django.db import transaction

from modules.dashboard.dtos import DashboardStatsDTO, RecentOrderDTO

if TYPE_CHECKING:
    from modules.dashboard.repositories.interfaces import IDashboardRepository

logger = structlog.get_logger(__name__)

DEFAULT_RECENT_ORDERS_LIMIT = 5


class DashboardService:
    """Application service for the dashboard use-case.

    Receives an ``IDashboardRepository`` via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IDashboardRepository,
        recent_orders_limit: Optional[int] = None,
    ) -> None:
        self._repo = repository
        if recent_orders_limit is None:
            recent_orders_limit = getattr(
                settings, "DASHBOARD_RECENT_ORDERS_LIMIT", DEFAULT_RECENT_ORDERS_LIMIT
            )
        self._recent_limit = recent_orders_limit

    @transaction.atomic
    def get_stats(self, user_id: Any) -> DashboardStatsDTO:
        """Return counts, invested total, per-stage breakdown and newest orders.

        All four figures are read inside one transaction so they agree
        with each other.  ``total_invested`` sums every order regardless
        of stage.
        """
        total_orders, total_invested = self._repo.summarize(user_id)
        by_stage = self._repo.count_by_stage(user_id)
        recent = self._repo.recent_orders(user_id, self._recent_limit)

        logger.debug(
            "dashboard.stats_computed",
            user_id=str(user_id),
            total_orders=total_orders,
        )
        return DashboardStatsDTO(
            total_orders=total_orders,
            total_invested=total_invested,
            orders_by_stage=by_stage,
            recent_orders=[RecentOrderDTO.from_order(order) for order in recent],
        )
