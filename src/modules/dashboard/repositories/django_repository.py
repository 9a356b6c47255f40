"""Django ORM implementation of the dashboard read-model."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Tuple

from django.db.models import Count, Sum

from modules.dashboard.repositories.interfaces import IDashboardRepository
from modules.orders.models import Order

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


class DashboardDjangoRepository(IDashboardRepository):
    """Concrete dashboard queries backed by Django ORM."""

    def summarize(self, user_id: Any) -> Tuple[int, Decimal]:
        totals = Order.objects.filter(user_id=user_id).aggregate(
            total_orders=Count("id"),
            total_invested=Sum("total_cost"),
        )
        total_invested = totals["total_invested"] or ZERO
        return totals["total_orders"], Decimal(total_invested).quantize(CENTS)

    def count_by_stage(self, user_id: Any) -> Dict[str, int]:
        # ``order_by()`` clears Meta.ordering so it does not leak into GROUP BY.
        rows = (
            Order.objects.filter(user_id=user_id)
            .order_by()
            .values("stage")
            .annotate(count=Count("id"))
        )
        return {row["stage"]: row["count"] for row in rows}

    def recent_orders(self, user_id: Any, limit: int) -> List[Order]:
        return list(
            Order.objects.select_related("offer")
            .filter(user_id=user_id)
            .order_by("-created_at", "-id")[:limit]
        )
