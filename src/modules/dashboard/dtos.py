"""Dashboard DTOs.

Output contracts of ``DashboardService.get_stats``, using Pydantic v2.
Built from ORM rows via ``from_attributes`` and rendered by the view
with ``model_dump(mode="json")`` (decimals become strings, UUIDs and
datetimes become ISO text).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RecentOrderDTO(BaseModel):
    """One of the user's newest orders, with its offer's identity."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    offer_id: UUID
    shares_requested: int
    total_cost: Decimal
    stage: str
    created_at: datetime
    updated_at: datetime
    company_name: str
    ticker: str

    @classmethod
    def from_order(cls, order) -> "RecentOrderDTO":
        return cls(
            id=order.id,
            offer_id=order.offer_id,
            shares_requested=order.shares_requested,
            total_cost=order.total_cost,
            stage=order.stage,
            created_at=order.created_at,
            updated_at=order.updated_at,
            company_name=order.offer.company_name,
            ticker=order.offer.ticker,
        )


class DashboardStatsDTO(BaseModel):
    """Per-user portfolio summary."""

    model_config = ConfigDict(frozen=True)

    total_orders: int = 0
    total_invested: Decimal = Decimal("0.00")
    orders_by_stage: Dict[str, int] = Field(default_factory=dict)
    recent_orders: List[RecentOrderDTO] = Field(default_factory=list)
