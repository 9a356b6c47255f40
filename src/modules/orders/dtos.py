"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for order creation.
- ``AdvanceOrderStageDTO``: input for a stage transition.

Input DTOs only check *types*.  Business preconditions such as
"at least one share" are enforced by ``OrderService`` so they hold no
matter which front-door built the DTO.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import OrderStage


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order creation requests.

    ``total_cost`` is never accepted from the client; the Service Layer
    derives it from the offer's current price.
    """

    model_config = ConfigDict(frozen=True)

    offer_id: UUID
    shares_requested: int


class AdvanceOrderStageDTO(BaseModel):
    """Immutable DTO for stage transition requests.

    ``to_stage`` must be a member of ``OrderStage``; free-form strings
    are rejected here rather than silently compared later.
    """

    model_config = ConfigDict(frozen=True)

    to_stage: OrderStage
    note: Optional[str] = None

    @field_validator("note")
    @classmethod
    def blank_note_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

