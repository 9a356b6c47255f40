"""Domain event primitives."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    """Base domain event (immutable).

    Subclasses add their own keyword-only payload fields.
    """

    aggregate_id: UUID
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def event_name(self) -> str:
        return type(self).__name__

    def to_log_fields(self) -> Dict[str, Any]:
        """Flatten the payload into strings suitable for structured logs."""
        return {
            key: value if isinstance(value, (int, type(None))) else str(value)
            for key, value in asdict(self).items()
        }
