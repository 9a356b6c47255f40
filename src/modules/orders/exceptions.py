"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.  Each one
specialises a kind from ``modules.core.exceptions`` so the API layer can
translate it without knowing about orders.
"""

from __future__ import annotations

from modules.core.exceptions import InvalidTransition, NotFound, ValidationFailure


class OrderNotFound(NotFound):
    """The order does not exist or is owned by another user."""

    def __init__(self) -> None:
        super().__init__("Order")


class OfferNotOpen(ValidationFailure):
    """The offer is closed and cannot receive new orders."""


class InsufficientShares(ValidationFailure):
    """Not enough available shares, at creation or at allocation time."""


class InvalidShareCount(ValidationFailure):
    """The requested share count is not a positive integer."""


class InvalidStageTransition(InvalidTransition):
    """The requested stage is not a legal edge from the current stage."""


class HistoryEntryImmutable(Exception):
    """A persisted stage history entry was about to be changed or removed."""
