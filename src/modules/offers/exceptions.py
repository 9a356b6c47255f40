"""Offer domain exceptions.

Raised by the Service Layer when an offer look-up fails.  The shared
exception handler translates them into HTTP responses.
"""

from __future__ import annotations

from modules.core.exceptions import NotFound


class OfferNotFound(NotFound):
    """The requested offer does not exist."""

    def __init__(self) -> None:
        super().__init__("Offer")
