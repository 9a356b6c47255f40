"""Offer repository interface.

Extends ``IRepository[Offer]`` with the two operations the order
lifecycle needs from the inventory: a locking read and an atomic
compare-and-decrement of ``available_shares``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.offers.models import Offer


class IOfferRepository(IRepository["Offer"]):
    """Repository contract for the Offer aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Offer]":
        """List offers with optional filters."""

    @abstractmethod
    def get_for_update(self, id: str) -> Optional["Offer"]:
        """Retrieve an offer with a row-level lock (SELECT FOR UPDATE).

        Must be called inside an atomic block.  Returns ``None`` if the
        offer does not exist.
        """

    @abstractmethod
    def decrement_available(self, offer_id: UUID, amount: int) -> bool:
        """Atomically subtract ``amount`` from ``available_shares``.

        Only succeeds when ``available_shares >= amount`` at the moment of
        the write.  Returns ``False`` (and changes nothing) otherwise.
        """
