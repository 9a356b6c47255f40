"""Offer service layer (Use Cases).

Read-side access to the offer inventory.  Offers are created by the seed
command / admin and mutated only by the order lifecycle, so this service
exposes look-ups only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog

from modules.core.exceptions import ValidationFailure
from modules.offers.exceptions import OfferNotFound
from modules.offers.models import Offer, OfferStatus

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.offers.repositories.interfaces import IOfferRepository

logger = structlog.get_logger(__name__)


class OfferService:
    """Application service for Offer use-cases.

    Receives an ``IOfferRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IOfferRepository) -> None:
        self._repo = repository

    def list_offers(
        self,
        status: str = OfferStatus.OPEN,
        filters: Optional[Dict[str, Any]] = None,
    ) -> QuerySet[Offer]:
        """Return offers in ``status`` (``open`` unless told otherwise).

        Results read outside any write transaction and may be slightly
        stale; only the order write path needs exact availability.

        Raises:
            ValidationFailure: ``status`` is not a known offer status.
        """
        if status not in OfferStatus.values:
            raise ValidationFailure(f"Unknown offer status '{status}'.")

        lookups: Dict[str, Any] = {"status": status}
        if filters:
            lookups.update(filters)
        offers = self._repo.list(lookups)
        logger.debug("offer.listed", status=status)
        return offers

    def get_offer(self, id: str) -> Offer:
        """Retrieve a single offer by ID.

        Raises:
            OfferNotFound: if the offer does not exist.
        """
        offer = self._repo.get_by_id(id)
        if not offer:
            logger.warning("offer.not_found", offer_id=str(id))
            raise OfferNotFound()
        return offer
