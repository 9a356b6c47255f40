"""Django ORM implementation of the Offer repository.

Satisfies ``IOfferRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising; the Service Layer decides how to translate a
missing offer into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import UUID

import structlog

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from modules.offers.models import Offer
from modules.offers.repositories.interfaces import IOfferRepository

logger = structlog.get_logger(__name__)


class OfferDjangoRepository(IOfferRepository):
    """Concrete Offer repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Offer]:
        """Retrieve an offer by primary key.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Offer.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> "models.QuerySet[Offer]":
        """List offers with optional Django ORM look-ups.

        Examples of valid filters::

            {"status": "open"}
            {"sector__iexact": "fintech"}
        """
        queryset = Offer.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Offer) -> Offer:
        """Persist (create or update) an offer."""
        entity.save()
        logger.info("offer.saved", offer_id=str(entity.id), ticker=entity.ticker)
        return entity

    def get_for_update(self, id: str) -> Optional[Offer]:
        """Retrieve an offer with a row-level lock.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return Offer.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def decrement_available(self, offer_id: UUID, amount: int) -> bool:
        """Conditional ``UPDATE``: the availability check and the write are one statement."""
        updated = Offer.objects.filter(
            id=offer_id,
            available_shares__gte=amount,
        ).update(
            available_shares=F("available_shares") - amount,
            updated_at=timezone.now(),
        )
        logger.info(
            "offer.shares_decremented" if updated else "offer.decrement_refused",
            offer_id=str(offer_id),
            amount=amount,
        )
        return updated == 1
