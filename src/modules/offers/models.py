"""Offer model: a company's pre-IPO pool of allocatable shares.

Business rules implemented:
- Ticker is unique and normalised to uppercase.
- Price per share must be greater than zero.
- ``0 <= available_shares <= total_shares`` (also enforced by DB constraints).
- Closed offers cannot receive new orders (enforced at service layer).
- ``available_shares`` is only ever decremented, by order creation.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class OfferStatus(models.TextChoices):
    OPEN = "open", "Open"
    CLOSED = "closed", "Closed"


class Offer(BaseModel):
    """Offer aggregate root.

    ``available_shares`` is the only contended value in the system: every
    write path that reads it for a decision must hold a row lock
    (see ``OfferDjangoRepository.get_for_update``).
    """

    company_name = models.CharField(max_length=255)
    ticker = models.CharField(max_length=16, unique=True)
    sector = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    price_per_share = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    total_shares = models.PositiveIntegerField()
    available_shares = models.PositiveIntegerField()
    status = models.CharField(
        max_length=10,
        choices=OfferStatus.choices,
        default=OfferStatus.OPEN,
    )
    ipo_date = models.DateField()

    class Meta:
        db_table = "offers"
        ordering = ["company_name"]
        indexes = [
            models.Index(fields=["status"], name="offers_status_idx"),
            models.Index(fields=["sector"], name="offers_sector_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_share__gt=0),
                name="offers_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(available_shares__gte=0)
                & models.Q(available_shares__lte=models.F("total_shares")),
                name="offers_available_within_total",
            ),
        ]

    # ------------------------------------------------------------------
    # Domain helpers
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.status == OfferStatus.OPEN

    def can_supply(self, shares: int) -> bool:
        """Whether ``shares`` fit into the currently available pool."""
        return 0 < shares <= self.available_shares

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.ticker:
            self.ticker = self.ticker.strip().upper()
        if self.price_per_share is not None and self.price_per_share <= 0:
            raise ValidationError(
                {"price_per_share": "Price per share must be greater than zero."}
            )
        if (
            self.available_shares is not None
            and self.total_shares is not None
            and self.available_shares > self.total_shares
        ):
            raise ValidationError(
                {"available_shares": "Available shares cannot exceed total shares."}
            )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.ticker:
            self.ticker = self.ticker.strip().upper()
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "offer.created",
                offer_id=str(self.id),
                ticker=self.ticker,
                total_shares=self.total_shares,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.ticker} - {self.company_name}"
