"""Offer DRF serializers (read-only).

Offers are never written through the API; these serializers only shape
responses for the offer catalogue and for nested order details.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.offers.models import Offer


class OfferSerializer(serializers.ModelSerializer):
    """Read serializer for the Offer resource."""

    class Meta:
        model = Offer
        fields = [
            "id",
            "company_name",
            "ticker",
            "sector",
            "description",
            "price_per_share",
            "total_shares",
            "available_shares",
            "status",
            "ipo_date",
            "created_at",
        ]
        read_only_fields = fields
