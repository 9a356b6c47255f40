"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.offers.serializers import OfferSerializer
from modules.orders.constants import OrderStage
from modules.orders.models import Order, OrderStageHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation request payload."""

    offer_id = serializers.UUIDField()
    shares_requested = serializers.IntegerField(min_value=1)


class AdvanceStageSerializer(serializers.Serializer):
    """Validates the stage transition request payload."""

    to_stage = serializers.ChoiceField(choices=OrderStage.choices)
    note = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        default=None,
    )


class OrderListQuerySerializer(serializers.Serializer):
    """Validates ``GET /orders/`` query parameters."""

    stage = serializers.ChoiceField(choices=OrderStage.choices, required=False)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class StageHistorySerializer(serializers.ModelSerializer):
    """Read serializer for order stage history entries."""

    class Meta:
        model = OrderStageHistory
        fields = [
            "id",
            "from_stage",
            "to_stage",
            "note",
            "changed_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Lightweight serializer for orders (no nested relations)."""

    user_id = serializers.IntegerField(read_only=True)
    offer_id = serializers.UUIDField(read_only=True)
    pipeline_index = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "user_id",
            "offer_id",
            "shares_requested",
            "total_cost",
            "stage",
            "pipeline_index",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderDetailSerializer(OrderSerializer):
    """Read serializer for orders with nested offer and stage history."""

    offer = OfferSerializer(read_only=True)
    stage_history = StageHistorySerializer(many=True, read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["offer", "stage_history"]
        read_only_fields = fields
