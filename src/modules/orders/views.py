"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Every endpoint acts on behalf of ``request.user``; domain exceptions
propagate to the shared exception handler, so the view never swallows
them.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.offers.repositories.django_repository import OfferDjangoRepository
from modules.orders.dtos import AdvanceOrderStageDTO, CreateOrderDTO
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    AdvanceStageSerializer,
    CreateOrderSerializer,
    OrderDetailSerializer,
    OrderListQuerySerializer,
    OrderSerializer,
)
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for the authenticated user's orders.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    serializer_class = OrderSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            offer_repository=OfferDjangoRepository(),
        )

    def get_throttles(self) -> list[BaseThrottle]:
        """Per-action throttle scopes."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        return self._service.list_orders(self.request.user.pk)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        data = create_serializer.validated_data
        dto = CreateOrderDTO(
            offer_id=data["offer_id"],
            shares_requested=data["shares_requested"],
        )
        order = self._service.create_order(request.user.pk, dto)

        out = OrderSerializer(order)
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/?stage=<STAGE>

        Newest first.  Only the caller's orders are ever returned.
        """
        query = OrderListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        orders = self._service.list_orders(
            request.user.pk,
            stage=query.validated_data.get("stage"),
        )
        serializer = OrderSerializer(orders, many=True)
        return Response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        order = self._service.get_order_detail(request.user.pk, pk)
        serializer = OrderDetailSerializer(order)
        return Response(serializer.data)

    # ------------------------------------------------------------------
    # Stage transition (dedicated action)
    # ------------------------------------------------------------------

    @action(detail=True, methods=["patch"], url_path="stage")
    def stage(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/stage/"""
        stage_serializer = AdvanceStageSerializer(data=request.data)
        stage_serializer.is_valid(raise_exception=True)

        data = stage_serializer.validated_data
        dto = AdvanceOrderStageDTO(to_stage=data["to_stage"], note=data.get("note"))
        order = self._service.advance_order_stage(request.user.pk, pk, dto)

        serializer = OrderSerializer(order)
        return Response(serializer.data)
