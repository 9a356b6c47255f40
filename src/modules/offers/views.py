"""Offer API views.

Exposes the ``OfferService`` catalogue via HTTP using DRF ViewSets.
The catalogue is public: browsing offers does not require an identity.
Domain exceptions propagate to the shared exception handler.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.offers.filters import OfferFilter
from modules.offers.models import Offer, OfferStatus
from modules.offers.repositories.django_repository import OfferDjangoRepository
from modules.offers.serializers import OfferSerializer
from modules.offers.services import OfferService


class OfferViewSet(ListModelMixin, GenericViewSet):
    """Read-only ViewSet for the offer catalogue.

    Uses ``OfferService`` with ``OfferDjangoRepository`` (DIP).
    """

    permission_classes = [AllowAny]
    filterset_class = OfferFilter
    search_fields = ["company_name", "ticker", "description"]
    ordering_fields = ["company_name", "price_per_share", "ipo_date"]
    ordering = ["company_name"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = Offer.objects.all()
    serializer_class = OfferSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OfferService(repository=OfferDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def get_queryset(self):
        """GET /api/v1/offers/. ``?status=`` defaults to ``open``."""
        status_value = self.request.query_params.get("status") or OfferStatus.OPEN
        return self._service.list_offers(status=status_value.lower())

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/offers/{pk}/"""
        offer = self._service.get_offer(pk)
        serializer = OfferSerializer(offer)
        return Response(serializer.data)
