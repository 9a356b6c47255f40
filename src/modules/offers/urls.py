"""Offer URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.offers.views import OfferViewSet

router = DefaultRouter(trailing_slash=True)
router.register("offers", OfferViewSet, basename="offer")

urlpatterns = router.urls
