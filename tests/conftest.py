from datetime import date
from decimal import Decimal

import pytest

from django.contrib.auth import get_user_model
from django.core.cache import cache

from rest_framework.test import APIClient

from modules.offers.models import Offer, OfferStatus
from modules.offers.repositories.django_repository import OfferDjangoRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def investor():
    return User.objects.create_user(
        username="alice",
        email="alice@example.com",
        password="testpass123",
        first_name="Alice",
        last_name="Johnson",
    )


@pytest.fixture()
def other_investor():
    return User.objects.create_user(
        username="bob",
        email="bob@example.com",
        password="testpass123",
    )


@pytest.fixture()
def make_offer():
    """Factory for offers; every call gets a unique ticker."""
    counter = {"n": 0}

    def _make(**overrides) -> Offer:
        counter["n"] += 1
        fields = {
            "company_name": f"Test Company {counter['n']}",
            "ticker": f"TST{counter['n']}",
            "sector": "Technology",
            "description": "A test offer",
            "price_per_share": Decimal("25.50"),
            "total_shares": 1000,
            "available_shares": 500,
            "status": OfferStatus.OPEN,
            "ipo_date": date(2026, 6, 1),
        }
        fields.update(overrides)
        return Offer.objects.create(**fields)

    return _make


@pytest.fixture()
def offer(make_offer):
    return make_offer(company_name="NovaTech AI", ticker="NTAI")


@pytest.fixture()
def order_service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        offer_repository=OfferDjangoRepository(),
    )


@pytest.fixture()
def auth_client(investor):
    """APIClient with a force-authenticated investor."""
    client = APIClient()
    client.force_authenticate(user=investor)
    return client


@pytest.fixture()
def other_client(other_investor):
    client = APIClient()
    client.force_authenticate(user=other_investor)
    return client
