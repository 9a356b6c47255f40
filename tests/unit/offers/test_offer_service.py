"""Unit tests for OfferService and the Offer repository."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.core.exceptions import ValidationFailure
from modules.offers.exceptions import OfferNotFound
from modules.offers.models import OfferStatus
from modules.offers.repositories.django_repository import OfferDjangoRepository
from modules.offers.services import OfferService

pytestmark = pytest.mark.unit


@pytest.fixture()
def repository():
    return OfferDjangoRepository()


@pytest.fixture()
def service(repository):
    return OfferService(repository=repository)


class TestListOffers:
    def test_defaults_to_open(self, service, make_offer):
        open_offer = make_offer()
        make_offer(status=OfferStatus.CLOSED)

        assert list(service.list_offers()) == [open_offer]

    def test_closed_on_request(self, service, make_offer):
        make_offer()
        closed = make_offer(status=OfferStatus.CLOSED)

        assert list(service.list_offers(status="closed")) == [closed]

    def test_ordered_by_company_name(self, service, make_offer):
        zeta = make_offer(company_name="Zeta Corp")
        alpha = make_offer(company_name="Alpha Inc")

        assert list(service.list_offers()) == [alpha, zeta]

    def test_extra_filters(self, service, make_offer):
        make_offer(sector="Healthcare")
        fintech = make_offer(sector="Fintech")

        result = service.list_offers(filters={"sector__iexact": "fintech"})
        assert list(result) == [fintech]

    def test_unknown_status(self, service):
        with pytest.raises(ValidationFailure):
            service.list_offers(status="pending")


class TestGetOffer:
    def test_found(self, service, offer):
        assert service.get_offer(str(offer.id)) == offer

    def test_closed_offer_is_still_visible(self, service, make_offer):
        closed = make_offer(status=OfferStatus.CLOSED)
        assert service.get_offer(str(closed.id)) == closed

    @pytest.mark.parametrize("offer_id", ["garbage", str(uuid4())])
    def test_not_found(self, service, offer_id):
        with pytest.raises(OfferNotFound) as exc_info:
            service.get_offer(offer_id)
        assert str(exc_info.value) == "Offer not found."


class TestDecrementAvailable:
    def test_decrements(self, repository, offer):
        assert repository.decrement_available(offer.id, 100) is True
        offer.refresh_from_db()
        assert offer.available_shares == 400

    def test_exact_amount(self, repository, offer):
        assert repository.decrement_available(offer.id, 500) is True
        offer.refresh_from_db()
        assert offer.available_shares == 0

    def test_refuses_to_go_negative(self, repository, offer):
        assert repository.decrement_available(offer.id, 501) is False
        offer.refresh_from_db()
        assert offer.available_shares == 500

    def test_unknown_offer(self, repository):
        assert repository.decrement_available(uuid4(), 1) is False


class TestOfferModel:
    def test_ticker_is_uppercased(self, make_offer):
        assert make_offer(ticker=" qldg ").ticker == "QLDG"

    def test_can_supply(self, offer):
        assert offer.can_supply(500)
        assert not offer.can_supply(501)
        assert not offer.can_supply(0)

    def test_is_open(self, make_offer):
        assert make_offer().is_open
        assert not make_offer(status=OfferStatus.CLOSED).is_open

    def test_clean_rejects_available_above_total(self, make_offer):
        from django.core.exceptions import ValidationError

        offer = make_offer()
        offer.available_shares = offer.total_shares + 1
        with pytest.raises(ValidationError):
            offer.clean()

    def test_price_keeps_two_decimals(self, offer):
        offer.refresh_from_db()
        assert offer.price_per_share == Decimal("25.50")
