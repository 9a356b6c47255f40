"""Integration tests for the order endpoints.

Covers:
- 201 on placement, with inventory decremented.
- 400 for structural problems caught by serializers.
- Business failures mapped to 400/404 with stable codes.
- Listing, detail and stage transitions scoped to the caller.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.offers.models import OfferStatus
from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


def _create(client, offer, shares=10):
    return client.post(
        URL, {"offer_id": str(offer.id), "shares_requested": shares}, format="json"
    )


def _stage(client, order_id, to_stage, note=None):
    payload = {"to_stage": to_stage}
    if note is not None:
        payload["note"] = note
    return client.patch(f"{URL}{order_id}/stage/", payload, format="json")


class TestCreateOrder:
    def test_created(self, auth_client, offer, investor):
        response = _create(auth_client, offer, shares=10)

        assert response.status_code == 201
        data = response.json()
        assert data["stage"] == "PENDING_REVIEW"
        assert data["total_cost"] == "255.00"
        assert data["shares_requested"] == 10
        assert data["user_id"] == investor.pk
        assert data["offer_id"] == str(offer.id)
        assert data["pipeline_index"] == 0

        offer.refresh_from_db()
        assert offer.available_shares == 490

    def test_requires_identity(self, api_client, offer):
        response = _create(api_client, offer)
        assert response.status_code == 401
        assert response.json()["errors"][0]["code"] == "not_authenticated"

    def test_dev_header_identity(self, api_client, offer, investor):
        api_client.credentials(HTTP_X_USER_ID=str(investor.pk))
        response = _create(api_client, offer)
        assert response.status_code == 201
        assert Order.objects.get().user_id == investor.pk

    def test_insufficient_shares(self, auth_client, offer):
        response = _create(auth_client, offer, shares=9999)

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["code"] == "validation_failure"
        assert "9999" in error["detail"]
        offer.refresh_from_db()
        assert offer.available_shares == 500

    def test_closed_offer(self, auth_client, make_offer):
        closed = make_offer(status=OfferStatus.CLOSED)

        response = _create(auth_client, closed)

        assert response.status_code == 400
        assert response.json()["errors"][0]["detail"] == "Offer is not open."

    def test_unknown_offer(self, auth_client):
        response = auth_client.post(
            URL, {"offer_id": str(uuid4()), "shares_requested": 1}, format="json"
        )
        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "not_found"

    @pytest.mark.parametrize(
        "payload,attr",
        [
            ({"offer_id": "not-a-uuid", "shares_requested": 1}, "offer_id"),
            ({"shares_requested": 1}, "offer_id"),
            ({"offer_id": "0190a1b2-0000-7000-8000-000000000000", "shares_requested": 0}, "shares_requested"),
            ({"offer_id": "0190a1b2-0000-7000-8000-000000000000"}, "shares_requested"),
        ],
    )
    def test_structural_validation(self, auth_client, payload, attr):
        response = auth_client.post(URL, payload, format="json")

        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "validation_error"
        assert attr in [e["attr"] for e in data["errors"]]
        assert Order.objects.count() == 0


class TestListOrders:
    def test_only_own_orders(self, auth_client, other_client, offer):
        _create(auth_client, offer, shares=1)
        _create(other_client, offer, shares=2)

        data = auth_client.get(URL).json()

        assert [o["shares_requested"] for o in data] == [1]

    def test_stage_filter(self, auth_client, offer):
        first = _create(auth_client, offer).json()
        _create(auth_client, offer)
        _stage(auth_client, first["id"], "REJECTED")

        data = auth_client.get(URL, {"stage": "REJECTED"}).json()

        assert [o["id"] for o in data] == [first["id"]]

    def test_unknown_stage_filter(self, auth_client):
        response = auth_client.get(URL, {"stage": "SHIPPED"})
        assert response.status_code == 400

    def test_requires_identity(self, api_client):
        assert api_client.get(URL).status_code == 401


class TestOrderDetail:
    def test_detail_includes_offer_and_history(self, auth_client, offer):
        order = _create(auth_client, offer).json()
        _stage(auth_client, order["id"], "COMPLIANCE_CHECK", note="KYC passed")

        response = auth_client.get(f"{URL}{order['id']}/")

        assert response.status_code == 200
        data = response.json()
        assert data["offer"]["ticker"] == "NTAI"
        assert [(h["from_stage"], h["to_stage"]) for h in data["stage_history"]] == [
            (None, "PENDING_REVIEW"),
            ("PENDING_REVIEW", "COMPLIANCE_CHECK"),
        ]
        assert data["stage_history"][1]["note"] == "KYC passed"

    def test_foreign_order_is_404(self, auth_client, other_client, offer):
        order = _create(other_client, offer).json()

        response = auth_client.get(f"{URL}{order['id']}/")

        assert response.status_code == 404
        assert response.json()["errors"][0]["detail"] == "Order not found."

    def test_malformed_id_is_404(self, auth_client):
        assert auth_client.get(f"{URL}garbage/").status_code == 404


class TestAdvanceStage:
    def test_full_pipeline(self, auth_client, offer):
        order_id = _create(auth_client, offer).json()["id"]

        for stage in ["COMPLIANCE_CHECK", "APPROVED", "ALLOCATED", "SETTLED"]:
            response = _stage(auth_client, order_id, stage)
            assert response.status_code == 200, response.json()
            assert response.json()["stage"] == stage

        detail = auth_client.get(f"{URL}{order_id}/").json()
        assert len(detail["stage_history"]) == 5
        assert detail["pipeline_index"] == 4

    def test_invalid_transition(self, auth_client, offer):
        order_id = _create(auth_client, offer).json()["id"]

        response = _stage(auth_client, order_id, "SETTLED")

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["code"] == "invalid_transition"
        assert error["detail"] == "Invalid stage transition from PENDING_REVIEW to SETTLED."

    def test_unknown_stage_value(self, auth_client, offer):
        order_id = _create(auth_client, offer).json()["id"]

        response = _stage(auth_client, order_id, "SHIPPED")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "to_stage"

    def test_foreign_order_is_404(self, auth_client, other_client, offer):
        order_id = _create(other_client, offer).json()["id"]

        response = _stage(auth_client, order_id, "COMPLIANCE_CHECK")

        assert response.status_code == 404

    def test_allocation_recheck(self, auth_client, offer):
        order_id = _create(auth_client, offer, shares=10).json()["id"]
        _stage(auth_client, order_id, "COMPLIANCE_CHECK")
        _stage(auth_client, order_id, "APPROVED")
        offer.available_shares = 3
        offer.save()

        response = _stage(auth_client, order_id, "ALLOCATED")

        assert response.status_code == 400
        assert "for allocation" in response.json()["errors"][0]["detail"]

    def test_post_is_not_allowed(self, auth_client, offer):
        order_id = _create(auth_client, offer).json()["id"]
        response = auth_client.post(
            f"{URL}{order_id}/stage/", {"to_stage": "REJECTED"}, format="json"
        )
        assert response.status_code == 405
