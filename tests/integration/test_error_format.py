"""Integration tests for standardized error responses."""

import pytest

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_auth_error_has_standard_format(self, api_client):
        response = api_client.get("/api/v1/orders/")
        assert response.status_code == 401
        data = response.json()
        assert data["type"] == "client_error"
        assert isinstance(data["errors"], list)
        assert data["errors"]
        assert data["errors"][0]["code"] == "not_authenticated"
        assert "detail" in data["errors"][0]

    def test_validation_error_has_standard_format(self, auth_client):
        response = auth_client.post(
            "/api/v1/orders/", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        data = response.json()
        assert "type" in data
        assert "errors" in data
        assert isinstance(data["errors"], list)

    def test_domain_error_has_standard_format(self, auth_client):
        response = auth_client.get(
            "/api/v1/orders/0190a1b2-0000-7000-8000-000000000000/"
        )
        assert response.status_code == 404
        assert response.json() == {
            "type": "client_error",
            "errors": [
                {"code": "not_found", "detail": "Order not found.", "attr": None}
            ],
        }

    def test_domain_error_is_logged_as_warning(self, auth_client, caplog):
        import logging

        with caplog.at_level(logging.WARNING):
            auth_client.get("/api/v1/orders/0190a1b2-0000-7000-8000-000000000000/")

        assert any("api.domain_error" in r.getMessage() for r in caplog.records)
