"""Unit tests for the X-User-Id development authentication backend."""

from __future__ import annotations

import pytest

from rest_framework.test import APIRequestFactory

from modules.core.authentication import UserIdHeaderAuthentication

pytestmark = pytest.mark.unit


@pytest.fixture()
def backend():
    return UserIdHeaderAuthentication()


@pytest.fixture()
def factory():
    return APIRequestFactory()


class TestUserIdHeaderAuthentication:
    def test_resolves_known_user(self, backend, factory, investor):
        request = factory.get("/", HTTP_X_USER_ID=str(investor.pk))
        user, auth = backend.authenticate(request)
        assert user == investor
        assert auth is None

    def test_no_header_is_anonymous(self, backend, factory):
        assert backend.authenticate(factory.get("/")) is None

    @pytest.mark.parametrize("value", ["999999", "not-a-number", "   "])
    def test_unknown_or_malformed_id_is_anonymous(self, backend, factory, value):
        request = factory.get("/", HTTP_X_USER_ID=value)
        assert backend.authenticate(request) is None

    def test_inactive_user_is_anonymous(self, backend, factory, investor):
        investor.is_active = False
        investor.save()
        request = factory.get("/", HTTP_X_USER_ID=str(investor.pk))
        assert backend.authenticate(request) is None

    def test_disabled_by_setting(self, backend, factory, investor, settings):
        settings.DEV_AUTH_ENABLED = False
        request = factory.get("/", HTTP_X_USER_ID=str(investor.pk))
        assert backend.authenticate(request) is None

    def test_authenticate_header(self, backend, factory):
        assert backend.authenticate_header(factory.get("/")) == 'X-User-Id realm="api"'
