"""Development identity backend for Django REST Framework.

Production traffic authenticates with SimpleJWT bearer tokens.  For local
development and demos the front-end can instead send the investor's id in
an ``X-User-Id`` header, which this backend resolves to a user row.

Security decisions
------------------
* **Disabled by default**: only active when ``DEV_AUTH_ENABLED`` is set.
* **No identity, no error**: an unknown or malformed id returns ``None``
  so the request stays anonymous and ``IsAuthenticated`` answers 401.
  The header is never trusted to *create* a user.
"""

from __future__ import annotations

import structlog
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from rest_framework.authentication import BaseAuthentication

logger = structlog.get_logger(__name__)

USER_ID_HEADER = "HTTP_X_USER_ID"


class UserIdHeaderAuthentication(BaseAuthentication):
    """Resolve ``X-User-Id`` to an active user when dev auth is enabled."""

    # ------------------------------------------------------------------
    # Public API (DRF contract)
    # ------------------------------------------------------------------

    def authenticate(self, request):
        """Return ``(user, None)`` or ``None`` (no resolvable identity)."""
        if not getattr(settings, "DEV_AUTH_ENABLED", False):
            return None

        user_id = request.META.get(USER_ID_HEADER, "").strip()
        if not user_id:
            return None

        user = self._resolve_user(user_id)
        if user is None:
            logger.warning("dev_auth.unknown_user", user_id=user_id)
            return None

        logger.info("dev_auth.authenticated", user_id=str(user.pk))
        return (user, None)

    def authenticate_header(self, request):
        """Value for the ``WWW-Authenticate`` response header on 401."""
        return 'X-User-Id realm="api"'

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_user(user_id: str):
        User = get_user_model()
        try:
            return User.objects.filter(pk=user_id, is_active=True).first()
        except (ValueError, ValidationError):
            return None
