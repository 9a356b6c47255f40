"""Failure taxonomy shared by every module, and its HTTP translation.

Services raise plain Python exceptions from this hierarchy; they never
build HTTP responses.  Each kind carries a stable machine-readable
``code`` that survives all the way to the API client:

- ``NotFound`` (404, ``not_found``): the referenced offer or order does
  not exist **or** belongs to somebody else.  Both cases are merged on
  purpose so callers cannot probe for foreign ids.
- ``ValidationFailure`` (400, ``validation_failure``): a business-rule
  precondition was violated (offer closed, not enough shares, ...).
- ``InvalidTransition`` (400, ``invalid_transition``): the requested
  stage change is not an edge of the order state machine.

Missing identity is handled by DRF itself (``NotAuthenticated`` → 401).

``DomainExceptionHandler`` plugs into *drf-standardized-errors* so that
domain failures, DRF failures and unexpected crashes all share the same
``{"type", "errors": [{"code", "detail", "attr"}]}`` envelope.
"""

from __future__ import annotations

import structlog
from drf_standardized_errors.handler import ExceptionHandler
from rest_framework import exceptions as drf_exceptions
from rest_framework import status

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------


class DomainError(Exception):
    """Base class for failures raised by the service layer."""

    code: str = "domain_error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    """Referenced resource is absent or not owned by the caller."""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found.")
        self.resource = resource


class ValidationFailure(DomainError):
    """A business-rule precondition does not hold."""

    code = "validation_failure"


class InvalidTransition(DomainError):
    """Requested stage change is not a legal edge from the current stage."""

    code = "invalid_transition"

    def __init__(self, from_stage: str, to_stage: str) -> None:
        super().__init__(f"Invalid stage transition from {from_stage} to {to_stage}.")
        self.from_stage = from_stage
        self.to_stage = to_stage


# ---------------------------------------------------------------------------
# HTTP translation
# ---------------------------------------------------------------------------


class DomainAPIException(drf_exceptions.APIException):
    """DRF wrapper carrying a domain error's status, message and code."""

    def __init__(self, error: DomainError) -> None:
        self.status_code = error.status_code
        super().__init__(detail=error.message, code=error.code)


class DomainExceptionHandler(ExceptionHandler):
    """Translate ``DomainError`` into the standardized error envelope."""

    def convert_known_exceptions(self, exc: Exception) -> Exception:
        if isinstance(exc, DomainError):
            logger.warning(
                "api.domain_error",
                code=exc.code,
                status_code=exc.status_code,
                detail=exc.message,
            )
            return DomainAPIException(exc)
        return super().convert_known_exceptions(exc)
