"""Custom exception handling to enforce the API error envelope."""

import logging
import traceback
from typing import Any

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from access_control.security import RateLimiterUnavailable
from authentication.services import IdentityProviderUnavailable
from .response import api_response, envelope

logger = logging.getLogger(__name__)


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def _unavailable(message: str) -> Response:
    return api_response(None, status=status.HTTP_503_SERVICE_UNAVAILABLE, errors=[message])


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """Wrap DRF errors in `{ "data": null, "errors": [...] }` shape.

    - Uses DRF's default handler to produce the base response.
    - Normalizes 401/403 messages unless DEBUG_AUTH_ERRORS is enabled.
    - Turns unexpected exceptions into a 500 envelope; the exception text and
      traceback are only included when DEBUG is on.
    """

    # Upstream dependencies of the auth and rate-limit checks fail closed.
    if isinstance(exc, IdentityProviderUnavailable):
        return _unavailable("Authentication service unavailable (identity provider).")
    if isinstance(exc, RateLimiterUnavailable):
        return _unavailable("Rate limiting service unavailable.")

    # Treat database errors as a temporary service outage and still respect the
    # global envelope format instead of returning Django's HTML 500 page.
    if isinstance(exc, DatabaseError):
        logger.error("Database error: %s", exc)
        return _unavailable("Service temporarily unavailable.")

    response = drf_exception_handler(exc, context)

    if response is None:
        return _server_error(exc)

    if isinstance(exc, (AuthenticationFailed, NotAuthenticated)):
        response.status_code = status.HTTP_401_UNAUTHORIZED

    if response.status_code >= 400:
        base_errors = response.data

        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            if getattr(settings, "DEBUG_AUTH_ERRORS", False):
                errors = _normalize_errors(base_errors)
            else:
                errors = [
                    "Authentication credentials were not provided or are invalid, "
                    "or the session has expired."
                ]
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            errors = ["You do not have permission to perform this action on this resource."]
        else:
            errors = _normalize_errors(base_errors)

        response.data = envelope(None, errors)

    return response


def _server_error(exc: Exception) -> Response:
    logger.exception("Unhandled API error", exc_info=exc)
    payload = envelope(None, ["Internal server error."])
    if settings.DEBUG:
        payload["errors"] = [str(exc) or exc.__class__.__name__]
        payload["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return Response(payload, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
