"""Middleware for API request validation and session-cookie authentication."""

import logging
import time
from typing import Optional

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed

from access_control.security import (
    RateLimiter,
    RateLimiterUnavailable,
    get_client_ip,
    is_rate_limited_path,
    requires_csrf,
    verify_csrf,
)
from authentication.services import IdentityProviderUnavailable, load_session_user
from .response import error_response

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-XSS-Protection": "1; mode=block",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}


class MinimumLatencyMiddleware(MiddlewareMixin):
    """Hold responses for ``MIN_LATENCY_PATHS`` until ``ADMIN_CHECK_MIN_RESPONSE_SECONDS`` have passed.

    Sits outside the security and session layers so their early 429, 403 and
    503 rejections are padded like the view's own 200 and 401 answers.
    """

    def process_request(self, request):  # type: ignore[override]
        if request.path in settings.MIN_LATENCY_PATHS:
            request._latency_started = time.monotonic()
        return None

    def process_response(self, request, response):  # type: ignore[override]
        started = getattr(request, "_latency_started", None)
        if started is not None:
            remaining = settings.ADMIN_CHECK_MIN_RESPONSE_SECONDS - (time.monotonic() - started)
            if remaining > 0:
                time.sleep(remaining)
        return response


class ApiSecurityMiddleware(MiddlewareMixin):
    """Rate-limit admin API calls, enforce CSRF double-submit, add security headers."""

    def process_request(self, request):  # type: ignore[override]
        """Reject over-limit clients (429) and forged mutations (403)."""
        if is_rate_limited_path(request.path):
            try:
                result = RateLimiter().hit(get_client_ip(request))
            except RateLimiterUnavailable:
                logger.error("Rate limiter unavailable for %s %s", request.method, request.path)
                return _service_unavailable("Rate limiting service unavailable.")
            if not result.allowed:
                logger.warning(
                    "Rate limit exceeded for %s (%d requests)", get_client_ip(request), result.count
                )
                return _too_many_requests(result.retry_after)

        if requires_csrf(request) and not verify_csrf(request):
            logger.warning("Rejected %s %s: invalid CSRF token", request.method, request.path)
            return error_response("Invalid CSRF token", status.HTTP_403_FORBIDDEN)

        return None

    def process_response(self, request, response):  # type: ignore[override]
        for header, value in SECURITY_HEADERS.items():
            response.setdefault(header, value)
        if not settings.DEBUG:
            response.setdefault("Content-Security-Policy", settings.CONTENT_SECURITY_POLICY)
        return response


class SessionCookieMiddleware(MiddlewareMixin):
    """Verify the identity-provider session cookie and attach request.user."""

    def process_request(self, request):  # type: ignore[override]
        """Attach a SessionUser for a valid cookie, AnonymousUser otherwise."""
        token = request.COOKIES.get(settings.IDENTITY_SESSION_COOKIE)
        try:
            request.user = self._get_user(token) or AnonymousUser()
        except IdentityProviderUnavailable as exc:
            logger.error("Session cookie not verified: %s", exc)
            return _service_unavailable("Authentication service unavailable (identity provider).")
        return None

    @staticmethod
    def _get_user(token: Optional[str]):
        if not token:
            return None
        try:
            return load_session_user(token)
        except AuthenticationFailed as exc:
            # Expired or forged cookies leave the request anonymous.
            logger.info("Ignoring session cookie: %s", exc.detail)
            return None


def _too_many_requests(retry_after: int) -> JsonResponse:
    response = error_response(
        f"Too many requests. Please try again after {retry_after} seconds.",
        status.HTTP_429_TOO_MANY_REQUESTS,
    )
    response["Retry-After"] = str(retry_after)
    return response


def _service_unavailable(message: str) -> JsonResponse:
    return error_response(message, status.HTTP_503_SERVICE_UNAVAILABLE)


__all__ = ["ApiSecurityMiddleware", "MinimumLatencyMiddleware", "SessionCookieMiddleware"]
