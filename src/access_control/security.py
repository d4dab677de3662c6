"""Request validators: CSRF double-submit tokens and per-IP rate limiting."""

import hmac
import secrets
from dataclasses import dataclass

from django.conf import settings

from core.redis_client import get_redis_client

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class RateLimiterUnavailable(Exception):
    """Raised when the shared counter store cannot be reached (fail-closed)."""


def generate_csrf_token() -> str:
    """Return a random 32-byte token, hex encoded."""
    return secrets.token_hex(32)


def csrf_tokens_match(cookie_token: str | None, header_token: str | None) -> bool:
    """Double-submit check: both values present and equal."""
    if not cookie_token or not header_token:
        return False
    return hmac.compare_digest(cookie_token.encode(), header_token.encode())


def requires_csrf(request) -> bool:
    """Return True when the request mutates state on a protected path."""
    if request.method not in MUTATING_METHODS:
        return False
    return _matches_prefix(request.path, settings.CSRF_PROTECTED_PATH_PREFIXES)


def is_rate_limited_path(path: str) -> bool:
    return _matches_prefix(path, settings.RATE_LIMITED_PATH_PREFIXES)


def verify_csrf(request) -> bool:
    """Compare the CSRF header against the CSRF cookie for this request."""
    return csrf_tokens_match(
        request.COOKIES.get(settings.CSRF_TOKEN_COOKIE),
        request.headers.get(settings.CSRF_TOKEN_HEADER),
    )


def get_client_ip(request) -> str:
    """Best-effort client address used as the rate-limit key."""
    if settings.RATE_LIMIT_TRUST_FORWARDED_FOR:
        forwarded = request.headers.get("X-Forwarded-For", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    return request.META.get("REMOTE_ADDR") or "unknown"


def _matches_prefix(path: str, prefixes) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    count: int
    retry_after: int


class RateLimiter:
    """Fixed-window request counter keyed by client IP.

    Counters live in Redis so every application instance shares the same
    window. The first hit in a window creates the key with a TTL equal to the
    window length; the key expiring is the window reset.
    """

    KEY_PREFIX = "ratelimit:"

    def __init__(self, max_requests: int | None = None, window_seconds: int | None = None):
        self.max_requests = max_requests if max_requests is not None else settings.RATE_LIMIT_MAX_REQUESTS
        self.window_seconds = (
            window_seconds if window_seconds is not None else settings.RATE_LIMIT_WINDOW_SECONDS
        )

    def hit(self, client_id: str) -> RateLimitResult:
        """Count one request for ``client_id`` and report whether it is allowed."""

        client = get_redis_client()
        key = f"{self.KEY_PREFIX}{client_id}"
        try:
            count = int(client.incr(key))
            if count == 1:
                client.expire(key, self.window_seconds)
            if count <= self.max_requests:
                return RateLimitResult(allowed=True, count=count, retry_after=0)
            ttl = int(client.ttl(key))
            if ttl < 0:
                # Key lost its TTL (crash between INCR and EXPIRE); restart the window.
                client.expire(key, self.window_seconds)
                ttl = self.window_seconds
        except Exception as exc:  # pragma: no cover - network failure
            raise RateLimiterUnavailable("Redis unavailable while counting requests") from exc

        return RateLimitResult(allowed=False, count=count, retry_after=max(ttl, 1))


__all__ = [
    "MUTATING_METHODS",
    "RateLimiter",
    "RateLimitResult",
    "RateLimiterUnavailable",
    "csrf_tokens_match",
    "generate_csrf_token",
    "get_client_ip",
    "is_rate_limited_path",
    "requires_csrf",
    "verify_csrf",
]
