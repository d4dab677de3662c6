"""CSRF double-submit, rate limiting and security header tests."""

from __future__ import annotations

import json
from unittest import mock

import redis
from django.test import SimpleTestCase, override_settings

from access_control.security import RateLimiter, RateLimiterUnavailable, csrf_tokens_match
from core.response import api_response, error_response
from tests.utils import ApiTestCase, FakeRedis, create_account


class CsrfTests(ApiTestCase):
    @classmethod
    def setUpTestData(cls):
        cls.admin = create_account("uid-admin", is_admin=True)

    def _admin_client_without_csrf(self):
        self.sign_in(self.api_client, self.admin.uid)
        return self.api_client

    def test_mutation_without_csrf_header_is_forbidden(self):
        client = self._admin_client_without_csrf()

        response = client.post("/api/admin/set-admin/", {"target_uid": "uid-admin", "is_admin": True}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"data": None, "errors": ["Invalid CSRF token"]})

    def test_mismatched_csrf_header_is_forbidden(self):
        client = self._admin_client_without_csrf()
        client.cookies["csrf-token"] = "a" * 64
        client.credentials(HTTP_X_CSRF_TOKEN="b" * 64)

        response = client.post("/api/admin/wiki/", {"title": "X", "category": "misc"}, format="json")

        self.assertEqual(response.status_code, 403)

    def test_header_without_cookie_is_forbidden(self):
        client = self._admin_client_without_csrf()
        client.credentials(HTTP_X_CSRF_TOKEN="a" * 64)

        response = client.delete("/api/auth/session/")

        self.assertEqual(response.status_code, 403)

    def test_matching_csrf_passes(self):
        client = self.client_for(self.admin)

        response = client.post("/api/admin/set-admin/", {"target_uid": "uid-admin", "is_admin": True}, format="json")

        self.assertEqual(response.status_code, 200)

    def test_safe_methods_skip_csrf(self):
        self.assertEqual(self.api_client.get("/api/wiki/pages/").status_code, 200)

    def test_csrf_checked_before_authentication(self):
        """Anonymous mutations are rejected for CSRF before any 401."""
        response = self.api_client.post("/api/admin/set-admin/", {}, format="json")
        self.assertEqual(response.status_code, 403)


class EnvelopeTests(SimpleTestCase):
    def test_error_response_matches_api_envelope(self):
        rejected = error_response("Invalid CSRF token", 403)
        accepted = api_response({"ok": True}, errors=["partial"])

        self.assertEqual(rejected.status_code, 403)
        self.assertEqual(json.loads(rejected.content), {"data": None, "errors": ["Invalid CSRF token"]})
        self.assertEqual(accepted.data, {"data": {"ok": True}, "errors": ["partial"]})


class CsrfCompareTests(SimpleTestCase):
    def test_compare(self):
        self.assertTrue(csrf_tokens_match("abc", "abc"))
        self.assertFalse(csrf_tokens_match("abc", "abd"))
        self.assertFalse(csrf_tokens_match("", ""))
        self.assertFalse(csrf_tokens_match(None, "abc"))


@override_settings(RATE_LIMIT_MAX_REQUESTS=3, RATE_LIMIT_WINDOW_SECONDS=60)
class RateLimitTests(ApiTestCase):
    def test_exceeding_ceiling_returns_429_until_window_resets(self):
        for _ in range(3):
            self.assertEqual(self.api_client.get("/api/admin/check/").status_code, 401)

        blocked = self.api_client.get("/api/admin/check/")
        self.assertEqual(blocked.status_code, 429)
        self.assertEqual(blocked["Retry-After"], "60")
        self.assertEqual(
            blocked.json()["errors"], ["Too many requests. Please try again after 60 seconds."]
        )

        self.fake_redis.advance(30)
        still_blocked = self.api_client.get("/api/admin/check/")
        self.assertEqual(still_blocked.status_code, 429)
        self.assertEqual(still_blocked["Retry-After"], "30")

        self.fake_redis.advance(31)
        self.assertEqual(self.api_client.get("/api/admin/check/").status_code, 401)

    def test_counters_are_per_client_ip(self):
        for _ in range(4):
            self.api_client.get("/api/admin/check/", REMOTE_ADDR="10.0.0.1")

        self.assertEqual(self.api_client.get("/api/admin/check/", REMOTE_ADDR="10.0.0.1").status_code, 429)
        self.assertEqual(self.api_client.get("/api/admin/check/", REMOTE_ADDR="10.0.0.2").status_code, 401)

    def test_rate_limit_runs_before_csrf(self):
        for _ in range(3):
            self.api_client.post("/api/admin/set-admin/", {}, format="json")

        self.assertEqual(self.api_client.post("/api/admin/set-admin/", {}, format="json").status_code, 429)

    def test_public_routes_are_not_counted(self):
        for _ in range(5):
            self.assertEqual(self.api_client.get("/api/wiki/pages/").status_code, 200)

    @override_settings(RATE_LIMIT_TRUST_FORWARDED_FOR=True)
    def test_forwarded_for_first_hop_is_the_client(self):
        for _ in range(4):
            self.api_client.get("/api/admin/check/", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1")

        blocked = self.api_client.get("/api/admin/check/", HTTP_X_FORWARDED_FOR="203.0.113.9")
        other = self.api_client.get("/api/admin/check/", HTTP_X_FORWARDED_FOR="198.51.100.7")
        self.assertEqual(blocked.status_code, 429)
        self.assertEqual(other.status_code, 401)

    def test_limiter_unavailable_fails_closed(self):
        broken = mock.Mock()
        broken.incr.side_effect = redis.ConnectionError("down")
        with mock.patch("access_control.security.get_redis_client", return_value=broken):
            response = self.api_client.get("/api/admin/check/")

        self.assertEqual(response.status_code, 503)
        self.assertIsNone(response.json()["data"])


class RateLimiterTests(SimpleTestCase):
    def setUp(self):
        self.fake_redis = FakeRedis()
        patcher = mock.patch("access_control.security.get_redis_client", return_value=self.fake_redis)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_counts_within_window(self):
        limiter = RateLimiter(max_requests=2, window_seconds=10)

        self.assertTrue(limiter.hit("1.2.3.4").allowed)
        self.assertTrue(limiter.hit("1.2.3.4").allowed)
        result = limiter.hit("1.2.3.4")

        self.assertFalse(result.allowed)
        self.assertEqual(result.count, 3)
        self.assertEqual(result.retry_after, 10)

    def test_window_expiry_resets_counter(self):
        limiter = RateLimiter(max_requests=1, window_seconds=10)
        limiter.hit("1.2.3.4")
        self.assertFalse(limiter.hit("1.2.3.4").allowed)

        self.fake_redis.advance(10)

        result = limiter.hit("1.2.3.4")
        self.assertTrue(result.allowed)
        self.assertEqual(result.count, 1)

    def test_key_without_ttl_gets_a_fresh_window(self):
        limiter = RateLimiter(max_requests=1, window_seconds=10)
        self.fake_redis.incr(f"{RateLimiter.KEY_PREFIX}5.6.7.8")

        result = limiter.hit("5.6.7.8")

        self.assertFalse(result.allowed)
        self.assertEqual(result.retry_after, 10)
        self.assertEqual(self.fake_redis.ttl(f"{RateLimiter.KEY_PREFIX}5.6.7.8"), 10)

    def test_redis_errors_raise_unavailable(self):
        broken = mock.Mock()
        broken.incr.side_effect = redis.TimeoutError("slow")
        with mock.patch("access_control.security.get_redis_client", return_value=broken):
            with self.assertRaises(RateLimiterUnavailable):
                RateLimiter(max_requests=1, window_seconds=10).hit("1.2.3.4")


class SecurityHeaderTests(ApiTestCase):
    def test_security_headers_present(self):
        response = self.api_client.get("/api/wiki/categories/")

        self.assertEqual(response["X-Content-Type-Options"], "nosniff")
        self.assertEqual(response["X-Frame-Options"], "DENY")
        self.assertEqual(response["Referrer-Policy"], "strict-origin-when-cross-origin")
        self.assertEqual(response["X-XSS-Protection"], "1; mode=block")
        self.assertEqual(response["Permissions-Policy"], "camera=(), microphone=(), geolocation=()")
        self.assertIn("default-src", response["Content-Security-Policy"])

    def test_error_responses_carry_headers(self):
        response = self.api_client.post("/api/admin/set-admin/", {}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response["X-Frame-Options"], "DENY")
        self.assertEqual(response["X-XSS-Protection"], "1; mode=block")


class HealthTests(ApiTestCase):
    def test_health_reports_ok(self):
        response = self.api_client.get("/api/health/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"database": "ok", "redis": "ok"})

    def test_health_reports_redis_outage(self):
        broken = mock.Mock()
        broken.ping.side_effect = redis.ConnectionError("down")
        with mock.patch("core.views.get_redis_client", return_value=broken):
            response = self.api_client.get("/api/health/")

        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.json()["data"]["redis"], "unavailable")
        self.assertEqual(response.json()["errors"], ["Service unavailable."])
