"""Session sign-in/out, CSRF token issue, and profile endpoint tests."""

from __future__ import annotations

from django.conf import settings
from django.test import override_settings
from rest_framework.test import APIClient

from authentication.models import UserAccount
from tests.utils import FOREIGN_KEY, ApiTestCase, create_account, mint_id_token


class CsrfTokenTests(ApiTestCase):
    def test_csrf_endpoint_issues_script_readable_cookie(self):
        """GET /api/auth/csrf/ returns the token and mirrors it in the cookie."""
        response = self.api_client.get("/api/auth/csrf/")

        self.assertEqual(response.status_code, 200)
        token = response.json()["data"]["csrf_token"]
        self.assertEqual(len(token), 64)
        cookie = response.cookies[settings.CSRF_TOKEN_COOKIE]
        self.assertEqual(cookie.value, token)
        self.assertFalse(cookie["httponly"])
        self.assertEqual(cookie["samesite"], "Lax")

    def test_tokens_differ_between_requests(self):
        first = self.api_client.get("/api/auth/csrf/").json()["data"]["csrf_token"]
        second = self.api_client.get("/api/auth/csrf/").json()["data"]["csrf_token"]
        self.assertNotEqual(first, second)


class SessionTests(ApiTestCase):
    """Sign-in creates or refreshes the user record; sign-out clears cookies."""

    def _post_session(self, token: str, uid: str, client: APIClient | None = None):
        client = client or self.api_client
        self.add_csrf(client)
        return client.post("/api/auth/session/", {"id_token": token, "uid": uid}, format="json")

    def test_sign_in_creates_non_admin_record(self):
        token = mint_id_token("uid-new", name="Vice Fan", email="fan@example.com", provider="google.com")
        response = self._post_session(token, "uid-new")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["errors"], [])
        self.assertTrue(body["data"]["created"])
        self.assertFalse(body["data"]["user"]["is_admin"])
        self.assertEqual(body["data"]["user"]["display_name"], "Vice Fan")
        self.assertEqual(body["data"]["user"]["provider"], "google.com")
        self.assertEqual(body["data"]["user"]["preferences"], {"email_notifications": True, "theme": "system"})

        account = UserAccount.objects.get(uid="uid-new")
        self.assertFalse(account.is_admin)
        self.assertTrue(account.is_online)
        cookie = response.cookies[settings.IDENTITY_SESSION_COOKIE]
        self.assertEqual(cookie.value, token)
        self.assertTrue(cookie["httponly"])
        self.assertEqual(str(cookie["max-age"]), str(settings.SESSION_MAX_AGE_SECONDS))

    def test_sign_in_without_name_uses_fallback_display_name(self):
        response = self._post_session(mint_id_token("abcdef123"), "abcdef123")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["user"]["display_name"], "Userabcdef")

    def test_sign_in_again_preserves_admin_flag(self):
        create_account("uid-admin", is_admin=True, display_name="Boss")

        response = self._post_session(mint_id_token("uid-admin", name="Boss Renamed"), "uid-admin")

        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["data"]["created"])
        account = UserAccount.objects.get(uid="uid-admin")
        self.assertTrue(account.is_admin)
        self.assertEqual(account.display_name, "Boss Renamed")

    def test_uid_mismatch_is_forbidden(self):
        response = self._post_session(mint_id_token("uid-real"), "uid-claimed")

        self.assertEqual(response.status_code, 403)
        self.assertFalse(UserAccount.objects.filter(uid__in=["uid-real", "uid-claimed"]).exists())

    def test_malformed_token_is_rejected(self):
        response = self._post_session("not-a-jwt", "uid-1")

        self.assertEqual(response.status_code, 400)
        self.assertIsNone(response.json()["data"])

    def test_expired_token_is_unauthorized(self):
        response = self._post_session(mint_id_token("uid-1", expires_in=-120), "uid-1")

        self.assertEqual(response.status_code, 401)
        self.assertFalse(UserAccount.objects.filter(uid="uid-1").exists())

    def test_wrong_audience_is_unauthorized(self):
        token = mint_id_token("uid-1", audience="another-project")
        response = self._post_session(token, "uid-1")

        self.assertEqual(response.status_code, 401)

    def test_token_signed_by_unknown_key_is_unauthorized(self):
        response = self._post_session(mint_id_token("uid-1", key=FOREIGN_KEY), "uid-1")

        self.assertEqual(response.status_code, 401)

    def test_sign_in_requires_csrf(self):
        token = mint_id_token("uid-1")
        response = self.api_client.post("/api/auth/session/", {"id_token": token, "uid": "uid-1"}, format="json")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["errors"], ["Invalid CSRF token"])

    def test_sign_out_clears_cookies_and_marks_offline(self):
        create_account("uid-out", is_online=True)
        self.sign_in(self.api_client, "uid-out")
        self.add_csrf(self.api_client)

        response = self.api_client.delete("/api/auth/session/")

        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b"")
        self.assertEqual(response.cookies[settings.IDENTITY_SESSION_COOKIE].value, "")
        self.assertEqual(response.cookies[settings.ADMIN_SESSION_COOKIE].value, "")
        self.assertFalse(UserAccount.objects.get(uid="uid-out").is_online)

    def test_sign_out_without_session_still_succeeds(self):
        self.add_csrf(self.api_client)
        response = self.api_client.delete("/api/auth/session/")
        self.assertEqual(response.status_code, 204)

    @override_settings(FIREBASE_PROJECT_ID="")
    def test_unconfigured_identity_provider_is_service_unavailable(self):
        self.api_client.cookies[settings.IDENTITY_SESSION_COOKIE] = mint_id_token("uid-1", audience="fansite-test")

        response = self.api_client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 503)
        self.assertIsNone(response.json()["data"])


class ProfileTests(ApiTestCase):
    @classmethod
    def setUpTestData(cls):
        cls.account = create_account("uid-profile", display_name="Tommy", email="tommy@example.com")

    def test_me_requires_session(self):
        response = self.api_client.get("/api/auth/me/")
        self.assertEqual(response.status_code, 401)

    def test_forged_session_cookie_is_treated_as_anonymous(self):
        self.sign_in(self.api_client, self.account.uid, key=FOREIGN_KEY)

        response = self.api_client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 401)

    def test_me_returns_record(self):
        self.sign_in(self.api_client, self.account.uid)

        response = self.api_client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["uid"], "uid-profile")
        self.assertEqual(response.json()["data"]["email"], "tommy@example.com")

    def test_me_without_record_is_not_found(self):
        self.sign_in(self.api_client, "uid-ghost")

        response = self.api_client.get("/api/auth/me/")

        self.assertEqual(response.status_code, 404)

    def test_patch_updates_name_and_merges_preferences(self):
        client = self.client_for(self.account)

        response = client.patch(
            "/api/auth/me/", {"display_name": "Tommy V", "preferences": {"theme": "dark"}}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["display_name"], "Tommy V")
        self.assertEqual(data["preferences"], {"email_notifications": True, "theme": "dark"})

    def test_patch_cannot_change_email_or_admin_flag(self):
        client = self.client_for(self.account)

        response = client.patch("/api/auth/me/", {"is_admin": True, "email": "x@example.com"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.account.refresh_from_db()
        self.assertFalse(self.account.is_admin)
        self.assertEqual(self.account.email, "tommy@example.com")
