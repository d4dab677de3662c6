"""Shared helpers for tests (identity tokens, fake Redis, signed-in clients)."""

from __future__ import annotations

import math
import time
from typing import Dict
from unittest import mock

import jwt
from cryptography.hazmat.primitives.asymmetric import rsa
from django.conf import settings
from django.test import TestCase
from rest_framework.test import APIClient

from authentication.models import UserAccount
from authentication.services import SessionVerifier

SIGNING_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
FOREIGN_KEY = rsa.generate_private_key(public_exponent=65537, key_size=2048)
CSRF_TOKEN = "c" * 64


class FakeRedis:
    """In-memory stand-in for the Redis commands the API uses.

    Time only moves when ``advance`` is called, so window expiry is
    deterministic.
    """

    def __init__(self):
        self.now = 0.0
        self._store: Dict[str, str] = {}
        self._expiry: Dict[str, float] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _purge(self, key: str) -> None:
        expires_at = self._expiry.get(key)
        if expires_at is not None and expires_at <= self.now:
            self._store.pop(key, None)
            self._expiry.pop(key, None)

    def incr(self, key: str) -> int:
        self._purge(key)
        value = int(self._store.get(key, 0)) + 1
        self._store[key] = str(value)
        return value

    def expire(self, key: str, seconds: int) -> bool:
        self._purge(key)
        if key not in self._store:
            return False
        self._expiry[key] = self.now + seconds
        return True

    def ttl(self, key: str) -> int:
        """Mimic Redis TTL: -2 for a missing key, -1 for a key without expiry."""
        self._purge(key)
        if key not in self._store:
            return -2
        expires_at = self._expiry.get(key)
        if expires_at is None:
            return -1
        return max(int(math.ceil(expires_at - self.now)), 0)

    def get(self, key: str):
        self._purge(key)
        return self._store.get(key)

    def setex(self, key: str, ttl_seconds: int, value: str) -> None:
        self._store[key] = value
        self._expiry[key] = self.now + ttl_seconds

    def ping(self) -> bool:
        return True

    def flushall(self) -> None:
        self._store.clear()
        self._expiry.clear()


def mint_id_token(
    uid: str,
    name: str | None = None,
    email: str | None = None,
    expires_in: int = 3600,
    audience: str | None = None,
    issuer: str | None = None,
    key=SIGNING_KEY,
    provider: str = "password",
) -> str:
    """Return an RS256 identity token shaped like the provider's ID tokens."""

    project_id = settings.FIREBASE_PROJECT_ID
    now = int(time.time())
    claims = {
        "iss": issuer or f"{settings.IDENTITY_ISSUER_PREFIX}{project_id}",
        "aud": audience or project_id,
        "sub": uid,
        "iat": now - 30,
        "auth_time": now - 30,
        "exp": now + expires_in,
        "firebase": {"sign_in_provider": provider},
    }
    if name:
        claims["name"] = name
    if email:
        claims["email"] = email
    return jwt.encode(claims, key, algorithm="RS256", headers={"kid": "test-key"})


def create_account(uid: str, is_admin: bool = False, **extra) -> UserAccount:
    extra.setdefault("display_name", f"Tester {uid}")
    return UserAccount.objects.create(uid=uid, is_admin=is_admin, **extra)


class ApiTestCase(TestCase):
    """TestCase with Redis and the identity provider's signing keys patched out."""

    @classmethod
    def setUpClass(cls):
        """Patch Redis clients and the JWKS lookup for every test in the class."""
        super().setUpClass()
        cls.fake_redis = FakeRedis()
        cls.patchers = [
            mock.patch("access_control.security.get_redis_client", return_value=cls.fake_redis),
            mock.patch("core.views.get_redis_client", return_value=cls.fake_redis),
            mock.patch.object(SessionVerifier, "_get_signing_key", return_value=SIGNING_KEY.public_key()),
        ]
        for patcher in cls.patchers:
            patcher.start()

    @classmethod
    def tearDownClass(cls):
        for patcher in cls.patchers:
            patcher.stop()
        super().tearDownClass()

    def setUp(self):
        """Fresh DRF APIClient and empty counters per test."""
        self.fake_redis.flushall()
        self.api_client: APIClient = APIClient()

    @staticmethod
    def sign_in(client: APIClient, uid: str, **token_kwargs) -> str:
        """Put a valid session cookie on ``client`` and return the token."""
        token = mint_id_token(uid, **token_kwargs)
        client.cookies[settings.IDENTITY_SESSION_COOKIE] = token
        return token

    @staticmethod
    def add_csrf(client: APIClient, token: str = CSRF_TOKEN) -> None:
        client.cookies[settings.CSRF_TOKEN_COOKIE] = token
        client.credentials(HTTP_X_CSRF_TOKEN=token)

    def client_for(self, account: UserAccount) -> APIClient:
        """Return a new client signed in as ``account`` with CSRF set up."""
        client = APIClient()
        self.sign_in(client, account.uid)
        self.add_csrf(client)
        return client
