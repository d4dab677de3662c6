"""Identity-token verification and user record maintenance."""

import logging
from dataclasses import dataclass, field
from typing import Any

import jwt
from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed, NotFound

from .models import UserAccount, default_preferences

logger = logging.getLogger(__name__)


class IdentityProviderUnavailable(Exception):
    """Raised when the identity provider's signing keys cannot be fetched."""


class SessionVerifier:
    """Verify identity-provider ID tokens carried in the session cookie.

    Tokens are RS256 JWTs signed by the provider. The signing keys come from
    the provider's JWKS endpoint and are cached by ``PyJWKClient``; audience
    and issuer are pinned to the configured project id.
    """

    ALGORITHMS = ["RS256"]
    REQUIRED_CLAIMS = ["exp", "iat", "sub"]

    _jwks_client: jwt.PyJWKClient | None = None

    @classmethod
    def verify(cls, token: str) -> dict[str, Any]:
        """Decode and validate ``token``; return its claims with ``uid`` set."""

        project_id = settings.FIREBASE_PROJECT_ID
        if not project_id:
            raise IdentityProviderUnavailable("Identity provider project id is not configured")

        signing_key = cls._get_signing_key(token)
        try:
            claims = jwt.decode(
                token,
                signing_key,
                algorithms=cls.ALGORITHMS,
                audience=project_id,
                issuer=f"{settings.IDENTITY_ISSUER_PREFIX}{project_id}",
                options={"require": cls.REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationFailed("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationFailed("Invalid token") from exc

        uid = claims.get("sub")
        if not uid:
            raise AuthenticationFailed("Token has no subject")
        claims["uid"] = uid
        return claims

    @classmethod
    def _get_signing_key(cls, token: str):
        if cls._jwks_client is None:
            cls._jwks_client = jwt.PyJWKClient(settings.IDENTITY_JWKS_URL, cache_keys=True, lifespan=3600)
        try:
            return cls._jwks_client.get_signing_key_from_jwt(token).key
        except jwt.PyJWKClientConnectionError as exc:  # pragma: no cover - network failure
            raise IdentityProviderUnavailable("Identity provider keys unavailable") from exc
        except (jwt.PyJWKClientError, jwt.InvalidTokenError) as exc:
            raise AuthenticationFailed("Invalid token") from exc


@dataclass
class SessionUser:
    """Principal attached to requests that carry a verified session cookie.

    ``account`` is None when the identity is valid but no user record exists
    yet; such a user is never an admin.
    """

    uid: str
    display_name: str = ""
    account: UserAccount | None = None
    claims: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    @property
    def is_admin(self) -> bool:
        return bool(self.account is not None and self.account.is_admin)


def load_session_user(token: str) -> SessionUser:
    """Verify ``token`` and build the request principal from the user record."""

    claims = SessionVerifier.verify(token)
    account = UserAccount.objects.filter(uid=claims["uid"]).first()
    display_name = (account.display_name if account else "") or claims.get("name") or ""
    return SessionUser(uid=claims["uid"], display_name=display_name, account=account, claims=claims)


class UserService:
    """Create, update and query user records."""

    @staticmethod
    def fallback_display_name(uid: str) -> str:
        return f"User{uid[:6]}"

    @classmethod
    def sync_from_claims(cls, claims: dict[str, Any]) -> tuple[UserAccount, bool]:
        """Create or refresh the user record on sign-in.

        New records always start as non-admin; existing records keep their
        admin flag and any profile field the token does not carry.
        """

        uid = claims["uid"]
        provider = (claims.get("firebase") or {}).get("sign_in_provider") or "unknown"
        account, created = UserAccount.objects.get_or_create(
            uid=uid,
            defaults={
                "display_name": claims.get("name") or cls.fallback_display_name(uid),
                "email": claims.get("email"),
                "photo_url": claims.get("picture"),
                "provider": provider,
                "is_admin": False,
                "is_online": True,
                "preferences": default_preferences(),
            },
        )
        if created:
            logger.info("Created user record for uid=%s", uid)
            return account, True

        account.email = claims.get("email") or account.email
        account.photo_url = claims.get("picture") or account.photo_url
        if claims.get("name"):
            account.display_name = claims["name"]
        account.provider = provider
        account.is_online = True
        account.save(
            update_fields=["email", "photo_url", "display_name", "provider", "is_online", "last_updated"]
        )
        return account, False

    @staticmethod
    def set_admin(uid: str, is_admin: bool) -> UserAccount:
        """Set the admin flag; setting the same value again is a no-op."""

        try:
            account = UserAccount.objects.get(uid=uid)
        except UserAccount.DoesNotExist:
            raise NotFound("User not found")

        if account.is_admin != is_admin:
            logger.info("Admin flag for uid=%s changed to %s", uid, is_admin)
        account.is_admin = is_admin
        account.save(update_fields=["is_admin", "last_updated"])
        return account

    @staticmethod
    def set_online(uid: str, is_online: bool) -> None:
        UserAccount.objects.filter(uid=uid).update(is_online=is_online)

    @staticmethod
    def update_profile(account: UserAccount, changes: dict[str, Any]) -> UserAccount:
        """Apply profile edits; preferences are merged key by key."""

        preferences = changes.pop("preferences", None)
        for name, value in changes.items():
            setattr(account, name, value)
        if preferences:
            account.preferences = {**(account.preferences or default_preferences()), **preferences}
        account.save()
        return account

    @staticmethod
    def list_users():
        return UserAccount.objects.all()


__all__ = [
    "IdentityProviderUnavailable",
    "SessionUser",
    "SessionVerifier",
    "UserService",
    "load_session_user",
]
