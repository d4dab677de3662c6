"""Cookie helpers for the session, admin-session and CSRF cookies."""

from django.conf import settings


def _secure() -> bool:
    return not settings.DEBUG


def set_session_cookie(response, token: str) -> None:
    """Store the identity token in the httpOnly session cookie."""
    response.set_cookie(
        settings.IDENTITY_SESSION_COOKIE,
        token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        secure=_secure(),
        samesite="Lax",
    )


def set_admin_session_cookie(response) -> None:
    """Mark the browser as holding a confirmed admin session (UI hint only)."""
    response.set_cookie(
        settings.ADMIN_SESSION_COOKIE,
        "true",
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        path="/",
        httponly=True,
        secure=_secure(),
        samesite="Lax",
    )


def set_csrf_cookie(response, token: str) -> None:
    # Readable by scripts: the UI copies it into the X-CSRF-Token header.
    response.set_cookie(
        settings.CSRF_TOKEN_COOKIE,
        token,
        max_age=settings.CSRF_TOKEN_MAX_AGE_SECONDS,
        path="/",
        httponly=False,
        secure=_secure(),
        samesite="Lax",
    )


def clear_admin_session_cookie(response) -> None:
    response.delete_cookie(settings.ADMIN_SESSION_COOKIE, path="/", samesite="Lax")


def clear_session_cookies(response) -> None:
    response.delete_cookie(settings.IDENTITY_SESSION_COOKIE, path="/", samesite="Lax")
    clear_admin_session_cookie(response)


__all__ = [
    "clear_admin_session_cookie",
    "clear_session_cookies",
    "set_admin_session_cookie",
    "set_csrf_cookie",
    "set_session_cookie",
]
