"""Django settings for the fan site content backend.

Environment-driven configuration for Postgres, Redis, the identity provider,
and the API security layer (CSRF double-submit and rate limiting).
"""
import os
from pathlib import Path
from urllib.parse import urlparse

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def _get_env(name: str, default: str | None = None) -> str | None:
    """Read an environment variable with an optional fallback."""
    return os.environ.get(name, default)


def _get_bool(name: str, default: str = "False") -> bool:
    return _get_env(name, default) == "True"


def _parse_database_url(url: str) -> dict:
    """Parse a DATABASE_URL into a Django DATABASES entry.

    PostgreSQL URLs are the deployment target; ``sqlite:///path`` is accepted
    for local development.
    """
    parsed = urlparse(url)
    if parsed.scheme == "sqlite":
        return {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": parsed.path.lstrip("/") or ":memory:",
        }
    return {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": parsed.path.lstrip("/"),
        "USER": parsed.username,
        "PASSWORD": parsed.password,
        "HOST": parsed.hostname,
        "PORT": parsed.port or "5432",
    }


SECRET_KEY = _get_env("SECRET_KEY", "dev-secret-key-change-me")
DEBUG = _get_bool("DEBUG", "True")
if not DEBUG and SECRET_KEY in ("change-me", "dev-secret-key-change-me"):
    raise ImproperlyConfigured("SECRET_KEY must be set in production")
ALLOWED_HOSTS = [
    h.strip()
    for h in _get_env("ALLOWED_HOSTS", "localhost,127.0.0.1,0.0.0.0").split(",")
    if h.strip()
]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "drf_spectacular",
    "core",
    "authentication",
    "access_control",
    "wiki",
    "news",
    "scripts",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Pads every answer on the admin-check route, early rejections included.
    "core.middleware.MinimumLatencyMiddleware",
    # Rate limiting and CSRF double-submit run before the session is decoded.
    "core.middleware.ApiSecurityMiddleware",
    "core.middleware.SessionCookieMiddleware",
]

ROOT_URLCONF = "core.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "core.wsgi.application"
ASGI_APPLICATION = "core.asgi.application"

DATABASE_URL = _get_env("DATABASE_URL")
if DATABASE_URL:
    DATABASES = {"default": _parse_database_url(DATABASE_URL)}
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": _get_env("POSTGRES_DB", "fansite"),
            "USER": _get_env("POSTGRES_USER", "fansite"),
            "PASSWORD": _get_env("POSTGRES_PASSWORD", "fansite"),
            "HOST": _get_env("POSTGRES_HOST", "localhost"),
            "PORT": _get_env("POSTGRES_PORT", "5432"),
        }
    }

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

X_FRAME_OPTIONS = "DENY"
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"

DEBUG_AUTH_ERRORS = _get_bool("DEBUG_AUTH_ERRORS")
REDIS_URL = _get_env("REDIS_URL", "redis://localhost:6379/0")

# Identity provider. Session cookies carry the provider's RS256 ID tokens,
# verified against its published signing keys.
FIREBASE_PROJECT_ID = _get_env("FIREBASE_PROJECT_ID", "")
FIREBASE_CLIENT_EMAIL = _get_env("FIREBASE_CLIENT_EMAIL", "")
FIREBASE_PRIVATE_KEY = (_get_env("FIREBASE_PRIVATE_KEY", "") or "").replace("\\n", "\n")
IDENTITY_ISSUER_PREFIX = "https://securetoken.google.com/"
IDENTITY_JWKS_URL = _get_env(
    "IDENTITY_JWKS_URL",
    "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com",
)

# Cookies and headers shared with the browser UI.
IDENTITY_SESSION_COOKIE = "session"
ADMIN_SESSION_COOKIE = "admin-session"
CSRF_TOKEN_COOKIE = "csrf-token"
CSRF_TOKEN_HEADER = "X-CSRF-Token"
SESSION_MAX_AGE_SECONDS = int(_get_env("SESSION_MAX_AGE_SECONDS", "3600"))
CSRF_TOKEN_MAX_AGE_SECONDS = int(_get_env("CSRF_TOKEN_MAX_AGE_SECONDS", "86400"))

# API security layer.
CSRF_PROTECTED_PATH_PREFIXES = ("/api/",)
RATE_LIMITED_PATH_PREFIXES = ("/api/admin/",)
RATE_LIMIT_WINDOW_SECONDS = int(_get_env("RATE_LIMIT_WINDOW_SECONDS", "900"))
RATE_LIMIT_MAX_REQUESTS = int(_get_env("RATE_LIMIT_MAX_REQUESTS", "100"))
RATE_LIMIT_TRUST_FORWARDED_FOR = _get_bool("RATE_LIMIT_TRUST_FORWARDED_FOR")
MIN_LATENCY_PATHS = ("/api/admin/check/",)
ADMIN_CHECK_MIN_RESPONSE_SECONDS = float(_get_env("ADMIN_CHECK_MIN_RESPONSE_SECONDS", "0.3"))
CONTENT_SECURITY_POLICY = (
    "default-src 'self'; script-src 'self' 'unsafe-inline'; "
    "style-src 'self' 'unsafe-inline'; img-src 'self' data: blob:; font-src 'self'; "
    "connect-src 'self' https://*.googleapis.com https://*.firebaseio.com;"
)

LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "standard"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": ["core.authentication.MiddlewareUserAuthentication"],
    "DEFAULT_PERMISSION_CLASSES": [],
    "EXCEPTION_HANDLER": "core.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "UNAUTHENTICATED_USER": "django.contrib.auth.models.AnonymousUser",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Fan Site Content API",
    "DESCRIPTION": (
        "JSON API for the fan site wiki, news and admin tooling. Sessions are "
        "identity-provider tokens carried in the `session` cookie; mutating "
        "requests need the `X-CSRF-Token` header to match the `csrf-token` cookie."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SERVE_PUBLIC": True,
    "APPEND_COMPONENTS": {
        "securitySchemes": {
            "sessionCookie": {"type": "apiKey", "in": "cookie", "name": "session"},
            "csrfHeader": {"type": "apiKey", "in": "header", "name": "X-CSRF-Token"},
        }
    },
    "SECURITY": [{"sessionCookie": []}],
}
