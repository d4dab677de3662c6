"""Settings overrides for the test suite (in-memory SQLite, no latency padding)."""

from .settings import *  # noqa: F401,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

FIREBASE_PROJECT_ID = "fansite-test"
IDENTITY_JWKS_URL = "https://identity.invalid/jwks"
ADMIN_CHECK_MIN_RESPONSE_SECONDS = 0.0
RATE_LIMIT_MAX_REQUESTS = 100
RATE_LIMIT_WINDOW_SECONDS = 900
LOG_LEVEL = "WARNING"
LOGGING["root"]["level"] = LOG_LEVEL  # noqa: F405
