"""App configuration for authentication components."""

from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    """Authentication app holds user records, session verification and cookie helpers."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "authentication"
