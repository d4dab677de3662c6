"""App configuration for the wiki."""

from django.apps import AppConfig


class WikiConfig(AppConfig):
    """Wiki app holds pages, their revision history and the category catalogue."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "wiki"
