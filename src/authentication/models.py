"""User record keyed by the identity provider's UID.

Credentials never live here: the identity provider owns sign-in, this table
only mirrors profile fields and carries the site's boolean admin flag.
"""

from django.db import models


def default_preferences() -> dict:
    return {"email_notifications": True, "theme": "system"}


class UserAccount(models.Model):
    """Profile and admin flag for a signed-in identity-provider user."""

    THEME_CHOICES = ("light", "dark", "system")

    uid = models.CharField(primary_key=True, max_length=128)
    display_name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(null=True, blank=True)
    photo_url = models.URLField(max_length=500, null=True, blank=True)
    provider = models.CharField(max_length=50, default="unknown")
    is_admin = models.BooleanField(default=False)
    is_online = models.BooleanField(default=False)
    preferences = models.JSONField(default=default_preferences)
    created_at = models.DateTimeField(auto_now_add=True)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        """Newest users first."""
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.display_name or self.uid


__all__ = ["UserAccount", "default_preferences"]
