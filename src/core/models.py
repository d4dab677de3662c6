"""Abstract base for editorial content (wiki pages, news articles)."""

import uuid

from django.db import models


class ContentStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"
    ARCHIVED = "archived", "Archived"


class EditorialContent(models.Model):
    """Fields shared by every editable, archivable content record.

    Records are archived instead of deleted; ``created_by_*`` and
    ``last_updated_by_*`` copy the editor's uid and display name at write time.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=255, unique=True)
    title = models.CharField(max_length=255)
    content = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)
    featured = models.BooleanField(default=False)
    status = models.CharField(max_length=16, choices=ContentStatus.choices, default=ContentStatus.PUBLISHED)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by_uid = models.CharField(max_length=128)
    created_by_name = models.CharField(max_length=150, blank=True)
    last_updated_by_uid = models.CharField(max_length=128)
    last_updated_by_name = models.CharField(max_length=150, blank=True)

    class Meta:
        abstract = True
        ordering = ["-updated_at"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title

    def stamp_editor(self, editor, created: bool = False) -> None:
        """Record ``editor`` as the last (and, on create, first) author."""
        name = getattr(editor, "display_name", "") or "Unknown User"
        self.last_updated_by_uid = editor.uid
        self.last_updated_by_name = name
        if created:
            self.created_by_uid = editor.uid
            self.created_by_name = name


__all__ = ["ContentStatus", "EditorialContent"]
