"""Wiki pages and their immutable revision history."""

import uuid

from django.db import models

from core.models import EditorialContent
from .categories import CATEGORY_CHOICES


class WikiPage(EditorialContent):
    """A wiki article; edits append WikiRevision rows."""

    description = models.TextField(blank=True)
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    subcategory = models.CharField(max_length=100, blank=True)
    gallery_images = models.JSONField(default=list, blank=True)
    related_pages = models.JSONField(default=list, blank=True)
    tags = models.JSONField(default=list, blank=True)

    class Meta(EditorialContent.Meta):
        ordering = ["-updated_at"]


class WikiRevision(models.Model):
    """Snapshot of a wiki page's fields after a create, edit, archive or restore.

    Rows are never updated. ``number`` counts revisions per page from 1.
    Pages are archived rather than deleted, so PROTECT keeps every revision
    attached to its page.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    page = models.ForeignKey(WikiPage, on_delete=models.PROTECT, related_name="revisions")
    number = models.PositiveIntegerField()
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    content = models.TextField(blank=True)
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    subcategory = models.CharField(max_length=100, blank=True)
    tags = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=16)
    created_at = models.DateTimeField(auto_now_add=True)
    user_uid = models.CharField(max_length=128)
    user_display_name = models.CharField(max_length=150, blank=True)
    change_description = models.CharField(max_length=500, blank=True)

    class Meta:
        ordering = ["-created_at", "-number"]
        constraints = [
            models.UniqueConstraint(fields=["page", "number"], name="unique_revision_number_per_page"),
        ]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.page_id} r{self.number}"


__all__ = ["WikiPage", "WikiRevision"]
