"""News articles."""

from django.db import models

from core.models import EditorialContent


class NewsCategory(models.TextChoices):
    NEWS = "news", "News"
    FEATURES = "features", "Features"
    GUIDES = "guides", "Guides"


class NewsArticle(EditorialContent):
    excerpt = models.TextField(blank=True)
    category = models.CharField(max_length=16, choices=NewsCategory.choices, default=NewsCategory.NEWS)
    author = models.CharField(max_length=150, blank=True)

    class Meta(EditorialContent.Meta):
        ordering = ["-created_at"]


__all__ = ["NewsArticle", "NewsCategory"]
