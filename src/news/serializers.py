"""Serializers for news articles."""

from rest_framework import serializers

from core.models import ContentStatus
from wiki.services import generate_slug
from .models import NewsArticle

EDITOR_FIELDS = ["created_at", "updated_at", "created_by_uid", "created_by_name", "last_updated_by_uid", "last_updated_by_name"]


class NewsArticleSerializer(serializers.ModelSerializer):
    slug = serializers.SlugField(max_length=255, required=False)

    class Meta:
        """Editor stamps and timestamps are maintained by the service, never by clients."""
        model = NewsArticle
        fields = [
            "id",
            "slug",
            "title",
            "excerpt",
            "content",
            "category",
            "image_url",
            "author",
            "featured",
            "status",
            *EDITOR_FIELDS,
        ]
        read_only_fields = ["id", *EDITOR_FIELDS]

    def _slug_taken(self, slug: str) -> bool:
        queryset = NewsArticle.objects.filter(slug=slug)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        return queryset.exists()

    def validate_slug(self, value):
        if self._slug_taken(value):
            raise serializers.ValidationError("A news article with this slug already exists.")
        return value

    def validate_status(self, value):
        if value == ContentStatus.ARCHIVED:
            raise serializers.ValidationError("Use the archive endpoint to archive an article.")
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get("slug") and attrs.get("title"):
            attrs["slug"] = generate_slug(attrs["title"])
            if self._slug_taken(attrs["slug"]):
                raise serializers.ValidationError({"slug": ["A news article with this slug already exists."]})
        return attrs


class NewsArticleSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = NewsArticle
        fields = ["id", "slug", "title", "excerpt", "category", "image_url", "author", "featured", "created_at"]
        read_only_fields = fields


__all__ = ["NewsArticleSerializer", "NewsArticleSummarySerializer"]
