"""Serializers for wiki pages, revisions and categories."""

from rest_framework import serializers

from core.models import ContentStatus
from .models import WikiPage, WikiRevision
from .services import generate_slug, normalize_tags

EDITOR_FIELDS = ["created_at", "updated_at", "created_by_uid", "created_by_name", "last_updated_by_uid", "last_updated_by_name"]


class WikiPageSerializer(serializers.ModelSerializer):
    """Full page representation used by detail views and the admin editor.

    Status can be set to ``draft`` or ``published`` here; archiving goes
    through the archive and unarchive endpoints so it is always recorded.
    """

    slug = serializers.SlugField(max_length=255, required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=64, allow_blank=True), required=False)
    gallery_images = serializers.ListField(child=serializers.URLField(max_length=500), required=False)
    related_pages = serializers.ListField(child=serializers.SlugField(max_length=255), required=False)
    change_description = serializers.CharField(max_length=500, required=False, allow_blank=True, write_only=True)

    class Meta:
        model = WikiPage
        fields = [
            "id",
            "slug",
            "title",
            "description",
            "content",
            "category",
            "subcategory",
            "image_url",
            "gallery_images",
            "related_pages",
            "tags",
            "featured",
            "status",
            "change_description",
            *EDITOR_FIELDS,
        ]
        read_only_fields = ["id", *EDITOR_FIELDS]

    def _slug_taken(self, slug: str) -> bool:
        queryset = WikiPage.objects.filter(slug=slug)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        return queryset.exists()

    def validate_slug(self, value):
        if self._slug_taken(value):
            raise serializers.ValidationError("A wiki page with this slug already exists.")
        return value

    def validate_status(self, value):
        if value == ContentStatus.ARCHIVED:
            raise serializers.ValidationError("Use the archive endpoint to archive a page.")
        return value

    def validate_tags(self, value):
        return normalize_tags(value)

    def validate(self, attrs):
        # A page created without a slug takes one from its title; check that one too.
        if self.instance is None and not attrs.get("slug") and attrs.get("title"):
            attrs["slug"] = generate_slug(attrs["title"])
            if self._slug_taken(attrs["slug"]):
                raise serializers.ValidationError({"slug": ["A wiki page with this slug already exists."]})
        return attrs


class WikiPageSummarySerializer(serializers.ModelSerializer):
    """Listing representation without the page body."""

    class Meta:
        model = WikiPage
        fields = [
            "id",
            "slug",
            "title",
            "description",
            "category",
            "subcategory",
            "image_url",
            "tags",
            "featured",
            "updated_at",
        ]
        read_only_fields = fields


class WikiRevisionSerializer(serializers.ModelSerializer):
    page_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = WikiRevision
        fields = [
            "id",
            "page_id",
            "number",
            "title",
            "description",
            "content",
            "category",
            "subcategory",
            "tags",
            "status",
            "created_at",
            "user_uid",
            "user_display_name",
            "change_description",
        ]
        read_only_fields = fields


class WikiCategorySerializer(serializers.Serializer):
    id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    subcategories = serializers.ListField(child=serializers.CharField())
    page_count = serializers.IntegerField()


__all__ = [
    "WikiCategorySerializer",
    "WikiPageSerializer",
    "WikiPageSummarySerializer",
    "WikiRevisionSerializer",
]
