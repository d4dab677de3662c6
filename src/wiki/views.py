"""Public wiki reading endpoints and the admin wiki editor."""

from typing import Any

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action

from access_control.permissions import IsSiteAdmin
from core.models import ContentStatus
from core.query import query_choice, query_flag
from core.response import BaseAPIView, BaseReadOnlyViewSet, BaseViewSet, api_response
from core.serializers import UnarchiveSerializer
from .categories import CATEGORY_CHOICES, WIKI_CATEGORIES
from .models import WikiPage
from .serializers import (
    WikiCategorySerializer,
    WikiPageSerializer,
    WikiPageSummarySerializer,
    WikiRevisionSerializer,
)
from .services import WikiService

CATEGORY_IDS = [value for value, _ in CATEGORY_CHOICES]
UUID_LOOKUP = "[0-9a-fA-F-]{36}"


class WikiCategoryListView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    @extend_schema(responses=WikiCategorySerializer(many=True))
    def get(self, request):
        """List wiki categories with their number of published pages."""
        counts = WikiService.category_counts()
        categories = [{**category, "page_count": counts.get(category["id"], 0)} for category in WIKI_CATEGORIES]
        return api_response(WikiCategorySerializer(categories, many=True).data)


class PublicWikiPageViewSet(BaseReadOnlyViewSet):
    """Published pages only, looked up by slug."""

    permission_classes: list[Any] = []
    lookup_field = "slug"

    def get_queryset(self):
        return WikiService.list_published_pages()

    def get_serializer_class(self):
        if self.action == "list":
            return WikiPageSummarySerializer
        return WikiPageSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter("category", str, enum=CATEGORY_IDS),
            OpenApiParameter("tag", str),
            OpenApiParameter("q", str, description="Case-insensitive search term"),
        ]
    )
    def list(self, request, *args, **kwargs):
        category = query_choice(request, "category", CATEGORY_IDS)
        term = request.query_params.get("q")
        tag = request.query_params.get("tag")
        if term:
            pages = WikiService.search_pages(term, category=category, tag=tag)
        else:
            pages = WikiService.list_published_pages(category=category, tag=tag)
        return api_response(self.get_serializer(pages, many=True).data)

    def retrieve(self, request, *args, **kwargs):
        page = WikiService.get_published_page_by_slug(kwargs[self.lookup_field])
        return api_response(self.get_serializer(page).data)


class AdminWikiPageViewSet(BaseViewSet):
    """Admin editor; DELETE archives a page instead of removing it."""

    serializer_class = WikiPageSerializer
    permission_classes = [IsSiteAdmin]
    queryset = WikiPage.objects.all()
    lookup_value_regex = UUID_LOOKUP

    def get_queryset(self):
        if self.action != "list":
            return WikiPage.objects.all()
        request = self.request
        return WikiService.list_pages(
            include_archived=bool(query_flag(request, "include_archived")),
            category=query_choice(request, "category", CATEGORY_IDS),
            status=query_choice(request, "status", ContentStatus.values),
        )

    def perform_create(self, serializer):
        data = dict(serializer.validated_data)
        data.pop("change_description", None)
        serializer.instance = WikiService.create_page(data, editor=self.request.user)

    def perform_update(self, serializer):
        data = dict(serializer.validated_data)
        change_description = data.pop("change_description", None)
        serializer.instance = WikiService.update_page(
            serializer.instance, data, editor=self.request.user, change_description=change_description
        )

    def destroy(self, request, *args, **kwargs):
        """Archive the page and return its new state."""
        page = WikiService.archive_page(self.get_object(), request.user)
        return api_response(self.get_serializer(page).data)

    @extend_schema(request=UnarchiveSerializer, responses=WikiPageSerializer)
    @action(detail=True, methods=["post"])
    def unarchive(self, request, pk=None):
        """Restore an archived page as published (default) or draft."""
        serializer = UnarchiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        page = WikiService.unarchive_page(self.get_object(), request.user, status=serializer.validated_data["status"])
        return api_response(WikiPageSerializer(page).data)

    @extend_schema(responses=WikiRevisionSerializer(many=True))
    @action(detail=True, methods=["get"])
    def revisions(self, request, pk=None):
        """List the page's revisions, newest first."""
        revisions = WikiService.list_revisions(self.get_object())
        return api_response(WikiRevisionSerializer(revisions, many=True).data)


class WikiRevisionDetailView(BaseAPIView):
    permission_classes = [IsSiteAdmin]

    # noinspection PyMethodMayBeStatic
    @extend_schema(responses=WikiRevisionSerializer)
    def get(self, request, revision_id):
        """Return a single revision snapshot."""
        return api_response(WikiRevisionSerializer(WikiService.get_revision(revision_id)).data)


__all__ = [
    "AdminWikiPageViewSet",
    "PublicWikiPageViewSet",
    "WikiCategoryListView",
    "WikiRevisionDetailView",
]
