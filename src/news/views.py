"""Public news endpoints and the admin news editor."""

from typing import Any

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action

from access_control.permissions import IsSiteAdmin
from core.models import ContentStatus
from core.query import query_choice, query_flag
from core.response import BaseReadOnlyViewSet, BaseViewSet, api_response
from core.serializers import UnarchiveSerializer
from .models import NewsArticle, NewsCategory
from .serializers import NewsArticleSerializer, NewsArticleSummarySerializer
from .services import NewsService


class PublicNewsArticleViewSet(BaseReadOnlyViewSet):
    permission_classes: list[Any] = []
    lookup_field = "slug"

    def get_queryset(self):
        return NewsService.list_published_articles()

    def get_serializer_class(self):
        if self.action == "list":
            return NewsArticleSummarySerializer
        return NewsArticleSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter("category", str, enum=NewsCategory.values),
            OpenApiParameter("featured", bool),
        ]
    )
    def list(self, request, *args, **kwargs):
        """Published articles, newest first."""
        articles = NewsService.list_published_articles(
            category=query_choice(request, "category", NewsCategory.values),
            featured=query_flag(request, "featured"),
        )
        return api_response(self.get_serializer(articles, many=True).data)

    def retrieve(self, request, *args, **kwargs):
        article = NewsService.get_published_article_by_slug(kwargs[self.lookup_field])
        return api_response(self.get_serializer(article).data)


class AdminNewsArticleViewSet(BaseViewSet):
    """Admin editor; DELETE archives an article instead of removing it."""

    serializer_class = NewsArticleSerializer
    permission_classes = [IsSiteAdmin]
    queryset = NewsArticle.objects.all()
    lookup_value_regex = "[0-9a-fA-F-]{36}"

    def get_queryset(self):
        if self.action != "list":
            return NewsArticle.objects.all()
        request = self.request
        return NewsService.list_articles(
            include_archived=bool(query_flag(request, "include_archived")),
            category=query_choice(request, "category", NewsCategory.values),
            status=query_choice(request, "status", ContentStatus.values),
        )

    def perform_create(self, serializer):
        serializer.instance = NewsService.create_article(serializer.validated_data, editor=self.request.user)

    def perform_update(self, serializer):
        serializer.instance = NewsService.update_article(
            serializer.instance, serializer.validated_data, editor=self.request.user
        )

    def destroy(self, request, *args, **kwargs):
        """Archive the article and return its new state."""
        article = NewsService.archive_article(self.get_object(), request.user)
        return api_response(self.get_serializer(article).data)

    @extend_schema(request=UnarchiveSerializer, responses=NewsArticleSerializer)
    @action(detail=True, methods=["post"])
    def unarchive(self, request, pk=None):
        serializer = UnarchiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = NewsService.unarchive_article(
            self.get_object(), request.user, status=serializer.validated_data["status"]
        )
        return api_response(NewsArticleSerializer(article).data)


__all__ = ["AdminNewsArticleViewSet", "PublicNewsArticleViewSet"]
