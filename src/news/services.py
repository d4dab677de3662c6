"""Data-access helpers for news articles."""

import logging
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet
from rest_framework.exceptions import NotFound, ValidationError

from core.models import ContentStatus
from wiki.services import RESTORABLE_STATUSES, generate_slug, save_unique_slug
from .models import NewsArticle

logger = logging.getLogger(__name__)


class NewsService:
    """Create, edit, archive and query news articles; last write wins."""

    @staticmethod
    def create_article(data: dict[str, Any], editor) -> NewsArticle:
        data = dict(data)
        data["slug"] = data.get("slug") or generate_slug(data.get("title", ""))
        data.setdefault("status", ContentStatus.PUBLISHED)
        if not data.get("author"):
            data["author"] = getattr(editor, "display_name", "") or ""

        article = NewsArticle(**data)
        article.stamp_editor(editor, created=True)
        save_unique_slug(article, "news article")
        logger.info("uid=%s created news article id=%s slug=%s", editor.uid, article.pk, article.slug)
        return article

    @staticmethod
    def update_article(article: NewsArticle, changes: dict[str, Any], editor) -> NewsArticle:
        with transaction.atomic():
            article = NewsArticle.objects.select_for_update().get(pk=article.pk)
            for name, value in changes.items():
                setattr(article, name, value)
            article.stamp_editor(editor)
            save_unique_slug(article, "news article")
        logger.info("uid=%s updated news article id=%s", editor.uid, article.pk)
        return article

    @classmethod
    def archive_article(cls, article: NewsArticle, editor) -> NewsArticle:
        return cls.update_article(article, {"status": ContentStatus.ARCHIVED}, editor)

    @classmethod
    def unarchive_article(cls, article: NewsArticle, editor, status: str = ContentStatus.PUBLISHED) -> NewsArticle:
        if status not in RESTORABLE_STATUSES:
            raise ValidationError({"status": ["Articles can only be restored as published or draft."]})
        return cls.update_article(article, {"status": status}, editor)

    @staticmethod
    def get_article(article_id) -> NewsArticle:
        try:
            return NewsArticle.objects.get(pk=article_id)
        except (NewsArticle.DoesNotExist, DjangoValidationError):
            raise NotFound("News article not found")

    @staticmethod
    def get_published_article_by_slug(slug: str) -> NewsArticle:
        try:
            return NewsArticle.objects.get(slug=slug, status=ContentStatus.PUBLISHED)
        except NewsArticle.DoesNotExist:
            raise NotFound("News article not found")

    @staticmethod
    def list_articles(
        include_archived: bool = False, category: str | None = None, status: str | None = None
    ) -> QuerySet:
        queryset = NewsArticle.objects.all()
        if status:
            queryset = queryset.filter(status=status)
        elif not include_archived:
            queryset = queryset.exclude(status=ContentStatus.ARCHIVED)
        if category:
            queryset = queryset.filter(category=category)
        return queryset

    @staticmethod
    def list_published_articles(category: str | None = None, featured: bool | None = None) -> QuerySet:
        queryset = NewsArticle.objects.filter(status=ContentStatus.PUBLISHED)
        if category:
            queryset = queryset.filter(category=category)
        if featured is not None:
            queryset = queryset.filter(featured=featured)
        return queryset


__all__ = ["NewsService"]
