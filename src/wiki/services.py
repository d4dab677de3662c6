"""Data-access helpers for wiki pages and revisions."""

import logging
from typing import Any, Iterable

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, Max, QuerySet
from django.utils.text import slugify
from rest_framework.exceptions import NotFound, ValidationError

from core.models import ContentStatus
from .models import WikiPage, WikiRevision

logger = logging.getLogger(__name__)

RESTORABLE_STATUSES = (ContentStatus.PUBLISHED, ContentStatus.DRAFT)


def generate_slug(title: str) -> str:
    """Lowercase, drop punctuation, hyphenate whitespace and collapse repeats."""

    slug = slugify(title)
    if not slug:
        raise ValidationError({"slug": ["Unable to derive a slug from the title."]})
    return slug


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Strip tags and drop blanks and case-insensitive duplicates, keeping order."""

    seen: set[str] = set()
    result: list[str] = []
    for tag in tags or []:
        tag = str(tag).strip()
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            result.append(tag)
    return result


def save_unique_slug(instance, noun: str) -> None:
    """Save ``instance``, reporting a lost race on the unique slug as a 400."""

    try:
        with transaction.atomic():
            instance.save()
    except IntegrityError:
        raise ValidationError({"slug": [f"A {noun} with this slug already exists."]})


def _has_tag(page: WikiPage, tag: str) -> bool:
    wanted = tag.strip().casefold()
    return any(wanted == str(t).casefold() for t in page.tags or [])


def _matches(page: WikiPage, needle: str) -> bool:
    fields = (page.title, page.description, page.content)
    if any(needle in (value or "").casefold() for value in fields):
        return True
    return any(needle in str(t).casefold() for t in page.tags or [])


class WikiService:
    """Create, edit, archive and query wiki pages.

    Every write goes through this class so each change to a page appends
    exactly one revision snapshot in the same transaction.
    """

    @classmethod
    def create_page(cls, data: dict[str, Any], editor) -> WikiPage:
        data = dict(data)
        data["slug"] = data.get("slug") or generate_slug(data.get("title", ""))
        data["tags"] = normalize_tags(data.get("tags"))
        data.setdefault("status", ContentStatus.PUBLISHED)

        with transaction.atomic():
            page = WikiPage(**data)
            page.stamp_editor(editor, created=True)
            save_unique_slug(page, "wiki page")
            cls._record_revision(page, editor, "Initial creation")

        logger.info("uid=%s created wiki page id=%s slug=%s", editor.uid, page.pk, page.slug)
        return page

    @classmethod
    def update_page(
        cls, page: WikiPage, changes: dict[str, Any], editor, change_description: str | None = None
    ) -> WikiPage:
        """Apply ``changes`` and append one revision; last write wins."""

        changes = dict(changes)
        if "tags" in changes:
            changes["tags"] = normalize_tags(changes["tags"])

        with transaction.atomic():
            page = WikiPage.objects.select_for_update().get(pk=page.pk)
            for name, value in changes.items():
                setattr(page, name, value)
            page.stamp_editor(editor)
            save_unique_slug(page, "wiki page")
            cls._record_revision(page, editor, change_description or "Updated page")

        logger.info("uid=%s updated wiki page id=%s", editor.uid, page.pk)
        return page

    @classmethod
    def archive_page(cls, page: WikiPage, editor) -> WikiPage:
        return cls._set_status(page, ContentStatus.ARCHIVED, editor, "Page archived")

    @classmethod
    def unarchive_page(cls, page: WikiPage, editor, status: str = ContentStatus.PUBLISHED) -> WikiPage:
        if status not in RESTORABLE_STATUSES:
            raise ValidationError({"status": ["Pages can only be restored as published or draft."]})
        return cls._set_status(page, status, editor, "Page restored")

    @classmethod
    def _set_status(cls, page: WikiPage, status: str, editor, description: str) -> WikiPage:
        with transaction.atomic():
            page = WikiPage.objects.select_for_update().get(pk=page.pk)
            page.status = status
            page.stamp_editor(editor)
            page.save()
            cls._record_revision(page, editor, description)

        logger.info("uid=%s set wiki page id=%s status=%s", editor.uid, page.pk, status)
        return page

    @staticmethod
    def _record_revision(page: WikiPage, editor, description: str) -> WikiRevision:
        last_number = page.revisions.aggregate(last=Max("number"))["last"] or 0
        return WikiRevision.objects.create(
            page=page,
            number=last_number + 1,
            title=page.title,
            description=page.description,
            content=page.content,
            category=page.category,
            subcategory=page.subcategory,
            tags=list(page.tags),
            status=page.status,
            user_uid=editor.uid,
            user_display_name=page.last_updated_by_name,
            change_description=description,
        )

    @staticmethod
    def get_page(page_id) -> WikiPage:
        try:
            return WikiPage.objects.get(pk=page_id)
        except (WikiPage.DoesNotExist, DjangoValidationError):
            raise NotFound("Wiki page not found")

    @staticmethod
    def get_published_page_by_slug(slug: str) -> WikiPage:
        try:
            return WikiPage.objects.get(slug=slug, status=ContentStatus.PUBLISHED)
        except WikiPage.DoesNotExist:
            raise NotFound("Wiki page not found")

    @staticmethod
    def list_pages(include_archived: bool = False, category: str | None = None, status: str | None = None) -> QuerySet:
        """Admin listing; archived pages are hidden unless asked for or filtered on."""

        queryset = WikiPage.objects.all()
        if status:
            queryset = queryset.filter(status=status)
        elif not include_archived:
            queryset = queryset.exclude(status=ContentStatus.ARCHIVED)
        if category:
            queryset = queryset.filter(category=category)
        return queryset

    @staticmethod
    def list_published_pages(category: str | None = None, tag: str | None = None):
        """Published pages, newest edit first.

        Returns a queryset, or a list when filtering by tag (tags are matched
        case-insensitively against the stored list).
        """

        queryset = WikiPage.objects.filter(status=ContentStatus.PUBLISHED)
        if category:
            queryset = queryset.filter(category=category)
        if not tag:
            return queryset
        return [page for page in queryset if _has_tag(page, tag)]

    @staticmethod
    def search_pages(term: str, category: str | None = None, tag: str | None = None) -> list[WikiPage]:
        """Published pages whose title, description, content or one of whose tags contain ``term``.

        Matching is case-insensitive and done on the stored values, so tags are
        compared element by element rather than through their JSON encoding.
        """

        needle = term.strip().casefold()
        pages = WikiService.list_published_pages(category=category, tag=tag)
        if not needle:
            return list(pages)
        return [page for page in pages if _matches(page, needle)]

    @staticmethod
    def list_revisions(page: WikiPage) -> QuerySet:
        return page.revisions.all()

    @staticmethod
    def get_revision(revision_id) -> WikiRevision:
        try:
            return WikiRevision.objects.select_related("page").get(pk=revision_id)
        except (WikiRevision.DoesNotExist, DjangoValidationError):
            raise NotFound("Revision not found")

    @staticmethod
    def category_counts() -> dict[str, int]:
        """Number of published pages per category id."""

        rows = (
            WikiPage.objects.filter(status=ContentStatus.PUBLISHED)
            .order_by()
            .values("category")
            .annotate(total=Count("id"))
        )
        return {row["category"]: row["total"] for row in rows}


__all__ = ["WikiService", "generate_slug", "normalize_tags"]
