"""Routing for public wiki endpoints."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import PublicWikiPageViewSet, WikiCategoryListView

router = SimpleRouter()
router.register(r"pages", PublicWikiPageViewSet, basename="wiki-page")

urlpatterns = [
    path("categories/", WikiCategoryListView.as_view(), name="wiki-categories"),
    path("", include(router.urls)),
]
