"""Routing for public news endpoints."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import PublicNewsArticleViewSet

router = SimpleRouter()
router.register(r"articles", PublicNewsArticleViewSet, basename="news-article")

urlpatterns = [
    path("", include(router.urls)),
]
