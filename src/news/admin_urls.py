"""Routing for the admin news editor."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import AdminNewsArticleViewSet

router = SimpleRouter()
router.register(r"", AdminNewsArticleViewSet, basename="admin-news-article")

urlpatterns = [
    path("", include(router.urls)),
]
