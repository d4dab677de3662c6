"""Routing for the admin wiki editor."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import AdminWikiPageViewSet, WikiRevisionDetailView

router = SimpleRouter()
router.register(r"", AdminWikiPageViewSet, basename="admin-wiki-page")

urlpatterns = [
    path("revisions/<uuid:revision_id>/", WikiRevisionDetailView.as_view(), name="admin-wiki-revision"),
    path("", include(router.urls)),
]
