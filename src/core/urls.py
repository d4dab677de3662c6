"""Root URL configuration for the fan site API."""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

from .views import HealthView

urlpatterns = [
    path("api/health/", HealthView.as_view(), name="health"),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/auth/", include("authentication.urls")),
    path("api/admin/wiki/", include("wiki.admin_urls")),
    path("api/admin/news/", include("news.admin_urls")),
    path("api/admin/", include("access_control.urls")),
    path("api/wiki/", include("wiki.urls")),
    path("api/news/", include("news.urls")),
]
