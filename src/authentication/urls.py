"""URL patterns for authentication endpoints."""

from django.urls import path

from .views import CsrfTokenView, MeView, SessionView

urlpatterns = [
    path("csrf/", CsrfTokenView.as_view(), name="auth-csrf"),
    path("session/", SessionView.as_view(), name="auth-session"),
    path("me/", MeView.as_view(), name="auth-me"),
]
