"""Routing for admin account endpoints."""

from django.urls import path

from .views import AdminCheckView, SetAdminView, UserListView

urlpatterns = [
    path("check/", AdminCheckView.as_view(), name="admin-check"),
    path("users/", UserListView.as_view(), name="admin-users"),
    path("set-admin/", SetAdminView.as_view(), name="admin-set-admin"),
]
