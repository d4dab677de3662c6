"""System checks for admin access configuration."""

from django.conf import settings
from django.core.checks import Error, Warning, register

from access_control.permissions import IsSiteAdmin


@register()
def admin_views_require_site_admin(app_configs, **kwargs):
    """Ensure every admin-only view is guarded by IsSiteAdmin.

    Only the views listed here are inspected; a new admin view has to be
    added to the list.
    """
    errors: list[Error] = []

    # Import here to avoid circular imports at module load time.
    from access_control.views import SetAdminView, UserListView
    from news.views import AdminNewsArticleViewSet
    from wiki.views import AdminWikiPageViewSet, WikiRevisionDetailView

    admin_views = [UserListView, SetAdminView, AdminWikiPageViewSet, WikiRevisionDetailView, AdminNewsArticleViewSet]

    for view_cls in admin_views:
        permission_classes = getattr(view_cls, "permission_classes", [])
        if not any(issubclass(permission, IsSiteAdmin) for permission in permission_classes):
            errors.append(
                Error(
                    f"{view_cls.__name__} is an admin view but is not guarded by IsSiteAdmin.",
                    obj=view_cls,
                    id="access_control.E001",
                )
            )

    return errors


@register()
def identity_provider_configured(app_configs, **kwargs):
    if settings.FIREBASE_PROJECT_ID:
        return []
    return [
        Warning(
            "FIREBASE_PROJECT_ID is not set; every session token will be rejected with 503.",
            hint="Set FIREBASE_PROJECT_ID to the identity provider project id.",
            id="access_control.W001",
        )
    ]
