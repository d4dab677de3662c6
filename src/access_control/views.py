"""Admin endpoints: admin-status check, user listing, and admin-flag toggle."""

import logging

from django.conf import settings
from drf_spectacular.utils import extend_schema

from authentication.cookies import clear_admin_session_cookie, set_admin_session_cookie, set_session_cookie
from authentication.serializers import UserDetailSerializer
from authentication.services import UserService
from core.response import BaseAPIView, api_response
from .permissions import IsSignedIn, IsSiteAdmin
from .serializers import AdminStatusSerializer, SetAdminSerializer

logger = logging.getLogger(__name__)


class AdminCheckView(BaseAPIView):
    """Report whether the current session belongs to an admin.

    Response time is padded by ``core.middleware.MinimumLatencyMiddleware``.
    """

    permission_classes = [IsSignedIn]

    @extend_schema(responses=AdminStatusSerializer)
    def get(self, request):
        """Return ``{uid, is_admin}`` and refresh or clear the admin-session cookie."""
        user = request.user
        response = api_response(AdminStatusSerializer({"uid": user.uid, "is_admin": user.is_admin}).data)
        if user.is_admin:
            set_admin_session_cookie(response)
            # Keep both cookies on the same expiry.
            set_session_cookie(response, request.COOKIES[settings.IDENTITY_SESSION_COOKIE])
        else:
            clear_admin_session_cookie(response)
        return response


class UserListView(BaseAPIView):
    permission_classes = [IsSiteAdmin]

    # noinspection PyMethodMayBeStatic
    @extend_schema(responses=UserDetailSerializer(many=True))
    def get(self, request):
        """List all user records, newest first."""
        return api_response(UserDetailSerializer(UserService.list_users(), many=True).data)


class SetAdminView(BaseAPIView):
    permission_classes = [IsSiteAdmin]

    # noinspection PyMethodMayBeStatic
    @extend_schema(request=SetAdminSerializer, responses=UserDetailSerializer)
    def post(self, request):
        """Set another user's admin flag (idempotent)."""
        serializer = SetAdminSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target_uid = serializer.validated_data["target_uid"]
        is_admin = serializer.validated_data["is_admin"]
        account = UserService.set_admin(target_uid, is_admin)
        logger.info("uid=%s set admin=%s for uid=%s", request.user.uid, is_admin, target_uid)
        return api_response(UserDetailSerializer(account).data)


__all__ = ["AdminCheckView", "SetAdminView", "UserListView"]
