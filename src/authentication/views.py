"""Authentication endpoints: CSRF token, session sign-in/out, and profile."""

import logging
from datetime import timedelta
from typing import Any

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, NotFound, PermissionDenied
from rest_framework.response import Response

from access_control.permissions import IsSignedIn
from access_control.security import generate_csrf_token
from core.response import BaseAPIView, api_response
from .cookies import clear_session_cookies, set_csrf_cookie, set_session_cookie
from .serializers import ProfileUpdateSerializer, SessionCreateSerializer, UserDetailSerializer
from .services import SessionVerifier, UserService

logger = logging.getLogger(__name__)


class CsrfTokenView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Issue a fresh double-submit token in the csrf-token cookie."""
        token = generate_csrf_token()
        response = api_response({"csrf_token": token})
        set_csrf_cookie(response, token)
        return response


class SessionView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def post(self, request):
        """Verify a fresh ID token, sync the user record, set the session cookie."""
        serializer = SessionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        id_token = serializer.validated_data["id_token"]

        claims = SessionVerifier.verify(id_token)
        if claims["uid"] != serializer.validated_data["uid"]:
            logger.warning("Session rejected: token uid does not match request uid")
            raise PermissionDenied("Token UID mismatch")

        account, created = UserService.sync_from_claims(claims)
        expires = timezone.now() + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)
        response = api_response(
            {
                "user": UserDetailSerializer(account).data,
                "created": created,
                "expires": expires.isoformat(),
            }
        )
        set_session_cookie(response, id_token)
        logger.info("Session started for uid=%s", account.uid)
        return response

    # noinspection PyMethodMayBeStatic
    def delete(self, request):
        """Sign out: mark the user offline and clear the session cookies."""
        if request.user.is_authenticated:
            UserService.set_online(request.user.uid, False)
            logger.info("Session ended for uid=%s", request.user.uid)
        # 204 responses must not include a body.
        response = Response(status=status.HTTP_204_NO_CONTENT)
        clear_session_cookies(response)
        return response


class MeView(BaseAPIView):
    permission_classes = [IsSignedIn]

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        """Return the current user's record."""
        return api_response(UserDetailSerializer(_get_account(request)).data)

    # noinspection PyMethodMayBeStatic
    def patch(self, request):
        """Update display name, photo, or preferences for the current user."""
        account = _get_account(request)
        serializer = ProfileUpdateSerializer(account, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        account = UserService.update_profile(account, dict(serializer.validated_data))
        return api_response(UserDetailSerializer(account).data)


def _get_account(request):
    """Return the user record behind the session, or raise 404."""
    user = request.user
    if not getattr(user, "is_authenticated", False):
        raise NotAuthenticated()
    if user.account is None:
        raise NotFound("User record not found")
    return user.account


__all__ = ["CsrfTokenView", "MeView", "SessionView"]
