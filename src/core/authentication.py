"""Authentication helpers that bridge the session middleware into DRF.

``SessionCookieMiddleware`` verifies the identity-provider cookie and sets
``request.user`` on the Django request. This authenticator surfaces that
principal to DRF so permission classes and ``request.user`` agree.
"""

from typing import Any, Optional, Tuple

from django.contrib.auth.models import AnonymousUser
from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Expose ``request._request.user`` (set by middleware) to DRF.

    No credential parsing happens here. Anonymous requests skip
    authentication, which makes DRF raise ``NotAuthenticated`` on protected
    views; the exception handler maps that to 401.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, None]]:
        django_request = getattr(request, "_request", None)
        if django_request is None:
            return None

        user = getattr(django_request, "user", None)
        if user is None or isinstance(user, AnonymousUser):
            return None

        if not getattr(user, "is_authenticated", False):
            return None

        return user, None

    def authenticate_header(self, request) -> str:
        return 'Cookie realm="api"'


__all__ = ["MiddlewareUserAuthentication"]
