"""The `{data, errors}` envelope shared by views, the exception handler and middleware."""

from typing import Any, Iterable

from django.http import JsonResponse
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import ModelViewSet, ReadOnlyModelViewSet


def envelope(data: Any = None, errors: Iterable[Any] = ()) -> dict[str, Any]:
    return {"data": data, "errors": list(errors)}


def api_response(data: Any, status: int = 200, errors: Iterable[Any] = ()) -> Response:
    """DRF response carrying ``data``; ``errors`` is empty unless a partial failure is reported."""

    return Response(envelope(data, errors), status=status)


def error_response(message: str, status: int) -> JsonResponse:
    """Plain Django response for rejections that happen before DRF runs (middleware)."""

    return JsonResponse(envelope(None, [message]), status=status)


def _is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and payload.keys() >= {"data", "errors"}


class EnvelopeMixin:
    """Wraps a successful payload that a generic view returned bare.

    Error bodies are shaped by ``core.exceptions.custom_exception_handler``
    and 204s carry no body, so both pass through untouched.
    """

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        if hasattr(response, "data") and response.status_code and response.status_code < 400:
            if response.status_code != 204 and not _is_enveloped(response.data):
                response.data = envelope(response.data)
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    pass


class BaseViewSet(EnvelopeMixin, ModelViewSet):
    """Admin CRUD viewsets (wiki pages, news articles)."""


class BaseReadOnlyViewSet(EnvelopeMixin, ReadOnlyModelViewSet):
    """Public listings of published content."""
