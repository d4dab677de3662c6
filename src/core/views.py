"""Operational endpoints."""

import logging
from typing import Any

import redis
from django.db import DatabaseError, connection
from rest_framework import status

from .redis_client import get_redis_client
from .response import BaseAPIView, api_response

logger = logging.getLogger(__name__)


class HealthView(BaseAPIView):
    """Report database and Redis connectivity; 503 when either is down."""

    permission_classes: list[Any] = []
    authentication_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    def get(self, request):
        checks = {"database": "ok", "redis": "ok"}
        try:
            connection.ensure_connection()
        except DatabaseError:
            logger.exception("Health check: database unreachable")
            checks["database"] = "unavailable"
        try:
            get_redis_client().ping()
        except redis.RedisError:
            logger.exception("Health check: redis unreachable")
            checks["redis"] = "unavailable"

        if all(value == "ok" for value in checks.values()):
            return api_response(checks)
        return api_response(checks, status=status.HTTP_503_SERVICE_UNAVAILABLE, errors=["Service unavailable."])


__all__ = ["HealthView"]
