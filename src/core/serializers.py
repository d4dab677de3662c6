"""Serializers shared by the content apps."""

from rest_framework import serializers

from .models import ContentStatus


class UnarchiveSerializer(serializers.Serializer):
    """Body of an unarchive request; restored content is published unless asked otherwise."""

    status = serializers.ChoiceField(
        choices=[ContentStatus.PUBLISHED, ContentStatus.DRAFT], default=ContentStatus.PUBLISHED
    )


__all__ = ["UnarchiveSerializer"]
