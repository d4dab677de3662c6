"""Serializers for admin-flag management."""

from rest_framework import serializers


class SetAdminSerializer(serializers.Serializer):
    """Target user and the admin flag value to store."""

    target_uid = serializers.CharField(max_length=128)
    is_admin = serializers.BooleanField()

    def validate(self, attrs):
        """Require a real JSON boolean; strings like "true" are rejected."""
        if not isinstance(self.initial_data.get("is_admin"), bool):
            raise serializers.ValidationError("is_admin must be a boolean")
        return attrs


class AdminStatusSerializer(serializers.Serializer):
    uid = serializers.CharField()
    is_admin = serializers.BooleanField()


__all__ = ["AdminStatusSerializer", "SetAdminSerializer"]
