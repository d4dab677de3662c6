"""Serializers for session sign-in and profile endpoints."""

from rest_framework import serializers

from .models import UserAccount


class SessionCreateSerializer(serializers.Serializer):
    """Payload posted by the browser right after identity-provider sign-in."""

    id_token = serializers.CharField()
    uid = serializers.CharField(max_length=128)

    @staticmethod
    def validate_id_token(value):
        """Reject values that are obviously not a JWT before verifying."""
        if not value.startswith("ey") or value.count(".") != 2:
            raise serializers.ValidationError("Invalid token format")
        return value


class PreferencesSerializer(serializers.Serializer):
    email_notifications = serializers.BooleanField(required=False)
    theme = serializers.ChoiceField(choices=UserAccount.THEME_CHOICES, required=False)


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only user record payload for responses."""

    class Meta:
        """Expose profile fields and the admin flag."""
        model = UserAccount
        fields = [
            "uid",
            "display_name",
            "email",
            "photo_url",
            "provider",
            "is_admin",
            "is_online",
            "preferences",
            "created_at",
            "last_updated",
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """Patchable fields for /api/auth/me updates."""

    preferences = PreferencesSerializer(required=False)

    class Meta:
        """Allow partial updates of display fields and preferences."""
        model = UserAccount
        fields = ["display_name", "photo_url", "preferences"]
        extra_kwargs = {
            "display_name": {"required": False, "allow_blank": False},
            "photo_url": {"required": False, "allow_null": True},
        }

    def validate(self, attrs):
        """Disallow attempts to change identity or authorization fields.

        Email is owned by the identity provider and the admin flag is only
        changed through the admin endpoint, so payloads carrying either are
        rejected instead of silently ignored.
        """
        forbidden = {"email", "is_admin", "uid"} & set(getattr(self, "initial_data", {}))
        if forbidden:
            raise serializers.ValidationError(
                f"Fields cannot be updated via this endpoint: {', '.join(sorted(forbidden))}"
            )
        return super().validate(attrs)


__all__ = [
    "PreferencesSerializer",
    "ProfileUpdateSerializer",
    "SessionCreateSerializer",
    "UserDetailSerializer",
]
