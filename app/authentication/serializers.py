"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations)
- Registration and login input
- Profile updates

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - services.py: AuthService that performs the writes

Security:
    - Password fields are write-only
    - username and email are never writable after registration
"""

from rest_framework import serializers

from authentication.models import User, UserStatus


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model (read operations).

    Used wherever a user appears in an API response: login, profile,
    online list, and nested in memberships and conversations.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "display_name",
            "avatar_url",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user representation for nesting inside chat payloads."""

    class Meta:
        model = User
        fields = ["id", "username", "display_name", "avatar_url", "status"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """Input for account registration."""

    username = serializers.CharField(min_length=3, max_length=30)
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(
        min_length=6,
        max_length=128,
        write_only=True,
        style={"input_type": "password"},
    )
    display_name = serializers.CharField(
        max_length=100,
        required=False,
        allow_null=True,
        allow_blank=False,
    )


class LoginSerializer(serializers.Serializer):
    """Input for email/password login."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class LoginResponseSerializer(serializers.Serializer):
    """Shape of the login response, for the OpenAPI schema."""

    user = UserSerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Input for partial profile updates.

    Used with partial=True so validated_data holds only the keys the client
    sent. An explicit null clears display_name or avatar_url.
    """

    display_name = serializers.CharField(
        max_length=100,
        required=False,
        allow_null=True,
    )
    avatar_url = serializers.URLField(
        max_length=500,
        required=False,
        allow_null=True,
    )
    status = serializers.ChoiceField(
        choices=UserStatus.choices,
        required=False,
    )
