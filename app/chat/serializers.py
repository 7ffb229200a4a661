"""
Serializers for chat API.

This module provides serializers for the chat system:
- Channel serializers (read, create, update, list query)
- Membership serializers (read, join)
- Direct conversation serializers (read, create)
- Message serializers (read, create, update, list and search queries)
- File attachment serializers (read, create)

Design Decisions:
    - Read and write serializers are separate for clarity
    - Write serializers only validate shape; authorization and existence
      checks belong to the services
    - Users are nested with the compact UserSummarySerializer
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from chat.constants import (
    ATTACHMENT_CONFIG,
    CHANNEL_CONFIG,
    MESSAGE_CONFIG,
    SEARCH_CONFIG,
)
from chat.models import (
    Channel,
    ChannelMembership,
    DirectMessageConversation,
    FileAttachment,
    MemberRole,
    Message,
    MessageType,
)


# =============================================================================
# Channel Serializers
# =============================================================================


class ChannelSerializer(serializers.ModelSerializer):
    """Read serializer for channels."""

    created_by = serializers.IntegerField(source="created_by_id", read_only=True)

    class Meta:
        model = Channel
        fields = [
            "id",
            "name",
            "description",
            "is_private",
            "created_by",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ChannelCreateSerializer(serializers.Serializer):
    """Serializer for creating channels. The creator becomes owner."""

    name = serializers.CharField(
        min_length=CHANNEL_CONFIG.MIN_NAME_LENGTH,
        max_length=CHANNEL_CONFIG.MAX_NAME_LENGTH,
        help_text="Channel name (1-50 characters)",
    )
    description = serializers.CharField(
        max_length=CHANNEL_CONFIG.MAX_DESCRIPTION_LENGTH,
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None,
    )
    is_private = serializers.BooleanField(default=False)


class ChannelUpdateSerializer(serializers.Serializer):
    """
    Serializer for partial channel updates.

    Used with partial=True so only submitted fields reach the service.
    """

    name = serializers.CharField(
        min_length=CHANNEL_CONFIG.MIN_NAME_LENGTH,
        max_length=CHANNEL_CONFIG.MAX_NAME_LENGTH,
        required=False,
    )
    description = serializers.CharField(
        max_length=CHANNEL_CONFIG.MAX_DESCRIPTION_LENGTH,
        required=False,
        allow_null=True,
        allow_blank=True,
    )
    is_private = serializers.BooleanField(required=False)


class ChannelListQuerySerializer(serializers.Serializer):
    """Query parameters for listing channels."""

    include_private = serializers.BooleanField(
        default=False,
        help_text="Also list private channels the current user belongs to",
    )


# =============================================================================
# Membership Serializers
# =============================================================================


class ChannelMembershipSerializer(serializers.ModelSerializer):
    """Read serializer for channel memberships, with user details."""

    channel_id = serializers.IntegerField(read_only=True)
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = ChannelMembership
        fields = ["id", "channel_id", "user", "role", "joined_at"]
        read_only_fields = fields


class JoinChannelSerializer(serializers.Serializer):
    """
    Serializer for joining a channel.

    The owner role is accepted here and rejected by the service, so the
    client gets OWNER_ROLE_RESERVED rather than a generic choice error.
    """

    role = serializers.ChoiceField(
        choices=MemberRole.choices,
        required=False,
        help_text="Role to join with (defaults to member)",
    )


# =============================================================================
# Direct Conversation Serializers
# =============================================================================


class DirectConversationSerializer(serializers.ModelSerializer):
    """Read serializer for direct-message conversations."""

    user1 = UserSummarySerializer(read_only=True)
    user2 = UserSummarySerializer(read_only=True)

    class Meta:
        model = DirectMessageConversation
        fields = ["id", "user1", "user2", "created_at", "updated_at"]
        read_only_fields = fields


class DirectConversationCreateSerializer(serializers.Serializer):
    """Serializer for opening a conversation with another user."""

    user_id = serializers.IntegerField(
        min_value=1,
        help_text="The other participant",
    )


# =============================================================================
# Attachment Serializers
# =============================================================================


class FileAttachmentSerializer(serializers.ModelSerializer):
    """Read serializer for file attachments."""

    message_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = FileAttachment
        fields = [
            "id",
            "message_id",
            "filename",
            "original_filename",
            "file_size",
            "mime_type",
            "file_url",
            "created_at",
        ]
        read_only_fields = fields


class FileAttachmentCreateSerializer(serializers.Serializer):
    """Serializer for recording an already-uploaded file."""

    filename = serializers.CharField(max_length=ATTACHMENT_CONFIG.MAX_FILENAME_LENGTH)
    original_filename = serializers.CharField(
        max_length=ATTACHMENT_CONFIG.MAX_FILENAME_LENGTH
    )
    file_size = serializers.IntegerField(min_value=0)
    mime_type = serializers.CharField(max_length=ATTACHMENT_CONFIG.MAX_MIME_TYPE_LENGTH)
    file_url = serializers.URLField(max_length=ATTACHMENT_CONFIG.MAX_URL_LENGTH)


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """
    Full message serializer for message lists.

    Includes sender details, destination ids, reply reference and
    attachments.
    """

    sender = UserSummarySerializer(read_only=True)
    channel_id = serializers.IntegerField(read_only=True, allow_null=True)
    direct_message_recipient_id = serializers.IntegerField(
        read_only=True, allow_null=True
    )
    reply_to_message_id = serializers.IntegerField(
        source="reply_to_id",
        read_only=True,
        allow_null=True,
    )
    attachments = FileAttachmentSerializer(many=True, read_only=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "content",
            "message_type",
            "sender",
            "channel_id",
            "direct_message_recipient_id",
            "reply_to_message_id",
            "edited_at",
            "attachments",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class MessageCreateSerializer(serializers.Serializer):
    """
    Serializer for sending messages.

    Exactly one of channel_id / direct_message_recipient_id must be set;
    the service reports MISSING_DESTINATION or AMBIGUOUS_DESTINATION.
    """

    content = serializers.CharField(
        min_length=MESSAGE_CONFIG.MIN_CONTENT_LENGTH,
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        help_text="Message content (max 10,000 characters)",
    )
    message_type = serializers.ChoiceField(
        choices=MessageType.choices,
        default=MessageType.TEXT,
    )
    channel_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    direct_message_recipient_id = serializers.IntegerField(
        required=False, allow_null=True, default=None
    )
    reply_to_message_id = serializers.IntegerField(
        required=False,
        allow_null=True,
        default=None,
        help_text="Message being replied to (optional)",
    )


class MessageUpdateSerializer(serializers.Serializer):
    """Serializer for editing message content."""

    content = serializers.CharField(
        min_length=MESSAGE_CONFIG.MIN_CONTENT_LENGTH,
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
    )


class MessageListQuerySerializer(serializers.Serializer):
    """Query parameters for listing messages."""

    channel_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    direct_message_recipient_id = serializers.IntegerField(
        required=False, allow_null=True, default=None
    )
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(
        min_value=1,
        default=MESSAGE_CONFIG.DEFAULT_PAGE_SIZE,
        help_text="Page size (values above 100 are capped at 100)",
    )


class MessageSearchQuerySerializer(serializers.Serializer):
    """Query parameters for message search."""

    q = serializers.CharField(
        max_length=SEARCH_CONFIG.MAX_QUERY_LENGTH,
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        default="",
    )
    channel_id = serializers.IntegerField(required=False, allow_null=True, default=None)
