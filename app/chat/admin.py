"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Channel management with inline memberships
- Direct conversation viewing
- Message moderation with inline attachments
"""

from django.contrib import admin

from chat.models import (
    Channel,
    ChannelMembership,
    DirectConversationPair,
    DirectMessageConversation,
    FileAttachment,
    Message,
)


class ChannelMembershipInline(admin.TabularInline):
    """Inline display of memberships in channel admin."""

    model = ChannelMembership
    extra = 0
    readonly_fields = ["joined_at"]
    raw_id_fields = ["user"]


@admin.register(Channel)
class ChannelAdmin(admin.ModelAdmin):
    """Admin interface for Channel model."""

    list_display = ["id", "name", "is_private", "created_by", "created_at"]
    list_filter = ["is_private", "created_at"]
    search_fields = ["name", "description"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["created_by"]
    inlines = [ChannelMembershipInline]


@admin.register(ChannelMembership)
class ChannelMembershipAdmin(admin.ModelAdmin):
    """Admin interface for ChannelMembership model."""

    list_display = ["id", "channel", "user", "role", "joined_at"]
    list_filter = ["role", "joined_at"]
    search_fields = ["user__email", "user__username", "channel__name"]
    readonly_fields = ["joined_at"]
    raw_id_fields = ["channel", "user"]


@admin.register(DirectMessageConversation)
class DirectMessageConversationAdmin(admin.ModelAdmin):
    """Admin interface for DirectMessageConversation model."""

    list_display = ["id", "user1", "user2", "created_at", "updated_at"]
    search_fields = ["user1__email", "user2__email"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["user1", "user2"]


@admin.register(DirectConversationPair)
class DirectConversationPairAdmin(admin.ModelAdmin):
    """Admin interface for DirectConversationPair model."""

    list_display = ["conversation", "user_lower", "user_higher"]
    raw_id_fields = ["conversation", "user_lower", "user_higher"]


class FileAttachmentInline(admin.TabularInline):
    """Inline display of attachments in message admin."""

    model = FileAttachment
    extra = 0
    readonly_fields = ["created_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "sender",
        "channel",
        "direct_message_recipient",
        "message_type",
        "content_preview",
        "created_at",
        "edited_at",
    ]
    list_filter = ["message_type", "created_at"]
    search_fields = ["content", "sender__email"]
    readonly_fields = ["created_at", "updated_at", "edited_at"]
    raw_id_fields = ["sender", "channel", "direct_message_recipient", "reply_to"]
    inlines = [FileAttachmentInline]

    @admin.display(description="Content")
    def content_preview(self, obj):
        """Show truncated content preview."""
        if len(obj.content) > 50:
            return obj.content[:50] + "..."
        return obj.content


@admin.register(FileAttachment)
class FileAttachmentAdmin(admin.ModelAdmin):
    """Admin interface for FileAttachment model."""

    list_display = ["id", "original_filename", "mime_type", "file_size", "message"]
    search_fields = ["original_filename", "filename"]
    readonly_fields = ["created_at"]
    raw_id_fields = ["message"]
