"""
Chat application configuration.

This app provides the team chat with:
- Public and private channels
- Role-based memberships (owner, admin, member) with ownership succession
- Direct messages between users
- Replies, edits, search and file attachments
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
