"""
Service-level authorization for chat operations.

This module provides the membership lookups the chat services build their
permission decisions on. Views never call it directly; they rely on the
services' error codes.

Key Components:
    ChatAuthorizationService: Stateless membership and message access checks

Usage:
    if ChatAuthorizationService.is_channel_member(user_id, channel_id):
        # proceed with operation

    role = ChatAuthorizationService.get_member_role(user_id, channel_id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chat.models import ChannelMembership, MemberRole

if TYPE_CHECKING:
    from chat.models import Message


class ChatAuthorizationService:
    """
    Stateless authorization checks for chat operations.

    All methods are classmethods and return plain values for easy
    composition. Results are not cached.
    """

    @classmethod
    def is_channel_member(cls, user_id: int, channel_id: int) -> bool:
        """Check if the user has a membership row in the channel."""
        return ChannelMembership.objects.filter(
            channel_id=channel_id,
            user_id=user_id,
        ).exists()

    @classmethod
    def get_member_role(cls, user_id: int, channel_id: int) -> MemberRole | None:
        """
        Get the user's role in a channel.

        Returns:
            MemberRole, or None if the user is not a member
        """
        role = (
            ChannelMembership.objects.filter(channel_id=channel_id, user_id=user_id)
            .values_list("role", flat=True)
            .first()
        )
        return MemberRole(role) if role is not None else None

    @classmethod
    def is_channel_moderator(cls, user_id: int, channel_id: int) -> bool:
        """Check if the user is the channel's owner or an admin."""
        return cls.get_member_role(user_id, channel_id) in (
            MemberRole.OWNER,
            MemberRole.ADMIN,
        )

    @classmethod
    def get_user_channel_ids(cls, user_id: int) -> list[int]:
        """Get IDs of every channel the user belongs to."""
        return list(
            ChannelMembership.objects.filter(user_id=user_id).values_list(
                "channel_id", flat=True
            )
        )

    @classmethod
    def can_delete_message(cls, message: Message, user_id: int) -> bool:
        """
        Check if the user may delete a message.

        Rules:
            - The sender may always delete their own message
            - For channel messages, the channel owner and admins may too
            - Nobody else may delete direct messages, not even the recipient
        """
        if message.sender_id == user_id:
            return True
        if message.channel_id is None:
            return False
        return cls.is_channel_moderator(user_id, message.channel_id)
