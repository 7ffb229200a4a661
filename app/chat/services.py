"""
Chat system service layer.

This module provides the business logic for the team chat, encapsulating
all operations on channels, memberships, direct conversations, messages,
search and attachments.

Services:
    ChannelService: Channel lifecycle (create, update, list)
    MembershipService: Join, leave with ownership succession, member listing
    DirectMessageService: Idempotent DM conversation creation and listing
    MessageService: Message create/update/delete/list with authorization
    MessageSearchService: Substring search over messages visible to a user
    AttachmentService: File attachment metadata

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Multi-table writes run in one transaction
    - Membership changes lock the channel row, so joins and leaves on the
      same channel are applied one at a time

Usage:
    from chat.services import ChannelService, MembershipService, MessageService

    # Create a channel (creator becomes owner)
    result = ChannelService.create(name="general", creator_id=user.id)
    if result.success:
        channel = result.data

    # Join and post
    MembershipService.join(channel.id, other_user.id)
    result = MessageService.create(
        sender_id=other_user.id,
        content="Hello everyone!",
        channel_id=channel.id,
    )
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import IntegrityError, connection
from django.db.models import Q
from django.utils import timezone

from authentication.models import User
from chat.authorization import ChatAuthorizationService
from chat.constants import MESSAGE_CONFIG, SEARCH_CONFIG
from chat.destinations import ChannelDestination, resolve_destination
from chat.models import (
    Channel,
    ChannelMembership,
    DirectConversationPair,
    DirectMessageConversation,
    FileAttachment,
    MemberRole,
    Message,
    MessageType,
)
from chat.succession import MemberSnapshot, NotAMemberError, plan_succession
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from chat.destinations import Destination

logger = logging.getLogger(__name__)


# Channel fields that may be changed after creation
CHANNEL_UPDATE_FIELDS = ("name", "description", "is_private")


# =============================================================================
# Channel Service
# =============================================================================


class ChannelService(BaseService):
    """
    Service for channel lifecycle operations.

    Methods:
        create: Create a channel and its owner membership
        update: Partially update channel details
        list: List channels visible to a user

    Error codes:
        CREATOR_NOT_FOUND: Creating user does not exist
        CHANNEL_NOT_FOUND: Channel does not exist
        UNAUTHORIZED: Acting user is not the channel owner or an admin
        INVALID_FIELD: Update names a field that cannot be changed
    """

    @classmethod
    def create(
        cls,
        name: str,
        creator_id: int,
        is_private: bool = False,
        description: str | None = None,
    ) -> ServiceResult[Channel]:
        """
        Create a channel with the creator as its owner.

        The channel row and the owner membership are inserted in one
        transaction; if either insert fails neither is kept.

        Args:
            name: Channel name
            creator_id: User creating the channel
            is_private: Whether the channel is hidden from non-members
            description: Optional description

        Returns:
            ServiceResult with the created Channel
        """
        creator = User.objects.filter(pk=creator_id).first()
        if creator is None:
            return ServiceResult.failure(
                f"User with id {creator_id} not found",
                error_code="CREATOR_NOT_FOUND",
            )

        with cls.atomic():
            channel = Channel.objects.create(
                name=name,
                description=description,
                is_private=is_private,
                created_by=creator,
            )
            ChannelMembership.objects.create(
                channel=channel,
                user=creator,
                role=MemberRole.OWNER,
            )

        cls.get_logger().info(
            f"Created {'private' if is_private else 'public'} channel {channel.id} "
            f"({channel.name}) owned by user {creator.id}"
        )

        return ServiceResult.success(channel)

    @classmethod
    def update(
        cls,
        channel_id: int,
        fields: dict,
        acting_user_id: int | None = None,
    ) -> ServiceResult[Channel]:
        """
        Partially update a channel.

        Only the keys present in ``fields`` change; updated_at always
        refreshes, even for an empty update.

        Args:
            channel_id: Channel to update
            fields: Any of name, description, is_private
            acting_user_id: When given, must be the owner or an admin

        Returns:
            ServiceResult with the updated Channel
        """
        unknown = sorted(set(fields) - set(CHANNEL_UPDATE_FIELDS))
        if unknown:
            return ServiceResult.failure(
                f"Fields cannot be updated: {', '.join(unknown)}",
                error_code="INVALID_FIELD",
            )

        channel = Channel.objects.filter(pk=channel_id).first()
        if channel is None:
            return ServiceResult.failure(
                f"Channel with id {channel_id} not found",
                error_code="CHANNEL_NOT_FOUND",
            )

        if acting_user_id is not None and not ChatAuthorizationService.is_channel_moderator(
            acting_user_id, channel.id
        ):
            return ServiceResult.failure(
                "Only the channel owner or an admin can update the channel",
                error_code="UNAUTHORIZED",
            )

        for field_name, value in fields.items():
            setattr(channel, field_name, value)
        channel.save(update_fields=[*fields, "updated_at"])

        cls.get_logger().info(
            f"Updated channel {channel.id}: {', '.join(fields) or 'timestamp only'}"
        )

        return ServiceResult.success(channel)

    @classmethod
    def list(
        cls,
        user_id: int | None = None,
        include_private: bool = False,
    ) -> QuerySet[Channel]:
        """
        List channels.

        Modes:
            - No user, or include_private=False: public channels only
            - User with include_private=True: public channels plus the
              private channels the user belongs to

        Each channel appears once.
        """
        visible = Q(is_private=False)
        if user_id is not None and include_private:
            member_of = ChannelMembership.objects.filter(user_id=user_id).values(
                "channel_id"
            )
            visible |= Q(is_private=True, pk__in=member_of)

        return Channel.objects.filter(visible).distinct().order_by("name", "id")


# =============================================================================
# Membership Service
# =============================================================================


class MembershipService(BaseService):
    """
    Service for channel membership management.

    Methods:
        join: Add a user to a channel
        leave: Remove a user, handing ownership on or deleting the channel
        list_members: Memberships of a channel in join order

    Error codes:
        CHANNEL_NOT_FOUND: Channel does not exist
        USER_NOT_FOUND: User does not exist
        ALREADY_MEMBER: User already belongs to the channel
        NOT_A_MEMBER: User does not belong to the channel
        INVALID_ROLE: Role is not owner, admin or member
        OWNER_ROLE_RESERVED: Owner is only assigned at creation or succession
    """

    @classmethod
    def join(
        cls,
        channel_id: int,
        user_id: int,
        role: str | None = None,
    ) -> ServiceResult[ChannelMembership]:
        """
        Add a user to a channel.

        Private channels accept joins the same way public ones do.

        Args:
            channel_id: Channel to join
            user_id: User joining
            role: admin or member (defaults to member)

        Returns:
            ServiceResult with the new ChannelMembership
        """
        if role is None:
            role = MemberRole.MEMBER
        elif role not in MemberRole.values:
            return ServiceResult.failure(
                f"Invalid role {role!r}",
                error_code="INVALID_ROLE",
            )
        elif role == MemberRole.OWNER:
            return ServiceResult.failure(
                "A channel has exactly one owner; join as admin or member",
                error_code="OWNER_ROLE_RESERVED",
            )

        with cls.atomic():
            channel = Channel.objects.select_for_update().filter(pk=channel_id).first()
            if channel is None:
                return ServiceResult.failure(
                    f"Channel with id {channel_id} not found",
                    error_code="CHANNEL_NOT_FOUND",
                )

            user = User.objects.filter(pk=user_id).first()
            if user is None:
                return ServiceResult.failure(
                    f"User with id {user_id} not found",
                    error_code="USER_NOT_FOUND",
                )

            if ChannelMembership.objects.filter(channel=channel, user=user).exists():
                return ServiceResult.failure(
                    f"User with id {user_id} is already a member of channel {channel_id}",
                    error_code="ALREADY_MEMBER",
                )

            membership = ChannelMembership.objects.create(
                channel=channel,
                user=user,
                role=role,
            )

        cls.get_logger().info(
            f"User {user.id} joined channel {channel.id} as {membership.role}"
        )

        return ServiceResult.success(membership)

    @classmethod
    def leave(cls, channel_id: int, user_id: int) -> ServiceResult[bool]:
        """
        Remove a user from a channel.

        Behavior:
            - Admin or member leaves: their membership is deleted
            - Owner leaves with others remaining: the earliest-joined admin
              (else the earliest-joined member) becomes owner, then the
              owner's membership is deleted
            - Owner leaves as the last member: the channel is deleted,
              taking its memberships, messages and attachments with it

        The channel row is locked for the whole operation, so two members
        leaving at once cannot both act on a stale member list.

        Returns:
            ServiceResult with True for every successful case
        """
        with cls.atomic():
            channel = Channel.objects.select_for_update().filter(pk=channel_id).first()
            memberships = (
                list(ChannelMembership.objects.filter(channel=channel))
                if channel is not None
                else []
            )

            try:
                plan = plan_succession(
                    [MemberSnapshot.from_membership(m) for m in memberships],
                    departing_user_id=user_id,
                )
            except NotAMemberError:
                return ServiceResult.failure(
                    f"User with id {user_id} is not a member of channel {channel_id}",
                    error_code="NOT_A_MEMBER",
                )

            if plan.delete_channel:
                channel.delete()
                cls.get_logger().info(
                    f"Deleted channel {channel_id} (owner {user_id} was the last member)"
                )
                return ServiceResult.success(True)

            # Delete before promoting: the owner constraint allows one owner row.
            ChannelMembership.objects.filter(pk=plan.departing_membership_id).delete()

            if plan.promote_membership_id is not None:
                ChannelMembership.objects.filter(pk=plan.promote_membership_id).update(
                    role=MemberRole.OWNER
                )
                cls.get_logger().info(
                    f"Auto-transferred ownership of channel {channel_id} to membership "
                    f"{plan.promote_membership_id} (owner {user_id} departed)"
                )

        cls.get_logger().info(f"User {user_id} left channel {channel_id}")

        return ServiceResult.success(True)

    @classmethod
    def list_members(
        cls, channel_id: int
    ) -> ServiceResult[QuerySet[ChannelMembership]]:
        """
        List a channel's memberships ordered by joined_at, then id.

        Returns:
            ServiceResult with a queryset of ChannelMembership (user loaded)
        """
        if not Channel.objects.filter(pk=channel_id).exists():
            return ServiceResult.failure(
                f"Channel with id {channel_id} not found",
                error_code="CHANNEL_NOT_FOUND",
            )

        memberships = (
            ChannelMembership.objects.filter(channel_id=channel_id)
            .select_related("user")
            .order_by("joined_at", "id")
        )
        return ServiceResult.success(memberships)


# =============================================================================
# Direct Message Service
# =============================================================================


class DirectMessageService(BaseService):
    """
    Service for direct-message conversations.

    A conversation is identified by its unordered pair of users. The
    DirectConversationPair table stores the pair in canonical order, so a
    second create for (b, a) finds the row created for (a, b).

    Error codes:
        USERS_NOT_FOUND: One or both users do not exist
    """

    @classmethod
    def get_or_create(
        cls,
        user1_id: int,
        user2_id: int,
    ) -> ServiceResult[DirectMessageConversation]:
        """
        Return the conversation between two users, creating it if needed.

        An existing conversation is returned unchanged, whichever order it
        was created in. A new conversation keeps the caller's order. A
        concurrent create that loses the race on the pair constraint
        returns the winner's row.

        A user may open a conversation with themselves.
        """
        user_ids = {user1_id, user2_id}
        if User.objects.filter(pk__in=user_ids).count() != len(user_ids):
            return ServiceResult.failure(
                f"Users not found: {user1_id}, {user2_id}",
                error_code="USERS_NOT_FOUND",
            )

        existing = cls._find(user1_id, user2_id)
        if existing is not None:
            cls.get_logger().debug(
                f"Found existing direct conversation {existing.id} "
                f"between users {user1_id} and {user2_id}"
            )
            return ServiceResult.success(existing)

        user_lower_id, user_higher_id = DirectConversationPair.canonical(
            user1_id, user2_id
        )

        try:
            with cls.atomic():
                conversation = DirectMessageConversation.objects.create(
                    user1_id=user1_id,
                    user2_id=user2_id,
                )
                DirectConversationPair.objects.create(
                    conversation=conversation,
                    user_lower_id=user_lower_id,
                    user_higher_id=user_higher_id,
                )
        except IntegrityError:
            existing = cls._find(user1_id, user2_id)
            if existing is None:
                raise
            cls.get_logger().info(
                f"Concurrent create for users {user1_id} and {user2_id}; "
                f"returning conversation {existing.id}"
            )
            return ServiceResult.success(existing)

        cls.get_logger().info(
            f"Created direct conversation {conversation.id} "
            f"between users {user1_id} and {user2_id}"
        )

        return ServiceResult.success(conversation)

    @classmethod
    def _find(cls, user1_id: int, user2_id: int) -> DirectMessageConversation | None:
        user_lower_id, user_higher_id = DirectConversationPair.canonical(
            user1_id, user2_id
        )
        pair = (
            DirectConversationPair.objects.select_related("conversation")
            .filter(user_lower_id=user_lower_id, user_higher_id=user_higher_id)
            .first()
        )
        return pair.conversation if pair is not None else None

    @classmethod
    def list_for_user(
        cls, user_id: int | None
    ) -> QuerySet[DirectMessageConversation]:
        """List every conversation the user is part of (empty for unknown ids)."""
        if user_id is None:
            return DirectMessageConversation.objects.none()

        return DirectMessageConversation.objects.filter(
            Q(user1_id=user_id) | Q(user2_id=user_id)
        ).select_related("user1", "user2")


# =============================================================================
# Message Service
# =============================================================================


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        create: Post to a channel or send a direct message
        update: Edit message content
        delete: Delete a message and its attachments
        list: Page through a channel or DM thread, newest first

    Error codes:
        SENDER_NOT_FOUND: Sender does not exist
        MISSING_DESTINATION: Neither channel nor recipient supplied
        AMBIGUOUS_DESTINATION: Both channel and recipient supplied
        CHANNEL_NOT_FOUND: Channel does not exist
        NOT_CHANNEL_MEMBER: Sender (or viewer) does not belong to the channel
        RECIPIENT_NOT_FOUND: DM recipient does not exist
        SELF_MESSAGE: DM recipient is the sender
        REPLY_TARGET_NOT_FOUND: Replied-to message does not exist
        REPLY_CHANNEL_MISMATCH: Replied-to message is in another channel
        REPLY_CONVERSATION_MISMATCH: Replied-to message is in another DM thread
        INVALID_MESSAGE_TYPE: message_type is not text, file or system
        MESSAGE_NOT_FOUND: Message does not exist
        UNAUTHORIZED: Acting user may not change this message
    """

    @classmethod
    def create(
        cls,
        sender_id: int,
        content: str,
        message_type: str = MessageType.TEXT,
        channel_id: int | None = None,
        direct_message_recipient_id: int | None = None,
        reply_to_message_id: int | None = None,
    ) -> ServiceResult[Message]:
        """
        Create a message after validating who may send it where.

        Checks run in this order and the first failure is returned:
            1. Sender exists
            2. Message type is text, file or system
            3. Exactly one destination is given
            4. Channel exists and the sender is a member, or the
               recipient exists and is not the sender
            5. The replied-to message exists and belongs to the same
               channel or the same DM thread

        Args:
            sender_id: User sending the message
            content: Message text
            message_type: text, file or system
            channel_id: Target channel
            direct_message_recipient_id: Target user for a direct message
            reply_to_message_id: Message being replied to

        Returns:
            ServiceResult with the created Message
        """
        if not User.objects.filter(pk=sender_id).exists():
            return ServiceResult.failure(
                f"User with id {sender_id} not found",
                error_code="SENDER_NOT_FOUND",
            )

        if message_type not in MessageType.values:
            return ServiceResult.failure(
                f"Invalid message type {message_type!r}",
                error_code="INVALID_MESSAGE_TYPE",
            )

        destination_result = resolve_destination(channel_id, direct_message_recipient_id)
        if not destination_result.success:
            return destination_result
        destination = destination_result.data

        access_error = cls._check_destination_access(sender_id, destination)
        if access_error is not None:
            return access_error

        reply_to = None
        if reply_to_message_id is not None:
            reply_to = Message.objects.filter(pk=reply_to_message_id).first()
            if reply_to is None:
                return ServiceResult.failure(
                    f"Message with id {reply_to_message_id} not found",
                    error_code="REPLY_TARGET_NOT_FOUND",
                )

            reply_error = cls._check_reply_target(reply_to, sender_id, destination)
            if reply_error is not None:
                return reply_error

        message = Message.objects.create(
            content=content,
            message_type=message_type,
            sender_id=sender_id,
            reply_to=reply_to,
            edited_at=None,
            **destination.as_fields(),
        )

        cls.get_logger().info(
            f"User {sender_id} created message {message.id} "
            f"({'channel ' + str(message.channel_id) if message.channel_id else 'direct'})"
        )

        return ServiceResult.success(message)

    @classmethod
    def _check_destination_access(
        cls,
        sender_id: int,
        destination: Destination,
    ) -> ServiceResult[Message] | None:
        """Return a failure if the sender may not write to the destination."""
        if isinstance(destination, ChannelDestination):
            if not Channel.objects.filter(pk=destination.channel_id).exists():
                return ServiceResult.failure(
                    f"Channel with id {destination.channel_id} not found",
                    error_code="CHANNEL_NOT_FOUND",
                )
            if not ChatAuthorizationService.is_channel_member(
                sender_id, destination.channel_id
            ):
                return ServiceResult.failure(
                    f"User with id {sender_id} is not a member of channel "
                    f"{destination.channel_id}",
                    error_code="NOT_CHANNEL_MEMBER",
                )
            return None

        if not User.objects.filter(pk=destination.recipient_id).exists():
            return ServiceResult.failure(
                f"User with id {destination.recipient_id} not found",
                error_code="RECIPIENT_NOT_FOUND",
            )
        if destination.recipient_id == sender_id:
            return ServiceResult.failure(
                "Cannot send a direct message to yourself",
                error_code="SELF_MESSAGE",
            )
        return None

    @classmethod
    def _check_reply_target(
        cls,
        reply_to: Message,
        sender_id: int,
        destination: Destination,
    ) -> ServiceResult[Message] | None:
        """Return a failure if ``reply_to`` is outside the new message's thread."""
        if isinstance(destination, ChannelDestination):
            if reply_to.channel_id != destination.channel_id:
                return ServiceResult.failure(
                    f"Message with id {reply_to.id} is not in channel "
                    f"{destination.channel_id}",
                    error_code="REPLY_CHANNEL_MISMATCH",
                )
            return None

        thread = frozenset((sender_id, destination.recipient_id))
        if not reply_to.is_direct or reply_to.participant_ids() != thread:
            return ServiceResult.failure(
                f"Message with id {reply_to.id} is not in this direct conversation",
                error_code="REPLY_CONVERSATION_MISMATCH",
            )
        return None

    @classmethod
    def update(
        cls,
        message_id: int,
        content: str,
        editor_id: int | None = None,
    ) -> ServiceResult[Message]:
        """
        Replace a message's content.

        Sets edited_at and updated_at; every other field, including
        created_at, is preserved. When ``editor_id`` is given it must be
        the sender.

        Returns:
            ServiceResult with the updated Message
        """
        message = Message.objects.filter(pk=message_id).first()
        if message is None:
            return ServiceResult.failure(
                f"Message with id {message_id} not found",
                error_code="MESSAGE_NOT_FOUND",
            )

        if editor_id is not None and message.sender_id != editor_id:
            return ServiceResult.failure(
                "Only the sender can edit a message",
                error_code="UNAUTHORIZED",
            )

        message.content = content
        message.edited_at = timezone.now()
        message.save(update_fields=["content", "edited_at", "updated_at"])

        cls.get_logger().info(f"Message {message.id} edited")

        return ServiceResult.success(message)

    @classmethod
    def delete(cls, message_id: int, acting_user_id: int) -> ServiceResult[bool]:
        """
        Delete a message and its attachments.

        Permission:
            - The sender, for any message
            - The channel owner or an admin, for channel messages
            - Nobody else; a DM recipient cannot delete what they received

        Returns:
            ServiceResult with True on success
        """
        with cls.atomic():
            message = Message.objects.select_for_update().filter(pk=message_id).first()
            if message is None:
                return ServiceResult.failure(
                    f"Message with id {message_id} not found",
                    error_code="MESSAGE_NOT_FOUND",
                )

            if not ChatAuthorizationService.can_delete_message(message, acting_user_id):
                return ServiceResult.failure(
                    f"User with id {acting_user_id} cannot delete message {message_id}",
                    error_code="UNAUTHORIZED",
                )

            message.delete()

        cls.get_logger().info(f"User {acting_user_id} deleted message {message_id}")

        return ServiceResult.success(True)

    @classmethod
    def list(
        cls,
        channel_id: int | None = None,
        direct_message_recipient_id: int | None = None,
        page: int = 1,
        limit: int = MESSAGE_CONFIG.DEFAULT_PAGE_SIZE,
        viewer_id: int | None = None,
    ) -> ServiceResult[list[Message]]:
        """
        Page through messages, newest first.

        Without a destination the result is empty. With a viewer:
            - A DM listing returns the thread between viewer and recipient
              in both directions
            - A private channel listing requires the viewer's membership

        Args:
            channel_id: Channel to list
            direct_message_recipient_id: Other side of the DM thread
            page: 1-based page number
            limit: Page size, capped at MESSAGE_CONFIG.MAX_PAGE_SIZE
            viewer_id: User requesting the listing

        Returns:
            ServiceResult with a list of Message
        """
        if channel_id is not None and direct_message_recipient_id is not None:
            return ServiceResult.failure(
                "Only one of channel_id or direct_message_recipient_id may be set",
                error_code="AMBIGUOUS_DESTINATION",
            )
        if channel_id is None and direct_message_recipient_id is None:
            return ServiceResult.success([])

        page = max(page, 1)
        limit = max(1, min(limit, MESSAGE_CONFIG.MAX_PAGE_SIZE))

        messages = Message.objects.select_related("sender").prefetch_related(
            "attachments"
        )

        if channel_id is not None:
            if viewer_id is not None:
                is_private = (
                    Channel.objects.filter(pk=channel_id)
                    .values_list("is_private", flat=True)
                    .first()
                )
                if is_private and not ChatAuthorizationService.is_channel_member(
                    viewer_id, channel_id
                ):
                    return ServiceResult.failure(
                        f"User with id {viewer_id} is not a member of channel {channel_id}",
                        error_code="NOT_CHANNEL_MEMBER",
                    )
            messages = messages.filter(channel_id=channel_id)
        elif viewer_id is not None:
            messages = messages.filter(
                Q(sender_id=viewer_id, direct_message_recipient_id=direct_message_recipient_id)
                | Q(sender_id=direct_message_recipient_id, direct_message_recipient_id=viewer_id)
            )
        else:
            messages = messages.filter(direct_message_recipient_id=direct_message_recipient_id)

        offset = (page - 1) * limit
        return ServiceResult.success(
            list(messages.order_by("-created_at", "-id")[offset : offset + limit])
        )


# =============================================================================
# Search Service
# =============================================================================


class MessageSearchService:
    """
    Case-insensitive substring search over the messages a user can see.

    Visible messages:
        - Messages in every channel the user belongs to
        - Direct messages the user sent or received

    Search never fails: a blank query, or a channel the user does not
    belong to, gives an empty result.
    """

    @classmethod
    def search(
        cls,
        query: str | None,
        user_id: int,
        channel_id: int | None = None,
    ) -> list[Message]:
        """
        Search messages by substring.

        Args:
            query: Text to look for (surrounding whitespace ignored)
            user_id: User performing the search
            channel_id: Optional - limit search to one channel

        Returns:
            Up to SEARCH_CONFIG.MAX_RESULTS messages, oldest first
        """
        query = (query or "").strip()
        if not query:
            return []

        if channel_id is not None:
            if not ChatAuthorizationService.is_channel_member(user_id, channel_id):
                return []
            visible = Q(channel_id=channel_id)
        else:
            channel_ids = ChatAuthorizationService.get_user_channel_ids(user_id)
            visible = Q(channel_id__in=channel_ids) | (
                Q(channel__isnull=True)
                & (Q(sender_id=user_id) | Q(direct_message_recipient_id=user_id))
            )

        results = (
            Message.objects.filter(visible, content__icontains=query)
            .select_related("sender")
            .order_by("created_at", "id")[: SEARCH_CONFIG.MAX_RESULTS]
        )

        logger.debug(f"Search by user {user_id} matched {len(results)} messages")

        return list(results)


# =============================================================================
# Attachment Service
# =============================================================================


class AttachmentService(BaseService):
    """
    Service for file attachment metadata.

    The file itself is stored elsewhere; this service records where it
    lives. A missing message is not pre-checked: the foreign key rejects
    the row and django.db.IntegrityError propagates to the caller.
    """

    @classmethod
    def create(
        cls,
        message_id: int,
        filename: str,
        original_filename: str,
        file_size: int,
        mime_type: str,
        file_url: str,
    ) -> FileAttachment:
        """
        Record an attachment on a message.

        Returns:
            The created FileAttachment

        Raises:
            IntegrityError: The message does not exist
        """
        with cls.atomic():
            attachment = FileAttachment.objects.create(
                message_id=message_id,
                filename=filename,
                original_filename=original_filename,
                file_size=file_size,
                mime_type=mime_type,
                file_url=file_url,
            )
            # Foreign keys are deferred until commit; check this row now.
            connection.check_constraints(table_names=[FileAttachment._meta.db_table])

        cls.get_logger().info(
            f"Attached {attachment.original_filename} to message {message_id}"
        )

        return attachment

    @classmethod
    def list_for_message(cls, message_id: int | None) -> QuerySet[FileAttachment]:
        """List a message's attachments (empty for unknown messages)."""
        if message_id is None:
            return FileAttachment.objects.none()
        return FileAttachment.objects.filter(message_id=message_id).order_by(
            "created_at", "id"
        )
