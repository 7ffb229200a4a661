"""
Chat system models.

This module defines the data models for the team chat:
- Channels (public or private) with role-based memberships
- Direct (1:1) conversations between two users
- Messages addressed to exactly one channel or one DM recipient
- File attachments owned by a message

Models:
    Channel: Named group conversation space
    ChannelMembership: User membership in a channel with a role
    DirectMessageConversation: DM thread between two users
    DirectConversationPair: Helper enforcing one conversation per unordered pair
    Message: A message sent to a channel or directly to a user
    FileAttachment: Metadata for an already-uploaded file attached to a message

Design Decisions:
    - Every channel has exactly one owner membership while it exists
      (conditional unique constraint on role=owner)
    - Memberships are deleted when a user leaves; a rejoin creates a new row
    - A message targets a channel xor a DM recipient (check constraint)
    - Deleting a channel cascades to its memberships and messages;
      deleting a message cascades to its attachments
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.models import BaseModel


class MemberRole(models.TextChoices):
    """
    Role within a channel.

    Hierarchy: OWNER > ADMIN > MEMBER

    OWNER: Exactly one per channel; may delete any channel message
    ADMIN: May delete any channel message, update channel details
    MEMBER: May post and delete own messages
    """

    OWNER = "owner", "Owner"
    ADMIN = "admin", "Admin"
    MEMBER = "member", "Member"


class MessageType(models.TextChoices):
    """
    Type of message content.

    TEXT: User-authored text message
    FILE: Message that carries one or more attachments
    SYSTEM: Auto-generated event message
    """

    TEXT = "text", "Text"
    FILE = "file", "File"
    SYSTEM = "system", "System"


class Channel(BaseModel):
    """
    A named group conversation space.

    Lifecycle:
        - Created together with an owner membership for the creator
        - Deleted when its owner leaves as the last remaining member

    Fields:
        name: Channel name (1-50 characters)
        description: Optional description
        is_private: Private channels are listed only to their members
        created_by: User who created the channel (never changes)

    Relationships:
        memberships: ChannelMembership rows for this channel
        messages: Messages posted to this channel
    """

    name = models.CharField(
        max_length=50,
        help_text="Channel name",
    )

    description = models.TextField(
        null=True,
        blank=True,
        help_text="Optional channel description",
    )

    is_private = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Private channels are only listed to their members",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="created_channels",
        help_text="User who created this channel",
    )

    class Meta:
        db_table = "chat_channel"
        ordering = ["name", "id"]

    def __str__(self) -> str:
        """Return human-readable representation."""
        prefix = "private" if self.is_private else "public"
        return f"#{self.name} ({prefix})"


class ChannelMembership(models.Model):
    """
    Binds a user to a channel with a role.

    Role changes only happen through ownership succession when the owner
    leaves; joins never create an owner.

    Fields:
        channel: Channel this membership belongs to
        user: Member user
        role: owner, admin or member
        joined_at: When the user joined (orders members and succession)

    Constraints:
        - UniqueConstraint(channel, user): One membership per user per channel
        - UniqueConstraint(channel) WHERE role='owner': At most one owner
    """

    channel = models.ForeignKey(
        Channel,
        on_delete=models.CASCADE,
        related_name="memberships",
        help_text="Channel this membership belongs to",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="channel_memberships",
        help_text="Member user",
    )

    role = models.CharField(
        max_length=10,
        choices=MemberRole.choices,
        default=MemberRole.MEMBER,
        help_text="Role in the channel",
    )

    joined_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user joined this channel",
    )

    class Meta:
        db_table = "chat_channel_membership"
        ordering = ["joined_at", "id"]
        indexes = [
            # Role-based lookups (for ownership succession)
            models.Index(
                fields=["channel", "role", "joined_at"],
                name="chat_member_chan_role_idx",
            ),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["channel", "user"],
                name="unique_channel_membership",
            ),
            models.UniqueConstraint(
                fields=["channel"],
                condition=Q(role="owner"),
                name="unique_channel_owner",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Membership: {self.user_id} in {self.channel_id} ({self.role})"


class DirectMessageConversation(BaseModel):
    """
    A direct-message thread between two users.

    user1/user2 keep the order the conversation was first created with;
    lookups must check both orders. Self-conversations (user1 == user2)
    are allowed.

    Fields:
        user1: First participant (as supplied by the creator)
        user2: Second participant

    Relationships:
        pair: DirectConversationPair enforcing uniqueness per unordered pair
    """

    user1 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="direct_conversations_started",
        help_text="First participant",
    )

    user2 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="direct_conversations_received",
        help_text="Second participant",
    )

    class Meta:
        db_table = "chat_direct_conversation"
        ordering = ["-updated_at", "-id"]
        indexes = [
            models.Index(fields=["user1", "user2"], name="chat_dm_users_idx"),
            models.Index(fields=["user2"], name="chat_dm_user2_idx"),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Direct({self.user1_id}, {self.user2_id})"


class DirectConversationPair(models.Model):
    """
    Enforces uniqueness of direct conversations between two users.

    Stores the pair in canonical order (lower user id first) so (a, b) and
    (b, a) collide on the unique constraint.

    Fields:
        conversation: The direct conversation (OneToOne, serves as PK)
        user_lower: User with the lower id
        user_higher: User with the higher (or equal, for self-DMs) id

    Constraints:
        - UniqueConstraint(user_lower, user_higher): One conversation per pair
        - CheckConstraint(user_lower_id <= user_higher_id): Canonical order
    """

    conversation = models.OneToOneField(
        DirectMessageConversation,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="pair",
        help_text="The direct conversation this pair represents",
    )

    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with lower ID in this conversation pair",
    )

    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with higher ID in this conversation pair",
    )

    class Meta:
        db_table = "chat_direct_conversation_pair"
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_direct_conversation_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower_id__lte=F("user_higher_id")),
                name="user_lower_not_above_higher",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"DirectPair({self.user_lower_id}, {self.user_higher_id})"

    @staticmethod
    def canonical(user_a_id: int, user_b_id: int) -> tuple[int, int]:
        """Return the pair ordered (lower, higher)."""
        return (user_a_id, user_b_id) if user_a_id <= user_b_id else (user_b_id, user_a_id)


class Message(BaseModel):
    """
    A message posted to a channel or sent directly to a user.

    Addressing:
        Exactly one of channel / direct_message_recipient is set. A DM thread
        is the set of messages between two users in either direction.

    Replies:
        reply_to points at a message in the same channel, or in the same DM
        thread. Deleting the target leaves the reply in place with
        reply_to set to NULL.

    Fields:
        content: Message text
        message_type: text, file or system
        sender: User who sent the message
        channel: Target channel (channel messages)
        direct_message_recipient: Target user (direct messages)
        reply_to: Message this one replies to
        edited_at: Set when the content was last edited
    """

    content = models.TextField(
        help_text="Message text",
    )

    message_type = models.CharField(
        max_length=10,
        choices=MessageType.choices,
        default=MessageType.TEXT,
        help_text="Type of message",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who sent this message",
    )

    channel = models.ForeignKey(
        Channel,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="messages",
        help_text="Channel this message was posted to",
    )

    direct_message_recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="received_direct_messages",
        help_text="Recipient of this direct message",
    )

    reply_to = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="replies",
        help_text="Message this one replies to",
    )

    edited_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the content was last edited (null if never edited)",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            # Channel history (newest first)
            models.Index(
                fields=["channel", "-created_at"],
                name="chat_msg_channel_time_idx",
            ),
            # DM thread history
            models.Index(
                fields=["sender", "direct_message_recipient", "-created_at"],
                name="chat_msg_dm_time_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(channel__isnull=False, direct_message_recipient__isnull=True)
                    | Q(channel__isnull=True, direct_message_recipient__isnull=False)
                ),
                name="message_exactly_one_destination",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        target = (
            f"channel {self.channel_id}"
            if self.channel_id is not None
            else f"user {self.direct_message_recipient_id}"
        )
        return f"Message {self.pk} from {self.sender_id} to {target}"

    @property
    def is_direct(self) -> bool:
        """Check if this is a direct message."""
        return self.direct_message_recipient_id is not None

    @property
    def is_edited(self) -> bool:
        """Check if the message content has been edited."""
        return self.edited_at is not None

    def participant_ids(self) -> frozenset[int]:
        """Return the two user ids of a direct message (one id for a self-DM)."""
        return frozenset((self.sender_id, self.direct_message_recipient_id))


class FileAttachment(models.Model):
    """
    Metadata for a file attached to a message.

    The bytes live in external storage; file_url is already resolved when
    the row is created.

    Fields:
        message: Owning message (attachments are deleted with it)
        filename: Stored file name
        original_filename: Name of the file as uploaded by the user
        file_size: Size in bytes
        mime_type: Content type
        file_url: Where the file can be downloaded
    """

    message = models.ForeignKey(
        Message,
        on_delete=models.CASCADE,
        related_name="attachments",
        help_text="Message this file is attached to",
    )

    filename = models.CharField(
        max_length=255,
        help_text="Stored file name",
    )

    original_filename = models.CharField(
        max_length=255,
        help_text="File name as uploaded",
    )

    file_size = models.PositiveBigIntegerField(
        help_text="File size in bytes",
    )

    mime_type = models.CharField(
        max_length=100,
        help_text="MIME type of the file",
    )

    file_url = models.URLField(
        max_length=500,
        help_text="URL of the uploaded file",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the attachment was recorded",
    )

    class Meta:
        db_table = "chat_file_attachment"
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Attachment {self.original_filename} on message {self.message_id}"
