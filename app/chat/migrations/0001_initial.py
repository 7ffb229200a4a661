import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Channel",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                ("name", models.CharField(help_text="Channel name", max_length=50)),
                (
                    "description",
                    models.TextField(
                        blank=True, help_text="Optional channel description", null=True
                    ),
                ),
                (
                    "is_private",
                    models.BooleanField(
                        db_index=True,
                        default=False,
                        help_text="Private channels are only listed to their members",
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        help_text="User who created this channel",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="created_channels",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_channel",
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="ChannelMembership",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("owner", "Owner"),
                            ("admin", "Admin"),
                            ("member", "Member"),
                        ],
                        default="member",
                        help_text="Role in the channel",
                        max_length=10,
                    ),
                ),
                (
                    "joined_at",
                    models.DateTimeField(
                        auto_now_add=True, help_text="When the user joined this channel"
                    ),
                ),
                (
                    "channel",
                    models.ForeignKey(
                        help_text="Channel this membership belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="memberships",
                        to="chat.channel",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Member user",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="channel_memberships",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_channel_membership",
                "ordering": ["joined_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["channel", "role", "joined_at"],
                        name="chat_member_chan_role_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("channel", "user"), name="unique_channel_membership"
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("role", "owner")),
                        fields=("channel",),
                        name="unique_channel_owner",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="DirectMessageConversation",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "user1",
                    models.ForeignKey(
                        help_text="First participant",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="direct_conversations_started",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user2",
                    models.ForeignKey(
                        help_text="Second participant",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="direct_conversations_received",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_direct_conversation",
                "ordering": ["-updated_at", "-id"],
                "indexes": [
                    models.Index(fields=["user1", "user2"], name="chat_dm_users_idx"),
                    models.Index(fields=["user2"], name="chat_dm_user2_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="DirectConversationPair",
            fields=[
                (
                    "conversation",
                    models.OneToOneField(
                        help_text="The direct conversation this pair represents",
                        on_delete=django.db.models.deletion.CASCADE,
                        primary_key=True,
                        related_name="pair",
                        serialize=False,
                        to="chat.directmessageconversation",
                    ),
                ),
                (
                    "user_lower",
                    models.ForeignKey(
                        help_text="User with lower ID in this conversation pair",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user_higher",
                    models.ForeignKey(
                        help_text="User with higher ID in this conversation pair",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_direct_conversation_pair",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user_lower", "user_higher"),
                        name="unique_direct_conversation_pair",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("user_lower_id__lte", models.F("user_higher_id"))
                        ),
                        name="user_lower_not_above_higher",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                ("content", models.TextField(help_text="Message text")),
                (
                    "message_type",
                    models.CharField(
                        choices=[
                            ("text", "Text"),
                            ("file", "File"),
                            ("system", "System"),
                        ],
                        default="text",
                        help_text="Type of message",
                        max_length=10,
                    ),
                ),
                (
                    "edited_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the content was last edited (null if never edited)",
                        null=True,
                    ),
                ),
                (
                    "channel",
                    models.ForeignKey(
                        blank=True,
                        help_text="Channel this message was posted to",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.channel",
                    ),
                ),
                (
                    "direct_message_recipient",
                    models.ForeignKey(
                        blank=True,
                        help_text="Recipient of this direct message",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="received_direct_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "reply_to",
                    models.ForeignKey(
                        blank=True,
                        help_text="Message this one replies to",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="replies",
                        to="chat.message",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        help_text="User who sent this message",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["channel", "-created_at"],
                        name="chat_msg_channel_time_idx",
                    ),
                    models.Index(
                        fields=["sender", "direct_message_recipient", "-created_at"],
                        name="chat_msg_dm_time_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("channel__isnull", False),
                                ("direct_message_recipient__isnull", True),
                            ),
                            models.Q(
                                ("channel__isnull", True),
                                ("direct_message_recipient__isnull", False),
                            ),
                            _connector="OR",
                        ),
                        name="message_exactly_one_destination",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="FileAttachment",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("filename", models.CharField(help_text="Stored file name", max_length=255)),
                (
                    "original_filename",
                    models.CharField(help_text="File name as uploaded", max_length=255),
                ),
                ("file_size", models.PositiveBigIntegerField(help_text="File size in bytes")),
                ("mime_type", models.CharField(help_text="MIME type of the file", max_length=100)),
                ("file_url", models.URLField(help_text="URL of the uploaded file", max_length=500)),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True, help_text="When the attachment was recorded"
                    ),
                ),
                (
                    "message",
                    models.ForeignKey(
                        help_text="Message this file is attached to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attachments",
                        to="chat.message",
                    ),
                ),
            ],
            options={
                "db_table": "chat_file_attachment",
                "ordering": ["created_at", "id"],
            },
        ),
    ]
