"""
Tests for chat model constraints and helpers.

Database constraints are the last line of defense behind the services, so
these tests write rows directly and expect IntegrityError.
"""

import pytest
from django.db import IntegrityError, transaction

from authentication.tests.factories import UserFactory
from chat.models import (
    Channel,
    ChannelMembership,
    DirectConversationPair,
    FileAttachment,
    MemberRole,
    Message,
)
from chat.tests.factories import (
    ChannelFactory,
    ChannelMembershipFactory,
    DirectConversationFactory,
    DirectMessageFactory,
    FileAttachmentFactory,
    MessageFactory,
)


class TestChannelMembershipConstraints:
    def test_user_cannot_join_same_channel_twice(self, db):
        channel = ChannelFactory()

        with pytest.raises(IntegrityError), transaction.atomic():
            ChannelMembership.objects.create(
                channel=channel,
                user=channel.created_by,
                role=MemberRole.MEMBER,
            )

    def test_channel_cannot_have_two_owners(self, db):
        """
        A second owner row in the same channel is rejected.

        Why it matters: Succession relies on exactly one owner per channel.
        """
        channel = ChannelFactory()

        with pytest.raises(IntegrityError), transaction.atomic():
            ChannelMembershipFactory(channel=channel, role=MemberRole.OWNER)

    def test_owners_of_different_channels_do_not_conflict(self, db):
        owner = UserFactory()
        ChannelFactory(created_by=owner)
        ChannelFactory(created_by=owner)

        assert ChannelMembership.objects.filter(user=owner, role=MemberRole.OWNER).count() == 2


class TestChannelCascade:
    def test_deleting_channel_removes_memberships_messages_and_attachments(self, db):
        channel = ChannelFactory()
        message = MessageFactory(channel=channel, sender=channel.created_by)
        FileAttachmentFactory(message=message)

        channel.delete()

        assert not ChannelMembership.objects.exists()
        assert not Message.objects.exists()
        assert not FileAttachment.objects.exists()

    def test_str_marks_visibility(self, db):
        assert str(ChannelFactory(name="general")) == "#general (public)"
        assert str(ChannelFactory(name="ops", is_private=True)) == "#ops (private)"


class TestMessageConstraints:
    def test_message_without_destination_rejected(self, db):
        sender = UserFactory()

        with pytest.raises(IntegrityError), transaction.atomic():
            Message.objects.create(content="nowhere", sender=sender)

    def test_message_with_both_destinations_rejected(self, db):
        channel = ChannelFactory()
        recipient = UserFactory()

        with pytest.raises(IntegrityError), transaction.atomic():
            Message.objects.create(
                content="everywhere",
                sender=channel.created_by,
                channel=channel,
                direct_message_recipient=recipient,
            )

    def test_deleting_reply_target_keeps_reply(self, db):
        original = MessageFactory()
        reply = MessageFactory(channel=original.channel, reply_to=original)

        original.delete()
        reply.refresh_from_db()

        assert reply.reply_to_id is None

    def test_deleting_message_removes_attachments(self, db):
        attachment = FileAttachmentFactory()

        attachment.message.delete()

        assert not FileAttachment.objects.filter(pk=attachment.pk).exists()

    def test_direct_message_helpers(self, db):
        dm = DirectMessageFactory()
        channel_message = MessageFactory()

        assert dm.is_direct is True
        assert channel_message.is_direct is False
        assert dm.participant_ids() == frozenset(
            (dm.sender_id, dm.direct_message_recipient_id)
        )
        assert dm.is_edited is False


class TestDirectConversationPair:
    def test_canonical_orders_ids(self):
        assert DirectConversationPair.canonical(9, 3) == (3, 9)
        assert DirectConversationPair.canonical(3, 9) == (3, 9)
        assert DirectConversationPair.canonical(4, 4) == (4, 4)

    def test_reversed_pair_rejected(self, db):
        """
        (b, a) collides with (a, b).

        Why it matters: One conversation per unordered pair of users.
        """
        conversation = DirectConversationFactory()

        with pytest.raises(IntegrityError), transaction.atomic():
            DirectConversationFactory(
                user1=conversation.user2,
                user2=conversation.user1,
            )

    def test_pair_must_be_in_canonical_order(self, db):
        low = UserFactory()
        high = UserFactory()
        conversation = DirectConversationFactory(user1=low, user2=high)
        conversation.pair.delete()

        with pytest.raises(IntegrityError), transaction.atomic():
            DirectConversationPair.objects.create(
                conversation=conversation,
                user_lower=high,
                user_higher=low,
            )


class TestChannelOrdering:
    def test_default_ordering_is_by_name(self, db):
        ChannelFactory(name="zeta")
        ChannelFactory(name="alpha")

        assert list(Channel.objects.values_list("name", flat=True)) == ["alpha", "zeta"]
