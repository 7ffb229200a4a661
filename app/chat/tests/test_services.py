"""
Tests for ChannelService and DirectMessageService.

Test Organization:
    - Each service method has its own test class
    - Each test validates ONE specific behavior
    - Tests use descriptive names following: test_<scenario>_<expected_outcome>

Testing Philosophy:
    Tests focus on observable behavior:
    - ServiceResult success/failure states and error codes
    - Database state changes
"""

from datetime import timedelta
from unittest.mock import patch

import pytest
from django.db import IntegrityError
from django.utils import timezone
from freezegun import freeze_time

from authentication.tests.factories import UserFactory
from chat.models import (
    Channel,
    ChannelMembership,
    DirectConversationPair,
    DirectMessageConversation,
    MemberRole,
)
from chat.services import ChannelService, DirectMessageService
from chat.tests.factories import (
    ChannelFactory,
    ChannelMembershipFactory,
    PrivateChannelFactory,
)


# =============================================================================
# ChannelService.create
# =============================================================================


class TestChannelServiceCreate:
    """
    Tests for ChannelService.create().

    Verifies:
    - Channel and owner membership are created together
    - Defaults for visibility and description
    - Unknown creators are rejected without writing anything
    """

    def test_creates_channel_with_creator_as_owner(self, db):
        """
        The creator becomes the one and only owner.

        Why it matters: Every channel has exactly one owner from the start.
        """
        creator = UserFactory()

        result = ChannelService.create(name="general", creator_id=creator.id)

        assert result.success is True
        channel = result.data
        assert channel.name == "general"
        assert channel.created_by_id == creator.id
        membership = ChannelMembership.objects.get(channel=channel)
        assert membership.user_id == creator.id
        assert membership.role == MemberRole.OWNER

    def test_defaults_to_public_without_description(self, db):
        creator = UserFactory()

        channel = ChannelService.create(name="general", creator_id=creator.id).data

        assert channel.is_private is False
        assert channel.description is None

    def test_private_channel_with_description(self, db):
        creator = UserFactory()

        channel = ChannelService.create(
            name="leads",
            creator_id=creator.id,
            is_private=True,
            description="Team leads only",
        ).data

        assert channel.is_private is True
        assert channel.description == "Team leads only"

    def test_duplicate_names_allowed(self, db):
        creator = UserFactory()

        first = ChannelService.create(name="general", creator_id=creator.id)
        second = ChannelService.create(name="general", creator_id=creator.id)

        assert first.success and second.success
        assert first.data.id != second.data.id

    def test_unknown_creator_fails_without_writes(self, db):
        result = ChannelService.create(name="general", creator_id=999999)

        assert result.success is False
        assert result.error_code == "CREATOR_NOT_FOUND"
        assert not Channel.objects.exists()
        assert not ChannelMembership.objects.exists()

    def test_failed_owner_membership_rolls_back_channel(self, db):
        """
        Why it matters: A channel without an owner membership would be
        unmanageable, so both rows are written or neither is.
        """
        creator = UserFactory()
        channels_before = Channel.objects.count()

        with patch.object(
            ChannelMembership.objects, "create", side_effect=IntegrityError("DB Error")
        ):
            with pytest.raises(IntegrityError):
                ChannelService.create(name="general", creator_id=creator.id)

        assert Channel.objects.count() == channels_before


# =============================================================================
# ChannelService.update
# =============================================================================


class TestChannelServiceUpdate:
    """
    Tests for ChannelService.update().

    Verifies:
    - Only supplied fields change
    - updated_at always refreshes
    - Owner/admin requirement when an acting user is given
    """

    def test_updates_only_supplied_fields(self, db):
        channel = ChannelFactory(name="general", description="All hands")

        result = ChannelService.update(channel.id, {"name": "announcements"})

        assert result.success is True
        channel.refresh_from_db()
        assert channel.name == "announcements"
        assert channel.description == "All hands"
        assert channel.is_private is False

    def test_can_clear_description(self, db):
        channel = ChannelFactory(description="Old")

        ChannelService.update(channel.id, {"description": None})

        channel.refresh_from_db()
        assert channel.description is None

    def test_empty_update_refreshes_timestamp_only(self, db):
        """
        An empty update is valid and bumps updated_at.

        Why it matters: Clients can "touch" a channel without side effects.
        """
        with freeze_time(timezone.now() - timedelta(days=1)):
            channel = ChannelFactory(name="general")
        before = channel.updated_at

        result = ChannelService.update(channel.id, {})

        assert result.success is True
        channel.refresh_from_db()
        assert channel.name == "general"
        assert channel.updated_at > before

    def test_created_by_never_changes(self, db):
        channel = ChannelFactory()

        result = ChannelService.update(channel.id, {"created_by_id": UserFactory().id})

        assert result.success is False
        assert result.error_code == "INVALID_FIELD"

    def test_unknown_channel(self, db):
        result = ChannelService.update(999999, {"name": "x"})

        assert result.success is False
        assert result.error_code == "CHANNEL_NOT_FOUND"

    def test_admin_may_update(self, channel_with_members, admin_user):
        result = ChannelService.update(
            channel_with_members.id,
            {"is_private": True},
            acting_user_id=admin_user.id,
        )

        assert result.success is True
        assert result.data.is_private is True

    def test_member_may_not_update(self, channel_with_members, member_user):
        result = ChannelService.update(
            channel_with_members.id,
            {"name": "hijacked"},
            acting_user_id=member_user.id,
        )

        assert result.success is False
        assert result.error_code == "UNAUTHORIZED"
        channel_with_members.refresh_from_db()
        assert channel_with_members.name == "team"


# =============================================================================
# ChannelService.list
# =============================================================================


class TestChannelServiceList:
    """
    Tests for ChannelService.list().

    Verifies:
    - Public channels only by default
    - Private channels the user belongs to with include_private
    - No duplicates
    """

    def test_lists_public_channels_only_by_default(self, db):
        user = UserFactory()
        public = ChannelFactory(name="general")
        PrivateChannelFactory(name="secret", created_by=user)

        channels = list(ChannelService.list(user_id=user.id))

        assert channels == [public]

    def test_without_user_lists_public_channels(self, db):
        public = ChannelFactory(name="general")
        PrivateChannelFactory()

        assert list(ChannelService.list(include_private=True)) == [public]

    def test_include_private_adds_member_private_channels(self, db):
        """
        Private channels appear only for their members.

        Why it matters: Private channel names must not leak to outsiders.
        """
        user = UserFactory()
        public = ChannelFactory(name="a-public")
        mine = PrivateChannelFactory(name="b-mine")
        PrivateChannelFactory(name="c-not-mine")
        ChannelMembershipFactory(channel=mine, user=user)

        channels = list(ChannelService.list(user_id=user.id, include_private=True))

        assert channels == [public, mine]

    def test_public_channel_user_belongs_to_listed_once(self, db):
        user = UserFactory()
        public = ChannelFactory(created_by=user)
        ChannelMembershipFactory(channel=public)

        channels = list(ChannelService.list(user_id=user.id, include_private=True))

        assert channels == [public]


# =============================================================================
# DirectMessageService.get_or_create
# =============================================================================


class TestDirectMessageServiceGetOrCreate:
    """
    Tests for DirectMessageService.get_or_create().

    Verifies:
    - New conversations keep the caller's order
    - Existing conversations are returned for either order
    - Unknown users are rejected
    """

    def test_creates_conversation_in_caller_order(self, db):
        alice = UserFactory()
        bob = UserFactory()

        result = DirectMessageService.get_or_create(bob.id, alice.id)

        assert result.success is True
        assert result.data.user1_id == bob.id
        assert result.data.user2_id == alice.id
        pair = DirectConversationPair.objects.get(conversation=result.data)
        assert (pair.user_lower_id, pair.user_higher_id) == (alice.id, bob.id)

    def test_returns_existing_for_same_order(self, db):
        alice = UserFactory()
        bob = UserFactory()

        first = DirectMessageService.get_or_create(alice.id, bob.id)
        second = DirectMessageService.get_or_create(alice.id, bob.id)

        assert first.data.id == second.data.id
        assert DirectMessageConversation.objects.count() == 1

    def test_returns_existing_for_reversed_order(self, db):
        """
        (b, a) finds the conversation created as (a, b), unchanged.

        Why it matters: Either user opening the DM lands in the same thread.
        """
        alice = UserFactory()
        bob = UserFactory()

        first = DirectMessageService.get_or_create(alice.id, bob.id)
        second = DirectMessageService.get_or_create(bob.id, alice.id)

        assert second.data.id == first.data.id
        assert second.data.user1_id == alice.id
        assert DirectMessageConversation.objects.count() == 1

    def test_self_conversation_allowed(self, db):
        alice = UserFactory()

        first = DirectMessageService.get_or_create(alice.id, alice.id)
        second = DirectMessageService.get_or_create(alice.id, alice.id)

        assert first.success is True
        assert first.data.id == second.data.id

    def test_unknown_user_fails(self, db):
        alice = UserFactory()

        result = DirectMessageService.get_or_create(alice.id, 999999)

        assert result.success is False
        assert result.error_code == "USERS_NOT_FOUND"
        assert not DirectMessageConversation.objects.exists()


class TestDirectMessageServiceListForUser:
    def test_lists_conversations_on_either_side(self, db):
        alice = UserFactory()
        bob = UserFactory()
        carol = UserFactory()
        started = DirectMessageService.get_or_create(alice.id, bob.id).data
        received = DirectMessageService.get_or_create(carol.id, alice.id).data
        DirectMessageService.get_or_create(bob.id, carol.id)

        conversations = set(DirectMessageService.list_for_user(alice.id))

        assert conversations == {started, received}

    def test_none_user_lists_nothing(self, db):
        assert list(DirectMessageService.list_for_user(None)) == []
