"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures for the usual channel roles
- Channel fixtures (public, private, with a full role hierarchy)
- API client helpers for authenticated requests

Usage:
    def test_example(channel_with_members, client_for, member_user):
        client = client_for(member_user)
        response = client.get(f"/api/v1/chat/channels/{channel_with_members.id}/members/")
        assert response.status_code == 200
"""

from datetime import timedelta

import pytest
from django.utils import timezone
from freezegun import freeze_time
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import UserFactory
from chat.models import MemberRole
from chat.tests.factories import (
    ChannelFactory,
    ChannelMembershipFactory,
    PrivateChannelFactory,
)


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def owner_user(db):
    """Create a user who will own the test channels."""
    return UserFactory(username="owner", email="owner@example.com")


@pytest.fixture
def admin_user(db):
    """Create a user who will be a channel admin."""
    return UserFactory(username="admin", email="admin@example.com")


@pytest.fixture
def member_user(db):
    """Create a user who will be a plain channel member."""
    return UserFactory(username="member", email="member@example.com")


@pytest.fixture
def outsider_user(db):
    """Create a user who belongs to no test channel."""
    return UserFactory(username="outsider", email="outsider@example.com")


# =============================================================================
# Channel Fixtures
# =============================================================================


@pytest.fixture
def channel(db, owner_user):
    """Create a public channel owned by owner_user (its only member)."""
    return ChannelFactory(name="general", created_by=owner_user)


@pytest.fixture
def private_channel(db, owner_user):
    """Create a private channel owned by owner_user (its only member)."""
    return PrivateChannelFactory(name="secret", created_by=owner_user)


@pytest.fixture
def channel_with_members(db, owner_user, admin_user, member_user):
    """
    Create a public channel with owner, admin and member.

    Join times are one minute apart in that order, so succession and
    member ordering are deterministic.
    """
    start = timezone.now() - timedelta(hours=1)

    with freeze_time(start):
        channel = ChannelFactory(name="team", created_by=owner_user)
    with freeze_time(start + timedelta(minutes=1)):
        ChannelMembershipFactory(channel=channel, user=admin_user, role=MemberRole.ADMIN)
    with freeze_time(start + timedelta(minutes=2)):
        ChannelMembershipFactory(channel=channel, user=member_user, role=MemberRole.MEMBER)

    return channel


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def client_for():
    """
    Factory fixture returning an API client authenticated as a given user.

    Usage:
        client = client_for(member_user)
    """

    def _client_for(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _client_for


@pytest.fixture
def owner_client(client_for, owner_user):
    """API client authenticated as owner_user."""
    return client_for(owner_user)


@pytest.fixture
def member_client(client_for, member_user):
    """API client authenticated as member_user."""
    return client_for(member_user)


@pytest.fixture
def outsider_client(client_for, outsider_user):
    """API client authenticated as outsider_user."""
    return client_for(outsider_user)
