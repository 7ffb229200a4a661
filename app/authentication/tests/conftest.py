"""
Test configuration and fixtures for authentication tests.

This module provides:
- Reusable user fixtures
- API client helpers for authenticated requests

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get("/api/v1/users/me/")
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.models import UserStatus
from authentication.tests.factories import UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic offline user with password "TestPass123!"."""
    return UserFactory(username="alice", email="alice@example.com")


@pytest.fixture
def other_user(db):
    """Create a second user."""
    return UserFactory(username="bob", email="bob@example.com")


@pytest.fixture
def online_user(db):
    """Create a user whose status is already online."""
    return UserFactory(status=UserStatus.ONLINE)


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(is_active=False)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client for public endpoints."""
    return APIClient()


@pytest.fixture
def authenticated_client(user):
    """
    API client authenticated with JWT token for the default user fixture.

    Use this for tests that need a logged-in user.
    """
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client
