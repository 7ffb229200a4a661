"""
Tests for UserManager.

The UserManager provides:
- create_user(): Creates regular users with email, username and password
- create_superuser(): Creates admin users with elevated privileges

Related files:
    - managers.py: Implementation under test
    - models.py: User model that uses this manager
"""

import pytest

from authentication.models import User, UserStatus


class TestUserManagerCreateUser:
    """Tests for UserManager.create_user() method."""

    def test_creates_user_with_email_username_and_password(self, db):
        """
        Given valid email, username and password
        When create_user is called
        Then a user is created with those credentials and default status
        """
        user = User.objects.create_user(
            email="mgr@example.com", username="mgr", password="SecurePass123!"
        )

        assert user.pk is not None
        assert user.email == "mgr@example.com"
        assert user.username == "mgr"
        assert user.check_password("SecurePass123!")
        assert user.status == UserStatus.OFFLINE

    def test_password_is_hashed_not_stored_plain(self, db):
        """
        The stored password is a hash, never the plaintext.
        """
        user = User.objects.create_user(
            email="hash@example.com", username="hash", password="SecurePass123!"
        )

        assert user.password != "SecurePass123!"
        assert user.check_password("SecurePass123!")
        assert not user.check_password("wrong")

    def test_stores_email_exactly_as_supplied(self, db):
        """
        Letter case in the email is preserved, domain included.
        """
        user = User.objects.create_user(
            email="MixedCase@EXAMPLE.COM", username="mixed", password="x"
        )

        assert user.email == "MixedCase@EXAMPLE.COM"

    def test_raises_valueerror_when_email_is_empty(self, db):
        with pytest.raises(ValueError, match="Email"):
            User.objects.create_user(email="", username="nomail", password="x")

    def test_raises_valueerror_when_username_is_empty(self, db):
        with pytest.raises(ValueError, match="Username"):
            User.objects.create_user(email="a@example.com", username="", password="x")

    def test_creates_user_without_password_sets_unusable_password(self, db):
        user = User.objects.create_user(email="nopass@example.com", username="nopass")

        assert not user.has_usable_password()

    def test_sets_default_flags_for_regular_user(self, db):
        user = User.objects.create_user(
            email="flags@example.com", username="flags", password="x"
        )

        assert user.is_active is True
        assert user.is_staff is False
        assert user.is_superuser is False


class TestUserManagerCreateSuperuser:
    """Tests for UserManager.create_superuser() method."""

    def test_creates_superuser_with_correct_flags(self, db):
        admin = User.objects.create_superuser(
            email="root@example.com", username="root", password="AdminPass123!"
        )

        assert admin.is_staff is True
        assert admin.is_superuser is True

    def test_raises_valueerror_when_is_staff_is_false(self, db):
        with pytest.raises(ValueError, match="is_staff=True"):
            User.objects.create_superuser(
                email="bad@example.com", username="bad", password="x", is_staff=False
            )

    def test_raises_valueerror_when_is_superuser_is_false(self, db):
        with pytest.raises(ValueError, match="is_superuser=True"):
            User.objects.create_superuser(
                email="bad2@example.com",
                username="bad2",
                password="x",
                is_superuser=False,
            )
