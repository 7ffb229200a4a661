"""
Authentication services.

This module provides the AuthService class for registration, login,
profile updates and presence lookups.

Related files:
    - models.py: User, UserStatus
    - views.py: HTTP endpoints that call into this service

Security:
    - Passwords hashed with Django's configured password hashers
    - Unknown email and wrong password produce the same failure, so a
      caller cannot probe which addresses are registered
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db.models import Q
from django.utils import timezone

from authentication.models import User, UserStatus
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet


# Fields a user may change on their own profile
PROFILE_FIELDS = ("display_name", "avatar_url", "status")


class AuthService(BaseService):
    """
    Identity store business logic.

    Usage:
        from authentication.services import AuthService

        result = AuthService.register("alice", "alice@example.com", "secret1")
        if result.success:
            user = result.data

        result = AuthService.authenticate("alice@example.com", "secret1")

    Error codes:
        DUPLICATE_EMAIL: Email already registered
        DUPLICATE_USERNAME: Username already taken
        INVALID_CREDENTIALS: Unknown email or wrong password
        USER_NOT_FOUND: Profile update for an unknown user id
        INVALID_STATUS: Status value outside UserStatus
        INVALID_FIELD: Profile update names a field that is not editable
    """

    @classmethod
    def register(
        cls,
        username: str,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> ServiceResult[User]:
        """
        Create a new user with status offline.

        Email and username are checked for exact (case-sensitive) matches
        in a single query. Email conflicts are reported first.

        Args:
            username: Unique handle
            email: Login identifier
            password: Plaintext password, hashed before storage
            display_name: Optional friendly name

        Returns:
            ServiceResult with the created User
        """
        taken = list(
            User.objects.filter(Q(email=email) | Q(username=username)).values_list(
                "email", "username"
            )
        )
        if any(existing_email == email for existing_email, _ in taken):
            return ServiceResult.failure(
                f"Email {email} is already registered",
                error_code="DUPLICATE_EMAIL",
            )
        if any(existing_username == username for _, existing_username in taken):
            return ServiceResult.failure(
                f"Username {username} is already taken",
                error_code="DUPLICATE_USERNAME",
            )

        user = User.objects.create_user(
            email=email,
            username=username,
            password=password,
            display_name=display_name,
            status=UserStatus.OFFLINE,
        )

        cls.get_logger().info(f"Registered user {user.id} ({user.username})")
        return ServiceResult.success(user)

    @classmethod
    def authenticate(cls, email: str, password: str) -> ServiceResult[User]:
        """
        Verify credentials and mark the user online.

        Status becomes online and updated_at refreshes on every successful
        login, whatever the previous status was.

        Returns:
            ServiceResult with the authenticated User, or INVALID_CREDENTIALS
        """
        user = User.objects.filter(email=email).first()

        if user is None:
            # Run the hasher once anyway so response time does not reveal
            # whether the email exists.
            User().set_password(password)
            return cls._invalid_credentials()

        if not user.is_active or not user.check_password(password):
            return cls._invalid_credentials()

        now = timezone.now()
        user.status = UserStatus.ONLINE
        user.last_login = now
        user.save(update_fields=["status", "last_login", "updated_at"])

        cls.get_logger().info(f"User {user.id} logged in")
        return ServiceResult.success(user)

    @classmethod
    def _invalid_credentials(cls) -> ServiceResult[User]:
        return ServiceResult.failure(
            "Invalid email or password",
            error_code="INVALID_CREDENTIALS",
        )

    @classmethod
    def update_profile(cls, user_id: int, **changes) -> ServiceResult[User]:
        """
        Partially update a user's profile.

        Only the keys present in ``changes`` are written; passing None for
        display_name or avatar_url clears it. updated_at always refreshes.

        Args:
            user_id: ID of the user to update
            **changes: Any of display_name, avatar_url, status

        Returns:
            ServiceResult with the updated User
        """
        unknown = sorted(set(changes) - set(PROFILE_FIELDS))
        if unknown:
            return ServiceResult.failure(
                f"Fields cannot be updated: {', '.join(unknown)}",
                error_code="INVALID_FIELD",
            )

        if "status" in changes and changes["status"] not in UserStatus.values:
            return ServiceResult.failure(
                f"Invalid status {changes['status']!r}",
                error_code="INVALID_STATUS",
            )

        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return ServiceResult.failure(
                f"User with id {user_id} not found",
                error_code="USER_NOT_FOUND",
            )

        for field_name, value in changes.items():
            setattr(user, field_name, value)
        user.save(update_fields=[*changes, "updated_at"])

        cls.get_logger().info(
            f"Updated profile for user {user.id}: {', '.join(changes) or 'no fields'}"
        )
        return ServiceResult.success(user)

    @classmethod
    def get_by_id(cls, user_id: int | None) -> User | None:
        """Return the user, or None for a non-positive or unknown id."""
        if not isinstance(user_id, int) or user_id <= 0:
            return None
        return User.objects.filter(pk=user_id).first()

    @classmethod
    def list_online(cls) -> QuerySet[User]:
        """Return every user whose status is online, ordered by username."""
        return User.objects.filter(status=UserStatus.ONLINE).order_by("username")
