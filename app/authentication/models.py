"""
Authentication models.

This module defines the identity model for the chat backend:
- UserStatus: Presence states a user can report
- User: Custom user model with email-based login, a unique username and
  presence status

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AuthService business logic

Security:
    - User passwords hashed with Django's configured password hashers
    - Email and username uniqueness enforced at database level
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class UserStatus(models.TextChoices):
    """Presence status shown next to a user in member lists."""

    ONLINE = "online", "Online"
    AWAY = "away", "Away"
    BUSY = "busy", "Busy"
    OFFLINE = "offline", "Offline"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the login identifier.

    Users are created at registration and never hard-deleted by the
    application; login flips status to online and profile updates change
    the display fields.

    Fields:
        username: Unique handle shown in channels (immutable after signup)
        email: Login identifier, unique (immutable after signup)
        display_name: Optional friendly name
        avatar_url: Optional URL of an already-uploaded avatar image
        status: Presence status (online, away, busy, offline)
        is_active: Whether the user account is active
        is_staff: Whether the user can access Django admin
        created_at: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email="alice@example.com",
            username="alice",
            password="securepassword",
        )
    """

    username = models.CharField(
        max_length=30,
        unique=True,
        help_text="Unique handle (3-30 characters)",
    )

    email = models.EmailField(
        unique=True,
        max_length=254,
        help_text="User's email address (login identifier)",
    )

    display_name = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text="Optional name shown instead of the username",
    )

    avatar_url = models.URLField(
        max_length=500,
        null=True,
        blank=True,
        help_text="URL of the user's avatar image",
    )

    status = models.CharField(
        max_length=10,
        choices=UserStatus.choices,
        default=UserStatus.OFFLINE,
        db_index=True,
        help_text="Presence status",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Designates whether this user should be treated as active",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Designates whether the user can log into admin site",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        db_table = "users"
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["username"]

    def __str__(self):
        return self.username

    @property
    def name(self) -> str:
        """Name to show in the UI: display_name when set, else username."""
        return self.display_name or self.username
