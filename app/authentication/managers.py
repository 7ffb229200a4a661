"""
Custom user manager for email-based authentication.

This module provides the UserManager class that handles user creation
with email as the login identifier and a required unique username.

Related files:
    - models.py: User model that uses this manager

Security:
    - Passwords are automatically hashed via set_password()
    - Email addresses are stored exactly as supplied; lookups are case-sensitive
"""

from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    """
    Custom manager for User model with email-based authentication.

    Usage:
        # Create a regular user
        user = User.objects.create_user(
            email="user@example.com",
            username="user",
            password="securepassword",
        )

        # Create a superuser
        admin = User.objects.create_superuser(
            email="admin@example.com",
            username="admin",
            password="adminpassword",
        )
    """

    use_in_migrations = True

    def create_user(self, email, username, password=None, **extra_fields):
        """
        Create and save a regular user with the given email, username and password.

        Args:
            email: User's email address (required)
            username: Unique handle (required)
            password: User's password (an unusable password is set if omitted)
            **extra_fields: Additional fields to set on the user

        Returns:
            User: The created user instance

        Raises:
            ValueError: If email or username is not provided
        """
        if not email:
            raise ValueError("The Email field must be set")
        if not username:
            raise ValueError("The Username field must be set")

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=email, username=username, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, username, password=None, **extra_fields):
        """
        Create and save a superuser with the given email, username and password.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, username, password, **extra_fields)
