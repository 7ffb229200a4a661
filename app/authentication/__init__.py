"""
Authentication application.

This app owns user identity: registration, email/password login with JWT
issuance, profile updates and presence status.

Key components:
    - User model: Custom email-login user with a unique username and status
    - AuthService: Business logic for auth operations

Usage:
    from authentication.models import User, UserStatus
    from authentication.services import AuthService
"""
