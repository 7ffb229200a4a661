"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User model tests
- test_managers.py: UserManager tests
- test_services.py: AuthService tests
- test_views.py: API endpoint tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_services.py
"""
