"""
Base service layer patterns for business logic encapsulation.

This module provides the two building blocks every domain service uses:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with logging and transaction helpers

Service Layer Philosophy:
    Services own the business rules. Views translate HTTP to service calls
    and ServiceResults back to HTTP; models only describe data.

Pattern Comparison:
    - ServiceResult: Use for expected failures (not found, conflicts,
      authorization, input that breaks a business rule)
    - Exceptions: Use for unexpected failures (database errors, bugs).
      They propagate unchanged and roll back the surrounding transaction.

Usage:
    from core.services import BaseService, ServiceResult

    class ChannelService(BaseService):
        @classmethod
        def create(cls, name: str, creator_id: int) -> ServiceResult[Channel]:
            creator = User.objects.filter(pk=creator_id).first()
            if creator is None:
                return ServiceResult.failure(
                    f"User with id {creator_id} does not exist",
                    error_code="CREATOR_NOT_FOUND",
                )

            with cls.atomic():
                channel = Channel.objects.create(name=name, created_by=creator)
                ChannelMembership.objects.create(channel=channel, user=creator)

            cls.get_logger().info(f"Created channel {channel.id}")
            return ServiceResult.success(channel)

    # In a view
    result = ChannelService.create(name, request.user.id)
    if not result.success:
        return service_failure_response(result, CHAT_ERROR_STATUS)
    return Response(ChannelSerializer(result.data).data, status=201)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures (validation errors, business rule violations).

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Human-readable error message if failed (None if successful)
        error_code: Machine-readable error code for client handling
        errors: Field-level errors for validation failures

    Usage:
        # Success case
        return ServiceResult.success(channel)

        # Failure case
        return ServiceResult.failure(
            f"Channel with id {channel_id} not found", "CHANNEL_NOT_FOUND"
        )

        # Check result
        result = MembershipService.join(channel_id, user_id)
        if result.success:
            membership = result.data
        else:
            print(f"Error: {result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling
            errors: Field-level errors (for validation failures)

        Returns:
            ServiceResult with success=False and error details

        Example:
            return ServiceResult.failure(
                "User is already a member of this channel",
                error_code="ALREADY_MEMBER",
            )
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @classmethod (no instance state)
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation raises, all
        changes are rolled back and the exception propagates.

        Example:
            with cls.atomic():
                channel = Channel.objects.create(name=name, created_by=creator)
                ChannelMembership.objects.create(channel=channel, user=creator)
                # If the membership insert fails, the channel is rolled back too
        """
        with transaction.atomic():
            yield
