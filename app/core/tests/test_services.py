"""
Tests for ServiceResult and BaseService.
"""

import logging

import pytest

from authentication.models import User
from authentication.tests.factories import UserFactory
from core.services import BaseService, ServiceResult


class ExampleService(BaseService):
    pass


class TestServiceResult:
    def test_success_carries_data(self):
        result = ServiceResult.success({"id": 1})

        assert result.success is True
        assert result.data == {"id": 1}
        assert result.error is None
        assert result.error_code is None

    def test_failure_carries_error_and_code(self):
        result = ServiceResult.failure("Channel with id 42 not found", "CHANNEL_NOT_FOUND")

        assert result.success is False
        assert result.data is None
        assert result.error == "Channel with id 42 not found"
        assert result.error_code == "CHANNEL_NOT_FOUND"


class TestBaseService:
    def test_logger_named_after_service(self):
        logger = ExampleService.get_logger()

        assert isinstance(logger, logging.Logger)
        assert logger.name == f"{__name__}.ExampleService"

    def test_atomic_rolls_back_on_error(self, db):
        """
        Writes inside atomic() disappear when the block raises.

        Why it matters: Multi-row writes must never be half applied.
        """
        with pytest.raises(RuntimeError), ExampleService.atomic():
            UserFactory(username="ghost", email="ghost@example.com")
            raise RuntimeError("boom")

        assert not User.objects.filter(username="ghost").exists()

    def test_atomic_commits_on_success(self, db):
        with ExampleService.atomic():
            UserFactory(username="kept", email="kept@example.com")

        assert User.objects.filter(username="kept").exists()
