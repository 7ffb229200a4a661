"""
Message destinations.

A message goes to exactly one place: a channel or a user's direct
messages. The API accepts two optional ids; resolve_destination() turns
them into one of the two destination types, and the rest of the message
code works on that value.

Usage:
    result = resolve_destination(channel_id=5, direct_message_recipient_id=None)
    if not result.success:
        return result
    destination = result.data
    if isinstance(destination, ChannelDestination):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.services import ServiceResult


@dataclass(frozen=True)
class ChannelDestination:
    """Message posted to a channel."""

    channel_id: int

    def as_fields(self) -> dict[str, int | None]:
        """Model field values for a Message with this destination."""
        return {"channel_id": self.channel_id, "direct_message_recipient_id": None}


@dataclass(frozen=True)
class DirectDestination:
    """Message sent directly to a user."""

    recipient_id: int

    def as_fields(self) -> dict[str, int | None]:
        """Model field values for a Message with this destination."""
        return {"channel_id": None, "direct_message_recipient_id": self.recipient_id}


Destination = Union[ChannelDestination, DirectDestination]


def resolve_destination(
    channel_id: int | None,
    direct_message_recipient_id: int | None,
) -> ServiceResult[Destination]:
    """
    Translate the two optional wire fields into a single destination.

    Error codes:
        MISSING_DESTINATION: Neither id supplied
        AMBIGUOUS_DESTINATION: Both ids supplied
    """
    if channel_id is None and direct_message_recipient_id is None:
        return ServiceResult.failure(
            "Either channel_id or direct_message_recipient_id is required",
            error_code="MISSING_DESTINATION",
        )
    if channel_id is not None and direct_message_recipient_id is not None:
        return ServiceResult.failure(
            "Only one of channel_id or direct_message_recipient_id may be set",
            error_code="AMBIGUOUS_DESTINATION",
        )
    if channel_id is not None:
        return ServiceResult.success(ChannelDestination(channel_id))
    return ServiceResult.success(DirectDestination(direct_message_recipient_id))
