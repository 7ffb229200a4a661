"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Channel limits
- Message operations (content limits, listing pagination)
- Search limits
- Attachment limits
- Error code to HTTP status mapping used by the views

Import example:
    from chat.constants import MESSAGE_CONFIG, SEARCH_CONFIG
"""

from typing import Final

from rest_framework import status


# =============================================================================
# Channel Configuration
# =============================================================================


class CHANNEL_CONFIG:
    """Configuration for channels."""

    MIN_NAME_LENGTH: Final[int] = 1
    MAX_NAME_LENGTH: Final[int] = 50
    MAX_DESCRIPTION_LENGTH: Final[int] = 500


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    # Content limits
    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters
    MIN_CONTENT_LENGTH: Final[int] = 1

    # Listing
    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 100


# =============================================================================
# Search Configuration
# =============================================================================


class SEARCH_CONFIG:
    """Configuration for message search."""

    MAX_RESULTS: Final[int] = 50
    MAX_QUERY_LENGTH: Final[int] = 200


# =============================================================================
# Attachment Configuration
# =============================================================================


class ATTACHMENT_CONFIG:
    """
    Configuration for message attachments.

    Bytes are uploaded out-of-band; only the resolved URL and metadata
    are stored here.
    """

    MAX_FILENAME_LENGTH: Final[int] = 255
    MAX_MIME_TYPE_LENGTH: Final[int] = 100
    MAX_URL_LENGTH: Final[int] = 500


# =============================================================================
# Error Code Mapping
# =============================================================================


CHAT_ERROR_STATUS: Final[dict[str, int]] = {
    # Not found
    "CREATOR_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CHANNEL_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USERS_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SENDER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RECIPIENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "MESSAGE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "REPLY_TARGET_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_A_MEMBER": status.HTTP_404_NOT_FOUND,
    # Conflict
    "ALREADY_MEMBER": status.HTTP_409_CONFLICT,
    # Authorization
    "UNAUTHORIZED": status.HTTP_403_FORBIDDEN,
    "NOT_CHANNEL_MEMBER": status.HTTP_403_FORBIDDEN,
    # Validation
    "MISSING_DESTINATION": status.HTTP_400_BAD_REQUEST,
    "AMBIGUOUS_DESTINATION": status.HTTP_400_BAD_REQUEST,
    "SELF_MESSAGE": status.HTTP_400_BAD_REQUEST,
    "REPLY_CHANNEL_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "REPLY_CONVERSATION_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "OWNER_ROLE_RESERVED": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "INVALID_FIELD": status.HTTP_400_BAD_REQUEST,
    "INVALID_MESSAGE_TYPE": status.HTTP_400_BAD_REQUEST,
}
