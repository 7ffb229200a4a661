"""
Tests for message destination resolution.
"""

from chat.destinations import ChannelDestination, DirectDestination, resolve_destination


class TestResolveDestination:
    def test_channel_only(self):
        result = resolve_destination(channel_id=5, direct_message_recipient_id=None)

        assert result.success is True
        assert result.data == ChannelDestination(channel_id=5)
        assert result.data.as_fields() == {
            "channel_id": 5,
            "direct_message_recipient_id": None,
        }

    def test_recipient_only(self):
        result = resolve_destination(channel_id=None, direct_message_recipient_id=7)

        assert result.success is True
        assert result.data == DirectDestination(recipient_id=7)
        assert result.data.as_fields() == {
            "channel_id": None,
            "direct_message_recipient_id": 7,
        }

    def test_neither_is_missing_destination(self):
        result = resolve_destination(channel_id=None, direct_message_recipient_id=None)

        assert result.success is False
        assert result.error_code == "MISSING_DESTINATION"

    def test_both_is_ambiguous_destination(self):
        """
        Both ids set is rejected rather than picking one.

        Why it matters: A message must live in exactly one place.
        """
        result = resolve_destination(channel_id=5, direct_message_recipient_id=7)

        assert result.success is False
        assert result.error_code == "AMBIGUOUS_DESTINATION"
