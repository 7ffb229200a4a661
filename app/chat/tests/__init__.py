"""
Tests for chat app.

This package contains test modules for:
- test_succession.py: Ownership succession planning (no database)
- test_destinations.py: Message destination resolution (no database)
- test_models.py: Channel, membership, message model constraints
- test_services.py: ChannelService and DirectMessageService tests
- test_membership.py: Join, leave and ownership succession
- test_messages.py: MessageService and AttachmentService tests
- test_search.py: MessageSearchService tests
- test_views.py: REST API endpoint tests
- test_integration.py: Multi-step chat scenarios

Usage:
    pytest chat/tests/
    pytest chat/tests/test_membership.py
"""
