"""
Chat app for team messaging.

This app handles:
- Channels and their memberships
- Ownership succession when a channel owner leaves
- Direct-message conversations
- Messages, replies and edits
- Message search
- File attachment metadata

Related apps:
    - authentication: User model for members and senders

Usage:
    from chat.services import ChannelService, MembershipService, MessageService

    # Create a channel (creator becomes owner)
    channel = ChannelService.create(name="general", creator_id=user.id).data

    # Join and post
    MembershipService.join(channel.id, other_user.id)
    MessageService.create(
        sender_id=other_user.id,
        content="Hello!",
        channel_id=channel.id,
    )
"""
