"""
End-to-end chat scenarios through the HTTP API.

Each test walks a realistic sequence starting from registration and
login, so URL wiring, JWT authentication and the services are exercised
together.
"""

from rest_framework import status
from rest_framework.test import APIClient

from chat.models import Channel, ChannelMembership, MemberRole, Message


def register_and_login(username):
    """Register a user through the API and return (client, user_id)."""
    client = APIClient()
    email = f"{username}@example.com"
    registered = client.post(
        "/api/v1/auth/register/",
        {"username": username, "email": email, "password": "secret123"},
        format="json",
    )
    assert registered.status_code == status.HTTP_201_CREATED

    login = client.post(
        "/api/v1/auth/login/",
        {"email": email, "password": "secret123"},
        format="json",
    )
    assert login.status_code == status.HTTP_200_OK
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
    return client, registered.data["id"]


class TestChannelLifecycle:
    def test_create_join_talk_and_hand_over(self, db):
        """
        A channel outlives its creator and disappears with its last member.

        Why it matters: Ownership succession and channel deletion are the
        only ways membership roles change after creation.
        """
        alice, _ = register_and_login("alice")
        bob, bob_id = register_and_login("bob")
        carol, carol_id = register_and_login("carol")

        channel_id = alice.post(
            "/api/v1/chat/channels/", {"name": "launch"}, format="json"
        ).data["id"]
        bob.post(f"/api/v1/chat/channels/{channel_id}/join/", {}, format="json")
        carol.post(
            f"/api/v1/chat/channels/{channel_id}/join/", {"role": "admin"}, format="json"
        )

        question = bob.post(
            "/api/v1/chat/messages/",
            {"content": "When do we ship?", "channel_id": channel_id},
            format="json",
        ).data
        answer = alice.post(
            "/api/v1/chat/messages/",
            {
                "content": "Friday, ship it",
                "channel_id": channel_id,
                "reply_to_message_id": question["id"],
            },
            format="json",
        )
        assert answer.status_code == status.HTTP_201_CREATED
        assert answer.data["reply_to_message_id"] == question["id"]

        found = bob.get("/api/v1/chat/messages/search/", {"q": "SHIP"})
        assert [m["id"] for m in found.data] == [question["id"], answer.data["id"]]

        # Owner leaves: the admin takes over even though bob joined first.
        assert alice.post(f"/api/v1/chat/channels/{channel_id}/leave/").status_code == 200
        owner = ChannelMembership.objects.get(channel_id=channel_id, role=MemberRole.OWNER)
        assert owner.user_id == carol_id

        # The new owner can moderate.
        deleted = carol.delete(f"/api/v1/chat/messages/{question['id']}/")
        assert deleted.status_code == status.HTTP_204_NO_CONTENT
        assert Message.objects.get(pk=answer.data["id"]).reply_to_id is None

        carol.post(f"/api/v1/chat/channels/{channel_id}/leave/")
        owner = ChannelMembership.objects.get(channel_id=channel_id, role=MemberRole.OWNER)
        assert owner.user_id == bob_id

        bob.post(f"/api/v1/chat/channels/{channel_id}/leave/")
        assert not Channel.objects.filter(pk=channel_id).exists()
        assert not Message.objects.exists()


class TestDirectMessaging:
    def test_conversation_and_thread(self, db):
        alice, alice_id = register_and_login("alice")
        bob, bob_id = register_and_login("bob")

        opened = alice.post("/api/v1/chat/conversations/", {"user_id": bob_id}, format="json")
        reopened = bob.post("/api/v1/chat/conversations/", {"user_id": alice_id}, format="json")
        assert opened.data["id"] == reopened.data["id"]

        hello = alice.post(
            "/api/v1/chat/messages/",
            {"content": "hey", "direct_message_recipient_id": bob_id},
            format="json",
        ).data
        reply = bob.post(
            "/api/v1/chat/messages/",
            {
                "content": "hey yourself",
                "direct_message_recipient_id": alice_id,
                "reply_to_message_id": hello["id"],
            },
            format="json",
        )
        assert reply.status_code == status.HTTP_201_CREATED

        thread = alice.get(
            "/api/v1/chat/messages/", {"direct_message_recipient_id": bob_id}
        ).data
        assert [m["id"] for m in thread] == [reply.data["id"], hello["id"]]

        # The recipient cannot delete what they received.
        denied = bob.delete(f"/api/v1/chat/messages/{hello['id']}/")
        assert denied.status_code == status.HTTP_403_FORBIDDEN
