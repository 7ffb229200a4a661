"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ChannelViewSet: Channel CRUD, join/leave and member listing
- MessageViewSet: Message operations, search and attachments
- DirectConversationViewSet: Direct-message conversations

URL Structure:
    /api/v1/chat/channels/                        GET, POST
    /api/v1/chat/channels/{id}/                   PATCH
    /api/v1/chat/channels/{id}/join/              POST
    /api/v1/chat/channels/{id}/leave/             POST
    /api/v1/chat/channels/{id}/members/           GET
    /api/v1/chat/messages/                        GET, POST
    /api/v1/chat/messages/{id}/                   PATCH, DELETE
    /api/v1/chat/messages/search/                 GET
    /api/v1/chat/messages/{id}/attachments/       GET, POST
    /api/v1/chat/conversations/                   GET, POST

Design Decisions:
    - Plain ViewSets; every read and write goes through the service layer
    - The acting user is always the authenticated user
    - Service error codes map to HTTP status via CHAT_ERROR_STATUS
"""

from __future__ import annotations

import logging

from django.db import IntegrityError
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.constants import CHAT_ERROR_STATUS
from chat.serializers import (
    ChannelCreateSerializer,
    ChannelListQuerySerializer,
    ChannelMembershipSerializer,
    ChannelSerializer,
    ChannelUpdateSerializer,
    DirectConversationCreateSerializer,
    DirectConversationSerializer,
    FileAttachmentCreateSerializer,
    FileAttachmentSerializer,
    JoinChannelSerializer,
    MessageCreateSerializer,
    MessageListQuerySerializer,
    MessageSearchQuerySerializer,
    MessageSerializer,
    MessageUpdateSerializer,
)
from chat.services import (
    AttachmentService,
    ChannelService,
    DirectMessageService,
    MembershipService,
    MessageSearchService,
    MessageService,
)
from core.views import service_failure_response

logger = logging.getLogger(__name__)


# =============================================================================
# Channel Views
# =============================================================================


class ChannelViewSet(viewsets.ViewSet):
    """
    ViewSet for channel operations.

    list:
        Public channels; with ?include_private=true also the private
        channels the current user belongs to.

    create:
        Create a channel. The current user becomes its owner.

    partial_update:
        Update name, description or visibility. Owner or admin only.

    join / leave:
        Join the channel, or leave it. When the owner leaves, ownership
        passes to the earliest-joined admin (else member); when the last
        member leaves, the channel is deleted.

    members:
        List memberships in join order.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(
        operation_id="list_channels",
        summary="List channels",
        tags=["Chat - Channels"],
        parameters=[ChannelListQuerySerializer],
        responses={200: ChannelSerializer(many=True)},
    )
    def list(self, request):
        query = ChannelListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        channels = ChannelService.list(
            user_id=request.user.id,
            include_private=query.validated_data["include_private"],
        )
        return Response(ChannelSerializer(channels, many=True).data)

    @extend_schema(
        operation_id="create_channel",
        summary="Create channel",
        tags=["Chat - Channels"],
        request=ChannelCreateSerializer,
        responses={201: ChannelSerializer},
    )
    def create(self, request):
        serializer = ChannelCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ChannelService.create(
            creator_id=request.user.id,
            **serializer.validated_data,
        )
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(ChannelSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="update_channel",
        summary="Update channel",
        tags=["Chat - Channels"],
        request=ChannelUpdateSerializer,
        responses={
            200: ChannelSerializer,
            403: OpenApiResponse(description="Not the channel owner or an admin"),
            404: OpenApiResponse(description="Channel not found"),
        },
    )
    def partial_update(self, request, pk=None):
        serializer = ChannelUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = ChannelService.update(
            int(pk),
            serializer.validated_data,
            acting_user_id=request.user.id,
        )
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(ChannelSerializer(result.data).data)

    @extend_schema(
        operation_id="join_channel",
        summary="Join channel",
        tags=["Chat - Channels"],
        request=JoinChannelSerializer,
        responses={
            201: ChannelMembershipSerializer,
            404: OpenApiResponse(description="Channel not found"),
            409: OpenApiResponse(description="Already a member"),
        },
    )
    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        serializer = JoinChannelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MembershipService.join(
            int(pk),
            request.user.id,
            role=serializer.validated_data.get("role"),
        )
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(
            ChannelMembershipSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="leave_channel",
        summary="Leave channel",
        tags=["Chat - Channels"],
        request=None,
        responses={
            200: OpenApiResponse(description='{"success": true}'),
            404: OpenApiResponse(description="Not a member of this channel"),
        },
    )
    @action(detail=True, methods=["post"])
    def leave(self, request, pk=None):
        result = MembershipService.leave(int(pk), request.user.id)
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response({"success": result.data})

    @extend_schema(
        operation_id="list_channel_members",
        summary="List channel members",
        tags=["Chat - Channels"],
        responses={200: ChannelMembershipSerializer(many=True)},
    )
    @action(detail=True, methods=["get"])
    def members(self, request, pk=None):
        result = MembershipService.list_members(int(pk))
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(ChannelMembershipSerializer(result.data, many=True).data)


# =============================================================================
# Message Views
# =============================================================================


class MessageViewSet(viewsets.ViewSet):
    """
    ViewSet for message operations.

    list:
        Page through a channel (?channel_id=) or the DM thread with a user
        (?direct_message_recipient_id=), newest first.

    create:
        Post to a channel or send a direct message, optionally as a reply.

    partial_update:
        Edit content. Only the sender may edit.

    destroy:
        Delete a message and its attachments. The sender may always
        delete; the channel owner and admins may delete channel messages.

    search:
        Case-insensitive substring search over visible messages.

    attachments:
        List or record file attachments of a message.
    """

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    @extend_schema(
        operation_id="list_messages",
        summary="List messages",
        tags=["Chat - Messages"],
        parameters=[MessageListQuerySerializer],
        responses={200: MessageSerializer(many=True)},
    )
    def list(self, request):
        query = MessageListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = MessageService.list(viewer_id=request.user.id, **query.validated_data)
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(MessageSerializer(result.data, many=True).data)

    @extend_schema(
        operation_id="create_message",
        summary="Send message",
        tags=["Chat - Messages"],
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Invalid destination or reply target"),
            403: OpenApiResponse(description="Not a member of the channel"),
            404: OpenApiResponse(description="Channel, recipient or reply target not found"),
        },
    )
    def create(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.create(
            sender_id=request.user.id,
            **serializer.validated_data,
        )
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(MessageSerializer(result.data).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="update_message",
        summary="Edit message",
        tags=["Chat - Messages"],
        request=MessageUpdateSerializer,
        responses={
            200: MessageSerializer,
            403: OpenApiResponse(description="Not the sender"),
            404: OpenApiResponse(description="Message not found"),
        },
    )
    def partial_update(self, request, pk=None):
        serializer = MessageUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.update(
            int(pk),
            serializer.validated_data["content"],
            editor_id=request.user.id,
        )
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(MessageSerializer(result.data).data)

    @extend_schema(
        operation_id="delete_message",
        summary="Delete message",
        tags=["Chat - Messages"],
        responses={
            204: None,
            403: OpenApiResponse(description="Not allowed to delete this message"),
            404: OpenApiResponse(description="Message not found"),
        },
    )
    def destroy(self, request, pk=None):
        result = MessageService.delete(int(pk), request.user.id)
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="search_messages",
        summary="Search messages",
        description=(
            "Case-insensitive substring search across the channels the user "
            "belongs to and the user's direct messages. At most 50 results, "
            "oldest first. A blank query or a channel the user does not "
            "belong to returns an empty list."
        ),
        parameters=[
            OpenApiParameter(
                name="q",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Text to search for",
                required=False,
            ),
            OpenApiParameter(
                name="channel_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Limit search to a specific channel",
                required=False,
            ),
        ],
        responses={200: MessageSerializer(many=True)},
        tags=["Chat - Search"],
    )
    @action(detail=False, methods=["get"])
    def search(self, request):
        query = MessageSearchQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        messages = MessageSearchService.search(
            query.validated_data["q"],
            request.user.id,
            channel_id=query.validated_data["channel_id"],
        )
        return Response(MessageSerializer(messages, many=True).data)

    @extend_schema(
        operation_id="message_attachments",
        summary="List or add message attachments",
        tags=["Chat - Attachments"],
        request=FileAttachmentCreateSerializer,
        responses={
            200: FileAttachmentSerializer(many=True),
            201: FileAttachmentSerializer,
            400: OpenApiResponse(description="Invalid input or unknown message"),
        },
    )
    @action(detail=True, methods=["get", "post"])
    def attachments(self, request, pk=None):
        if request.method == "GET":
            attachments = AttachmentService.list_for_message(int(pk))
            return Response(FileAttachmentSerializer(attachments, many=True).data)

        serializer = FileAttachmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            attachment = AttachmentService.create(int(pk), **serializer.validated_data)
        except IntegrityError as exc:
            logger.warning(f"Attachment rejected for message {pk}: {exc}")
            return Response(
                {"error": str(exc), "error_code": "FOREIGN_KEY_VIOLATION"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        return Response(
            FileAttachmentSerializer(attachment).data,
            status=status.HTTP_201_CREATED,
        )


# =============================================================================
# Direct Conversation Views
# =============================================================================


class DirectConversationViewSet(viewsets.ViewSet):
    """
    ViewSet for direct-message conversations.

    list:
        Conversations the current user is part of.

    create:
        Open (or fetch the existing) conversation with another user.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_direct_conversations",
        summary="List direct conversations",
        tags=["Chat - Direct Messages"],
        responses={200: DirectConversationSerializer(many=True)},
    )
    def list(self, request):
        conversations = DirectMessageService.list_for_user(request.user.id)
        return Response(DirectConversationSerializer(conversations, many=True).data)

    @extend_schema(
        operation_id="create_direct_conversation",
        summary="Open direct conversation",
        description="Returns the existing conversation if one already exists.",
        tags=["Chat - Direct Messages"],
        request=DirectConversationCreateSerializer,
        responses={
            200: DirectConversationSerializer,
            404: OpenApiResponse(description="User not found"),
        },
    )
    def create(self, request):
        serializer = DirectConversationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = DirectMessageService.get_or_create(
            request.user.id,
            serializer.validated_data["user_id"],
        )
        if not result.success:
            return service_failure_response(result, CHAT_ERROR_STATUS)

        return Response(DirectConversationSerializer(result.data).data)
