"""
URL configuration for chat API.

URL Structure:
    Channels:
        /channels/                               GET, POST
        /channels/{id}/                          PATCH
        /channels/{id}/join/                     POST
        /channels/{id}/leave/                    POST
        /channels/{id}/members/                  GET

    Messages:
        /messages/                               GET, POST
        /messages/{id}/                          PATCH, DELETE
        /messages/search/                        GET
        /messages/{id}/attachments/              GET, POST

    Direct conversations:
        /conversations/                          GET, POST

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import ChannelViewSet, DirectConversationViewSet, MessageViewSet

router = DefaultRouter()
router.register(r"channels", ChannelViewSet, basename="channel")
router.register(r"messages", MessageViewSet, basename="message")
router.register(r"conversations", DirectConversationViewSet, basename="conversation")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
]
