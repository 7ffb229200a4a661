"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        register/                  - User registration
        login/                     - Email/password login (JWT pair)
        token/refresh/             - Refresh access token
    /api/v1/users/                 - User profiles
        me/                        - Current user (GET/PATCH)
        online/                    - Users with status online
        {id}/                      - Public profile
    /api/v1/chat/                  - Chat endpoints
        channels/                  - Channel list/create
        channels/{id}/             - Channel update
        channels/{id}/join/        - Join channel
        channels/{id}/leave/       - Leave channel (ownership succession)
        channels/{id}/members/     - Channel members
        messages/                  - Message list/send
        messages/{id}/             - Message edit/delete
        messages/search/           - Message search
        messages/{id}/attachments/ - Message attachments
        conversations/             - Direct conversations list/open

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication and user profiles
    path("", include("authentication.urls")),
    # Chat
    path("chat/", include("chat.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Team Chat Admin"
admin.site.site_title = "Team Chat Admin Portal"
admin.site.index_title = "Welcome to the Team Chat Admin Portal"
