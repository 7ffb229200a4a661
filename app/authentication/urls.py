"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/        - Create an account
    /api/v1/auth/login/           - Email/password login, returns JWT pair
    /api/v1/auth/token/refresh/   - Exchange a refresh token for a new access token
    /api/v1/users/me/             - Current user's profile (GET/PATCH)
    /api/v1/users/online/         - Users whose status is online
    /api/v1/users/<id>/           - Look up a user by id
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.views import (
    CurrentUserView,
    LoginView,
    OnlineUsersView,
    RegisterView,
    UserDetailView,
)

app_name = "authentication"

urlpatterns = [
    # Account access
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    # Users
    path("users/me/", CurrentUserView.as_view(), name="current-user"),
    path("users/online/", OnlineUsersView.as_view(), name="online-users"),
    path("users/<int:user_id>/", UserDetailView.as_view(), name="user-detail"),
]
