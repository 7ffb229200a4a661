"""
Authentication views.

This module provides API views for:
- Registration and email/password login (JWT issued on login)
- The current user's profile (read and partial update)
- Public user lookups (by id, online list)

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AuthService)
    - urls.py: URL routing

Endpoints:
    - Register: /api/v1/auth/register/
    - Login: /api/v1/auth/login/
    - Refresh token: /api/v1/auth/token/refresh/
    - Current user: /api/v1/users/me/
    - User by id: /api/v1/users/<id>/
    - Online users: /api/v1/users/online/
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.constants import AUTH_ERROR_STATUS
from authentication.serializers import (
    LoginResponseSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)
from authentication.services import AuthService
from core.views import service_failure_response


# =============================================================================
# Registration & Login
# =============================================================================


class RegisterView(APIView):
    """
    API view for account registration.

    POST: Create a new account (status starts offline)

    URL: /api/v1/auth/register/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Register",
        description="Create a new account. Email and username must be unused.",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(description="Invalid input"),
            409: OpenApiResponse(description="Email or username already taken"),
        },
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.register(**serializer.validated_data)
        if not result.success:
            return service_failure_response(result, AUTH_ERROR_STATUS)

        return Response(UserSerializer(result.data).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    API view for email/password login.

    POST: Verify credentials, mark the user online and issue a JWT pair

    URL: /api/v1/auth/login/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Log in",
        description=(
            "Verify email and password. Unknown email and wrong password "
            "return the same 401 response."
        ),
        tags=["Auth"],
        request=LoginSerializer,
        responses={
            200: LoginResponseSerializer,
            401: OpenApiResponse(description="Invalid email or password"),
        },
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.authenticate(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        if not result.success:
            return service_failure_response(result, AUTH_ERROR_STATUS)

        refresh = RefreshToken.for_user(result.data)
        return Response(
            {
                "user": UserSerializer(result.data).data,
                "access": str(refresh.access_token),
                "refresh": str(refresh),
            }
        )


# =============================================================================
# Profile & User Lookup Views
# =============================================================================


class CurrentUserView(APIView):
    """
    API view for the authenticated user's own profile.

    GET: Retrieve current user's profile
    PATCH: Update display_name, avatar_url and/or status

    URL: /api/v1/users/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get current user",
        tags=["Users"],
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        summary="Partially update profile",
        description=(
            "Only the fields present in the body are changed. "
            "Send null to clear display_name or avatar_url."
        ),
        tags=["Users"],
        request=ProfileUpdateSerializer,
        responses={200: UserSerializer},
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = AuthService.update_profile(request.user.id, **serializer.validated_data)
        if not result.success:
            return service_failure_response(result, AUTH_ERROR_STATUS)

        return Response(UserSerializer(result.data).data)


class UserDetailView(APIView):
    """
    API view for looking up another user.

    GET: Retrieve a user's public profile

    URL: /api/v1/users/<id>/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get user",
        tags=["Users"],
        responses={
            200: UserSerializer,
            404: OpenApiResponse(description="User not found"),
        },
    )
    def get(self, request, user_id: int):
        user = AuthService.get_by_id(user_id)
        if user is None:
            return Response(
                {
                    "error": f"User with id {user_id} not found",
                    "error_code": "USER_NOT_FOUND",
                },
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(UserSerializer(user).data)


class OnlineUsersView(APIView):
    """
    API view listing users whose status is online.

    URL: /api/v1/users/online/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List online users",
        tags=["Users"],
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        return Response(UserSerializer(AuthService.list_online(), many=True).data)
