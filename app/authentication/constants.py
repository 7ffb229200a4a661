"""
Constants for the authentication app.

Maps AuthService error codes to HTTP status codes for the views.
"""

from rest_framework import status

AUTH_ERROR_STATUS: dict[str, int] = {
    "DUPLICATE_EMAIL": status.HTTP_409_CONFLICT,
    "DUPLICATE_USERNAME": status.HTTP_409_CONFLICT,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_STATUS": status.HTTP_400_BAD_REQUEST,
    "INVALID_FIELD": status.HTTP_400_BAD_REQUEST,
}
