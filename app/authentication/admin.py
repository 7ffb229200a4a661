"""
Django admin configuration for authentication models.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import BaseUserCreationForm, UserChangeForm

from authentication.models import User


class UserCreationForm(BaseUserCreationForm):
    """Admin add form bound to the custom User model."""

    class Meta(BaseUserCreationForm.Meta):
        model = User
        fields = ("email", "username")


class UserUpdateForm(UserChangeForm):
    """Admin change form bound to the custom User model."""

    class Meta(UserChangeForm.Meta):
        model = User
        fields = "__all__"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model.

    Customized for email-based login with a separate username handle.
    """

    form = UserUpdateForm
    add_form = UserCreationForm

    list_display = (
        "username",
        "email",
        "display_name",
        "status",
        "is_active",
        "is_staff",
        "created_at",
    )
    list_filter = (
        "status",
        "is_active",
        "is_staff",
        "is_superuser",
    )
    search_fields = ("username", "email", "display_name")
    ordering = ("username",)

    fieldsets = (
        (None, {"fields": ("email", "username", "password")}),
        ("Profile", {"fields": ("display_name", "avatar_url", "status")}),
        (
            "Status",
            {"fields": ("is_active", "is_staff", "is_superuser")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Important dates",
            {"fields": ("created_at", "updated_at", "last_login")},
        ),
    )
    readonly_fields = ("created_at", "updated_at", "last_login")

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "username", "password1", "password2"),
            },
        ),
    )
