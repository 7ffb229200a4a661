"""
Factory Boy factories for authentication models.

Usage:
    from authentication.tests.factories import UserFactory

    # Create a user with default values (status offline)
    user = UserFactory()

    # Create an online user with a display name
    user = UserFactory(status=UserStatus.ONLINE, display_name="Alice")
"""

import factory

from authentication.models import User, UserStatus


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for User model.

    Creates active users through UserManager.create_user() so passwords are
    hashed the same way as real registrations. The default password is
    "TestPass123!".

    Examples:
        user = UserFactory()
        user = UserFactory(username="alice", email="alice@example.com")
        user = UserFactory(password="other-secret")
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    status = UserStatus.OFFLINE
    is_active = True
    is_staff = False

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Override create to use UserManager.create_user()."""
        password = kwargs.pop("password", "TestPass123!")
        return model_class.objects.create_user(
            email=kwargs.pop("email"),
            username=kwargs.pop("username"),
            password=password,
            **kwargs,
        )
