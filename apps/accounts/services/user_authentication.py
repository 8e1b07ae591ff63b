"""User authentication service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError

User = get_user_model()


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Uses select_for_update() to prevent race conditions when updating last_login.
    last_login is what the retention job measures inactivity against, so it is
    refreshed on every successful login.

    Args:
        email: User's email
        password: User's password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid, or the account is
            archived or anonymized
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email=email)
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    # Archived users must be unarchived by an admin before they can log in again
    if not user.is_active:
        raise InvalidCredentialsError("Invalid email or password")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user
