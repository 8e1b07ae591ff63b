"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from .user_authentication import authenticate_user
from .account_management import delete_user

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'UserNotFoundError',
    # Services
    'authenticate_user',
    'delete_user',
]
