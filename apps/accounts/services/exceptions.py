"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid or the account is archived."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist or has already been anonymized."""
    pass
