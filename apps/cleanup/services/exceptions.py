"""Domain exceptions for the user cleanup (data retention) app."""


class CleanupServiceError(Exception):
    """Base exception for all cleanup service errors."""
    pass


class ArchivedUserNotFoundError(CleanupServiceError):
    """User does not exist, is not archived, or is already anonymized."""
    pass


class NotificationError(CleanupServiceError):
    """A cleanup e-mail could not be handed to the mail transport."""
    pass


class CleanupAlreadyRunningError(CleanupServiceError):
    """Another cleanup run holds the run lock."""
    pass
