"""Domain exceptions for cylinders app."""


class CylindersServiceError(Exception):
    """Base exception for all cylinder service errors."""
    pass


class CylinderSetNotFoundError(CylindersServiceError):
    """Cylinder set does not exist, is archived, or belongs to another user."""
    pass


class InvalidCylinderSetError(CylindersServiceError):
    """Cylinder set payload is invalid (e.g. no cylinders)."""
    pass
