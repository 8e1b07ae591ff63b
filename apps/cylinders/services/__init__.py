"""
Cylinders services - Business logic layer.

Cylinder set CRUD for members plus the bulk archive toggle used by the
user retention workflow.
"""

from .cylinder_set_management import (
    get_user_cylinder_sets,
    create_cylinder_set,
    archive_cylinder_set,
    set_owner_cylinder_sets_archived,
)

from .exceptions import (
    CylindersServiceError,
    CylinderSetNotFoundError,
    InvalidCylinderSetError,
)

__all__ = [
    # Cylinder Set Management
    'get_user_cylinder_sets',
    'create_cylinder_set',
    'archive_cylinder_set',
    'set_owner_cylinder_sets_archived',
    # Exceptions
    'CylindersServiceError',
    'CylinderSetNotFoundError',
    'InvalidCylinderSetError',
]
