"""Cylinder set management service."""

from typing import List
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS, transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.cylinders.models import DivingCylinderSet, DivingCylinder

from .exceptions import CylinderSetNotFoundError, InvalidCylinderSetError


def get_user_cylinder_sets(*, user: User) -> QuerySet:
    """Return the user's visible (non-archived) cylinder sets with their cylinders."""
    return (
        DivingCylinderSet.objects
        .filter(owner=user, archived=False)
        .prefetch_related('cylinders')
    )


@transaction.atomic
def create_cylinder_set(
    *,
    owner: User,
    name: str,
    cylinders: List[dict]
) -> DivingCylinderSet:
    """
    Create a cylinder set together with its cylinders.

    Args:
        owner: User owning the set
        name: Display name of the set
        cylinders: Cylinder field dicts (volume, pressure, material,
            serial_number, inspection)

    Returns:
        Created DivingCylinderSet instance

    Raises:
        InvalidCylinderSetError: If no cylinders are given
    """
    if not cylinders:
        raise InvalidCylinderSetError("A cylinder set needs at least one cylinder")

    cylinder_set = DivingCylinderSet.objects.create(owner=owner, name=name)
    DivingCylinder.objects.bulk_create([
        DivingCylinder(cylinder_set=cylinder_set, **cylinder)
        for cylinder in cylinders
    ])

    return cylinder_set


@transaction.atomic
def archive_cylinder_set(*, cylinder_set_id: UUID, user: User) -> DivingCylinderSet:
    """
    Archive one of the user's cylinder sets.

    Raises:
        CylinderSetNotFoundError: If the set does not exist, is already
            archived, or is owned by someone else
    """
    try:
        cylinder_set = (
            DivingCylinderSet.objects
            .select_for_update()
            .get(id=cylinder_set_id, owner=user, archived=False)
        )
    except DivingCylinderSet.DoesNotExist:
        raise CylinderSetNotFoundError(f"Cylinder set with ID {cylinder_set_id} not found")

    cylinder_set.archived = True
    cylinder_set.save(update_fields=['archived'])

    return cylinder_set


def set_owner_cylinder_sets_archived(
    *,
    owner_id: UUID,
    archived: bool,
    using: str = DEFAULT_DB_ALIAS
) -> int:
    """
    Toggle the archived flag on every set owned by a user.

    Used when the owner's account is archived, anonymized or unarchived.
    Runs inside the caller's transaction.

    Returns:
        Number of sets updated
    """
    return (
        DivingCylinderSet.objects
        .using(using)
        .filter(owner_id=owner_id)
        .update(archived=archived)
    )
