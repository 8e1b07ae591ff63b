"""Account management service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone
from uuid import UUID

from .exceptions import UserNotFoundError

User = get_user_model()


@transaction.atomic
def delete_user(*, user_id: UUID) -> User:
    """
    GDPR-compliant account deletion (anonymization) triggered by an admin.

    A member who was never archived is archived at the same moment, so an
    anonymized account always carries an archive date. No cleanup audit
    entry is written; the audit log covers the automated stages and unarchive.

    Args:
        user_id: User's ID

    Returns:
        The anonymized User instance

    Raises:
        UserNotFoundError: If user does not exist or is already anonymized
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(id=user_id, deleted_at__isnull=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    now = timezone.now()
    if user.archived_at is None:
        user.archived_at = now
        user.save(update_fields=['archived_at'])

    user.anonymize(now=now)

    return user
