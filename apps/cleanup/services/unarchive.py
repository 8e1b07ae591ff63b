"""Manual unarchive service."""

import logging
from typing import Optional
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS, transaction

from apps.accounts.models import User
from apps.cylinders.services import set_owner_cylinder_sets_archived
from apps.cleanup.models import CleanupAction

from .audit_log import log_cleanup_action
from .exceptions import ArchivedUserNotFoundError

logger = logging.getLogger(__name__)


def unarchive_user(
    *,
    user_id: UUID,
    performed_by_user_id: Optional[UUID],
    using: str = DEFAULT_DB_ALIAS
) -> User:
    """
    Restore an archived account and its cylinder sets.

    Args:
        user_id: Archived user's ID
        performed_by_user_id: Admin performing the action
        using: Database alias

    Returns:
        The unarchived User

    Raises:
        ArchivedUserNotFoundError: If the user does not exist, is not
            archived, or is already anonymized
    """
    with transaction.atomic(using=using):
        user = (
            User.objects
            .using(using)
            .select_for_update()
            .filter(id=user_id, archived_at__isnull=False, deleted_at__isnull=True)
            .first()
        )
        if user is None:
            raise ArchivedUserNotFoundError('User not found, not archived, or already anonymized')

        previous_archived_at = user.archived_at

        user.archived_at = None
        user.save(using=using, update_fields=['archived_at'])
        set_owner_cylinder_sets_archived(owner_id=user.id, archived=False, using=using)

        log_cleanup_action(
            user_id=user.id,
            action=CleanupAction.UNARCHIVE,
            reason=(
                f'User manually unarchived by admin. '
                f'Previous archive date: {previous_archived_at.isoformat()}'
            ),
            last_login_date=user.last_login,
            performed_by_user_id=performed_by_user_id,
            using=using,
        )

    logger.info('User %s unarchived by admin %s', user.id, performed_by_user_id)
    return user
