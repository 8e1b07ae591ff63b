"""
Audit log store for retention actions.

Entries are only ever inserted. Writes join the caller's transaction, so an
audit row commits or rolls back together with the state change it records.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS

from apps.cleanup.models import CleanupAction, CleanupAuditEntry


def log_cleanup_action(
    *,
    user_id: UUID,
    action: CleanupAction,
    reason: str,
    last_login_date: Optional[datetime],
    performed_by_user_id: Optional[UUID] = None,
    using: str = DEFAULT_DB_ALIAS
) -> CleanupAuditEntry:
    """
    Record a cleanup action.

    Args:
        user_id: User the action was taken on
        action: CleanupAction value
        reason: Free-text context for auditors
        last_login_date: Snapshot of the user's last login at action time
        performed_by_user_id: Admin who triggered a manual action; None for
            the scheduled job
        using: Database alias

    Returns:
        Created CleanupAuditEntry
    """
    return CleanupAuditEntry.objects.using(using).create(
        user_id=user_id,
        action=action,
        reason=reason,
        last_login_date=last_login_date,
        performed_by_id=performed_by_user_id,
    )


def has_cleanup_action_been_performed(
    *,
    user_id: UUID,
    action: CleanupAction,
    using: str = DEFAULT_DB_ALIAS
) -> bool:
    return (
        CleanupAuditEntry.objects
        .using(using)
        .filter(user_id=user_id, action=action)
        .exists()
    )
