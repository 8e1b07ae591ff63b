"""
Cleanup services - Business logic layer.

Monthly data retention workflow for inactive members: warning, archive,
anonymization, plus the manual unarchive used by admins.
"""

from .audit_log import (
    log_cleanup_action,
    has_cleanup_action_been_performed,
)

from .user_queries import (
    months_between,
    months_ago_cutoff,
    get_inactive_users,
    get_users_archived_for_months,
    get_archived_users_with_details,
)

from .notifications import CleanupNotifier

from .cleanup_policy import (
    StageResult,
    CleanupRunResult,
    UserCleanupPolicy,
    process_users_at_34_months,
    process_users_at_36_months,
    process_users_at_48_months,
    run_user_cleanup,
)

from .unarchive import unarchive_user

from .scheduling import (
    cleanup_run_lock,
    run_scheduled_user_cleanup,
)

from .exceptions import (
    CleanupServiceError,
    ArchivedUserNotFoundError,
    NotificationError,
    CleanupAlreadyRunningError,
)

__all__ = [
    # Audit Log
    'log_cleanup_action',
    'has_cleanup_action_been_performed',
    # User Queries
    'months_between',
    'months_ago_cutoff',
    'get_inactive_users',
    'get_users_archived_for_months',
    'get_archived_users_with_details',
    # Notifications
    'CleanupNotifier',
    # Cleanup Policy
    'StageResult',
    'CleanupRunResult',
    'UserCleanupPolicy',
    'process_users_at_34_months',
    'process_users_at_36_months',
    'process_users_at_48_months',
    'run_user_cleanup',
    # Unarchive
    'unarchive_user',
    # Scheduling
    'cleanup_run_lock',
    'run_scheduled_user_cleanup',
    # Exceptions
    'CleanupServiceError',
    'ArchivedUserNotFoundError',
    'NotificationError',
    'CleanupAlreadyRunningError',
]
