"""
Scheduled entry point for the monthly cleanup.

Cron invokes the ``run_user_cleanup`` management command, which calls
run_scheduled_user_cleanup. A cache lock keeps two runs from overlapping
when a slow run is still going as the next one fires.
"""

import logging
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache
from django.db import DEFAULT_DB_ALIAS

from .cleanup_policy import CleanupRunResult, UserCleanupPolicy
from .exceptions import CleanupAlreadyRunningError

logger = logging.getLogger(__name__)

LOCK_KEY = 'cleanup:user-cleanup-running'


@contextmanager
def cleanup_run_lock(timeout=None):
    """
    Hold the cleanup run lock for the duration of the block.

    Raises:
        CleanupAlreadyRunningError: If another run holds the lock
    """
    timeout = timeout or settings.USER_CLEANUP_LOCK_TIMEOUT
    if not cache.add(LOCK_KEY, True, timeout):
        raise CleanupAlreadyRunningError('User cleanup is already running')
    try:
        yield
    finally:
        cache.delete(LOCK_KEY)


def run_scheduled_user_cleanup(*, notifier=None, now=None, using=DEFAULT_DB_ALIAS) -> CleanupRunResult:
    """
    Run the monthly cleanup under the run lock.

    Raises:
        CleanupAlreadyRunningError: If a previous run is still in progress
    """
    with cleanup_run_lock():
        return UserCleanupPolicy(notifier=notifier, using=using).run(now=now)
