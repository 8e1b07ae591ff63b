"""
Monthly user cleanup (data retention) workflow.

Three stages run in order on every invocation:

1. 34 months without login: warn the user that the account will be archived.
2. 36 months without login: archive the account and hide its cylinder sets.
3. 12 months after archiving (48 months in total): anonymize the account.

Archiving and anonymization are deferred while the user has unpaid fill
events; the admin is notified instead and the deferral is logged on every run
until the debt is settled.

Every automated action is recorded in the audit log and never repeated for
the same user, so the job can be re-run safely. Stages 2 and 3 process each
user in a transaction of its own: a failing user is rolled back and logged
while the rest of the batch carries on.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from django.db import DEFAULT_DB_ALIAS, transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.cylinders.services import set_owner_cylinder_sets_archived
from apps.fills.services import get_unpaid_fill_events
from apps.cleanup.models import CleanupAction

from .audit_log import has_cleanup_action_been_performed, log_cleanup_action
from .notifications import CleanupNotifier
from .user_queries import get_inactive_users, get_users_archived_for_months

logger = logging.getLogger(__name__)

WARNING_AFTER_MONTHS = 34
ARCHIVE_AFTER_MONTHS = 36
ANONYMIZE_AFTER_ARCHIVED_MONTHS = 12

# Per-user outcomes
PROCESSED = 'processed'
SKIPPED = 'skipped'
DEFERRED = 'deferred'


@dataclass
class StageResult:
    """Counters for one stage of a cleanup run."""
    stage: str
    candidates: int = 0
    processed: int = 0
    skipped: int = 0
    deferred: int = 0
    failed: int = 0
    failed_user_ids: List[str] = field(default_factory=list)

    def record(self, outcome: str) -> None:
        setattr(self, outcome, getattr(self, outcome) + 1)

    def to_dict(self) -> Dict[str, int]:
        return {
            'candidates': self.candidates,
            'processed': self.processed,
            'skipped': self.skipped,
            'deferred': self.deferred,
            'failed': self.failed,
        }


@dataclass
class CleanupRunResult:
    started_at: datetime
    stages: List[StageResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def failed(self) -> int:
        return sum(stage.failed for stage in self.stages)

    def to_dict(self):
        return {
            'started_at': self.started_at.isoformat(),
            'duration_seconds': round(self.duration_seconds, 3),
            'stages': {stage.stage: stage.to_dict() for stage in self.stages},
        }


def _iso(value: Optional[datetime]) -> str:
    return value.isoformat() if value else 'never'


class UserCleanupPolicy:
    """
    Runs the retention stages against one database.

    Args:
        notifier: Sends the retention e-mails (CleanupNotifier by default)
        using: Database alias every query and write goes to
    """

    def __init__(self, notifier: Optional[CleanupNotifier] = None, using: str = DEFAULT_DB_ALIAS):
        self.notifier = notifier or CleanupNotifier()
        self.using = using

    # ---------------------------------------------------------------
    # Stage 1: 34-month warning
    # ---------------------------------------------------------------

    def process_users_at_34_months(self, now: Optional[datetime] = None) -> StageResult:
        """
        Warn users inactive for 34+ months.

        No transaction: the warning is sent first and logged afterwards, so a
        crash in between can repeat the warning on the next run.
        """
        now = now or timezone.now()
        result = StageResult(stage=CleanupAction.WARN_34_MONTHS.value)

        logger.info('Processing users at %s months of inactivity', WARNING_AFTER_MONTHS)
        users = get_inactive_users(
            WARNING_AFTER_MONTHS,
            exclude_archived=True,
            exclude_deleted=True,
            now=now,
            using=self.using,
        )
        result.candidates = len(users)
        logger.info('Found %d users inactive for %d+ months', len(users), WARNING_AFTER_MONTHS)

        for user in users:
            try:
                result.record(self._warn_user(user))
            except Exception:
                logger.exception('Failed to process 34-month warning for user %s', user.id)
                result.failed += 1
                result.failed_user_ids.append(str(user.id))

        return result

    def _warn_user(self, user: User) -> str:
        if has_cleanup_action_been_performed(
            user_id=user.id,
            action=CleanupAction.WARN_34_MONTHS,
            using=self.using,
        ):
            logger.debug('User %s already warned at 34 months, skipping', user.id)
            return SKIPPED

        self.notifier.send_inactivity_warning(user, user.months_inactive)

        log_cleanup_action(
            user_id=user.id,
            action=CleanupAction.WARN_34_MONTHS,
            reason=f'Sent 34-month inactivity warning. Last login: {_iso(user.last_login)}',
            last_login_date=user.last_login,
            using=self.using,
        )
        logger.info('Successfully processed 34-month warning for user %s', user.id)
        return PROCESSED

    # ---------------------------------------------------------------
    # Stage 2: 36-month archive
    # ---------------------------------------------------------------

    def process_users_at_36_months(self, now: Optional[datetime] = None) -> StageResult:
        """Archive users inactive for 36+ months, one transaction per user."""
        now = now or timezone.now()
        result = StageResult(stage=CleanupAction.ARCHIVE_36_MONTHS.value)

        logger.info('Processing users at %s months of inactivity', ARCHIVE_AFTER_MONTHS)
        users = get_inactive_users(
            ARCHIVE_AFTER_MONTHS,
            exclude_archived=True,
            exclude_deleted=True,
            now=now,
            using=self.using,
        )
        result.candidates = len(users)
        logger.info('Found %d users inactive for %d+ months', len(users), ARCHIVE_AFTER_MONTHS)

        for user in users:
            try:
                with transaction.atomic(using=self.using):
                    outcome = self._archive_user(user, now)
            except Exception:
                logger.exception('Failed to archive user %s', user.id)
                result.failed += 1
                result.failed_user_ids.append(str(user.id))
                continue
            result.record(outcome)

        return result

    def _archive_user(self, user: User, now: datetime) -> str:
        if has_cleanup_action_been_performed(
            user_id=user.id,
            action=CleanupAction.ARCHIVE_36_MONTHS,
            using=self.using,
        ):
            logger.debug('User %s already archived, skipping', user.id)
            return SKIPPED

        locked = self._lock_user(user)
        if locked is None or locked.archived_at is not None or locked.deleted_at is not None:
            logger.debug('User %s changed state since the candidate query, skipping', user.id)
            return SKIPPED

        unpaid = get_unpaid_fill_events(user_id=locked.id, using=self.using)
        if unpaid:
            logger.warning(
                'User %s has unpaid invoices, skipping archive and notifying admin',
                locked.id
            )
            self.notifier.send_unpaid_invoice_admin_notification(locked, len(unpaid))
            log_cleanup_action(
                user_id=locked.id,
                action=CleanupAction.SKIPPED_UNPAID_INVOICE,
                reason=(
                    f'User has {len(unpaid)} unpaid invoices. '
                    f'Last login: {_iso(locked.last_login)}'
                ),
                last_login_date=locked.last_login,
                using=self.using,
            )
            return DEFERRED

        locked.archived_at = now
        locked.save(using=self.using, update_fields=['archived_at'])
        set_owner_cylinder_sets_archived(owner_id=locked.id, archived=True, using=self.using)

        self.notifier.send_archived_notification(locked)

        log_cleanup_action(
            user_id=locked.id,
            action=CleanupAction.ARCHIVE_36_MONTHS,
            reason=(
                f'User archived after 36 months of inactivity. '
                f'Last login: {_iso(locked.last_login)}'
            ),
            last_login_date=locked.last_login,
            using=self.using,
        )
        logger.info('Successfully archived user %s', locked.id)
        return PROCESSED

    # ---------------------------------------------------------------
    # Stage 3: anonymize 12 months after archiving
    # ---------------------------------------------------------------

    def process_users_at_48_months(self, now: Optional[datetime] = None) -> StageResult:
        """Anonymize users archived for 12+ months, one transaction per user."""
        now = now or timezone.now()
        result = StageResult(stage=CleanupAction.ANONYMIZE_48_MONTHS.value)

        logger.info('Processing users archived for %s months', ANONYMIZE_AFTER_ARCHIVED_MONTHS)
        users = get_users_archived_for_months(
            ANONYMIZE_AFTER_ARCHIVED_MONTHS,
            now=now,
            using=self.using,
        )
        result.candidates = len(users)
        logger.info(
            'Found %d users archived for %d+ months',
            len(users), ANONYMIZE_AFTER_ARCHIVED_MONTHS
        )

        for user in users:
            try:
                with transaction.atomic(using=self.using):
                    outcome = self._anonymize_user(user, now)
            except Exception:
                logger.exception('Failed to anonymize user %s', user.id)
                result.failed += 1
                result.failed_user_ids.append(str(user.id))
                continue
            result.record(outcome)

        return result

    def _anonymize_user(self, user: User, now: datetime) -> str:
        if has_cleanup_action_been_performed(
            user_id=user.id,
            action=CleanupAction.ANONYMIZE_48_MONTHS,
            using=self.using,
        ):
            logger.debug('User %s already anonymized, skipping', user.id)
            return SKIPPED

        locked = self._lock_user(user)
        if locked is None or locked.archived_at is None or locked.deleted_at is not None:
            logger.debug('User %s changed state since the candidate query, skipping', user.id)
            return SKIPPED

        archived_at = locked.archived_at

        unpaid = get_unpaid_fill_events(user_id=locked.id, using=self.using)
        if unpaid:
            logger.warning(
                'User %s has unpaid invoices, skipping anonymization and notifying admin',
                locked.id
            )
            self.notifier.send_unpaid_invoice_admin_notification(locked, len(unpaid))
            log_cleanup_action(
                user_id=locked.id,
                action=CleanupAction.SKIPPED_UNPAID_INVOICE,
                reason=(
                    f'User has {len(unpaid)} unpaid invoices. Admin notified. '
                    f'Archived at: {_iso(archived_at)}'
                ),
                last_login_date=locked.last_login,
                using=self.using,
            )
            return DEFERRED

        last_login = locked.last_login
        locked.anonymize(now=now)

        log_cleanup_action(
            user_id=locked.id,
            action=CleanupAction.ANONYMIZE_48_MONTHS,
            reason=(
                f'User anonymized after 12 months of being archived. '
                f'Archived at: {_iso(archived_at)}'
            ),
            last_login_date=last_login,
            using=self.using,
        )
        logger.info('Successfully anonymized user %s', locked.id)
        return PROCESSED

    def _lock_user(self, user: User) -> Optional[User]:
        return (
            User.objects
            .using(self.using)
            .select_for_update()
            .filter(pk=user.pk)
            .first()
        )

    # ---------------------------------------------------------------
    # Whole run
    # ---------------------------------------------------------------

    def run(self, now: Optional[datetime] = None) -> CleanupRunResult:
        """
        Run all stages in order.

        An error escaping a stage aborts the remaining stages and propagates.
        Per-user failures are counted in the stage results instead.
        """
        now = now or timezone.now()
        run = CleanupRunResult(started_at=now)
        start = time.monotonic()
        logger.info('Starting user cleanup job')

        try:
            run.stages.append(self.process_users_at_34_months(now=now))
            run.stages.append(self.process_users_at_36_months(now=now))
            run.stages.append(self.process_users_at_48_months(now=now))
        except Exception:
            logger.exception('User cleanup job failed')
            raise
        finally:
            run.duration_seconds = time.monotonic() - start

        logger.info(
            'User cleanup job completed in %.2fs: %s',
            run.duration_seconds, run.to_dict()['stages']
        )
        return run

    def preview(self, now: Optional[datetime] = None) -> Dict[str, List[User]]:
        """
        Users each stage would act on, without side effects.

        Users the stage already handled are left out. Users that would be
        deferred for unpaid fill events are included; their
        ``has_unpaid_fill_events`` attribute is set.
        """
        now = now or timezone.now()
        stages = [
            (
                CleanupAction.WARN_34_MONTHS,
                get_inactive_users(WARNING_AFTER_MONTHS, True, True, now=now, using=self.using),
            ),
            (
                CleanupAction.ARCHIVE_36_MONTHS,
                get_inactive_users(ARCHIVE_AFTER_MONTHS, True, True, now=now, using=self.using),
            ),
            (
                CleanupAction.ANONYMIZE_48_MONTHS,
                get_users_archived_for_months(
                    ANONYMIZE_AFTER_ARCHIVED_MONTHS, now=now, using=self.using
                ),
            ),
        ]

        preview = {}
        for action, users in stages:
            pending = []
            for user in users:
                if has_cleanup_action_been_performed(
                    user_id=user.id, action=action, using=self.using
                ):
                    continue
                user.has_unpaid_fill_events = bool(
                    get_unpaid_fill_events(user_id=user.id, using=self.using)
                )
                pending.append(user)
            preview[action.value] = pending
        return preview


def process_users_at_34_months(*, notifier=None, now=None, using=DEFAULT_DB_ALIAS) -> StageResult:
    return UserCleanupPolicy(notifier=notifier, using=using).process_users_at_34_months(now=now)


def process_users_at_36_months(*, notifier=None, now=None, using=DEFAULT_DB_ALIAS) -> StageResult:
    return UserCleanupPolicy(notifier=notifier, using=using).process_users_at_36_months(now=now)


def process_users_at_48_months(*, notifier=None, now=None, using=DEFAULT_DB_ALIAS) -> StageResult:
    return UserCleanupPolicy(notifier=notifier, using=using).process_users_at_48_months(now=now)


def run_user_cleanup(*, notifier=None, now=None, using=DEFAULT_DB_ALIAS) -> CleanupRunResult:
    """Run the whole monthly cleanup. See UserCleanupPolicy.run."""
    return UserCleanupPolicy(notifier=notifier, using=using).run(now=now)
