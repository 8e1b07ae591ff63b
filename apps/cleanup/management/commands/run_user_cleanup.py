"""
Management command running the monthly user cleanup.

Meant to be called by cron once a month, for example with the default
schedule in the Europe/Helsinki timezone:

    CRON_TZ=Europe/Helsinki
    0 2 1 * * python manage.py run_user_cleanup

Usage:
    python manage.py run_user_cleanup
    python manage.py run_user_cleanup --dry-run
    python manage.py run_user_cleanup --show-schedule
"""

import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.cleanup.services import (
    UserCleanupPolicy,
    run_scheduled_user_cleanup,
    CleanupAlreadyRunningError,
)

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Warn, archive and anonymize inactive users (monthly data retention job)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List the users each stage would act on without making changes',
        )
        parser.add_argument(
            '--show-schedule',
            action='store_true',
            help='Print the configured cron schedule and exit',
        )

    def handle(self, *args, **options):
        if options['show_schedule']:
            self.stdout.write(
                f'{settings.USER_CLEANUP_SCHEDULE} ({settings.USER_CLEANUP_TIMEZONE})'
            )
            return

        if options['dry_run']:
            self._preview()
            return

        if not settings.USER_CLEANUP_ENABLED:
            logger.info('User cleanup is disabled, skipping run')
            self.stdout.write(
                self.style.WARNING('User cleanup is disabled (USER_CLEANUP_ENABLED=False).')
            )
            return

        try:
            result = run_scheduled_user_cleanup()
        except CleanupAlreadyRunningError as e:
            logger.warning('%s, skipping this run', e)
            raise CommandError(str(e))
        except Exception as e:
            logger.error('Scheduled user cleanup failed: %s', e)
            raise CommandError(f'User cleanup failed: {e}') from e

        for stage in result.stages:
            self.stdout.write(
                f'  - {stage.stage}: {stage.candidates} candidate(s), '
                f'{stage.processed} processed, {stage.skipped} skipped, '
                f'{stage.deferred} deferred (unpaid), {stage.failed} failed'
            )

        if result.failed:
            self.stdout.write(
                self.style.WARNING(
                    f'\nUser cleanup finished with {result.failed} failed user(s). '
                    'They will be retried on the next run.'
                )
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'\n✓ User cleanup finished in {result.duration_seconds:.2f}s'
                )
            )

    def _preview(self):
        preview = UserCleanupPolicy().preview()

        for stage, users in preview.items():
            self.stdout.write(f'\n{stage}: {len(users)} user(s)')
            for user in users:
                unpaid = ' | unpaid fill events, will be deferred' if user.has_unpaid_fill_events else ''
                self.stdout.write(
                    f'  - {user.id} | {user.email} | Last login: {user.last_login}{unpaid}'
                )

        self.stdout.write(
            self.style.WARNING('\n--dry-run mode: No changes made.')
        )
