import pytest
from io import StringIO
from unittest import mock
from django.core.cache import cache, caches
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone
from apps.cleanup.models import CleanupAction, CleanupAuditEntry
from apps.cleanup.services import CleanupAlreadyRunningError, cleanup_run_lock
from apps.cleanup.services.scheduling import LOCK_KEY


@pytest.fixture
def inactive_member(make_member, months_before):
    """Member whose last login was 37 months before the real current time."""
    return make_member(last_login=months_before(timezone.now(), 37))


def run_command(*args):
    out = StringIO()
    call_command('run_user_cleanup', *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestRunUserCleanupCommand:

    def test_runs_all_stages(self, inactive_member, mailoutbox):
        output = run_command()

        inactive_member.refresh_from_db()
        assert inactive_member.archived_at is not None
        assert set(
            CleanupAuditEntry.objects.filter(user=inactive_member).values_list('action', flat=True)
        ) == {CleanupAction.WARN_34_MONTHS, CleanupAction.ARCHIVE_36_MONTHS}
        assert 'archive_36_months: 1 candidate(s), 1 processed' in output
        assert 'User cleanup finished' in output
        assert len(mailoutbox) == 2

    def test_disabled(self, settings, inactive_member, mailoutbox):
        settings.USER_CLEANUP_ENABLED = False

        output = run_command()

        assert 'disabled' in output
        assert not CleanupAuditEntry.objects.exists()
        assert mailoutbox == []

    def test_dry_run(self, inactive_member, mailoutbox):
        output = run_command('--dry-run')

        assert str(inactive_member.id) in output
        assert 'No changes made' in output
        inactive_member.refresh_from_db()
        assert inactive_member.archived_at is None
        assert not CleanupAuditEntry.objects.exists()
        assert mailoutbox == []

    def test_show_schedule(self, settings):
        settings.USER_CLEANUP_SCHEDULE = '0 2 1 * *'
        settings.USER_CLEANUP_TIMEZONE = 'Europe/Helsinki'

        output = run_command('--show-schedule')

        assert output.strip() == '0 2 1 * * (Europe/Helsinki)'

    def test_overlapping_run_refused(self, inactive_member):
        cache.add(LOCK_KEY, True, 60)

        with pytest.raises(CommandError, match='already running'):
            run_command()

        assert not CleanupAuditEntry.objects.exists()

    def test_lock_released_after_run(self, inactive_member):
        run_command()

        assert cache.get(LOCK_KEY) is None

    def test_stage_failure_raises_command_error(self, inactive_member):
        with mock.patch(
            'apps.cleanup.services.cleanup_policy.get_inactive_users',
            side_effect=RuntimeError('database gone'),
        ):
            with pytest.raises(CommandError, match='database gone'):
                run_command()

        assert cache.get(LOCK_KEY) is None

    def test_per_user_failures_reported(self, inactive_member):
        with mock.patch(
            'apps.cleanup.services.notifications.send_mail',
            side_effect=OSError('smtp unreachable'),
        ):
            output = run_command()

        assert 'failed user(s)' in output
        inactive_member.refresh_from_db()
        assert inactive_member.archived_at is None


@pytest.mark.django_db
class TestCleanupRunLock:

    def test_lock_is_exclusive(self):
        with cleanup_run_lock(timeout=60):
            with pytest.raises(CleanupAlreadyRunningError):
                with cleanup_run_lock(timeout=60):
                    pass

        with cleanup_run_lock(timeout=60):
            pass

    def test_lock_seen_by_other_cache_connection(self):
        """A separately opened cache connection (another cron process) cannot take the lock."""
        other = caches.create_connection('default')

        with cleanup_run_lock(timeout=60):
            assert other.add(LOCK_KEY, True, 60) is False

        assert other.add(LOCK_KEY, True, 60) is True

    def test_default_cache_is_shared_between_processes(self, settings):
        assert settings.CACHES['default']['BACKEND'] == 'django.core.cache.backends.db.DatabaseCache'
