import pytest
from apps.cleanup.models import CleanupAction
from apps.cleanup.services import log_cleanup_action, has_cleanup_action_been_performed


@pytest.mark.django_db
class TestCleanupAuditLog:

    def test_log_automated_action(self, make_member, months_before, now):
        last_login = months_before(now, 34)
        user = make_member(last_login=last_login)

        entry = log_cleanup_action(
            user_id=user.id,
            action=CleanupAction.WARN_34_MONTHS,
            reason='Sent warning',
            last_login_date=last_login,
        )

        assert entry.user == user
        assert entry.action == CleanupAction.WARN_34_MONTHS
        assert entry.last_login_date == last_login
        assert entry.executed_at is not None
        assert entry.performed_by is None
        assert entry.is_automated

    def test_log_manual_action_records_admin(self, make_member, admin_user):
        user = make_member()

        entry = log_cleanup_action(
            user_id=user.id,
            action=CleanupAction.UNARCHIVE,
            reason='Unarchived',
            last_login_date=None,
            performed_by_user_id=admin_user.id,
        )

        assert entry.performed_by == admin_user
        assert not entry.is_automated

    def test_has_action_been_performed(self, make_member):
        user = make_member()
        other = make_member()
        log_cleanup_action(
            user_id=user.id,
            action=CleanupAction.ARCHIVE_36_MONTHS,
            reason='Archived',
            last_login_date=None,
        )

        assert has_cleanup_action_been_performed(
            user_id=user.id, action=CleanupAction.ARCHIVE_36_MONTHS
        )
        assert not has_cleanup_action_been_performed(
            user_id=user.id, action=CleanupAction.ANONYMIZE_48_MONTHS
        )
        assert not has_cleanup_action_been_performed(
            user_id=other.id, action=CleanupAction.ARCHIVE_36_MONTHS
        )

    def test_entries_are_immutable(self, make_member):
        user = make_member()
        entry = log_cleanup_action(
            user_id=user.id,
            action=CleanupAction.WARN_34_MONTHS,
            reason='Sent warning',
            last_login_date=None,
        )

        entry.reason = 'Rewritten history'
        with pytest.raises(ValueError, match='immutable'):
            entry.save()

        entry.refresh_from_db()
        assert entry.reason == 'Sent warning'

