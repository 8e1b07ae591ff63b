# ==========================================
# apps/cleanup/models.py
# ==========================================

from django.db import models
import uuid


class CleanupAction(models.TextChoices):
    WARN_34_MONTHS = 'warn_34_months', '34-month inactivity warning'
    ARCHIVE_36_MONTHS = 'archive_36_months', '36-month archive'
    WARN_47_MONTHS = 'warn_47_months', '47-month final warning'
    ANONYMIZE_48_MONTHS = 'anonymize_48_months', '48-month anonymization'
    SKIPPED_UNPAID_INVOICE = 'skipped_unpaid_invoice', 'Skipped (unpaid invoices)'
    UNARCHIVE = 'unarchive', 'Manual unarchive'


class CleanupAuditEntry(models.Model):
    """
    Append-only record of a retention action taken on a user.

    The rows double as the idempotency log of the monthly job: an automated
    stage never acts twice on a user it already has an entry for.
    performed_by is null for automated actions and set to the admin for
    manual ones (unarchive).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='cleanup_audit_entries'
    )
    action = models.CharField(max_length=50, choices=CleanupAction.choices)
    reason = models.TextField(blank=True)
    last_login_date = models.DateTimeField(null=True, blank=True)
    executed_at = models.DateTimeField(auto_now_add=True)
    performed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='performed_cleanup_actions'
    )

    class Meta:
        db_table = 'user_cleanup_audit'
        indexes = [
            models.Index(fields=['user', 'action'], name='idx_user_action'),
            models.Index(fields=['executed_at'], name='idx_executed_at'),
        ]
        ordering = ['-executed_at']
        verbose_name_plural = 'cleanup audit entries'

    def __str__(self):
        return f'{self.get_action_display()} for {self.user_id} at {self.executed_at}'

    @property
    def is_automated(self):
        return self.performed_by_id is None

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError('Cleanup audit entries are immutable')
        super().save(*args, **kwargs)
