from django.contrib import admin
from .models import CleanupAuditEntry


@admin.register(CleanupAuditEntry)
class CleanupAuditEntryAdmin(admin.ModelAdmin):
    """
    Read-only browser for the retention audit log.

    Entries are written by the cleanup job and the unarchive endpoint only.
    """

    list_display = ['executed_at', 'action', 'user', 'performed_by', 'last_login_date']
    list_filter = ['action', 'executed_at']
    search_fields = ['user__id', 'user__email', 'reason']
    raw_id_fields = ['user', 'performed_by']
    date_hierarchy = 'executed_at'
    readonly_fields = [
        'id', 'user', 'action', 'reason', 'last_login_date', 'executed_at', 'performed_by',
    ]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
