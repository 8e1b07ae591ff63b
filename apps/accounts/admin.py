# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User
from .services import delete_user


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for club members.

    Shows the retention lifecycle (active / archived / anonymized) next to
    each account. Archiving and unarchiving go through the cleanup app so
    that every transition lands in the audit log.
    """

    list_display = [
        'email',
        'forename',
        'surname',
        'lifecycle_badge',
        'is_staff',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_staff',
        'is_superuser',
        'created_at',
        'last_login',
    ]

    search_fields = [
        'email',
        'forename',
        'surname',
        'phone_number',
    ]

    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'phone_number', 'forename', 'surname', 'password')
        }),
        ('Permissions', {
            'fields': ('is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
        ('Retention', {
            'fields': ('archived_at', 'deleted_at'),
            'classes': ('collapse',),
            'description': 'Managed by the monthly user cleanup job.',
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'forename', 'surname', 'password1', 'password2'),
        }),
        ('Permissions', {
            'fields': ('is_staff', 'is_superuser'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
        'archived_at',
        'deleted_at',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def lifecycle_badge(self, obj):
        """Display retention state as colored badge."""
        if obj.is_deleted:
            return format_html(
                '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Anonymized</span>'
            )
        if obj.is_archived:
            return format_html(
                '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Archived</span>'
            )
        return format_html(
            '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Active</span>'
        )
    lifecycle_badge.short_description = 'Status'
    lifecycle_badge.admin_order_field = 'archived_at'

    actions = ['anonymize_users']

    @admin.action(description='GDPR: Anonymize selected members (IRREVERSIBLE)')
    def anonymize_users(self, request, queryset):
        """Run the account deletion service for each selected member. Staff are left alone."""
        member_ids = list(
            queryset
            .filter(is_staff=False, is_superuser=False, deleted_at__isnull=True)
            .values_list('id', flat=True)
        )
        for user_id in member_ids:
            delete_user(user_id=user_id)

        message = f'Anonymized {len(member_ids)} member(s).'
        left_out = queryset.count() - len(member_ids)
        if left_out:
            message += f' Left out {left_out} staff or already anonymized account(s).'
        self.message_user(request, message)
