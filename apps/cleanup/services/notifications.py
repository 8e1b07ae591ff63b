"""
Retention e-mails.

Each send is a single call to the configured mail backend. A failure is
logged and raised as NotificationError; retrying is left to the next monthly
run.
"""

import logging
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from apps.accounts.models import User

from .exceptions import NotificationError

logger = logging.getLogger(__name__)

INACTIVITY_WARNING_SUBJECT = 'Fill station - your account will be archived soon'
ARCHIVED_NOTIFICATION_SUBJECT = 'Fill station - your account has been archived'
FINAL_WARNING_SUBJECT = 'Fill station - your data will be anonymized soon'
UNPAID_INVOICE_ADMIN_SUBJECT = 'Fill station - user due for cleanup has unpaid invoices'


class CleanupNotifier:
    """
    Renders and sends the four retention e-mails.

    Addresses default to the ADMIN_NOTIFICATION_EMAIL and FRONTEND_URL
    settings; tests and callers can pass their own.
    """

    def __init__(self, admin_email: Optional[str] = None, frontend_url: Optional[str] = None):
        self.admin_email = admin_email or settings.ADMIN_NOTIFICATION_EMAIL
        self.frontend_url = frontend_url or settings.FRONTEND_URL

    def send_inactivity_warning(self, user: User, months_inactive: int) -> None:
        """Warn the user two months before the account is archived."""
        self._send(
            template='cleanup/emails/inactivity_warning.txt',
            subject=INACTIVITY_WARNING_SUBJECT,
            recipient=user.email,
            context={'user': user, 'months_inactive': months_inactive},
            description=f'34-month inactivity warning to user {user.id}',
        )

    def send_archived_notification(self, user: User) -> None:
        self._send(
            template='cleanup/emails/archived_notification.txt',
            subject=ARCHIVED_NOTIFICATION_SUBJECT,
            recipient=user.email,
            context={'user': user},
            description=f'archive notification to user {user.id}',
        )

    def send_final_warning(self, user: User) -> None:
        """Warn an archived user one month before anonymization."""
        self._send(
            template='cleanup/emails/final_warning.txt',
            subject=FINAL_WARNING_SUBJECT,
            recipient=user.email,
            context={'user': user},
            description=f'final warning to user {user.id}',
        )

    def send_unpaid_invoice_admin_notification(self, user: User, unpaid_count: int) -> None:
        """Tell the admin that a user's transition is blocked by unpaid fill events."""
        self._send(
            template='cleanup/emails/unpaid_invoice_admin.txt',
            subject=UNPAID_INVOICE_ADMIN_SUBJECT,
            recipient=self.admin_email,
            context={'user': user, 'unpaid_count': unpaid_count},
            description=f'unpaid invoice notification to admin for user {user.id}',
        )

    def _send(self, *, template, subject, recipient, context, description):
        if not recipient:
            raise NotificationError(f'No recipient address for {description}')

        message = render_to_string(template, {
            **context,
            'admin_email': self.admin_email,
            'frontend_url': self.frontend_url,
        })

        try:
            send_mail(
                subject=subject,
                message=message,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[recipient],
                fail_silently=False,
            )
        except Exception as e:
            logger.error('Failed to send %s: %s', description, e)
            raise NotificationError(f'Failed to send {description}') from e

        logger.info('Sent %s', description)
