"""
User directory queries for the retention workflow.

Read-only projections of the user table. Month thresholds use whole calendar
months the way MySQL's ``TIMESTAMPDIFF(MONTH, start, end)`` counts them: the
difference of year/month indexes, minus one when the end's day-of-month and
time-of-day fall before the start's. "36 months" therefore means 36 full
calendar months have elapsed, not 36 * 30 days.

All results are lists so that a stage works on a snapshot of its candidates
while it mutates the same rows.
"""

import calendar
from datetime import datetime, timezone as dt_timezone
from typing import List, Optional

from django.db import DEFAULT_DB_ALIAS
from django.utils import timezone

from apps.accounts.models import User
from apps.fills.services import unpaid_fill_event_count_subquery


def months_between(start: datetime, end: datetime) -> int:
    """
    Whole calendar months from ``start`` to ``end``.

    Negative when ``end`` precedes ``start``. Both datetimes are compared in UTC.

    >>> months_between(datetime(2023, 1, 31), datetime(2023, 2, 28))
    0
    >>> months_between(datetime(2023, 1, 31), datetime(2023, 3, 1))
    1
    """
    start = _as_utc(start)
    end = _as_utc(end)

    months = (end.year - start.year) * 12 + (end.month - start.month)
    start_rest = (start.day, start.time())
    end_rest = (end.day, end.time())

    if months > 0 and end_rest < start_rest:
        months -= 1
    elif months < 0 and end_rest > start_rest:
        months += 1
    return months


def months_ago_cutoff(now: datetime, months: int) -> datetime:
    """
    Latest instant ``t`` for which ``months_between(t, now) >= months``.

    Lets the month threshold run as a plain ``<=`` filter in the database.
    When the target month is shorter than ``now``'s day-of-month, every
    instant of that month qualifies, so the cutoff is its last microsecond.
    """
    if months < 0:
        raise ValueError('months must be non-negative')

    now = _as_utc(now)
    month_index = now.year * 12 + (now.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1

    last_day = calendar.monthrange(year, month)[1]
    if now.day <= last_day:
        return now.replace(year=year, month=month)
    return datetime(year, month, last_day, 23, 59, 59, 999999, tzinfo=dt_timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return value.replace(tzinfo=dt_timezone.utc)
    return value.astimezone(dt_timezone.utc)


def _with_months_inactive(users, now: datetime) -> List[User]:
    users = list(users)
    for user in users:
        user.months_inactive = (
            months_between(user.last_login, now) if user.last_login else None
        )
    return users


def get_inactive_users(
    months_inactive: int,
    exclude_archived: bool = False,
    exclude_deleted: bool = True,
    *,
    now: Optional[datetime] = None,
    using: str = DEFAULT_DB_ALIAS
) -> List[User]:
    """
    Users whose last login is at least ``months_inactive`` calendar months ago.

    Users who never logged in are not returned.

    Args:
        months_inactive: Threshold in whole calendar months
        exclude_archived: Leave out users with archived_at set
        exclude_deleted: Leave out anonymized users
        now: Reference time (defaults to the current time)
        using: Database alias

    Returns:
        Users ordered by last_login ascending (longest inactive first), each
        with a ``months_inactive`` attribute
    """
    now = now or timezone.now()

    queryset = User.objects.using(using).filter(
        last_login__lte=months_ago_cutoff(now, months_inactive)
    )
    if exclude_archived:
        queryset = queryset.filter(archived_at__isnull=True)
    if exclude_deleted:
        queryset = queryset.filter(deleted_at__isnull=True)

    return _with_months_inactive(queryset.order_by('last_login'), now)


def get_users_archived_for_months(
    months_since_archive: int,
    *,
    now: Optional[datetime] = None,
    using: str = DEFAULT_DB_ALIAS
) -> List[User]:
    """
    Archived, not yet anonymized users archived at least
    ``months_since_archive`` calendar months ago, oldest archive first.
    """
    now = now or timezone.now()

    queryset = (
        User.objects
        .using(using)
        .filter(
            archived_at__isnull=False,
            deleted_at__isnull=True,
            archived_at__lte=months_ago_cutoff(now, months_since_archive),
        )
        .order_by('archived_at')
    )
    return _with_months_inactive(queryset, now)


def get_archived_users_with_details(
    *,
    now: Optional[datetime] = None,
    using: str = DEFAULT_DB_ALIAS
) -> List[User]:
    """
    All archived, not yet anonymized users for the admin view.

    Each user carries ``unpaid_invoices_count`` (fill events without a
    completed payment) and ``months_inactive``. Most recently archived first.
    """
    now = now or timezone.now()

    queryset = (
        User.objects
        .using(using)
        .filter(archived_at__isnull=False, deleted_at__isnull=True)
        .annotate(unpaid_invoices_count=unpaid_fill_event_count_subquery())
        .order_by('-archived_at')
    )
    return _with_months_inactive(queryset, now)
