"""
Unpaid fill event queries.

A fill event is unpaid while none of its linked payment events has
COMPLETED status. A failed or cancelled payment leaves it unpaid.
"""

from uuid import UUID

from django.db import DEFAULT_DB_ALIAS
from django.db.models import Count, Exists, IntegerField, OuterRef, QuerySet, Subquery, Value
from django.db.models.functions import Coalesce

from apps.fills.models import FillEvent, FillEventPaymentEvent, PaymentStatus


def _completed_payment_for_fill_event():
    return FillEventPaymentEvent.objects.filter(
        fill_event=OuterRef('pk'),
        payment_event__status=PaymentStatus.COMPLETED,
    )


def unpaid_fill_events(*, using: str = DEFAULT_DB_ALIAS) -> QuerySet:
    """All fill events without a completed payment."""
    return (
        FillEvent.objects
        .using(using)
        .filter(~Exists(_completed_payment_for_fill_event()))
    )


def get_unpaid_fill_events(*, user_id: UUID, using: str = DEFAULT_DB_ALIAS) -> QuerySet:
    """Return the user's unpaid fill events, oldest first."""
    return (
        unpaid_fill_events(using=using)
        .filter(user_id=user_id)
        .order_by('created_at')
    )


def user_has_unpaid_fill_events(*, user_id: UUID, using: str = DEFAULT_DB_ALIAS) -> bool:
    return get_unpaid_fill_events(user_id=user_id, using=using).exists()


def unpaid_fill_event_count_subquery(user_ref: str = 'pk'):
    """
    ORM expression counting unpaid fill events of the user referenced by
    ``user_ref`` in the outer query. Users without fill events count as 0.
    """
    counts = (
        FillEvent.objects
        .filter(~Exists(_completed_payment_for_fill_event()))
        .filter(user_id=OuterRef(user_ref))
        .order_by()
        .values('user_id')
        .annotate(count=Count('pk'))
        .values('count')
    )
    return Coalesce(
        Subquery(counts, output_field=IntegerField()),
        Value(0),
        output_field=IntegerField(),
    )
