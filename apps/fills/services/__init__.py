"""Fills services - billing queries used by other apps."""

from .unpaid_fill_events import (
    unpaid_fill_events,
    get_unpaid_fill_events,
    user_has_unpaid_fill_events,
    unpaid_fill_event_count_subquery,
)

__all__ = [
    'unpaid_fill_events',
    'get_unpaid_fill_events',
    'user_has_unpaid_fill_events',
    'unpaid_fill_event_count_subquery',
]
