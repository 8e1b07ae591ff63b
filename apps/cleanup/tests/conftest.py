import calendar
import itertools
import pytest
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cylinders.models import DivingCylinderSet
from apps.fills.models import FillEvent, PaymentEvent, PaymentStatus


# Fixed reference time for the retention stages
NOW = datetime(2026, 6, 15, 12, 0, tzinfo=dt_timezone.utc)

_member_numbers = itertools.count(1)


def _months_before(moment, months):
    index = moment.year * 12 + moment.month - 1 - months
    year, month = divmod(index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def months_before():
    """Return ``moment`` shifted back by whole calendar months."""
    return _months_before


@pytest.fixture
def make_member(db):
    """Factory creating a member with the given retention timestamps."""
    def _make(last_login=None, archived_at=None, deleted_at=None, **extra):
        number = next(_member_numbers)
        extra.setdefault('email', f'member{number}@example.com')
        extra.setdefault('forename', 'Member')
        extra.setdefault('surname', f'Number{number}')
        return User.objects.create_user(
            password='TestPass123!',
            last_login=last_login,
            archived_at=archived_at,
            deleted_at=deleted_at,
            **extra
        )
    return _make


@pytest.fixture
def make_fill_event(db):
    """Factory creating a fill event, optionally paid with the given status."""
    def _make(user, payment_status=None, price='15.00'):
        fill_event = FillEvent.objects.create(
            user=user,
            gas_mixture='Air',
            price=Decimal(price),
        )
        if payment_status is not None:
            payment = PaymentEvent.objects.create(
                user=user,
                status=payment_status,
                total_amount=Decimal(price),
            )
            payment.fill_events.add(fill_event)
        return fill_event
    return _make


@pytest.fixture
def pay_all(db):
    """Settle every fill event of a user with one completed payment."""
    def _pay(user):
        payment = PaymentEvent.objects.create(
            user=user,
            status=PaymentStatus.COMPLETED,
            total_amount=Decimal('0.00'),
        )
        payment.fill_events.add(*FillEvent.objects.filter(user=user))
        return payment
    return _pay


@pytest.fixture
def make_cylinder_set(db):
    def _make(owner, archived=False, name='Twin 12'):
        return DivingCylinderSet.objects.create(owner=owner, name=name, archived=archived)
    return _make


@pytest.fixture
def inactive_37_months(make_member, months_before):
    """Active member whose last login was 37 months before NOW."""
    return make_member(last_login=months_before(NOW, 37))


@pytest.fixture
def archived_13_months(make_member, months_before):
    """Member archived 13 months before NOW, last login 49 months before NOW."""
    return make_member(
        last_login=months_before(NOW, 49),
        archived_at=months_before(NOW, 13),
        phone_number='+358401112223',
    )


# =============================================================================
# HTTP clients
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        forename='Club',
        surname='Admin',
        is_staff=True,
    )


@pytest.fixture
def member(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return an API client authenticated as an admin using JWT."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def member_client(api_client, member):
    """Return an API client authenticated as a regular member using JWT."""
    refresh = RefreshToken.for_user(member)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
