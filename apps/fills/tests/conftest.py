import pytest
from decimal import Decimal
from apps.accounts.models import User
from apps.fills.models import FillEvent, PaymentEvent, PaymentStatus


@pytest.fixture
def user(db):
    """Create and return a test member."""
    return User.objects.create_user(
        email='diver@example.com',
        password='TestPass123!',
        forename='Test',
        surname='Diver',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='otherdiver@example.com',
        password='OtherPass123!',
    )


@pytest.fixture
def make_fill_event(db):
    """Factory creating a fill event, optionally paid with the given status."""
    def _make(user, payment_status=None, price='12.50'):
        fill_event = FillEvent.objects.create(
            user=user,
            gas_mixture='EAN32',
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
def paid_fill_event(make_fill_event, user):
    return make_fill_event(user, PaymentStatus.COMPLETED)
