import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.cylinders.models import DivingCylinderSet, DivingCylinder


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


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
    """Create and return another member."""
    return User.objects.create_user(
        email='otherdiver@example.com',
        password='OtherPass123!',
        forename='Other',
        surname='Diver',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as the member using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def cylinder_set(db, user):
    """Create a twin set owned by the member."""
    cylinder_set = DivingCylinderSet.objects.create(owner=user, name='Twin 12')
    for serial in ('A-001', 'A-002'):
        DivingCylinder.objects.create(
            cylinder_set=cylinder_set,
            volume=Decimal('12.0'),
            pressure=232,
            material=DivingCylinder.Material.STEEL,
            serial_number=serial,
        )
    return cylinder_set


@pytest.fixture
def archived_cylinder_set(db, user):
    return DivingCylinderSet.objects.create(owner=user, name='Old stage', archived=True)
