import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


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
        phone_number='+358401234567',
    )


@pytest.fixture
def archived_user(db):
    """Create and return a member archived by the cleanup job."""
    return User.objects.create_user(
        email='archived@example.com',
        password='TestPass123!',
        forename='Archived',
        surname='Diver',
        archived_at=timezone.now(),
    )


@pytest.fixture
def admin_user(db):
    """Create and return a club admin."""
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        forename='Club',
        surname='Admin',
        is_staff=True,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an API client authenticated as the member using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return an API client authenticated as an admin using JWT."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
