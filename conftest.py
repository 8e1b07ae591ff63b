import pytest
from django.core.management import call_command


@pytest.fixture(scope='session')
def django_db_setup(django_db_setup, django_db_blocker):
    """Test database also gets the cache table backing the cleanup run lock."""
    with django_db_blocker.unblock():
        call_command('createcachetable', verbosity=0)
