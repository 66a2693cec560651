import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.movies.services import create_movie


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        email='testuser@example.com',
        username='testuser',
        password='TestPass123!',
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        username='inactive',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def other_user(db):
    """Create and return another test user."""
    return User.objects.create_user(
        email='otheruser@example.com',
        username='otheruser',
        password='OtherPass123!',
    )


@pytest.fixture
def admin_user(db):
    """Create and return an admin."""
    return User.objects.create_superuser(
        email='admin@example.com',
        username='siteadmin',
        password='AdminPass123!',
    )


def client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated as user."""
    return client_for(user)


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as other user."""
    return client_for(other_user)


@pytest.fixture
def admin_client(admin_user):
    """Return API client authenticated as admin."""
    return client_for(admin_user)


@pytest.fixture
def profile_movie(db):
    """A movie for profile listings."""
    return create_movie(
        title='Whiplash',
        genres=['Drama', 'Music'],
        release_year=2014,
        director='Damien Chazelle',
        synopsis='A young drummer is pushed to his limits by a ruthless instructor.',
    )
