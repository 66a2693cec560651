import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.movies.services import create_movie
from apps.watchlist.services import add_to_watchlist


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def watcher(db):
    """Create and return a watchlist owner."""
    return User.objects.create_user(
        email='watcher@example.com',
        username='watcher',
        password='TestPass123!',
    )


@pytest.fixture
def other_watcher(db):
    """Create and return another user."""
    return User.objects.create_user(
        email='other_watcher@example.com',
        username='other_watcher',
        password='TestPass123!',
    )


@pytest.fixture
def watcher_client(watcher):
    """Return API client authenticated as watcher."""
    client = APIClient()
    refresh = RefreshToken.for_user(watcher)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def watch_movie(db):
    """Create and return a movie to track."""
    return create_movie(
        title='Paddington 2',
        genres=['Comedy', 'Family'],
        release_year=2017,
        director='Paul King',
        synopsis='Paddington takes on odd jobs to buy a present and is framed for theft.',
    )


@pytest.fixture
def another_watch_movie(db):
    """Create and return another movie to track."""
    return create_movie(
        title='Amelie',
        genres=['Comedy', 'Romance'],
        release_year=2001,
        director='Jean-Pierre Jeunet',
        synopsis='A shy waitress decides to change the lives of those around her.',
    )


@pytest.fixture
def watchlist_entry(watcher, watch_movie):
    """watch_movie in the watcher's list as want_to_watch."""
    return add_to_watchlist(user=watcher, movie_id=watch_movie.id)
