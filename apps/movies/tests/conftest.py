import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from decimal import Decimal
from apps.movies.models import Movie
from apps.movies.services import create_movie


def authenticated_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def movie_user(db):
    """Create and return a regular user."""
    return User.objects.create_user(
        email='viewer@example.com',
        username='viewer',
        password='TestPass123!',
    )


@pytest.fixture
def movie_admin(db):
    """Create and return an admin user."""
    return User.objects.create_user(
        email='curator@example.com',
        username='curator',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def movie_user_client(movie_user):
    """Return API client authenticated as regular user."""
    return authenticated_client(movie_user)


@pytest.fixture
def movie_admin_client(movie_admin):
    """Return API client authenticated as admin."""
    return authenticated_client(movie_admin)


@pytest.fixture
def movie_payload():
    """Valid body for creating a movie."""
    return {
        'title': 'Arrival',
        'genres': ['Drama', 'Sci-Fi'],
        'release_year': 2016,
        'director': 'Denis Villeneuve',
        'cast': [
            {'name': 'Amy Adams', 'character': 'Louise Banks'},
            {'name': 'Jeremy Renner', 'character': 'Ian Donnelly'},
        ],
        'synopsis': 'A linguist works with the military to communicate with alien visitors.',
        'duration': 116,
    }


@pytest.fixture
def make_movie(db):
    """Factory creating movies through the service layer."""
    def _make_movie(title='Heat', genres=None, release_year=1995, **extra):
        return create_movie(
            title=title,
            genres=genres or ['Crime'],
            release_year=release_year,
            director=extra.pop('director', 'Michael Mann'),
            synopsis=extra.pop('synopsis', 'A detective hunts a crew of professional thieves.'),
            cast=extra.pop('cast', [{'name': 'Al Pacino', 'character': 'Vincent Hanna'}]),
            **extra
        )
    return _make_movie


@pytest.fixture
def movie(make_movie):
    """Create and return a test movie."""
    return make_movie()


@pytest.fixture
def rated_movies(make_movie):
    """Three movies with fixed aggregate values, bypassing the aggregator."""
    low = make_movie(title='Low', genres=['Comedy'], release_year=2001)
    mid = make_movie(title='Mid', genres=['Drama'], release_year=2010)
    high = make_movie(title='High', genres=['Drama', 'Thriller'], release_year=1999)

    Movie.objects.filter(id=low.id).update(average_rating=Decimal('2.5'), total_reviews=2)
    Movie.objects.filter(id=mid.id).update(average_rating=Decimal('4.0'), total_reviews=1)
    Movie.objects.filter(id=high.id).update(average_rating=Decimal('4.0'), total_reviews=7)

    return {
        'low': Movie.objects.get(id=low.id),
        'mid': Movie.objects.get(id=mid.id),
        'high': Movie.objects.get(id=high.id),
    }
