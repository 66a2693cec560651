import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.movies.services import create_movie
from apps.reviews.services import submit_review


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
def review_user(db):
    """Create and return a test user for reviews."""
    return User.objects.create_user(
        email='reviewer@example.com',
        username='reviewer',
        password='TestPass123!',
    )


@pytest.fixture
def review_other_user(db):
    """Create and return another test user for reviews."""
    return User.objects.create_user(
        email='review_other@example.com',
        username='review_other',
        password='TestPass123!',
    )


@pytest.fixture
def review_admin(db):
    """Create and return an admin (moderator)."""
    return User.objects.create_user(
        email='moderator@example.com',
        username='moderator',
        password='TestPass123!',
        is_staff=True,
    )


@pytest.fixture
def review_auth_client(review_user):
    """Return API client authenticated as review user."""
    return authenticated_client(review_user)


@pytest.fixture
def review_other_client(review_other_user):
    """Return API client authenticated as other user."""
    return authenticated_client(review_other_user)


@pytest.fixture
def review_admin_client(review_admin):
    """Return API client authenticated as admin."""
    return authenticated_client(review_admin)


@pytest.fixture
def review_movie(db):
    """Create and return a test movie for reviews."""
    return create_movie(
        title='Spirited Away',
        genres=['Animation', 'Fantasy'],
        release_year=2001,
        director='Hayao Miyazaki',
        synopsis='A girl wanders into a world of spirits and must free her parents.',
        cast=[{'name': 'Rumi Hiiragi', 'character': 'Chihiro'}],
    )


@pytest.fixture
def review_another_movie(db):
    """Create and return another test movie for reviews."""
    return create_movie(
        title='Princess Mononoke',
        genres=['Animation'],
        release_year=1997,
        director='Hayao Miyazaki',
        synopsis='A prince is drawn into a war between a mining town and the forest gods.',
    )


@pytest.fixture
def review(review_user, review_movie):
    """Create and return a test review (rating 5)."""
    return submit_review(
        user=review_user,
        movie_id=review_movie.id,
        rating=5,
        review_text='Beautiful animation and a story full of heart.',
    )


@pytest.fixture
def other_review(review_other_user, review_movie):
    """Create a review by another user (rating 3)."""
    return submit_review(
        user=review_other_user,
        movie_id=review_movie.id,
        rating=3,
        review_text='Lovely to look at, a little slow in places.',
    )
