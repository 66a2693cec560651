"""
Service layer tests for movies app.

Covers:
- Movie catalog CRUD
- Search, filters and sorting
- Rating aggregation and rounding
- TMDB import (HTTP mocked)
"""

import pytest
import requests
from decimal import Decimal
from unittest.mock import Mock, patch
from uuid import uuid4

from apps.accounts.models import User
from apps.movies.models import Movie, Genre
from apps.movies.services import (
    create_movie,
    update_movie,
    delete_movie,
    get_movie_by_id,
    search_movies,
    round_rating,
    update_movie_rating,
    get_trending_movies,
    get_featured_movies,
    build_movie_data,
    import_movie_from_tmdb,
    MovieNotFoundError,
    DuplicateMovieError,
    InvalidSortError,
    TmdbImportError,
    TmdbConfigurationError,
    TmdbMovieNotFoundError,
)
from apps.reviews.models import Review
from apps.watchlist.models import WatchlistEntry


def make_reviews(movie, ratings):
    for index, rating in enumerate(ratings):
        user = User.objects.create_user(
            email=f'rater{index}@example.com',
            username=f'rater{index}',
            password='TestPass123!',
        )
        Review.objects.create(
            user=user,
            movie=movie,
            rating=rating,
            review_text='Plenty of words to pass validation.',
        )


# ============================================================================
# MOVIE MANAGEMENT TESTS
# ============================================================================

@pytest.mark.django_db
class TestMovieManagement:
    """Test movie catalog operations."""

    def test_create_movie_success(self):
        """Create a movie with new genres."""
        movie = create_movie(
            title='Alien',
            genres=['Horror', 'Sci-Fi'],
            release_year=1979,
            director='Ridley Scott',
            synopsis='The crew of a space tug meets a deadly lifeform.',
            cast=[{'name': 'Sigourney Weaver', 'character': 'Ripley'}],
        )

        assert movie.id is not None
        assert sorted(movie.genre_names) == ['Horror', 'Sci-Fi']
        assert movie.average_rating == Decimal('0.0')
        assert movie.total_reviews == 0
        assert Genre.objects.count() == 2

    def test_create_movie_reuses_genres(self, movie):
        """Existing genre rows are shared."""
        create_movie(
            title='Collateral',
            genres=['Crime', 'Thriller'],
            release_year=2004,
            director='Michael Mann',
            synopsis='A cab driver is forced to drive a hitman around LA.',
        )

        assert Genre.objects.filter(name='Crime').count() == 1
        assert Genre.objects.get(name='Crime').movies.count() == 2

    def test_create_duplicate_title_and_year(self, movie):
        """Same title (any case) and year is rejected."""
        with pytest.raises(DuplicateMovieError):
            create_movie(
                title='HEAT',
                genres=['Crime'],
                release_year=1995,
                director='Michael Mann',
                synopsis='Again.',
            )

    def test_create_same_title_other_year(self, movie):
        """Remakes with a different year are allowed."""
        remake = create_movie(
            title='Heat',
            genres=['Action'],
            release_year=1986,
            director='Dick Richards',
            synopsis='A bodyguard in Las Vegas.',
        )

        assert remake.id != movie.id

    def test_create_duplicate_tmdb_id(self, make_movie):
        """tmdb_id must be unique."""
        make_movie(title='First', tmdb_id=42)

        with pytest.raises(DuplicateMovieError):
            make_movie(title='Second', tmdb_id=42)

    def test_get_movie_not_found(self):
        """Unknown id raises."""
        with pytest.raises(MovieNotFoundError):
            get_movie_by_id(movie_id=uuid4())

    def test_update_movie_fields_and_genres(self, movie):
        """Only supplied fields change."""
        updated = update_movie(movie_id=movie.id, title='Heat (Director\'s Cut)', genres=['Crime', 'Drama'])

        assert updated.title == "Heat (Director's Cut)"
        assert updated.director == 'Michael Mann'
        assert sorted(updated.genre_names) == ['Crime', 'Drama']

    def test_update_movie_ignores_aggregate_fields(self, movie):
        """Aggregates cannot be written through the catalog update."""
        update_movie(movie_id=movie.id, average_rating=Decimal('5.0'), total_reviews=99)

        movie.refresh_from_db()
        assert movie.average_rating == Decimal('0.0')
        assert movie.total_reviews == 0

    def test_update_movie_not_found(self):
        """Updating an unknown movie raises."""
        with pytest.raises(MovieNotFoundError):
            update_movie(movie_id=uuid4(), title='Nothing')

    def test_delete_movie_cascades(self, movie, movie_user):
        """Reviews and watchlist entries go with the movie."""
        Review.objects.create(user=movie_user, movie=movie, rating=4, review_text='A tense and stylish thriller.')
        WatchlistEntry.objects.create(user=movie_user, movie=movie)

        delete_movie(movie_id=movie.id)

        assert not Movie.objects.filter(id=movie.id).exists()
        assert Review.objects.count() == 0
        assert WatchlistEntry.objects.count() == 0

    def test_delete_movie_not_found(self):
        """Deleting an unknown movie raises."""
        with pytest.raises(MovieNotFoundError):
            delete_movie(movie_id=uuid4())


# ============================================================================
# SEARCH TESTS
# ============================================================================

@pytest.mark.django_db
class TestMovieSearch:
    """Test catalog filtering and sorting."""

    def test_filter_by_genre(self, rated_movies):
        titles = {m.title for m in search_movies(genre='Drama')}
        assert titles == {'Mid', 'High'}

    def test_genre_filter_does_not_duplicate(self, rated_movies):
        """A movie matching through one genre appears once."""
        results = list(search_movies(genre='Thriller'))
        assert [m.title for m in results] == ['High']

    def test_filter_by_year(self, rated_movies):
        assert [m.title for m in search_movies(year=2001)] == ['Low']

    def test_filter_by_min_rating(self, rated_movies):
        titles = {m.title for m in search_movies(min_rating=3)}
        assert titles == {'Mid', 'High'}

    def test_search_title_case_insensitive(self, rated_movies):
        assert [m.title for m in search_movies(search='hig')] == ['High']

    def test_search_synopsis(self, rated_movies, make_movie):
        make_movie(title='Ronin', release_year=1998, synopsis='Mercenaries chase a mysterious briefcase.')
        assert [m.title for m in search_movies(search='BRIEFCASE')] == ['Ronin']

    def test_combined_filters(self, rated_movies):
        results = search_movies(genre='Drama', year=1999, min_rating=4)
        assert [m.title for m in results] == ['High']

    def test_sort_by_title(self, rated_movies):
        assert [m.title for m in search_movies(sort='title')] == ['High', 'Low', 'Mid']

    def test_sort_by_release_year_newest_first(self, rated_movies):
        assert [m.title for m in search_movies(sort='release_year')] == ['Mid', 'Low', 'High']

    def test_default_sort_best_rated_first(self, rated_movies):
        results = list(search_movies())
        assert results[-1].title == 'Low'

    def test_invalid_sort(self, rated_movies):
        with pytest.raises(InvalidSortError):
            search_movies(sort='popularity')


# ============================================================================
# RATING AGGREGATION TESTS
# ============================================================================

class TestRoundRating:
    """Test half-up rounding to one decimal."""

    def test_rounds_half_up(self):
        assert round_rating(4.25) == Decimal('4.3')
        assert round_rating(3.75) == Decimal('3.8')

    def test_rounds_down_below_half(self):
        assert round_rating(4.24) == Decimal('4.2')

    def test_none_is_zero(self):
        assert round_rating(None) == Decimal('0.0')


@pytest.mark.django_db
class TestUpdateMovieRating:
    """Test aggregate recalculation."""

    def test_average_and_count(self, movie):
        """Mean of 4, 4, 5, 4 is 4.25, stored as 4.3."""
        make_reviews(movie, [4, 4, 5, 4])

        updated = update_movie_rating(movie_id=movie.id)

        assert updated.average_rating == Decimal('4.3')
        assert updated.total_reviews == 4
        movie.refresh_from_db()
        assert movie.average_rating == Decimal('4.3')

    def test_repeating_fraction(self, movie):
        """Mean of 5, 4, 4 is 4.333..., stored as 4.3."""
        make_reviews(movie, [5, 4, 4])

        updated = update_movie_rating(movie_id=movie.id)

        assert updated.average_rating == Decimal('4.3')
        assert updated.total_reviews == 3

    def test_no_reviews_resets_to_zero(self, movie):
        Movie.objects.filter(id=movie.id).update(average_rating=Decimal('3.0'), total_reviews=1)

        updated = update_movie_rating(movie_id=movie.id)

        assert updated.average_rating == Decimal('0.0')
        assert updated.total_reviews == 0

    def test_missing_movie_returns_none(self):
        """A vanished movie is skipped without raising."""
        assert update_movie_rating(movie_id=uuid4()) is None

    def test_trending_breaks_ties_by_review_count(self, rated_movies):
        titles = [m.title for m in get_trending_movies()]
        assert titles == ['High', 'Mid', 'Low']

    def test_trending_limit(self, rated_movies):
        assert len(get_trending_movies(limit=2)) == 2

    def test_featured_best_rated_first(self, rated_movies):
        movies = list(get_featured_movies())
        assert len(movies) == 3
        assert movies[-1].title == 'Low'


# ============================================================================
# TMDB IMPORT TESTS
# ============================================================================

TMDB_DETAILS = {
    'id': 603,
    'title': 'The Matrix',
    'release_date': '1999-03-30',
    'genres': [{'id': 28, 'name': 'Action'}, {'id': 878, 'name': 'Science Fiction'}],
    'overview': 'A hacker learns the truth about his reality.',
    'poster_path': '/poster.jpg',
    'backdrop_path': '/backdrop.jpg',
    'runtime': 136,
    'imdb_id': 'tt0133093',
}

TMDB_CREDITS = {
    'cast': [
        {'name': f'Actor {n}', 'character': f'Role {n}'} for n in range(12)
    ],
    'crew': [
        {'name': 'Bill Pope', 'job': 'Director of Photography'},
        {'name': 'Lana Wachowski', 'job': 'Director'},
    ],
}


def tmdb_response(status_code=200, body=None):
    response = Mock(status_code=status_code)
    response.json.return_value = body or {}
    return response


class TestBuildMovieData:
    """Test mapping TMDB payloads to movie fields."""

    def test_maps_fields(self):
        data = build_movie_data(TMDB_DETAILS, TMDB_CREDITS)

        assert data['title'] == 'The Matrix'
        assert data['release_year'] == 1999
        assert data['genres'] == ['Action', 'Science Fiction']
        assert data['director'] == 'Lana Wachowski'
        assert len(data['cast']) == 10
        assert data['cast'][0] == {'name': 'Actor 0', 'character': 'Role 0'}
        assert data['poster_url'].endswith('/w500/poster.jpg')
        assert data['backdrop_url'].endswith('/w1280/backdrop.jpg')
        assert data['duration'] == 136
        assert data['tmdb_id'] == 603
        assert data['imdb_id'] == 'tt0133093'

    def test_unknown_director(self):
        data = build_movie_data(TMDB_DETAILS, {'cast': [], 'crew': []})
        assert data['director'] == 'Unknown'

    def test_truncates_synopsis(self):
        details = dict(TMDB_DETAILS, overview='x' * 2500)
        assert len(build_movie_data(details, TMDB_CREDITS)['synopsis']) == 2000


@pytest.mark.django_db
class TestImportMovieFromTmdb:
    """Test TMDB import with mocked HTTP."""

    @patch('apps.movies.services.tmdb_import.requests.get')
    def test_import_success(self, mock_get):
        mock_get.side_effect = [
            tmdb_response(body=TMDB_DETAILS),
            tmdb_response(body=TMDB_CREDITS),
        ]

        movie = import_movie_from_tmdb(tmdb_id=603)

        assert movie.title == 'The Matrix'
        assert movie.tmdb_id == 603
        assert sorted(movie.genre_names) == ['Action', 'Science Fiction']
        assert mock_get.call_count == 2
        first_url = mock_get.call_args_list[0].args[0]
        assert first_url.endswith('/movie/603')
        assert mock_get.call_args_list[0].kwargs['params']['api_key'] == 'test-tmdb-key'

    @patch('apps.movies.services.tmdb_import.requests.get')
    def test_import_not_found(self, mock_get):
        mock_get.return_value = tmdb_response(status_code=404)

        with pytest.raises(TmdbMovieNotFoundError):
            import_movie_from_tmdb(tmdb_id=1)

        assert Movie.objects.count() == 0

    @patch('apps.movies.services.tmdb_import.requests.get')
    def test_import_upstream_error(self, mock_get):
        mock_get.return_value = tmdb_response(status_code=503)

        with pytest.raises(TmdbImportError):
            import_movie_from_tmdb(tmdb_id=1)

    @patch('apps.movies.services.tmdb_import.requests.get')
    def test_import_network_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError('connection refused')

        with pytest.raises(TmdbImportError):
            import_movie_from_tmdb(tmdb_id=1)

    @patch('apps.movies.services.tmdb_import.requests.get')
    def test_import_duplicate(self, mock_get, make_movie):
        make_movie(title='The Matrix', tmdb_id=603)

        with pytest.raises(DuplicateMovieError):
            import_movie_from_tmdb(tmdb_id=603)

        mock_get.assert_not_called()

    @patch('apps.movies.services.tmdb_import.requests.get')
    def test_import_without_api_key(self, mock_get, settings):
        settings.TMDB_API_KEY = ''

        with pytest.raises(TmdbConfigurationError):
            import_movie_from_tmdb(tmdb_id=603)

        mock_get.assert_not_called()
