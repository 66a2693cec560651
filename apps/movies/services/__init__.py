"""Services for movies business logic."""

from .exceptions import (
    MoviesServiceError,
    MovieNotFoundError,
    DuplicateMovieError,
    InvalidSortError,
    TmdbImportError,
    TmdbConfigurationError,
    TmdbMovieNotFoundError,
)
from .movie_management import (
    create_movie,
    update_movie,
    delete_movie,
    get_movie_by_id,
)
from .movie_search import (
    search_movies,
    SORT_FIELDS,
)
from .rating_aggregation import (
    round_rating,
    update_movie_rating,
    get_trending_movies,
    get_featured_movies,
)
from .tmdb_import import (
    build_movie_data,
    import_movie_from_tmdb,
)

__all__ = [
    # Exceptions
    'MoviesServiceError',
    'MovieNotFoundError',
    'DuplicateMovieError',
    'InvalidSortError',
    'TmdbImportError',
    'TmdbConfigurationError',
    'TmdbMovieNotFoundError',
    # Movie Management
    'create_movie',
    'update_movie',
    'delete_movie',
    'get_movie_by_id',
    # Movie Search
    'search_movies',
    'SORT_FIELDS',
    # Rating Aggregation
    'round_rating',
    'update_movie_rating',
    'get_trending_movies',
    'get_featured_movies',
    # TMDB Import
    'build_movie_data',
    'import_movie_from_tmdb',
]
