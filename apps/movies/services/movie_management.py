"""Movie CRUD operations service."""

import logging

from django.db import transaction, IntegrityError
from uuid import UUID
from typing import Optional, Iterable

from ..models import Movie, Genre
from .exceptions import MovieNotFoundError, DuplicateMovieError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    'title',
    'release_year',
    'director',
    'cast',
    'synopsis',
    'poster_url',
    'backdrop_url',
    'trailer_url',
    'duration',
    'tmdb_id',
    'imdb_id',
)


def _set_genres(movie: Movie, genre_names: Iterable[str]) -> None:
    names = []
    for name in genre_names:
        name = name.strip()
        if name and name not in names:
            names.append(name)

    genres = [Genre.objects.get_or_create(name=name)[0] for name in names]
    movie.genres.set(genres)


@transaction.atomic
def create_movie(
    *,
    title: str,
    genres: list[str],
    release_year: int,
    director: str,
    synopsis: str,
    cast: Optional[list[dict]] = None,
    poster_url: Optional[str] = None,
    backdrop_url: Optional[str] = None,
    trailer_url: Optional[str] = None,
    duration: Optional[int] = None,
    tmdb_id: Optional[int] = None,
    imdb_id: Optional[str] = None,
) -> Movie:
    """
    Add a movie to the catalog.

    Args:
        title: Movie title
        genres: Genre names (created on demand)
        release_year: Year of release
        director: Director's name
        synopsis: Plot summary
        cast: List of {name, character} dicts
        poster_url: Poster image URL
        backdrop_url: Backdrop image URL
        trailer_url: Trailer URL
        duration: Runtime in minutes
        tmdb_id: TMDB identifier (unique)
        imdb_id: IMDb identifier

    Returns:
        Created Movie instance

    Raises:
        DuplicateMovieError: If the same title/year or tmdb_id already exists
    """
    if Movie.objects.filter(title__iexact=title, release_year=release_year).exists():
        raise DuplicateMovieError(f"Movie '{title}' ({release_year}) already exists")

    if tmdb_id is not None and Movie.objects.filter(tmdb_id=tmdb_id).exists():
        raise DuplicateMovieError(f"Movie with TMDB id {tmdb_id} already exists")

    try:
        movie = Movie.objects.create(
            title=title,
            release_year=release_year,
            director=director,
            synopsis=synopsis,
            cast=cast or [],
            poster_url=poster_url,
            backdrop_url=backdrop_url,
            trailer_url=trailer_url,
            duration=duration,
            tmdb_id=tmdb_id,
            imdb_id=imdb_id,
        )
    except IntegrityError:
        raise DuplicateMovieError(f"Movie with TMDB id {tmdb_id} already exists")

    _set_genres(movie, genres)

    logger.info("Created movie %s (%s)", movie.id, movie.title)
    return movie


def get_movie_by_id(*, movie_id: UUID) -> Movie:
    """
    Retrieve a movie by ID.

    Raises:
        MovieNotFoundError: If movie doesn't exist
    """
    try:
        return Movie.objects.prefetch_related('genres').get(id=movie_id)
    except Movie.DoesNotExist:
        raise MovieNotFoundError("Movie not found")


@transaction.atomic
def update_movie(*, movie_id: UUID, genres: Optional[list[str]] = None, **fields) -> Movie:
    """
    Update catalog fields of a movie.

    Only the supplied fields change. Aggregate rating fields are never
    written here; they belong to the rating aggregation service.

    Args:
        movie_id: UUID of movie
        genres: Replacement list of genre names
        **fields: Any of UPDATABLE_FIELDS

    Returns:
        Updated Movie instance

    Raises:
        MovieNotFoundError: If movie doesn't exist
        DuplicateMovieError: If the new tmdb_id is taken
    """
    try:
        movie = Movie.objects.select_for_update().get(id=movie_id)
    except Movie.DoesNotExist:
        raise MovieNotFoundError("Movie not found")

    changed = []
    for field, value in fields.items():
        if field not in UPDATABLE_FIELDS:
            continue
        setattr(movie, field, value)
        changed.append(field)

    tmdb_id = fields.get('tmdb_id')
    if tmdb_id is not None and Movie.objects.exclude(id=movie.id).filter(tmdb_id=tmdb_id).exists():
        raise DuplicateMovieError(f"Movie with TMDB id {tmdb_id} already exists")

    if changed:
        movie.save(update_fields=changed + ['updated_at'])

    if genres is not None:
        _set_genres(movie, genres)

    logger.info("Updated movie %s (%s)", movie.id, ', '.join(changed) or 'genres')
    return movie


@transaction.atomic
def delete_movie(*, movie_id: UUID) -> None:
    """
    Delete a movie. Its reviews and watchlist entries go with it.

    Raises:
        MovieNotFoundError: If movie doesn't exist
    """
    deleted, _ = Movie.objects.filter(id=movie_id).delete()
    if not deleted:
        raise MovieNotFoundError("Movie not found")

    logger.info("Deleted movie %s", movie_id)
