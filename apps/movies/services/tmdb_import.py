"""Import movies from The Movie Database (TMDB)."""

import logging
from typing import Optional

import requests
from django.conf import settings

from ..models import Movie
from .exceptions import (
    DuplicateMovieError,
    TmdbConfigurationError,
    TmdbImportError,
    TmdbMovieNotFoundError,
)
from .movie_management import create_movie

logger = logging.getLogger(__name__)

MAX_CAST_MEMBERS = 10
MAX_SYNOPSIS_LENGTH = 2000


def _tmdb_get(path: str) -> dict:
    """GET a TMDB endpoint and return the decoded JSON body."""
    url = f"{settings.TMDB_BASE_URL.rstrip('/')}/{path.lstrip('/')}"
    try:
        response = requests.get(
            url,
            params={'api_key': settings.TMDB_API_KEY, 'language': 'en-US'},
            timeout=settings.TMDB_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.exception("TMDB request to %s failed", path)
        raise TmdbImportError(f"Could not reach TMDB: {e}")

    if response.status_code == 404:
        raise TmdbMovieNotFoundError("Movie not found on TMDB")
    if response.status_code != 200:
        logger.error("TMDB %s returned status %s", path, response.status_code)
        raise TmdbImportError(f"TMDB request failed (status {response.status_code})")

    return response.json()


def _image_url(path: Optional[str], size: str) -> Optional[str]:
    if not path:
        return None
    return f"{settings.TMDB_IMAGE_BASE_URL.rstrip('/')}/{size}{path}"


def _release_year(release_date: Optional[str]) -> Optional[int]:
    if not release_date:
        return None
    try:
        return int(release_date[:4])
    except ValueError:
        return None


def build_movie_data(details: dict, credits: dict) -> dict:
    """
    Map TMDB movie details and credits onto create_movie() keyword arguments.

    Args:
        details: Body of GET /movie/{id}
        credits: Body of GET /movie/{id}/credits

    Returns:
        Dictionary of movie fields
    """
    director = next(
        (person.get('name') for person in credits.get('crew', []) if person.get('job') == 'Director'),
        None
    )
    cast = [
        {'name': actor.get('name'), 'character': actor.get('character') or ''}
        for actor in credits.get('cast', [])[:MAX_CAST_MEMBERS]
        if actor.get('name')
    ]

    return {
        'title': details.get('title'),
        'genres': [genre['name'] for genre in details.get('genres', []) if genre.get('name')],
        'release_year': _release_year(details.get('release_date')),
        'director': director or 'Unknown',
        'cast': cast,
        'synopsis': (details.get('overview') or '')[:MAX_SYNOPSIS_LENGTH],
        'poster_url': _image_url(details.get('poster_path'), 'w500'),
        'backdrop_url': _image_url(details.get('backdrop_path'), 'w1280'),
        'duration': details.get('runtime') or None,
        'tmdb_id': details.get('id'),
        'imdb_id': details.get('imdb_id') or None,
    }


def import_movie_from_tmdb(*, tmdb_id: int) -> Movie:
    """
    Fetch a movie and its credits from TMDB and add it to the catalog.

    Args:
        tmdb_id: TMDB movie id

    Returns:
        Created Movie instance

    Raises:
        TmdbConfigurationError: If TMDB_API_KEY is not set
        DuplicateMovieError: If the movie was already imported
        TmdbMovieNotFoundError: If TMDB has no such movie
        TmdbImportError: On network errors, unexpected responses, or
            incomplete movie data
    """
    if not settings.TMDB_API_KEY:
        raise TmdbConfigurationError("TMDB API key not configured")

    if Movie.objects.filter(tmdb_id=tmdb_id).exists():
        raise DuplicateMovieError("Movie already exists")

    details = _tmdb_get(f"movie/{tmdb_id}")
    credits = _tmdb_get(f"movie/{tmdb_id}/credits")

    data = build_movie_data(details, credits)
    if not data['title'] or data['release_year'] is None:
        raise TmdbImportError("TMDB movie is missing a title or release date")
    if not data['genres']:
        raise TmdbImportError("TMDB movie has no genres")

    movie = create_movie(**data)
    logger.info("Imported TMDB movie %s as %s", tmdb_id, movie.id)
    return movie
