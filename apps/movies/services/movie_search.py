"""Movie search and filtering service."""

from django.db.models import Q, QuerySet
from typing import Optional

from ..models import Movie
from .exceptions import InvalidSortError


# Release year sorts newest first, everything else ascending
SORT_FIELDS = {
    'title': 'title',
    'release_year': '-release_year',
    'average_rating': 'average_rating',
    'created_at': 'created_at',
}

DEFAULT_ORDERING = '-average_rating'


def search_movies(
    *,
    genre: Optional[str] = None,
    year: Optional[int] = None,
    min_rating: Optional[float] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
) -> QuerySet[Movie]:
    """
    Search and filter the movie catalog.

    All filters are optional and combined with AND.

    Args:
        genre: Movie must carry a genre with exactly this name
        year: Exact release year
        min_rating: Minimum average rating (inclusive)
        search: Case-insensitive match in title or synopsis
        sort: One of title, release_year, average_rating, created_at

    Returns:
        Filtered and ordered QuerySet of Movie

    Raises:
        InvalidSortError: If sort is not a known field
    """
    if sort and sort not in SORT_FIELDS:
        raise InvalidSortError(
            f"Invalid sort field '{sort}'. Valid options: {', '.join(SORT_FIELDS)}"
        )

    queryset = Movie.objects.prefetch_related('genres')

    if genre:
        queryset = queryset.filter(genres__name=genre)

    if year is not None:
        queryset = queryset.filter(release_year=year)

    if min_rating is not None:
        queryset = queryset.filter(average_rating__gte=min_rating)

    if search:
        queryset = queryset.filter(
            Q(title__icontains=search) |
            Q(synopsis__icontains=search)
        )

    ordering = SORT_FIELDS[sort] if sort else DEFAULT_ORDERING

    # genre joins can duplicate rows
    return queryset.distinct().order_by(ordering, '-created_at')
