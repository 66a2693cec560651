"""Rating aggregation service with concurrency protection."""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Avg, Count, QuerySet

from ..models import Movie

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal('0.1')


def round_rating(value) -> Decimal:
    """
    Round an average rating to one decimal place, halves rounding up.

    Args:
        value: Mean rating (float or Decimal) or None when there are no reviews

    Returns:
        Decimal with one decimal place, Decimal('0.0') for None
    """
    if value is None:
        return Decimal('0.0')
    return Decimal(str(value)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


@transaction.atomic
def update_movie_rating(*, movie_id: UUID) -> Optional[Movie]:
    """
    Recalculate and store a movie's average rating and review count.

    Uses select_for_update() so that concurrent review mutations on the
    same movie recompute one after another, each reading every committed
    review.

    Called by the review services after a review is created, deleted, or
    its rating changes. A movie that no longer exists is skipped rather
    than reported, since the review operation that triggered the update
    has already succeeded.

    Args:
        movie_id: Movie UUID

    Returns:
        Updated Movie instance, or None if the movie is gone
    """
    try:
        movie = (
            Movie.objects
            .select_for_update()
            .get(id=movie_id)
        )
    except Movie.DoesNotExist:
        logger.warning("Skipping rating update, movie %s no longer exists", movie_id)
        return None

    aggregates = movie.reviews.aggregate(
        avg=Avg('rating'),
        count=Count('id')
    )

    movie.average_rating = round_rating(aggregates['avg'])
    movie.total_reviews = aggregates['count']
    movie.save(update_fields=['average_rating', 'total_reviews', 'updated_at'])

    logger.debug(
        "Movie %s rating now %s over %d reviews",
        movie.id, movie.average_rating, movie.total_reviews
    )
    return movie


def get_trending_movies(*, limit: int = 10) -> QuerySet[Movie]:
    """
    Get trending movies: best rated first, ties broken by review count.

    Args:
        limit: Number of movies to return

    Returns:
        QuerySet of movies
    """
    return (
        Movie.objects
        .prefetch_related('genres')
        .order_by('-average_rating', '-total_reviews')[:limit]
    )


def get_featured_movies(*, limit: int = 6) -> QuerySet[Movie]:
    """
    Get featured movies (highest average rating).

    Args:
        limit: Number of movies to return

    Returns:
        QuerySet of movies
    """
    return (
        Movie.objects
        .prefetch_related('genres')
        .order_by('-average_rating')[:limit]
    )
