"""Review statistics service."""

from django.db.models import Avg, Count
from uuid import UUID

from apps.movies.services import round_rating
from ..models import Review, MIN_RATING, MAX_RATING


def get_user_review_statistics(*, user_id: UUID) -> dict:
    """
    Summarize a user's ratings.

    Returns:
        Dict with total_reviews, average_rating (one decimal, 0.0 when the
        user has no reviews) and rating_distribution keyed '1'..'5', every
        bucket present
    """
    reviews = Review.objects.filter(user_id=user_id)

    summary = reviews.aggregate(total=Count('id'), avg=Avg('rating'))

    distribution = {str(star): 0 for star in range(MIN_RATING, MAX_RATING + 1)}
    for row in reviews.values('rating').annotate(count=Count('id')):
        distribution[str(row['rating'])] = row['count']

    return {
        'total_reviews': summary['total'],
        'average_rating': float(round_rating(summary['avg'])),
        'rating_distribution': distribution,
    }
