"""
Reviews services - Business logic layer.

This package contains all business operations for the reviews app:
- Review lifecycle (submit, edit, delete, helpful votes)
- Review listings by movie and by user
- Per-user rating statistics
"""

# Review Lifecycle
from .review_management import (
    submit_review,
    get_review_by_id,
    update_review,
    delete_review,
    mark_review_helpful,
    get_movie_reviews,
    get_user_reviews,
    purge_user_reviews,
)

# Statistics
from .statistics import (
    get_user_review_statistics,
)

# Domain Exceptions
from .exceptions import (
    ReviewsServiceError,
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    InvalidReviewTextError,
    MovieNotFoundError,
)

__all__ = [
    # Review Lifecycle Services
    'submit_review',
    'get_review_by_id',
    'update_review',
    'delete_review',
    'mark_review_helpful',
    'get_movie_reviews',
    'get_user_reviews',
    'purge_user_reviews',
    # Statistics Services
    'get_user_review_statistics',
    # Exceptions
    'ReviewsServiceError',
    'ReviewNotFoundError',
    'DuplicateReviewError',
    'InvalidRatingError',
    'InvalidReviewTextError',
    'MovieNotFoundError',
]
