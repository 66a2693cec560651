"""Review lifecycle service - submit, edit, delete and vote on reviews."""

import logging

from django.db import transaction, IntegrityError
from django.db.models import F, QuerySet
from uuid import UUID
from typing import Optional

from apps.accounts.models import User
from apps.movies.models import Movie
from apps.movies.services import update_movie_rating
from ..models import Review, MIN_RATING, MAX_RATING, MIN_REVIEW_LENGTH, MAX_REVIEW_LENGTH
from .exceptions import (
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    InvalidReviewTextError,
    MovieNotFoundError,
)

logger = logging.getLogger(__name__)


def _validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError("Rating must be a whole number between 1 and 5")
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise InvalidRatingError("Rating must be between 1 and 5")
    return rating


def _validate_review_text(review_text) -> str:
    text = (review_text or '').strip()
    if len(text) < MIN_REVIEW_LENGTH:
        raise InvalidReviewTextError(
            f"Review must be at least {MIN_REVIEW_LENGTH} characters long"
        )
    if len(text) > MAX_REVIEW_LENGTH:
        raise InvalidReviewTextError(
            f"Review cannot exceed {MAX_REVIEW_LENGTH} characters"
        )
    return text


@transaction.atomic
def submit_review(
    *,
    user: User,
    movie_id: UUID,
    rating: int,
    review_text: str
) -> Review:
    """
    Create a review and refresh the movie's aggregate rating.

    This operation:
    1. Validates rating and text
    2. Checks the movie exists
    3. Checks for a duplicate review (user, movie)
    4. Creates the review
    5. Recomputes the movie's average rating and review count

    Args:
        user: User writing the review
        movie_id: UUID of the reviewed movie
        rating: Whole-star rating (1-5)
        review_text: Review body (10-2000 characters)

    Returns:
        Created Review with user and movie loaded

    Raises:
        InvalidRatingError: If rating is not an integer in 1-5
        InvalidReviewTextError: If text is too short or too long
        MovieNotFoundError: If movie doesn't exist
        DuplicateReviewError: If user already reviewed this movie
    """
    rating = _validate_rating(rating)
    review_text = _validate_review_text(review_text)

    try:
        movie = Movie.objects.get(id=movie_id)
    except Movie.DoesNotExist:
        raise MovieNotFoundError("Movie not found")

    if Review.objects.filter(user=user, movie=movie).exists():
        raise DuplicateReviewError(
            "You have already reviewed this movie. Please update your existing review instead."
        )

    try:
        review = Review.objects.create(
            user=user,
            movie=movie,
            rating=rating,
            review_text=review_text,
        )
    except IntegrityError:
        # Lost a race with a concurrent submit for the same pair
        raise DuplicateReviewError("You have already reviewed this movie")

    update_movie_rating(movie_id=movie.id)

    logger.info("User %s reviewed movie %s (%d stars)", user.id, movie.id, rating)
    return get_review_by_id(review_id=review.id)


def get_review_by_id(*, review_id: UUID) -> Review:
    """
    Retrieve a review by ID.

    Raises:
        ReviewNotFoundError: If review doesn't exist
    """
    try:
        return Review.objects.select_related('user', 'movie').get(id=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError("Review not found")


def _get_owned_review(*, review_id: UUID, user: User, allow_staff: bool = False) -> Review:
    reviews = Review.objects.select_for_update()
    if not (allow_staff and user.is_staff):
        reviews = reviews.filter(user=user)

    try:
        return reviews.get(id=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError("Review not found or not authorized")


@transaction.atomic
def update_review(
    *,
    review_id: UUID,
    user: User,
    rating: Optional[int] = None,
    review_text: Optional[str] = None
) -> Review:
    """
    Edit the caller's own review.

    Only supplied fields change. The movie aggregate is recomputed only
    when the rating value actually changes.

    Args:
        review_id: UUID of review
        user: User requesting the edit
        rating: New rating (1-5)
        review_text: New review body

    Returns:
        Updated Review instance

    Raises:
        ReviewNotFoundError: If review doesn't exist or isn't the caller's
        InvalidRatingError: If rating is out of range
        InvalidReviewTextError: If text length is out of range
    """
    review = _get_owned_review(review_id=review_id, user=user)

    changed = []
    rating_changed = False

    if rating is not None:
        rating = _validate_rating(rating)
        if rating != review.rating:
            review.rating = rating
            rating_changed = True
        changed.append('rating')

    if review_text is not None:
        review.review_text = _validate_review_text(review_text)
        changed.append('review_text')

    if changed:
        review.save(update_fields=changed + ['updated_at'])

    if rating_changed:
        update_movie_rating(movie_id=review.movie_id)

    return get_review_by_id(review_id=review.id)


@transaction.atomic
def delete_review(*, review_id: UUID, user: User) -> None:
    """
    Delete a review and refresh the movie's aggregate rating.

    Authors may delete their own reviews; staff may delete any review.

    Raises:
        ReviewNotFoundError: If review doesn't exist or isn't deletable by user
    """
    review = _get_owned_review(review_id=review_id, user=user, allow_staff=True)
    movie_id = review.movie_id

    review.delete()
    update_movie_rating(movie_id=movie_id)

    logger.info("User %s deleted review %s", user.id, review_id)


@transaction.atomic
def mark_review_helpful(*, review_id: UUID) -> int:
    """
    Add one helpful vote to a review.

    Returns:
        The review's new helpful vote count

    Raises:
        ReviewNotFoundError: If review doesn't exist
    """
    updated = Review.objects.filter(id=review_id).update(
        helpful_votes=F('helpful_votes') + 1
    )
    if not updated:
        raise ReviewNotFoundError("Review not found")

    return Review.objects.values_list('helpful_votes', flat=True).get(id=review_id)


def get_movie_reviews(*, movie_id: UUID) -> QuerySet[Review]:
    """
    Reviews of a movie, newest first.

    Raises:
        MovieNotFoundError: If movie doesn't exist
    """
    if not Movie.objects.filter(id=movie_id).exists():
        raise MovieNotFoundError("Movie not found")

    return (
        Review.objects
        .filter(movie_id=movie_id)
        .select_related('user')
        .order_by('-created_at')
    )


def get_user_reviews(*, user_id: UUID) -> QuerySet[Review]:
    """Reviews written by a user, newest first."""
    return (
        Review.objects
        .filter(user_id=user_id)
        .select_related('movie')
        .order_by('-created_at')
    )


@transaction.atomic
def purge_user_reviews(*, user: User) -> int:
    """
    Delete every review a user wrote and refresh the affected movies.

    Used before removing an account, since a cascade delete would leave
    the reviewed movies' aggregates stale.

    Returns:
        Number of reviews deleted
    """
    movie_ids = list(
        Review.objects.filter(user=user).values_list('movie_id', flat=True).distinct()
    )
    deleted, _ = Review.objects.filter(user=user).delete()

    for movie_id in movie_ids:
        update_movie_rating(movie_id=movie_id)

    if deleted:
        logger.info("Purged %d reviews of user %s", deleted, user.id)
    return deleted
