"""
Service layer tests for reviews app.

Tests all service functions for:
- Review lifecycle (submit, update, delete)
- Aggregate rating maintenance on the reviewed movie
- Helpful votes
- Listings and per-user statistics
"""

import pytest
from unittest.mock import patch
from django.db.models import QuerySet
from decimal import Decimal
from uuid import uuid4

from apps.movies.models import Movie
from apps.reviews.services import (
    submit_review,
    get_review_by_id,
    update_review,
    delete_review,
    mark_review_helpful,
    get_movie_reviews,
    get_user_reviews,
    get_user_review_statistics,
    purge_user_reviews,
)
from apps.reviews.services.exceptions import (
    ReviewNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    InvalidReviewTextError,
    MovieNotFoundError,
)
from apps.reviews.models import Review


def movie_aggregates(movie):
    movie = Movie.objects.get(id=movie.id)
    return movie.average_rating, movie.total_reviews


# ============================================================================
# SUBMIT TESTS
# ============================================================================

@pytest.mark.django_db
class TestSubmitReview:
    """Test review creation."""

    def test_submit_review_success(self, review_user, review_movie):
        """Successfully submit a review."""
        review = submit_review(
            user=review_user,
            movie_id=review_movie.id,
            rating=4,
            review_text='Gorgeous and strange in the best way.',
        )

        assert review.id is not None
        assert review.user == review_user
        assert review.movie == review_movie
        assert review.rating == 4
        assert review.helpful_votes == 0
        assert review.is_verified is False

    def test_submit_updates_movie_aggregates(self, review_user, review_movie):
        """First review sets the movie's rating and count."""
        submit_review(
            user=review_user,
            movie_id=review_movie.id,
            rating=5,
            review_text='Gorgeous and strange in the best way.',
        )

        assert movie_aggregates(review_movie) == (Decimal('5.0'), 1)

    def test_duplicate_review(self, review, review_user, review_movie):
        """Second review by the same user for the same movie is rejected."""
        with pytest.raises(DuplicateReviewError):
            submit_review(
                user=review_user,
                movie_id=review_movie.id,
                rating=1,
                review_text='Changed my mind completely about it.',
            )

        assert Review.objects.filter(user=review_user, movie=review_movie).count() == 1
        assert movie_aggregates(review_movie) == (Decimal('5.0'), 1)

    def test_duplicate_caught_by_unique_constraint(self, review, review_user, review_movie):
        """A concurrent submit that slips past the existence check still conflicts."""
        with patch.object(QuerySet, 'exists', return_value=False):
            with pytest.raises(DuplicateReviewError):
                submit_review(
                    user=review_user,
                    movie_id=review_movie.id,
                    rating=1,
                    review_text='Changed my mind completely about it.',
                )

        assert Review.objects.filter(user=review_user, movie=review_movie).count() == 1
        assert movie_aggregates(review_movie) == (Decimal('5.0'), 1)

    def test_same_user_other_movie(self, review, review_user, review_another_movie):
        """One review per movie, not per user."""
        submit_review(
            user=review_user,
            movie_id=review_another_movie.id,
            rating=4,
            review_text='Epic in scale and still very personal.',
        )

        assert Review.objects.filter(user=review_user).count() == 2

    def test_movie_not_found(self, review_user):
        with pytest.raises(MovieNotFoundError):
            submit_review(
                user=review_user,
                movie_id=uuid4(),
                rating=4,
                review_text='This movie does not exist at all.',
            )

    @pytest.mark.parametrize('rating', [0, 6, 3.5, '4', True])
    def test_invalid_rating(self, review_user, review_movie, rating):
        with pytest.raises(InvalidRatingError):
            submit_review(
                user=review_user,
                movie_id=review_movie.id,
                rating=rating,
                review_text='A perfectly reasonable review text.',
            )

        assert Review.objects.count() == 0

    def test_review_text_too_short(self, review_user, review_movie):
        with pytest.raises(InvalidReviewTextError):
            submit_review(user=review_user, movie_id=review_movie.id, rating=4, review_text='Too short')

    def test_review_text_too_long(self, review_user, review_movie):
        with pytest.raises(InvalidReviewTextError):
            submit_review(user=review_user, movie_id=review_movie.id, rating=4, review_text='x' * 2001)

    def test_review_text_boundaries(self, review_user, review_movie, review_another_movie):
        """Exactly 10 and exactly 2000 characters are accepted."""
        submit_review(user=review_user, movie_id=review_movie.id, rating=4, review_text='x' * 10)
        submit_review(user=review_user, movie_id=review_another_movie.id, rating=4, review_text='x' * 2000)

        assert Review.objects.count() == 2


# ============================================================================
# AGGREGATE SCENARIO TESTS
# ============================================================================

@pytest.mark.django_db
class TestAggregateMaintenance:
    """The movie's rating always mirrors its reviews."""

    def test_create_add_delete_scenario(self, review_user, review_other_user, review_movie):
        """5 gives 5.0/1, adding 3 gives 4.0/2, deleting the 5 gives 3.0/1."""
        first = submit_review(
            user=review_user,
            movie_id=review_movie.id,
            rating=5,
            review_text='An all time favourite of mine.',
        )
        assert movie_aggregates(review_movie) == (Decimal('5.0'), 1)

        submit_review(
            user=review_other_user,
            movie_id=review_movie.id,
            rating=3,
            review_text='Good, though not for everyone.',
        )
        assert movie_aggregates(review_movie) == (Decimal('4.0'), 2)

        delete_review(review_id=first.id, user=review_user)
        assert movie_aggregates(review_movie) == (Decimal('3.0'), 1)

    def test_rating_edit_recomputes(self, review, other_review, review_user, review_movie):
        """Changing 5 to 4 next to a 3 gives 3.5."""
        update_review(review_id=review.id, user=review_user, rating=4)

        assert movie_aggregates(review_movie) == (Decimal('3.5'), 2)

    def test_text_only_edit_leaves_aggregates(self, review, review_user, review_movie):
        """Editing only the text does not touch the movie."""
        Movie.objects.filter(id=review_movie.id).update(average_rating=Decimal('1.0'))

        update_review(review_id=review.id, user=review_user, review_text='Even better on a second viewing.')

        assert movie_aggregates(review_movie) == (Decimal('1.0'), 1)

    def test_delete_only_review_resets(self, review, review_user, review_movie):
        delete_review(review_id=review.id, user=review_user)

        assert movie_aggregates(review_movie) == (Decimal('0.0'), 0)

    def test_purge_user_reviews(self, review, other_review, review_user, review_movie, review_another_movie):
        """Removing a user's reviews refreshes every movie they reviewed."""
        submit_review(
            user=review_user,
            movie_id=review_another_movie.id,
            rating=2,
            review_text='Too violent for my taste, sadly.',
        )

        deleted = purge_user_reviews(user=review_user)

        assert deleted == 2
        assert movie_aggregates(review_movie) == (Decimal('3.0'), 1)
        assert movie_aggregates(review_another_movie) == (Decimal('0.0'), 0)


# ============================================================================
# UPDATE / DELETE TESTS
# ============================================================================

@pytest.mark.django_db
class TestUpdateReview:
    """Test review edits."""

    def test_update_both_fields(self, review, review_user):
        updated = update_review(
            review_id=review.id,
            user=review_user,
            rating=4,
            review_text='Still wonderful, a touch long.',
        )

        assert updated.rating == 4
        assert updated.review_text == 'Still wonderful, a touch long.'

    def test_update_keeps_unsupplied_fields(self, review, review_user):
        updated = update_review(review_id=review.id, user=review_user, rating=2)

        assert updated.review_text == 'Beautiful animation and a story full of heart.'

    def test_cannot_update_others_review(self, review, review_other_user):
        """Another user's review looks like a missing one."""
        with pytest.raises(ReviewNotFoundError):
            update_review(review_id=review.id, user=review_other_user, rating=1)

    def test_admin_cannot_edit_others_review(self, review, review_admin):
        with pytest.raises(ReviewNotFoundError):
            update_review(review_id=review.id, user=review_admin, rating=1)

    def test_update_missing_review(self, review_user):
        with pytest.raises(ReviewNotFoundError):
            update_review(review_id=uuid4(), user=review_user, rating=3)

    def test_update_invalid_rating(self, review, review_user):
        with pytest.raises(InvalidRatingError):
            update_review(review_id=review.id, user=review_user, rating=9)

        review.refresh_from_db()
        assert review.rating == 5


@pytest.mark.django_db
class TestDeleteReview:
    """Test review deletion."""

    def test_delete_own_review(self, review, review_user):
        delete_review(review_id=review.id, user=review_user)

        assert not Review.objects.filter(id=review.id).exists()

    def test_cannot_delete_others_review(self, review, review_other_user):
        with pytest.raises(ReviewNotFoundError):
            delete_review(review_id=review.id, user=review_other_user)

        assert Review.objects.filter(id=review.id).exists()

    def test_admin_deletes_any_review(self, review, review_admin, review_movie):
        delete_review(review_id=review.id, user=review_admin)

        assert not Review.objects.filter(id=review.id).exists()
        assert movie_aggregates(review_movie) == (Decimal('0.0'), 0)

    def test_delete_missing_review(self, review_user):
        with pytest.raises(ReviewNotFoundError):
            delete_review(review_id=uuid4(), user=review_user)


# ============================================================================
# HELPFUL VOTES / LISTINGS / STATISTICS
# ============================================================================

@pytest.mark.django_db
class TestHelpfulVotes:
    """Test helpful vote counter."""

    def test_increments_by_one(self, review):
        assert mark_review_helpful(review_id=review.id) == 1
        assert mark_review_helpful(review_id=review.id) == 2

        review.refresh_from_db()
        assert review.helpful_votes == 2

    def test_missing_review(self):
        with pytest.raises(ReviewNotFoundError):
            mark_review_helpful(review_id=uuid4())


@pytest.mark.django_db
class TestListings:
    """Test review listings."""

    def test_get_review_by_id(self, review):
        assert get_review_by_id(review_id=review.id).id == review.id

    def test_get_review_by_id_missing(self):
        with pytest.raises(ReviewNotFoundError):
            get_review_by_id(review_id=uuid4())

    def test_movie_reviews_newest_first(self, review, other_review, review_movie):
        reviews = list(get_movie_reviews(movie_id=review_movie.id))

        assert [r.id for r in reviews] == [other_review.id, review.id]

    def test_movie_reviews_unknown_movie(self):
        with pytest.raises(MovieNotFoundError):
            get_movie_reviews(movie_id=uuid4())

    def test_user_reviews(self, review, other_review, review_user):
        reviews = list(get_user_reviews(user_id=review_user.id))

        assert [r.id for r in reviews] == [review.id]


@pytest.mark.django_db
class TestUserReviewStatistics:
    """Test per-user rating summary."""

    def test_statistics(self, review_user, review_movie, review_another_movie):
        submit_review(user=review_user, movie_id=review_movie.id, rating=5, review_text='Loved every minute.')
        submit_review(user=review_user, movie_id=review_another_movie.id, rating=4, review_text='Very strong film.')

        stats = get_user_review_statistics(user_id=review_user.id)

        assert stats['total_reviews'] == 2
        assert stats['average_rating'] == 4.5
        assert stats['rating_distribution'] == {'1': 0, '2': 0, '3': 0, '4': 1, '5': 1}

    def test_statistics_without_reviews(self, review_user):
        stats = get_user_review_statistics(user_id=review_user.id)

        assert stats == {
            'total_reviews': 0,
            'average_rating': 0.0,
            'rating_distribution': {'1': 0, '2': 0, '3': 0, '4': 0, '5': 0},
        }
