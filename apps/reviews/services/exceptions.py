"""Domain exceptions for reviews app."""


class ReviewsServiceError(Exception):
    """Base exception for all reviews service errors."""
    pass


class ReviewNotFoundError(ReviewsServiceError):
    """Review does not exist or belongs to another user."""
    pass


class DuplicateReviewError(ReviewsServiceError):
    """User already reviewed this movie."""
    pass


class InvalidRatingError(ReviewsServiceError):
    """Rating must be an integer between 1 and 5."""
    pass


class InvalidReviewTextError(ReviewsServiceError):
    """Review text must be between 10 and 2000 characters."""
    pass


class MovieNotFoundError(ReviewsServiceError):
    """Movie does not exist."""
    pass
