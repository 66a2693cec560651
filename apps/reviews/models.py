# ==========================================
# apps/reviews/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator, MinLengthValidator
import uuid


MIN_RATING = 1
MAX_RATING = 5
MIN_REVIEW_LENGTH = 10
MAX_REVIEW_LENGTH = 2000


class Review(models.Model):
    """One user's review of one movie."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='reviews')
    movie = models.ForeignKey('movies.Movie', on_delete=models.CASCADE, related_name='reviews')
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)]
    )
    review_text = models.TextField(
        max_length=MAX_REVIEW_LENGTH,
        validators=[MinLengthValidator(MIN_REVIEW_LENGTH)],
    )
    helpful_votes = models.PositiveIntegerField(default=0)
    is_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reviews'
        constraints = [
            models.UniqueConstraint(fields=['user', 'movie'], name='unique_review_per_user_movie'),
        ]
        indexes = [
            models.Index(fields=['movie', 'created_at'], name='reviews_movie_created_idx'),
            models.Index(fields=['user', 'created_at'], name='reviews_user_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user.username} - {self.movie.title} ({self.rating}★)"
