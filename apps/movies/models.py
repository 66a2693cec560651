# ==========================================
# apps/movies/models.py
# ==========================================

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid


EARLIEST_RELEASE_YEAR = 1888
RELEASE_YEAR_LOOKAHEAD = 5


def latest_release_year():
    return timezone.now().year + RELEASE_YEAR_LOOKAHEAD


def validate_release_year(value):
    if not (EARLIEST_RELEASE_YEAR <= value <= latest_release_year()):
        raise ValidationError(
            f"Release year must be between {EARLIEST_RELEASE_YEAR} and {latest_release_year()}"
        )


class Genre(models.Model):
    """Genre tag shared across movies."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=50, unique=True, db_index=True)

    class Meta:
        db_table = 'genres'
        ordering = ['name']

    def __str__(self):
        return self.name


class Movie(models.Model):
    """Catalog entry. average_rating/total_reviews mirror the movie's reviews."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, db_index=True)
    genres = models.ManyToManyField(Genre, related_name='movies')
    release_year = models.PositiveSmallIntegerField(validators=[validate_release_year])
    director = models.CharField(max_length=200)
    cast = models.JSONField(default=list, blank=True)
    synopsis = models.TextField(max_length=2000)
    poster_url = models.URLField(max_length=500, null=True, blank=True)
    backdrop_url = models.URLField(max_length=500, null=True, blank=True)
    trailer_url = models.URLField(max_length=500, null=True, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text='Runtime in minutes')
    average_rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal('0.0'),
        validators=[MinValueValidator(Decimal('0.0')), MaxValueValidator(Decimal('5.0'))],
    )
    total_reviews = models.PositiveIntegerField(default=0)
    tmdb_id = models.PositiveIntegerField(unique=True, null=True, blank=True)
    imdb_id = models.CharField(max_length=20, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'movies'
        indexes = [
            models.Index(fields=['release_year'], name='movies_release_year_idx'),
            models.Index(fields=['average_rating'], name='movies_average_rating_idx'),
            models.Index(fields=['created_at'], name='movies_created_at_idx'),
        ]
        ordering = ['-average_rating', '-created_at']

    def __str__(self):
        return f"{self.title} ({self.release_year})"

    @property
    def genre_names(self):
        return [genre.name for genre in self.genres.all()]
