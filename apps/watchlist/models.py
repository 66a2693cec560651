# ==========================================
# apps/watchlist/models.py
# ==========================================

from django.db import models
import uuid


class WatchlistStatus(models.TextChoices):
    WANT_TO_WATCH = 'want_to_watch', 'Want to watch'
    WATCHING = 'watching', 'Watching'
    WATCHED = 'watched', 'Watched'


class WatchlistEntry(models.Model):
    """A movie a user keeps track of, with how far they got."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='watchlist_entries')
    movie = models.ForeignKey('movies.Movie', on_delete=models.CASCADE, related_name='watchlist_entries')
    status = models.CharField(
        max_length=20,
        choices=WatchlistStatus.choices,
        default=WatchlistStatus.WANT_TO_WATCH,
    )
    date_added = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'watchlist_entries'
        verbose_name_plural = 'Watchlist entries'
        constraints = [
            models.UniqueConstraint(fields=['user', 'movie'], name='unique_watchlist_entry_per_user_movie'),
        ]
        indexes = [
            models.Index(fields=['user', 'status'], name='watchlist_user_status_idx'),
            models.Index(fields=['user', 'date_added'], name='watchlist_user_added_idx'),
        ]
        ordering = ['-date_added']

    def __str__(self):
        return f"{self.user.username} - {self.movie.title} ({self.status})"
