"""Watchlist management service - per-user movie tracking."""

import logging

from django.db import transaction, IntegrityError
from django.db.models import Count, QuerySet
from uuid import UUID
from typing import Optional

from apps.accounts.models import User
from apps.movies.models import Movie
from ..models import WatchlistEntry, WatchlistStatus
from .exceptions import (
    WatchlistEntryNotFoundError,
    DuplicateWatchlistEntryError,
    InvalidStatusError,
    MovieNotFoundError,
)

logger = logging.getLogger(__name__)


def _validate_status(status: str) -> str:
    if status not in WatchlistStatus.values:
        raise InvalidStatusError(
            f"Invalid status. Must be one of: {', '.join(WatchlistStatus.values)}"
        )
    return status


@transaction.atomic
def add_to_watchlist(
    *,
    user: User,
    movie_id: UUID,
    status: str = WatchlistStatus.WANT_TO_WATCH
) -> WatchlistEntry:
    """
    Add a movie to the user's watchlist.

    Args:
        user: Watchlist owner
        movie_id: UUID of movie
        status: Initial status (default want_to_watch)

    Returns:
        Created WatchlistEntry with movie loaded

    Raises:
        InvalidStatusError: If status is unknown
        MovieNotFoundError: If movie doesn't exist
        DuplicateWatchlistEntryError: If movie already in watchlist
    """
    status = _validate_status(status)

    try:
        movie = Movie.objects.get(id=movie_id)
    except Movie.DoesNotExist:
        raise MovieNotFoundError("Movie not found")

    if WatchlistEntry.objects.filter(user=user, movie=movie).exists():
        raise DuplicateWatchlistEntryError("Movie already in watchlist")

    try:
        entry = WatchlistEntry.objects.create(user=user, movie=movie, status=status)
    except IntegrityError:
        raise DuplicateWatchlistEntryError("Movie already in watchlist")

    logger.info("User %s added movie %s to watchlist as %s", user.id, movie.id, status)
    return entry


@transaction.atomic
def update_watchlist_status(*, user: User, movie_id: UUID, status: str) -> WatchlistEntry:
    """
    Change the status of a watchlist entry.

    Raises:
        InvalidStatusError: If status is unknown
        WatchlistEntryNotFoundError: If movie not in watchlist
    """
    status = _validate_status(status)

    try:
        entry = (
            WatchlistEntry.objects
            .select_for_update()
            .select_related('movie')
            .get(user=user, movie_id=movie_id)
        )
    except WatchlistEntry.DoesNotExist:
        raise WatchlistEntryNotFoundError("Movie not found in watchlist")

    entry.status = status
    entry.save(update_fields=['status', 'updated_at'])
    return entry


@transaction.atomic
def remove_from_watchlist(*, user: User, movie_id: UUID) -> None:
    """
    Remove a movie from the user's watchlist.

    Raises:
        WatchlistEntryNotFoundError: If movie not in watchlist
    """
    deleted, _ = WatchlistEntry.objects.filter(user=user, movie_id=movie_id).delete()
    if not deleted:
        raise WatchlistEntryNotFoundError("Movie not found in watchlist")


def check_watchlist(*, user: User, movie_id: UUID) -> dict:
    """Report whether a movie is in the user's watchlist and with which status."""
    status = (
        WatchlistEntry.objects
        .filter(user=user, movie_id=movie_id)
        .values_list('status', flat=True)
        .first()
    )
    return {
        'in_watchlist': status is not None,
        'status': status,
    }


def get_watchlist_statistics(*, user_id: UUID) -> dict:
    """
    Count a user's watchlist entries per status.

    Returns:
        Dict with want_to_watch, watching, watched and total; every key
        present even when zero
    """
    stats = {value: 0 for value in WatchlistStatus.values}

    rows = (
        WatchlistEntry.objects
        .filter(user_id=user_id)
        .values('status')
        .annotate(count=Count('id'))
    )
    for row in rows:
        stats[row['status']] = row['count']

    stats['total'] = sum(stats.values())
    return stats


def get_user_watchlist(*, user_id: UUID, status: Optional[str] = None) -> QuerySet[WatchlistEntry]:
    """
    A user's watchlist, most recently added first.

    Raises:
        InvalidStatusError: If the status filter is unknown
    """
    entries = (
        WatchlistEntry.objects
        .filter(user_id=user_id)
        .select_related('movie')
        .prefetch_related('movie__genres')
    )
    if status:
        entries = entries.filter(status=_validate_status(status))

    return entries.order_by('-date_added')
