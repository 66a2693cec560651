"""Services for watchlist business logic."""

from .exceptions import (
    WatchlistServiceError,
    WatchlistEntryNotFoundError,
    DuplicateWatchlistEntryError,
    InvalidStatusError,
    MovieNotFoundError,
)
from .watchlist_management import (
    add_to_watchlist,
    update_watchlist_status,
    remove_from_watchlist,
    check_watchlist,
    get_watchlist_statistics,
    get_user_watchlist,
)

__all__ = [
    # Exceptions
    'WatchlistServiceError',
    'WatchlistEntryNotFoundError',
    'DuplicateWatchlistEntryError',
    'InvalidStatusError',
    'MovieNotFoundError',
    # Watchlist Management
    'add_to_watchlist',
    'update_watchlist_status',
    'remove_from_watchlist',
    'check_watchlist',
    'get_watchlist_statistics',
    'get_user_watchlist',
]
