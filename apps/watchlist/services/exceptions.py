"""Domain exceptions for watchlist app."""


class WatchlistServiceError(Exception):
    """Base exception for all watchlist service errors."""
    pass


class WatchlistEntryNotFoundError(WatchlistServiceError):
    """Movie is not in the user's watchlist."""
    pass


class DuplicateWatchlistEntryError(WatchlistServiceError):
    """Movie is already in the user's watchlist."""
    pass


class InvalidStatusError(WatchlistServiceError):
    """Status is not one of want_to_watch, watching, watched."""
    pass


class MovieNotFoundError(WatchlistServiceError):
    """Movie does not exist."""
    pass
