"""Domain-specific exceptions for movies services."""


class MoviesServiceError(Exception):
    """Base exception for movies services."""
    pass


class MovieNotFoundError(MoviesServiceError):
    """Raised when movie does not exist."""
    pass


class DuplicateMovieError(MoviesServiceError):
    """Raised when the movie is already in the catalog."""
    pass


class InvalidSortError(MoviesServiceError):
    """Raised when an unknown sort field is requested."""
    pass


class TmdbImportError(MoviesServiceError):
    """Raised when TMDB cannot be reached or returns an error."""
    pass


class TmdbConfigurationError(TmdbImportError):
    """Raised when the TMDB API key is not configured."""
    pass


class TmdbMovieNotFoundError(TmdbImportError):
    """Raised when TMDB has no movie with the given id."""
    pass
