"""Exception hierarchy for the library data layer."""


class GoodBooksError(Exception):
    """Base exception for GoodBooks errors."""

    pass


class StorageError(GoodBooksError):
    """Persistent store failure (disk full, corruption, lost connection).

    Raised by the repository so callers can show a retry-able message.
    """

    pass


class CatalogSearchError(GoodBooksError):
    """Remote catalog search failed (network, bad status, malformed body)."""

    pass


class InvalidDateRangeError(GoodBooksError, ValueError):
    """End date precedes start date."""

    pass
