"""Reading-date helpers. Dates are stored as ``YYYY-MM-DD`` text."""

from datetime import date, datetime

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` date.

    Raises:
        ValueError: for any other shape (``20240101``, week dates, ``2024-1-5``).
    """
    if len(value) != 10:
        raise ValueError(f"expected YYYY-MM-DD, got {value!r}")
    return datetime.strptime(value, ISO_DATE_FORMAT).date()
