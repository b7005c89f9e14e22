from datetime import date
from typing import Optional

from ledger.logging_setup import get_logger

logger = get_logger(__name__)


def encode_date(d: date) -> str:
    """Return the ``YYYY-MM-DD`` key for the calendar day of ``d``.

    Uses the value's own year/month/day fields, so a ``datetime`` late in the
    evening still encodes to the same day it shows on the wall clock.
    """
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def decode_date(date_key: Optional[str], *, today: Optional[date] = None) -> date:
    """Parse the first 10 characters of ``date_key`` into a ``date``.

    A trailing time-of-day suffix is ignored. An empty or unreadable key
    falls back to ``today`` (the current date when not given).
    """
    if date_key:
        try:
            year, month, day = (int(part) for part in date_key[:10].split("-"))
            return date(year, month, day)
        except (TypeError, ValueError):
            pass

    fallback = today if today is not None else date.today()
    logger.warning("unreadable date key %r, using %s", date_key, encode_date(fallback))
    return date(fallback.year, fallback.month, fallback.day)
