import math
from datetime import date, timedelta
from functools import lru_cache
from typing import NamedTuple


class IsoWeek(NamedTuple):
    year: int  # owning year, may differ from the calendar year
    week: int


@lru_cache(maxsize=4096)
def _iso_week(d: date) -> IsoWeek:
    # the week belongs to the year that contains its Thursday
    thursday = d + timedelta(days=4 - d.isoweekday())
    year_start = date(thursday.year, 1, 1)
    week = math.ceil(((thursday - year_start).days + 1) / 7)
    return IsoWeek(thursday.year, week)


def iso_week(d: date) -> IsoWeek:
    """Owning year and ISO week number of the calendar day of ``d``."""
    return _iso_week(date(d.year, d.month, d.day))


def week_number(d: date) -> int:
    return iso_week(d).week


def same_week(a: date, b: date) -> bool:
    return iso_week(a) == iso_week(b)


def week_key(d: date) -> str:
    year, week = iso_week(d)
    return f"{year:04d}-W{week:02d}"
