from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class LedgerEntry:
    id: str
    owner_ref: str     # who owns the entry in the store
    date_key: str      # calendar date, e.g. "2024-03-08"
    category: str      # raw string, grouped as-is
    amount: Any        # number or numeric string; junk counts as 0
    description: str = ""


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    total: float
    color: str


# One point of the recent-activity series
@dataclass(frozen=True)
class SeriesPoint:
    day: str       # "Mon" .. "Sun"
    date_key: str
    total: float


@dataclass(frozen=True)
class PeriodBucket:
    period_key: str  # "YYYY-MM" or "YYYY-Www"
    label: str
    total: float
    count: int
    items: tuple[LedgerEntry, ...]


@dataclass
class RawBucket:
    total: float = 0.0
    count: int = 0
    items: list[LedgerEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Rollup:
    daily: float
    weekly: float
    monthly: float
    total: float
    category_totals: tuple[CategoryTotal, ...]
    seven_day_series: tuple[SeriesPoint, ...]
    month_buckets: dict
    week_buckets: dict


@dataclass(frozen=True)
class Stats:
    daily: float
    weekly: float
    monthly: float
    total: float
    category_totals: tuple[CategoryTotal, ...]
    seven_day_series: tuple[SeriesPoint, ...]
    monthly_history: tuple[PeriodBucket, ...]
    weekly_history: tuple[PeriodBucket, ...]


@dataclass(frozen=True)
class FilterCriteria:
    text: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
