"""Single-pass rollup of ledger entries around an anchor date.

``aggregate`` walks the snapshot once and feeds every accumulator at the same
time: the today/week/month/all-time totals, the per-category map, the
pre-seeded 7-day series, and the raw month and week buckets. ``compute_stats``
adds the history projection on top.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from ledger.categories import category_details
from ledger.dates import decode_date, encode_date
from ledger.domain import CategoryTotal, LedgerEntry, RawBucket, Rollup, SeriesPoint, Stats
from ledger.functional import parse_amount, pipe
from ledger.history import project_months, project_weeks
from ledger.logging_setup import get_logger
from ledger.weeks import iso_week, week_key

logger = get_logger(__name__)

SERIES_DAYS = 7


def entry_amount(entry: LedgerEntry) -> float:
    amount = parse_amount(entry.amount)
    if amount.is_none():
        logger.debug("entry %s has unparsable amount %r, counting it as 0", entry.id, entry.amount)
    return amount.get_or_else(0.0)


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def series_keys(anchor: date) -> list[str]:
    """Date keys of the 7 days ending at ``anchor``, oldest first."""
    return [encode_date(anchor - timedelta(days=i)) for i in range(SERIES_DAYS - 1, -1, -1)]


def _add(buckets: dict, key: str, entry: LedgerEntry, amount: float) -> None:
    bucket = buckets.get(key)
    if bucket is None:
        bucket = buckets[key] = RawBucket()
    bucket.total += amount
    bucket.count += 1
    bucket.items.append(entry)


def aggregate(entries: Iterable[LedgerEntry], now: date) -> Rollup:
    anchor = date(now.year, now.month, now.day)
    today_key = encode_date(anchor)
    anchor_week = iso_week(anchor)

    daily = weekly = monthly = total = 0.0
    by_category: dict[str, float] = {}
    last_seven = {key: 0.0 for key in series_keys(anchor)}
    month_buckets: dict[str, RawBucket] = {}
    week_buckets: dict[str, RawBucket] = {}

    for entry in entries:
        amount = entry_amount(entry)
        entry_date = decode_date(entry.date_key, today=anchor)

        total += amount
        if entry.date_key == today_key:
            daily += amount
        if iso_week(entry_date) == anchor_week:
            weekly += amount
        if entry_date.year == anchor.year and entry_date.month == anchor.month:
            monthly += amount

        by_category[entry.category] = by_category.get(entry.category, 0.0) + amount

        normalized = encode_date(entry_date)
        if normalized in last_seven:
            last_seven[normalized] += amount

        _add(month_buckets, month_key(entry_date), entry, amount)
        _add(week_buckets, week_key(entry_date), entry, amount)

    # sorted() is stable: equal totals stay in first-seen order
    category_totals = tuple(
        CategoryTotal(name=name, total=value, color=category_details(name).color)
        for name, value in sorted(by_category.items(), key=lambda item: item[1], reverse=True)
    )

    series = tuple(
        SeriesPoint(day=decode_date(key).strftime("%a"), date_key=key, total=value)
        for key, value in last_seven.items()
    )

    return Rollup(
        daily=daily,
        weekly=weekly,
        monthly=monthly,
        total=total,
        category_totals=category_totals,
        seven_day_series=series,
        month_buckets=month_buckets,
        week_buckets=week_buckets,
    )


def _to_stats(rollup: Rollup) -> Stats:
    return Stats(
        daily=rollup.daily,
        weekly=rollup.weekly,
        monthly=rollup.monthly,
        total=rollup.total,
        category_totals=rollup.category_totals,
        seven_day_series=rollup.seven_day_series,
        monthly_history=project_months(rollup.month_buckets),
        weekly_history=project_weeks(rollup.week_buckets),
    )


def compute_stats(entries: Iterable[LedgerEntry], now: Optional[date] = None) -> Stats:
    """Full rollup of ``entries`` anchored at ``now`` (today by default)."""
    if now is None:
        now = date.today()
    snapshot = tuple(entries)
    logger.debug("computing stats for %d entries at %s", len(snapshot), encode_date(now))
    return pipe(snapshot, lambda s: aggregate(s, now), _to_stats)
