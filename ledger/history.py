from typing import Mapping

from ledger.dates import decode_date
from ledger.domain import PeriodBucket, RawBucket


def month_label(period_key: str) -> str:
    # "2024-03" -> "March 2024"
    return decode_date(period_key + "-01").strftime("%B %Y")


def week_label(period_key: str) -> str:
    # "2024-W09" -> "Week 09, 2024"
    year, week = period_key.split("-W")
    return f"Week {week}, {year}"


def _project(buckets: Mapping[str, RawBucket], label) -> tuple[PeriodBucket, ...]:
    # keys are fixed-width and zero-padded, so string order is date order
    return tuple(
        PeriodBucket(
            period_key=key,
            label=label(key),
            total=buckets[key].total,
            count=buckets[key].count,
            items=tuple(buckets[key].items),
        )
        for key in sorted(buckets, reverse=True)
    )


def project_months(buckets: Mapping[str, RawBucket]) -> tuple[PeriodBucket, ...]:
    """Month buckets, most recent first, labeled like "March 2024"."""
    return _project(buckets, month_label)


def project_weeks(buckets: Mapping[str, RawBucket]) -> tuple[PeriodBucket, ...]:
    """Week buckets, most recent first, labeled like "Week 09, 2024"."""
    return _project(buckets, week_label)
