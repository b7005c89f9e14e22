from typing import Callable, Iterable, Optional

from ledger.dates import decode_date
from ledger.domain import FilterCriteria, LedgerEntry

Predicate = Callable[[LedgerEntry], bool]


def by_text(text: str) -> Predicate:
    needle = text.lower()

    def _filter(e: LedgerEntry) -> bool:
        return needle in str(e.description or "").lower() or needle in str(e.category or "").lower()

    return _filter


def by_category(category: str) -> Predicate:
    def _filter(e: LedgerEntry) -> bool:
        return e.category == category

    return _filter


def by_date(date_key: str) -> Predicate:
    def _filter(e: LedgerEntry) -> bool:
        return e.date_key == date_key

    return _filter


def criteria_predicates(criteria: FilterCriteria) -> list[Predicate]:
    preds = []
    if criteria.text is not None:
        preds.append(by_text(criteria.text))
    if criteria.category is not None:
        preds.append(by_category(criteria.category))
    if criteria.date is not None:
        preds.append(by_date(criteria.date))
    return preds


def iter_entries(entries: Iterable[LedgerEntry], preds: list[Predicate]) -> Iterable[LedgerEntry]:
    for e in entries:
        if all(p(e) for p in preds):
            yield e


def filter_entries(
    entries: Iterable[LedgerEntry], criteria: Optional[FilterCriteria] = None
) -> tuple[LedgerEntry, ...]:
    """Entries matching every active filter, newest date first.

    Entries sharing a date keep their order in ``entries``.
    """
    preds = criteria_predicates(criteria or FilterCriteria())
    # reverse=True keeps sorted() stable for equal dates
    return tuple(sorted(iter_entries(entries, preds), key=lambda e: decode_date(e.date_key), reverse=True))
