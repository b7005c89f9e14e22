from datetime import date
from typing import Any, Callable, Dict, Iterable, Optional, Tuple
from uuid import uuid4

from ledger import transforms
from ledger.aggregation import compute_stats
from ledger.domain import FilterCriteria, LedgerEntry, Stats
from ledger.events import (
    ENTRIES_CLEARED,
    ENTRIES_IMPORTED,
    ENTRY_ADDED,
    ENTRY_DELETED,
    ENTRY_UPDATED,
    MUTATION_EVENTS,
    Event,
    EventBus,
)
from ledger.filters import filter_entries
from ledger.functional import Either, Left, Right, parse_amount, validate_entry
from ledger.logging_setup import get_logger

logger = get_logger(__name__)


def _new_id() -> str:
    return uuid4().hex


class LedgerService:
    """Facade over one owner's entry snapshot.

    Every mutation validates its input, swaps in a new tuple and publishes an
    event on ``bus``. Stats are cached per anchor date and dropped whenever a
    mutation event goes out, so callers can ask for ``stats()`` freely.

    clock: returns the anchor date, ``date.today`` by default
    on_change: called with the new snapshot after each mutation (e.g. to save it)
    """

    def __init__(
        self,
        entries: Iterable[LedgerEntry] = (),
        *,
        owner_ref: str,
        clock: Callable[[], date] = date.today,
        bus: Optional[EventBus] = None,
        new_id: Callable[[], str] = _new_id,
        on_change: Optional[Callable[[Tuple[LedgerEntry, ...]], None]] = None,
    ):
        self.owner_ref = owner_ref
        self.clock = clock
        self.bus = bus or EventBus()
        self.new_id = new_id
        self.on_change = on_change
        self._entries: Tuple[LedgerEntry, ...] = tuple(entries)
        self._stats: Optional[Stats] = None
        self._stats_anchor: Optional[date] = None
        for name in MUTATION_EVENTS:
            self.bus.subscribe(name, self._invalidate)

    @property
    def entries(self) -> Tuple[LedgerEntry, ...]:
        return self._entries

    def _invalidate(self, event: Event, payload: dict) -> dict:
        self._stats = None
        return {"invalidated": event.name}

    def _commit(self, entries: Tuple[LedgerEntry, ...], event: str, payload: Dict[str, Any]) -> None:
        self._entries = entries
        if self.on_change is not None:
            self.on_change(entries)
        logger.info("%s: %s", event, payload)
        self.bus.publish(event, payload)

    def stats(self) -> Stats:
        anchor = self.clock()
        if self._stats is None or self._stats_anchor != anchor:
            self._stats = compute_stats(self._entries, anchor)
            self._stats_anchor = anchor
        return self._stats

    def filtered(self, criteria: Optional[FilterCriteria] = None) -> Tuple[LedgerEntry, ...]:
        return filter_entries(self._entries, criteria)

    def _build(self, entry_id: str, date_key: str, category: str, amount: Any, description: str) -> Either[dict, LedgerEntry]:
        candidate = LedgerEntry(
            id=entry_id,
            owner_ref=self.owner_ref,
            date_key=date_key,
            category=category,
            amount=amount,
            description=description or "",
        )
        # store the parsed number, not the raw form input
        return validate_entry(candidate).map(
            lambda e: LedgerEntry(
                id=e.id,
                owner_ref=e.owner_ref,
                date_key=e.date_key[:10],
                category=e.category,
                amount=parse_amount(e.amount).get_or_else(0.0),
                description=e.description,
            )
        )

    def add(self, date_key: str, category: str, amount: Any, description: str = "") -> Either[dict, LedgerEntry]:
        result = self._build(self.new_id(), date_key, category, amount, description)
        if result.is_right():
            entry = result.get_or_else(None)
            self._commit(transforms.add_entry(self._entries, entry), ENTRY_ADDED, {"id": entry.id})
        return result

    def update(
        self, entry_id: str, date_key: str, category: str, amount: Any, description: str = ""
    ) -> Either[dict, LedgerEntry]:
        if transforms.find_entry(self._entries, entry_id) is None:
            return Left({
                "error": "entry_not_found",
                "message": f"Entry with ID {entry_id} does not exist",
                "id": entry_id,
            })
        result = self._build(entry_id, date_key, category, amount, description)
        if result.is_right():
            entry = result.get_or_else(None)
            self._commit(transforms.update_entry(self._entries, entry_id, entry), ENTRY_UPDATED, {"id": entry_id})
        return result

    def delete(self, entry_id: str) -> Either[dict, str]:
        if transforms.find_entry(self._entries, entry_id) is None:
            return Left({
                "error": "entry_not_found",
                "message": f"Entry with ID {entry_id} does not exist",
                "id": entry_id,
            })
        self._commit(transforms.delete_entry(self._entries, entry_id), ENTRY_DELETED, {"id": entry_id})
        return Right(entry_id)

    def import_json(self, text: str) -> Either[dict, Tuple[LedgerEntry, ...]]:
        try:
            records = transforms.parse_import(text)
            new = transforms.import_records(records, self.owner_ref, self.clock(), self.new_id)
        except transforms.LedgerFormatError as e:
            logger.warning("import rejected: %s", e)
            return Left({"error": "invalid_import", "message": str(e)})
        self._commit(transforms.add_entries(self._entries, new), ENTRIES_IMPORTED, {"count": len(new)})
        return Right(new)

    def export_json(self) -> str:
        return transforms.export_entries(self._entries)

    def clear(self) -> int:
        """Drop every entry owned by ``owner_ref``; returns how many went."""
        remaining = transforms.delete_owner_entries(self._entries, self.owner_ref)
        removed = len(self._entries) - len(remaining)
        self._commit(remaining, ENTRIES_CLEARED, {"owner_ref": self.owner_ref, "count": removed})
        return removed
