import json
from dataclasses import asdict, replace
from datetime import date
from pathlib import Path
from typing import Any, Callable, Iterable, Tuple

from ledger.categories import DEFAULT_CATEGORY
from ledger.dates import encode_date
from ledger.domain import LedgerEntry
from ledger.functional import parse_amount, parse_date_key
from ledger.logging_setup import get_logger

logger = get_logger(__name__)

IMPORTED_DESCRIPTION = "Imported Expense"


class LedgerFormatError(ValueError):
    """The stored or imported data is not a JSON array of entry records."""


def _text(value: Any, default: str = "") -> str:
    # the store may hold numbers where text is expected
    if value is None or value == "":
        return default
    return str(value)


def entry_from_record(record: dict) -> LedgerEntry:
    return LedgerEntry(
        id=str(record["id"]),
        owner_ref=_text(record.get("owner_ref")),
        date_key=_text(record.get("date_key") or record.get("date")),
        category=_text(record.get("category")),
        amount=record.get("amount"),
        description=_text(record.get("description")),
    )


def entry_to_record(entry: LedgerEntry) -> dict:
    return asdict(entry)


def _parse_array(text: str, source: str) -> list:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LedgerFormatError(f"{source} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise LedgerFormatError(f"{source} must hold a JSON array, got {type(data).__name__}")
    return data


def load_entries(path: Path) -> Tuple[LedgerEntry, ...]:
    path = Path(path)
    if not path.exists():
        logger.info("no ledger file at %s, starting empty", path)
        return ()
    records = _parse_array(path.read_text(encoding="utf-8"), str(path))
    try:
        entries = tuple(entry_from_record(r) for r in records)
    except (KeyError, TypeError, AttributeError) as e:
        raise LedgerFormatError(f"{path} holds a malformed entry: {e}") from e
    logger.info("loaded %d entries from %s", len(entries), path)
    return entries


def export_entries(entries: Iterable[LedgerEntry]) -> str:
    return json.dumps([entry_to_record(e) for e in entries], indent=2)


def save_entries(path: Path, entries: Iterable[LedgerEntry]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_entries(entries), encoding="utf-8")


def backup_filename(today: date) -> str:
    return f"ledger_backup_{encode_date(today)}.json"


def parse_import(text: str) -> list:
    return _parse_array(text, "import file")


def import_records(
    records: Iterable[Any],
    owner_ref: str,
    today: date,
    new_id: Callable[[], str],
) -> Tuple[LedgerEntry, ...]:
    """Turn loosely shaped backup records into entries owned by ``owner_ref``.

    Missing fields get defaults; ownership in the file is ignored. A record
    with an unreadable date or a negative amount rejects the whole file.
    """
    entries = []
    for n, item in enumerate(records, start=1):
        if not isinstance(item, dict):
            raise LedgerFormatError(f"import record must be an object, got {type(item).__name__}")

        raw_date = item.get("date_key") or item.get("date")
        if raw_date:
            day = parse_date_key(raw_date).get_or_else(None)
            if day is None:
                raise LedgerFormatError(f"import record {n} has unreadable date {raw_date!r}")
        else:
            day = today

        amount = parse_amount(item.get("amount")).get_or_else(0.0)
        if amount < 0:
            raise LedgerFormatError(f"import record {n} has negative amount {item.get('amount')!r}")

        entries.append(LedgerEntry(
            id=new_id(),
            owner_ref=owner_ref,
            date_key=encode_date(day),
            category=_text(item.get("category"), DEFAULT_CATEGORY),
            amount=amount,
            description=_text(item.get("description"), IMPORTED_DESCRIPTION),
        ))
    return tuple(entries)


def add_entry(entries: Tuple[LedgerEntry, ...], e: LedgerEntry) -> Tuple[LedgerEntry, ...]:
    # newest first, the way the store lists them
    return (e,) + entries


def add_entries(
    entries: Tuple[LedgerEntry, ...], new: Tuple[LedgerEntry, ...]
) -> Tuple[LedgerEntry, ...]:
    return tuple(new) + entries


def update_entry(
    entries: Tuple[LedgerEntry, ...], entry_id: str, changes: LedgerEntry
) -> Tuple[LedgerEntry, ...]:
    return tuple(
        replace(changes, id=e.id, owner_ref=e.owner_ref) if e.id == entry_id else e
        for e in entries
    )


def delete_entry(entries: Tuple[LedgerEntry, ...], entry_id: str) -> Tuple[LedgerEntry, ...]:
    return tuple(filter(lambda e: e.id != entry_id, entries))


def delete_owner_entries(entries: Tuple[LedgerEntry, ...], owner_ref: str) -> Tuple[LedgerEntry, ...]:
    return tuple(filter(lambda e: e.owner_ref != owner_ref, entries))


def find_entry(entries: Iterable[LedgerEntry], entry_id: str):
    return next((e for e in entries if e.id == entry_id), None)
