from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'Event', 'EventBus',
    'ENTRY_ADDED', 'ENTRY_UPDATED', 'ENTRY_DELETED', 'ENTRIES_IMPORTED', 'ENTRIES_CLEARED',
    'MUTATION_EVENTS',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in list(handlers)]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


ENTRY_ADDED = "ENTRY_ADDED"
ENTRY_UPDATED = "ENTRY_UPDATED"
ENTRY_DELETED = "ENTRY_DELETED"
ENTRIES_IMPORTED = "ENTRIES_IMPORTED"
ENTRIES_CLEARED = "ENTRIES_CLEARED"

MUTATION_EVENTS = (ENTRY_ADDED, ENTRY_UPDATED, ENTRY_DELETED, ENTRIES_IMPORTED, ENTRIES_CLEARED)
