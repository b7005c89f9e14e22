import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Callable, Generic, TypeVar

from ledger.domain import LedgerEntry

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return self

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Right carries no error")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def pipe(x, *funcs):
    """pipe(x, f, g, h) == h(g(f(x)))"""
    res = x
    for f in funcs:
        res = f(res)
    return res


def parse_amount(value: Any) -> Maybe[float]:
    """Some(float) for a finite number or numeric string, Nothing otherwise."""
    if value is None or isinstance(value, bool):
        return Nothing()
    if isinstance(value, str):
        value = value.strip()
        # float() would read "1_000" as a Python literal
        if not value or "_" in value:
            return Nothing()
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return Nothing()
    if not math.isfinite(amount):
        return Nothing()
    return Some(amount)


def parse_date_key(value: Any) -> Maybe[date]:
    if not isinstance(value, str) or len(value) < 10:
        return Nothing()
    parts = value[:10].split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return Nothing()
    try:
        return Some(date(int(parts[0]), int(parts[1]), int(parts[2])))
    except ValueError:
        return Nothing()


def validate_entry(entry: LedgerEntry) -> Either[dict, LedgerEntry]:
    """Check an entry at the data-entry boundary before it reaches the store."""
    if parse_date_key(entry.date_key).is_none():
        return Left({
            "error": "invalid_date",
            "message": f"Date {entry.date_key!r} is not a YYYY-MM-DD calendar date",
            "date": entry.date_key,
        })

    amount = parse_amount(entry.amount)
    if amount.is_none():
        return Left({
            "error": "invalid_amount",
            "message": f"Amount {entry.amount!r} is not a number",
            "amount": entry.amount,
        })
    if amount.get_or_else(0.0) < 0:
        return Left({
            "error": "negative_amount",
            "message": f"Amount {entry.amount!r} cannot be negative",
            "amount": entry.amount,
        })

    if not entry.category:
        return Left({
            "error": "missing_category",
            "message": "Entry has no category",
        })

    return Right(entry)
