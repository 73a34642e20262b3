import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Callable, Generic, Optional, TypeVar, Union
from uuid import uuid4

from tracker.domain import CATEGORIES, KINDS, Transaction

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
        return Nothing()

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return Nothing()

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
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

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


# --- Entry form boundary: nothing reaches the ledger without passing here


def _to_float(raw) -> Maybe[float]:
    if raw is None or isinstance(raw, bool):
        return Nothing()
    try:
        return Some(float(raw.strip()) if isinstance(raw, str) else float(raw))
    except (TypeError, ValueError):
        return Nothing()


def _finite(value: float) -> Maybe[float]:
    return Some(value) if math.isfinite(value) else Nothing()


def _parse_amount(raw: Union[str, float, int, None]) -> Maybe[float]:
    return _to_float(raw).bind(_finite)


def _parse_date(raw: Union[str, date, None]) -> Maybe[date]:
    if isinstance(raw, datetime):
        return Some(raw.date())
    if isinstance(raw, date):
        return Some(raw)
    if not raw:
        return Nothing()
    try:
        return Some(date.fromisoformat(str(raw).strip()))
    except ValueError:
        return Nothing()


def _check_title(fields: dict) -> Either[dict, dict]:
    clean_title = (fields["title"] or "").strip()
    if not clean_title:
        return Left({
            "error": "empty_title",
            "message": "Title must not be empty",
            "title": fields["title"],
        })
    return Right({**fields, "title": clean_title})


def _check_amount(fields: dict) -> Either[dict, dict]:
    raw = fields["amount"]
    value = _parse_amount(raw).get_or_else(None)
    if value is None:
        return Left({
            "error": "invalid_amount",
            "message": f"Amount {raw!r} is not a number",
            "amount": raw,
        })
    if value <= 0:
        return Left({
            "error": "non_positive_amount",
            "message": "Amount must be greater than zero",
            "amount": value,
        })
    return Right({**fields, "amount": value})


def _check_category(fields: dict) -> Either[dict, dict]:
    if fields["category"] not in CATEGORIES:
        return Left({
            "error": "unknown_category",
            "message": f"Category {fields['category']!r} does not exist",
            "category": fields["category"],
        })
    return Right(fields)


def _check_kind(fields: dict) -> Either[dict, dict]:
    if fields["kind"] not in KINDS:
        return Left({
            "error": "unknown_kind",
            "message": f"Kind must be one of {', '.join(KINDS)}",
            "kind": fields["kind"],
        })
    return Right(fields)


def _check_date(fields: dict) -> Either[dict, dict]:
    raw = fields["date"]
    parsed = _parse_date(raw).get_or_else(None)
    if parsed is None:
        return Left({
            "error": "invalid_date",
            "message": f"Date {raw!r} is not a valid YYYY-MM-DD date",
            "date": raw,
        })
    return Right({**fields, "date": parsed})


def validate_entry(
    title: str,
    amount: Union[str, float, int, None],
    category: str,
    kind: str,
    entry_date: Union[str, date, None],
    *,
    id: Optional[str] = None,
) -> Either[dict, Transaction]:
    """Check raw form input and build a Transaction.

    Checks run in a fixed order and the first failure wins, so a Left
    always carries exactly one error code.
    """
    fields = {
        "title": title,
        "amount": amount,
        "category": category,
        "kind": kind,
        "date": entry_date,
    }
    return (
        Right(fields)
        .bind(_check_title)
        .bind(_check_amount)
        .bind(_check_category)
        .bind(_check_kind)
        .bind(_check_date)
        .map(lambda clean: Transaction(id=id or uuid4().hex, **clean))
    )
