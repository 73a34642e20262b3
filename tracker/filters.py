from datetime import date, datetime, time, timedelta
from typing import Callable, Iterable, Union

from tracker.domain import RANGE_ALL, RANGE_DAYS, Transaction
from tracker.logger import get_logger

logger = get_logger()

Predicate = Callable[[Transaction], bool]


def iter_transactions(
    trans: Iterable[Transaction], pred: Predicate
) -> Iterable[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def by_kind(kind: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.kind == kind

    return _filter


def by_search_text(text: str) -> Predicate:
    needle = (text or "").lower()

    def _filter(t: Transaction) -> bool:
        return needle in t.title.lower() or needle in t.category.lower()

    return _filter


def _as_datetime(instant: Union[date, datetime]) -> datetime:
    if isinstance(instant, datetime):
        return instant.replace(tzinfo=None)
    return datetime.combine(instant, time.min)


def by_recent_range(range_selector: str, reference: Union[date, datetime]) -> Predicate:
    """Keep transactions dated on or after ``reference`` minus the range's days.

    The day of a transaction counts from midnight, so with a reference that
    carries a time of day the oldest boundary day drops out.
    """
    if range_selector == RANGE_ALL:
        return lambda t: True
    if range_selector not in RANGE_DAYS:
        logger.warning(f"Unknown range selector {range_selector!r}, showing all entries")
        return lambda t: True

    cutoff = _as_datetime(reference) - timedelta(days=RANGE_DAYS[range_selector])

    def _filter(t: Transaction) -> bool:
        return _as_datetime(t.date) >= cutoff

    return _filter


def all_of(*preds: Predicate) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter
