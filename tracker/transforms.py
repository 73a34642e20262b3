import json
from datetime import date, datetime
from functools import reduce
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple, Union

from tracker.domain import EXPENSE, INCOME, SeriesPoint, Totals, Transaction
from tracker.filters import all_of, by_kind, by_recent_range, by_search_text, iter_transactions


def load_seed(path: str) -> Tuple[Transaction, ...]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return tuple(
        Transaction(**{**t, "date": date.fromisoformat(t["date"]), "amount": float(t["amount"])})
        for t in data["transactions"]
    )


def export_json(trans: Tuple[Transaction, ...]) -> str:
    return json.dumps(
        {
            "transactions": [
                {
                    "id": t.id,
                    "title": t.title,
                    "amount": t.amount,
                    "category": t.category,
                    "kind": t.kind,
                    "date": t.date.isoformat(),
                }
                for t in trans
            ]
        },
        indent=2,
        ensure_ascii=False,
    )


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    # newest entry first
    return (t,) + trans


def delete_transaction(
    trans: Tuple[Transaction, ...], tx_id: str
) -> Tuple[Transaction, ...]:
    return tuple(t for t in trans if t.id != tx_id)


def clear_transactions() -> Tuple[Transaction, ...]:
    return ()


def totals(trans: Iterable[Transaction]) -> Totals:
    return reduce(
        lambda acc, t: Totals(
            acc.total_income + (t.amount if t.kind == INCOME else 0.0),
            acc.total_expense + (t.amount if t.kind == EXPENSE else 0.0),
        ),
        trans,
        Totals(0.0, 0.0),
    )


def net_balance(tot: Totals) -> float:
    """Expense minus income. A negative balance is a surplus."""
    return tot.total_expense - tot.total_income


def net_savings(tot: Totals) -> float:
    return max(0.0, tot.total_income - tot.total_expense)


def _capped_percent(value: float, limit: float) -> float:
    if limit <= 0:
        return 0.0
    return min(100.0, value / limit * 100)


def goal_progress_percent(savings: float, goal_target: float) -> float:
    return _capped_percent(savings, goal_target)


def budget_progress_percent(total_expense: float, monthly_limit: float) -> float:
    return _capped_percent(total_expense, monthly_limit)


def budget_remaining(total_expense: float, monthly_limit: float) -> float:
    return max(0.0, monthly_limit - total_expense)


def category_breakdown(
    trans: Iterable[Transaction], kind: str
) -> Tuple[Tuple[str, float], ...]:
    by_category: dict[str, float] = {}
    for t in iter_transactions(trans, by_kind(kind)):
        by_category[t.category] = by_category.get(t.category, 0.0) + t.amount

    # sorted() is stable, so equal amounts keep first-seen order
    return tuple(sorted(by_category.items(), key=lambda item: item[1], reverse=True))


def filter_and_sort(
    trans: Iterable[Transaction],
    search_text: str,
    range_selector: str,
    reference: Union[date, datetime],
) -> Tuple[Transaction, ...]:
    pred = all_of(by_search_text(search_text), by_recent_range(range_selector, reference))
    return tuple(
        sorted(iter_transactions(trans, pred), key=lambda t: t.date, reverse=True)
    )


def group_by_date(
    trans: Iterable[Transaction],
) -> Mapping[date, Tuple[Transaction, ...]]:
    groups: dict[date, list[Transaction]] = {}
    for t in trans:
        groups.setdefault(t.date, []).append(t)
    return MappingProxyType({d: tuple(items) for d, items in groups.items()})


def signed_amount(t: Transaction) -> float:
    """Net outflow of one entry: expenses count up, income counts down."""
    return t.amount if t.kind == EXPENSE else -t.amount


def cumulative_series(trans: Iterable[Transaction]) -> Tuple[SeriesPoint, ...]:
    per_day: dict[date, float] = {}
    for t in sorted(trans, key=lambda t: t.date):
        per_day[t.date] = per_day.get(t.date, 0.0) + signed_amount(t)

    points = []
    running = 0.0
    for day in sorted(per_day):
        running += per_day[day]
        points.append(SeriesPoint(day, running))
    return tuple(points)
