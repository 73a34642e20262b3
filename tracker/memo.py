from datetime import date, datetime
from functools import lru_cache
from typing import Union

from tracker.domain import (
    EXPENSE,
    AggregateView,
    BudgetConfig,
    ChartGeometry,
    SavingsGoal,
    SeriesPoint,
    Transaction,
    Viewport,
)
from tracker.geometry import build_pie_slices, build_smooth_path
from tracker.transforms import (
    budget_progress_percent,
    budget_remaining,
    category_breakdown,
    cumulative_series,
    filter_and_sort,
    goal_progress_percent,
    group_by_date,
    net_balance,
    net_savings,
    totals,
)


@lru_cache(maxsize=64)
def trend_series(transactions: tuple[Transaction, ...]) -> tuple[SeriesPoint, ...]:
    return cumulative_series(transactions)


@lru_cache(maxsize=64)
def aggregate_view(
    transactions: tuple[Transaction, ...],
    budget: BudgetConfig,
    goal: SavingsGoal,
    report_kind: str,
    search_text: str,
    range_selector: str,
    reference: Union[date, datetime],
) -> AggregateView:
    tot = totals(transactions)
    savings = net_savings(tot)
    visible = filter_and_sort(transactions, search_text, range_selector, reference)

    return AggregateView(
        total_income=tot.total_income,
        total_expense=tot.total_expense,
        net_balance=net_balance(tot),
        net_savings=savings,
        goal_progress=goal_progress_percent(savings, goal.target),
        budget_progress=budget_progress_percent(tot.total_expense, budget.monthly_limit),
        budget_remaining=budget_remaining(tot.total_expense, budget.monthly_limit),
        category_breakdown=category_breakdown(transactions, report_kind),
        cumulative_series=trend_series(transactions),
        visible=visible,
        grouped=group_by_date(visible),
    )


@lru_cache(maxsize=64)
def chart_geometry(
    transactions: tuple[Transaction, ...], report_kind: str, viewport: Viewport
) -> ChartGeometry:
    tot = totals(transactions)
    divisor = tot.total_expense if report_kind == EXPENSE else tot.total_income

    return ChartGeometry(
        trend_path=build_smooth_path(
            trend_series(transactions),
            viewport.width,
            viewport.height,
            viewport.padding,
        ),
        pie_slices=build_pie_slices(category_breakdown(transactions, report_kind), divisor),
    )
