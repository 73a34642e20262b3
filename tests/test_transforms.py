from datetime import date, datetime

import pytest

from tracker.domain import (
    EXPENSE, INCOME, RANGE_ALL, RANGE_LAST_7_DAYS, RANGE_LAST_30_DAYS,
    SeriesPoint, Totals, Transaction,
)
from tracker.transforms import (
    add_transaction, budget_progress_percent, budget_remaining, category_breakdown,
    clear_transactions, cumulative_series, delete_transaction, export_json,
    filter_and_sort, goal_progress_percent, group_by_date, load_seed,
    net_balance, net_savings, totals,
)


def make_tx(id, kind, amount, day, category="Food", title=None):
    return Transaction(
        id=id,
        title=title or f"entry {id}",
        amount=amount,
        category=category,
        kind=kind,
        date=date.fromisoformat(day),
    )


def make_sample():
    return (
        make_tx("t1", EXPENSE, 300, "2025-01-01", "Food", "Lunch"),
        make_tx("t2", EXPENSE, 200, "2025-01-02", "Transport", "Bus pass"),
        make_tx("t3", INCOME, 5000, "2025-01-03", "Salary", "January salary"),
        make_tx("t4", EXPENSE, 700, "2025-01-03", "Food", "Restaurant"),
        make_tx("t5", EXPENSE, 100, "2025-01-05", "Transport", "Taxi"),
        make_tx("t6", INCOME, 250, "2025-01-05", "Gift", "Birthday"),
    )


def test_totals_empty():
    assert totals(()) == Totals(0.0, 0.0)


def test_totals_partition_by_kind():
    trans = make_sample()
    tot = totals(trans)
    assert tot.total_income == sum(t.amount for t in trans if t.kind == INCOME)
    assert tot.total_expense == sum(t.amount for t in trans if t.kind == EXPENSE)
    assert tot.total_income >= 0
    assert tot.total_expense >= 0


def test_scenario_expense_exceeds_income():
    trans = (
        make_tx("a", EXPENSE, 100, "2024-01-01"),
        make_tx("b", INCOME, 40, "2024-01-01"),
    )
    tot = totals(trans)
    assert tot.total_expense == 100
    assert tot.total_income == 40
    assert net_balance(tot) == 60
    assert net_savings(tot) == 0


def test_net_balance_negative_means_surplus():
    tot = Totals(total_income=500, total_expense=200)
    assert net_balance(tot) == -300
    assert net_savings(tot) == 300


@pytest.mark.parametrize(
    "income, expense",
    [(0, 0), (10, 0), (0, 10), (100, 99.5), (99.5, 100)],
)
def test_net_savings_never_negative(income, expense):
    assert net_savings(Totals(income, expense)) == max(0, income - expense)


def test_goal_progress_caps_at_hundred():
    assert goal_progress_percent(50, 200) == 25
    assert goal_progress_percent(500, 200) == 100


def test_goal_progress_zero_target_is_zero():
    assert goal_progress_percent(1000, 0) == 0


def test_budget_progress_zero_limit_is_zero_not_hundred():
    # a zero limit never reads as a full budget bar
    assert budget_progress_percent(250, 0) == 0


@pytest.mark.parametrize("expense, limit", [(0, 0), (1, 1), (10, 3), (3, 10), (0, 5)])
def test_budget_progress_in_bounds(expense, limit):
    assert 0 <= budget_progress_percent(expense, limit) <= 100


def test_budget_remaining_floors_at_zero():
    assert budget_remaining(300, 1000) == 700
    assert budget_remaining(1300, 1000) == 0


def test_category_breakdown_sorted_descending():
    result = category_breakdown(make_sample(), EXPENSE)
    assert result == (("Food", 1000), ("Transport", 300))


def test_category_breakdown_income_only():
    result = category_breakdown(make_sample(), INCOME)
    assert result == (("Salary", 5000), ("Gift", 250))


def test_category_breakdown_sum_matches_total():
    trans = make_sample()
    tot = totals(trans)
    assert sum(amount for _, amount in category_breakdown(trans, EXPENSE)) == tot.total_expense
    assert sum(amount for _, amount in category_breakdown(trans, INCOME)) == tot.total_income


def test_category_breakdown_ties_keep_first_seen_order():
    trans = (
        make_tx("t1", EXPENSE, 50, "2025-01-01", "Health"),
        make_tx("t2", EXPENSE, 50, "2025-01-01", "Food"),
        make_tx("t3", EXPENSE, 80, "2025-01-01", "Other"),
    )
    assert category_breakdown(trans, EXPENSE) == (("Other", 80), ("Health", 50), ("Food", 50))


def test_filter_and_sort_search_matches_title_or_category():
    trans = make_sample()
    by_title = filter_and_sort(trans, "bus", RANGE_ALL, date(2025, 1, 10))
    by_category = filter_and_sort(trans, "TRANSPORT", RANGE_ALL, date(2025, 1, 10))
    assert [t.id for t in by_title] == ["t2"]
    assert [t.id for t in by_category] == ["t5", "t2"]


def test_filter_and_sort_most_recent_first():
    result = filter_and_sort(make_sample(), "", RANGE_ALL, date(2025, 1, 10))
    dates = [t.date for t in result]
    assert dates == sorted(dates, reverse=True)
    assert len(result) == 6


def test_filter_and_sort_equal_dates_are_stable():
    result = filter_and_sort(make_sample(), "", RANGE_ALL, date(2025, 1, 10))
    same_day = [t.id for t in result if t.date == date(2025, 1, 5)]
    assert same_day == ["t5", "t6"]


def test_filter_and_sort_last_7_days():
    result = filter_and_sort(make_sample(), "", RANGE_LAST_7_DAYS, date(2025, 1, 10))
    assert {t.id for t in result} == {"t3", "t4", "t5", "t6"}


def test_filter_and_sort_range_boundary_day():
    trans = (make_tx("edge", EXPENSE, 10, "2025-01-03"),)
    # midnight reference keeps the boundary day, a later time of day drops it
    assert len(filter_and_sort(trans, "", RANGE_LAST_7_DAYS, date(2025, 1, 10))) == 1
    assert len(filter_and_sort(trans, "", RANGE_LAST_7_DAYS, datetime(2025, 1, 10, 9))) == 0


def test_filter_and_sort_last_30_days():
    trans = make_sample() + (make_tx("old", EXPENSE, 10, "2024-11-01"),)
    result = filter_and_sort(trans, "", RANGE_LAST_30_DAYS, date(2025, 1, 10))
    assert "old" not in {t.id for t in result}
    assert len(result) == 6


def test_filter_and_sort_unknown_range_shows_all():
    result = filter_and_sort(make_sample(), "", "lastyear", date(2025, 1, 10))
    assert len(result) == 6


def test_group_by_date_keeps_input_order():
    trans = (
        make_tx("x", EXPENSE, 1, "2025-01-02"),
        make_tx("y", EXPENSE, 2, "2025-01-01"),
        make_tx("z", INCOME, 3, "2025-01-02"),
    )
    groups = group_by_date(trans)
    assert list(groups) == [date(2025, 1, 2), date(2025, 1, 1)]
    assert [t.id for t in groups[date(2025, 1, 2)]] == ["x", "z"]


def test_group_by_date_is_read_only():
    groups = group_by_date(make_sample())
    with pytest.raises(TypeError):
        groups[date(2030, 1, 1)] = ()


def test_cumulative_series_two_dates():
    trans = (
        make_tx("b", INCOME, 40, "2024-01-02"),
        make_tx("a", EXPENSE, 100, "2024-01-01"),
    )
    assert cumulative_series(trans) == (
        SeriesPoint(date(2024, 1, 1), 100),
        SeriesPoint(date(2024, 1, 2), 60),
    )


def test_cumulative_series_one_point_per_date():
    trans = make_sample()
    series = cumulative_series(trans)
    assert len(series) == len({t.date for t in trans})
    assert [p.date for p in series] == sorted({t.date for t in trans})


def test_cumulative_series_last_value_matches_totals():
    trans = make_sample()
    tot = totals(trans)
    assert cumulative_series(trans)[-1].value == pytest.approx(tot.total_expense - tot.total_income)


def test_cumulative_series_empty():
    assert cumulative_series(()) == ()


def test_add_transaction_puts_newest_first():
    trans = make_sample()
    new = make_tx("t7", EXPENSE, 5, "2025-01-06")
    result = add_transaction(trans, new)
    assert result[0] is new
    assert len(trans) == 6
    assert len(result) == 7


def test_delete_transaction_by_id():
    trans = make_sample()
    result = delete_transaction(trans, "t3")
    assert "t3" not in {t.id for t in result}
    assert len(result) == 5
    assert delete_transaction(trans, "missing") == trans


def test_clear_transactions():
    assert clear_transactions() == ()


def test_export_then_load_seed(tmp_path):
    trans = make_sample()
    path = tmp_path / "ledger.json"
    path.write_text(export_json(trans), encoding="utf-8")

    assert load_seed(str(path)) == trans
