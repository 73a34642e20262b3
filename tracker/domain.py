from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Mapping, NamedTuple

CATEGORIES = (
    "Food",
    "Groceries",
    "Transport",
    "Housing",
    "Utilities",
    "Entertainment",
    "Health",
    "Shopping",
    "Salary",
    "Gift",
    "Investment",
    "Other",
)

EXPENSE = "expense"
INCOME = "income"
KINDS = (EXPENSE, INCOME)

RANGE_ALL = "all"
RANGE_LAST_7_DAYS = "last7days"
RANGE_LAST_30_DAYS = "last30days"
RANGE_DAYS = {
    RANGE_LAST_7_DAYS: 7,
    RANGE_LAST_30_DAYS: 30,
}
RANGE_SELECTORS = (RANGE_ALL, RANGE_LAST_7_DAYS, RANGE_LAST_30_DAYS)

VIEW_LIST = "list"
VIEW_REPORTS = "reports"


@dataclass(frozen=True)
class Transaction:
    id: str
    title: str
    amount: float    # always > 0, sign comes from kind
    category: str    # one of CATEGORIES
    kind: str        # EXPENSE or INCOME
    date: date       # calendar day, no time of day


@dataclass(frozen=True)
class BudgetConfig:
    monthly_limit: float = 0.0


@dataclass(frozen=True)
class SavingsGoal:
    title: str = ""
    target: float = 0.0


class Totals(NamedTuple):
    total_income: float
    total_expense: float


class SeriesPoint(NamedTuple):
    date: date
    value: float


@dataclass(frozen=True)
class AggregateView:
    total_income: float
    total_expense: float
    net_balance: float      # expense - income, negative means surplus
    net_savings: float
    goal_progress: float
    budget_progress: float
    budget_remaining: float
    category_breakdown: tuple[tuple[str, float], ...]
    cumulative_series: tuple[SeriesPoint, ...]
    visible: tuple[Transaction, ...] = ()
    grouped: Mapping[date, tuple[Transaction, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class PieSlice:
    category: str
    amount: float
    start: float    # fraction of a full turn
    end: float
    color_key: str

    @property
    def fraction(self) -> float:
        return self.end - self.start

    @property
    def is_full_circle(self) -> bool:
        return self.start == 0.0 and self.end == 1.0


@dataclass(frozen=True)
class ChartGeometry:
    trend_path: tuple
    pie_slices: tuple[PieSlice, ...]


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float
    padding: float = 40.0


@dataclass(frozen=True)
class AppState:
    transactions: tuple[Transaction, ...] = ()
    budget: BudgetConfig = BudgetConfig()
    goal: SavingsGoal = SavingsGoal()
    report_kind: str = EXPENSE
    search_text: str = ""
    range_selector: str = RANGE_ALL
    view: str = VIEW_LIST
