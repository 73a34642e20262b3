from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple, Optional

from tracker.domain import (
    KINDS,
    RANGE_SELECTORS,
    VIEW_LIST,
    VIEW_REPORTS,
    AppState,
    BudgetConfig,
    SavingsGoal,
)
from tracker.logger import get_logger
from tracker.transforms import add_transaction, clear_transactions, delete_transaction

__all__ = [
    'Event', 'EventBus', 'Store', 'apply_event', 'log_event_handler',
    'TRANSACTION_ADDED', 'TRANSACTION_DELETED', 'LEDGER_RESET',
    'BUDGET_CHANGED', 'GOAL_CHANGED', 'SEARCH_CHANGED', 'RANGE_CHANGED',
    'REPORT_KIND_CHANGED', 'VIEW_CHANGED', 'register_default_handlers',
]

logger = get_logger()

TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
LEDGER_RESET = "LEDGER_RESET"
BUDGET_CHANGED = "BUDGET_CHANGED"
GOAL_CHANGED = "GOAL_CHANGED"
SEARCH_CHANGED = "SEARCH_CHANGED"
RANGE_CHANGED = "RANGE_CHANGED"
REPORT_KIND_CHANGED = "REPORT_KIND_CHANGED"
VIEW_CHANGED = "VIEW_CHANGED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Transition = Callable[[AppState, dict], AppState]


def _transaction_added(state: AppState, payload: dict) -> AppState:
    return replace(state, transactions=add_transaction(state.transactions, payload["transaction"]))


def _transaction_deleted(state: AppState, payload: dict) -> AppState:
    return replace(state, transactions=delete_transaction(state.transactions, payload["id"]))


def _ledger_reset(state: AppState, payload: dict) -> AppState:
    return replace(state, transactions=clear_transactions())


def _budget_changed(state: AppState, payload: dict) -> AppState:
    limit = max(0.0, float(payload.get("monthly_limit", 0)))
    return replace(state, budget=BudgetConfig(monthly_limit=limit))


def _goal_changed(state: AppState, payload: dict) -> AppState:
    return replace(state, goal=SavingsGoal(
        title=payload.get("title", state.goal.title),
        target=max(0.0, float(payload.get("target", state.goal.target))),
    ))


def _search_changed(state: AppState, payload: dict) -> AppState:
    return replace(state, search_text=payload.get("text", ""))


def _range_changed(state: AppState, payload: dict) -> AppState:
    selector = payload.get("range")
    if selector not in RANGE_SELECTORS:
        return state
    return replace(state, range_selector=selector)


def _report_kind_changed(state: AppState, payload: dict) -> AppState:
    kind = payload.get("kind")
    if kind not in KINDS:
        return state
    return replace(state, report_kind=kind)


def _view_changed(state: AppState, payload: dict) -> AppState:
    view = payload.get("view")
    if view not in (VIEW_LIST, VIEW_REPORTS):
        return state
    return replace(state, view=view)


TRANSITIONS: Dict[str, Transition] = {
    TRANSACTION_ADDED: _transaction_added,
    TRANSACTION_DELETED: _transaction_deleted,
    LEDGER_RESET: _ledger_reset,
    BUDGET_CHANGED: _budget_changed,
    GOAL_CHANGED: _goal_changed,
    SEARCH_CHANGED: _search_changed,
    RANGE_CHANGED: _range_changed,
    REPORT_KIND_CHANGED: _report_kind_changed,
    VIEW_CHANGED: _view_changed,
}


def apply_event(state: AppState, event: Event) -> AppState:
    """Pure transition (state, event) -> new state. Unknown events are no-ops."""
    transition = TRANSITIONS.get(event.name)
    if transition is None:
        return state
    return transition(state, event.payload)


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event, AppState], None]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event, AppState], None]) -> None:
        if name not in self._subscribers:
            self._subscribers[name] = []
        self._subscribers[name].append(handler)

    def publish(self, event: Event, state: AppState) -> int:
        handlers = self._subscribers.get(event.name, []) + self._subscribers.get("*", [])
        for handler in handlers:
            handler(event, state)
        return len(handlers)

    def unsubscribe(self, name: str, handler: Callable[[Event, AppState], None]) -> None:
        if name in self._subscribers:
            if handler in self._subscribers[name]:
                self._subscribers[name].remove(handler)


class Store:
    """Single owner of the application state."""

    def __init__(self, state: AppState, bus: Optional[EventBus] = None):
        self._state = state
        self.bus = bus or EventBus()

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, name: str, payload: Optional[dict] = None) -> AppState:
        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload or {})
        self._state = apply_event(self._state, event)
        self.bus.publish(event, self._state)
        return self._state


def log_event_handler(event: Event, state: AppState) -> None:
    logger.debug(
        f"{event.name} {sorted(event.payload)} -> {len(state.transactions)} transactions"
    )


def register_default_handlers(bus: EventBus) -> None:
    bus.subscribe("*", log_event_handler)
