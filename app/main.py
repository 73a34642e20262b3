import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from tracker.config import load_config
from tracker.domain import (
    CATEGORIES,
    EXPENSE,
    INCOME,
    RANGE_ALL,
    RANGE_LAST_7_DAYS,
    RANGE_LAST_30_DAYS,
    VIEW_LIST,
    VIEW_REPORTS,
)
from tracker.events import (
    BUDGET_CHANGED,
    GOAL_CHANGED,
    LEDGER_RESET,
    RANGE_CHANGED,
    REPORT_KIND_CHANGED,
    SEARCH_CHANGED,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    VIEW_CHANGED,
    Store,
    register_default_handlers,
)
from tracker.functional import validate_entry
from tracker.geometry import map_points, path_to_svg, slice_outline
from tracker.logger import setup_logging
from tracker.services import DashboardService
from tracker.transforms import export_json

CATEGORY_COLORS = {
    "Food": "#6366f1",
    "Groceries": "#f97316",
    "Transport": "#8b5cf6",
    "Housing": "#ec4899",
    "Utilities": "#f59e0b",
    "Entertainment": "#10b981",
    "Health": "#ef4444",
    "Shopping": "#06b6d4",
    "Salary": "#22c55e",
    "Gift": "#eab308",
    "Investment": "#84cc16",
    "Other": "#64748b",
}
FALLBACK_COLOR = "#94a3b8"

RANGE_LABELS = {
    RANGE_ALL: "All",
    RANGE_LAST_7_DAYS: "7d",
    RANGE_LAST_30_DAYS: "30d",
}

st.set_page_config(page_title="Spend Tracker", layout="wide")

if "config" not in st.session_state:
    config = load_config()
    setup_logging(config)
    st.session_state.config = config

config = st.session_state.config

if "store" not in st.session_state:
    store = Store(config.initial_state())
    register_default_handlers(store.bus)
    st.session_state.store = store

store: Store = st.session_state.store
service = DashboardService(config.viewport)
cur = config.currency_symbol

state = store.state
view = service.summary(state, date.today())


def money(value: float) -> str:
    return f"{cur}{value:,.2f}"


# --- Summary cards

c1, c2, c3, c4 = st.columns(4)
with c1:
    label = "Surplus" if view.net_balance < 0 else "Deficit"
    st.metric("Net Balance", money(abs(view.net_balance)), label)
with c2:
    st.metric(f"🎯 {state.goal.title or 'Savings goal'}", money(view.net_savings))
    st.progress(view.goal_progress / 100, text=f"{view.goal_progress:.0f}% of {money(state.goal.target)}")
with c3:
    st.metric("Total spent", money(view.total_expense))
    st.progress(view.budget_progress / 100, text=f"{view.budget_progress:.0f}% of budget")
with c4:
    st.metric("Budget remaining", money(view.budget_remaining))

with st.sidebar:
    st.markdown("### ⚙ Settings")
    new_limit = st.number_input(
        "Monthly budget", min_value=0.0, value=float(state.budget.monthly_limit), step=1000.0
    )
    if new_limit != state.budget.monthly_limit:
        store.dispatch(BUDGET_CHANGED, {"monthly_limit": new_limit})
        st.rerun()

    with st.form("goal_form"):
        st.markdown("### 🚩 Savings goal")
        goal_title = st.text_input("Goal title", value=state.goal.title)
        goal_target = st.number_input(
            "Target", min_value=0.0, value=float(state.goal.target), step=1000.0
        )
        if st.form_submit_button("Save goal"):
            store.dispatch(GOAL_CHANGED, {"title": goal_title, "target": goal_target})
            st.rerun()

    st.download_button(
        "⬇ Export JSON",
        export_json(state.transactions),
        file_name="transactions.json",
        mime="application/json",
    )

    if st.checkbox("I want to delete every entry"):
        if st.button("↺ Reset ledger", type="primary"):
            store.dispatch(LEDGER_RESET)
            st.rerun()

# --- Entry form

with st.form("entry_form", clear_on_submit=True):
    f1, f2, f3, f4, f5 = st.columns([3, 2, 2, 2, 2])
    title = f1.text_input("Title")
    amount = f2.text_input("Amount")
    category = f3.selectbox("Category", CATEGORIES)
    kind = f4.radio("Type", (EXPENSE, INCOME), horizontal=True)
    entry_date = f5.date_input("Date", value=date.today())
    if st.form_submit_button("➕ Add"):
        result = validate_entry(title, amount, category, kind, entry_date)
        if result.is_right():
            store.dispatch(TRANSACTION_ADDED, {"transaction": result.get_or_else(None)})
            st.rerun()
        else:
            st.error(result.get_error()["message"])

tab = st.radio(
    "View",
    (VIEW_LIST, VIEW_REPORTS),
    index=0 if state.view == VIEW_LIST else 1,
    format_func=lambda v: "📋 List" if v == VIEW_LIST else "📊 Reports",
    horizontal=True,
)
if tab != state.view:
    store.dispatch(VIEW_CHANGED, {"view": tab})
    st.rerun()


def render_list() -> None:
    s1, s2 = st.columns([3, 1])
    search = s1.text_input("🔍 Search", value=state.search_text)
    if search != state.search_text:
        store.dispatch(SEARCH_CHANGED, {"text": search})
        st.rerun()
    selected_range = s2.radio(
        "Range",
        list(RANGE_LABELS),
        index=list(RANGE_LABELS).index(state.range_selector),
        format_func=RANGE_LABELS.get,
        horizontal=True,
    )
    if selected_range != state.range_selector:
        store.dispatch(RANGE_CHANGED, {"range": selected_range})
        st.rerun()

    if not view.grouped:
        st.info("No transactions to display.")
        return

    for day, entries in view.grouped.items():
        st.subheader(day.strftime("%a, %d %b %Y"))
        df = pd.DataFrame(
            [
                {
                    "Title": t.title,
                    "Category": t.category,
                    "Amount": f"{'+' if t.kind == INCOME else '-'}{money(t.amount)}",
                }
                for t in entries
            ]
        )
        left, right = st.columns([5, 1])
        left.dataframe(df, hide_index=True, use_container_width=True)
        with right:
            for t in entries:
                if st.button(f"🗑 {t.title}", key=f"del-{t.id}"):
                    store.dispatch(TRANSACTION_DELETED, {"id": t.id})
                    st.rerun()


def trend_figure(hover_index) -> go.Figure:
    vp = config.viewport
    geometry = service.charts(state)
    series = view.cumulative_series
    coords = map_points(series, vp.width, vp.height, vp.padding)

    fig = go.Figure()
    if geometry.trend_path:
        fig.add_shape(
            type="path",
            path=path_to_svg(geometry.trend_path),
            xref="x",
            yref="y",
            line=dict(color="#6366f1", width=3),
        )
    fig.add_trace(go.Scatter(
        x=[x for x, _ in coords],
        y=[y for _, y in coords],
        mode="markers",
        marker=dict(size=6, color="#6366f1"),
        text=[f"{p.date.isoformat()}: {money(p.value)}" for p in series],
        hoverinfo="text",
        showlegend=False,
    ))
    if hover_index is not None and coords:
        hx, hy = coords[hover_index]
        fig.add_trace(go.Scatter(
            x=[hx], y=[hy], mode="markers",
            marker=dict(size=14, color="#f59e0b"), showlegend=False, hoverinfo="skip",
        ))
    fig.update_xaxes(range=[0, vp.width], visible=False)
    fig.update_yaxes(range=[vp.height, 0], visible=False)
    fig.update_layout(width=vp.width, height=vp.height, margin=dict(t=0, b=0, l=0, r=0))
    return fig


def pie_figure(hovered) -> go.Figure:
    fig = go.Figure()
    for s in service.charts(state).pie_slices:
        if s.fraction <= 0:
            continue
        outline = slice_outline(s)
        fig.add_trace(go.Scatter(
            x=[x for x, _ in outline],
            y=[y for _, y in outline],
            fill="toself",
            mode="lines",
            line=dict(width=3 if hovered == s else 0.5, color="white"),
            fillcolor=CATEGORY_COLORS.get(s.color_key, FALLBACK_COLOR),
            name=s.category,
            text=f"{s.category}: {money(s.amount)} ({s.fraction:.0%})",
            hoveron="fills",
            hoverinfo="text",
        ))
    fig.update_xaxes(range=[-1.1, 1.1], visible=False)
    fig.update_yaxes(range=[-1.1, 1.1], visible=False, scaleanchor="x")
    fig.update_layout(height=360, margin=dict(t=0, b=0, l=0, r=0))
    return fig


def render_reports() -> None:
    kind = st.radio(
        "Report",
        (EXPENSE, INCOME),
        index=0 if state.report_kind == EXPENSE else 1,
        horizontal=True,
    )
    if kind != state.report_kind:
        store.dispatch(REPORT_KIND_CHANGED, {"kind": kind})
        st.rerun()

    st.subheader("📈 Cumulative net spending")
    vp = config.viewport
    pointer_x = st.slider("Pointer x (px)", 0, int(vp.width), int(vp.padding))
    hovered_point = service.hover_point(state, pointer_x, vp.width)
    hover_index = hovered_point.map(lambda hit: hit[0]).get_or_else(None)
    st.plotly_chart(trend_figure(hover_index))
    if hovered_point.is_some():
        _, point = hovered_point.get_or_else(None)
        st.caption(f"{point.date.isoformat()}: {money(point.value)}")

    st.subheader(f"🥧 {kind.title()} by category")
    p1, p2 = st.columns(2)
    px_ = p1.slider("Pointer x", -1.0, 1.0, 0.5, 0.05)
    py_ = p2.slider("Pointer y", -1.0, 1.0, 0.0, 0.05)
    hovered_slice = service.hover_slice(state, px_, py_)
    st.plotly_chart(pie_figure(hovered_slice.get_or_else(None)), use_container_width=True)
    if hovered_slice.is_some():
        s = hovered_slice.get_or_else(None)
        st.caption(f"{s.category}: {money(s.amount)} ({s.fraction:.1%})")

    if view.category_breakdown:
        df = pd.DataFrame(view.category_breakdown, columns=["Category", "Amount"])
        df["Share"] = (df["Amount"] / df["Amount"].sum()).map(lambda v: f"{v:.1%}")
        df["Amount"] = df["Amount"].map(money)
        st.dataframe(
            df,
            hide_index=True,
            use_container_width=True,
        )
    else:
        st.info(f"No {kind} entries yet.")


if state.view == VIEW_LIST:
    render_list()
else:
    render_reports()
