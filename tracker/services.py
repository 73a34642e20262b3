from datetime import date, datetime
from typing import Union

from tracker.domain import AggregateView, AppState, ChartGeometry, PieSlice, SeriesPoint, Viewport
from tracker.functional import Maybe
from tracker.geometry import locate_nearest_index, locate_slice
from tracker.memo import aggregate_view, chart_geometry, trend_series


class DashboardService:
    """Facade from application state to the aggregation and geometry engines.

    The reference instant for range filters is injected per call so the same
    state and instant always give the same view.
    """

    def __init__(self, viewport: Viewport):
        self.viewport = viewport

    def summary(self, state: AppState, reference: Union[date, datetime]) -> AggregateView:
        return aggregate_view(
            state.transactions,
            state.budget,
            state.goal,
            state.report_kind,
            state.search_text,
            state.range_selector,
            reference,
        )

    def charts(self, state: AppState) -> ChartGeometry:
        return chart_geometry(state.transactions, state.report_kind, self.viewport)

    def hover_point(
        self, state: AppState, pointer_x: float, container_width: float
    ) -> Maybe[tuple[int, SeriesPoint]]:
        """Nearest trend point to a pointer position inside the chart container."""
        series = trend_series(state.transactions)
        return locate_nearest_index(
            pointer_x, container_width, self.viewport.padding, len(series)
        ).map(lambda idx: (idx, series[idx]))

    def hover_slice(self, state: AppState, x: float, y: float) -> Maybe[PieSlice]:
        return locate_slice(self.charts(state).pie_slices, x, y)
