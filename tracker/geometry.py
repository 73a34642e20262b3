"""Chart geometry: trend curve paths, pie slices and pointer hit testing.

All coordinates are plain floats in the target drawing space. The trend
curve lives in pixel space (origin top-left, y grows downwards); pie slices
live on the unit circle centred at the origin.
"""

import math
from typing import NamedTuple, Sequence, Tuple, Union

from tracker.domain import PieSlice, SeriesPoint
from tracker.functional import Maybe, Nothing, Some

# Upper bound floor for the value axis, keeps the range non-empty when
# every value is zero or negative.
VALUE_EPSILON = 1e-6


class MoveTo(NamedTuple):
    x: float
    y: float


class CurveTo(NamedTuple):
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float


PathCommand = Union[MoveTo, CurveTo]


def _x_positions(count: int, width: float, padding: float) -> list[float]:
    span = width - padding * 2
    if count < 2:
        return [padding] * count
    return [padding + i / (count - 1) * span for i in range(count)]


def value_range(values: Sequence[float]) -> Tuple[float, float]:
    """Value axis bounds: zero is always inside, the top is at least VALUE_EPSILON."""
    if not values:
        return 0.0, VALUE_EPSILON
    return min(0.0, min(values)), max(max(values), VALUE_EPSILON)


def map_points(
    points: Sequence[SeriesPoint], width: float, height: float, padding: float
) -> list[Tuple[float, float]]:
    values = [p.value for p in points]
    low, high = value_range(values)
    span_y = height - padding * 2
    xs = _x_positions(len(points), width, padding)
    return [
        (x, height - padding - (v - low) / (high - low) * span_y)
        for x, v in zip(xs, values)
    ]


def build_smooth_path(
    points: Sequence[SeriesPoint], width: float, height: float, padding: float
) -> Tuple[PathCommand, ...]:
    """Curve through every point, equally spaced by index.

    Both control points of a segment sit on the horizontal midpoint, each at
    the height of its own endpoint, so the curve is flat at every data point.
    """
    if len(points) < 2:
        return ()

    coords = map_points(points, width, height, padding)
    commands: list[PathCommand] = [MoveTo(*coords[0])]
    for (x0, y0), (x1, y1) in zip(coords, coords[1:]):
        mid = (x0 + x1) / 2
        commands.append(CurveTo(mid, y0, mid, y1, x1, y1))
    return tuple(commands)


def _fmt(v: float) -> str:
    text = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def path_to_svg(commands: Sequence[PathCommand]) -> str:
    parts = []
    for cmd in commands:
        if isinstance(cmd, MoveTo):
            parts.append(f"M {_fmt(cmd.x)} {_fmt(cmd.y)}")
        else:
            parts.append(
                f"C {_fmt(cmd.c1x)} {_fmt(cmd.c1y)}, "
                f"{_fmt(cmd.c2x)} {_fmt(cmd.c2y)}, "
                f"{_fmt(cmd.x)} {_fmt(cmd.y)}"
            )
    return " ".join(parts)


def locate_nearest_index(
    pointer_x: float, container_width: float, padding: float, point_count: int
) -> Maybe[int]:
    if point_count <= 0:
        return Nothing()

    span = container_width - padding * 2
    if span <= 0 or point_count == 1:
        return Some(0)

    # round half up, the same direction for every pointer position
    idx = math.floor((pointer_x - padding) / span * (point_count - 1) + 0.5)
    return Some(max(0, min(point_count - 1, idx)))


def point_on_circle(fraction: float) -> Tuple[float, float]:
    angle = 2 * math.pi * fraction
    return math.cos(angle), math.sin(angle)


def build_pie_slices(
    category_amounts: Sequence[Tuple[str, float]], total_for_kind: float
) -> Tuple[PieSlice, ...]:
    if len(category_amounts) == 1 and total_for_kind > 0:
        category, amount = category_amounts[0]
        return (PieSlice(category, amount, 0.0, 1.0, category),)

    slices = []
    cumulative = 0.0
    for category, amount in category_amounts:
        fraction = amount / total_for_kind if total_for_kind > 0 else 0.0
        slices.append(PieSlice(category, amount, cumulative, cumulative + fraction, category))
        cumulative += fraction
    return tuple(slices)


def slice_path(s: PieSlice) -> str:
    """SVG path for one wedge of the unit pie."""
    if s.is_full_circle:
        return "M 1 0 A 1 1 0 1 1 -1 0 A 1 1 0 1 1 1 0 Z"

    start_x, start_y = point_on_circle(s.start)
    end_x, end_y = point_on_circle(s.end)
    large_arc = 1 if s.fraction > 0.5 else 0
    return (
        f"M {start_x} {start_y} "
        f"A 1 1 0 {large_arc} 1 {end_x} {end_y} "
        f"L 0 0"
    )


def slice_outline(s: PieSlice, segments: int = 64) -> list[Tuple[float, float]]:
    """Closed polygon approximating a wedge, for renderers without arcs."""
    steps = max(1, math.ceil(segments * s.fraction))
    arc = [point_on_circle(s.start + s.fraction * i / steps) for i in range(steps + 1)]
    if s.is_full_circle:
        return arc
    return [(0.0, 0.0)] + arc + [(0.0, 0.0)]


def locate_slice(slices: Sequence[PieSlice], x: float, y: float) -> Maybe[PieSlice]:
    """Slice under a point given in unit-circle coordinates."""
    if math.hypot(x, y) > 1.0:
        return Nothing()

    fraction = (math.atan2(y, x) / (2 * math.pi)) % 1.0
    for s in slices:
        if s.fraction > 0 and s.start <= fraction < s.end:
            return Some(s)

    # floating point can leave the very end of the last wedge uncovered
    drawn = [s for s in slices if s.fraction > 0]
    if drawn and fraction >= drawn[-1].start:
        return Some(drawn[-1])
    return Nothing()
