"""
Series-to-Geometry Projector

Projects ordered numeric series (and optional min/max bands) into pixel
coordinates inside a padded plot box. Output is plain point lists, so any
vector primitive (SVG polyline, Plotly scatter, canvas path) can draw it.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

Point = tuple[float, float]


@dataclass(frozen=True)
class PlotBox:
    """Pixel box the geometry is projected into."""
    width: float
    height: float = 220.0
    padding: float = 24.0

    @property
    def inner_width(self) -> float:
        return self.width - 2 * self.padding

    @property
    def inner_height(self) -> float:
        return self.height - 2 * self.padding


@dataclass(frozen=True)
class YDomain:
    """Value range mapped onto the vertical axis."""
    min_y: float
    max_y: float

    @property
    def range_y(self) -> float:
        # Floored to 1 so constant series do not divide by zero
        span = self.max_y - self.min_y
        return span if span > 0 else 1.0


def _number(value: Any) -> Optional[float]:
    """Value as a finite float, or None for null/NaN/inf."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _entries(series: Iterable) -> Iterator[tuple[float, Optional[float]]]:
    """
    (index, value) pairs of a series.

    Plain values take their position as index; ``(index, value)`` pairs keep
    their own index. Pairs with an unusable index are dropped.
    """
    for position, raw in enumerate(series):
        if isinstance(raw, (tuple, list)) and len(raw) == 2:
            index = _number(raw[0])
            if index is None:
                continue
            yield index, _number(raw[1])
        else:
            yield position, _number(raw)


def _series_length(series: Sequence) -> int:
    """Index slots a series spans: its length, or past its highest pair index."""
    highest = max((index for index, _ in _entries(series)), default=-1)
    return max(len(series), int(math.floor(highest)) + 1)


def _band_bounds(entry: Any) -> tuple[Optional[float], Optional[float]]:
    """(min, max) of a band entry given as a mapping or an object."""
    if entry is None:
        return None, None
    if isinstance(entry, Mapping):
        return _number(entry.get("min")), _number(entry.get("max"))
    return _number(getattr(entry, "min", None)), _number(getattr(entry, "max", None))


def max_length(*series: Sequence) -> int:
    """Length of the longest series (0 if none)."""
    return max((_series_length(s) for s in series), default=0)


def derive_domain(*series: Iterable, bands: Iterable[Sequence] = ()) -> YDomain:
    """
    Derive the y-domain shared by co-plotted series.

    min_y is always 0; max_y is the largest finite value across every series
    and band bound.
    """
    values = [v for s in series for _, v in _entries(s) if v is not None]
    for band in bands:
        for entry in band:
            values.extend(v for v in _band_bounds(entry) if v is not None)
    return YDomain(min_y=0.0, max_y=max(values, default=0.0))


def x_coord(index: int, max_len: int, box: PlotBox) -> float:
    """Horizontal pixel position of an index on the shared x-scale."""
    ratio = index / max(max_len - 1, 1)
    return box.padding + ratio * box.inner_width


def y_coord(value: float, domain: YDomain, box: PlotBox) -> float:
    """Vertical pixel position of a value (pixel y grows downward)."""
    clamped = max(domain.min_y, min(domain.max_y, value))
    return box.height - box.padding - ((clamped - domain.min_y) / domain.range_y) * box.inner_height


def project(
    series: Sequence,
    box: PlotBox,
    y_domain: Optional[YDomain] = None,
    max_len: Optional[int] = None,
) -> list[Point]:
    """
    Project one series into polyline points.

    Args:
        series: Ordered values or (index, value) pairs; None/NaN values
            leave a gap
        box: Target plot box
        y_domain: Value domain (derived from the series if omitted)
        max_len: Shared x-scale length (defaults to the series length)

    Returns:
        List of (x, y) pixel points, one per present value
    """
    domain = y_domain or derive_domain(series)
    length = max_len if max_len is not None else _series_length(series)

    return [
        (x_coord(index, length, box), y_coord(value, domain, box))
        for index, value in _entries(series)
        if value is not None
    ]


def project_many(
    series_map: Mapping[str, Sequence],
    box: PlotBox,
    y_domain: Optional[YDomain] = None,
    bands: Iterable[Sequence] = (),
) -> tuple[dict[str, list[Point]], YDomain, int]:
    """
    Co-plot several named series on one x-scale and one y-domain.

    Returns:
        (points by name, domain used, shared max length)
    """
    bands = list(bands)
    length = max_length(*series_map.values(), *bands)
    domain = y_domain or derive_domain(*series_map.values(), bands=bands)

    projected = {
        name: project(values, box, domain, max_len=length)
        for name, values in series_map.items()
    }
    return projected, domain, length


def project_segments(
    series: Sequence,
    box: PlotBox,
    y_domain: Optional[YDomain] = None,
    max_len: Optional[int] = None,
) -> list[list[Point]]:
    """Project a series split into contiguous runs at each gap."""
    domain = y_domain or derive_domain(series)
    length = max_len if max_len is not None else _series_length(series)

    segments: list[list[Point]] = []
    current: list[Point] = []
    for index, value in _entries(series):
        if value is None:
            if current:
                segments.append(current)
                current = []
            continue
        current.append((x_coord(index, length, box), y_coord(value, domain, box)))
    if current:
        segments.append(current)
    return segments


def project_band(
    band: Sequence,
    box: PlotBox,
    y_domain: Optional[YDomain] = None,
    max_len: Optional[int] = None,
) -> list[Point]:
    """
    Project a min/max band into one closed polygon outline.

    The max side runs forward, the min side in reverse index order. A missing
    side borrows the other side's value; entries with both sides missing are
    skipped.
    """
    domain = y_domain or derive_domain(bands=[band])
    length = max_len if max_len is not None else len(band)

    upper: list[Point] = []
    lower: list[Point] = []
    for i, entry in enumerate(band):
        low, high = _band_bounds(entry)
        if low is None and high is None:
            continue
        high = high if high is not None else low
        low = low if low is not None else high
        x = x_coord(i, length, box)
        upper.append((x, y_coord(high, domain, box)))
        lower.append((x, y_coord(low, domain, box)))

    return upper + lower[::-1]


def to_points_string(points: Iterable[Point]) -> str:
    """Format points for an SVG ``points`` attribute."""
    return " ".join(f"{x:g},{y:g}" for x, y in points)


def x_ticks(max_len: int, tick_count: int = 6) -> list[int]:
    """1-based index labels for the x-axis (e.g. "Week N")."""
    if max_len <= 0 or tick_count <= 0:
        return []
    step = max(1, max_len // max(tick_count - 1, 1))
    return [i * step + 1 for i in range(tick_count) if i * step + 1 <= max_len]
