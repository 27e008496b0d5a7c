"""
Chart Adapters

Binds the projector, heat mapper and viewport output to Plotly primitives.
No projection math lives here: figures are drawn in pixel space from the
point lists the viz package produces.
"""

from typing import Optional, Sequence

import plotly.graph_objects as go

from api.models import DemandSeriesSet, RollingSeries, ValueMatrix
from dashboard.components.branding import (
    BAND_FILL,
    BRAND_LIGHT_GRAY,
    BRAND_SLATE,
    SERIES_COLORS,
    style_plotly_chart,
)
from viz.heat_intensity import HeatIntensityMapper
from viz.projector import (
    PlotBox,
    YDomain,
    derive_domain,
    max_length,
    project_band,
    project_segments,
    x_coord,
    x_ticks,
    y_coord,
)
from viz.viewport import ViewportState


def heatmap_table(
    matrix: ValueMatrix,
    mapper: Optional[HeatIntensityMapper] = None,
    cell_height: int = 42,
) -> go.Figure:
    """
    Render a heatmap as a Plotly table with per-cell colors.

    Args:
        matrix: Hour x plant values
        mapper: Heat mapper (default ramp if omitted)
        cell_height: Row height in pixels

    Returns:
        Plotly figure with a single Table trace
    """
    mapper = mapper or HeatIntensityMapper()
    styles = mapper.map_matrix(matrix)

    headers = ["<b>Hour</b>"] + [
        f"<b>{label.name}</b><br>{label.capacity}" for label in matrix.plant_labels()
    ]

    # Table traces are column-major
    columns = [matrix.hours]
    fills = [[BRAND_SLATE] * len(matrix.hours)]
    fonts = [["#fff"] * len(matrix.hours)]
    for col in range(len(matrix.plants)):
        columns.append([f"{row[col]:.0f}" for row in matrix.values])
        fills.append([row_styles[col].background_color for row_styles in styles])
        fonts.append([row_styles[col].text_color for row_styles in styles])

    fig = go.Figure(
        data=[
            go.Table(
                columnwidth=[70] + [95] * len(matrix.plants),
                header=dict(
                    values=headers,
                    fill_color=BRAND_SLATE,
                    font=dict(color="#fff", size=11),
                    align="center",
                    height=60,
                ),
                cells=dict(
                    values=columns,
                    fill_color=fills,
                    font=dict(color=fonts, size=12),
                    align="center",
                    height=cell_height,
                ),
            )
        ]
    )
    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        height=60 + cell_height * (len(matrix.hours) + 1),
    )
    return fig


def _segments_xy(segments: list[list[tuple[float, float]]]) -> tuple[list, list]:
    """Flatten segments into x/y arrays with None separators (Plotly gaps)."""
    xs: list = []
    ys: list = []
    for segment in segments:
        if xs:
            xs.append(None)
            ys.append(None)
        xs.extend(x for x, _ in segment)
        ys.extend(y for _, y in segment)
    return xs, ys


def series_figure(
    series: dict[str, Sequence],
    box: PlotBox,
    band: Sequence = (),
    colors: Optional[dict[str, str]] = None,
    tick_label: str = "Week",
    tick_count: int = 6,
    y_domain: Optional[YDomain] = None,
) -> go.Figure:
    """
    Draw co-plotted series (and an optional band) from projected geometry.

    Args:
        series: Display name -> ordered values (None leaves a gap)
        box: Pixel box the geometry is projected into
        band: Optional per-index {min, max} entries
        colors: Display name -> line color
        tick_label: Prefix for x tick labels
        tick_count: Number of x ticks
        y_domain: Value domain (derived from all series and the band if omitted)

    Returns:
        Plotly figure in pixel coordinates
    """
    colors = colors or {}
    bands = [band] if band else []
    length = max_length(*series.values(), *bands)
    domain = y_domain or derive_domain(*series.values(), bands=bands)

    fig = go.Figure()

    if band:
        outline = project_band(band, box, domain, max_len=length)
        if outline:
            xs = [x for x, _ in outline] + [outline[0][0]]
            ys = [y for _, y in outline] + [outline[0][1]]
            fig.add_trace(go.Scatter(
                x=xs, y=ys,
                fill="toself",
                fillcolor=BAND_FILL,
                line=dict(width=0),
                name="Hist. range",
                hoverinfo="skip",
            ))

    for name, values in series.items():
        xs, ys = _segments_xy(project_segments(values, box, domain, max_len=length))
        if not xs:
            continue
        fig.add_trace(go.Scatter(
            x=xs, y=ys,
            mode="lines",
            name=name,
            line=dict(width=2, color=colors.get(name)),
            connectgaps=False,
        ))

    ticks = x_ticks(length, tick_count)
    y_ticks = [domain.min_y + domain.range_y * f for f in (0, 0.25, 0.5, 0.75, 1.0)]

    fig.update_layout(height=box.height + 60, margin=dict(l=60, r=10, t=10, b=40))
    fig.update_xaxes(
        range=[0, box.width],
        tickvals=[x_coord(t - 1, length, box) for t in ticks],
        ticktext=[f"{tick_label} {t}" for t in ticks],
        showgrid=False,
        zeroline=False,
    )
    fig.update_yaxes(
        range=[box.height, 0],
        tickvals=[y_coord(v, domain, box) for v in y_ticks],
        ticktext=[f"{v:,.0f}" for v in y_ticks],
        gridcolor=BRAND_LIGHT_GRAY,
        zeroline=False,
    )
    return style_plotly_chart(fig)


def rolling_figure(rolling: RollingSeries, current_year: int, box: PlotBox) -> go.Figure:
    """Historical average/band against the previous and current year."""
    series = {
        "Hist. avg": rolling.historical_avg,
        str(current_year - 1): rolling.year(current_year - 1),
        str(current_year): rolling.year(current_year),
    }
    colors = {
        "Hist. avg": SERIES_COLORS["historical_avg"],
        str(current_year - 1): SERIES_COLORS["previous_year"],
        str(current_year): SERIES_COLORS["current_year"],
    }
    return series_figure(series, box, band=rolling.historical_range, colors=colors, tick_label="Day")


def demand_figure(demand: DemandSeriesSet, current_year: int, box: PlotBox) -> go.Figure:
    """Weekly demand for the previous and current year."""
    series = {
        str(current_year - 1): demand.year(current_year - 1),
        str(current_year): demand.year(current_year),
    }
    colors = {
        str(current_year - 1): SERIES_COLORS["previous_year"],
        str(current_year): SERIES_COLORS["current_year"],
    }
    return series_figure(series, box, colors=colors, tick_label="Week")


def apply_viewport(fig: go.Figure, state: ViewportState, box: PlotBox) -> go.Figure:
    """
    Apply a viewport transform to a pixel-space figure's axis ranges.

    The visible window shrinks by the scale factor around the box center,
    shifted by the translation (in screen pixels, so divided by scale).
    """
    visible_w = box.width / state.scale
    visible_h = box.height / state.scale
    center_x = box.width / 2 - state.translate_x / state.scale
    center_y = box.height / 2 - state.translate_y / state.scale

    fig.update_xaxes(range=[center_x - visible_w / 2, center_x + visible_w / 2])
    fig.update_yaxes(range=[center_y + visible_h / 2, center_y - visible_h / 2])
    return fig
