# Energy Visualization - Dashboard Components
from .branding import (
    apply_theme,
    render_footer,
    style_plotly_chart,
)

from .charts import (
    heatmap_table,
    series_figure,
    rolling_figure,
    demand_figure,
    apply_viewport,
)

from .controls import (
    get_client,
    get_viewport,
    render_login,
    render_zoom_toolbar,
    use_sample_data,
)

__all__ = [
    "apply_theme",
    "render_footer",
    "style_plotly_chart",
    "heatmap_table",
    "series_figure",
    "rolling_figure",
    "demand_figure",
    "apply_viewport",
    "get_client",
    "get_viewport",
    "render_login",
    "render_zoom_toolbar",
    "use_sample_data",
]
