"""
Visualization Mapping Package

Provides the rendering-agnostic logic behind the generation dashboards:
- Heat Intensity: heatmap cell colors from per-row normalized values
- Viewport: pinch/pan/wheel zoom transform with bound clamping
- Projector: series and min/max bands to pixel point lists
"""

from viz.heat_intensity import CellStyle, HeatIntensityMapper, IntensityBand, map_intensity, row_max
from viz.viewport import GesturePhase, ViewportState, ViewportTransform
from viz.projector import PlotBox, YDomain, project, project_band, project_many

__all__ = [
    "CellStyle",
    "HeatIntensityMapper",
    "IntensityBand",
    "map_intensity",
    "row_max",
    "GesturePhase",
    "ViewportState",
    "ViewportTransform",
    "PlotBox",
    "YDomain",
    "project",
    "project_band",
    "project_many",
]
