"""
Energy Visualization - FastAPI Render Service

Exposes the heatmap mapper and series projector as JSON so web and mobile
surfaces can draw the same geometry without reimplementing the math.
"""

from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from api.client import EnergyApiClient
from api.errors import ApiError, AuthenticationError
from api.models import (
    CellStyleModel,
    BandRequest,
    HeatmapCellsResponse,
    ProjectRequest,
    ProjectResponse,
    ValueMatrix,
)
from viz.config import get_screen_config, load_config
from viz.heat_intensity import HeatIntensityMapper, row_max
from viz.projector import PlotBox, YDomain, derive_domain, project_band, project_many, x_ticks

# Initialize app
app = FastAPI(
    title="Energy Visualization API",
    description="Heatmap colors and chart geometry for generation dashboards",
    version="1.0.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

mapper = HeatIntensityMapper()


def get_client(cookie: Optional[str] = Header(None)) -> EnergyApiClient:
    """Get upstream API client carrying the caller's session cookie."""
    return EnergyApiClient.from_config(session_cookie=cookie or None)


def _domain(min_y, max_y, fallback: YDomain) -> YDomain:
    if min_y is None and max_y is None:
        return fallback
    return YDomain(
        min_y=fallback.min_y if min_y is None else min_y,
        max_y=fallback.max_y if max_y is None else max_y,
    )


def _cells_response(matrix: ValueMatrix) -> HeatmapCellsResponse:
    cells = [
        [
            CellStyleModel(
                background_color=style.background_color,
                text_color=style.text_color,
                intensity=style.intensity,
                band=style.band.value,
            )
            for style in styled_row
        ]
        for styled_row in mapper.map_matrix(matrix)
    ]
    return HeatmapCellsResponse(
        hours=matrix.hours,
        plants=matrix.plant_labels(),
        row_max=[float(row_max(r)) for r in matrix.values],
        cells=cells,
    )


# ============== API Endpoints ==============

@app.get("/")
def root():
    """API root endpoint."""
    return {"message": "Energy Visualization API", "version": "1.0.0"}


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/config/screens/{screen_key}")
def get_screen(screen_key: str):
    """Zoom bounds and presets for a screen."""
    return get_screen_config(screen_key)


@app.get("/config/fuel_types")
def get_fuel_types():
    """Fuel selector entries for rolling charts."""
    return load_config().get("fuel_types", [])


# ============== Heatmaps ==============

@app.post("/heatmap/cells", response_model=HeatmapCellsResponse)
def heatmap_cells(matrix: ValueMatrix):
    """Map every cell of a heatmap to its colors."""
    return _cells_response(matrix)


@app.get("/heatmap/{fuel}", response_model=HeatmapCellsResponse)
def heatmap_for_fuel(
    fuel: str,
    date: str = Query(..., pattern=r"^\d{4}-\d{2}-\d{2}$"),
    version: str = Query("first", pattern="^(first|current)$"),
    realtime: bool = Query(False),
    client: EnergyApiClient = Depends(get_client),
):
    """Fetch a heatmap from the upstream API and map its colors."""
    try:
        matrix = client.get_heatmap(fuel, date, version=version, realtime=realtime)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)
    except ApiError as e:
        logger.error(f"Upstream heatmap fetch failed for {fuel}/{date}: {e.message}")
        raise HTTPException(status_code=502, detail=e.message)

    return _cells_response(matrix)


# ============== Series Geometry ==============

@app.post("/series/project", response_model=ProjectResponse)
def series_project(request: ProjectRequest):
    """Project co-plotted series (and an optional band) onto one box."""
    box = PlotBox(width=request.box.width, height=request.box.height, padding=request.box.padding)
    bands = [request.band] if request.band else []
    derived = derive_domain(*request.series.values(), bands=bands)
    domain = _domain(request.min_y, request.max_y, derived)

    points, domain, length = project_many(request.series, box, domain, bands=bands)
    band = project_band(request.band, box, domain, max_len=length) if request.band else []

    return ProjectResponse(
        points=points,
        band=band,
        min_y=domain.min_y,
        max_y=domain.max_y,
        max_len=length,
        x_ticks=x_ticks(length, request.tick_count),
    )


@app.post("/series/band")
def series_band(request: BandRequest):
    """Project a min/max band into a closed polygon outline."""
    box = PlotBox(width=request.box.width, height=request.box.height, padding=request.box.padding)
    domain = _domain(request.min_y, request.max_y, derive_domain(bands=[request.band]))
    return {"points": project_band(request.band, box, domain)}
