"""
Energy API - Payload Models

Typed records for the remote energy API responses and the render service.
Payloads are validated here so the visualization core only ever sees
well-formed matrices and series.
"""

from typing import Any, Optional

import pandas as pd
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from api.errors import PayloadError

PLANT_SEPARATOR = "--"


# ============== Remote API Records ==============

class PlantLabel(BaseModel):
    name: str
    capacity: str = ""


def parse_plant_label(raw: str) -> PlantLabel:
    """Split a ``"name--capacityLabel"`` column label."""
    name, _, capacity = raw.partition(PLANT_SEPARATOR)
    return PlantLabel(name=name.strip(), capacity=capacity.strip())


class ValueMatrix(BaseModel):
    """Heatmap payload: hour rows x plant columns."""
    hours: list[str]
    plants: list[str]
    values: list[list[float]]

    @field_validator("values", mode="before")
    @classmethod
    def _missing_cells_are_zero(cls, rows: Any) -> Any:
        # Heatmaps encode both "no generation" and "no data" as 0
        if not isinstance(rows, list):
            return rows
        return [
            [0.0 if v is None else v for v in row] if isinstance(row, list) else row
            for row in rows
        ]

    @model_validator(mode="after")
    def _check_shape(self) -> "ValueMatrix":
        if len(self.values) != len(self.hours):
            raise ValueError(
                f"Row count {len(self.values)} does not match hour count {len(self.hours)}"
            )
        for i, row in enumerate(self.values):
            if len(row) != len(self.plants):
                raise ValueError(
                    f"Row {i} has {len(row)} values, expected {len(self.plants)}"
                )
        return self

    def plant_labels(self) -> list[PlantLabel]:
        return [parse_plant_label(p) for p in self.plants]

    def row(self, index: int) -> list[float]:
        return self.values[index]

    def to_frame(self) -> pd.DataFrame:
        """Matrix as a DataFrame indexed by hour, one column per plant."""
        return pd.DataFrame(self.values, index=self.hours, columns=self.plants)


class BandPoint(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class RollingSeries(BaseModel):
    """Rolling-average payload for one fuel type."""
    historical_avg: list[Optional[float]] = Field(default_factory=list)
    historical_range: list[BandPoint] = Field(default_factory=list)
    years: dict[str, list[Optional[float]]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_year_keys(cls, data: Any) -> Any:
        # The API returns each year as a top-level key next to the historical fields
        if not isinstance(data, dict) or "years" in data:
            return data
        known = {"historical_avg", "historical_range"}
        years = {k: v for k, v in data.items() if k not in known and str(k).isdigit()}
        return {
            "historical_avg": data.get("historical_avg") or [],
            "historical_range": data.get("historical_range") or [],
            "years": years,
        }

    def year(self, year: int) -> list[Optional[float]]:
        return self.years.get(str(year), [])


class RollingSeriesSet(BaseModel):
    """Rolling-average payloads keyed by fuel type."""
    series: dict[str, RollingSeries] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict) -> "RollingSeriesSet":
        return cls(series={k: v for k, v in payload.items() if isinstance(v, dict)})

    def get(self, fuel: str) -> Optional[RollingSeries]:
        return self.series.get(fuel)


class DemandSeriesSet(BaseModel):
    """Weekly consumption series keyed by year."""
    consumption: dict[str, list[Optional[float]]] = Field(default_factory=dict)

    def year(self, year: int) -> list[Optional[float]]:
        return self.consumption.get(str(year), [])


class ApiEnvelope(BaseModel):
    """Standard ``{code, data}`` response wrapper."""
    code: int
    data: Any = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.code == 200


def parse_record(model: type[BaseModel], payload: Any) -> BaseModel:
    """Validate a payload into a record, raising PayloadError on mismatch."""
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise PayloadError(f"Invalid {model.__name__} payload: {e.error_count()} error(s)") from e


# ============== Render Service Models ==============

class CellStyleModel(BaseModel):
    background_color: str
    text_color: str
    intensity: float
    band: str


class HeatmapCellsResponse(BaseModel):
    hours: list[str]
    plants: list[PlantLabel]
    row_max: list[float]
    cells: list[list[CellStyleModel]]


class BoxModel(BaseModel):
    width: float = Field(gt=0)
    height: float = Field(default=220.0, gt=0)
    padding: float = Field(default=24.0, ge=0)


class ProjectRequest(BaseModel):
    series: dict[str, list[Optional[float]]]
    box: BoxModel
    band: list[BandPoint] = Field(default_factory=list)
    min_y: Optional[float] = None
    max_y: Optional[float] = None
    tick_count: int = Field(default=6, ge=1)


class ProjectResponse(BaseModel):
    points: dict[str, list[tuple[float, float]]]
    band: list[tuple[float, float]]
    min_y: float
    max_y: float
    max_len: int
    x_ticks: list[int]


class BandRequest(BaseModel):
    band: list[BandPoint]
    box: BoxModel
    min_y: Optional[float] = None
    max_y: Optional[float] = None
