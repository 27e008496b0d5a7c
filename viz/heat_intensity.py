"""
Heat Intensity Mapper

Maps heatmap cell values to background/text colors using per-row
normalization and a three-band color ramp (blue, amber, red).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

NEUTRAL_BACKGROUND = "#f8f9fa"
DARK_TEXT = "#2c3e50"
LIGHT_TEXT = "#fff"

BLUE_RGB = (52, 152, 219)
AMBER_RGB = (241, 196, 15)
RED_RGB = (231, 76, 60)


class IntensityBand(Enum):
    """Color band a cell falls into."""
    NEUTRAL = "neutral"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class CellStyle:
    """Container for a mapped heatmap cell."""
    background_color: str
    text_color: str
    intensity: float  # 0 for neutral cells
    band: IntensityBand


def _rgba(rgb: tuple[int, int, int], alpha: float) -> str:
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {round(alpha, 3)})"


def row_max(row: Sequence[Optional[float]]) -> float:
    """Largest positive value in a row, or 1 if none are positive."""
    positives = [v for v in row if v is not None and v > 0]
    return max(positives, default=1)


class HeatIntensityMapper:
    """
    Maps numeric values to heatmap cell colors.

    Intensity is the value normalized by its row maximum, floored so small
    but nonzero values stay visible. The ramp is:
    - intensity < low_edge: blue, alpha = intensity + 0.3
    - low_edge <= intensity < high_edge: amber, alpha = intensity
    - intensity >= high_edge: red, alpha = intensity
    """

    def __init__(
        self,
        intensity_floor: float = 0.15,
        low_edge: float = 0.3,
        high_edge: float = 0.6,
        contrast_threshold: float = 0.5,
        neutral_background: str = NEUTRAL_BACKGROUND,
        dark_text: str = DARK_TEXT,
        light_text: str = LIGHT_TEXT,
    ):
        """
        Initialize the mapper.

        Args:
            intensity_floor: Minimum intensity for any nonzero value
            low_edge: Upper edge of the blue band
            high_edge: Lower edge of the red band
            contrast_threshold: Intensity above which text turns light
            neutral_background: Background for zero cells
            dark_text: Text color on light backgrounds
            light_text: Text color on saturated backgrounds
        """
        if not 0 <= intensity_floor <= 1:
            raise ValueError(f"intensity_floor must be within [0, 1], got {intensity_floor}")
        if not low_edge <= high_edge:
            raise ValueError("low_edge must not exceed high_edge")

        self.intensity_floor = intensity_floor
        self.low_edge = low_edge
        self.high_edge = high_edge
        self.contrast_threshold = contrast_threshold
        self.neutral_background = neutral_background
        self.dark_text = dark_text
        self.light_text = light_text

    def neutral(self) -> CellStyle:
        """Style used for zero / no-data cells."""
        return CellStyle(
            background_color=self.neutral_background,
            text_color=self.dark_text,
            intensity=0.0,
            band=IntensityBand.NEUTRAL,
        )

    def intensity(self, value: float, row_max: float) -> float:
        """Normalized intensity in [floor, 1] for a positive value."""
        if row_max <= 0:
            row_max = 1
        return min(1.0, max(self.intensity_floor, value / row_max))

    def map_intensity(self, value: Optional[float], row_max: float) -> CellStyle:
        """
        Map a single value to its cell style.

        Args:
            value: Cell value (None and non-positive values are neutral)
            row_max: Positive maximum of the value's row

        Returns:
            CellStyle with background and text colors
        """
        if value is None or value <= 0:
            return self.neutral()

        intensity = self.intensity(value, row_max)

        if intensity < self.low_edge:
            background = _rgba(BLUE_RGB, intensity + 0.3)
            band = IntensityBand.LOW
        elif intensity < self.high_edge:
            background = _rgba(AMBER_RGB, intensity)
            band = IntensityBand.MEDIUM
        else:
            background = _rgba(RED_RGB, intensity)
            band = IntensityBand.HIGH

        text = self.light_text if intensity > self.contrast_threshold else self.dark_text

        return CellStyle(
            background_color=background,
            text_color=text,
            intensity=intensity,
            band=band,
        )

    def map_row(self, row: Sequence[Optional[float]]) -> list[CellStyle]:
        """Map every cell of a row against the row's own maximum."""
        peak = row_max(row)
        return [self.map_intensity(v, peak) for v in row]

    def map_matrix(self, matrix) -> list[list[CellStyle]]:
        """
        Map a whole heatmap, normalizing each row independently.

        Accepts a ValueMatrix-like object (with a ``values`` attribute) or a
        plain sequence of rows.
        """
        rows = getattr(matrix, "values", matrix)
        return [self.map_row(row) for row in rows]


_default_mapper = HeatIntensityMapper()


def map_intensity(value: Optional[float], row_max: float) -> CellStyle:
    """Map a value with the default ramp."""
    return _default_mapper.map_intensity(value, row_max)


def map_row(row: Sequence[Optional[float]]) -> list[CellStyle]:
    """Map a row with the default ramp."""
    return _default_mapper.map_row(row)


def map_matrix(matrix) -> list[list[CellStyle]]:
    """Map a matrix with the default ramp."""
    return _default_mapper.map_matrix(matrix)
