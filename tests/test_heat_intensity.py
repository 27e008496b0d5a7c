"""
Heat Intensity Mapper - Unit Tests

Tests for heatmap cell color mapping and per-row normalization.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from viz.heat_intensity import (
    DARK_TEXT,
    LIGHT_TEXT,
    NEUTRAL_BACKGROUND,
    HeatIntensityMapper,
    IntensityBand,
    map_intensity,
    map_matrix,
    map_row,
    row_max,
)


class TestRowMax:
    """Tests for row normalization denominator."""

    def test_max_of_positive_values(self):
        assert row_max([0, 50, 100, 0]) == 100

    def test_defaults_to_one_without_positive_values(self):
        assert row_max([0, 0, 0]) == 1
        assert row_max([]) == 1

    def test_ignores_none_and_negative(self):
        assert row_max([None, -5, 3]) == 3


class TestMapIntensity:
    """Tests for single-cell mapping."""

    def test_zero_is_neutral(self):
        style = map_intensity(0, 100)

        assert style.background_color == NEUTRAL_BACKGROUND
        assert style.text_color == DARK_TEXT
        assert style.band == IntensityBand.NEUTRAL
        assert style.intensity == 0.0

    def test_none_is_neutral(self):
        assert map_intensity(None, 100).band == IntensityBand.NEUTRAL

    def test_low_band_is_blue_with_offset_alpha(self):
        style = map_intensity(20, 100)

        assert style.band == IntensityBand.LOW
        assert style.background_color == "rgba(52, 152, 219, 0.5)"
        assert style.text_color == DARK_TEXT

    def test_floor_keeps_small_values_visible(self):
        style = map_intensity(1, 1000)

        assert style.intensity == pytest.approx(0.15)
        assert style.background_color == "rgba(52, 152, 219, 0.45)"

    def test_medium_band_is_amber(self):
        style = map_intensity(40, 100)

        assert style.band == IntensityBand.MEDIUM
        assert style.background_color == "rgba(241, 196, 15, 0.4)"
        assert style.text_color == DARK_TEXT

    def test_medium_band_above_contrast_threshold_has_light_text(self):
        style = map_intensity(55, 100)

        assert style.band == IntensityBand.MEDIUM
        assert style.text_color == LIGHT_TEXT

    def test_band_edges(self):
        assert map_intensity(30, 100).band == IntensityBand.MEDIUM
        assert map_intensity(60, 100).band == IntensityBand.HIGH

    def test_row_max_is_red(self):
        style = map_intensity(250, 250)

        assert style.band == IntensityBand.HIGH
        assert style.background_color == "rgba(231, 76, 60, 1.0)"
        assert style.text_color == LIGHT_TEXT

    def test_values_above_row_max_are_clamped(self):
        style = map_intensity(300, 100)

        assert style.intensity == 1.0
        assert style.background_color == "rgba(231, 76, 60, 1.0)"

    def test_non_positive_row_max_treated_as_one(self):
        style = map_intensity(0.5, 0)

        assert style.intensity == pytest.approx(0.5)

    def test_text_contrast_property(self):
        """White text iff clamped intensity exceeds 0.5."""
        rng = np.random.default_rng(7)
        for row_peak in (1.0, 37.5, 1000.0):
            for value in rng.uniform(0, row_peak * 2, size=200):
                style = map_intensity(float(value), row_peak)
                if value == 0:
                    assert style.background_color == NEUTRAL_BACKGROUND
                    continue
                expected = min(1.0, max(0.15, value / row_peak))
                assert style.text_color in (LIGHT_TEXT, DARK_TEXT)
                assert (style.text_color == LIGHT_TEXT) == (expected > 0.5)
                assert 0.15 <= style.intensity <= 1.0


class TestMapRowAndMatrix:
    """Tests for row and matrix mapping."""

    def test_end_to_end_row(self):
        bands = [s.band for s in map_row([0, 50, 100, 0])]

        # 50/100 = 0.5 lands in the amber band; 20 would be blue
        assert bands == [
            IntensityBand.NEUTRAL,
            IntensityBand.MEDIUM,
            IntensityBand.HIGH,
            IntensityBand.NEUTRAL,
        ]

    def test_row_with_low_and_high_values(self):
        bands = [s.band for s in map_row([0, 20, 100, 0])]

        assert bands == [
            IntensityBand.NEUTRAL,
            IntensityBand.LOW,
            IntensityBand.HIGH,
            IntensityBand.NEUTRAL,
        ]

    def test_all_zero_row_is_neutral(self):
        assert all(s.band == IntensityBand.NEUTRAL for s in map_row([0, 0, 0]))

    def test_rows_normalized_independently(self):
        styles = map_matrix([[10, 100], [10, 20]])

        assert styles[0][0].band == IntensityBand.LOW
        assert styles[1][0].band == IntensityBand.MEDIUM

    def test_matrix_from_value_matrix(self):
        from api.models import ValueMatrix

        matrix = ValueMatrix(hours=["00:00"], plants=["A--10 MW", "B--20 MW"], values=[[5, 10]])
        styles = map_matrix(matrix)

        assert len(styles) == 1
        assert styles[0][1].band == IntensityBand.HIGH


class TestMapperConfiguration:
    """Tests for custom mapper parameters."""

    def test_custom_neutral_colors(self):
        mapper = HeatIntensityMapper(neutral_background="#000", dark_text="#111")
        style = mapper.map_intensity(0, 10)

        assert style.background_color == "#000"
        assert style.text_color == "#111"

    def test_invalid_floor_rejected(self):
        with pytest.raises(ValueError):
            HeatIntensityMapper(intensity_floor=1.5)

    def test_invalid_edges_rejected(self):
        with pytest.raises(ValueError):
            HeatIntensityMapper(low_edge=0.7, high_edge=0.6)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
