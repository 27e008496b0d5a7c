"""
Payload Models - Unit Tests

Tests for validation of heatmap, rolling and demand payloads.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.errors import PayloadError
from api.models import (
    ApiEnvelope,
    DemandSeriesSet,
    RollingSeries,
    RollingSeriesSet,
    ValueMatrix,
    parse_plant_label,
    parse_record,
)


class TestValueMatrix:
    """Tests for heatmap matrix validation."""

    def test_valid_matrix(self):
        matrix = ValueMatrix(
            hours=["00:00", "01:00"],
            plants=["Soma B--990 MW", "Yatagan--630 MW"],
            values=[[100, 0], [200, 50]],
        )

        assert matrix.row(1) == [200, 50]

    def test_row_count_mismatch_rejected(self):
        with pytest.raises(PayloadError):
            parse_record(ValueMatrix, {"hours": ["00:00"], "plants": ["A"], "values": [[1], [2]]})

    def test_row_length_mismatch_rejected(self):
        with pytest.raises(PayloadError):
            parse_record(ValueMatrix, {"hours": ["00:00"], "plants": ["A", "B"], "values": [[1]]})

    def test_missing_cells_become_zero(self):
        matrix = ValueMatrix(hours=["00:00"], plants=["A", "B"], values=[[None, 3]])

        assert matrix.values == [[0.0, 3.0]]

    def test_plant_labels(self):
        matrix = ValueMatrix(hours=[], plants=["Kangal--457 MW", "Unnamed"], values=[])
        labels = matrix.plant_labels()

        assert labels[0].name == "Kangal"
        assert labels[0].capacity == "457 MW"
        assert labels[1].capacity == ""

    def test_to_frame(self):
        matrix = ValueMatrix(hours=["00:00", "01:00"], plants=["A", "B"], values=[[1, 2], [3, 4]])
        frame = matrix.to_frame()

        assert list(frame.columns) == ["A", "B"]
        assert frame.loc["01:00", "B"] == 4


class TestPlantLabel:
    """Tests for composite column labels."""

    def test_split_on_first_separator(self):
        label = parse_plant_label("Afsin--Elbistan--1355 MW")

        assert label.name == "Afsin"
        assert label.capacity == "Elbistan--1355 MW"


class TestRollingSeries:
    """Tests for rolling-average payloads."""

    def test_year_keys_collected(self):
        series = RollingSeries.model_validate({
            "historical_avg": [1.0, 2.0],
            "historical_range": [{"min": 0.5, "max": 1.5}, {"min": None, "max": 2.5}],
            "2024": [1.1, None],
            "2025": [1.2],
        })

        assert series.year(2024) == [1.1, None]
        assert series.year(2025) == [1.2]
        assert series.year(2023) == []
        assert series.historical_range[1].min is None

    def test_set_from_payload(self):
        payload = {
            "naturalgas": {"historical_avg": [1], "2025": [2]},
            "last_update": "2025-01-01",
        }
        rolling = RollingSeriesSet.from_payload(payload)

        assert set(rolling.series) == {"naturalgas"}
        assert rolling.get("naturalgas").year(2025) == [2]
        assert rolling.get("wind") is None


class TestDemandAndEnvelope:
    """Tests for demand payloads and the response envelope."""

    def test_demand_years(self):
        demand = DemandSeriesSet.model_validate({"consumption": {"2024": [1, 2], "2025": [3]}})

        assert demand.year(2024) == [1, 2]
        assert demand.year(2030) == []

    def test_envelope_ok(self):
        assert ApiEnvelope(code=200, data=[]).ok
        assert not ApiEnvelope(code=500).ok


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
