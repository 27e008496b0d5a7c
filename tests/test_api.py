"""
Render Service - API Tests

Tests for the FastAPI endpoints exposing heatmap colors and chart geometry.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.errors import ApiError
from api.main import app, get_client
from api.models import ValueMatrix


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


MATRIX = {
    "hours": ["00:00", "01:00"],
    "plants": ["Soma B--990 MW", "Kangal--457 MW", "Yatagan--630 MW", "Tuncbilek--365 MW"],
    "values": [[0, 50, 100, 0], [0, 0, 0, 0]],
}


class TestServiceInfo:
    """Tests for root, health and config endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_screen_config(self, client):
        response = client.get("/config/screens/heatmap")

        assert response.json()["max_zoom"] == 4.0

    def test_unknown_screen_uses_default(self, client):
        response = client.get("/config/screens/nonexistent")

        assert response.json()["min_zoom"] == 0.5
        assert response.json()["max_zoom"] == 2.5

    def test_fuel_types(self, client):
        keys = [f["key"] for f in client.get("/config/fuel_types").json()]

        assert keys[0] == "naturalgas"
        assert "consumption" in keys


class TestHeatmapCells:
    """Tests for heatmap color mapping endpoints."""

    def test_cells_mapped_per_row(self, client):
        response = client.post("/heatmap/cells", json=MATRIX)
        body = response.json()

        assert response.status_code == 200
        assert body["row_max"] == [100.0, 1.0]
        assert [c["band"] for c in body["cells"][0]] == ["neutral", "medium", "high", "neutral"]
        assert all(c["background_color"] == "#f8f9fa" for c in body["cells"][1])
        assert body["plants"][0] == {"name": "Soma B", "capacity": "990 MW"}

    def test_shape_mismatch_rejected(self, client):
        bad = {**MATRIX, "values": [[1, 2, 3, 4]]}
        response = client.post("/heatmap/cells", json=bad)

        assert response.status_code == 422

    def test_fuel_heatmap_from_upstream(self, client):
        upstream = MagicMock()
        upstream.get_heatmap.return_value = ValueMatrix(**MATRIX)
        app.dependency_overrides[get_client] = lambda: upstream

        response = client.get("/heatmap/lignite", params={"date": "2025-03-01", "version": "current"})

        assert response.status_code == 200
        upstream.get_heatmap.assert_called_once_with("lignite", "2025-03-01", version="current", realtime=False)

    def test_upstream_failure_is_bad_gateway(self, client):
        upstream = MagicMock()
        upstream.get_heatmap.side_effect = ApiError("Server error occurred", status_code=500)
        app.dependency_overrides[get_client] = lambda: upstream

        response = client.get("/heatmap/lignite", params={"date": "2025-03-01"})

        assert response.status_code == 502

    def test_unknown_fuel_not_found(self, client):
        upstream = MagicMock()
        upstream.get_heatmap.side_effect = ValueError("Unknown heatmap fuel 'nuclear'")
        app.dependency_overrides[get_client] = lambda: upstream

        response = client.get("/heatmap/nuclear", params={"date": "2025-03-01"})

        assert response.status_code == 404

    def test_session_cookie_forwarded_upstream(self, client):
        with patch("api.main.EnergyApiClient") as client_cls:
            upstream = client_cls.from_config.return_value
            upstream.get_heatmap.return_value = ValueMatrix(**MATRIX)

            response = client.get(
                "/heatmap/lignite",
                params={"date": "2025-03-01"},
                headers={"Cookie": "connect.sid=abc123"},
            )

        assert response.status_code == 200
        client_cls.from_config.assert_called_once_with(session_cookie="connect.sid=abc123")

    def test_missing_cookie_builds_anonymous_client(self, client):
        with patch("api.main.EnergyApiClient") as client_cls:
            client_cls.from_config.return_value.get_heatmap.side_effect = ApiError(
                "Unauthorized", status_code=401
            )

            client.get("/heatmap/lignite", params={"date": "2025-03-01"})

        client_cls.from_config.assert_called_once_with(session_cookie=None)

    def test_bad_date_rejected(self, client):
        app.dependency_overrides[get_client] = lambda: MagicMock()

        response = client.get("/heatmap/lignite", params={"date": "yesterday"})

        assert response.status_code == 422


class TestSeriesGeometry:
    """Tests for projection endpoints."""

    def test_project_series(self, client):
        response = client.post("/series/project", json={
            "series": {"prev": [10, 20, 30], "curr": [15, None]},
            "box": {"width": 100, "height": 100, "padding": 10},
        })
        body = response.json()

        assert response.status_code == 200
        assert body["max_len"] == 3
        assert body["max_y"] == 30
        assert body["points"]["prev"][0][0] == 10
        assert body["points"]["prev"][-1] == [90, 10]
        assert len(body["points"]["curr"]) == 1
        assert body["x_ticks"] == [1, 2, 3]

    def test_project_with_band(self, client):
        response = client.post("/series/project", json={
            "series": {"avg": [5, 10]},
            "band": [{"min": 0, "max": 20}, {"min": 5, "max": 15}],
            "box": {"width": 100, "height": 100, "padding": 10},
        })
        body = response.json()

        assert body["max_y"] == 20
        assert len(body["band"]) == 4

    def test_explicit_domain(self, client):
        response = client.post("/series/project", json={
            "series": {"a": [50]},
            "box": {"width": 100, "height": 100, "padding": 10},
            "max_y": 100,
        })

        assert response.json()["points"]["a"][0] == [10, 50]

    def test_band_endpoint(self, client):
        response = client.post("/series/band", json={
            "band": [{"min": 0, "max": 10}, {"min": None, "max": None}, {"min": 0, "max": 10}],
            "box": {"width": 100, "height": 100, "padding": 10},
        })

        assert len(response.json()["points"]) == 4

    def test_invalid_box_rejected(self, client):
        response = client.post("/series/project", json={
            "series": {"a": [1]},
            "box": {"width": 0},
        })

        assert response.status_code == 422


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
