"""
Energy Visualization - Synthetic Data Generator

Generates realistic generation data shaped like the backend payloads, for
offline demos and tests:
- Hour x plant heatmap matrices (with plants offline for some hours)
- Rolling-average series with historical average and min/max band
- Weekly demand series per year
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

import numpy as np
from loguru import logger

from api.models import BandPoint, DemandSeriesSet, RollingSeries, RollingSeriesSet, ValueMatrix

# Configuration
HOURS_PER_DAY = 24
ROLLING_POINTS = 365
DEMAND_WEEKS = 52
DATA_DIR = Path(__file__).parent.parent / "data"

PLANT_NAMES = [
    "Afsin-Elbistan A",
    "Afsin-Elbistan B",
    "Soma B",
    "Yenikoy",
    "Kemerkoy",
    "Yatagan",
    "Cayirhan",
    "Kangal",
    "Seyitomer",
    "Tuncbilek",
    "Orhaneli",
    "Catalagzi",
]
CAPACITIES_MW = [1355, 1440, 990, 420, 630, 630, 620, 457, 600, 365, 210, 300]


def generate_value_matrix(
    n_plants: int = 8,
    hours: int = HOURS_PER_DAY,
    seed: int = 42,
    offline_rate: float = 0.1,
) -> ValueMatrix:
    """Generate an hour x plant generation matrix (MW)."""
    rng = np.random.default_rng(seed)
    n_plants = min(n_plants, len(PLANT_NAMES))

    plants = [f"{PLANT_NAMES[i]}--{CAPACITIES_MW[i]} MW" for i in range(n_plants)]
    capacities = np.array(CAPACITIES_MW[:n_plants], dtype=float)

    # Daily load shape: night trough, evening peak
    hour_idx = np.arange(hours)
    load_factor = 0.65 + 0.25 * np.sin((hour_idx - 6) / hours * 2 * np.pi)

    values = np.outer(load_factor, capacities) * rng.uniform(0.7, 1.0, size=(hours, n_plants))
    offline = rng.random(size=(hours, n_plants)) < offline_rate
    values[offline] = 0.0

    return ValueMatrix(
        hours=[f"{h:02d}:00" for h in hour_idx],
        plants=plants,
        values=np.round(values, 1).tolist(),
    )


def _seasonal(n_points: int, base: float, amplitude: float, rng: np.random.Generator) -> np.ndarray:
    t = np.arange(n_points)
    noise = rng.normal(0, base * 0.03, size=n_points)
    return base + amplitude * np.cos(t / max(n_points, 1) * 2 * np.pi) + noise


def generate_rolling_series(
    n_points: int = ROLLING_POINTS,
    current_year: Optional[int] = None,
    history_years: int = 5,
    seed: int = 42,
) -> RollingSeries:
    """
    Generate one fuel's rolling-average payload.

    The current year is cut short at today's day-of-year so it ends before
    the previous year does, like the live data.
    """
    rng = np.random.default_rng(seed)
    today = date.today()
    current_year = current_year or today.year

    history = np.array([
        _seasonal(n_points, 5000, 1200, rng) for _ in range(history_years)
    ])
    hist_min = history.min(axis=0)
    hist_max = history.max(axis=0)
    hist_avg = history.mean(axis=0)

    previous = _seasonal(n_points, 5200, 1100, rng)
    elapsed = min(n_points, today.timetuple().tm_yday)
    current = _seasonal(n_points, 5400, 1000, rng)[:elapsed]

    return RollingSeries(
        historical_avg=np.round(hist_avg, 1).tolist(),
        historical_range=[
            BandPoint(min=round(float(lo), 1), max=round(float(hi), 1))
            for lo, hi in zip(hist_min, hist_max)
        ],
        years={
            str(current_year - 1): np.round(previous, 1).tolist(),
            str(current_year): np.round(current, 1).tolist(),
        },
    )


def generate_rolling_set(fuels: list[str], seed: int = 42) -> RollingSeriesSet:
    """Generate rolling payloads for several fuel types."""
    return RollingSeriesSet(
        series={fuel: generate_rolling_series(seed=seed + i) for i, fuel in enumerate(fuels)}
    )


def generate_demand_series(
    weeks: int = DEMAND_WEEKS,
    current_year: Optional[int] = None,
    seed: int = 42,
) -> DemandSeriesSet:
    """Generate weekly consumption (GWh) for the previous and current year."""
    rng = np.random.default_rng(seed)
    today = date.today()
    current_year = current_year or today.year
    elapsed = min(weeks, today.isocalendar()[1])

    return DemandSeriesSet(
        consumption={
            str(current_year - 1): np.round(_seasonal(weeks, 6000, 700, rng), 1).tolist(),
            str(current_year): np.round(_seasonal(weeks, 6150, 650, rng)[:elapsed], 1).tolist(),
        }
    )


def main():
    """Write sample payloads to the data directory."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)

    logger.info("Generating sample payloads...")

    matrix = generate_value_matrix()
    (DATA_DIR / "heatmap_sample.json").write_text(json.dumps(matrix.model_dump()))
    logger.info(f"Heatmap: {len(matrix.hours)} hours x {len(matrix.plants)} plants")

    fuels = ["naturalgas", "lignite", "wind", "solar_combined", "importcoal", "river", "dammedhydro"]
    rolling = generate_rolling_set(fuels)
    (DATA_DIR / "rolling_sample.json").write_text(json.dumps(rolling.model_dump()))
    logger.info(f"Rolling: {len(rolling.series)} fuel types")

    demand = generate_demand_series()
    (DATA_DIR / "demand_sample.json").write_text(json.dumps(demand.model_dump()))
    logger.info(f"Demand: {len(demand.consumption)} years")

    logger.info(f"Files saved to: {DATA_DIR}")


if __name__ == "__main__":
    main()
