"""
Configuration loading.

Zoom bounds, chart geometry, API settings and fuel catalogs live in
viz_config.yaml and are passed explicitly to the components that need them.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from loguru import logger

from viz.projector import PlotBox
from viz.viewport import ViewportTransform

CONFIG_PATH = Path(__file__).parent / "viz_config.yaml"


@lru_cache(maxsize=4)
def _read_yaml(path: str) -> dict:
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_config(path: Optional[Path] = None) -> dict:
    """Load the configuration YAML and apply environment overrides."""
    config_path = path or CONFIG_PATH
    logger.debug(f"Loading configuration from {config_path}")
    config = dict(_read_yaml(str(config_path)))

    api = dict(config.get("api", {}))
    if os.environ.get("ENERGY_API_BASE_URL"):
        api["base_url"] = os.environ["ENERGY_API_BASE_URL"]
    if os.environ.get("ENERGY_API_TIMEOUT"):
        api["timeout"] = float(os.environ["ENERGY_API_TIMEOUT"])
    config["api"] = api

    return config


def get_api_settings(config: Optional[dict] = None) -> dict:
    """API connection settings (base_url, timeout, max_retries, retry_delay)."""
    config = config or load_config()
    return config.get("api", {})


def get_screen_config(screen_key: str, config: Optional[dict] = None) -> dict:
    """Zoom settings for a screen, falling back to the default entry."""
    config = config or load_config()
    screens = config.get("screens", {})
    if screen_key not in screens:
        logger.warning(f"No screen config for '{screen_key}', using default")
    return {**screens.get("default", {}), **screens.get(screen_key, {})}


def viewport_for_screen(
    screen_key: str,
    width: float,
    height: float,
    config: Optional[dict] = None,
) -> ViewportTransform:
    """Build a ViewportTransform with a screen's configured bounds."""
    config = config or load_config()
    screen = get_screen_config(screen_key, config)
    gestures = config.get("viewport", {})
    return ViewportTransform(
        width=width,
        height=height,
        min_zoom=screen.get("min_zoom", 1.0),
        max_zoom=screen.get("max_zoom", 4.0),
        reference_distance=gestures.get("reference_distance", 200.0),
        wheel_sensitivity=gestures.get("wheel_sensitivity", 0.01),
        zoom_step=gestures.get("zoom_step", 0.5),
    )


def plot_box(width: float, config: Optional[dict] = None) -> PlotBox:
    """Chart box of the configured height and padding."""
    config = config or load_config()
    chart = config.get("chart", {})
    return PlotBox(
        width=width,
        height=chart.get("height", 220),
        padding=chart.get("padding", 24),
    )


def get_fuel_types(config: Optional[dict] = None) -> list[dict[str, Any]]:
    """Ordered fuel type key/label pairs for chart selectors."""
    config = config or load_config()
    return config.get("fuel_types", [])
