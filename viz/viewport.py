"""
Viewport Transform

Pan/zoom state for a rendering surface, driven by pinch, pan and wheel
gestures. Scale is clamped to configured zoom bounds and translation is
clamped so the zoomed content can never be panned past its own edge.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from loguru import logger

Point = tuple[float, float]


class GesturePhase(Enum):
    """Gesture lifecycle phase."""
    IDLE = "idle"
    GESTURING = "gesturing"


@dataclass(frozen=True)
class ViewportState:
    """Read-only snapshot of the transform."""
    scale: float
    translate_x: float
    translate_y: float

    @classmethod
    def identity(cls) -> "ViewportState":
        return cls(scale=1.0, translate_x=0.0, translate_y=0.0)

    def as_css_transform(self) -> str:
        """Render as a CSS transform string for web surfaces."""
        return (
            f"translate({self.translate_x:g}px, {self.translate_y:g}px) "
            f"scale({self.scale:g})"
        )


def _clamp(low: float, high: float, value: float) -> float:
    return max(low, min(high, value))


def _finite(*values) -> bool:
    try:
        return all(math.isfinite(v) for v in values)
    except TypeError:
        return False


def _as_point(raw) -> Optional[Point]:
    """A touch point as an (x, y) float pair, or None if malformed."""
    try:
        x, y = raw
    except (TypeError, ValueError):
        return None
    return (x, y) if _finite(x, y) else None


class ViewportTransform:
    """
    Gesture-driven 2D transform (scale + translation).

    State machine: IDLE -> GESTURING -> IDLE. A gesture start snapshots the
    current transform, moves are computed relative to that snapshot, and
    gesture end commits the final transform back into the snapshot.
    ``reset()`` is valid from any state and always wins.
    """

    def __init__(
        self,
        width: float,
        height: float,
        min_zoom: float = 1.0,
        max_zoom: float = 4.0,
        reference_distance: float = 200.0,
        wheel_sensitivity: float = 0.01,
        zoom_step: float = 0.5,
    ):
        """
        Initialize the viewport.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
            min_zoom: Lower scale bound
            max_zoom: Upper scale bound
            reference_distance: Touch distance (px) at which pinch multiplier is 1
            wheel_sensitivity: Scale change per unit of wheel delta
            zoom_step: Scale increment for zoom_in / zoom_out
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport dimensions must be positive, got {width}x{height}")
        if min_zoom <= 0 or min_zoom > max_zoom:
            raise ValueError(f"Invalid zoom bounds: [{min_zoom}, {max_zoom}]")
        if reference_distance <= 0:
            raise ValueError("reference_distance must be positive")

        self.width = width
        self.height = height
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.reference_distance = reference_distance
        self.wheel_sensitivity = wheel_sensitivity
        self.zoom_step = zoom_step

        self._scale = 1.0
        self._translate_x = 0.0
        self._translate_y = 0.0
        self._last_scale = 1.0
        self._last_translate_x = 0.0
        self._last_translate_y = 0.0
        self._pan_origin: Optional[Point] = None
        self.phase = GesturePhase.IDLE

        # Identity must respect the bounds when min_zoom > 1
        if not min_zoom <= 1.0 <= max_zoom:
            self._scale = self._last_scale = _clamp(min_zoom, max_zoom, 1.0)

    @property
    def state(self) -> ViewportState:
        return ViewportState(
            scale=self._scale,
            translate_x=self._translate_x,
            translate_y=self._translate_y,
        )

    @property
    def scale(self) -> float:
        return self._scale

    def pan_bounds(self, scale: Optional[float] = None) -> tuple[float, float]:
        """Maximum translation magnitude per axis at the given scale."""
        s = self._scale if scale is None else scale
        if s <= 1:
            return 0.0, 0.0
        return self.width * (s - 1) / 2, self.height * (s - 1) / 2

    def resize(self, width: float, height: float) -> None:
        """Change the surface size, keeping the translation within its new bounds."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Viewport dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._clamp_translation()
        self._commit()

    def _clamp_translation(self) -> None:
        max_x, max_y = self.pan_bounds()
        self._translate_x = _clamp(-max_x, max_x, self._translate_x)
        self._translate_y = _clamp(-max_y, max_y, self._translate_y)

    def _commit(self) -> None:
        self._last_scale = self._scale
        self._last_translate_x = self._translate_x
        self._last_translate_y = self._translate_y

    # ----- touch gestures -----

    def on_gesture_start(self) -> None:
        self._commit()
        self._pan_origin = None
        self.phase = GesturePhase.GESTURING

    def on_pinch(self, point_a: Optional[Point], point_b: Optional[Point]) -> None:
        """
        Scale relative to the gesture-start snapshot.

        Args:
            point_a: First touch point (x, y)
            point_b: Second touch point (x, y)
        """
        point_a, point_b = _as_point(point_a), _as_point(point_b)
        if point_a is None or point_b is None:
            return

        distance = math.hypot(point_b[0] - point_a[0], point_b[1] - point_a[1])
        requested = self._last_scale * distance / self.reference_distance
        if not _finite(requested):
            return
        self._scale = _clamp(self.min_zoom, self.max_zoom, requested)
        if self._scale != requested:
            logger.debug(f"Pinch scale {requested:.3f} clamped to {self._scale:.3f}")
        self._clamp_translation()

    def on_pan(self, dx: float, dy: float) -> None:
        """
        Translate relative to the gesture-start snapshot.

        Args:
            dx: Horizontal offset since gesture start (px)
            dy: Vertical offset since gesture start (px)
        """
        if not _finite(dx, dy):
            return
        if self._scale <= 1:
            self._translate_x = 0.0
            self._translate_y = 0.0
            return

        max_x, max_y = self.pan_bounds()
        self._translate_x = _clamp(-max_x, max_x, self._last_translate_x + dx)
        self._translate_y = _clamp(-max_y, max_y, self._last_translate_y + dy)

    def on_touches(self, points: Sequence[Point]) -> None:
        """
        Dispatch a raw touch-move event by number of active points.

        Two points pinch, one point pans relative to where it first landed
        in this gesture. Anything else, including malformed points, is ignored.
        """
        if points is None:
            return
        if len(points) == 2:
            self._pan_origin = None
            self.on_pinch(points[0], points[1])
        elif len(points) == 1:
            point = _as_point(points[0])
            if point is None:
                return
            x, y = point
            if self._pan_origin is None:
                self._pan_origin = (x, y)
            self.on_pan(x - self._pan_origin[0], y - self._pan_origin[1])

    def on_gesture_end(self) -> None:
        self._commit()
        self._pan_origin = None
        self.phase = GesturePhase.IDLE

    # ----- pointer / toolbar -----

    def on_wheel(self, delta_y: float, modifier_pressed: bool) -> bool:
        """
        Zoom from a wheel/trackpad event when a modifier key is held.

        Returns:
            True if the event was consumed (caller should suppress scrolling)
        """
        if not modifier_pressed or not _finite(delta_y):
            return False

        self._scale = _clamp(
            self.min_zoom,
            self.max_zoom,
            self._scale - delta_y * self.wheel_sensitivity,
        )
        self._clamp_translation()
        self._commit()
        return True

    def set_zoom(self, scale: float) -> None:
        """Apply a zoom preset, clamped to bounds."""
        if not _finite(scale):
            return
        self._scale = _clamp(self.min_zoom, self.max_zoom, scale)
        self._clamp_translation()
        self._commit()

    def zoom_in(self) -> None:
        self.set_zoom(self._scale + self.zoom_step)

    def zoom_out(self) -> None:
        self.set_zoom(self._scale - self.zoom_step)

    def reset(self) -> None:
        """Snap back to identity and discard any in-progress gesture."""
        self._scale = _clamp(self.min_zoom, self.max_zoom, 1.0)
        self._translate_x = 0.0
        self._translate_y = 0.0
        self._commit()
        self._pan_origin = None
        self.phase = GesturePhase.IDLE

    fit = reset
