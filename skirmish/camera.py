"""Camera following, zoom and zoom-independent scaling."""

from __future__ import annotations

from dataclasses import dataclass

WINDOW_WIDTH = 1280.0
WINDOW_HEIGHT = 720.0

STARTING_ZOOM_LEVEL = 1.0
CAMERA_NEAR = -1000.0

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class SmoothFollow:
    """Moves a position towards a target at a per-axis rate."""

    rate: Vec2 = (100.0, 100.0)

    def step(self, position: Vec2, target: Vec2, dt: float) -> Vec2:
        """Return the position after following ``target`` for ``dt`` seconds."""
        return tuple(  # type: ignore[return-value]
            pos + (goal - pos) * _clamp01(rate * dt)
            for pos, goal, rate in zip(position, target, self.rate)
        )


def zoom_scale(
    window_width: float, window_height: float, zoom_level: float = STARTING_ZOOM_LEVEL
) -> float:
    """Projection scale that keeps the base window area visible at any window size."""
    if window_width <= 0 or window_height <= 0:
        raise ValueError("window size must be positive")
    base_scale = max(WINDOW_WIDTH / window_width, WINDOW_HEIGHT / window_height)
    return base_scale * zoom_level


def absolute_scale(area_width: float, viewport_width: float, scale: Vec3 = (1.0, 1.0, 1.0)) -> Vec3:
    """Transform scale that keeps an object's on-screen size independent of zoom."""
    if viewport_width <= 0:
        raise ValueError("viewport width must be positive")
    units_per_pixel = area_width / viewport_width
    sx, sy, sz = scale
    return units_per_pixel * sx, units_per_pixel * sy, sz