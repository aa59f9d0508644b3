"""
Zoom and pan state plus the surface <-> pixel coordinate mapping.

Pinch updates are always recomputed from the base captured when the gesture
began, never compounded onto the previous update, so a long gesture does not
drift. The base is replaced only when the gesture ends.
"""

import logging
import math
from dataclasses import dataclass, replace

from pixel_editor.core.constants import BASE_CELL_SIZE, GRID_SIZE, MAX_ZOOM, MIN_ZOOM
from pixel_editor.utils.helpers import clamp_float

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    zoom: float = MIN_ZOOM
    pan_x: float = 0.0
    pan_y: float = 0.0


class ViewTransform:
    def __init__(self, grid_size: int = GRID_SIZE, base_cell_size: float = BASE_CELL_SIZE,
                 max_zoom: float = MAX_ZOOM):
        self.grid_size = grid_size
        self.base_cell_size = base_cell_size
        self.max_zoom = clamp_float(max_zoom, MIN_ZOOM, MAX_ZOOM, fallback=MAX_ZOOM)
        self._state = ViewState()
        self._base: ViewState | None = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def pan(self) -> tuple[float, float]:
        return self._state.pan_x, self._state.pan_y

    @property
    def cell_size(self) -> float:
        return self.base_cell_size * self._state.zoom

    @property
    def pinching(self) -> bool:
        return self._base is not None

    def clamp_zoom(self, value: float) -> float:
        return clamp_float(value, MIN_ZOOM, self.max_zoom)

    def surface_to_pixel(self, sx: float, sy: float) -> tuple[int, int] | None:
        """Pixel cell under a surface point, or ``None`` when it falls outside the grid."""
        cell = self.cell_size
        try:
            x = math.floor((sx - self._state.pan_x) / cell)
            y = math.floor((sy - self._state.pan_y) / cell)
        except (ValueError, OverflowError, ZeroDivisionError):
            return None
        if 0 <= x < self.grid_size and 0 <= y < self.grid_size:
            return x, y
        return None

    def pixel_to_surface(self, x: float, y: float) -> tuple[float, float]:
        cell = self.cell_size
        return x * cell + self._state.pan_x, y * cell + self._state.pan_y

    def begin_pinch(self):
        self._base = self._state
        logger.debug("Pinch began at zoom %.3f", self._base.zoom)

    def apply_pinch(self, dx: float, dy: float, scale: float):
        if self._base is None:
            self.begin_pinch()
        base = self._base
        dx = dx if math.isfinite(dx) else 0.0
        dy = dy if math.isfinite(dy) else 0.0
        self._state = replace(
            base,
            zoom=self.clamp_zoom(base.zoom * scale),
            pan_x=base.pan_x + dx,
            pan_y=base.pan_y + dy,
        )

    def end_pinch(self):
        if self._base is None:
            return
        self._base = None
        logger.debug("Pinch committed zoom=%.3f pan=%s", self._state.zoom, self.pan)

    def reset(self):
        self._state = ViewState()
        self._base = None
