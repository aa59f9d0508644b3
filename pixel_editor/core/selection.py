"""
Rectangular selection in pixel coordinates.

The tracker moves through ``IDLE -> DRAGGING -> COMMITTED``. While dragging,
the rectangle is the bounding box of the anchor and the latest point with the
far edge inclusive, so touching a single cell selects that cell. A rectangle
smaller than one pixel in both directions at ``end()`` is discarded.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum

from pixel_editor.utils.helpers import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionRect:
    """Half-open rectangle ``[x0, x1) x [y0, y1)`` in pixel units."""
    x0: float
    y0: float
    x1: float
    y1: float

    @classmethod
    def from_corners(cls, ax: int, ay: int, bx: int, by: int) -> "SelectionRect":
        return cls(min(ax, bx), min(ay, by), max(ax, bx) + 1, max(ay, by) + 1)

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def is_degenerate(self) -> bool:
        return self.width < 1 and self.height < 1

    def contains_cell(self, x: int, y: int) -> bool:
        # cell square [x, x+1) x [y, y+1) must overlap the rectangle
        return x < self.x1 and x + 1 > self.x0 and y < self.y1 and y + 1 > self.y0

    def cell_bounds(self, grid_size: int) -> tuple[int, int, int, int]:
        """Integer half-open cell box covered by the rectangle, clipped to the grid."""
        return (
            clamp(math.floor(self.x0), 0, grid_size),
            clamp(math.floor(self.y0), 0, grid_size),
            clamp(math.ceil(self.x1), 0, grid_size),
            clamp(math.ceil(self.y1), 0, grid_size),
        )


class SelectionState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"


class SelectionTracker:
    def __init__(self, grid_size: int | None = None):
        self.grid_size = grid_size
        self.state = SelectionState.IDLE
        self._anchor: tuple[int, int] | None = None
        self._rect: SelectionRect | None = None

    @property
    def rect(self) -> SelectionRect | None:
        """Current selection; ``None`` means the whole buffer."""
        return self._rect

    @property
    def active(self) -> bool:
        return self._rect is not None

    def _clip(self, x: int, y: int) -> tuple[int, int]:
        if self.grid_size is None:
            return x, y
        hi = self.grid_size - 1
        return clamp(x, 0, hi), clamp(y, 0, hi)

    def begin(self, x: int, y: int):
        x, y = self._clip(x, y)
        self._anchor = (x, y)
        self._rect = SelectionRect(x, y, x, y)
        self.state = SelectionState.DRAGGING

    def update(self, x: int, y: int):
        if self.state is not SelectionState.DRAGGING or self._anchor is None:
            return
        x, y = self._clip(x, y)
        ax, ay = self._anchor
        self._rect = SelectionRect.from_corners(ax, ay, x, y)

    def end(self) -> SelectionRect | None:
        if self.state is not SelectionState.DRAGGING:
            return self._rect
        self._anchor = None
        if self._rect is None or self._rect.is_degenerate:
            logger.debug("Discarding degenerate selection %s", self._rect)
            self._rect = None
            self.state = SelectionState.IDLE
        else:
            self.state = SelectionState.COMMITTED
        return self._rect

    def clear(self):
        self._anchor = None
        self._rect = None
        self.state = SelectionState.IDLE

    def contains_cell(self, x: int, y: int) -> bool:
        return self._rect is None or self._rect.contains_cell(x, y)
