import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pixel_editor.core.constants import (
    DEFAULT_BRUSH_SIZE,
    DEFAULT_COLOR,
    MAX_BRUSH_SIZE,
    MIN_BRUSH_SIZE,
    TRANSPARENT,
)
from pixel_editor.core.pixel_buffer import PixelBuffer, normalize_pixel
from pixel_editor.core.selection import SelectionRect
from pixel_editor.utils.helpers import clamp

logger = logging.getLogger(__name__)


class ToolType(Enum):
    BRUSH = "brush"
    ERASER = "eraser"
    BUCKET = "bucket"
    EYEDROPPER = "eyedropper"
    SELECT = "select"

    @property
    def mutates(self) -> bool:
        return self in (ToolType.BRUSH, ToolType.ERASER, ToolType.BUCKET)


@dataclass
class ToolState:
    tool: ToolType = ToolType.BRUSH
    brush_size: int = DEFAULT_BRUSH_SIZE
    color: int = DEFAULT_COLOR

    def __post_init__(self):
        self.tool = ToolType(self.tool)
        self.brush_size = clamp(self.brush_size, MIN_BRUSH_SIZE, MAX_BRUSH_SIZE)
        self.color = normalize_pixel(self.color)

    def set_tool(self, tool):
        self.tool = ToolType(tool)

    def set_brush_size(self, size: int):
        self.brush_size = clamp(size, MIN_BRUSH_SIZE, MAX_BRUSH_SIZE)

    def grow_brush(self):
        self.set_brush_size(self.brush_size + 1)

    def shrink_brush(self):
        self.set_brush_size(self.brush_size - 1)

    def set_color(self, color):
        self.color = normalize_pixel(color)


@dataclass
class ToolResult:
    changed: int = 0
    picked_color: Optional[int] = None


def brush_radius(brush_size: int) -> float:
    # brush size is a diameter in pixels
    return max(1, brush_size) / 2.0


def flood_fill(buffer: PixelBuffer, x: int, y: int, new_color: int) -> int:
    """
    Non-recursive 4-connected flood fill. Returns the number of cells recolored.
    """
    if not buffer.in_bounds(x, y):
        return 0
    new_color = normalize_pixel(new_color)
    target = buffer.get(x, y)
    if target == new_color:
        return 0

    n = buffer.size
    count = 0
    seed = (x, y)
    stack = [seed]

    while stack:
        x, y = stack.pop()
        # filled cells no longer match target, so each cell is written once
        if buffer.get(x, y) != target:
            continue

        buffer.set(x, y, new_color)
        count += 1

        if x > 0:
            stack.append((x - 1, y))
        if x < n - 1:
            stack.append((x + 1, y))
        if y > 0:
            stack.append((x, y - 1))
        if y < n - 1:
            stack.append((x, y + 1))

    logger.debug("Flood fill from %s recolored %d cells", seed, count)
    return count


def fill_selection(buffer: PixelBuffer, selection: SelectionRect, color: int) -> int:
    x0, y0, x1, y1 = selection.cell_bounds(buffer.size)
    return buffer.fill_rect(x0, y0, x1, y1, color)


def stamp_disc(buffer: PixelBuffer, x: int, y: int, radius: float, color: int,
               selection: SelectionRect | None = None) -> int:
    """Set every cell within ``radius`` of (x, y) that lies inside ``selection``."""
    color = normalize_pixel(color)
    reach = int(math.floor(radius))
    r2 = radius * radius
    count = 0
    for yy in range(max(0, y - reach), min(buffer.size, y + reach + 1)):
        dy = yy - y
        for xx in range(max(0, x - reach), min(buffer.size, x + reach + 1)):
            dx = xx - x
            if dx * dx + dy * dy > r2:
                continue
            if selection is not None and not selection.contains_cell(xx, yy):
                continue
            buffer.set(xx, yy, color)
            count += 1
    return count


def apply_tool(buffer: PixelBuffer, x: int, y: int, tool: ToolType, color: int,
               brush_size: int, selection: SelectionRect | None = None) -> ToolResult:
    if not buffer.in_bounds(x, y):
        return ToolResult()

    if tool == ToolType.EYEDROPPER:
        return ToolResult(picked_color=buffer.get(x, y))
    elif tool == ToolType.BUCKET:
        if selection is not None:
            return ToolResult(changed=fill_selection(buffer, selection, color))
        return ToolResult(changed=flood_fill(buffer, x, y, color))
    elif tool == ToolType.BRUSH:
        return ToolResult(changed=stamp_disc(buffer, x, y, brush_radius(brush_size), color, selection))
    elif tool == ToolType.ERASER:
        return ToolResult(changed=stamp_disc(buffer, x, y, brush_radius(brush_size), TRANSPARENT, selection))
    return ToolResult()
