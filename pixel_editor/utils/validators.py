import math

from pixel_editor.core.constants import (
    MAX_BRUSH_SIZE,
    MAX_GRID_SIZE,
    MAX_ZOOM,
    MIN_BRUSH_SIZE,
    MIN_ZOOM,
)
from pixel_editor.utils.helpers import clamp, clamp_float


def validate_brush_size(size, default: int) -> int:
    try:
        return clamp(int(size), MIN_BRUSH_SIZE, MAX_BRUSH_SIZE)
    except (TypeError, ValueError, OverflowError):
        return default


def validate_grid_size(size, default: int) -> int:
    try:
        si = int(size)
    except (TypeError, ValueError, OverflowError):
        return default
    if 1 <= si <= MAX_GRID_SIZE:
        return si
    return default


def validate_undo_limit(limit, default: int) -> int:
    try:
        li = int(limit)
    except (TypeError, ValueError, OverflowError):
        return default
    return li if li >= 1 else default


def validate_max_zoom(value, default: float) -> float:
    return clamp_float(value, MIN_ZOOM, MAX_ZOOM, fallback=default)


def validate_cell_size(value, default: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(v) or v <= 0:
        return default
    return v
