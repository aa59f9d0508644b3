"""Session constants for the editing engine."""

GRID_SIZE = 64
MAX_GRID_SIZE = 1024
UNDO_LIMIT = 50

MIN_ZOOM = 1.0
MAX_ZOOM = 32.0

MIN_BRUSH_SIZE = 1
MAX_BRUSH_SIZE = 32
DEFAULT_BRUSH_SIZE = 4

# Packed ARGB, alpha in the high byte
BACKGROUND = 0xFF000000
TRANSPARENT = 0x00000000
DEFAULT_COLOR = 0xFFFFFFFF

# Surface units per pixel at zoom 1
BASE_CELL_SIZE = 5.0

# Floor for the initial pinch spread, in surface units
MIN_SPREAD = 1e-3
