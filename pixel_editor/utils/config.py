import json
from pathlib import Path

from pixel_editor.core.constants import (
    BASE_CELL_SIZE,
    DEFAULT_BRUSH_SIZE,
    DEFAULT_COLOR,
    GRID_SIZE,
    MAX_ZOOM,
    UNDO_LIMIT,
)
from pixel_editor.utils.helpers import format_hex_color, parse_hex_color
from pixel_editor.utils.validators import (
    validate_brush_size,
    validate_cell_size,
    validate_grid_size,
    validate_max_zoom,
    validate_undo_limit,
)


DEFAULT_PATH = Path.home() / ".pixel_editor_config.json"


class EditorConfig:
    def __init__(self, path: Path | None = None):
        self.path = path or DEFAULT_PATH
        self.grid_size: int = GRID_SIZE
        self.undo_limit: int = UNDO_LIMIT
        self.brush_size: int = DEFAULT_BRUSH_SIZE
        self.color: int = DEFAULT_COLOR
        self.base_cell_size: float = BASE_CELL_SIZE
        self.max_zoom: float = MAX_ZOOM
        self._load()

    def _reset(self):
        self.grid_size = GRID_SIZE
        self.undo_limit = UNDO_LIMIT
        self.brush_size = DEFAULT_BRUSH_SIZE
        self.color = DEFAULT_COLOR
        self.base_cell_size = BASE_CELL_SIZE
        self.max_zoom = MAX_ZOOM

    def _load(self):
        try:
            if self.path.exists():
                data = json.loads(self.path.read_text(encoding="utf-8"))
                self.grid_size = validate_grid_size(data.get("grid_size", GRID_SIZE), GRID_SIZE)
                self.undo_limit = validate_undo_limit(data.get("undo_limit", UNDO_LIMIT), UNDO_LIMIT)
                self.brush_size = validate_brush_size(data.get("brush_size", DEFAULT_BRUSH_SIZE), DEFAULT_BRUSH_SIZE)
                color = parse_hex_color(str(data.get("color", "")))
                self.color = DEFAULT_COLOR if color is None else color
                self.base_cell_size = validate_cell_size(data.get("base_cell_size", BASE_CELL_SIZE), BASE_CELL_SIZE)
                self.max_zoom = validate_max_zoom(data.get("max_zoom", MAX_ZOOM), MAX_ZOOM)
        except (OSError, ValueError, OverflowError, AttributeError):
            self._reset()

    def to_dict(self) -> dict:
        return {
            "grid_size": self.grid_size,
            "undo_limit": self.undo_limit,
            "brush_size": self.brush_size,
            "color": format_hex_color(self.color),
            "base_cell_size": self.base_cell_size,
            "max_zoom": self.max_zoom,
        }

    def save(self):
        try:
            self.path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        except OSError:
            pass
