"""
Editing session: owns the pixel buffer and wires the tool engine, history,
selection, view transform and gesture router together.

Input adapters feed raw contacts to ``handle_contact``; render adapters read
``buffer`` and ``selection.rect`` once per frame. Everything runs on the
caller's thread and each call finishes its buffer mutation before returning.
"""

import logging
from typing import Callable, Optional

from pixel_editor.core.constants import (
    BACKGROUND,
    BASE_CELL_SIZE,
    GRID_SIZE,
    MAX_ZOOM,
    UNDO_LIMIT,
)
from pixel_editor.core.editor_tools import ToolState, ToolType, apply_tool
from pixel_editor.core.gestures import (
    ContactEvent,
    GesturePhase,
    GestureRouter,
    PinchUpdate,
    StrokeEvent,
    TouchPhase,
)
from pixel_editor.core.history import HistoryManager
from pixel_editor.core.pixel_buffer import PixelBuffer
from pixel_editor.core.selection import SelectionTracker
from pixel_editor.core.view_transform import ViewTransform
from pixel_editor.utils.helpers import format_hex_color

logger = logging.getLogger(__name__)


class EditorSession:
    def __init__(self, grid_size: int = GRID_SIZE, undo_limit: int = UNDO_LIMIT,
                 base_cell_size: float = BASE_CELL_SIZE, max_zoom: float = MAX_ZOOM,
                 tool_state: Optional[ToolState] = None,
                 on_status: Optional[Callable[[str], None]] = None):
        self.on_status = on_status or (lambda text: None)

        self.buffer = PixelBuffer(grid_size, BACKGROUND)
        self.tool_state = tool_state or ToolState()
        self.history = HistoryManager(limit=undo_limit)
        self.selection = SelectionTracker(grid_size)
        self.view = ViewTransform(grid_size, base_cell_size, max_zoom)
        self.router = GestureRouter(on_stroke=self._on_stroke, on_pinch=self._on_pinch)

        self.is_drawing = False

    @classmethod
    def from_config(cls, config, **kwargs) -> "EditorSession":
        tool_state = ToolState(brush_size=config.brush_size, color=config.color)
        return cls(
            grid_size=config.grid_size,
            undo_limit=config.undo_limit,
            base_cell_size=config.base_cell_size,
            max_zoom=config.max_zoom,
            tool_state=tool_state,
            **kwargs,
        )

    @property
    def grid_size(self) -> int:
        return self.buffer.size

    # ---------- Input ----------
    def handle_contact(self, event: ContactEvent):
        return self.router.handle(event)

    def _on_stroke(self, stroke: StrokeEvent):
        cell = self.view.surface_to_pixel(stroke.x, stroke.y)
        if stroke.phase in (TouchPhase.ENDED, TouchPhase.CANCELLED):
            self.end_stroke()
        elif cell is None:
            return
        elif stroke.phase is TouchPhase.BEGAN:
            self.begin_stroke(*cell)
        else:
            self.continue_stroke(*cell)

    def _on_pinch(self, update: PinchUpdate):
        if update.phase is GesturePhase.BEGIN:
            self.view.begin_pinch()
        else:
            self.view.apply_pinch(update.dx, update.dy, update.scale)
            if update.phase is GesturePhase.ENDED:
                self.view.end_pinch()

    # ---------- Strokes (pixel coordinates) ----------
    def begin_stroke(self, x: int, y: int):
        """Start one undoable action at (x, y). Mutating tools snapshot the buffer exactly once here."""
        if not self.buffer.in_bounds(x, y):
            return
        if self.is_drawing:
            self.end_stroke()
        self.is_drawing = True
        tool = self.tool_state.tool

        if tool == ToolType.SELECT:
            self.selection.begin(x, y)
            self.selection.update(x, y)
            return
        if tool.mutates:
            self.history.push_undo(self.buffer)
        self._apply(x, y)

    def continue_stroke(self, x: int, y: int):
        if not self.buffer.in_bounds(x, y):
            return
        if not self.is_drawing:
            # stroke started outside the grid
            self.begin_stroke(x, y)
            return
        tool = self.tool_state.tool

        if tool == ToolType.SELECT:
            self.selection.update(x, y)
        elif tool != ToolType.BUCKET:
            self._apply(x, y)

    def end_stroke(self):
        if not self.is_drawing:
            return
        if self.tool_state.tool == ToolType.SELECT:
            rect = self.selection.end()
            if rect is None:
                self.on_status("Selection cleared")
            else:
                self.on_status(f"Selection: {int(rect.width)}x{int(rect.height)}")
        self.is_drawing = False

    def _apply(self, x: int, y: int):
        ts = self.tool_state
        result = apply_tool(self.buffer, x, y, ts.tool, ts.color, ts.brush_size, self.selection.rect)
        if result.picked_color is not None:
            self.set_color(result.picked_color)

    # ---------- Tool settings ----------
    def select_tool(self, tool):
        tool = ToolType(tool)
        if tool == ToolType.SELECT and self.tool_state.tool == ToolType.SELECT and self.selection.active:
            self.clear_selection()
            return
        self.tool_state.set_tool(tool)
        self.on_status(f"Tool: {tool.value}")

    def set_brush_size(self, size: int):
        self.tool_state.set_brush_size(size)
        self.on_status(f"Brush size: {self.tool_state.brush_size}")

    def set_color(self, color):
        self.tool_state.set_color(color)
        self.on_status(f"Color: {format_hex_color(self.tool_state.color)}")

    def clear_selection(self):
        self.selection.clear()
        self.on_status("Selection cleared")

    # ---------- Actions ----------
    def clear_canvas(self):
        self.history.push_undo(self.buffer)
        self.buffer.fill(BACKGROUND)
        self.on_status("Canvas cleared")

    def undo(self) -> bool:
        snap = self.history.undo(self.buffer)
        if snap is None:
            return False
        self.buffer = snap
        logger.debug("Undo, %d step(s) left", self.history.undo_depth)
        self.on_status("Undo")
        return True

    def redo(self) -> bool:
        snap = self.history.redo(self.buffer)
        if snap is None:
            return False
        self.buffer = snap
        logger.debug("Redo, %d step(s) left", self.history.redo_depth)
        self.on_status("Redo")
        return True
