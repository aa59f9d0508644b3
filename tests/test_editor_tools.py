"""
Unit tests for the editor_tools module.

Tests flood fill, disc stamping, selection-constrained tools and the
tool state container.
"""

import pytest

from pixel_editor.core.constants import TRANSPARENT
from pixel_editor.core.editor_tools import (
    ToolState,
    ToolType,
    apply_tool,
    brush_radius,
    flood_fill,
    stamp_disc,
)
from pixel_editor.core.pixel_buffer import PixelBuffer
from pixel_editor.core.selection import SelectionRect

BLACK = 0xFF000000
WHITE = 0xFFFFFFFF
RED = 0xFFFF0000
GREEN = 0xFF00FF00
BLUE = 0xFF0000FF


def cells_of(buffer, color):
    return {(x, y) for x, y, p in buffer.pixels() if p == color}


class TestFloodFill:
    """Tests for flood_fill function."""

    def test_fills_uniform_buffer(self, small_buffer):
        """Should recolor the whole connected region."""
        changed = flood_fill(small_buffer, 3, 3, RED)
        assert changed == 64
        assert len(cells_of(small_buffer, RED)) == 64

    def test_same_color_is_noop(self, small_buffer):
        """Should do nothing when the target already has the new color."""
        before = small_buffer.clone()
        assert flood_fill(small_buffer, 0, 0, BLACK) == 0
        assert small_buffer == before

    def test_filling_twice_equals_filling_once(self, small_buffer):
        """Should be idempotent."""
        small_buffer.fill_rect(0, 0, 4, 8, WHITE)
        flood_fill(small_buffer, 1, 1, RED)
        once = small_buffer.clone()
        assert flood_fill(small_buffer, 1, 1, RED) == 0
        assert small_buffer == once

    def test_stops_at_region_border(self, small_buffer):
        """Should not cross a wall of another color."""
        for y in range(8):
            small_buffer.set(4, y, WHITE)
        flood_fill(small_buffer, 0, 0, RED)
        assert cells_of(small_buffer, RED) == {(x, y) for x in range(4) for y in range(8)}
        assert small_buffer.get(5, 0) == BLACK

    def test_diagonal_cells_not_connected(self):
        """Should use 4-connectivity only."""
        buf = PixelBuffer(3, WHITE)
        # checkerboard: black cells touch only at corners
        for x, y in [(0, 0), (1, 1), (2, 2), (0, 2), (2, 0)]:
            buf.set(x, y, BLACK)
        flood_fill(buf, 1, 1, RED)
        assert cells_of(buf, RED) == {(1, 1)}
        assert buf.get(0, 0) == BLACK
        assert buf.get(2, 2) == BLACK

    def test_out_of_bounds_seed(self, small_buffer):
        """Should ignore a seed outside the grid."""
        assert flood_fill(small_buffer, -1, 3, RED) == 0
        assert flood_fill(small_buffer, 3, 8, RED) == 0
        assert not cells_of(small_buffer, RED)

    def test_large_buffer_without_recursion(self):
        """Should fill a large grid without hitting the recursion limit."""
        buf = PixelBuffer(256, BLACK)
        assert flood_fill(buf, 128, 128, WHITE) == 256 * 256


class TestStampDisc:
    """Tests for brush_radius and stamp_disc functions."""

    def test_radius_is_half_the_brush_size(self):
        """Should treat brush size as a diameter."""
        assert brush_radius(2) == 1.0
        assert brush_radius(5) == 2.5
        assert brush_radius(0) == 0.5

    def test_radius_one_is_a_plus(self, small_buffer):
        """Should stamp a circle, not a square: center and 4-neighbours only."""
        stamp_disc(small_buffer, 4, 4, 1.0, WHITE)
        assert cells_of(small_buffer, WHITE) == {(4, 4), (3, 4), (5, 4), (4, 3), (4, 5)}
        assert small_buffer.get(3, 3) == BLACK
        assert small_buffer.get(5, 5) == BLACK

    def test_clipped_at_edge(self, small_buffer):
        """Should drop cells outside the grid."""
        changed = stamp_disc(small_buffer, 0, 0, 1.0, WHITE)
        assert changed == 3
        assert cells_of(small_buffer, WHITE) == {(0, 0), (1, 0), (0, 1)}

    def test_respects_selection(self, small_buffer):
        """Should only touch cells inside the selection."""
        sel = SelectionRect(4, 0, 8, 8)
        stamp_disc(small_buffer, 4, 4, 1.0, WHITE, sel)
        assert cells_of(small_buffer, WHITE) == {(4, 4), (5, 4), (4, 3), (4, 5)}

    def test_larger_disc_matches_full_scan(self):
        """Should match a full-grid distance scan."""
        buf = PixelBuffer(16, BLACK)
        stamp_disc(buf, 7, 8, 3.5, WHITE)
        expected = {
            (x, y) for y in range(16) for x in range(16)
            if (x - 7) ** 2 + (y - 8) ** 2 <= 3.5 ** 2
        }
        assert cells_of(buf, WHITE) == expected


class TestApplyTool:
    """Tests for apply_tool function."""

    def test_brush_end_to_end(self, small_buffer):
        """Should paint a radius-1 circle of white on black."""
        result = apply_tool(small_buffer, 4, 4, ToolType.BRUSH, WHITE, 2)
        assert result.changed == 5
        assert result.picked_color is None
        assert cells_of(small_buffer, WHITE) == {(4, 4), (3, 4), (5, 4), (4, 3), (4, 5)}

    def test_brush_size_one_paints_single_cell(self, small_buffer):
        """Should paint only the center for the smallest brush."""
        apply_tool(small_buffer, 2, 2, ToolType.BRUSH, RED, 1)
        assert cells_of(small_buffer, RED) == {(2, 2)}

    def test_eraser_writes_transparent(self, small_buffer):
        """Should stamp fully transparent pixels."""
        apply_tool(small_buffer, 4, 4, ToolType.ERASER, WHITE, 2)
        assert cells_of(small_buffer, TRANSPARENT) == {(4, 4), (3, 4), (5, 4), (4, 3), (4, 5)}
        assert not cells_of(small_buffer, WHITE)

    def test_eyedropper_reads_without_mutating(self, small_buffer):
        """Should report the sampled color and leave the buffer alone."""
        small_buffer.set(2, 3, GREEN)
        before = small_buffer.clone()
        result = apply_tool(small_buffer, 2, 3, ToolType.EYEDROPPER, WHITE, 4)
        assert result.picked_color == GREEN
        assert result.changed == 0
        assert small_buffer == before

    def test_bucket_without_selection_flood_fills(self, small_buffer):
        """Should flood fill the connected region."""
        small_buffer.fill_rect(0, 0, 8, 1, WHITE)
        apply_tool(small_buffer, 0, 0, ToolType.BUCKET, RED, 4)
        assert cells_of(small_buffer, RED) == {(x, 0) for x in range(8)}

    def test_bucket_with_selection_overwrites_rectangle(self):
        """Should change exactly the selected cells, regardless of their color."""
        buf = PixelBuffer(16, BLUE)
        buf.fill_rect(4, 4, 8, 8, GREEN)
        buf.set(5, 5, RED)
        sel = SelectionRect(4, 4, 8, 8)
        before = buf.clone()

        result = apply_tool(buf, 5, 6, ToolType.BUCKET, WHITE, 4, sel)

        assert result.changed == 16
        assert cells_of(buf, WHITE) == {(x, y) for x in range(4, 8) for y in range(4, 8)}
        for x, y, p in buf.pixels():
            if not sel.contains_cell(x, y):
                assert p == before.get(x, y)

    def test_select_tool_does_nothing(self, small_buffer):
        """Should leave selection handling to the tracker."""
        before = small_buffer.clone()
        assert apply_tool(small_buffer, 1, 1, ToolType.SELECT, WHITE, 4).changed == 0
        assert small_buffer == before

    @pytest.mark.parametrize("tool", list(ToolType))
    def test_out_of_bounds_is_noop(self, small_buffer, tool):
        """Should ignore coordinates outside the grid for every tool."""
        before = small_buffer.clone()
        result = apply_tool(small_buffer, 8, 2, tool, WHITE, 8)
        assert result.changed == 0
        assert result.picked_color is None
        assert small_buffer == before


class TestToolState:
    """Tests for the ToolState dataclass."""

    def test_defaults(self):
        """Should start on the brush with a white color."""
        ts = ToolState()
        assert ts.tool == ToolType.BRUSH
        assert ts.brush_size == 4
        assert ts.color == WHITE

    def test_brush_size_clamped(self):
        """Should clamp brush size to 1..32."""
        ts = ToolState(brush_size=100)
        assert ts.brush_size == 32
        ts.set_brush_size(0)
        assert ts.brush_size == 1

    def test_grow_and_shrink(self):
        """Should step the brush size within bounds."""
        ts = ToolState(brush_size=32)
        ts.grow_brush()
        assert ts.brush_size == 32
        ts.shrink_brush()
        assert ts.brush_size == 31

    def test_tool_from_name(self):
        """Should accept tool names."""
        ts = ToolState()
        ts.set_tool("eyedropper")
        assert ts.tool == ToolType.EYEDROPPER

    def test_unknown_tool_rejected(self):
        """Should reject unknown tool names."""
        with pytest.raises(ValueError):
            ToolState().set_tool("lasso")

    def test_color_normalized(self):
        """Should store colors as packed ints."""
        ts = ToolState()
        ts.set_color((255, 0, 0))
        assert ts.color == RED

    def test_mutating_tools(self):
        """Should flag only the tools that change pixels."""
        assert {t for t in ToolType if t.mutates} == {ToolType.BRUSH, ToolType.ERASER, ToolType.BUCKET}
