"""
Headless frame composition for render surfaces.

Reads the pixel buffer and the optional selection rectangle and produces an
``RGBA`` image: cells scaled with nearest-neighbour, transparent cells over a
checkerboard, and the selection drawn as a translucent fill with an outline.
"""

from PIL import Image, ImageDraw

from pixel_editor.core.pixel_buffer import PixelBuffer
from pixel_editor.core.selection import SelectionRect
from pixel_editor.core.transparency import create_checkerboard

SELECTION_FILL = (255, 255, 0, 51)
SELECTION_OUTLINE = (255, 255, 0, 204)
GRID_LINE = (0, 0, 0, 40)


def compose_frame(buffer: PixelBuffer, selection: SelectionRect | None = None,
                  cell_size: int = 1, show_grid: bool = False) -> Image.Image:
    cell_size = max(1, int(cell_size))
    comp = buffer.to_image()

    if cell_size != 1:
        comp = comp.resize((comp.width * cell_size, comp.height * cell_size), Image.NEAREST)

    bg = create_checkerboard(comp.size, square_size=max(1, cell_size // 2))
    composed = Image.alpha_composite(bg, comp)

    if show_grid and cell_size >= 4:
        draw = ImageDraw.Draw(composed, "RGBA")
        w, h = composed.size
        for x in range(0, w, cell_size):
            draw.line([(x, 0), (x, h)], fill=GRID_LINE)
        for y in range(0, h, cell_size):
            draw.line([(0, y), (w, y)], fill=GRID_LINE)

    if selection is not None:
        overlay = Image.new("RGBA", composed.size, (0, 0, 0, 0))
        d = ImageDraw.Draw(overlay)
        x0 = selection.x0 * cell_size
        y0 = selection.y0 * cell_size
        x1 = max(x0, selection.x1 * cell_size - 1)
        y1 = max(y0, selection.y1 * cell_size - 1)
        d.rectangle([x0, y0, x1, y1], fill=SELECTION_FILL, outline=SELECTION_OUTLINE, width=1)
        composed = Image.alpha_composite(composed, overlay)

    return composed
