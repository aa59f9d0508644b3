"""
Square pixel grid backed by a Pillow ``RGBA`` image.

Pixels cross the API as packed 32-bit ARGB ints (alpha most significant).
Pillow stores them as ``(r, g, b, a)`` tuples; ``pack_argb`` and
``unpack_argb`` convert between the two.
"""

from typing import Iterator

from PIL import Image

from pixel_editor.core.constants import BACKGROUND, GRID_SIZE
from pixel_editor.utils.helpers import clamp

RgbaColor = tuple[int, int, int, int]


def pack_argb(r: int, g: int, b: int, a: int = 255) -> int:
    return (
        (clamp(a, 0, 255) << 24)
        | (clamp(r, 0, 255) << 16)
        | (clamp(g, 0, 255) << 8)
        | clamp(b, 0, 255)
    )


def unpack_argb(pixel: int) -> RgbaColor:
    return (
        (pixel >> 16) & 0xFF,
        (pixel >> 8) & 0xFF,
        pixel & 0xFF,
        (pixel >> 24) & 0xFF,
    )


def normalize_pixel(value) -> int:
    """
    Coerce a packed int or an RGB/RGBA tuple into a valid packed ARGB int.
    Ints are masked to 32 bits; tuple channels are clamped to 0..255.
    """
    if isinstance(value, int):
        return value & 0xFFFFFFFF
    channels = tuple(value)
    if len(channels) == 3:
        r, g, b = channels
        return pack_argb(r, g, b)
    if len(channels) == 4:
        r, g, b, a = channels
        return pack_argb(r, g, b, a)
    raise ValueError(f"Expected RGB or RGBA channels, got {len(channels)}")


class PixelBuffer:
    """N x N grid of packed ARGB pixels. Out-of-bounds access is absorbed, never raised."""

    def __init__(self, size: int = GRID_SIZE, fill: int = BACKGROUND):
        if int(size) < 1:
            raise ValueError(f"Grid size must be positive: {size}")
        self._size = int(size)
        self._image = Image.new("RGBA", (self._size, self._size), unpack_argb(normalize_pixel(fill)))
        self._px = self._image.load()

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        if image.mode != "RGBA":
            raise ValueError(f"Expected an RGBA image, got mode {image.mode}")
        if image.width != image.height:
            raise ValueError(f"Expected a square image, got {image.width}x{image.height}")
        buf = cls.__new__(cls)
        buf._size = image.width
        buf._image = image.copy()
        buf._px = buf._image.load()
        return buf

    @property
    def size(self) -> int:
        return self._size

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._size and 0 <= y < self._size

    def get(self, x: int, y: int) -> int | None:
        """Packed pixel at (x, y), or ``None`` when outside the grid."""
        if not self.in_bounds(x, y):
            return None
        r, g, b, a = self._px[x, y]
        return (a << 24) | (r << 16) | (g << 8) | b

    def set(self, x: int, y: int, pixel: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        self._px[x, y] = unpack_argb(normalize_pixel(pixel))
        return True

    def fill(self, pixel: int):
        self._image.paste(unpack_argb(normalize_pixel(pixel)), (0, 0, self._size, self._size))

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, pixel: int) -> int:
        """Fill the half-open box [x0, x1) x [y0, y1), clipped to the grid. Returns cells written."""
        x0, x1 = clamp(x0, 0, self._size), clamp(x1, 0, self._size)
        y0, y1 = clamp(y0, 0, self._size), clamp(y1, 0, self._size)
        if x1 <= x0 or y1 <= y0:
            return 0
        self._image.paste(unpack_argb(normalize_pixel(pixel)), (x0, y0, x1, y1))
        return (x1 - x0) * (y1 - y0)

    def clone(self) -> "PixelBuffer":
        return PixelBuffer.from_image(self._image)

    def to_image(self) -> Image.Image:
        return self._image.copy()

    def tobytes(self) -> bytes:
        return self._image.tobytes()

    def pixels(self) -> Iterator[tuple[int, int, int]]:
        for y in range(self._size):
            for x in range(self._size):
                yield x, y, self.get(x, y)

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._size == other._size and self.tobytes() == other.tobytes()

    def __repr__(self):
        return f"PixelBuffer(size={self._size})"
