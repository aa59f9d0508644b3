from PIL import Image


def create_checkerboard(size: tuple[int, int], square_size: int = 8) -> Image.Image:
    """Grey checkerboard shown behind transparent (erased) cells."""
    w, h = size
    square_size = max(1, square_size)
    bg = Image.new("RGBA", (w, h), (220, 220, 220, 255))
    px = bg.load()
    dark = (180, 180, 180, 255)
    for y in range(h):
        for x in range(w):
            if ((x // square_size) + (y // square_size)) % 2 == 1:
                px[x, y] = dark
    return bg
