import math


def clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(v)))


def clamp_float(v: float, lo: float, hi: float, fallback: float | None = None) -> float:
    """Clamp ``v`` into ``[lo, hi]``; NaN and infinities collapse to ``fallback`` (``lo`` by default)."""
    try:
        v = float(v)
    except (TypeError, ValueError):
        return lo if fallback is None else fallback
    if not math.isfinite(v):
        return lo if fallback is None else fallback
    return max(lo, min(hi, v))


def parse_hex_color(s: str) -> int | None:
    """Parse ``#RRGGBB`` or ``#AARRGGBB`` into a packed ARGB int."""
    if not s:
        return None
    token = s.strip().lstrip("#")
    if len(token) == 6:
        token = "FF" + token
    if len(token) != 8:
        return None
    try:
        return int(token, 16)
    except ValueError:
        return None


def format_hex_color(pixel: int) -> str:
    return f"#{pixel & 0xFFFFFFFF:08X}"
