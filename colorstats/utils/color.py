"""Color rounding and formatting helpers."""
import math
import re
from typing import Tuple, Optional

RGB = Tuple[int, int, int]

BUCKET_STEP = 20
CHANNEL_MAX = 255

_RGB_PATTERN = re.compile(r"^\s*rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)\s*$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up."""
    return int(math.floor(value + 0.5))


def format_rgb(rgb: RGB) -> str:
    """Render a color as ``rgb(R, G, B)``."""
    r, g, b = rgb
    return f"rgb({int(r)}, {int(g)}, {int(b)})"


def parse_rgb(text: str) -> Optional[RGB]:
    """Parse an ``rgb(R, G, B)`` string back into a tuple."""
    match = _RGB_PATTERN.match(text)
    if match is None:
        return None

    values = tuple(int(v) for v in match.groups())
    if any(v > CHANNEL_MAX for v in values):
        return None
    return values


def rgb_to_hex(text: str) -> Optional[str]:
    """Convert an ``rgb(R, G, B)`` string to ``#rrggbb``."""
    rgb = parse_rgb(text)
    if rgb is None:
        return None
    return "#{:02x}{:02x}{:02x}".format(*rgb)
