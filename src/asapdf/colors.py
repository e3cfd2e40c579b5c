"""Color model: packed 0xRRGGBB integers <-> normalized RGB triples."""

import re
from typing import NamedTuple, Union

HEX_COLOR_RE = re.compile(r'^(?:#|0[xX])?(?P<hex>[0-9a-fA-F]{1,6})$')


class RGB(NamedTuple):
    """Fill color with components in the unit interval."""

    r: float
    g: float
    b: float

    def operands(self) -> str:
        """Format as the three operands of a PDF ``rg``/``RG`` operator."""
        return f"{self.r:f} {self.g:f} {self.b:f}"


def color_from_int(value: int) -> RGB:
    """Split a packed 0xRRGGBB value into an RGB triple."""
    return RGB(
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


def color_to_int(color: RGB) -> int:
    """Pack an RGB triple back into 0xRRGGBB.

    Components are rounded to the nearest step, so
    ``color_to_int(color_from_int(v)) == v`` for every 24-bit value.
    """
    r, g, b = (max(0, min(255, int(round(c * 255)))) for c in color)
    return (r << 16) + (g << 8) + b


def parse_hex_color(text: Union[str, int]) -> RGB:
    """Parse 'RRGGBB', '#RRGGBB' or '0xRRGGBB' into an RGB triple.

    Raises ValueError for anything else.
    """
    if isinstance(text, int):
        return color_from_int(text)
    m = HEX_COLOR_RE.match(str(text).strip())
    if not m:
        raise ValueError(f"Invalid hex color '{text}' (expected RRGGBB)")
    return color_from_int(int(m.group('hex'), 16))


def format_hex(color: RGB) -> str:
    return f"0x{color_to_int(color):06X}"


# Historical defaults of the lineprinter listing
BLACK = color_from_int(0x000000)
GREYBAR = color_from_int(0xC0C0C0)
LINE_NUMBER_BLUE = color_from_int(0x330099)
TITLE_ORANGE = color_from_int(0xFF3300)

RED = color_from_int(0xFF0000)
GREEN = color_from_int(0x00FF00)
BLUE = color_from_int(0x0000FF)

# Banner text is always drawn in this fixed warning color
BANNER_RED = RGB(0.9, 0.0, 0.0)
