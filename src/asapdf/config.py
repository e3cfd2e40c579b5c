"""Layout and style settings consumed by the PDF writer.

Everything here is immutable once built. Measurements are PDF points; the
CLI converts from user units (72 points per inch by default) before building
a config.
"""

import dataclasses
import enum
import os
import re
import warnings
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from . import colors
from .colors import RGB
from .errors import ConfigError

POINTS_PER_INCH = 72.0

# Historical 132-column landscape listing, in inches
DEFAULTS = {
    'PAGE_WIDTH': 11.0,
    'PAGE_HEIGHT': 8.5,
    'MARGIN_TOP': 0.5,
    'MARGIN_BOTTOM': 0.5,
    'MARGIN_LEFT': 0.75,
    'MARGIN_RIGHT': 0.75,
    'LINES_PER_PAGE': 60.0,
    'SHADE_STEP': 2,
    'TITLE_FONT_SIZE': 12.0,
    'CHAR_WIDTH_RATIO': 0.60,
    'BODY_FONT': 'Courier',
    'HEADING_FONT': 'Courier-Bold',
}

# Labels and the dash code lived in 256-byte buffers; keep the same bound
MAX_LABEL_LENGTH = 255

ENV_GRAYBAR = 'IMPACT_GRAYBAR'
ENV_BANNER = 'IMPACT_TOP'

MARGIN_OPT_RE = re.compile(r'^(?P<side>[A-Za-z])(?P<value>.*)$')
MARGIN_SIDES = {
    'a': ('top', 'bottom', 'left', 'right'),
    't': ('top',),
    'b': ('bottom',),
    'l': ('left',),
    'r': ('right',),
}


class LineNumberMode(enum.Enum):
    OFF = 'off'
    RUNNING = 'running'
    PER_PAGE = 'per-page'


class PageNumberMode(enum.Enum):
    OFF = 'off'
    TOP = 'top'
    BOTTOM = 'bottom'


@dataclass(frozen=True)
class LayoutConfig:
    """Page geometry in PDF points."""

    page_width: float = DEFAULTS['PAGE_WIDTH'] * POINTS_PER_INCH
    page_height: float = DEFAULTS['PAGE_HEIGHT'] * POINTS_PER_INCH
    margin_top: float = DEFAULTS['MARGIN_TOP'] * POINTS_PER_INCH
    margin_bottom: float = DEFAULTS['MARGIN_BOTTOM'] * POINTS_PER_INCH
    margin_left: float = DEFAULTS['MARGIN_LEFT'] * POINTS_PER_INCH
    margin_right: float = DEFAULTS['MARGIN_RIGHT'] * POINTS_PER_INCH
    lines_per_page: float = DEFAULTS['LINES_PER_PAGE']

    @property
    def line_height(self) -> float:
        """Standard line height: printable depth divided by lines per page."""
        return (self.page_height - self.margin_top - self.margin_bottom) / self.lines_per_page

    @property
    def body_font_size(self) -> float:
        # Square box: the monospaced body font is exactly one line tall
        return self.line_height

    @property
    def top_y(self) -> float:
        return self.page_height - self.margin_top

    @property
    def printable_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right


@dataclass(frozen=True)
class StyleConfig:
    body_font: str = DEFAULTS['BODY_FONT']
    heading_font: str = DEFAULTS['HEADING_FONT']
    font_color: RGB = colors.BLACK
    overstrike_color: RGB = colors.BLACK
    bar_color: RGB = colors.GREYBAR
    line_number_color: RGB = colors.LINE_NUMBER_BLUE
    title_color: RGB = colors.TITLE_ORANGE
    shade_step: int = DEFAULTS['SHADE_STEP']
    dash_pattern: str = ''
    line_numbers: LineNumberMode = LineNumberMode.OFF
    page_numbers: PageNumberMode = PageNumberMode.OFF
    title_left: str = ''
    title_right: str = ''
    banner: str = ''
    title_font_size: float = DEFAULTS['TITLE_FONT_SIZE']
    char_width_ratio: float = DEFAULTS['CHAR_WIDTH_RATIO']


@dataclass(frozen=True)
class Config:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    asa: bool = True


def parse_margin_option(val: str, unit: float = POINTS_PER_INCH) -> Dict[str, float]:
    """Parse a margin switch value like 'T0.5', 'l.75' or 'A1'.

    The first character selects the side (T, B, L, R or A for all four, any
    case), the rest is a number in user units. Returns {side: points}.
    Raises ConfigError on an unknown side or a malformed number.
    """
    m = MARGIN_OPT_RE.match((val or '').strip())
    if not m:
        raise ConfigError(f"Malformed margin '{val}'. Expected <T|B|L|R|A><number>.")
    sides = MARGIN_SIDES.get(m.group('side').lower())
    if sides is None:
        raise ConfigError(
            f"Unknown MARGIN Identifier '{m.group('side')}'. Only Tt, Ll, Rr, Bb, Aa permitted."
        )
    try:
        amount = float(m.group('value')) * unit
    except ValueError:
        raise ConfigError(f"Malformed margin value in '{val}'") from None
    return {side: amount for side in sides}


def apply_margins(layout: LayoutConfig, margins: Mapping[str, float]) -> LayoutConfig:
    """Return a copy of ``layout`` with the given {side: points} margins."""
    changes = {f"margin_{side}": float(v) for side, v in margins.items()}
    return dataclasses.replace(layout, **changes)


def env_defaults(environ: Optional[Mapping[str, str]] = None) -> Dict[str, object]:
    """Read the environment-seeded defaults.

    IMPACT_GRAYBAR is a hex bar color, honored only when it parses to a
    value greater than zero. IMPACT_TOP is the banner string. Returns the
    StyleConfig fields to seed, before explicit options are applied.
    """
    env = os.environ if environ is None else environ
    seeded: Dict[str, object] = {}
    graybar = env.get(ENV_GRAYBAR, '')
    if graybar:
        try:
            bar = colors.parse_hex_color(graybar)
        except ValueError:
            warnings.warn(f"Ignoring {ENV_GRAYBAR}={graybar!r}: not a hex color", UserWarning)
        else:
            if colors.color_to_int(bar) > 0:
                seeded['bar_color'] = bar
    banner = env.get(ENV_BANNER, '')
    if banner:
        seeded['banner'] = banner
    return seeded


def clamp_shade_step(step: int) -> int:
    """Shade steps below 1 fall back to 1 with a warning."""
    if step < 1:
        warnings.warn(f"Resetting shade step {step} to 1", UserWarning)
        return 1
    return step
