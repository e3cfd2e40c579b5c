"""Per-page furniture: graybar bands, margin titles, page number, banner.

Drawn at the start of every content stream, before the body text object.
Labels are placed with fixed-pitch arithmetic (see utils.alignment).
"""

from typing import Callable

from .. import colors
from ..config import Config, PageNumberMode
from ..utils.alignment import FixedPitch
from ..utils.pdf_helpers import fmt_f, pdf_literal
from .pages import Page

# Offsets of the furniture relative to the margins, in font sizes
BAND_LEFT_BLEED = 0.1
BAND_DROP = 0.22
TITLE_RAISE = 0.12
BANNER_EXTRA_SIZE = 2.0


class PageDecorator:
    """Writes the repeating page furniture for one configuration."""

    def __init__(self, config: Config, write: Callable[[str], object]):
        self.config = config
        self.write = write

    def __call__(self, page: Page) -> None:
        self.draw_bands()
        self.draw_margin(page.number)

    def draw_bands(self) -> None:
        """Shaded bars, or dashed rules when a dash pattern is configured."""
        layout = self.config.layout
        style = self.config.style
        dash = style.dash_pattern.strip()

        self.write(f"{style.bar_color.operands()} rg\n")
        self.write("1 i\n")

        font_size = layout.body_font_size
        x1 = layout.margin_left - BAND_LEFT_BLEED * font_size
        height = style.shade_step * layout.line_height
        y1 = layout.top_y - height - BAND_DROP * font_size
        width = layout.printable_width
        step = 1.0

        if dash:
            self.write(f"{style.bar_color.operands()} RG\n")
            self.write(f"0 w [{dash}] 0 d\n")

        while y1 >= layout.margin_bottom - height:
            if dash:
                self.write(f"{fmt_f(x1)} {fmt_f(y1)} m {fmt_f(x1 + width)} {fmt_f(y1)} l S\n")
            else:
                self.write(f"{fmt_f(x1)} {fmt_f(y1)} {fmt_f(width)} {fmt_f(height)} re f\n")
                # every other band is left unshaded
                step = 2.0
            y1 -= step * height

        if dash:
            self.write("[] 0 d\n")
        self.write("0 G\n")
        self.write("0 g\n")

    def draw_title_at(self, x: float, y: float, text: str, size: float) -> None:
        self.write(f"BT /F2 {fmt_f(size)} Tf {fmt_f(x)} {fmt_f(y)} Td{pdf_literal(text)} Tj ET\n")

    def draw_banner(self) -> None:
        """Banner string centered near the top edge in bright red."""
        layout = self.config.layout
        style = self.config.style
        if not style.banner:
            return
        size = style.title_font_size + BANNER_EXTRA_SIZE
        pitch = FixedPitch(size, style.char_width_ratio)
        self.write(f"{colors.BANNER_RED.operands()} rg\n")
        x = pitch.centered_x(style.banner, layout.margin_left, layout.printable_width)
        self.draw_title_at(x, layout.page_height - size, style.banner, size)

    def draw_margin(self, page_number: int) -> None:
        """Banner, left/right titles and the page number label."""
        layout = self.config.layout
        style = self.config.style
        size = style.title_font_size
        pitch = FixedPitch(size, style.char_width_ratio)

        self.draw_banner()
        self.write(f"{style.title_color.operands()} rg\n")

        title_y = layout.top_y + TITLE_RAISE * size
        if style.title_right:
            x = pitch.right_aligned_x(style.title_right, layout.page_width - layout.margin_right)
            self.draw_title_at(x, title_y, style.title_right, size)

        if style.page_numbers is not PageNumberMode.OFF:
            label = f"Page {page_number:04d}"
            x = pitch.centered_x(label, layout.margin_left, layout.printable_width)
            if style.page_numbers is PageNumberMode.TOP:
                y = title_y
            else:
                y = layout.margin_bottom - size
            self.draw_title_at(x, y, label, size)

        if style.title_left:
            self.draw_title_at(layout.margin_left, title_y, style.title_left, size)

        self.write(f"{style.font_color.operands()} rg\n")
