"""Carriage-control text engine.

Turns each input line into PDF text-object operators on the current page.

ASA mode consumes the first character of every line as a carriage-control
code (see ``ASA_CONTROLS``). Free-form mode prints the whole line, treating
embedded form-feeds as page breaks and embedded carriage returns as
overstrike markers.

Every printed row consumes one line number; a row that overstrikes the
previous baseline reuses the previous number.
"""

import enum
import logging
import warnings
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from . import colors
from .colors import RGB
from .config import Config, LineNumberMode
from .pdf.pages import Page, PageStream
from .utils.pdf_helpers import fmt_f, pdf_literal

logger = logging.getLogger(__name__)

FORM_FEED = '\f'
CARRIAGE_RETURN = '\r'

# Cursor at or below this distance above the bottom margin forces a new page
BOTTOM_SLACK = 1.0


class Motion(enum.Enum):
    ADVANCE = 'advance'
    OVERSTRIKE = 'overstrike'
    HALF_LINE = 'half-line'
    NEW_PAGE = 'new-page'


@dataclass(frozen=True)
class CarriageControl:
    """What one control character does before its line's payload prints."""

    code: str
    motion: Motion = Motion.ADVANCE
    blank_lines: int = 0
    color: Optional[str] = None  # 'overstrike' | 'red' | 'green' | 'blue'
    extended: bool = False

    @property
    def holds_baseline(self) -> bool:
        return self.motion is Motion.OVERSTRIKE


ASA_CONTROLS: Dict[str, CarriageControl] = {
    c.code: c
    for c in (
        CarriageControl('1', Motion.NEW_PAGE),
        CarriageControl('0', blank_lines=1),
        CarriageControl('-', blank_lines=2),
        CarriageControl('+', Motion.OVERSTRIKE, color='overstrike'),
        CarriageControl('R', Motion.OVERSTRIKE, color='red'),
        CarriageControl('G', Motion.OVERSTRIKE, color='green'),
        CarriageControl('B', Motion.OVERSTRIKE, color='blue'),
        CarriageControl('r', color='red'),
        CarriageControl('g', color='green'),
        CarriageControl('b', color='blue'),
        CarriageControl('H', Motion.HALF_LINE),
        CarriageControl('^', Motion.OVERSTRIKE, extended=True),
        CarriageControl('>'),
        CarriageControl(' '),
        CarriageControl(FORM_FEED, Motion.NEW_PAGE),
    )
}

PLAIN = CarriageControl('')

FORCED_COLORS = {
    'red': colors.RED,
    'green': colors.GREEN,
    'blue': colors.BLUE,
}


def lookup_control(code: str) -> CarriageControl:
    """Return the control for an ASA code; unknown codes advance one line."""
    control = ASA_CONTROLS.get(code)
    if control is None:
        warnings.warn(f"Unknown ASA Carriage Control Character {code!r}", UserWarning)
        return CarriageControl(code)
    return control


@dataclass
class CarriageState:
    """Per-line color and character-set state."""

    color: RGB
    reset_color: bool = False
    extended: bool = False


class CarriageEngine:
    """Feeds input lines through the page stream of one document."""

    def __init__(self, pages: PageStream, config: Config):
        self.pages = pages
        self.config = config
        self.layout = config.layout
        self.style = config.style
        self.state = CarriageState(color=self.style.font_color)

    @property
    def page(self) -> Page:
        return self.pages.page

    def run(self, lines: Iterable[str]) -> int:
        """Process every line, opening the first page before and closing the
        last page after. Returns the number of input lines consumed."""
        self.pages.open_page()
        count = 0
        for line in lines:
            self.process_line(line)
            count += 1
        self.pages.finish()
        logger.debug("%d input lines on %d pages", count, self.pages.page_count)
        return count

    # -- page motion -------------------------------------------------------

    def break_page(self) -> None:
        self.pages.new_page()

    def break_page_unless_at_top(self) -> None:
        if not self.page.at_top:
            self.break_page()

    def hold_baseline(self) -> bool:
        """Move back up one line so the next row overprints the previous one.

        Returns False (and does nothing) at top of page, where there is no
        previous row to overprint.
        """
        if self.page.at_top:
            return False
        self.pages.write(f"0 {fmt_f(self.layout.line_height)} Td\n")
        self.page.move_up(1.0)
        return True

    def half_line(self) -> None:
        self.pages.write(f"0 {fmt_f(self.layout.line_height / 2.0)} Td\n")
        self.page.move_up(0.5)

    # -- text output -------------------------------------------------------

    def show_text(self, text: str, extended: bool = False) -> str:
        """Literal string operand for a row, with line number or color prefix."""
        prefix = ''
        if self.style.line_numbers is not LineNumberMode.OFF:
            size = fmt_f(self.layout.body_font_size)
            prefix = (
                f"/F1 {size} Tf\n {self.style.line_number_color.operands()} rg\n"
                f" ({self.pages.line_count:6d} | )Tj\n"
                f" /F0 {size} Tf\n {self.state.color.operands()} rg "
            )
        elif self.state.color != self.style.font_color:
            prefix = f" {self.state.color.operands()} rg\n"
        return prefix + pdf_literal(text, extended)

    def emit_row(self, text: str, overstrike: bool = False) -> None:
        if not overstrike:
            self.pages.line_count += 1
        self.pages.write(f"T*{self.show_text(text, self.state.extended)}Tj\n")
        self.page.move_down(1.0)

    def emit_blank(self) -> None:
        self.pages.line_count += 1
        self.pages.write("T*()Tj\n")
        self.page.move_down(1.0)

    def set_color(self, color: RGB) -> None:
        self.state.color = color
        self.state.reset_color = True

    # -- line processing ---------------------------------------------------

    def needs_page_break(self, line: str, control: CarriageControl) -> bool:
        if not line or control.holds_baseline:
            return False
        return self.page.y <= self.layout.margin_bottom + BOTTOM_SLACK

    def process_line(self, line: str) -> None:
        self.state = CarriageState(color=self.style.font_color)
        asa = self.config.asa
        if asa and line.endswith(CARRIAGE_RETURN):
            line = line[:-1]

        control = lookup_control(line[0]) if asa and line else PLAIN

        if self.needs_page_break(line, control):
            self.break_page()

        if not line:
            self.emit_blank()
        elif asa:
            self._process_asa(control, line[1:])
        else:
            self._process_free_form(line)

        if self.state.reset_color:
            self.state.color = self.style.font_color
            self.pages.write(f"{self.style.font_color.operands()} rg\n")

    def _process_asa(self, control: CarriageControl, payload: str) -> None:
        if control.motion is Motion.NEW_PAGE:
            self.break_page_unless_at_top()
        for _ in range(control.blank_lines):
            self.emit_blank()

        if control.color == 'overstrike':
            self.set_color(self.style.overstrike_color)
        elif control.color is not None:
            self.set_color(FORCED_COLORS[control.color])
        self.state.extended = control.extended

        held = False
        if control.motion is Motion.OVERSTRIKE:
            held = self.hold_baseline()
        elif control.motion is Motion.HALF_LINE:
            self.half_line()

        self.emit_row(payload, overstrike=held)

    def _process_free_form(self, line: str) -> None:
        segment = []
        printed = False  # a row went out since the last baseline hold
        held = False
        last = len(line) - 1
        for i, ch in enumerate(line):
            if ch == FORM_FEED:
                if segment:
                    self.emit_row(''.join(segment), overstrike=held)
                    segment = []
                held = printed = False
                self.break_page_unless_at_top()
                # the new page starts in the body color
                self.state.color = self.style.font_color
            elif ch == CARRIAGE_RETURN:
                if i == last:
                    continue
                if segment:
                    self.emit_row(''.join(segment), overstrike=held)
                    segment = []
                    printed = True
                if printed:
                    self.set_color(self.style.overstrike_color)
                    held = self.hold_baseline()
                    printed = False
            else:
                segment.append(ch)
        if segment:
            self.emit_row(''.join(segment), overstrike=held)
