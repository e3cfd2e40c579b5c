"""Fixed-pitch label placement.

Titles, page numbers and the banner are positioned without font metrics:
every character is assumed to be ``char_width`` points wide, which holds for
monospaced faces such as Courier (600/1000 em).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FixedPitch:
    """Character-width arithmetic for one font size."""

    font_size: float
    ratio: float = 0.60

    @property
    def char_width(self) -> float:
        return self.font_size * self.ratio

    def text_width(self, text: str) -> float:
        return len(text) * self.char_width

    def centered_x(self, text: str, left: float, width: float) -> float:
        """x that centers ``text`` over the span [left, left + width]."""
        return left + (width / 2.0) - (self.text_width(text) / 2.0)

    def right_aligned_x(self, text: str, right_edge: float) -> float:
        """x that makes ``text`` end exactly at ``right_edge``."""
        return right_edge - self.text_width(text)
