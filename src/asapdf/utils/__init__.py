"""Shared utilities for asapdf.

- alignment: fixed-pitch label placement
- file_ops: input/output streams and bounded line reading
- pdf_helpers: PDF literal strings and number operands
"""

from .alignment import FixedPitch
from .file_ops import (
    MAX_LINE_LENGTH,
    open_input,
    open_output,
    read_lines,
)
from .pdf_helpers import (
    escape_pdf_text,
    shift_extended,
    pdf_literal,
    fmt_f,
    fmt_g,
)

__all__ = [
    # Alignment
    'FixedPitch',
    # File operations
    'MAX_LINE_LENGTH',
    'open_input',
    'open_output',
    'read_lines',
    # PDF helpers
    'escape_pdf_text',
    'shift_extended',
    'pdf_literal',
    'fmt_f',
    'fmt_g',
]
