"""PDF content-stream helpers: literal strings and number operands."""

PDF_RESERVED_CHARS = ('(', ')', '\\')

# Extended ('^') lines print the upper half of the code page
EXTENDED_SHIFT = 127


def escape_pdf_text(text: str) -> str:
    """Escape text for inclusion inside a PDF literal string.

    Each of the reserved characters ( ) \\ gets a preceding backslash.
    Nothing else is touched: control characters pass through as-is.
    """
    if not text:
        return ""
    out = []
    for ch in text:
        if ch in PDF_RESERVED_CHARS:
            out.append('\\')
        out.append(ch)
    return ''.join(out)


def shift_extended(text: str) -> str:
    """Add 127 to every character code, wrapping within one byte.

    For 7-bit input the result never contains a reserved character, so no
    escaping is needed. Bytes from 169 up wrap around into the low range
    and may land on ( ) or \\; those are escaped to keep the string intact.
    The historical filter wrote them unescaped, so for such input the
    output differs from it byte-for-byte.
    """
    shifted = (chr((ord(ch) + EXTENDED_SHIFT) & 0xFF) for ch in text)
    return ''.join('\\' + ch if ch in PDF_RESERVED_CHARS else ch for ch in shifted)


def pdf_literal(text: str, extended: bool = False) -> str:
    """Wrap text in literal-string delimiters: (text)."""
    body = shift_extended(text) if extended else escape_pdf_text(text)
    return f"({body})"


def fmt_f(val: float) -> str:
    """Fixed six-decimal operand, as used for colors and geometry."""
    return f"{float(val):f}"


def fmt_g(val: float) -> str:
    """Shortest general operand, as used for text setup."""
    return f"{float(val):g}"
