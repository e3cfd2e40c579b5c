import re
from dataclasses import dataclass
from typing import List

from .colors import RGB
from .config import MAX_LABEL_LENGTH, Config
from .fonts import is_standard_font

# Font names: printable ASCII (0x21-0x7E) without PDF delimiters
PDF_NAME_RE = re.compile(r"^(?:(?![()<>\[\]{}/%#])[!-~])+$")
DASH_TOKEN_RE = re.compile(r'^\d+(\.\d*)?$|^\.\d+$')


@dataclass
class ValidationIssue:
    path: str
    message: str
    severity: str = "error"  # 'error' | 'warn'


@dataclass
class ValidationResult:
    issues: List[ValidationIssue]

    def ok(self) -> bool:
        return all(i.severity != 'error' for i in self.issues)

    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == 'error']


def _check_color(path: str, color: RGB, issues: List[ValidationIssue]) -> None:
    if len(color) != 3 or any(not isinstance(c, (int, float)) for c in color):
        issues.append(ValidationIssue(path=path, message="Color must be an RGB triple"))
        return
    if any(c < 0.0 or c > 1.0 for c in color):
        issues.append(ValidationIssue(path=path, message="Color component out of range 0.0-1.0"))


def validate_config(config: Config) -> ValidationResult:
    """Check layout and style settings before any output is written.

    Errors make the document impossible or non-conformant; warnings flag
    settings that work but probably do not do what was meant.
    """
    issues: List[ValidationIssue] = []
    layout = config.layout
    style = config.style

    # Page geometry
    for name in ('page_width', 'page_height'):
        if getattr(layout, name) <= 0:
            issues.append(ValidationIssue(path=f"/layout/{name}", message="Must be > 0"))
    for name in ('margin_top', 'margin_bottom', 'margin_left', 'margin_right'):
        if getattr(layout, name) < 0:
            issues.append(ValidationIssue(path=f"/layout/{name}", message="Margin must be >= 0"))
    if layout.lines_per_page <= 0:
        issues.append(ValidationIssue(path="/layout/lines_per_page", message="Must be > 0"))
    elif layout.page_height > 0 and layout.line_height <= 0:
        issues.append(
            ValidationIssue(
                path="/layout",
                message="Top and bottom margins leave no printable height",
            )
        )
    if layout.page_width > 0 and layout.printable_width <= 0:
        issues.append(
            ValidationIssue(path="/layout", message="Left and right margins leave no printable width")
        )

    # Colors
    for name in ('font_color', 'overstrike_color', 'bar_color', 'line_number_color', 'title_color'):
        _check_color(f"/style/{name}", getattr(style, name), issues)

    # Bands
    if not isinstance(style.shade_step, int) or style.shade_step < 1:
        issues.append(ValidationIssue(path="/style/shade_step", message="Shade step must be >= 1"))
    dash = style.dash_pattern.strip()
    if len(style.dash_pattern) > MAX_LABEL_LENGTH:
        issues.append(
            ValidationIssue(
                path="/style/dash_pattern",
                message=f"Dash pattern longer than {MAX_LABEL_LENGTH} characters",
            )
        )
    elif dash:
        tokens = dash.split()
        if not all(DASH_TOKEN_RE.match(t) for t in tokens):
            issues.append(
                ValidationIssue(
                    path="/style/dash_pattern",
                    message=f"Dash pattern '{dash}' must be non-negative numbers separated by spaces",
                )
            )
        elif all(float(t) == 0 for t in tokens):
            issues.append(
                ValidationIssue(path="/style/dash_pattern", message="Dash lengths cannot all be zero")
            )

    # Fonts
    for name in ('body_font', 'heading_font'):
        font = getattr(style, name)
        if not font or not PDF_NAME_RE.match(font):
            issues.append(
                ValidationIssue(path=f"/style/{name}", message=f"'{font}' is not a valid PDF font name")
            )
        elif not is_standard_font(font):
            issues.append(
                ValidationIssue(
                    path=f"/style/{name}",
                    message=f"'{font}' is not one of the Standard 14 fonts; viewers will substitute it",
                    severity='warn',
                )
            )
    if style.title_font_size <= 0:
        issues.append(ValidationIssue(path="/style/title_font_size", message="Must be > 0"))
    if style.char_width_ratio <= 0:
        issues.append(ValidationIssue(path="/style/char_width_ratio", message="Must be > 0"))

    # Labels
    for name in ('title_left', 'title_right', 'banner'):
        text = getattr(style, name)
        if len(text) > MAX_LABEL_LENGTH:
            issues.append(
                ValidationIssue(
                    path=f"/style/{name}",
                    message=f"Label longer than {MAX_LABEL_LENGTH} characters",
                )
            )
        elif any(ord(ch) > 0xFF for ch in text):
            issues.append(
                ValidationIssue(
                    path=f"/style/{name}",
                    message="Label has characters outside the single-byte (latin-1) range",
                )
            )
    if style.title_font_size > 0 and style.char_width_ratio > 0 and layout.printable_width > 0:
        char_width = style.title_font_size * style.char_width_ratio
        titles = len(style.title_left) + len(style.title_right)
        if titles and titles * char_width > layout.printable_width:
            issues.append(
                ValidationIssue(
                    path="/style",
                    message="Left and right titles together are wider than the printable area",
                    severity='warn',
                )
            )

    return ValidationResult(issues)
