import pathlib
from dataclasses import dataclass
from typing import Optional, Union

from .errors import ConfigError

# Built into every conforming PDF viewer; never embedded
STANDARD_FONTS = (
    'Courier',
    'Courier-Bold',
    'Courier-Oblique',
    'Courier-BoldOblique',
    'Helvetica',
    'Helvetica-Bold',
    'Helvetica-Oblique',
    'Helvetica-BoldOblique',
    'Times-Roman',
    'Times-Bold',
    'Times-Italic',
    'Times-BoldItalic',
    'Symbol',
    'ZapfDingbats',
)

MONOSPACED_STANDARD_FONTS = tuple(f for f in STANDARD_FONTS if f.startswith('Courier'))

# Glyph measured to derive the fixed-pitch width ratio
REFERENCE_CHAR = 'M'


def is_standard_font(name: str) -> bool:
    return name in STANDARD_FONTS


@dataclass
class FontMetrics:
    path: str
    family: Optional[str]
    fixed_pitch: bool
    units_per_em: int
    advance_width: int

    @property
    def char_width_ratio(self) -> float:
        """Advance width of one character as a fraction of the font size."""
        return self.advance_width / self.units_per_em


def read_font_metrics(path: Union[str, pathlib.Path], font_number: int = 0) -> FontMetrics:
    """Read fixed-pitch metrics from a TrueType/OpenType file via fontTools.

    Collections (.ttc/.otc) use ``font_number`` to pick a member.
    Raises ConfigError when the file cannot be read as a font or has no
    glyph for the reference character.
    """
    from fontTools.ttLib import TTFont, TTLibError

    font_path = pathlib.Path(path)
    if not font_path.is_file():
        raise ConfigError(f"Font file not found: {font_path}")
    kwargs = {'lazy': True}
    if font_path.suffix.lower() in {'.ttc', '.otc'}:
        kwargs['fontNumber'] = font_number
    try:
        font = TTFont(str(font_path), **kwargs)
    except (TTLibError, OSError) as e:
        raise ConfigError(f"Cannot read font '{font_path}': {e}") from None

    try:
        units_per_em = int(font['head'].unitsPerEm)
        fixed_pitch = bool(font['post'].isFixedPitch)
        cmap = font.getBestCmap() or {}
        glyph = cmap.get(ord(REFERENCE_CHAR))
        if glyph is None:
            raise ConfigError(f"Font '{font_path}' has no glyph for '{REFERENCE_CHAR}'")
        advance, _lsb = font['hmtx'][glyph]
        family = None
        nm = font.get('name')
        if nm:
            # Typographic family (16) wins over the legacy family name (1)
            for name_id in (16, 1):
                rec = nm.getName(name_id, 3, 1, 0x409) or nm.getName(name_id, 1, 0, 0)
                if rec is not None:
                    family = rec.toUnicode().strip()
                    break
    except KeyError as e:
        raise ConfigError(f"Font '{font_path}' is missing table {e}") from None
    finally:
        font.close()

    return FontMetrics(
        path=str(font_path),
        family=family,
        fixed_pitch=fixed_pitch,
        units_per_em=units_per_em,
        advance_width=int(advance),
    )
