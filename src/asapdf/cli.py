#!/usr/bin/env python3
"""Unified CLI for asapdf

Subcommands:
  convert   text (ASA carriage control or free-form) -> pdf
  settings  show the effective settings after defaults, environment and options
  validate  check settings and report issues
  fonts     Standard 14 font list and font-file metrics

"""

import argparse
import logging
import os
import sys
import warnings

from . import __version__
from .colors import RGB, format_hex, parse_hex_color
from .config import (
    DEFAULTS,
    POINTS_PER_INCH,
    Config,
    LayoutConfig,
    LineNumberMode,
    PageNumberMode,
    StyleConfig,
    apply_margins,
    clamp_shade_step,
    env_defaults,
    parse_margin_option,
)
from .errors import AsapdfError, ConfigError
from .fonts import MONOSPACED_STANDARD_FONTS, STANDARD_FONTS, read_font_metrics
from .pdf import build_document
from .utils.file_ops import STDIO_PATH, open_input, open_output, read_lines
from .validation import validate_config

logger = logging.getLogger(__name__)


def _print_warning(message, category, filename, lineno, file=None, line=None):
    print(f"(warning) {message}", file=sys.stderr)


def _hex_option(value, name: str) -> RGB:
    try:
        return parse_hex_color(value)
    except ValueError as e:
        raise ConfigError(f"{name}: {e}") from None


def config_from_args(args, environ=None) -> Config:
    """Build a Config from parsed options.

    Order of precedence: built-in defaults, then IMPACT_GRAYBAR / IMPACT_TOP
    from the environment, then explicit options. Sizes given on the command
    line are in units of ``--unit`` points (72 = inches).
    """
    unit = args.unit
    layout_kwargs = {}
    if args.width is not None:
        layout_kwargs['page_width'] = args.width * unit
    if args.height is not None:
        layout_kwargs['page_height'] = args.height * unit
    if args.lines_per_page is not None:
        layout_kwargs['lines_per_page'] = args.lines_per_page
    margins = {}
    for m in args.margin or []:
        margins.update(parse_margin_option(m, unit))
    layout = apply_margins(LayoutConfig(**layout_kwargs), margins)

    style_kwargs = env_defaults(os.environ if environ is None else environ)
    if args.bar_color is not None:
        style_kwargs['bar_color'] = _hex_option(args.bar_color, '-g')
    if args.overstrike_color is not None:
        style_kwargs['overstrike_color'] = _hex_option(args.overstrike_color, '-O')
    if args.title_color is not None:
        style_kwargs['title_color'] = _hex_option(args.title_color, '-t')

    line_numbers = LineNumberMode.OFF
    if args.line_number_color is not None:
        style_kwargs['line_number_color'] = _hex_option(args.line_number_color, '-n')
        line_numbers = LineNumberMode.PER_PAGE
    if args.line_numbers is not None:
        line_numbers = LineNumberMode.PER_PAGE if args.line_numbers == 1 else LineNumberMode.RUNNING
    style_kwargs['line_numbers'] = line_numbers
    if args.page_numbers is not None:
        style_kwargs['page_numbers'] = args.page_numbers

    if args.shade_step is not None:
        style_kwargs['shade_step'] = clamp_shade_step(args.shade_step)
    if args.dash is not None:
        style_kwargs['dash_pattern'] = args.dash
    if args.body_font is not None:
        style_kwargs['body_font'] = args.body_font
    if args.heading_font is not None:
        style_kwargs['heading_font'] = args.heading_font
    if args.left_title is not None:
        style_kwargs['title_left'] = args.left_title
    if args.right_title is not None:
        style_kwargs['title_right'] = args.right_title
    if args.banner is not None:
        style_kwargs['banner'] = args.banner
    if args.title_size is not None:
        style_kwargs['title_font_size'] = args.title_size

    if args.char_width_from:
        metrics = read_font_metrics(args.char_width_from)
        if not metrics.fixed_pitch:
            warnings.warn(
                f"{metrics.path} is not marked fixed-pitch; label centering may be off",
                UserWarning,
            )
        style_kwargs['char_width_ratio'] = metrics.char_width_ratio
        logger.info(
            "char width ratio %.4f from %s (%s)",
            metrics.char_width_ratio,
            metrics.path,
            metrics.family or 'unnamed',
        )
    elif args.char_width is not None:
        style_kwargs['char_width_ratio'] = args.char_width

    return Config(layout=layout, style=StyleConfig(**style_kwargs), asa=bool(args.asa))


def _report_issues(result) -> None:
    for issue in result.issues:
        print(f"{issue.severity.upper()}: {issue.path}: {issue.message}", file=sys.stderr)


def cmd_convert(args):
    config = config_from_args(args)
    result = validate_config(config)
    _report_issues(result)
    if not result.ok():
        sys.exit(1)

    with open_input(args.input) as src, open_output(args.output) as out:
        summary = build_document(read_lines(src), config, out)

    to_stdout = args.output is None or args.output == STDIO_PATH
    target = 'stdout' if to_stdout else args.output
    print(
        f"Built PDF: {target} pages={summary.pages} objects={summary.objects} "
        f"bytes={summary.bytes_written}",
        file=sys.stderr if to_stdout else sys.stdout,
    )


def _color_lines(flag: str, label: str, color: RGB) -> list:
    return [
        f"\t{flag}  R:{color.r:f}\t: RGB of {label:<13}({format_hex(color)})",
        f"\t    G:{color.g:f}",
        f"\t    B:{color.b:f}",
    ]


def format_settings(config: Config, unit: float = POINTS_PER_INCH) -> str:
    """Human-readable dump of every setting, keyed by its option letter."""
    layout = config.layout
    style = config.style
    lines = [
        "\t\t--== Operating Mode ==--",
        f"\t-A  [flag={int(config.asa)}]\t: Interpreter Mode (ASA=1, free-form=0)",
        f"\t-l  {layout.lines_per_page:f}\t: Lines Per Page",
        "",
        "\t\t--== Page Dimensions ==--",
        f"\t-u  {unit:f}\t: Unit of Measure Multiplier (72.0 = 1 Inch)",
        f"\t-MT {layout.margin_top / unit:f}\t: Top margin",
        f"\t-MB {layout.margin_bottom / unit:f}\t: Bottom margin",
        f"\t-ML {layout.margin_left / unit:f}\t: Left margin",
        f"\t-MR {layout.margin_right / unit:f}\t: Right margin",
        f"\t-W  {layout.page_width / unit:f}\t: Page Width  (In Units)",
        f"\t-H  {layout.page_height / unit:f}\t: Page Height (In Units)",
        f"\t    {layout.line_height:f}\t: Line Height / Body Font Size (points)",
        "",
        "\t\t--== Color Specifications ==--",
    ]
    lines += _color_lines('-O', 'Overstrike', style.overstrike_color)
    lines += _color_lines('-g', 'Greybar', style.bar_color)
    lines += _color_lines('-t', 'Title', style.title_color)
    lines += _color_lines('-n', 'Line Numbers', style.line_number_color)
    lines += [
        "",
        f"\t-i  {style.shade_step}\t\t: Shading Line Increment",
        f"\t-d  [{style.dash_pattern}]\t: Shading Line Dash Code",
        "",
        "\t\t--== Fonts and Labeling ==--",
        f"\t-1  [{style.body_font}]\t: Body Font Name",
        f"\t-2  [{style.heading_font}]\t: Heading Font Name",
        f"\t    {style.title_font_size:f}\t: Title Font Size",
        f"\t    {style.char_width_ratio:f}\t: Title Character Width (em)",
        "",
        f"\t-R  [{style.title_right}]\t: Right Header Margin Label",
        f"\t-L  [{style.title_left}]\t: Left Header Margin Label",
        f"\t-T  [{style.banner}]\t: Banner",
        "",
        f"\t-N  [{style.line_numbers.value}]\t: Line Numbers",
        f"\t-P  [{style.page_numbers.value}]\t: Page Numbers",
    ]
    return "\n".join(lines)


def cmd_settings(args):
    config = config_from_args(args)
    print(format_settings(config, args.unit))


def cmd_validate(args):
    config = config_from_args(args)
    result = validate_config(config)
    for issue in result.issues:
        print(f"{issue.severity.upper()}: {issue.path}: {issue.message}")
    if not result.ok():
        sys.exit(1)
    print("Settings valid: no errors")


def cmd_fonts_list(args):
    print("\n📚 Standard 14 fonts (built into every PDF viewer):")
    for name in STANDARD_FONTS:
        marker = '  (monospaced)' if name in MONOSPACED_STANDARD_FONTS else ''
        print(f"   {name}{marker}")
    print("\n💡 Listings line up only with a monospaced body font.")


def cmd_fonts_metrics(args):
    metrics = read_font_metrics(args.font, font_number=args.font_number)
    print(f"Font: {metrics.path}")
    print(f"  family:        {metrics.family or '(unnamed)'}")
    print(f"  fixed pitch:   {'yes' if metrics.fixed_pitch else 'no'}")
    print(f"  units per em:  {metrics.units_per_em}")
    print(f"  advance width: {metrics.advance_width}")
    print(f"  char width:    {metrics.char_width_ratio:.4f} em")


def _add_settings_options(p):
    mode = p.add_argument_group('interpreter')
    mode.add_argument(
        '-A', dest='asa', type=int, choices=(0, 1), default=1,
        help='1 = ASA carriage control in column 1 (default), 0 = free-form text',
    )

    page = p.add_argument_group('printable page area')
    page.add_argument(
        '-u', '--unit', type=float, default=POINTS_PER_INCH,
        help='points per unit for -H/-W/-M (72 = inches, 1 = points)',
    )
    page.add_argument('-H', '--height', type=float, help=f"page height (default {DEFAULTS['PAGE_HEIGHT']})")
    page.add_argument('-W', '--width', type=float, help=f"page width (default {DEFAULTS['PAGE_WIDTH']})")
    page.add_argument(
        '-M', '--margin', action='append', metavar='<T|B|L|R|A><n>',
        help='margin, e.g. -MT0.5 -ML0.75 or -MA0.5 for all four (repeatable)',
    )
    page.add_argument('-l', '--lines-per-page', type=float, help='lines per page (default 60)')

    shading = p.add_argument_group('shading and color')
    shading.add_argument('-g', '--bar-color', metavar='RRGGBB', help='color of shaded bars')
    shading.add_argument('-O', '--overstrike-color', metavar='RRGGBB', help='color of overstruck text')
    shading.add_argument(
        '-n', '--line-number-color', metavar='RRGGBB',
        help='color of line numbers (turns on per-page line numbers)',
    )
    shading.add_argument('-t', '--title-color', metavar='RRGGBB', help='color of margin titles')
    shading.add_argument('-i', '--shade-step', type=int, help='lines per shade band (default 2)')
    shading.add_argument('-d', '--dash', metavar='PATTERN', help="dash pattern for ruled bands, e.g. '2 4 1'")

    labels = p.add_argument_group('margin labels')
    labels.add_argument('-L', '--left-title', help='top left page label')
    labels.add_argument('-R', '--right-title', help='top right page label')
    labels.add_argument('-T', '--banner', help='banner across the page top (default $IMPACT_TOP)')
    labels.add_argument(
        '-P', dest='page_numbers', action='store_const', const=PageNumberMode.TOP,
        help='page numbers at top center',
    )
    labels.add_argument(
        '-p', dest='page_numbers', action='store_const', const=PageNumberMode.BOTTOM,
        help='page numbers at bottom center',
    )

    text = p.add_argument_group('text options')
    text.add_argument(
        '-N', '--line-numbers', type=int, choices=(0, 1),
        help='line numbers: 0 = running through the document, 1 = restart per page',
    )
    text.add_argument('-1', '--body-font', help='Standard 14 body font (default Courier)')
    text.add_argument('-2', '--heading-font', help='Standard 14 heading font (default Courier-Bold)')
    text.add_argument('--title-size', type=float, help='title font size in points (default 12)')
    width = text.add_mutually_exclusive_group()
    width.add_argument(
        '--char-width', type=float, metavar='EM',
        help='title character width as a fraction of font size (default 0.60)',
    )
    width.add_argument(
        '--char-width-from', metavar='FONTFILE',
        help='read the title character width from a TrueType/OpenType font',
    )


def build_parser():
    p = argparse.ArgumentParser(
        prog='asapdf',
        description='Convert text with ASA carriage control (or plain text) to PDF.',
        epilog=(
            'environment: IMPACT_GRAYBAR sets the default bar color, '
            'IMPACT_TOP the default banner.'
        ),
    )
    p.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    p.add_argument('-v', '--verbose', action='store_true', help='log progress to stderr')
    sub = p.add_subparsers(dest='command', required=True)

    conv = sub.add_parser('convert', help='text -> pdf')
    conv.add_argument('input', nargs='?', default=STDIO_PATH, help="input text file ('-' = stdin)")
    conv.add_argument('-o', '--output', default=STDIO_PATH, help="output PDF ('-' = stdout)")
    _add_settings_options(conv)
    conv.set_defaults(func=cmd_convert)

    sett = sub.add_parser('settings', help='show effective settings')
    _add_settings_options(sett)
    sett.set_defaults(func=cmd_settings)

    val = sub.add_parser('validate', help='validate settings')
    _add_settings_options(val)
    val.set_defaults(func=cmd_validate)

    fonts = sub.add_parser('fonts', help='font helpers')
    fonts_sub = fonts.add_subparsers(dest='fonts_command', required=True, title='font commands')

    flist = fonts_sub.add_parser('list', help='list the Standard 14 fonts')
    flist.set_defaults(func=cmd_fonts_list)

    fmetrics = fonts_sub.add_parser('metrics', help='fixed-pitch metrics of a font file')
    fmetrics.add_argument('font', help='TrueType/OpenType font file')
    fmetrics.add_argument(
        '--font-number', type=int, default=0, help='member index inside a .ttc/.otc collection'
    )
    fmetrics.set_defaults(func=cmd_fonts_metrics)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING, format="%(message)s"
    )
    with warnings.catch_warnings():
        warnings.simplefilter('always', UserWarning)
        warnings.showwarning = _print_warning
        try:
            args.func(args)
        except AsapdfError as e:
            print(f"(error) {e}", file=sys.stderr)
            sys.exit(1)
        except OSError as e:
            name = e.filename or getattr(args, 'input', STDIO_PATH)
            print(f"(error) {name}: {e.strerror or e}", file=sys.stderr)
            sys.exit(1)


if __name__ == '__main__':
    main()
