#!/usr/bin/env python3
"""Unit tests for CLI option handling (no subprocess)."""

import os
import sys
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))

from asapdf import colors  # noqa: E402
from asapdf.cli import build_parser, config_from_args, format_settings  # noqa: E402
from asapdf.config import LineNumberMode, PageNumberMode  # noqa: E402
from asapdf.errors import ConfigError  # noqa: E402


def configure(*argv, environ=None):
    args = build_parser().parse_args(['settings', *argv])
    return config_from_args(args, environ={} if environ is None else environ)


class TestConfigFromArgs(unittest.TestCase):
    def test_defaults(self):
        config = configure()
        self.assertTrue(config.asa)
        self.assertEqual(config.layout.page_width, 792.0)
        self.assertEqual(config.style.line_numbers, LineNumberMode.OFF)
        self.assertEqual(config.style.page_numbers, PageNumberMode.OFF)

    def test_free_form(self):
        self.assertFalse(configure('-A', '0').asa)

    def test_units_apply_to_sizes(self):
        config = configure('-u', '1', '-W', '612', '-H', '792')
        self.assertEqual(config.layout.page_width, 612.0)
        self.assertEqual(config.layout.page_height, 792.0)
        # margins not given keep their point defaults
        self.assertEqual(config.layout.margin_left, 54.0)

    def test_margins_repeat(self):
        config = configure('-MA0.25', '-MT1')
        self.assertEqual(config.layout.margin_top, 72.0)
        self.assertEqual(config.layout.margin_bottom, 18.0)
        self.assertEqual(config.layout.margin_left, 18.0)

    def test_bad_margin(self):
        with self.assertRaises(ConfigError):
            configure('-MQ1')

    def test_colors(self):
        config = configure('-g', 'C0F0F0', '-O', 'FF0000', '-t', '#0000FF')
        self.assertEqual(config.style.bar_color, colors.color_from_int(0xC0F0F0))
        self.assertEqual(config.style.overstrike_color, colors.RED)
        self.assertEqual(config.style.title_color, colors.BLUE)

    def test_bad_color(self):
        with self.assertRaises(ConfigError) as cm:
            configure('-g', 'chartreuse')
        self.assertIn('-g', str(cm.exception))

    def test_line_number_switches(self):
        config = configure('-n', '00FF00')
        self.assertEqual(config.style.line_numbers, LineNumberMode.PER_PAGE)
        self.assertEqual(config.style.line_number_color, colors.GREEN)
        self.assertEqual(configure('-N', '0').style.line_numbers, LineNumberMode.RUNNING)
        self.assertEqual(configure('-N', '1').style.line_numbers, LineNumberMode.PER_PAGE)

    def test_page_number_switches(self):
        self.assertEqual(configure('-P').style.page_numbers, PageNumberMode.TOP)
        self.assertEqual(configure('-p').style.page_numbers, PageNumberMode.BOTTOM)

    def test_shade_step_reset(self):
        with self.assertWarns(UserWarning):
            config = configure('-i', '0')
        self.assertEqual(config.style.shade_step, 1)

    def test_fonts_and_labels(self):
        config = configure(
            '-1', 'Courier-Oblique', '-2', 'Helvetica-Bold',
            '-L', 'left', '-R', 'right', '-d', '2 4',
        )
        self.assertEqual(config.style.body_font, 'Courier-Oblique')
        self.assertEqual(config.style.heading_font, 'Helvetica-Bold')
        self.assertEqual(config.style.title_left, 'left')
        self.assertEqual(config.style.title_right, 'right')
        self.assertEqual(config.style.dash_pattern, '2 4')

    def test_environment_then_options(self):
        env = {'IMPACT_GRAYBAR': 'C0F0F0', 'IMPACT_TOP': 'CONFIDENTIAL'}
        config = configure(environ=env)
        self.assertEqual(config.style.banner, 'CONFIDENTIAL')
        self.assertEqual(config.style.bar_color, colors.color_from_int(0xC0F0F0))
        config = configure('-T', 'PUBLIC', '-g', 'C0C0C0', environ=env)
        self.assertEqual(config.style.banner, 'PUBLIC')
        self.assertEqual(config.style.bar_color, colors.GREYBAR)

    def test_char_width(self):
        self.assertAlmostEqual(configure('--char-width', '0.5').style.char_width_ratio, 0.5)


class TestFormatSettings(unittest.TestCase):
    def test_lists_every_switch(self):
        text = format_settings(configure('-L', 'LEFT'))
        for fragment in (
            '-A  [flag=1]',
            '-l  60.000000',
            '-MT 0.500000',
            '-ML 0.750000',
            '-W  11.000000',
            '-H  8.500000',
            '(0xC0C0C0)',
            '(0xFF3300)',
            '-i  2',
            '-1  [Courier]',
            '-2  [Courier-Bold]',
            '-L  [LEFT]',
        ):
            self.assertIn(fragment, text)

    def test_in_points(self):
        text = format_settings(configure('-u', '1'), unit=1.0)
        self.assertIn('-W  792.000000', text)


if __name__ == '__main__':
    unittest.main()
