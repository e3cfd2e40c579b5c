#!/usr/bin/env python3
import io
import os
import sys
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))

from asapdf.colors import RGB  # noqa: E402
from asapdf.config import Config, LayoutConfig, StyleConfig  # noqa: E402
from asapdf.errors import ConfigError  # noqa: E402
from asapdf.pdf import build_document  # noqa: E402
from asapdf.validation import validate_config  # noqa: E402


def check(layout=None, **style):
    return validate_config(Config(layout=layout or LayoutConfig(), style=StyleConfig(**style)))


def messages(result):
    return ' | '.join(f"{i.path}: {i.message}" for i in result.issues)


class TestValidation(unittest.TestCase):
    def test_defaults_are_clean(self):
        result = check()
        self.assertTrue(result.ok())
        self.assertEqual(result.issues, [])

    def test_page_geometry(self):
        result = check(LayoutConfig(page_width=0))
        self.assertFalse(result.ok())
        self.assertIn('/layout/page_width', messages(result))

        result = check(LayoutConfig(lines_per_page=0))
        self.assertIn('/layout/lines_per_page', messages(result))

        result = check(LayoutConfig(margin_top=400, margin_bottom=400))
        self.assertIn('no printable height', messages(result))

        result = check(LayoutConfig(margin_left=500, margin_right=500))
        self.assertIn('no printable width', messages(result))

        result = check(LayoutConfig(margin_left=-1))
        self.assertIn('Margin must be >= 0', messages(result))

    def test_color_range(self):
        result = check(bar_color=RGB(1.5, 0.0, 0.0))
        self.assertIn('/style/bar_color', messages(result))
        self.assertFalse(result.ok())

    def test_shade_step(self):
        self.assertIn('Shade step', messages(check(shade_step=0)))

    def test_dash_pattern(self):
        self.assertTrue(check(dash_pattern='2 4 1').ok())
        self.assertTrue(check(dash_pattern='  ').ok())
        self.assertIn('non-negative numbers', messages(check(dash_pattern='a b')))
        self.assertIn('cannot all be zero', messages(check(dash_pattern='0 0')))
        self.assertIn('longer than 255', messages(check(dash_pattern='1 ' * 200)))

    def test_font_names(self):
        result = check(body_font='Bad Name')
        self.assertFalse(result.ok())
        self.assertIn('not a valid PDF font name', messages(result))

        for font in ('Cour€ier', 'Courié', 'Cour\x7fier'):
            result = check(heading_font=font)
            self.assertFalse(result.ok(), font)
            self.assertIn('/style/heading_font', messages(result))

        result = check(body_font='Menlo')
        self.assertTrue(result.ok())
        self.assertEqual(result.issues[0].severity, 'warn')
        self.assertIn('Standard 14', result.issues[0].message)

    def test_labels(self):
        self.assertIn('Label longer than 255', messages(check(banner='x' * 256)))
        self.assertTrue(check(banner='x' * 255).ok())
        self.assertIn('latin-1', messages(check(title_left='snow ☃')))

    def test_wide_titles_warn(self):
        result = check(title_left='L' * 60, title_right='R' * 60)
        self.assertTrue(result.ok())
        self.assertIn('wider than the printable area', messages(result))

    def test_title_metrics(self):
        self.assertFalse(check(title_font_size=0).ok())
        self.assertFalse(check(char_width_ratio=-0.5).ok())

    def test_errors_lists_only_errors(self):
        result = check(body_font='Menlo', shade_step=0)
        self.assertEqual(len(result.errors()), 1)
        self.assertEqual(result.errors()[0].path, '/style/shade_step')

    def test_build_refuses_invalid_settings(self):
        out = io.BytesIO()
        with self.assertRaises(ConfigError) as cm:
            build_document([' x'], Config(style=StyleConfig(shade_step=0)), out)
        self.assertIn('/style/shade_step', str(cm.exception))
        self.assertEqual(out.getvalue(), b'')

    def test_build_refuses_non_ascii_font(self):
        out = io.BytesIO()
        with self.assertRaises(ConfigError) as cm:
            build_document([' x'], Config(style=StyleConfig(body_font='Cour€ier')), out)
        self.assertIn('/style/body_font', str(cm.exception))
        self.assertEqual(out.getvalue(), b'')


if __name__ == '__main__':
    unittest.main()
