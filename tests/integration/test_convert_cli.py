#!/usr/bin/env python3
import os
import pathlib
import subprocess
import sys
import tempfile
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
SRC_PATH = os.path.join(PROJECT_ROOT, 'src')
sys.path.insert(0, SRC_PATH)

from fontTools.fontBuilder import FontBuilder  # noqa: E402
from fontTools.pens.ttGlyphPen import TTGlyphPen  # noqa: E402


class TestConvertCLI(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = pathlib.Path(self.tmp.name)
        self.listing = self.dir / 'listing.txt'
        self.listing.write_bytes(b"1REPORT\n0 total (net)\n+ _____\n" + b" row\n" * 70)

    def tearDown(self):
        self.tmp.cleanup()

    def _run(self, args, expect_success=True, input_bytes=None, env_extra=None):
        cmd = [sys.executable, '-m', 'asapdf.cli'] + args
        env = os.environ.copy()
        env.pop('IMPACT_GRAYBAR', None)
        env.pop('IMPACT_TOP', None)
        env['PYTHONPATH'] = SRC_PATH + os.pathsep + env.get('PYTHONPATH', '')
        env.update(env_extra or {})
        res = subprocess.run(cmd, cwd=PROJECT_ROOT, env=env, capture_output=True, input=input_bytes)
        if expect_success and res.returncode != 0:
            self.fail(
                f"Command failed {cmd}\nSTDOUT:\n{res.stdout.decode()}\nSTDERR:\n{res.stderr.decode()}"
            )
        return res

    def test_convert_to_file(self):
        out = self.dir / 'out' / 'listing.pdf'
        res = self._run(['convert', str(self.listing), '-o', str(out)])
        self.assertIn(b'Built PDF', res.stdout)
        self.assertIn(b'pages=2', res.stdout)
        data = out.read_bytes()
        self.assertTrue(data.startswith(b'%PDF-1.4\n'))
        self.assertIn(b'T*( total \\(net\\))Tj', data)

    def test_convert_stdin_to_stdout(self):
        res = self._run(['convert'], input_bytes=b" hello\n")
        self.assertTrue(res.stdout.startswith(b'%PDF-1.4\n'))
        self.assertTrue(res.stdout.endswith(b'%%EOF\n'))
        self.assertIn(b'T*(hello)Tj', res.stdout)
        self.assertIn(b'Built PDF: stdout', res.stderr)

    def test_free_form_and_options(self):
        res = self._run(
            ['convert', '-A', '0', '-P', '-L', 'LEFT', '-N', '0', '-g', 'C0F0F0'],
            input_bytes=b"page one\fpage two\n",
        )
        pdf = res.stdout
        self.assertIn(b'/Count 2', pdf)
        self.assertIn(b'(Page 0002) Tj ET', pdf)
        self.assertIn(b'(LEFT) Tj ET', pdf)
        self.assertIn(b'(     2 | )Tj', pdf)
        self.assertIn(b'0.752941 0.941176 0.941176 rg', pdf)

    def test_environment_seeds_defaults(self):
        res = self._run(
            ['convert'],
            input_bytes=b" x\n",
            env_extra={'IMPACT_GRAYBAR': 'C0F0F0', 'IMPACT_TOP': 'CONFIDENTIAL'},
        )
        self.assertIn(b'(CONFIDENTIAL) Tj ET', res.stdout)
        self.assertIn(b'0.752941 0.941176 0.941176 rg', res.stdout)

    def test_unknown_control_warns(self):
        res = self._run(['convert'], input_bytes=b"?odd\n")
        self.assertIn(b"(warning) Unknown ASA Carriage Control Character '?'", res.stderr)
        self.assertIn(b'T*(odd)Tj', res.stdout)

    def test_missing_input(self):
        res = self._run(['convert', str(self.dir / 'missing.txt')], expect_success=False)
        self.assertEqual(res.returncode, 1)
        self.assertIn(b'(error)', res.stderr)

    def test_invalid_settings_rejected(self):
        res = self._run(['convert', str(self.listing), '-d', 'x y'], expect_success=False)
        self.assertEqual(res.returncode, 1)
        self.assertIn(b'ERROR: /style/dash_pattern', res.stderr)

    def test_bad_margin_is_error(self):
        res = self._run(['convert', str(self.listing), '-MZ1'], expect_success=False)
        self.assertEqual(res.returncode, 1)
        self.assertIn(b'(error) Unknown MARGIN Identifier', res.stderr)

    def test_validate_subcommand(self):
        res = self._run(['validate'])
        self.assertIn(b'Settings valid', res.stdout)
        res = self._run(['validate', '-1', 'Menlo'])
        self.assertIn(b'WARN: /style/body_font', res.stdout)
        res = self._run(['validate', '-MA5'], expect_success=False)
        self.assertEqual(res.returncode, 1)

    def test_settings_subcommand(self):
        res = self._run(['settings', '-O', 'FF0000'])
        self.assertIn(b'-l  60.000000', res.stdout)
        self.assertIn(b'(0xFF0000)', res.stdout)

    def test_fonts_list(self):
        res = self._run(['fonts', 'list'])
        self.assertIn(b'Courier-BoldOblique  (monospaced)', res.stdout)
        self.assertIn(b'ZapfDingbats', res.stdout)

    def test_fonts_metrics_and_char_width(self):
        font = self.dir / 'mono.ttf'
        fb = FontBuilder(2048, isTTF=True)
        fb.setupGlyphOrder(['.notdef', 'M'])
        fb.setupCharacterMap({ord('M'): 'M'})
        pen = TTGlyphPen(None)
        pen.moveTo((100, 0))
        pen.lineTo((100, 1400))
        pen.lineTo((1000, 1400))
        pen.closePath()
        fb.setupGlyf({'.notdef': TTGlyphPen(None).glyph(), 'M': pen.glyph()})
        fb.setupHorizontalMetrics({'.notdef': (1229, 0), 'M': (1229, 100)})
        fb.setupHorizontalHeader(ascent=1600, descent=-448)
        fb.setupNameTable({'familyName': 'Fixture Mono', 'styleName': 'Regular'})
        fb.setupOS2()
        fb.setupPost(isFixedPitch=1)
        fb.save(str(font))

        res = self._run(['fonts', 'metrics', str(font)])
        self.assertIn(b'Fixture Mono', res.stdout)
        self.assertIn(b'units per em:  2048', res.stdout)
        self.assertIn(b'char width:    0.6001 em', res.stdout)

        res = self._run(['-v', 'settings', '--char-width-from', str(font)])
        self.assertIn(b'0.600098\t: Title Character Width', res.stdout)
        self.assertIn(b'char width ratio 0.6001', res.stderr)

    def test_version(self):
        res = self._run(['--version'])
        self.assertIn(b'asapdf', res.stdout)


if __name__ == '__main__':
    unittest.main()
