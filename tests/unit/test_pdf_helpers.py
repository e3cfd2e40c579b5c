#!/usr/bin/env python3
import os
import sys
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))

from asapdf.utils.pdf_helpers import (  # noqa: E402
    escape_pdf_text,
    fmt_f,
    fmt_g,
    pdf_literal,
    shift_extended,
)


class TestPdfHelpers(unittest.TestCase):
    def test_escape_parentheses(self):
        self.assertEqual(escape_pdf_text('(test)'), '\\(test\\)')

    def test_escape_backslash(self):
        self.assertEqual(escape_pdf_text('a\\b'), 'a\\\\b')

    def test_escape_leaves_other_bytes(self):
        self.assertEqual(escape_pdf_text('tab\there\x01'), 'tab\there\x01')
        self.assertEqual(escape_pdf_text(''), '')

    def test_literal_wraps(self):
        self.assertEqual(pdf_literal('(test)'), '(\\(test\\))')

    def test_shift_extended_seven_bit(self):
        self.assertEqual(shift_extended('A'), chr(65 + 127))
        # 7-bit input shifted never needs escaping, even for reserved chars
        self.assertEqual(shift_extended('('), chr(40 + 127))

    def test_shift_extended_wraps_and_escapes(self):
        # 169 + 127 = 296 -> 40 = '('
        self.assertEqual(shift_extended(chr(169)), '\\(')
        self.assertEqual(shift_extended(chr(129)), chr(0))

    def test_literal_extended(self):
        self.assertEqual(pdf_literal('A', extended=True), '(' + chr(192) + ')')

    def test_number_formats(self):
        self.assertEqual(fmt_f(1), '1.000000')
        self.assertEqual(fmt_f(53.1), '53.100000')
        self.assertEqual(fmt_g(9.0), '9')
        self.assertEqual(fmt_g(4.5), '4.5')
        self.assertEqual(fmt_g(792), '792')


if __name__ == '__main__':
    unittest.main()
