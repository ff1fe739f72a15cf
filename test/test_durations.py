"""
Duration literal tests.

Scope
- parse_duration(): single and compound units, fractions, signs, the bare "0".
- parse_duration(): malformed literals raise ValueError.
- format_duration(): compact rendering used by help defaults.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from datetime import timedelta
from unittest import TestCase

from twig.durations import format_duration, parse_duration


class TestParseDuration(TestCase):
    """Behavioral tests for parse_duration."""

    def testSingleUnits(self):
        self.assertEqual(parse_duration("2m"), timedelta(minutes=2))
        self.assertEqual(parse_duration("120s"), timedelta(seconds=120))
        self.assertEqual(parse_duration("300ms"), timedelta(milliseconds=300))
        self.assertEqual(parse_duration("7us"), timedelta(microseconds=7))
        self.assertEqual(parse_duration("7µs"), timedelta(microseconds=7))
        self.assertEqual(parse_duration("3h"), timedelta(hours=3))

    def testCompoundUnits(self):
        self.assertEqual(parse_duration("1m30s"), timedelta(seconds=90))
        self.assertEqual(parse_duration("1h30m"), timedelta(minutes=90))
        self.assertEqual(parse_duration("1h2m3s4ms"), timedelta(hours=1, minutes=2, seconds=3, milliseconds=4))

    def testFractions(self):
        self.assertEqual(parse_duration("1.5h"), timedelta(minutes=90))
        self.assertEqual(parse_duration(".5s"), timedelta(milliseconds=500))

    def testSigns(self):
        self.assertEqual(parse_duration("+5s"), timedelta(seconds=5))
        self.assertEqual(parse_duration("-1.5h"), -timedelta(minutes=90))

    def testBareZero(self):
        self.assertEqual(parse_duration("0"), timedelta(0))

    def testMalformedLiteralsRaise(self):
        for text in ("", "5", "1x", "h", "1.5.5s", "1m 30s", "soon", "--1s"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_duration(text)

    def testRangeLimits(self):
        self.assertEqual(parse_duration("9223372036854775807ns"), timedelta(microseconds=9223372036854776))
        self.assertEqual(parse_duration("-9223372036854775808ns"), -timedelta(microseconds=9223372036854776))
        self.assertEqual(parse_duration("2562047h"), timedelta(hours=2562047))

    def testOutOfRangeRaises(self):
        for text in ("9223372036854775808ns", "-9223372036854775809ns", "3000000h", "99999999999h"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_duration(text)

    def testOverlongNumberRaises(self):
        with self.assertRaises(ValueError):
            parse_duration("1" * 5000 + "s")

    def testNonStringRaises(self):
        with self.assertRaises(TypeError):
            parse_duration(5)


class TestFormatDuration(TestCase):
    """Behavioral tests for format_duration."""

    def testZero(self):
        self.assertEqual(format_duration(timedelta(0)), "0s")

    def testWholeUnits(self):
        self.assertEqual(format_duration(timedelta(minutes=2)), "2m0s")
        self.assertEqual(format_duration(timedelta(hours=2)), "2h0m0s")
        self.assertEqual(format_duration(timedelta(hours=1, minutes=30)), "1h30m0s")

    def testSubSecond(self):
        self.assertEqual(format_duration(timedelta(milliseconds=300)), "300ms")
        self.assertEqual(format_duration(timedelta(microseconds=1500)), "1.5ms")
        self.assertEqual(format_duration(timedelta(microseconds=12)), "12µs")

    def testFractionalSeconds(self):
        self.assertEqual(format_duration(timedelta(seconds=1.5)), "1.5s")

    def testNegative(self):
        self.assertEqual(format_duration(-timedelta(seconds=90)), "-1m30s")

    def testOutputParsesBack(self):
        delta = timedelta(hours=26, seconds=7, microseconds=250)
        self.assertEqual(parse_duration(format_duration(delta)), delta)


if __name__ == "__main__":
    unittest.main()
