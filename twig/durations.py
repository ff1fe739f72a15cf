"""
Duration literals ("300ms", "2m", "1h30m", "-1.5h").

Grammar
- an optional sign, then one or more <number><unit> pairs with no separators;
- numbers are decimal, optionally with a fraction ("1.5h", ".5s");
- units: ns, us (µs, μs), ms, s, m, h;
- the bare literal "0" is accepted as a zero duration;
- the value must fit a signed 64-bit count of nanoseconds (about ±292 years).

Values are datetime.timedelta, so anything finer than a microsecond is rounded
to the nearest microsecond.
"""
import re
from datetime import timedelta
from fractions import Fraction

# nanoseconds per unit
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

_PAIR = r"([0-9]+(?:\.[0-9]*)?|\.[0-9]+)(ns|us|µs|μs|ms|s|m|h)"
_LITERAL = re.compile(r"([-+]?)((?:%s)+)" % _PAIR)

# range of a signed 64-bit nanosecond count
_MAXIMUM = 2 ** 63 - 1
_MINIMUM = -2 ** 63


def parse_duration(text, /):
    """
    Parse a duration literal into a timedelta.

    Raises
    - TypeError: when text is not a string.
    - ValueError: when text does not follow the grammar above, or when the value
      falls outside a signed 64-bit count of nanoseconds (about 292 years).
    """
    if not isinstance(text, str):
        raise TypeError("parse_duration() argument must be a string")
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    if not (match := _LITERAL.fullmatch(text)):
        raise ValueError("invalid duration %r" % text)

    nanoseconds = Fraction(0)
    try:
        for number, unit in re.findall(_PAIR, match[2]):
            nanoseconds += Fraction(number) * _UNITS[unit]
    except ValueError:
        raise ValueError("invalid duration %r" % text) from None
    if match[1] == "-":
        nanoseconds = -nanoseconds
    if not _MINIMUM <= nanoseconds <= _MAXIMUM:
        raise ValueError("duration %r out of range" % text)
    return timedelta(microseconds=round(nanoseconds / 1_000))


def format_duration(delta, /):
    """
    Render a timedelta in the compact literal form: "2m0s", "1h30m0s", "1.5s", "0s".

    Durations under one second use the largest fitting sub-second unit ("300ms",
    "12µs"); the output always parses back to the same value.
    """
    if not isinstance(delta, timedelta):
        raise TypeError("format_duration() argument must be a timedelta")

    microseconds = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    sign = "-" if microseconds < 0 else ""
    microseconds = abs(microseconds)

    if not microseconds:
        return "0s"
    if microseconds < 1_000:
        return "%s%dµs" % (sign, microseconds)
    if microseconds < 1_000_000:
        return "%s%sms" % (sign, _decimal(microseconds, 1_000))

    hours, microseconds = divmod(microseconds, 3_600_000_000)
    minutes, microseconds = divmod(microseconds, 60_000_000)
    text = sign
    if hours:
        text += "%dh" % hours
    if hours or minutes:
        text += "%dm" % minutes
    return text + "%ss" % _decimal(microseconds, 1_000_000)


def _decimal(value, scale):
    whole, fraction = divmod(value, scale)
    if not fraction:
        return str(whole)
    digits = str(fraction).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return "%d.%s" % (whole, digits)


__all__ = (
    "parse_duration",
    "format_duration",
)
