"""
Twig faults (errors) and rendering.

Scope
- Code: process-level result codes returned by invoke() (0 success, 1 failure).
- FaultCode: canonical, stable numeric identifiers for every fault the parser
  can raise. Codes are grouped by domain so logs and searches stay predictable.
- CommandException: base type that carries a message plus read-only options and
  knows how to render itself as a single "twig: ..." line.
- CommandExit: an exception group bundling declaration faults found by the
  validator; it renders one line per fault.

Propagation
- Faults are raised at the point of detection and travel up the recursive walk
  untouched. invoke() is the only place that catches them; it renders the fault
  once to the configured output and turns it into Code.FAILURE.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset

PREFIX = "twig"


class Code(IntEnum):
    """
    result codes handed back to the process-level caller.
    """
    SUCCESS = 0
    FAILURE = 1


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - declarations (101xx): problems in how the command tree was declared.
      • LONG_FLAG_NAME, SHORT_FLAG_NAME, MISSING_COMMAND_NAME, COMMAND_NAME,
        MISSING_HANDLER
    - routing (102xx): names on the command line that resolve to nothing.
      • UNDEFINED_FLAG, UNDEFINED_COMMAND
    - values (103xx): flag values that are absent, malformed or ambiguous.
      • MISSING_VALUE, UNCONVERTIBLE_VALUE, MULTIPLE_VALUES, FLAG_KIND
    """
    # --- declaration errors (101xx) ---
    LONG_FLAG_NAME       = 10101
    SHORT_FLAG_NAME      = 10102
    MISSING_COMMAND_NAME = 10103
    COMMAND_NAME         = 10104
    MISSING_HANDLER      = 10105

    # --- routing errors (102xx) ---
    UNDEFINED_FLAG       = 10201
    UNDEFINED_COMMAND    = 10202

    # --- value errors (103xx) ---
    MISSING_VALUE        = 10301
    UNCONVERTIBLE_VALUE  = 10302
    MULTIPLE_VALUES      = 10303
    FLAG_KIND            = 10304


def _styler(colorful):
    """
    build a style lookup honoring the colorful switch and __main__.__styles__.
    """
    styles = defaultdict(str, {
        "prefix": "bold #FF4DA6",  # friendly pinky program prefix
        "error-message": "#C8C8D0",  # soft light gray message
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


class CommandException(Exception):
    """
    base class for every fault raised while parsing or dispatching.

    attributes
    - message: the human-readable, lowercased sentence (without the prefix).
    - options: read-only mapping of context (code, identity, input, ...).
    - code: the FaultCode of the concrete subclass.
    """
    code = Unset

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return "%s: %s" % (PREFIX, self.message)

    def render(self, *, colorful=False):
        styler = _styler(colorful)
        return Text.assemble(
            (PREFIX, styler("prefix")),
            ": ",
            (self.message, styler("error-message")),
        )


class DeclarationError(CommandException): ...
class LongFlagNameError(DeclarationError): code = FaultCode.LONG_FLAG_NAME
class ShortFlagNameError(DeclarationError): code = FaultCode.SHORT_FLAG_NAME
class MissingCommandNameError(DeclarationError): code = FaultCode.MISSING_COMMAND_NAME
class CommandNameError(DeclarationError): code = FaultCode.COMMAND_NAME
class MissingHandlerError(DeclarationError): code = FaultCode.MISSING_HANDLER
class UndefinedFlagError(CommandException): code = FaultCode.UNDEFINED_FLAG
class UndefinedCommandError(CommandException): code = FaultCode.UNDEFINED_COMMAND
class MissingValueError(CommandException): code = FaultCode.MISSING_VALUE
class UnconvertibleValueError(CommandException): code = FaultCode.UNCONVERTIBLE_VALUE
class MultipleValuesError(CommandException): code = FaultCode.MULTIPLE_VALUES
class FlagKindError(CommandException): code = FaultCode.FLAG_KIND


class CommandExit(ExceptionGroup[CommandException]):
    """
    bundle of faults reported together (one rendered line per fault).
    """
    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad declarations", tuple(exceptions))

    def __init__(self, exceptions, **options):
        super().__init__("bad declarations", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __str__(self):
        return "\n".join(map(str, self.exceptions))

    def render(self, *, colorful=False):
        return Group(*(exception.render(colorful=colorful) for exception in self.exceptions))

    def derive(self, exceptions):
        return type(self)(exceptions, **self.options)


__all__ = (
    "Code",
    "FaultCode",
    "CommandException",
    "DeclarationError",
    "LongFlagNameError",
    "ShortFlagNameError",
    "MissingCommandNameError",
    "CommandNameError",
    "MissingHandlerError",
    "UndefinedFlagError",
    "UndefinedCommandError",
    "MissingValueError",
    "UnconvertibleValueError",
    "MultipleValuesError",
    "FlagKindError",
    "CommandExit",
)
