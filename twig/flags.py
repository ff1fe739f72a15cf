r"""
Twig flag specifications and the per-command flag registry.

Overview
- Kind: the value kinds a flag can carry (string, int, bool, duration). Each kind
  knows its Python type, its zero value, the noun used in fault messages and the
  type name shown in help.
- Flag: an immutable declaration with a long and/or short name, a kind, the
  required/repeats switches, an optional typed default and help text.
- Flags: an ordered, immutable registry with name resolution. A one-character
  query matches short names only; a longer query matches long names only.
- HELP: the built-in global "help"/"h" boolean flag.

Validation highlights
- At least one of long/short must be given (TypeError at declaration).
- A default must already be of the kind's type; bool is not accepted for int
  kinds and vice versa (TypeError at declaration).
- Name lengths (long > 1, short == 1) are not checked here: the validator reports
  them at run time, one line per violation, before any handler runs.

Quick example:
    >>> from twig.flags import Flag, Flags, Kind
    >>> name = Flag(Kind.STRING, "name", "n", required=True, help="who to greet")
    >>> Flags([name]).get("n").identity
    'name'
"""
from collections.abc import Iterable, Sequence
from datetime import timedelta
from enum import Enum

from .faults import UndefinedFlagError
from .utils import *


class Kind(Enum):
    """
    value kinds a flag can carry.

    each member is (noun, typename, type, zero):
    - noun: word used in fault messages ("no value for int flag ...").
    - typename: word used in help output ("integer").
    - type: python type of recorded values.
    - zero: value returned by singular accessors for optional, unset flags.
    """
    STRING = ("string", "string", str, "")
    INT = ("int", "integer", int, 0)
    BOOL = ("boolean", "boolean", bool, False)
    DURATION = ("duration", "duration", timedelta, timedelta(0))

    def __init__(self, noun, typename, type, zero):
        self.noun = noun
        self.typename = typename
        self.type = type
        self.zero = zero

    def accepts(self, value, /):
        """
        Whether value is an instance of this kind (bools are not ints here).
        """
        if self is Kind.INT and isinstance(value, bool):
            return False
        return isinstance(value, self.type)

    def __repr__(self):
        return "<%s.%s>" % (type(self).__name__, self.name)


def _sanitize_name(cls, metadata, key, /):
    if not isinstance(name := metadata[key], str | UnsetType):
        raise TypeError(f"{cls.__typename__} '{key}' must be a string")
    metadata[key] = coalesce(name, "")


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate flag metadata in place.

    - kind: must be a Kind member.
    - long/short: strings (Unset becomes ""); at least one must be non-empty.
    - default: Unset or an instance of the kind's type.
    - help: Unset or string (trimmed; Unset becomes "").
    """
    if not isinstance(kind := metadata["kind"], Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a flag kind")

    _sanitize_name(cls, metadata, "long")
    _sanitize_name(cls, metadata, "short")
    if not metadata["long"] and not metadata["short"]:
        raise TypeError(f"{cls.__typename__} must specify a long or a short name")

    if (default := metadata["default"]) is not Unset and not kind.accepts(default):
        raise TypeError(
            f"{cls.__typename__} 'default' must be {kind.type.__name__} for {kind.noun} flags, "
            f"not {type(default).__name__}"
        )

    if not isinstance(help := metadata["help"], str | UnsetType):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    metadata["help"] = coalesce(help, "").strip()


class Flag(metaclass=SpecType):
    """
    Declarative flag specification.

    Properties
    - kind, long, short, required, repeats, default, help: read-only mirrors of
      the sanitized declaration (default stays Unset when none was given).
    - identity: canonical store key, the long name when present, else the short one.
    """

    __introspectable__ = (
        "kind",
        "long",
        "short",
        "required",
        "repeats",
        "default",
        "help",
    )

    def __init__(
            self,
            kind,
            long=Unset,
            short=Unset,
            /,
            *,
            required=False,
            repeats=False,
            default=Unset,
            help=Unset,
    ):
        metadata = {
            "kind": kind,
            "long": long,
            "short": short,
            "required": bool(required),
            "repeats": bool(repeats),
            "default": default,
            "help": help,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def identity(self):
        return self._long or self._short

    def matches(self, name, /):
        """
        Name rule: one character selects the short name, anything longer the long name.
        """
        if not name:
            return False
        if len(name) == 1:
            return self._short == name
        return self._long == name

    def syntax(self):
        """
        Command-line spelling used in help: "--long/-s", "--long" or "-s".
        """
        if self._long and self._short:
            return "--%s/-%s" % (self._long, self._short)
        if self._long:
            return "--" + self._long
        return "-" + self._short


class Flags(Sequence):
    """
    Ordered, immutable registry of flags with name resolution.
    """

    __slots__ = ("_flags",)

    def __init__(self, flags=(), /):
        if not isinstance(flags, Iterable):
            raise TypeError("flags must be an iterable of flags")
        flags = tuple(flags)
        for flag in flags:
            if not isinstance(flag, Flag):
                raise TypeError("flags must only contain flags, not %s" % type(flag).__name__)
        self._flags = flags

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(self._flags[index])
        return self._flags[index]

    def __len__(self):
        return len(self._flags)

    def __contains__(self, name):
        if isinstance(name, Flag):
            return name in self._flags
        return self.contains(name)

    def __eq__(self, other):
        if not isinstance(other, Flags):
            return NotImplemented
        return self._flags == other._flags

    def __hash__(self):
        return hash(self._flags)

    def __repr__(self):
        return "flags(%s)" % ", ".join(map(repr, self._flags))

    def contains(self, name, /):
        return any(flag.matches(name) for flag in self._flags)

    def get(self, name, /):
        """
        Return the flag matching name or raise UndefinedFlagError.
        """
        for flag in self._flags:
            if flag.matches(name):
                return flag
        raise UndefinedFlagError('flag "%s" is not defined' % name, name=name)

    def chain(self, others, /):
        """
        Return a new registry with others appended (self is left untouched).
        """
        return type(self)((*self._flags, *others))


HELP = Flag(Kind.BOOL, "help", "h", help="print help message")


__all__ = (
    "Kind",
    "Flag",
    "Flags",
    "HELP",
)
