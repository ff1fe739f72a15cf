"""
Twig leaf context: what a handler sees once the walk reaches it.

A Context bundles the resolved leaf command, the commands walked to reach it,
the remaining tokens, the per-run value store, the global flags and the version
string. Handlers read flag values through its typed accessors:

- singular: get_string, get_int, get_bool, get_duration
- plural: get_strings, get_ints, get_bools, get_durations

Fallback rules
- nothing recorded: the declared default (a one-element list for plurals); with
  no default, a required flag fails with MissingValueError; an optional one
  yields the kind's zero value (an empty list for plurals).
- one value recorded: returned as-is (as a one-element list for plurals).
- more than one value recorded: singular accessors fail with MultipleValuesError
  even for flags declared with repeats=True; plural accessors return a copy of
  every value in command-line order.
"""
from .faults import *
from .flags import Kind
from .utils import *


class Context:
    """
    Resolved command context handed to a leaf handler.
    """

    def __init__(self, command, tokens, values, /, *, path=(), globals=(), version=Unset):
        self._command = command
        self._tokens = tokens
        self._values = values
        self._path = tuple(path) or (command,)
        self._globals = tuple(globals)
        self._version = version

    @property
    def command(self):
        return self._command

    @property
    def name(self):
        return self._command.name

    @property
    def path(self):
        """
        Commands walked from the root to this leaf, root first.
        """
        return self._path

    @property
    def version(self):
        return coalesce(self._version)

    @property
    def arguments(self):
        """
        Tokens left after the leaf's flags, in command-line order.
        """
        return self._tokens.remaining()

    def _resolve(self, name, kind):
        # nearest declaration wins: leaf, then its ancestors, then globals
        for command in reversed(self._path):
            if command.flags.contains(name):
                flag = command.flags.get(name)
                break
        else:
            for flag in self._globals:
                if flag.matches(name):
                    break
            else:
                raise UndefinedFlagError('flag "%s" is not defined' % name, name=name)

        if flag.kind is not kind:
            raise FlagKindError(
                'flag "%s" is not a %s flag' % (flag.identity, kind.noun),
                identity=flag.identity,
                kind=kind,
            )
        return flag

    def _one(self, name, kind):
        flag = self._resolve(name, kind)
        match self._values.get(flag.identity):
            case []:
                if flag.default is not Unset:
                    return flag.default
                if flag.required:
                    raise MissingValueError(
                        'no value for %s flag "%s"' % (kind.noun, flag.identity),
                        identity=flag.identity,
                    )
                return kind.zero
            case [value]:
                return value
            case _:
                raise MultipleValuesError(
                    'multiple values set for %s flag "%s"' % (kind.noun, flag.identity),
                    identity=flag.identity,
                )

    def _many(self, name, kind):
        flag = self._resolve(name, kind)
        if values := self._values.get(flag.identity):
            return values
        if flag.default is not Unset:
            return [flag.default]
        if flag.required:
            raise MissingValueError(
                'no value for %s flag "%s"' % (kind.noun, flag.identity),
                identity=flag.identity,
            )
        return []

    def get_string(self, name, /):
        return self._one(name, Kind.STRING)

    def get_strings(self, name, /):
        return self._many(name, Kind.STRING)

    def get_int(self, name, /):
        return self._one(name, Kind.INT)

    def get_ints(self, name, /):
        return self._many(name, Kind.INT)

    def get_bool(self, name, /):
        return self._one(name, Kind.BOOL)

    def get_bools(self, name, /):
        return self._many(name, Kind.BOOL)

    def get_duration(self, name, /):
        return self._one(name, Kind.DURATION)

    def get_durations(self, name, /):
        return self._many(name, Kind.DURATION)

    def __repr__(self):
        return "context(command=%r, arguments=%r)" % (self.name, self.arguments)


__all__ = (
    "Context",
)
