"""
Twig command layer: declare command trees and run them.

What this module provides
- Command: a node of the command tree. Leaves own a handler; branches own
  children and dispatch by popping the next token as a child name.
- command(...): factory/decorator that builds a Command from a handler.
- invoke(root, prompt): validates the tree, walks the tokens down to a leaf,
  consumes flags on the way and either renders help or calls the handler.

Quick start
    from twig import Flag, Kind, command, invoke

    @command(flags=[Flag(Kind.STRING, "name", "n", required=True)])
    def hello(context):
        \"\"\"Greet someone.\"\"\"
        print("hello", context.get_string("name"))

    if __name__ == "__main__":
        raise SystemExit(invoke(hello, "-n carol"))

Walk (per command)
1. consume leading flag tokens against the command's flags plus the globals;
2. if "help" was set anywhere so far, render this command's help and succeed;
3. leaf: call the handler with a Context (None means success);
4. branch: with no tokens left render help and fail, otherwise pop a child
   name and walk that child with the same token stack and value store.

Faults raised anywhere in the walk (or by a handler's accessor calls) abort the
run; invoke() renders the fault once and returns Code.FAILURE.
"""
import contextlib
import inspect
import logging
import os.path
import re
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .context import Context
from .durations import parse_duration
from .faults import *
from .flags import HELP, Flag, Flags, Kind
from .help import render
from .store import Values
from .tokens import TokenStack
from .utils import *
from .validation import validate

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate command metadata in place.

    - handler: Unset or callable.
    - parent: Unset or Command.
    - name: string; defaults to the handler's __name__, else the program name.
    - help/descr: strings (descr defaults to the handler's docstring).
    - flags: iterable of Flag, stored as an immutable Flags registry.
    """
    if not isinstance(handler := metadata["handler"], UnsetType) and not callable(handler):
        raise TypeError(f"{cls.__typename__} handler must be callable")
    if not isinstance(metadata["parent"], Command | UnsetType):
        raise TypeError(f"{cls.__typename__} 'parent' must be a command")

    if metadata["name"] is Unset:
        metadata["name"] = getattr(handler, "__name__", os.path.basename(sys.argv[0]))
    if metadata["descr"] is Unset:
        metadata["descr"] = (inspect.getdoc(handler) or "") if handler else ""

    for key in ("name", "help", "descr"):
        if not isinstance(value := metadata[key], str | UnsetType):
            raise TypeError(f"{cls.__typename__} {key!r} must be a string")
        metadata[key] = coalesce(value, "").strip()

    if isinstance(flags := metadata["flags"], Flag):
        flags = (flags,)
    metadata["flags"] = Flags(flags)


def _attach_to_parent(self, parent):
    """
    Register this command under its parent, enforcing unique names.
    """
    if getattr(parent, "_children", {}).setdefault(name := self.name, self) is self:
        return

    typeof = "subcommand" if parent.parent else "command"
    raise ValueError(f"{type(self).__typename__} {typeof} name {name!r} is already in use")


class Command(metaclass=SpecType):
    """
    Node of a declarative command tree.

    Properties
    - name, help, descr, flags, children, parent, handler: read-only mirrors of
      the sanitized declaration (children is a fresh name -> command dict).
    - root, path, leaf: derived from the parent/children wiring.

    Notes
    - A command with children is a branch: its handler, if any, is never called.
    - A leaf without a handler is reported with MissingHandlerError when the walk
      reaches it.
    """

    __introspectable__ = (
        "name",
        "help",
        "descr",
        "flags",
        "children",
        "parent",
        "handler",
    )

    __displayable__ = (
        "name",
        "help",
        "flags",
    )

    def __init__(
            self,
            handler=Unset,
            /,
            parent=Unset,
            name=Unset,
            help=Unset,
            descr=Unset,
            flags=(),
    ):
        metadata = {
            "handler": handler,
            "parent": parent,
            "name": name,
            "help": help,
            "descr": descr,
            "flags": flags,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._children = {}
        _attach_to_parent(self, self._parent)

    @property
    def root(self):
        """
        Return the topmost command of this command's tree.
        """
        command = self
        while command.parent:
            command = command.parent
        return command

    @property
    def path(self):
        """
        Return the ancestry from the root to this command as a tuple.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    @property
    def leaf(self):
        return not self._children

    def command(self, handler=Unset, /, *args, **kwargs):
        """
        Create a child of this command (see command()); parent=self is injected.
        """
        return command(handler, self, *args, **kwargs)

    def _consume(self, flag, tokens, values):
        if flag.kind is Kind.BOOL:
            if tokens and tokens.peek() in ("true", "false"):
                value = tokens.pop() == "true"
            else:
                value = True
            values.append(flag.identity, value)
            return

        if not tokens or tokens.peek().startswith("-"):
            raise MissingValueError(
                'no value for %s flag "%s"' % (flag.kind.noun, flag.identity),
                identity=flag.identity,
            )
        token = tokens.pop()

        match flag.kind:
            case Kind.INT:
                try:
                    if not _INTEGER.fullmatch(token):
                        raise ValueError(token)
                    value = int(token)
                except ValueError:
                    raise UnconvertibleValueError(
                        'unable to convert value for flag "%s" to int "%s"' % (flag.identity, token),
                        identity=flag.identity,
                        input=token,
                    ) from None
            case Kind.DURATION:
                try:
                    value = parse_duration(token)
                except ValueError:
                    raise UnconvertibleValueError(
                        'unable to convert value for flag "%s" to duration "%s"' % (flag.identity, token),
                        identity=flag.identity,
                        input=token,
                    ) from None
            case _:
                value = token
        values.append(flag.identity, value)

    def _dispatch(self, tokens, values, /, *, globals, version, console, colorful):
        registry = self.flags.chain(globals)
        while tokens and tokens.peek().startswith("-"):
            flag = registry.get(tokens.pop_flag().lstrip("-"))
            self._consume(flag, tokens, values)
            logger.debug("command %r consumed flag %r", self.name, flag.identity)

        if any(value is True for value in values.get(HELP.identity)):
            logger.debug("help requested at command %r", self.name)
            _emit(console, render(self, version=version, globals=globals, colorful=colorful))
            return Code.SUCCESS

        if self.leaf:
            if not self.handler:
                raise MissingHandlerError(
                    'no handler for leaf command "%s"' % self.name,
                    name=self.name,
                )
            logger.debug("calling handler of command %r with %r", self.name, tokens)
            context = Context(self, tokens, values, path=self.path, globals=globals, version=version)
            result = self.handler(context)
            return Code.SUCCESS if result is None else result

        if not tokens:
            logger.debug("command %r needs a subcommand", self.name)
            _emit(console, render(self, version=version, globals=globals, colorful=colorful))
            return Code.FAILURE

        name = tokens.pop()
        try:
            child = self._children[name]
        except KeyError:
            raise UndefinedCommandError('subcommand "%s" is not defined' % name, name=name) from None
        logger.debug("command %r descends into %r", self.name, name)
        return child._dispatch(
            tokens,
            values,
            globals=globals,
            version=version,
            console=console,
            colorful=colorful,
        )


def command(handler=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator that builds one later.

    Invocation modes
    - Direct:            cmd = command(func, parent, name="x")
    - Bare decorator:    @command
    - Decorator:         @command(parent=root, flags=[...])

    All extra arguments are forwarded to Command.
    """
    @rename("command")
    def wrapper(handler, /):
        if not callable(handler):
            raise TypeError("@command() must be applied to a callable")
        return Command(handler, *args, **kwargs)

    return wrapper(handler) if handler is not Unset else wrapper


def _tokenize(prompt):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:].
    - str: shell-like string split with shlex.split.
    - Iterable[str]: items are kept verbatim.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("invoke() prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("invoke() prompt must be a string or an iterable of strings")


def _emit(console, renderable):
    # best effort: write errors are ignored
    with contextlib.suppress(OSError):
        console.print(renderable)


def invoke(root, prompt=Unset, /, *, globals=(), version=Unset, output=Unset, colorful=False):
    """
    Validate, parse and dispatch one run of the tree rooted at root.

    Parameters
    - root: the Command to start the walk from.
    - prompt: Unset (sys.argv[1:]), a shell-like string or an iterable of strings.
    - globals: flags visible at every depth; the built-in help/h flag is added
      unless a global with identity "help" is declared.
    - version: str | Unset; shown in help.
    - output: text stream for help and fault messages (default sys.stderr).
    - colorful: style help and faults with the palette.

    Returns
    - int: Code.SUCCESS, Code.FAILURE or whatever the leaf handler returned.

    Raises
    - TypeError: when root is not a Command or prompt has the wrong shape.
    - Any non-twig exception raised by the handler.
    """
    if not isinstance(root, Command):
        raise TypeError("invoke() first argument must be a command")
    if not isinstance(version, str | UnsetType):
        raise TypeError("invoke() 'version' must be a string")

    tokens = TokenStack(_tokenize(prompt))
    globals = Flags(globals)
    if not any(flag.identity == HELP.identity for flag in globals):
        globals = globals.chain([HELP])

    console = Console(
        file=coalesce(output, sys.stderr),
        soft_wrap=True,
        highlight=False,
        markup=False,
        emoji=False,
    )

    if faults := validate(root, globals=globals):
        logger.debug("refusing to run %r: %d declaration fault(s)", root.name, len(faults))
        _emit(console, CommandExit(faults).render(colorful=colorful))
        return Code.FAILURE

    try:
        return root._dispatch(
            tokens,
            Values(),
            globals=globals,
            version=version,
            console=console,
            colorful=colorful,
        )
    except CommandException as fault:
        logger.debug("run of %r aborted: %s", root.name, fault)
        _emit(console, fault.render(colorful=colorful))
        return Code.FAILURE


__all__ = (
    "Command",
    "command",
    "invoke",
)
