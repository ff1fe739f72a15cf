"""
Twig help renderer.

render() is a pure function of a command (plus the run's version string and
global flags) to a rich Text. Layout:

    NAME:
      <name> - <help>

    USAGE:
      <path>  [global options] [command [command options]] [arguments...]

    VERSION:        (only with a version)
    DESCRIPTION:    (only with a description; trimmed, split on newlines only)
    COMMANDS:       (children, names padded to the widest one)
    OPTIONS:        (declared flags: syntax, right-aligned type name, help)
    GLOBALS:        (global flags, same format)

Palette keys
- section-label, program-name, program-help, usage, version, description
- command-name, command-help, flag-syntax, flag-type, flag-help, flag-default

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, no style is applied at all.
"""
from collections import defaultdict

from rich.text import Text

from .durations import format_duration
from .flags import Kind
from .utils import *

TAB = "  "

USAGE = "[global options] [command [command options]] [arguments...]"


def _styler(colorful):
    styles = defaultdict(str, {
        # === Head sections ===
        "section-label": "bold #FFFFFF",  # Pure white headers
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "program-help": "#9CA3AF",  # Muted gray
        "usage": "bold #36C5F0",  # SKY-BLUE
        "version": "bold #22C55E",  # GREEN
        "description": "italic #A3A3A3",  # Neutral gray

        # === Tables ===
        "command-name": "bold #36C5F0",
        "command-help": "#9CA3AF",
        "flag-syntax": "bold #00E6FF",  # CYAN for flags
        "flag-type": "bold #FFD600",  # AMBER for type names
        "flag-help": "#9CA3AF",
        "flag-default": "#737373",  # Dim gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _pad_right(width, text):
    return text + " " * (width + 1 - len(text))


def _pad_left(width, text):
    return " " * (width + 1 - len(text)) + text + " "


def _default(flag):
    match flag.kind:
        case Kind.STRING:
            return '"%s"' % flag.default
        case Kind.BOOL:
            return "true" if flag.default else "false"
        case Kind.DURATION:
            return format_duration(flag.default)
        case _:
            return str(flag.default)


def _commands(text, children, styler):
    width = max(map(len, children), default=0)
    for name, child in children.items():
        text.append(TAB)
        text.append(_pad_right(width, name), styler("command-name"))
        text.append("- ")
        text.append(child.help, styler("command-help"))
        text.append("\n")


def _flags(text, flags, styler):
    rows = [(flag.syntax(), flag.kind.typename, flag) for flag in flags]
    syntax = max((len(row[0]) for row in rows), default=0)
    typename = max((len(row[1]) for row in rows), default=0)
    for left, middle, flag in rows:
        text.append(TAB)
        text.append(_pad_right(syntax, left), styler("flag-syntax"))
        text.append(_pad_left(typename, middle), styler("flag-type"))
        text.append("- ")
        text.append(flag.help, styler("flag-help"))
        if flag.default is not Unset:
            text.append(" " if flag.help else "")
            text.append("(default: %s)" % _default(flag), styler("flag-default"))
        text.append("\n")


def render(command, /, *, version=Unset, globals=(), colorful=False):
    """
    Build the help text of command.

    Parameters
    - command: the node being described (its path gives the usage line).
    - version: str | Unset; adds a VERSION section when non-empty.
    - globals: flags inherited by every command; listed under GLOBALS.
    - colorful: apply the palette when True.

    Returns
    - rich.text.Text; use .plain for the bare string.
    """
    styler = _styler(colorful)
    text = Text()

    def label(name):
        text.append(name + ":", styler("section-label"))
        text.append("\n")

    label("NAME")
    text.append(TAB)
    text.append(command.name, styler("program-name"))
    if command.help:
        text.append(" - ")
        text.append(command.help, styler("program-help"))
    text.append("\n\n")

    label("USAGE")
    text.append(TAB)
    text.append(" ".join(node.name for node in command.path), styler("program-name"))
    text.append(TAB)
    text.append(USAGE, styler("usage"))
    text.append("\n\n")

    if version := coalesce(version, ""):
        label("VERSION")
        text.append(TAB)
        text.append(version, styler("version"))
        text.append("\n\n")

    if descr := command.descr.strip():
        label("DESCRIPTION")
        for line in descr.split("\n"):
            text.append(TAB)
            text.append(line, styler("description"))
            text.append("\n")
        text.append("\n")

    if children := command.children:
        label("COMMANDS")
        _commands(text, children, styler)
        text.append("\n")

    if command.flags:
        label("OPTIONS")
        _flags(text, command.flags, styler)
        text.append("\n")

    if globals:
        label("GLOBALS")
        _flags(text, globals, styler)
        text.append("\n")

    text.rstrip()
    return text


__all__ = (
    "render",
)
