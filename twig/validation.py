"""
Declaration checks run once per invoke(), before any token is consumed.

Rules
- a long flag name, when present, is longer than one character;
- a short flag name, when present, is exactly one character;
- every child command has a name of more than one character.

The root command is exempt from the name rule: its name defaults to the
program name and never appears on the command line.
"""
from .faults import *


def _check_flags(flags, faults):
    for flag in flags:
        if len(flag.long) == 1:
            faults.append(LongFlagNameError(
                'long flag "%s" must be more than one character' % flag.long,
                name=flag.long,
            ))
        if len(flag.short) > 1:
            faults.append(ShortFlagNameError(
                'short flag "%s" must be one character' % flag.short,
                name=flag.short,
            ))


def _check_children(command, faults):
    for child in command.children.values():
        match len(child.name):
            case 0:
                faults.append(MissingCommandNameError("command name missing"))
            case 1:
                faults.append(CommandNameError(
                    'command "%s" must be more than one character' % child.name,
                    name=child.name,
                ))


def validate(command, /, *, globals=()):
    """
    Collect every declaration fault of the tree rooted at command.

    The walk is pre-order: a command's flags, then its children's names, then
    each child in declaration order. Global flags are checked last.

    Returns
    - list[DeclarationError]: empty when the tree is well formed.
    """
    faults = []
    pending = [command]
    while pending:
        command = pending.pop()
        _check_flags(command.flags, faults)
        _check_children(command, faults)
        pending.extend(reversed(command.children.values()))
    _check_flags(globals, faults)
    return faults


__all__ = (
    "validate",
)
