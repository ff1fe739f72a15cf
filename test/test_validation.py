"""
Declaration validator tests.

Scope
- One fault per violated rule, in pre-order (flags, child names, then children).
- Global flags are checked too.
- invoke() reports every fault, one line each, without calling any handler.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

from twig import Code, Command, Flag, Kind, invoke, validate
from twig.faults import (
    CommandExit,
    CommandNameError,
    DeclarationError,
    FaultCode,
    LongFlagNameError,
    MissingCommandNameError,
    ShortFlagNameError,
)


def handler(context):
    raise AssertionError("handler must not run")


class TestValidate(TestCase):
    """Behavioral tests for validate()."""

    def testWellFormedTree(self):
        root = Command(name="prog", flags=[Flag(Kind.STRING, "name", "n")])
        Command(handler, root, name="run", flags=[Flag(Kind.BOOL, "", "v")])
        self.assertEqual(validate(root), [])

    def testLongFlagName(self):
        faults = validate(Command(handler, name="prog", flags=[Flag(Kind.BOOL, "x")]))
        self.assertEqual([type(fault) for fault in faults], [LongFlagNameError])
        self.assertEqual(faults[0].message, 'long flag "x" must be more than one character')
        self.assertEqual(faults[0].code, FaultCode.LONG_FLAG_NAME)

    def testShortFlagName(self):
        faults = validate(Command(handler, name="prog", flags=[Flag(Kind.STRING, "name", "xyz")]))
        self.assertEqual([type(fault) for fault in faults], [ShortFlagNameError])
        self.assertEqual(faults[0].message, 'short flag "xyz" must be one character')

    def testMissingCommandName(self):
        root = Command(name="prog")
        Command(handler, root, name="")
        faults = validate(root)
        self.assertEqual([type(fault) for fault in faults], [MissingCommandNameError])
        self.assertEqual(faults[0].message, "command name missing")

    def testShortCommandName(self):
        root = Command(name="prog")
        Command(handler, root, name="x")
        faults = validate(root)
        self.assertEqual([type(fault) for fault in faults], [CommandNameError])
        self.assertEqual(faults[0].message, 'command "x" must be more than one character')

    def testRootNameIsExempt(self):
        self.assertEqual(validate(Command(handler, name="p")), [])

    def testWholeTreeInPreOrder(self):
        root = Command(name="prog", flags=[Flag(Kind.BOOL, "a")])
        first = Command(parent=root, name="first", flags=[Flag(Kind.BOOL, "bb", "bb")])
        Command(handler, first, name="c")
        Command(handler, root, name="second", flags=[Flag(Kind.BOOL, "d")])
        messages = [fault.message for fault in validate(root, globals=[Flag(Kind.BOOL, "e")])]
        self.assertEqual(messages, [
            'long flag "a" must be more than one character',
            'short flag "bb" must be one character',
            'command "c" must be more than one character',
            'long flag "d" must be more than one character',
            'long flag "e" must be more than one character',
        ])

    def testFaultsAreDeclarationErrors(self):
        faults = validate(Command(handler, name="prog", flags=[Flag(Kind.BOOL, "x", "yz")]))
        self.assertEqual(len(faults), 2)
        for fault in faults:
            self.assertIsInstance(fault, DeclarationError)


class TestInvokeValidation(TestCase):
    """Behavioral tests for validation inside invoke()."""

    def testEveryViolationIsReportedOnItsOwnLine(self):
        output = io.StringIO()
        root = Command(name="prog", flags=[Flag(Kind.BOOL, "x", "yz")])
        Command(handler, root, name="r")
        self.assertEqual(invoke(root, ["r"], output=output), Code.FAILURE)
        self.assertEqual(output.getvalue().strip().splitlines(), [
            'twig: long flag "x" must be more than one character',
            'twig: short flag "yz" must be one character',
            'twig: command "r" must be more than one character',
        ])

    def testCommandExitBundlesFaults(self):
        faults = validate(Command(handler, name="prog", flags=[Flag(Kind.BOOL, "x")]))
        group = CommandExit(faults)
        self.assertEqual(list(group.exceptions), faults)
        self.assertEqual(str(group), 'twig: long flag "x" must be more than one character')


if __name__ == "__main__":
    unittest.main()
