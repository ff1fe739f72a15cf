"""
Tests for the Unset sentinel and the small helpers around it.

This module verifies:
- Singleton identity and falsy semantics of Unset.
- Finality (UnsetType cannot be subclassed).
- SpecType: typename derivation, read-only mirrored properties, repr.
- coalesce() only replaces Unset.
- rename() in both its direct and decorator forms.
- Fault rendering with and without the palette.
"""
import unittest
from unittest import TestCase

from rich.text import Text

from twig.faults import PREFIX, Code, MissingValueError
from twig.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Derived(UnsetType):
                pass

    def testUnion(self) -> None:
        self.assertIsInstance(Unset, str | UnsetType)
        self.assertNotIsInstance(3, str | UnsetType)


class SpecTypeTest(TestCase):
    """
    Test suite for classes built by the `SpecType` metaclass.
    """

    def setUp(self) -> None:
        class SampleRecord(metaclass=SpecType):
            __introspectable__ = ("label", "items")

            def __init__(self, label, items):
                self._label = label
                self._items = items

        self.type = SampleRecord
        self.record = SampleRecord("demo", [1, 2])

    def testTypename(self) -> None:
        self.assertEqual(self.type.__typename__, "sample-record")

    def testMirroredPropertiesAreReadOnly(self) -> None:
        self.assertEqual(self.record.label, "demo")
        with self.assertRaises(AttributeError):
            self.record.label = "other"

    def testMirroredContainersAreCopies(self) -> None:
        self.record.items.append(3)
        self.assertEqual(self.record.items, [1, 2])

    def testRepr(self) -> None:
        self.assertEqual(repr(self.record), "sample-record(label='demo', items=[1, 2])")

    def testRichRepr(self) -> None:
        self.assertEqual(list(self.record.__rich_repr__()), [("label", "demo"), ("items", [1, 2])])

    def testDisplayableDefaultsToUnset(self) -> None:
        self.assertIs(SpecType.__displayable__, Unset)


class HelpersTest(TestCase):
    """
    Test suite for coalesce() and rename().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertEqual(coalesce("", "x"), "")

    def testRenameDirect(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecorator(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename("a", "b", "c")


class FaultRenderingTest(TestCase):
    """
    Test suite for the rendered form of faults.
    """

    def testCodes(self) -> None:
        self.assertEqual(Code.SUCCESS, 0)
        self.assertEqual(Code.FAILURE, 1)

    def testPlainRendering(self) -> None:
        fault = MissingValueError('no value for string flag "name"', identity="name")
        rendered = fault.render()
        self.assertIsInstance(rendered, Text)
        self.assertEqual(rendered.plain, '%s: no value for string flag "name"' % PREFIX)
        self.assertEqual(rendered.spans, [])
        self.assertEqual(fault.options["identity"], "name")

    def testColorfulRendering(self) -> None:
        fault = MissingValueError('no value for string flag "name"')
        self.assertNotEqual(fault.render(colorful=True).spans, [])

    def testOptionsAreReadOnly(self) -> None:
        fault = MissingValueError("message", identity="name")
        with self.assertRaises(TypeError):
            fault.options["identity"] = "other"


if __name__ == "__main__":
    unittest.main()
