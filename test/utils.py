"""
Tests for the internal helpers (Unset sentinel, coalesce, rename, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from commander.utils import *


class Holder:
    __slots__ = ("_items", "_table", "_name")

    items = mirror("items")
    table = mirror("table")
    name = mirror("name")

    def __init__(self):
        self._items = ["a", "b"]
        self._table = {"key": "value"}
        self._name = "holder"


class UnsetTest(TestCase):
    """
    The Unset sentinel is a falsy, final singleton usable in isinstance unions.
    """

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA: F-841
                pass

    def testUnionWithTypes(self) -> None:
        """
        str | Unset and Unset | str both build a usable isinstance union.
        """
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance(Unset, Unset | str)
        self.assertNotIsInstance(3, str | Unset)


class CoalesceTest(TestCase):

    def testUnsetIsReplaced(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self) -> None:
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "x"), "")


class RenameTest(TestCase):

    def testDirectForm(self) -> None:
        def original():
            pass

        renamed = rename(original, "renamed")
        self.assertIs(renamed, original)
        self.assertEqual(renamed.__name__, "renamed")
        self.assertEqual(renamed.__qualname__, "renamed")

    def testDecoratorForm(self) -> None:
        @rename("decorated")
        def original():
            pass

        self.assertEqual(original.__name__, "decorated")

    def testBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(len, "a", "b")


class MirrorTest(TestCase):
    """
    mirror() publishes private fields as read-only, immutable views.
    """

    def setUp(self) -> None:
        self.holder = Holder()

    def testSequenceBecomesTuple(self) -> None:
        self.assertEqual(self.holder.items, ("a", "b"))

    def testMappingBecomesProxy(self) -> None:
        self.assertIsInstance(self.holder.table, MappingProxyType)
        with self.assertRaises(TypeError):
            self.holder.table["key"] = "other"  # type: ignore[index]

    def testScalarsAreUnchanged(self) -> None:
        self.assertEqual(self.holder.name, "holder")

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.name = "other"  # type: ignore[misc]

    def testBadName(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
