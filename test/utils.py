"""
Tests for the coreopts helpers.

This module verifies:
- The `Unset` sentinel: singleton identity, falsiness, representation, copying
  and pickling, finality.
- `coalesce`: only Unset is replaced.
- `rename`: both call forms and their argument checks.
- `mirror`: read-only access and immutable views of containers.
"""
import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from coreopts.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(Unset)

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values.
        """
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(str(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinal(self) -> None:
        """
        The sentinel type cannot be subclassed.
        """
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):  # NOQA
                pass


class CoalesceTest(TestCase):

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "auto"), "auto")
        self.assertIsNone(coalesce(Unset))

    def testKeepsOtherFalsyValues(self) -> None:
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "auto"), value)


class RenameTest(TestCase):

    def testDirectForm(self) -> None:
        def function():
            pass

        self.assertIs(rename(function, "other"), function)
        self.assertEqual(function.__name__, "other")
        self.assertEqual(function.__qualname__, "other")

    def testDecoratorForm(self) -> None:
        @rename("handler")
        def function():
            pass

        self.assertEqual(function.__name__, "handler")

    def testArgumentChecks(self) -> None:
        with self.assertRaises(TypeError):
            rename("not callable", "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename()


class MirrorTest(TestCase):

    def setUp(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            names = mirror("names")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._names = {"x"}
                self._label = "text"

        self.holder = Holder()

    def testImmutableViews(self) -> None:
        self.assertEqual(self.holder.items, (1, 2))
        self.assertIsInstance(self.holder.table, MappingProxyType)
        self.assertEqual(self.holder.names, frozenset({"x"}))
        self.assertEqual(self.holder.label, "text")

    def testReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.holder.items = ()
        with self.assertRaises(TypeError):
            self.holder.table["b"] = 2  # NOQA

    def testPrebuiltViewsAreShared(self) -> None:
        view = MappingProxyType({"a": 1})
        self.holder._table = view
        self.holder._items = (1, 2)
        self.assertIs(self.holder.table, view)
        self.assertIs(self.holder.items, self.holder.items)

    def testNameMustBeString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
