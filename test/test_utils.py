"""
Utils module behavioral tests (sentinel, coalescing, renaming, freezing, mirroring).

Scope
- Validate the Unset sentinel: singleton, falsey, printable, sealed, copy/pickle stable.
- Validate coalesce() only replaces Unset.
- Validate rename() in both direct and decorator forms.
- Validate freeze() snapshots and mirror() read-only properties.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from cliparse.utils import Unset, UnsetType, coalesce, freeze, mirror, rename


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testUnsetIsSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testUnsetIsFalsey(self):
        self.assertFalse(Unset)

    def testUnsetRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnsetCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass

    def testUnsetSurvivesCopyAndPickle(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testUnsetSupportsUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))


class TestCoalesce(TestCase):
    """Behavioral tests for coalesce()."""

    def testCoalesceReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testCoalesceDefaultsToNone(self):
        self.assertIsNone(coalesce(Unset))

    def testCoalescePreservesFalseyValues(self):
        for value in (None, 0, "", ()):
            self.assertIs(coalesce(value, "fallback"), value)


class TestRename(TestCase):
    """Behavioral tests for rename()."""

    def testRenameDirect(self):
        def original():
            pass

        renamed = rename(original, "renamed")
        self.assertIs(renamed, original)
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

    def testRenameDecorator(self):
        @rename("decorated")
        def original():
            pass

        self.assertEqual(original.__name__, "decorated")

    def testRenameRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            rename(42, "name")

    def testRenameRejectsBuiltins(self):
        with self.assertRaises(TypeError):
            rename(len, "size")

    def testRenameRejectsWrongArity(self):
        with self.assertRaises(TypeError):
            rename()


class TestFreeze(TestCase):
    """Behavioral tests for freeze() and mirror()."""

    def testFreezeSequence(self):
        self.assertEqual(freeze([1, 2]), (1, 2))

    def testFreezeMappingIsReadOnlySnapshot(self):
        source = {"a": 1}
        frozen = freeze(source)
        source["b"] = 2
        self.assertIsInstance(frozen, MappingProxyType)
        self.assertEqual(dict(frozen), {"a": 1})
        with self.assertRaises(TypeError):
            frozen["c"] = 3  # type: ignore[index]

    def testFreezeSet(self):
        self.assertEqual(freeze({1, 2}), frozenset({1, 2}))

    def testFreezeLeavesStringsAlone(self):
        self.assertEqual(freeze("abc"), "abc")

    def testMirrorIsReadOnly(self):
        class Holder:
            value = mirror("value")

            def __init__(self):
                self._value = 42

        holder = Holder()
        self.assertEqual(holder.value, 42)
        with self.assertRaises(AttributeError):
            holder.value = 0


if __name__ == "__main__":
    unittest.main()
