"""
Arguments module behavioral tests (Named, Positional, Switch).

Scope
- Validate construction and metadata sanitization (names, callbacks, types, allowed values).
- Validate accept(): allowed-value check before conversion, conversion faults.
- Validate callback forwarding and the Unset no-op sink.
- Validate sealing, representation and structural pattern matching.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cliparse import Named, Positional, Switch
from cliparse.faults import FaultCode, UnconvertibleValueError, ValueNotAllowedError


class TestNamed(TestCase):
    """Behavioral tests for Named arguments."""

    def testNamedDefaults(self):
        named = Named("o")
        self.assertEqual(named.name, "o")
        self.assertIs(named.type, str)
        self.assertIsNone(named.allowed)

    def testNamedRepr(self):
        self.assertEqual(repr(Named("o")), "named(name='o', type=<class 'str'>, allowed=None)")

    def testNamedNameValidation(self):
        for name in ("", "-o", "a b", " o"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Named(name)
        with self.assertRaises(TypeError):
            Named(5)

    def testNamedNamesAllowI18N(self):
        self.assertEqual(Named("größe").name, "größe")

    def testNamedCallbackMustBeCallable(self):
        with self.assertRaises(TypeError):
            Named("o", "not callable")

    def testNamedUnknownTypeRejected(self):
        with self.assertRaises(TypeError):
            Named("t", type=42)

    def testNamedAllowedKeepsOrder(self):
        self.assertEqual(Named("o", allowed=["short", "long"]).allowed, ("short", "long"))

    def testNamedAllowedSortedForSet(self):
        self.assertEqual(Named("o", allowed={"short", "long", "medium"}).allowed, ("long", "medium", "short"))

    def testNamedAllowedSetMessageIsSorted(self):
        with self.assertRaises(ValueNotAllowedError) as context:
            Named("o", allowed={"short", "long"}).accept("medium")
        self.assertEqual(context.exception.message, "Value `medium` is not amongst allowed values `long, short`.")

    def testNamedAllowedRejectsDuplicates(self):
        with self.assertRaises(ValueError):
            Named("o", allowed=["short", "short"])

    def testNamedAllowedRejectsEmpty(self):
        with self.assertRaises(ValueError):
            Named("o", allowed=[])

    def testNamedAllowedRejectsString(self):
        with self.assertRaises(TypeError):
            Named("o", allowed="short")

    def testNamedForwardsValue(self):
        received = []
        Named("o", received.append)("short")
        self.assertEqual(received, ["short"])

    def testNamedWithoutCallbackIsNoop(self):
        self.assertIsNone(Named("o")("short"))

    def testNamedAcceptConverts(self):
        self.assertEqual(Named("t", type=int).accept("42"), 42)

    def testNamedAcceptChecksAllowedBeforeConversion(self):
        named = Named("t", type=int, allowed=(1, 2))
        self.assertEqual(named.accept("2"), 2)
        with self.assertRaises(ValueNotAllowedError) as context:
            named.accept("3")
        self.assertEqual(context.exception.message, "Value `3` is not amongst allowed values `1, 2`.")
        self.assertIs(context.exception.options["code"], FaultCode.VALUE_NOT_ALLOWED)

    def testNamedAcceptReportsUnconvertible(self):
        with self.assertRaises(UnconvertibleValueError) as context:
            Named("t", type=int).accept("x", "threshold")
        self.assertTrue(context.exception.message.startswith(
            "Value `x` of argument `threshold` cannot be converted to int:"
        ))
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def testNamedIsSealed(self):
        with self.assertRaises(TypeError):
            class Derived(Named):  # NOQA: F-841
                pass


class TestPositional(TestCase):
    """Behavioral tests for Positional arguments."""

    def testPositionalDefaults(self):
        self.assertIs(Positional().type, str)
        self.assertEqual(repr(Positional()), "positional(type=<class 'str'>)")

    def testPositionalForwardsConvertedValue(self):
        received = []
        positional = Positional(received.append, type=float)
        positional(positional.accept("2.5"))
        self.assertEqual(received, [2.5])

    def testPositionalAcceptReportsPlaceholder(self):
        with self.assertRaises(UnconvertibleValueError) as context:
            Positional(type=int).accept("x")
        self.assertIn("`<value>`", context.exception.message)

    def testPositionalIsSealed(self):
        with self.assertRaises(TypeError):
            class Derived(Positional):  # NOQA: F-841
                pass


class TestSwitch(TestCase):
    """Behavioral tests for Switch arguments."""

    def testSwitchForwardingZeroArity(self):
        called = []
        Switch("d", lambda: called.append(True))()
        self.assertEqual(called, [True])

    def testSwitchNameValidation(self):
        with self.assertRaises(ValueError):
            Switch("--debug")

    def testSwitchRepr(self):
        self.assertEqual(repr(Switch("d")), "switch(name='d')")

    def testSwitchIsSealed(self):
        with self.assertRaises(TypeError):
            class Derived(Switch):  # NOQA: F-841
                pass


class TestDispatch(TestCase):
    """Behavioral tests for structural pattern matching over the variants."""

    def testMatchByVariant(self):
        def kind(argument):
            match argument:
                case Named(name=name):
                    return "named " + name
                case Positional():
                    return "positional"
                case Switch(name=name):
                    return "switch " + name

        self.assertEqual(kind(Named("o")), "named o")
        self.assertEqual(kind(Positional()), "positional")
        self.assertEqual(kind(Switch("d")), "switch d")


if __name__ == "__main__":
    unittest.main()
