"""
Converters module behavioral tests (token to scalar conversion).

Scope
- Validate built-in scalar conversions and the strict bool converter.
- Validate Enum conversion by member name, then by member value.
- Validate register() in direct and decorator forms, and callable targets.
- Validate ConversionError wrapping and chaining.

Conventions
- Test method names follow CamelCase per project convention.
- Registrations use classes local to the test so the shared registry stays clean.
"""

from __future__ import annotations

import enum
import pathlib
import unittest
from decimal import Decimal
from fractions import Fraction
from unittest import TestCase

from cliparse.converters import ConversionError, convert, register, resolve


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class TestBuiltins(TestCase):
    """Behavioral tests for the built-in converters."""

    def testScalars(self):
        self.assertEqual(convert(str, "abc"), "abc")
        self.assertEqual(convert(int, "42"), 42)
        self.assertEqual(convert(float, "2.5"), 2.5)
        self.assertEqual(convert(complex, "1+2j"), 1 + 2j)
        self.assertEqual(convert(Decimal, "0.1"), Decimal("0.1"))
        self.assertEqual(convert(Fraction, "1/3"), Fraction(1, 3))
        self.assertEqual(convert(pathlib.Path, "out.txt"), pathlib.Path("out.txt"))

    def testBoolIsStrictAndCaseInsensitive(self):
        self.assertIs(convert(bool, "true"), True)
        self.assertIs(convert(bool, "FALSE"), False)
        with self.assertRaises(ConversionError):
            convert(bool, "yes")

    def testIntFailureIsChained(self):
        with self.assertRaises(ConversionError) as context:
            convert(int, "x")
        self.assertIsInstance(context.exception, ValueError)
        self.assertIsInstance(context.exception.__cause__, ValueError)
        self.assertEqual(context.exception.token, "x")
        self.assertIs(context.exception.type, int)

    def testDecimalFailureIsWrapped(self):
        with self.assertRaises(ConversionError):
            convert(Decimal, "abc")


class TestEnum(TestCase):
    """Behavioral tests for Enum conversion."""

    def testEnumByName(self):
        self.assertIs(convert(Color, "RED"), Color.RED)

    def testEnumByValue(self):
        self.assertIs(convert(Color, "2"), Color.GREEN)

    def testEnumUnknownMember(self):
        with self.assertRaises(ConversionError):
            convert(Color, "BLUE")


class TestRegistry(TestCase):
    """Behavioral tests for register() and resolve()."""

    def testRegisterDirect(self):
        class Point:
            def __init__(self, x, y):
                self.x, self.y = x, y

        def toPoint(token):
            x, y = token.split(",")
            return Point(int(x), int(y))

        self.assertIs(register(Point, toPoint), toPoint)
        point = convert(Point, "1,2")
        self.assertEqual((point.x, point.y), (1, 2))
        with self.assertRaises(ConversionError):
            convert(Point, "1")

    def testRegisterDecorator(self):
        class Upper(str):
            pass

        @register(Upper)
        def toUpper(token):
            return Upper(token.upper())

        self.assertIs(resolve(Upper), toUpper)
        self.assertEqual(convert(Upper, "abc"), "ABC")

    def testRegisterRejectsNonType(self):
        with self.assertRaises(TypeError):
            register("int", int)

    def testRegisterRejectsNonCallable(self):
        class Thing:
            pass

        with self.assertRaises(TypeError):
            register(Thing, 42)

    def testCallableTargetIsItsOwnConverter(self):
        def double(token):
            return int(token) * 2

        self.assertIs(resolve(double), double)
        self.assertEqual(convert(double, "21"), 42)

    def testResolveRejectsNonCallable(self):
        with self.assertRaises(TypeError):
            resolve(42)


if __name__ == "__main__":
    unittest.main()
