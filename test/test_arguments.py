"""
Argument descriptor behavioral tests.

Scope
- Validate Positional, Option and Switch construction and normalization.
- Validate metadata constraints (names, flags, descr, label, type, default, format).
- Validate read-only exposure and representations.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.text import Text

from schemargs import Kind, Option, Positional, Switch, ValueType


class TestPositional(TestCase):
    """Behavioral tests for Positional (required) descriptors."""

    def testDefaults(self):
        p = Positional("path")
        self.assertIs(p.kind, Kind.REQUIRED)
        self.assertIs(p.type, ValueType.STRING)
        self.assertEqual(p.label, "path")
        self.assertIsNone(p.descr)
        self.assertEqual(p.default, "")

    def testTypeByName(self):
        p = Positional("count", "int")
        self.assertIs(p.type, ValueType.INT)
        self.assertEqual(p.default, 0)

    def testUnknownTypeRejected(self):
        with self.assertRaises(ValueError):
            Positional("count", "integer")

    def testNonStringTypeRejected(self):
        with self.assertRaises(TypeError):
            Positional("count", int)

    def testExplicitLabelTrimmed(self):
        p = Positional("count", "int", label=" COUNT ")
        self.assertEqual(p.label, "COUNT")

    def testEmptyLabelRejected(self):
        with self.assertRaises(ValueError):
            Positional("count", label="  ")

    def testNameMustBeIdentifier(self):
        for name in ("1count", "two words", "class", "_hidden"):
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    Positional(name)

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            Positional(5)

    def testDescrTrimmed(self):
        p = Positional("path", descr="  Input file ")
        self.assertEqual(p.descr, "Input file")

    def testDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Positional("path", descr="   ")

    def testDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Positional("path", descr=None)

    def testDescrAcceptsRichText(self):
        p = Positional("path", descr=Text("Input", "bold"))
        self.assertIsInstance(p.descr, Text)

    def testReadOnly(self):
        p = Positional("path")
        with self.assertRaises(AttributeError):
            p.name = "other"

    def testRepr(self):
        self.assertTrue(repr(Positional("path")).startswith("positional(name='path'"))


class TestOption(TestCase):
    """Behavioral tests for Option (named, value-bearing) descriptors."""

    def testDefaults(self):
        o = Option("output", "--output")
        self.assertIs(o.kind, Kind.OPTIONAL)
        self.assertIs(o.type, ValueType.STRING)
        self.assertEqual(o.default, "")
        self.assertEqual(o.label, "output")
        self.assertEqual(o.format, "s")

    def testFloatingDefaultStoredAsFloat(self):
        o = Option("rate", "--rate", "float", 1)
        self.assertIsInstance(o.default, float)
        self.assertEqual(o.default, 1.0)

    def testIntegerDefaultMustBeInteger(self):
        with self.assertRaises(TypeError):
            Option("count", "--count", "int", 1.5)
        with self.assertRaises(TypeError):
            Option("count", "--count", "int", "1")

    def testBooleanDefaultRejected(self):
        with self.assertRaises(TypeError):
            Option("count", "--count", "int", True)

    def testIntegerDefaultRangeChecked(self):
        with self.assertRaises(ValueError):
            Option("count", "--count", "int", 2 ** 31)
        with self.assertRaises(ValueError):
            Option("count", "--count", "uint", -1)

    def testHugeIntegerDefaultForFloatingRejected(self):
        with self.assertRaises(ValueError):
            Option("rate", "--rate", "double", 10 ** 400)

    def testSinglePrecisionDefault(self):
        with self.assertRaises(ValueError):
            Option("rate", "--rate", "float", 1e300)
        with self.assertRaises(ValueError):
            Option("rate", "--rate", "float", 1e-50)
        self.assertEqual(Option("rate", "--rate", "double", 1e300).default, 1e300)
        self.assertEqual(Option("rate", "--rate", "float", float("inf")).default, float("inf"))
        rounded = Option("rate", "--rate", "float", 0.1).default
        self.assertNotEqual(rounded, 0.1)
        self.assertAlmostEqual(rounded, 0.1, places=6)

    def testCharDefaultMustBeSingleCharacter(self):
        self.assertEqual(Option("sep", "--sep", "char", ",").default, ",")
        with self.assertRaises(ValueError):
            Option("sep", "--sep", "char", ",,")

    def testStringDefaultMustBeString(self):
        with self.assertRaises(TypeError):
            Option("output", "--output", "string", 5)

    def testFlagValidation(self):
        for flag in ("--bad_name", "output", "---x", "-", "--9lives"):
            with self.subTest(flag=flag):
                with self.assertRaises(ValueError):
                    Option("output", flag)

    def testFlagAcceptedForms(self):
        for flag in ("-o", "-out", "--output", "--output-file", "--名-前"):
            with self.subTest(flag=flag):
                self.assertEqual(Option("output", flag).flag, flag)

    def testFlagMustBeString(self):
        with self.assertRaises(TypeError):
            Option("output", 5)

    def testPrecisionBuildsFormat(self):
        o = Option("rate", "--rate", "double", 3.14159, precision=3)
        self.assertEqual(o.format, ".3g")
        self.assertEqual(o.render_default(), "3.14")

    def testPrecisionOnlyForFloatingTypes(self):
        with self.assertRaises(TypeError):
            Option("count", "--count", "int", 1, precision=2)

    def testPrecisionAndFormatAreExclusive(self):
        with self.assertRaises(TypeError):
            Option("rate", "--rate", "float", 1.0, format=".2f", precision=2)

    def testNegativePrecisionRejected(self):
        with self.assertRaises(ValueError):
            Option("rate", "--rate", "float", 1.0, precision=-1)

    def testFormatMustRenderDefault(self):
        with self.assertRaises(ValueError):
            Option("rate", "--rate", "float", 1.0, format="d")

    def testCustomFormat(self):
        o = Option("mask", "--mask", "uint", 255, format="#x")
        self.assertEqual(o.render_default(), "0xff")

    def testDefaultFormats(self):
        self.assertEqual(Option("rate", "--rate", "float", 1.0).render_default(), "1")
        self.assertEqual(Option("count", "--count", "size", 12).render_default(), "12")
        self.assertEqual(Option("output", "--output", "string", "out.txt").render_default(), "out.txt")

    def testRepr(self):
        self.assertTrue(repr(Option("rate", "--rate")).startswith("option(name='rate', flag='--rate'"))


class TestSwitch(TestCase):
    """Behavioral tests for Switch (presence-only) descriptors."""

    def testDefaults(self):
        s = Switch("verbose", "--verbose")
        self.assertIs(s.kind, Kind.BOOLEAN)
        self.assertIs(s.default, False)
        self.assertIsNone(s.descr)
        self.assertFalse(hasattr(s, "type"))

    def testFlagValidation(self):
        with self.assertRaises(ValueError):
            Switch("verbose", "--bad_name")

    def testDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Switch("verbose", "--verbose", descr=None)

    def testRepr(self):
        self.assertEqual(repr(Switch("verbose", "-v")), "switch(name='verbose', flag='-v', descr=None)")


if __name__ == "__main__":
    unittest.main()
