"""
Utility helpers behavioral tests.

Scope
- Unset/coalesce semantics and rename().
- kebabize() conversions used by the kebab name bridge.
- Stringifiers shared by help and docs (positionals, types, arguments, aliases, command lines).

Conventions
- Test method names follow CamelCase per project convention.
"""
import math
import sys
import unittest
from unittest import TestCase

from ordana import Argument, Command, Custom, Positionals, Shape, Subcommand
from ordana.utils import *


class TestSentinel(TestCase):
    """Unset sentinel and coalesce()."""

    def testUnsetIsFalsySingleton(self):
        self.assertFalse(Unset)
        self.assertIs(UnsetType(), Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnsetCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})

    def testSchemaClassesDefaultToUnset(self):
        self.assertIs(SpecType.__displayable__, Unset)
        self.assertIs(Argument.__displayable__, Unset)

    def testCoalescePreservesFalseyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))

    def testRenameBothForms(self):
        renamed = rename(lambda: None, "named")
        self.assertEqual(renamed.__name__, "named")

        @rename("decorated")
        def original():
            pass

        self.assertEqual(original.__qualname__, "decorated")
        with self.assertRaises(TypeError):
            rename(1, "x")


class TestKebabize(TestCase):
    """camelCase → kebab-case conversion."""

    def testSimpleCamelCase(self):
        self.assertEqual(kebabize("fooBar"), "foo-bar")
        self.assertEqual(kebabize("fooBarBaz"), "foo-bar-baz")

    def testUppercaseRuns(self):
        self.assertEqual(kebabize("XMLParser"), "xml-parser")
        self.assertEqual(kebabize("getHTTPResponse"), "get-http-response")
        self.assertEqual(kebabize("useSSL"), "use-ssl")

    def testDigitsAndPlainNames(self):
        self.assertEqual(kebabize("plain"), "plain")
        self.assertEqual(kebabize("v2Api"), "v2-api")

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            kebabize(1)


class TestStringifyPositionals(TestCase):
    """Usage placeholders of a positionals spec."""

    def testAbsentAndEmpty(self):
        self.assertEqual(stringify_positionals(None), "")
        self.assertEqual(stringify_positionals(Positionals()), "")

    def testRequiredAndOptionalSlots(self):
        cases = [
            (Positionals(minimum=1), "<arg0>"),
            (Positionals(minimum=2), "<arg0> <arg1>"),
            (Positionals(maximum=1), "[arg0]"),
            (Positionals(minimum=1, maximum=3), "<arg0> [arg1] [arg2]"),
        ]
        for positionals, expected in cases:
            with self.subTest(expected=expected):
                self.assertEqual(stringify_positionals(positionals), expected)

    def testPlaceholders(self):
        cases = [
            (Positionals(placeholders=["foo"]), "[foo]"),
            (Positionals(minimum=1, placeholders=["foo"]), "<foo>"),
            (Positionals(minimum=1, placeholders=["foo", "bar"]), "<foo> [bar]"),
            (Positionals(minimum=1, maximum=3, placeholders=["foo", "bar"]), "<foo> [bar] [arg2]"),
        ]
        for positionals, expected in cases:
            with self.subTest(expected=expected):
                self.assertEqual(stringify_positionals(positionals), expected)

    def testUnboundedMaximumUsesPlaceholderCount(self):
        self.assertTrue(math.isinf(Positionals().maximum))
        self.assertEqual(stringify_positionals(Positionals(minimum=3, placeholders=["a"])), "<a> <arg1> <arg2>")


class TestStringifyType(TestCase):
    """Type labels shown in help and docs."""

    def testPrimitiveShapes(self):
        self.assertEqual(stringify_type(Argument("string")), "string")
        self.assertEqual(stringify_type(Argument("boolean")), "boolean")
        self.assertEqual(stringify_type(Argument(Shape.STRING_OR_BOOLEAN)), "string | boolean")

    def testCustomDocstype(self):
        number = Custom(float, docstype="number")
        self.assertEqual(stringify_type(Argument(number)), "number")
        either = Custom(lambda v: v, Shape.STRING_OR_BOOLEAN, "number | boolean")
        self.assertEqual(stringify_type(Argument(either)), "number | boolean")


class TestStringifyArgument(TestCase):
    """Flag spellings shown in help and docs."""

    def testSpellings(self):
        cases = [
            (Argument("boolean"), "--foo"),
            (Argument("string"), "--foo <foo>"),
            (Argument("string|boolean"), "--foo [foo]"),
            (Argument("boolean", short="f"), "-f, --foo"),
            (Argument("string", placeholder="bar"), "--foo <bar>"),
            (Argument("string|boolean", placeholder="bar"), "--foo [bar]"),
        ]
        for argument, expected in cases:
            with self.subTest(expected=expected):
                self.assertEqual(stringify_argument("foo", argument), expected)

    def testCustomTypesFollowTheirShape(self):
        self.assertEqual(stringify_argument("port", Argument(Custom(int), short="p")), "-p, --port <port>")
        either = Custom(lambda v: v, "string|boolean", "level")
        self.assertEqual(stringify_argument("debug", Argument(either)), "--debug [debug]")

    def testPlaceholderDefaultsToName(self):
        self.assertIsNone(Argument("string").placeholder)
        self.assertEqual(stringify_argument("outDir", Argument("string")), "--outDir <outDir>")
        self.assertEqual(stringify_argument("open", Argument("string|boolean", short="o")), "-o, --open [open]")


class TestAliasesAndCommandLines(TestCase):
    """alias_list() and command_line()."""

    def testAliasList(self):
        self.assertEqual(alias_list(Subcommand()), [])
        self.assertEqual(alias_list(Subcommand(aliases=["foo"])), ["foo"])
        self.assertEqual(alias_list(Subcommand(aliases=["foo", "bar"])), ["foo", "bar"])
        self.assertEqual(alias_list(Subcommand(), True), [None])
        self.assertEqual(alias_list(Subcommand(aliases=["foo"]), True), [None, "foo"])

    def testCommandLine(self):
        command = Command({"bar": Subcommand()}, name="foo")
        self.assertEqual(command_line(command), "foo")
        self.assertEqual(command_line(command, "bar"), "foo bar")

    def testCommandLineFallsBackToProgramName(self):
        main = sys.modules["__main__"]
        command = Command({"bar": Subcommand()})
        saved = getattr(main, "__prog__", Unset)
        main.__prog__ = "prog"
        try:
            self.assertEqual(command_line(command, "bar"), "prog bar")
        finally:
            if saved is Unset:
                del main.__prog__
            else:
                main.__prog__ = saved


if __name__ == "__main__":
    unittest.main()
