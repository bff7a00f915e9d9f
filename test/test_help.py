"""
Help rendering behavioral tests.

Scope
- Plain layout of the top-level and subcommand help (sections, tables, footer, aliases).
- Styling: palette spans when colorful, none otherwise, __styles__ overrides.
- print_help(): stdout/stderr selection and the fancy panel.

Conventions
- Test method names follow CamelCase per project convention.
"""
import contextlib
import io
import sys
import unittest
from unittest import TestCase

from ordana import Argument, Command, Custom, Positionals, Subcommand, generate_help, print_help


def number(value):
    return float(value)


SUBCOMMANDS = {
    "bar": Subcommand(
        "the subcommand bar",
        arguments={
            "arg1": Argument("string", "the argument arg1"),
            "arg2": Argument(Custom(number), "the argument arg2"),
        },
        positionals=Positionals(minimum=1, placeholders=["path"]),
    ),
    "baz": Subcommand("the subcommand baz", aliases=["qux"]),
}
GLOBALS = {"globalArg1": Argument("boolean", "the global argument globalArg1")}

FOO = Command(SUBCOMMANDS, name="foo", globals=GLOBALS)
FOO2 = Command(SUBCOMMANDS, name="foo2", default="baz", globals=GLOBALS)


class TestGenerateHelp(TestCase):
    """Plain text layout."""

    def testTopLevel(self):
        self.assertEqual(generate_help(FOO, colorful=False).plain, "\n".join([
            "Usage",
            "  $ foo <subcommand>",
            "",
            "Commands",
            "  bar <path>  the subcommand bar",
            "  baz         the subcommand baz",
            "",
            "For more info, run any command with the --help flag:",
            "  $ foo bar --help",
            "  $ foo baz --help",
        ]))

    def testTopLevelWithDefaultSubcommand(self):
        self.assertEqual(generate_help(FOO2, colorful=False).plain, "\n".join([
            "Usage",
            "  $ foo2 [subcommand]",
            "",
            "Commands",
            "  bar <path>  the subcommand bar",
            "  baz         (default) the subcommand baz",
            "",
            "For more info, run any command with the --help flag:",
            "  $ foo2 bar --help",
            "  $ foo2 baz --help",
        ]))

    def testSubcommand(self):
        self.assertEqual(generate_help(FOO, "bar", colorful=False).plain, "\n".join([
            "foo bar - the subcommand bar",
            "",
            "Usage",
            "  $ foo bar <path>",
            "",
            "Options",
            "  --globalArg1   [boolean]  the global argument globalArg1",
            "  --arg1 <arg1>  [string]   the argument arg1",
            "  --arg2 <arg2>  [number]   the argument arg2",
        ]))

    def testSubcommandWithAlias(self):
        self.assertEqual(generate_help(FOO2, "baz", colorful=False).plain, "\n".join([
            "foo2 baz - the subcommand baz",
            "",
            "Usage",
            "  $ foo2 baz",
            "",
            "Options",
            "  --globalArg1  [boolean]  the global argument globalArg1",
            "",
            "Aliases",
            "  foo2, foo2 qux",
        ]))

    def testEmptySections(self):
        command = Command({}, name="empty")
        self.assertIn("Commands\n  No commands", generate_help(command, colorful=False).plain)
        command = Command({"dev": Subcommand()}, name="empty")
        plain = generate_help(command, "dev", colorful=False).plain
        self.assertTrue(plain.startswith("empty dev\n\nUsage\n  $ empty dev\n"))
        self.assertIn("Options\n  No options", plain)

    def testRowsWithoutDescriptionAreTrimmed(self):
        command = Command({"dev": Subcommand(arguments={"x": Argument("boolean")})}, name="tool")
        self.assertIn("Options\n  --x  [boolean]\n", generate_help(command, "dev", colorful=False).plain + "\n")

    def testUnknownSubcommand(self):
        with self.assertRaises(ValueError):
            generate_help(FOO, "nope")


class TestHelpStyles(TestCase):
    """Palette handling."""

    def testColorfulAddsSpans(self):
        self.assertTrue(any(span.style for span in generate_help(FOO, "bar").spans))

    def testPlainHasNoStyles(self):
        text = generate_help(FOO, "bar", colorful=False)
        self.assertFalse(any(span.style for span in text.spans))
        self.assertFalse(text.style)

    def testPlainTextIndependentOfColors(self):
        self.assertEqual(generate_help(FOO2).plain, generate_help(FOO2, colorful=False).plain)

    def testStylesOverride(self):
        main = sys.modules["__main__"]
        saved = getattr(main, "__styles__", None)
        main.__styles__ = {"section-title": "bold red"}
        try:
            text = generate_help(FOO)
        finally:
            if saved is None:
                del main.__styles__
            else:
                main.__styles__ = saved
        self.assertIn("bold red", [str(span.style) for span in text.spans])


class TestPrintHelp(TestCase):
    """Terminal output."""

    def testPrintsToStdout(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            print_help(FOO, "bar", colorful=False)
        self.assertIn("foo bar - the subcommand bar", stdout.getvalue())

    def testPrintsToStderr(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            print_help(FOO, colorful=False, stderr=True)
        self.assertIn("$ foo <subcommand>", stderr.getvalue())

    def testFancyPanel(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            print_help(FOO, "bar", colorful=False, fancy=True)
        self.assertIn("FOO BAR HELP", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
