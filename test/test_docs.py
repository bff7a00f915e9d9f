"""
Markdown documentation behavioral tests.

Scope
- Per-subcommand layout: heading, description, usage block, options table, aliases.
- Overrides for subcommand and argument descriptions (subcommand and global).
- Table escaping and empty option lists.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from ordana import (
    Argument,
    Command,
    Custom,
    Positionals,
    Subcommand,
    generate_docs,
    generate_docs_for_subcommand,
)


def number(value):
    return float(value)


SUBCOMMANDS = {
    "bar": Subcommand(
        "the subcommand bar",
        arguments={
            "arg1": Argument("boolean", "the argument arg1"),
            "arg2": Argument(Custom(number), "the argument arg2"),
        },
        positionals=Positionals(minimum=1, placeholders=["path"]),
    ),
    "baz": Subcommand("the subcommand baz", aliases=["qux"]),
}
GLOBALS = {"globalArg1": Argument("boolean", "the global argument globalArg1")}

FOO = Command(SUBCOMMANDS, name="foo", globals=GLOBALS)
FOO2 = Command(SUBCOMMANDS, name="foo2", default="baz", globals=GLOBALS)

OVERRIDES = {
    "subcommands": {
        "bar": {
            "descr": "the subcommand bar from docs options",
            "arguments": {"arg1": {"descr": "the argument arg1 from docs options"}},
        },
    },
    "globals": {"globalArg1": {"descr": "the global argument globalArg1 from docs options"}},
}

BAR = "\n".join([
    "### `foo bar`",
    "",
    "the subcommand bar",
    "",
    "#### Usage",
    "",
    "```bash",
    "foo bar <path>",
    "```",
    "",
    "#### Options",
    "",
    "| Options" + " " * 9 + "| Type" + " " * 6 + "| Description" + " " * 20 + "|",
    "| " + "-" * 15 + " | " + "-" * 9 + " | " + "-" * 30 + " |",
    "| `--globalArg1`  | `boolean` | the global argument globalArg1 |",
    "| `--arg1`" + " " * 8 + "| `boolean` | the argument arg1" + " " * 14 + "|",
    "| `--arg2 <arg2>` | `number`  | the argument arg2" + " " * 14 + "|",
])

BAZ = "\n".join([
    "### `foo baz`",
    "",
    "the subcommand baz",
    "",
    "#### Usage",
    "",
    "```bash",
    "foo baz",
    "```",
    "",
    "#### Options",
    "",
    "| Options" + " " * 8 + "| Type" + " " * 6 + "| Description" + " " * 20 + "|",
    "| " + "-" * 14 + " | " + "-" * 9 + " | " + "-" * 30 + " |",
    "| `--globalArg1` | `boolean` | the global argument globalArg1 |",
    "",
    "#### Aliases",
    "",
    "`foo qux`",
])


class TestGenerateDocsForSubcommand(TestCase):
    """One subcommand."""

    def testSubcommandWithPositionals(self):
        self.assertEqual(generate_docs_for_subcommand(FOO, "bar"), BAR)

    def testSubcommandWithAlias(self):
        self.assertEqual(generate_docs_for_subcommand(FOO, "baz"), BAZ)

    def testDefaultSubcommandAliases(self):
        self.assertTrue(generate_docs_for_subcommand(FOO2, "baz").endswith("#### Aliases\n\n`foo2`, `foo2 qux`"))

    def testNoAliasesSection(self):
        self.assertNotIn("#### Aliases", generate_docs_for_subcommand(FOO2, "bar"))

    def testWithoutDescriptionOrOptions(self):
        command = Command({"dev": Subcommand()}, name="tool")
        self.assertEqual(
            generate_docs_for_subcommand(command, "dev"),
            "### `tool dev`\n\n\n#### Usage\n\n```bash\ntool dev\n```\n\n#### Options\n\nNo options"
        )

    def testPipesAreEscaped(self):
        command = Command({"dev": Subcommand(arguments={
            "mode": Argument("string|boolean", "either a | b"),
        })}, name="tool")
        docs = generate_docs_for_subcommand(command, "dev")
        self.assertIn("| `--mode [mode]` | `string \\| boolean` | either a \\| b |", docs)

    def testUnknownSubcommand(self):
        with self.assertRaises(ValueError):
            generate_docs_for_subcommand(FOO, "nope")


class TestGenerateDocs(TestCase):
    """Every subcommand, with or without overrides."""

    def testJoinsSubcommands(self):
        self.assertEqual(generate_docs(FOO), BAR + "\n\n" + BAZ + "\n")

    def testOverrides(self):
        docs = generate_docs(FOO, OVERRIDES)
        self.assertIn("### `foo bar`\n\nthe subcommand bar from docs options\n", docs)
        self.assertIn("the argument arg1 from docs options", docs)
        self.assertEqual(docs.count("the global argument globalArg1 from docs options"), 2)
        self.assertIn("the argument arg2 ", docs)
        self.assertIn("the subcommand baz\n", docs)

    def testPartialOverrides(self):
        self.assertEqual(generate_docs(FOO, {}), generate_docs(FOO))
        self.assertEqual(generate_docs(FOO, {"subcommands": {"bar": {}}}), generate_docs(FOO))

    def testEmptyCommand(self):
        self.assertEqual(generate_docs(Command({})), "\n")


if __name__ == "__main__":
    unittest.main()
