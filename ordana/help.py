"""
Ordana help rendering (rich).

Layout
- subcommand help:
    <command> <sub> - <descr>

    Usage
      $ <command> <sub> <positionals>

    Options
      -x, --name <name>  [string]   description
      ...

    Aliases
      <command>, <command> <alias>

- top-level help:
    Usage
      $ <command> <subcommand>          ([subcommand] when a default exists)

    Commands
      <sub> <positionals>  (default) description
      ...

    For more info, run any command with the --help flag:
      $ <command> <sub> --help

Palette keys
- heading, section-title, dollar, command, placeholder
- argument, type, description, default-marker, flag, empty
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When colorful is False, styling is suppressed (the plain text is unchanged).
"""
import sys
from collections import defaultdict

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .utils import *


def _palette(colorful):
    styles = defaultdict(str, {
        "heading": "bold #E6E6F0",  # near-white heading
        "section-title": "bold underline #22C55E",  # GREEN section titles
        "dollar": "#36C5F0",  # SKY-BLUE prompt sign
        "command": "bold #FF4D94",  # MAGENTA-PINK command lines
        "placeholder": "#FFD600",  # AMBER positionals
        "argument": "bold #00E6FF",  # CYAN flag spellings
        "type": "#00E6FF dim",
        "description": "#9CA3AF",  # Muted gray
        "default-marker": "bold #FFD600",
        "flag": "#36C5F0",
        "empty": "italic #737373",

        "panel-title": "bold #FF4D94",
    } | getattr(sys.modules.get("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _section(title, lines, styler):
    section = Text().append(title, styler("section-title"))
    for line in lines:
        section.append("\n  ").append_text(line)
    return section


def _table(rows):
    """
    Align rows of cells: every column but the last is padded to its widest cell,
    cells are separated by two spaces.
    """
    widths = [max(len(row[index]) for row in rows) for index in range(len(rows[0]) - 1)]
    lines = []
    for row in rows:
        line = Text()
        for index, cell in enumerate(row):
            if index:
                line.append("  ")
            line.append_text(cell)
            if index < len(widths):
                line.append(" " * (widths[index] - len(cell)))
        line.rstrip()
        lines.append(line)
    return lines


def generate_help(command, subcommand=None, /, *, colorful=True):
    """
    Build the help text of a command (subcommand None) or of one of its subcommands.

    Returns a rich Text; its plain form does not depend on colorful.

    Raises
    - ValueError: when subcommand names no declared subcommand.
    """
    if subcommand is not None and subcommand not in command.subcommands:
        raise ValueError(f"generate_help() unknown subcommand {subcommand!r}")
    styler = _palette(colorful)

    def text(fragment, style=""):
        # styles go on spans so appended fragments do not inherit them
        return Text().append(str(fragment), styler(style))

    def prompt(line):
        return Text.assemble(text("$", "dollar"), " ", line)

    sections = []
    usage = text(command_line(command, subcommand), "command")

    if subcommand is not None:
        spec = command.subcommands[subcommand]

        heading = text(command_line(command, subcommand), "heading")
        if spec.descr:
            heading.append(" - ").append_text(text(spec.descr, "description"))
        sections.append(heading)

        if positionals := stringify_positionals(spec.positionals):
            usage.append(" ").append_text(text(positionals, "placeholder"))
        sections.append(_section("Usage", [prompt(usage)], styler))

        rows = [
            [
                text(stringify_argument(name, argument), "argument"),
                text("[%s]" % stringify_type(argument), "type"),
                text(argument.descr or "", "description"),
            ]
            for name, argument in {**command.globals, **spec.arguments}.items()
        ]
        sections.append(_section("Options", _table(rows) if rows else [text("No options", "empty")], styler))

        if aliases := alias_list(spec, command.default == subcommand):
            sections.append(_section("Aliases", [
                Text(", ").join(text(command_line(command, alias), "command") for alias in aliases)
            ], styler))
    else:
        usage.append(" ").append_text(text("[subcommand]" if command.default else "<subcommand>", "placeholder"))
        sections.append(_section("Usage", [prompt(usage)], styler))

        rows = []
        for name, spec in command.subcommands.items():
            label = text(name, "command")
            if positionals := stringify_positionals(spec.positionals):
                label.append(" ").append_text(text(positionals, "placeholder"))
            description = Text()
            if name == command.default:
                description.append_text(text("(default)", "default-marker")).append(" ")
            description.append_text(text(spec.descr or "", "description"))
            rows.append([label, description])
        sections.append(_section("Commands", _table(rows) if rows else [text("No commands", "empty")], styler))

        footer = Text.assemble("For more info, run any command with the ", text("--help", "flag"), " flag:")
        for name in command.subcommands:
            footer.append("\n  ").append_text(prompt(Text.assemble(command_line(command, name), " --help")))
        sections.append(footer)

    return Text("\n\n").join(sections)


def print_help(command, subcommand=None, /, *, colorful=True, fancy=False, stderr=False):
    """
    Print the help text to the terminal (stdout, or stderr when asked).

    fancy wraps it in a panel titled with the command line.
    """
    console = Console(stderr=stderr)
    renderable = generate_help(command, subcommand, colorful=colorful)
    if fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble(
                "[ ", ("%s HELP" % command_line(command, subcommand)).upper(), " ]",
                style=_palette(colorful)("panel-title")
            ),
            title_align="left",
        )
    console.print(renderable)


__all__ = (
    "generate_help",
    "print_help",
)
