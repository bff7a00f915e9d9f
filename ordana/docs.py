"""
Ordana documentation generator (Markdown).

Each subcommand renders as

    ### `<command> <sub>`

    <description>

    #### Usage

    ```bash
    <command> <sub> <positionals>
    ```

    #### Options

    | Options | Type | Description |
    | ------- | ---- | ----------- |
    | `...`   | `..` | ...         |

    #### Aliases

    `<command>`, `<command> <alias>`

Overrides
- An optional mapping replaces descriptions for the documentation only:
    {
        "subcommands": {name: {"descr": str, "arguments": {argument: {"descr": str}}}},
        "globals": {argument: {"descr": str}},
    }
"""
from collections.abc import Mapping

from .utils import *


def _lookup(mapping, *keys):
    # walk a nested overrides mapping; missing levels read as empty
    for key in keys:
        if not isinstance(mapping, Mapping):
            return {}
        mapping = mapping.get(key) or {}
    return mapping


def _table(titles, rows):
    rows = [[cell.replace("|", "\\|") for cell in row] for row in rows]
    widths = [max(len(title), *(len(row[index]) for row in rows)) for index, title in enumerate(titles)]

    def line(row, fill=" "):
        return "|%s|" % "|".join(" %s " % cell.ljust(width, fill) for cell, width in zip(row, widths))

    return "\n".join([line(titles), line([""] * len(widths), "-"), *map(line, rows)])


def generate_docs_for_subcommand(command, name, overrides=None, /):
    """
    Return the Markdown documentation of one subcommand.

    Raises
    - ValueError: when name is not a declared subcommand.
    """
    try:
        subcommand = command.subcommands[name]
    except KeyError:
        raise ValueError(f"generate_docs_for_subcommand() unknown subcommand {name!r}") from None
    override = _lookup(overrides, "subcommands", name)

    message = "### `%s`\n\n" % command_line(command, name)
    if description := override.get("descr") or subcommand.descr:
        message += "%s\n" % description

    sections = []

    usage = command_line(command, name)
    if positionals := stringify_positionals(subcommand.positionals):
        usage += " " + positionals
    sections.append("#### Usage\n\n```bash\n%s\n```" % usage)

    descriptions = {**_lookup(overrides, "globals"), **_lookup(override, "arguments")}
    rows = [
        [
            "`%s`" % stringify_argument(argument, spec),
            "`%s`" % stringify_type(spec),
            _lookup(descriptions, argument).get("descr") or spec.descr or "",
        ]
        for argument, spec in {**command.globals, **subcommand.arguments}.items()
    ]
    sections.append("#### Options\n\n%s" % (_table(["Options", "Type", "Description"], rows) if rows else "No options"))

    if aliases := alias_list(subcommand, command.default == name):
        sections.append("#### Aliases\n\n%s" % ", ".join("`%s`" % command_line(command, alias) for alias in aliases))

    return message + "\n" + "\n\n".join(sections)


def generate_docs(command, overrides=None, /):
    """
    Return the Markdown documentation of every subcommand, in declaration order.
    """
    return "\n\n".join(generate_docs_for_subcommand(command, name, overrides) for name in command.subcommands) + "\n"


__all__ = (
    "generate_docs",
    "generate_docs_for_subcommand",
)
