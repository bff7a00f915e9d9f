"""
Ordana command layer: declare subcommands and the top-level command.

What this module provides
- Subcommand: one named mode of a command, with
  • a description and alias spellings,
  • its own arguments (name → Argument),
  • an optional Positionals spec (its presence permits positional tokens).

- Command: the top-level declaration, with
  • an optional program name (used by help and docs),
  • the ordered subcommands (name → Subcommand; order drives listings),
  • an optional default subcommand,
  • global arguments merged into every subcommand (subcommand entries win),
  • the kebab toggle: accept --foo-bar for an argument declared as fooBar.

Core ideas
- Declarative and immutable: schemas are built once, validated on construction,
  and only ever read by the parsing and rendering layers.
- Mappings and sequences are exposed as read-only views.

Quick start
    from ordana import Argument, Command, Positionals, Subcommand, parse

    vite = Command({
        "dev": Subcommand(
            "start the dev server",
            aliases=["serve"],
            arguments={"port": Argument("string", "port to listen on", short="p")},
            positionals=Positionals(placeholders=["root"]),
        ),
        "build": Subcommand("build for production"),
    }, name="vite", default="dev", globals={"debug": Argument("boolean", short="d")})

    parse(["serve", "-p", "3000", "."], vite)
    # Normal(subcommand='dev', values={'port': '3000'}, positionals=['.'])

Design notes
- The name of a subcommand is its key in Command.subcommands.
- The default subcommand is not checked against the declared subcommands here;
  parse() reports a dangling default as InvalidDefaultSubcommandError.
"""
import re
from collections.abc import Iterable, Mapping

from .arguments import Argument, Positionals
from .utils import *


def _process_descr(cls, metadata):
    """
    Normalize the 'descr' field: Unset → None, strings trimmed and non-empty.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _process_selector(cls, field, name):
    """
    Validate a subcommand name or alias: non-empty, no whitespace, not a flag.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be strings")
    elif not re.fullmatch(r"[^\s-]\S*", name):
        raise ValueError(f"{cls.__typename__} {field!r} must be non-empty words not starting with '-'")
    return name


def _process_arguments(cls, field, metadata):
    """
    Validate a mapping of argument names to Argument specs.

    Names are the long flag without its dashes: non-empty, no whitespace,
    no '=' and not starting with '-'. The mapping order is preserved.
    """
    if (arguments := metadata[field]) is Unset:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise TypeError(f"{cls.__typename__} {field!r} must be a mapping of names to arguments")

    sanitized = {}
    for name, argument in arguments.items():
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} {field!r} names must be strings")
        elif not re.fullmatch(r"[^\s=-][^\s=]*", name):
            raise ValueError(f"{cls.__typename__} {field!r} names must be valid long option names (got {name!r})")
        if not isinstance(argument, Argument):
            raise TypeError(f"{cls.__typename__} {field!r} values must be arguments")
        sanitized[name] = argument
    metadata[field] = sanitized


class Subcommand(metaclass=SpecType):
    """
    A named mode of a command.

    Properties
    - descr: str | None
    - aliases: tuple[str, ...], alternate selector spellings in declaration order.
    - arguments: Mapping[str, Argument], read-only.
    - positionals: Positionals | None. None means positional tokens are rejected.
    """

    __introspectable__ = (
        "descr",
        "aliases",
        "arguments",
        "positionals",
    )

    def __new__(cls, descr=Unset, /, aliases=(), arguments=Unset, positionals=Unset):
        metadata = {
            "descr": descr,
            "aliases": aliases,
            "arguments": arguments,
            "positionals": positionals,
        }
        _process_descr(cls, metadata)
        _process_arguments(cls, "arguments", metadata)

        if isinstance(aliases, str) or not isinstance(aliases, Iterable):
            raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
        sanitized = []
        for alias in aliases:
            if _process_selector(cls, "aliases", alias) in sanitized:
                raise ValueError(f"{cls.__typename__} 'aliases' cannot contain duplicates")
            sanitized.append(alias)
        metadata["aliases"] = tuple(sanitized)

        if not isinstance(positionals, Positionals | Unset):
            raise TypeError(f"{cls.__typename__} 'positionals' must be a positionals spec")
        metadata["positionals"] = coalesce(positionals)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


class Command(metaclass=SpecType):
    """
    Top-level command declaration.

    Properties
    - name: str | None, program name shown by help and docs.
    - subcommands: Mapping[str, Subcommand], read-only, in declaration order.
    - default: str | None, subcommand used when the first token selects nothing.
    - globals: Mapping[str, Argument], read-only, available to every subcommand.
    - kebab: bool, also accept the kebab-case spelling of camelCase arguments.
    """

    __introspectable__ = (
        "name",
        "subcommands",
        "default",
        "globals",
        "kebab",
    )

    __displayable__ = (
        "name",
        "subcommands",
        "default",
        "kebab",
    )

    def __new__(cls, subcommands, /, name=Unset, default=Unset, globals=Unset, *, kebab=False):
        """
        Construct a Command.

        Parameters
        - subcommands: Mapping[str, Subcommand]
          Subcommand names must be non-empty words that do not start with '-'.
        - name: Unset | str
          Program name. When Unset, help and docs fall back to __prog__ in
          __main__ or to the basename of sys.argv[0].
        - default: Unset | str
          Name of the default subcommand.
        - globals: Unset | Mapping[str, Argument]
          Arguments merged into every subcommand's arguments.
        - kebab: bool
          Accept --foo-bar wherever fooBar is declared.
        """
        metadata = {
            "name": name,
            "subcommands": subcommands,
            "default": default,
            "globals": globals,
            "kebab": bool(kebab),
        }

        if not isinstance(name, str | Unset):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif isinstance(name, str) and not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
        metadata["name"] = coalesce(name)

        if not isinstance(subcommands, Mapping):
            raise TypeError(f"{cls.__typename__} 'subcommands' must be a mapping of names to subcommands")
        sanitized = {}
        for key, subcommand in subcommands.items():
            if not isinstance(subcommand, Subcommand):
                raise TypeError(f"{cls.__typename__} 'subcommands' values must be subcommands")
            sanitized[_process_selector(cls, "subcommands", key)] = subcommand
        metadata["subcommands"] = sanitized

        if not isinstance(default, str | Unset):
            raise TypeError(f"{cls.__typename__} 'default' must be a string")
        metadata["default"] = coalesce(default)

        _process_arguments(cls, "globals", metadata)

        self = super().__new__(cls)
        for key, object in metadata.items():
            setattr(self, "_" + key, object)
        return self


__all__ = (
    "Subcommand",
    "Command",
)
