"""
Ordana parsing engine: from raw tokens to a typed, structured outcome.

Pipeline (see parse())
1) help check: '--help' as the very first token asks for top-level help.
2) resolve(): pick the subcommand by name or alias, else fall back to the default.
3) help check again: '--help' right after the selection asks for subcommand help.
4) merge(): global arguments overlaid by the subcommand's own (subcommand wins).
5) normalize(): collapse every shape to the scanner's STRING/BOOLEAN and collect
   the string-or-boolean flag spellings (plus kebab spellings when enabled).
6) rewrite(): insert an empty marker value after a bare string-or-boolean flag.
7) scanner: the POSIX-style token scan (ordana.scanner.scan by default).
8) reconstruct(): kebab merge, empty marker → True, custom decoding.

Outcomes
- Help(subcommand): help was requested (subcommand None for the top level).
- Normal(subcommand, values, positionals): the parsed invocation.

parse() never prints; faults are raised. invoke() is the shell-facing wrapper
that renders help and faults through rich.
"""
import copy
import difflib
import re
import shlex
import sys
import warnings
from collections import namedtuple
from collections.abc import Iterable
from types import MappingProxyType

from .arguments import Custom, Shape
from .commands import Command
from .faults import *
from .help import print_help
from .scanner import scan
from .utils import *

HELP = "--help"
ESCAPE = "--"

Help = namedtuple("Help", ("subcommand",))
Help.__doc__ = """
Help was requested; subcommand is None for the top-level help.
"""

Normal = namedtuple("Normal", ("subcommand", "values", "positionals"))
Normal.__doc__ = """
A parsed invocation: the resolved subcommand name, the decoded option values
(name → value, or list of values for multiple options) and the positionals.
"""


def resolve(selector, subcommands, default=None, /):
    """
    Select a subcommand by name or alias, falling back to the default.

    Returns (name, subcommand, used_default):
    - a truthy selector equal to a name, or listed among its aliases: (name, subcommand, False)
    - otherwise, when a default is set: (default, subcommands.get(default), True),
      the subcommand being None when the default names nothing
    - otherwise: (None, None, False)
    """
    if selector:
        for name, subcommand in subcommands.items():
            if name == selector or selector in subcommand.aliases:
                return name, subcommand, False

    if default:
        return default, subcommands.get(default), True
    return None, None, False


def merge(globals, arguments, /):
    """
    Overlay a subcommand's arguments on the global ones into a new read-only map.

    Raises ConflictingShortAliasError when two of the merged arguments share a short alias.
    """
    merged = {**globals, **arguments}

    shorts = {}
    for name, argument in merged.items():
        if argument.short is None:
            continue
        if argument.short in shorts:
            raise ConflictingShortAliasError(
                "arguments %r and %r share the short alias '-%s'" % (shorts[argument.short], name, argument.short),
                title="conflicting short alias",
                code=FaultCode.CONFLICTING_SHORT_ALIAS,
                short=argument.short,
                names=(shorts[argument.short], name),
                hint="give one of them a different short alias",
                docs=getdoc(FaultCode.CONFLICTING_SHORT_ALIAS)
            )
        shorts[argument.short] = name
    return MappingProxyType(merged)


def bridge(arguments, /):
    """
    Return the kebab → camelCase lookup table of the given arguments.

    Only names with an internal capital letter are bridged, and only when their
    kebab spelling differs and is not itself a declared argument.
    """
    table = {}
    for name in arguments:
        if not re.search(r"(?<!^)[A-Z]", name):
            continue
        if (kebab := kebabize(name)) != name and kebab not in arguments:
            table[kebab] = name
    return table


def normalize(arguments, kebab=False, /):
    """
    Reduce argument shapes to the two the scanner understands.

    Returns (flags, reduced)
    - flags: frozenset of '--name' / '-x' spellings of string-or-boolean arguments
      (and their '--kebab-name' spellings when kebab is enabled).
    - reduced: read-only mapping where every type is Shape.STRING or Shape.BOOLEAN;
      with kebab enabled, bridged arguments are also registered under their kebab
      spelling (same shape and multiplicity, no short alias).
    """
    flags = set()
    reduced = {}
    for name, argument in arguments.items():
        if argument.shape is Shape.STRING_OR_BOOLEAN:
            flags.add("--" + name)
            if argument.short is not None:
                flags.add("-" + argument.short)
        reduced[name] = _reduce(argument)

    if kebab:
        for spelling, name in bridge(arguments).items():
            reduced[spelling] = _reduce(arguments[name], short=None)
            if arguments[name].shape is Shape.STRING_OR_BOOLEAN:
                flags.add("--" + spelling)

    return frozenset(flags), MappingProxyType(reduced)


def _reduce(argument, /, **changes):
    shape = Shape.BOOLEAN if argument.shape is Shape.BOOLEAN else Shape.STRING
    return copy.replace(argument, type=shape, **changes)


def rewrite(tokens, flags, /):
    """
    Insert an empty marker value after bare string-or-boolean flags.

    A flag gets the marker when it is the last token or the next token starts
    with '-'. An empty inline value ("--name=") is the bare flag too. Nothing
    after the '--' escape is rewritten.
    """
    rewritten = []
    escaped = False
    for index, token in enumerate(tokens):
        if escaped:
            rewritten.append(token)
            continue
        if token == ESCAPE:
            escaped = True
        elif token.startswith("--") and token.endswith("=") and token[:-1] in flags:
            rewritten.extend((token[:-1], ""))
            continue
        rewritten.append(token)
        if token in flags and (index + 1 == len(tokens) or tokens[index + 1].startswith("-")):
            rewritten.append("")
    return rewritten


def _decode(name, argument, value):
    if argument.shape is Shape.STRING_OR_BOOLEAN and value == "":
        value = True
    if not isinstance(argument.type, Custom):
        return value
    try:
        return argument.type(value)
    except (ValueError, TypeError) as exception:
        raise InvalidValueError(
            "invalid value %r for argument %r (expected %s)" % (value, name, stringify_type(argument)),
            title="invalid value",
            code=FaultCode.INVALID_VALUE,
            input=name,
            value=value,
            hint=str(exception) or "pass a valid %s" % stringify_type(argument),
            cause=exception,
            docs=getdoc(FaultCode.INVALID_VALUE)
        ) from exception


def reconstruct(scanned, arguments, kebab=False, /):
    """
    Turn a raw scan back into the user-facing values.

    Per argument, in order of first appearance
    - kebab merge: for multiple arguments the camelCase values come first and the
      kebab ones after; for single ones camelCase wins. Kebab keys never appear.
    - string-or-boolean: the empty marker value becomes True.
    - custom types: the decoder runs on every value (InvalidValueError on failure).

    Returns Normal(None, values, positionals); the caller fills the subcommand.
    """
    table = bridge(arguments) if kebab else {}
    spellings = {name: spelling for spelling, name in table.items()}

    values = {}
    for key in scanned.values:
        name = table.get(key, key)
        if name in values or name not in arguments:
            continue
        argument = arguments[name]
        sources = [source for source in (name, spellings.get(name)) if source in scanned.values]

        if argument.multiple:
            collected = [value for source in sources for value in scanned.values[source]]
            if collected:
                values[name] = [_decode(name, argument, value) for value in collected]
        else:
            values[name] = _decode(name, argument, scanned.values[sources[0]])

    return Normal(None, values, list(scanned.positionals))


def parse(tokens, command, /, *, scanner=scan):
    """
    Parse argv-like tokens (without the program name) against a Command.

    Parameters
    - tokens: Iterable[str]
    - command: Command
    - scanner: the token scanner, called as scanner(tokens, options, allow_positionals)
      and returning an object with values and positionals (see ordana.scanner).

    Returns
    - Help(subcommand) or Normal(subcommand, values, positionals).

    Raises
    - MissingSubcommandError, InvalidSubcommandError, InvalidDefaultSubcommandError
    - ConflictingShortAliasError, InvalidValueError
    - any fault of the scanner (UnknownOptionError, UnexpectedPositionalError, ...)
    """
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("parse() first argument must be an iterable of strings")
    tokens = list(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse() first argument must be an iterable of strings")
    if not isinstance(command, Command):
        raise TypeError("parse() second argument must be a command")

    selector = tokens[0] if tokens else None
    if selector == HELP:
        return Help(None)

    name, subcommand, used_default = resolve(selector, command.subcommands, command.default)
    if subcommand is None:
        if name is not None:
            raise InvalidDefaultSubcommandError(
                "invalid default subcommand %r" % name,
                title="invalid default subcommand",
                code=FaultCode.INVALID_DEFAULT_SUBCOMMAND,
                input=name,
                hint="declare a subcommand named %r or change the default" % name,
                docs=getdoc(FaultCode.INVALID_DEFAULT_SUBCOMMAND)
            )
        if not selector:
            raise MissingSubcommandError(
                "subcommand is required",
                title="missing subcommand",
                code=FaultCode.MISSING_SUBCOMMAND,
                hint="run '%s --help' to see available commands" % command_line(command),
                docs=getdoc(FaultCode.MISSING_SUBCOMMAND)
            )
        raise _invalid(selector, command)

    remaining = tokens if used_default else tokens[1:]
    if remaining and remaining[0] == HELP:
        return Help(name)

    arguments = merge(command.globals, subcommand.arguments)
    flags, reduced = normalize(arguments, command.kebab)
    scanned = scanner(rewrite(remaining, flags), reduced, subcommand.positionals is not None)
    return reconstruct(scanned, arguments, command.kebab)._replace(subcommand=name)


def _invalid(selector, command):
    selectors = [*command.subcommands]
    for subcommand in command.subcommands.values():
        selectors.extend(subcommand.aliases)
    suggestions = difflib.get_close_matches(selector, selectors, 5)
    try:
        hint = "did you mean %r? you can also run '%s --help' to see available commands" % (
            suggestions[0], command_line(command)
        )
    except IndexError:
        hint = "run '%s --help' to see available commands" % command_line(command)
    return InvalidSubcommandError(
        "invalid subcommand %r" % selector,
        title="invalid subcommand",
        code=FaultCode.INVALID_SUBCOMMAND,
        input=selector,
        suggestions=suggestions,
        hint=hint,
        docs=getdoc(FaultCode.INVALID_SUBCOMMAND)
    )


def invoke(command, prompt=Unset, /, *, shell=True, colorful=True, fancy=False, scanner=scan):
    """
    Parse a prompt the way a shell entry point would.

    Parameters
    - prompt:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string; will be split via shlex.split.
      • Iterable[str]: pre-tokenized sequence.
    - shell: render faults to stderr (errors then exit with status 1) instead of
      raising errors and emitting warnings through the warnings module.
    - colorful, fancy: rendering options for help and faults.

    Behavior
    - On Help, prints the help of the target and returns the outcome.
    - On Normal, returns the outcome.
    """
    if prompt is Unset:
        tokens = sys.argv[1:]
    elif isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
    else:
        raise TypeError("invoke() second argument must be a string or an iterable of strings")

    options = {"command": command, "shell": shell, "colorful": colorful, "fancy": fancy}

    fault = None
    with warnings.catch_warnings(record=True) as records:
        warnings.simplefilter("always")
        try:
            outcome = parse(tokens, command, scanner=scanner)
        except CommandException as exception:
            fault = exception

    for record in records:
        if isinstance(record.message, CommandWarning):
            trigger(record.message, **options)
        else:
            warnings.warn_explicit(record.message, record.category, record.filename, record.lineno)
    if fault is not None:
        trigger(fault, **options)

    match outcome:
        case Help(subcommand=subcommand):
            print_help(command, subcommand, colorful=colorful, fancy=fancy)
    return outcome


__all__ = (
    "HELP",
    "ESCAPE",
    "Help",
    "Normal",
    "resolve",
    "merge",
    "bridge",
    "normalize",
    "rewrite",
    "reconstruct",
    "parse",
    "invoke",
)
