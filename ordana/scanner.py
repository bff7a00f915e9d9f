"""
Ordana token scanner: POSIX-style option scanning over a flat option table.

The scanner only knows two shapes, Shape.STRING and Shape.BOOLEAN; the parsing
engine reduces every richer shape to one of those before calling it, and puts
the results back together afterwards.

Rules
- '--' ends option scanning; every later token is positional.
- '-' alone and every token not starting with '-' is positional.
- '--name=value' carries an inline value (possibly empty); flags reject it.
- '--name' / '-x' of a string option consumes the next token as its value.
- '-xVALUE' gives the rest of the token to the string option x.
- '-abc' expands to '-a -b -c'; the first string option takes the remainder.
- Values are strings for string options and True for boolean ones. Options
  declared multiple collect a list in order; others keep the last value.
"""
import difflib
from collections import deque, namedtuple
from collections.abc import Iterable, Mapping

from .arguments import Argument, Shape
from .faults import *
from .utils import *

Scanned = namedtuple("Scanned", ("values", "positionals"))
Scanned.__doc__ = """
Raw scan result: values (name → str | True | list) and positionals (list[str]).
"""


def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")[number - 1]
    except IndexError:
        pass
    if 10 < number % 100 < 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


def _tables(options):
    """
    Build the '--name' and '-x' lookup tables, validating the option shapes.
    """
    if not isinstance(options, Mapping):
        raise TypeError("scan() 'options' must be a mapping of names to arguments")

    longs = {}
    shorts = {}
    for name, argument in options.items():
        if not isinstance(argument, Argument):
            raise TypeError("scan() 'options' values must be arguments")
        if argument.type not in (Shape.STRING, Shape.BOOLEAN):
            raise TypeError(f"scan() option {name!r} must be of type 'string' or 'boolean'")
        longs["--" + name] = name
        if argument.short is not None:
            shorts["-" + argument.short] = name
    return longs, shorts


def _unknown(input, switches, index):
    suggestions = difflib.get_close_matches(input, switches, 5)
    try:
        hint = "did you mean %r? run with --help to see all options" % suggestions[0]
    except IndexError:
        hint = "run with --help to see all available options"
    return UnknownOptionError(
        "unknown option %r at %s position" % (input, _ordinal(index)),
        title="unknown option",
        code=FaultCode.UNKNOWN_OPTION,
        input=input,
        suggestions=suggestions,
        hint=hint,
        docs=getdoc(FaultCode.UNKNOWN_OPTION)
    )


def scan(tokens, options, allow_positionals=False):
    """
    Scan argv-like tokens against an option table.

    Parameters
    - tokens: Iterable[str]
    - options: Mapping[str, Argument], every type being Shape.STRING or Shape.BOOLEAN.
    - allow_positionals: bool, positional tokens are an error when False.

    Returns
    - Scanned(values, positionals), both freshly allocated.

    Raises
    - UnknownOptionError, FlagAssignmentError, OptionValueRequiredError,
      AmbiguousOptionValueError, UnexpectedPositionalError.
    - EmptyInlineValueWarning is emitted (not raised) for '--name=' on a string option.
    """
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("scan() 'tokens' must be an iterable of strings")
    longs, shorts = _tables(options)

    values = {}
    positionals = []

    def store(name, value):
        if options[name].multiple:
            values.setdefault(name, []).append(value)
        else:
            values[name] = value

    def positional(token, index):
        if not allow_positionals:
            raise UnexpectedPositionalError(
                "this command does not take positional arguments (got %r at %s position)" % (
                    token, _ordinal(index)
                ),
                title="unexpected positional argument",
                code=FaultCode.UNEXPECTED_POSITIONAL,
                input=token,
                hint="remove it or run with --help to see the accepted usage",
                docs=getdoc(FaultCode.UNEXPECTED_POSITIONAL)
            )
        positionals.append(token)

    def consume(name, input, index):
        # spaced value: the next token, whatever it looks like, unless it looks like an option
        try:
            value = queue.popleft()
        except IndexError:
            raise OptionValueRequiredError(
                "option %r at %s position requires a value" % (input, _ordinal(index)),
                title="missing option value",
                code=FaultCode.OPTION_VALUE_REQUIRED,
                input=input,
                hint="pass a value after it (for example: %s <value>)" % input,
                docs=getdoc(FaultCode.OPTION_VALUE_REQUIRED)
            ) from None
        if len(value) > 1 and value.startswith("-"):
            raise AmbiguousOptionValueError(
                "option %r at %s position got the ambiguous value %r" % (input, _ordinal(index), value),
                title="ambiguous option value",
                code=FaultCode.AMBIGUOUS_OPTION_VALUE,
                input=input,
                value=value,
                hint="use the inline form if the value starts with '-' (for example: %s=%s)" % (
                    "--" + name, value
                ),
                docs=getdoc(FaultCode.AMBIGUOUS_OPTION_VALUE)
            )
        store(name, value)

    queue = deque(tokens)
    index = 0
    while queue:
        token = queue.popleft()
        index += 1
        if not isinstance(token, str):
            raise TypeError("scan() 'tokens' must be an iterable of strings")

        if token == "--":
            while queue:
                index += 1
                positional(queue.popleft(), index)
            break

        if token == "-" or not token.startswith("-"):
            positional(token, index)
        elif token.startswith("--"):
            input, separator, value = token.partition("=")
            try:
                name = longs[input]
            except KeyError:
                raise _unknown(input, [*longs, *shorts], index) from None

            if options[name].type is Shape.BOOLEAN:
                if separator:
                    raise FlagAssignmentError(
                        "flag %r at %s position cannot have an inline value" % (input, _ordinal(index)),
                        title="flag cannot take a value",
                        code=FaultCode.FLAG_ASSIGNMENT,
                        input=input,
                        hint="remove everything from '=' (for example: %s)" % input,
                        docs=getdoc(FaultCode.FLAG_ASSIGNMENT)
                    )
                store(name, True)
            elif separator:
                if not value:
                    trigger(EmptyInlineValueWarning(
                        "empty inline value for option %r at %s position" % (input, _ordinal(index)),
                        title="empty inline value",
                        code=FaultCode.EMPTY_INLINE_VALUE,
                        input=input,
                        hint="add a value after '=' (for example: %s=<value>)" % input,
                        docs=getdoc(FaultCode.EMPTY_INLINE_VALUE)
                    ))
                store(name, value)
            else:
                consume(name, input, index)
        else:
            for position in range(1, len(token)):
                input = "-" + token[position]
                try:
                    name = shorts[input]
                except KeyError:
                    raise _unknown(input, [*longs, *shorts], index) from None

                if options[name].type is Shape.BOOLEAN:
                    store(name, True)
                    continue
                if remainder := token[position + 1:]:
                    store(name, remainder)
                else:
                    consume(name, input, index)
                break

    return Scanned(values, positionals)


__all__ = (
    "Scanned",
    "scan",
)
