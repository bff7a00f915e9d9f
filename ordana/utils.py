"""
Ordana utilities (internal helpers, carefully exposed)

Scope
- Core building blocks used across the package for consistent semantics and UX.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the schema, parsing and presentation layers.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks and help.

- mirror("attr") / SpecType
  • Read-only property factory exposing a private backing field (self._attr) as a frozen
    view, and the metaclass that wires those properties for every schema class.

- kebabize(name)
  • camelCase → kebab-case spelling used by the name bridge ("fooBar" → "foo-bar").

- Stringifiers shared by help and docs rendering
  • stringify_positionals, stringify_type, stringify_argument, alias_list, command_line.

Usage guidance
- Prefer Unset for API defaults when None is a meaningful user value; materialize with coalesce().
- Use mirror() to expose internal state safely as read-only properties.

Quick examples
    >>> one = coalesce(Unset, "fallback")  # "fallback"
    >>> two = coalesce(None, "fallback")    # None  (None is preserved)
    >>> kebabize("XMLParser")
    'xml-parser'
"""
import builtins
import functools
import math
import operator
import os.path
import re
import sys
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
- Typical pattern: value = coalesce(user_value, default).
"""


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    This returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "", or [] are
    preserved as-is.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Shallow-freeze container values for public exposure.

    - Sequence (non-string) → tuple
    - Mapping → MappingProxyType (read-only view)
    - Set → frozenset
    - anything else → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(object)
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads from an attribute named "_{name}" on the
    instance and returns a read-only view for container types.

    Example
    - Given self._aliases, declare aliases = mirror("aliases") to expose it safely.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


class SpecType(type):
    """
    Metaclass shared by the schema classes (arguments, positionals, commands).

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by a private "_{name}" attribute (see mirror()).
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in validation messages ("argument 'short' must be ...").
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(type=<Shape.BOOLEAN: 'boolean'>, descr=None, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


@functools.cache
def kebabize(name, /):
    """
    Convert a camelCase name into its kebab-case spelling.

    A hyphen goes before each uppercase letter that opens a capitalized word
    and before each uppercase run that follows a lowercase letter or digit;
    the result is lowercased.

    Examples
    - kebabize("fooBar")          -> "foo-bar"
    - kebabize("XMLParser")       -> "xml-parser"
    - kebabize("getHTTPResponse") -> "get-http-response"
    - kebabize("plain")           -> "plain"
    """
    if not isinstance(name, str):
        raise TypeError("kebabize() argument must be a string")
    return re.sub(r"(?<=[^\W_])(?=[A-Z][a-z])|(?<=[a-z\d])(?=[A-Z])", "-", name).lower()


def stringify_positionals(positionals, /):
    """
    Render a positionals spec as usage placeholders.

    Required slots (below minimum) render as <name>, optional ones as [name].
    Missing placeholder names fall back to arg0, arg1, ... An unbounded maximum
    renders as many slots as there are named placeholders (at least minimum).

    Examples
    - Positionals(minimum=1, maximum=3, placeholders=["foo", "bar"]) -> "<foo> [bar] [arg2]"
    - None                                                           -> ""
    """
    if positionals is None or positionals is Unset:
        return ""

    maximum = positionals.maximum
    if math.isinf(maximum):
        maximum = max(len(positionals.placeholders), positionals.minimum)

    placeholders = []
    for index in range(int(maximum)):
        try:
            placeholder = positionals.placeholders[index]
        except IndexError:
            placeholder = "arg%d" % index
        placeholders.append(("[%s]" if index >= positionals.minimum else "<%s>") % placeholder)
    return " ".join(placeholders)


def stringify_type(argument, /):
    """
    Return the type label of an argument ("string", "boolean", "string | boolean"
    or the docstype of a custom type).
    """
    label = str(getattr(argument.type, "docstype", argument.type))
    if label == "string|boolean":
        return "string | boolean"
    return label


def stringify_argument(name, argument, /):
    """
    Return the flag spelling of an argument as shown in help and docs.

    Examples
    - boolean with short alias   -> "-f, --foo"
    - string                     -> "--foo <foo>"
    - string|boolean placeholder -> "--foo [bar]"
    """
    spelling = ""
    if argument.short:
        spelling += "-%s, " % argument.short
    spelling += "--%s" % name
    match str(getattr(argument.type, "shape", argument.type)):
        case "string":
            spelling += " <%s>" % (argument.placeholder or name)
        case "string|boolean":
            spelling += " [%s]" % (argument.placeholder or name)
    return spelling


def alias_list(subcommand, default=False, /):
    """
    List the spellings that select a subcommand besides its name.

    The default subcommand is reachable with no selector at all, which is
    represented by a leading None.
    """
    aliases = list(subcommand.aliases)
    if default:
        aliases.insert(0, None)
    return aliases


def command_line(command, subcommand=None, /):
    """
    Return "<command>" or "<command> <subcommand>".

    The command name falls back to __prog__ in __main__, then to the basename
    of sys.argv[0], then to "command".
    """
    name = command.name
    if name is None:
        name = getattr(sys.modules.get("__main__"), "__prog__", None)
    if name is None:
        name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "command"
    return "%s %s" % (name, subcommand) if subcommand else name


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "kebabize",
    "stringify_positionals",
    "stringify_type",
    "stringify_argument",
    "alias_list",
    "command_line",

    # Types
    "UnsetType",
    "SpecType",

    # Constants
    "Unset",
)
