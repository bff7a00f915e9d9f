r"""
Ordana argument specifications.

Overview
- Shape: closed enumeration of the three argument shapes
  • STRING: expects exactly one textual value (--name value, --name=value, -nvalue).
  • BOOLEAN: presence-only flag (--name, -n).
  • STRING_OR_BOOLEAN: either a following value or bare presence (True).

- Custom[_T]: a user decoder tagged with the primitive shape it consumes
  (STRING or STRING_OR_BOOLEAN) and a label for help/docs.

- Argument[_T]: one declared option (type, descr, placeholder, short alias, multiple).

- Positionals: whether (and how, for documentation) a subcommand takes positionals.

Metadata (sanitized on construction)
- descr/placeholder: Unset | str, non-empty after trimming when provided.
- short: Unset | str, exactly one character that is not '-', '=' or whitespace.
- type: Shape, one of its string values ("string", "boolean", "string|boolean"), or Custom.
- Custom.shape: STRING or STRING_OR_BOOLEAN (a decoder needs some input text).
- Positionals.minimum/maximum: integers, 0 <= minimum <= maximum (maximum may be math.inf).

Immutability
- Every field is exposed through a read-only property (see SpecType in utils).
- Argument supports copy.replace(argument, **changes) to derive a modified copy.

Quick example:
    >>> from ordana.arguments import Argument, Custom, Shape
    >>> port = Argument(Custom(int, docstype="number"), descr="port to listen on", short="p")
    >>> open = Argument(Shape.STRING_OR_BOOLEAN, descr="open the browser", placeholder="path")
    >>> verbose = Argument("boolean", short="v", multiple=True)

Public API
- Enumerations: Shape
- Classes: Custom, Argument, Positionals
"""
import math
from enum import StrEnum

from .utils import *


class Shape(StrEnum):
    """
    primitive argument shapes.

    the token scanner only understands STRING and BOOLEAN; STRING_OR_BOOLEAN is
    layered on top of STRING by the parsing engine (an empty marker value is
    reinterpreted as True).
    """
    STRING            = "string"
    BOOLEAN           = "boolean"
    STRING_OR_BOOLEAN = "string|boolean"


def _sanitize_text(cls, metadata, name, /):
    """
    Internal: validate an optional, non-empty text field in place.

    Raises
    - TypeError: if the value is neither a string nor Unset.
    - ValueError: if the string is empty after trimming.
    """
    if not isinstance(object := metadata[name], str | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    elif isinstance(object, str) and not (object := object.strip()):
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
    metadata[name] = coalesce(object)


def _sanitize_shape(cls, object, /):
    """
    Internal: turn a Shape or its string value into a Shape.
    """
    if not isinstance(object, str):
        raise TypeError(f"{cls.__typename__} 'type' must be a shape or a custom type")
    try:
        return Shape(object)
    except ValueError:
        raise ValueError(
            f"{cls.__typename__} 'type' must be one of {", ".join(map(repr, map(str, Shape)))}"
        ) from None


class Custom[_T](metaclass=SpecType):
    """
    Custom argument type: a decoder plus the primitive shape it consumes.

    The decoder receives
    - a string, when shape is STRING;
    - a string or True, when shape is STRING_OR_BOOLEAN (True stands for a bare flag).

    Calling a Custom instance runs its decoder. For multiple arguments the
    decoder is applied to every occurrence, in order.

    Example
        Custom(lambda v: v if v is True else int(v), Shape.STRING_OR_BOOLEAN, "number | boolean")
    """

    __introspectable__ = (
        "parse",
        "shape",
        "docstype",
    )

    def __new__(cls, parse, /, shape=Shape.STRING, docstype=Unset):
        """
        Construct a Custom type.

        Parameters
        - parse: Callable
          Decoder invoked with the raw value.
        - shape: Shape | str
          STRING or STRING_OR_BOOLEAN. BOOLEAN is rejected since a presence-only
          flag carries nothing to decode.
        - docstype: Unset | str
          Label used in help and docs. Defaults to the decoder's __name__ when it
          is a plain identifier (e.g. "int"); anonymous decoders must name it.
        """
        if not callable(parse):
            raise TypeError(f"{cls.__typename__} 'parse' must be callable")

        if (shape := _sanitize_shape(cls, shape)) is Shape.BOOLEAN:
            raise ValueError(f"{cls.__typename__} 'shape' must be 'string' or 'string|boolean'")

        if docstype is Unset and getattr(parse, "__name__", "").isidentifier():
            docstype = parse.__name__
        metadata = {"docstype": docstype}
        _sanitize_text(cls, metadata, "docstype")
        if metadata["docstype"] is None:
            raise TypeError(f"{cls.__typename__} 'docstype' must be given for anonymous decoders")

        self = super().__new__(cls)
        self._parse = parse
        self._shape = shape
        self._docstype = metadata["docstype"]
        return self

    def __call__(self, value, /):
        return self._parse(value)


class Argument[_T](metaclass=SpecType):
    """
    Named option specification.

    Argument[_T] declares one option of a subcommand (or a global option).
    Its name is the key under which it is declared; the long flag is "--name"
    and, when short is set, the short flag is "-x".

    Highlights
    - type: Shape (or its string value) or a Custom decoder.
    - multiple: when True every occurrence is collected into a list, in the
      order given; otherwise the last occurrence wins.
    - placeholder: label of the value in help and docs (defaults to the name).

    Properties
    - The names listed in __introspectable__ are exposed as read-only attributes.
    - shape: the primitive shape this argument consumes (a Custom's base shape).
    """

    __introspectable__ = (
        "type",
        "descr",
        "placeholder",
        "short",
        "multiple",
    )

    def __new__(
            cls,
            type,
            /,
            descr=Unset,
            placeholder=Unset,
            short=Unset,
            *,
            multiple=False
    ):
        """
        Construct an Argument spec with the provided metadata.

        Parameters
        - type: Shape | str | Custom
          "string", "boolean", "string|boolean" (or the Shape members), or a Custom type.
        - descr: Unset | str
          Short description for help and docs. If Unset, becomes None.
        - placeholder: Unset | str
          Value label in help and docs. If Unset, becomes None (the name is used).
        - short: Unset | str
          Single character alias (e.g. "f" for -f).
        - multiple: bool
          Collect every occurrence into a list instead of keeping the last one.
        """
        metadata = {
            "type": type if isinstance(type, Custom) else _sanitize_shape(cls, type),
            "descr": descr,
            "placeholder": placeholder,
            "short": short,
            "multiple": bool(multiple),
        }
        _sanitize_text(cls, metadata, "descr")
        _sanitize_text(cls, metadata, "placeholder")

        if not isinstance(short, str | Unset):
            raise TypeError(f"{cls.__typename__} 'short' must be a string")
        elif isinstance(short, str) and (len(short) != 1 or short in "-=" or short.isspace()):
            raise ValueError(f"{cls.__typename__} 'short' must be a single character other than '-' or '='")
        metadata["short"] = coalesce(short)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def shape(self):
        """
        Primitive shape consumed by this argument (the base shape of a Custom type).
        """
        if isinstance(self._type, Custom):
            return self._type.shape
        return self._type

    def __replace__(self, /, **changes):
        """
        Support copy.replace(): build a new Argument with some fields changed.

        None clears an optional field (descr, placeholder, short).
        """
        fields = {name: getattr(self, "_" + name) for name in type(self).__introspectable__} | changes
        for name in ("descr", "placeholder", "short"):
            if fields[name] is None:
                fields[name] = Unset
        return type(self)(fields.pop("type"), **fields)

    def __eq__(self, other, /):
        if type(other) is not type(self):
            return NotImplemented
        return all(
            getattr(self, "_" + name) == getattr(other, "_" + name) for name in type(self).__introspectable__
        )

    def __hash__(self):
        return hash(tuple(getattr(self, "_" + name) for name in type(self).__introspectable__))


class Positionals(metaclass=SpecType):
    """
    Positional arguments specification of a subcommand.

    Declaring it (even empty) permits positional tokens; omitting it makes any
    positional token an error. minimum, maximum and placeholders only shape the
    usage line in help and docs, they are never enforced while parsing.
    """

    __introspectable__ = (
        "minimum",
        "maximum",
        "placeholders",
    )

    def __new__(cls, minimum=0, maximum=math.inf, placeholders=()):
        """
        Construct a Positionals spec.

        Parameters
        - minimum: int (>= 0)
        - maximum: int (>= minimum) or math.inf for unbounded
        - placeholders: Iterable[str], names of the slots in order
        """
        if not isinstance(minimum, int) or isinstance(minimum, bool):
            raise TypeError(f"{cls.__typename__} 'minimum' must be an integer")
        if minimum < 0:
            raise ValueError(f"{cls.__typename__} 'minimum' cannot be negative")

        if maximum != math.inf and (not isinstance(maximum, int) or isinstance(maximum, bool)):
            raise TypeError(f"{cls.__typename__} 'maximum' must be an integer or math.inf")
        if maximum < minimum:
            raise ValueError(f"{cls.__typename__} 'maximum' cannot be lower than 'minimum'")

        if isinstance(placeholders, str):
            raise TypeError(f"{cls.__typename__} 'placeholders' must be an iterable of strings")
        sanitized = []
        for placeholder in placeholders:
            if not isinstance(placeholder, str):
                raise TypeError(f"{cls.__typename__} 'placeholders' must be an iterable of strings")
            elif not (placeholder := placeholder.strip()):
                raise ValueError(f"{cls.__typename__} 'placeholders' cannot contain empty strings")
            sanitized.append(placeholder)

        self = super().__new__(cls)
        self._minimum = minimum
        self._maximum = maximum
        self._placeholders = tuple(sanitized)
        return self


__all__ = (
    # Enumerations
    "Shape",

    # Classes (specifications)
    "Custom",
    "Argument",
    "Positionals",
)
