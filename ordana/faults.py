"""
Ordana faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The parsing engine raises faults directly; it never prints.
- invoke() re-triggers them with shell options: in shell mode they are rendered
  to stderr via rich (errors then exit with status 1); otherwise errors are
  raised and warnings go through the warnings module.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, command_line

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • MISSING_SUBCOMMAND, INVALID_SUBCOMMAND, INVALID_DEFAULT_SUBCOMMAND
    - options (1111x)
      • UNKNOWN_OPTION, FLAG_ASSIGNMENT, OPTION_VALUE_REQUIRED, AMBIGUOUS_OPTION_VALUE
    - positionals (1112x)
      • UNEXPECTED_POSITIONAL
    - values and schema (1113x)
      • INVALID_VALUE, CONFLICTING_SHORT_ALIAS
    - warnings (12xxx)
      • EMPTY_INLINE_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing errors (1110x) ---
    MISSING_SUBCOMMAND          = 11101
    INVALID_SUBCOMMAND          = 11102
    INVALID_DEFAULT_SUBCOMMAND  = 11103

    # --- option errors (1111x) ---
    UNKNOWN_OPTION              = 11111
    FLAG_ASSIGNMENT             = 11112
    OPTION_VALUE_REQUIRED       = 11113
    AMBIGUOUS_OPTION_VALUE      = 11114

    # --- positional errors (1112x) ---
    UNEXPECTED_POSITIONAL       = 11121

    # --- value and schema errors (1113x) ---
    INVALID_VALUE               = 11131
    CONFLICTING_SHORT_ALIAS     = 11132

    # --- warnings (12xxx) ---
    EMPTY_INLINE_VALUE          = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, title):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - header: "[ prog — code | title ]"
    - body: the message, then "→ hint" (and the docs line when the host provides one)
    - fancy: the body wrapped in a Panel titled with the header
    """
    main = sys.modules.get("__main__")
    options = fault.options
    colorful = options.get("colorful", True)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    if (command := options.get("command")) is not None:
        prog = command_line(command)
    else:
        prog = getattr(main, "__prog__", "ordana")

    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(code.normalize() if (code := options.get("code")) else "-", styler("code")),
        " | ",
        text(options.get("title", "fault").title(), styler(title)),
        " ]"
    )
    body = [text(fault.message or "", styler(title.replace("title", "message")))]
    if hint := options.get("hint"):
        body.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
    if docs := options.get("docs"):
        body.append(text(docs, styler("docs")))

    if options.get("fancy", False):
        return Panel(Group(*body), title=header, title_align="left")
    return Group(header, *body)


class CommandException(Exception):
    """
    base class of every parsing error.

    message is the one-sentence, lowercased body; options carry rendering and
    context data (title, code, hint, docs, command, shell, fancy, colorful, and
    any fault-specific detail such as input or name).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "underline #00E5FF dim",
        }, "error-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.options.get("cause")
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingSubcommandError(CommandException): ...
class InvalidSubcommandError(CommandException): ...
class InvalidDefaultSubcommandError(CommandException): ...
class UnknownOptionError(CommandException): ...
class FlagAssignmentError(CommandException): ...
class OptionValueRequiredError(CommandException): ...
class AmbiguousOptionValueError(CommandException): ...
class UnexpectedPositionalError(CommandException): ...
class InvalidValueError(CommandException): ...
class ConflictingShortAliasError(CommandException): ...


class CommandWarning(ABC, Warning):
    """
    base class of every non-fatal parsing condition.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs": "underline #FFB400 dim",
        }, "warning-title")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack(0)))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptyInlineValueWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, errors are
      raised and warnings are emitted through the warnings module.

    typical options
    - command, shell, fancy, colorful, title, code, hint, docs, and any other
      context the reporter may want to show (e.g., input/name).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(sys.modules.get("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "CommandException",
    "MissingSubcommandError",
    "InvalidSubcommandError",
    "InvalidDefaultSubcommandError",
    "UnknownOptionError",
    "FlagAssignmentError",
    "OptionValueRequiredError",
    "AmbiguousOptionValueError",
    "UnexpectedPositionalError",
    "InvalidValueError",
    "ConflictingShortAliasError",
    "CommandWarning",
    "EmptyInlineValueWarning",
    "trigger",
    "getdoc",
)
