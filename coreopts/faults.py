"""
Coreopts faults (parse errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every error kind the engine can
  produce. Codes are grouped by stage (matching, values, operands).
- ParseError: base type carrying a message plus an immutable options mapping
  (input, candidates, value, identity, operand, ...) and knowing how to render
  itself through rich.
- report(): entry point for the diagnostics surface; prints a fault to stderr.

Every fault is fatal to the parse that produced it: the parser raises the first
one and never recovers. Turning a fault into an exit status is left to callers.

Host configuration (read from __main__)
- __prog__: program name shown in the fault header.
- __styles__: rich style overrides, keyed by role ("code", "error-title", ...).
- __codes__: mapping FaultCode -> label, to relabel numeric codes.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - option matching (1111x): UNKNOWN_OPTION, AMBIGUOUS_OPTION,
      MISSING_REQUIRED_VALUE, UNEXPECTED_VALUE
    - values (1112x): AMBIGUOUS_VALUE, INVALID_VALUE
    - operands (1113x): MISSING_OPERAND, EXCESS_OPERAND
    """
    # --- option matching ---
    UNKNOWN_OPTION              = 11111
    AMBIGUOUS_OPTION            = 11112
    MISSING_REQUIRED_VALUE      = 11113
    UNEXPECTED_VALUE            = 11114

    # --- values ---
    AMBIGUOUS_VALUE             = 11121
    INVALID_VALUE               = 11122

    # --- operands ---
    MISSING_OPERAND             = 11131
    EXCESS_OPERAND              = 11132

    def normalize(self):
        """
        return the host label for this code, or its numeric value as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base class of every parse fault.

    the message is one lowercased sentence; everything structured lives in
    `options` (read-only) and is also reachable as attributes, e.g. `fault.input`.
    """
    code = Unset
    title = "parse error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = self.options.get("prog") or getattr(main, "__prog__", None) or "coreopts"

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " - ",
            text(self.code.normalize() if self.code else "", "code"),
            " | ",
            text(self.title, "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")
        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(ParseError):
    code = FaultCode.UNKNOWN_OPTION
    title = "unrecognized option"


class AmbiguousOptionError(ParseError):
    code = FaultCode.AMBIGUOUS_OPTION
    title = "ambiguous option"


class AmbiguousValueError(ParseError):
    code = FaultCode.AMBIGUOUS_VALUE
    title = "ambiguous argument"


class MissingRequiredValueError(ParseError):
    code = FaultCode.MISSING_REQUIRED_VALUE
    title = "option requires an argument"


class UnexpectedValueError(ParseError):
    code = FaultCode.UNEXPECTED_VALUE
    title = "option doesn't allow an argument"


class InvalidValueError(ParseError):
    code = FaultCode.INVALID_VALUE
    title = "invalid argument"


class MissingOperandError(ParseError):
    code = FaultCode.MISSING_OPERAND
    title = "missing operand"


class ExcessOperandError(ParseError):
    code = FaultCode.EXCESS_OPERAND
    title = "extra operand"


def report(fault, /, **options):
    """
    print a fault to stderr through rich.

    options are merged into the fault before rendering (prog, fancy, colorful,
    hint, ...). the fault is not raised; callers decide what happens next.
    """
    if not isinstance(fault, ParseError):
        raise TypeError("report() argument must be a parse error")
    console.print(fault.__replace__(**options) if options else fault)


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownOptionError",
    "AmbiguousOptionError",
    "AmbiguousValueError",
    "MissingRequiredValueError",
    "UnexpectedValueError",
    "InvalidValueError",
    "MissingOperandError",
    "ExcessOperandError",
    "report",
)
