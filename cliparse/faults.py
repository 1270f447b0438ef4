"""
cliparse faults (parse failures) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse failure.
- Errors: the message catalogue; every diagnostic the engine can produce is
  spelled here and nowhere else.
- ParseError and its subclasses: the closed failure taxonomy. Each fault carries
  its message plus read-only options (title, code, hint, and context) and knows
  how to render itself with rich.

Integration
- The parsing engine raises these faults internally and converts the first one
  into a failed ParseResult; they never escape parse().
- Callbacks may raise them too (see cliparse.parser.check_for_values); such
  faults are reported exactly like engine faults.
- Hosts may tune the rendering through __main__ hooks:
  • __prog__: program name shown in the header (defaults to sys.argv[0]).
  • __styles__: rich style overrides keyed by palette name.
  • __codes__: relabeling of fault codes (see FaultCode.normalize).
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain; both bands share the 1111x-1112x range)
    - named arguments and switches: 11112, 11117, 11124, 11126, 11127
      • UNKNOWN_ARGUMENT, MISSING_VALUE, VALUE_NOT_ALLOWED,
        MISSING_REQUIRED_NAMED, UNCONVERTIBLE_VALUE
    - positionals: 11121, 11125
      • TOO_MANY_POSITIONALS, MISSING_REQUIRED_POSITIONAL

    spacing leaves room for future additions without reshuffling existing codes.
    """
    # --- named/switch errors (11xxx) ---
    UNKNOWN_ARGUMENT            = 11112
    MISSING_VALUE               = 11117
    VALUE_NOT_ALLOWED           = 11124
    MISSING_REQUIRED_NAMED      = 11126
    UNCONVERTIBLE_VALUE         = 11127

    # --- positional errors (11xxx) ---
    TOO_MANY_POSITIONALS        = 11121
    MISSING_REQUIRED_POSITIONAL = 11125

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class Errors:
    """
    Message catalogue for parse failures.

    Names (in backticks) and values are quoted verbatim so that users can copy
    them back into a corrected command line.
    """
    TOO_MANY_POSITIONALS = "Too many unnamed (positional) arguments."
    REQUIRED_POSITIONAL_IS_MISSING = "Required unnamed (positional) argument is missing."

    @staticmethod
    def unknown_argument(name):
        return "Unknown named argument `%s`." % name

    @staticmethod
    def missing_value(name):
        return "Named argument `%s` has no value." % name

    @staticmethod
    def required_named_is_missing(name):
        return "Required argument `%s` is missing." % name

    @staticmethod
    def value_not_allowed(value, allowed):
        return "Value `%s` is not amongst allowed values `%s`." % (value, ", ".join(map(str, allowed)))

    @staticmethod
    def unconvertible_value(value, name, type, cause):
        return "Value `%s` of argument `%s` cannot be converted to %s: %s." % (
            value, name, getattr(type, "__name__", repr(type)), str(cause).rstrip(".")
        )


class ParseError(Exception):
    """
    Base type of every parse failure.

    Carries a one-sentence message and read-only options. The options commonly
    include title, code (FaultCode) and hint; anything else is context for
    renderers and callers (input, value, allowed, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "cliparse")
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(code.normalize() if code is not None else "?", "code"),
            " | ",
            text(self.options.get("title", "parse error").title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")

        if not (hint := self.options.get("hint")):
            return Group(header, message)

        return Group(header, message, Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))


class UnknownArgumentError(ParseError): ...
class MissingValueError(ParseError): ...
class ValueNotAllowedError(ParseError): ...
class TooManyPositionalsError(ParseError): ...
class MissingRequiredNamedError(ParseError): ...
class MissingRequiredPositionalError(ParseError): ...
class UnconvertibleValueError(ParseError): ...


__all__ = (
    "FaultCode",
    "Errors",
    "ParseError",
    "UnknownArgumentError",
    "MissingValueError",
    "ValueNotAllowedError",
    "TooManyPositionalsError",
    "MissingRequiredNamedError",
    "MissingRequiredPositionalError",
    "UnconvertibleValueError",
)
