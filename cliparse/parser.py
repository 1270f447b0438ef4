"""
cliparse parsing engine.

What this module provides
- Parser: binds a Configuration once and parses any number of token vectors.
- parse(tokens, configuration): functional shortcut for one-off parses.
- ParseResult: (succeeded, message, fault) outcome of a parse.
- check_for_values(value, *allowed): validation helper for callbacks.

Algorithm
- single left-to-right pass over a deque of tokens, no backtracking:
  • "--alias" → resolved through configuration.aliases;
  • "-name"   → resolved among named arguments and switches by short name;
  • anything else → next pending positional argument, in declaration order.
- a switch fires its callback; a named argument consumes exactly the next token,
  checks its allowed values, converts it and fires its callback.
- after the loop the first still-required argument (declaration order) fails
  the parse.

Failure model
- fail-fast: the first ParseError aborts the parse and becomes the result; the
  callbacks that already ran are not rolled back.
- a ParseError raised from inside a callback is reported the same way, which is
  how check_for_values plugs into parsing. Any other exception raised by a
  callback propagates to the caller unchanged.
"""
import logging
from collections import deque, namedtuple
from collections.abc import Iterable

from .arguments import Named, Positional, Switch
from .configuration import Configuration
from .faults import *

logger = logging.getLogger(__name__)


class ParseResult(namedtuple("ParseResult", ("succeeded", "message", "fault"), defaults=(None, None))):
    """
    Outcome of a parse.

    - succeeded: True when every token was consumed and every required argument
      was satisfied.
    - message: None on success; otherwise the diagnostic of the first failure.
    - fault: None on success; otherwise the ParseError behind the message.

    A result is truthy exactly when it succeeded.
    """
    __slots__ = ()

    def __bool__(self):
        return self.succeeded

    def __rich__(self):
        if self.fault is not None:
            return self.fault
        return self.message or ""


def check_for_values(value, /, *allowed):
    """
    Return `value` when it is one of `allowed`, otherwise raise ValueNotAllowedError.

    Meant for callbacks: raised during a parse, the error becomes the failed
    ParseResult of that parse.
    """
    if value not in allowed:
        raise ValueNotAllowedError(
            Errors.value_not_allowed(value, allowed),
            title="value not allowed",
            code=FaultCode.VALUE_NOT_ALLOWED,
            hint="use one of: %s" % ", ".join(map(str, allowed)),
            value=value,
            allowed=allowed,
        )
    return value


def _sanitize_tokens(tokens):
    if isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("parse() argument must be an iterable of strings")
    tokens = list(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() argument must be an iterable of strings")
    return tokens


class Parser:
    """
    Parsing engine bound to one Configuration.

    The short-name lookup is computed once here; everything that changes during
    a parse (token queue, pending positionals, required set) is local to the
    parse call, so a Parser can be shared between threads as long as the bound
    callbacks can.

    On short-name collisions between arguments, the first declared wins.
    """

    def __init__(self, configuration, /):
        if not isinstance(configuration, Configuration):
            raise TypeError("Parser() argument must be a configuration")
        self._configuration = configuration
        self._names = {}
        for index, argument in enumerate(configuration.arguments):
            match argument:
                case Named(name=name) | Switch(name=name):
                    self._names.setdefault(name, index)

    @property
    def configuration(self):
        return self._configuration

    def parse(self, tokens, /):
        """
        Parse a token vector (program name excluded) against the configuration.

        Returns
        - ParseResult(True) on success.
        - ParseResult(False, message, fault) on the first failure.

        Raises
        - TypeError: when tokens is not an iterable of strings.
        - anything a callback raises, except ParseError.
        """
        tokens = deque(_sanitize_tokens(tokens))
        logger.debug("parsing %d token(s)", len(tokens))
        try:
            self._parse(tokens)
        except ParseError as fault:
            logger.debug("parse failed: %s", fault.message)
            return ParseResult(False, fault.message, fault)
        return ParseResult(True)

    def _parse(self, tokens):
        arguments = self._configuration.arguments
        # ordered set: the first leftover in declaration order is the one reported
        required = dict.fromkeys(sorted(self._configuration.required))
        positionals = deque(index for index, argument in enumerate(arguments) if isinstance(argument, Positional))

        while tokens:
            token = tokens.popleft()

            if token.startswith("--"):
                index = self._resolve_alias(identifier := token[2:])
            elif token.startswith("-"):
                index = self._resolve_name(identifier := token[1:])
            else:
                index = self._parse_positional(token, positionals)
                required.pop(index, None)
                continue

            match argument := arguments[index]:
                case Switch():
                    logger.debug("switch %r fired", identifier)
                    argument()
                case Named():
                    self._parse_named(argument, identifier, tokens)
                    required.pop(index, None)

        self._finalize(required)

    def _resolve_alias(self, alias):
        try:
            return self._configuration.aliases[alias]
        except KeyError:
            raise UnknownArgumentError(
                Errors.unknown_argument(alias),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                hint="check the spelling of '--%s' against the usage" % alias,
                input=alias,
            ) from None

    def _resolve_name(self, name):
        try:
            return self._names[name]
        except KeyError:
            raise UnknownArgumentError(
                Errors.unknown_argument(name),
                title="unknown argument",
                code=FaultCode.UNKNOWN_ARGUMENT,
                hint="check the spelling of '-%s' against the usage" % name,
                input=name,
            ) from None

    @staticmethod
    def _parse_named(argument, identifier, tokens):
        if not tokens:
            raise MissingValueError(
                Errors.missing_value(identifier),
                title="missing value",
                code=FaultCode.MISSING_VALUE,
                hint="pass a value right after '%s'" % identifier,
                input=identifier,
            )
        value = argument.accept(tokens.popleft(), identifier)
        logger.debug("named argument %r bound to %r", identifier, value)
        argument(value)

    def _parse_positional(self, token, positionals):
        if not positionals:
            raise TooManyPositionalsError(
                Errors.TOO_MANY_POSITIONALS,
                title="too many positionals",
                code=FaultCode.TOO_MANY_POSITIONALS,
                hint="remove the extra value %r" % token,
                value=token,
            )
        index = positionals.popleft()
        placeholder = self._configuration.help_of(index).placeholder
        value = self._configuration.arguments[index].accept(token, "<%s>" % placeholder)
        logger.debug("positional argument <%s> bound to %r", placeholder, value)
        self._configuration.arguments[index](value)
        return index

    def _finalize(self, required):
        for index in required:
            match argument := self._configuration.arguments[index]:
                case Named(name=name):
                    raise MissingRequiredNamedError(
                        Errors.required_named_is_missing(name),
                        title="missing required argument",
                        code=FaultCode.MISSING_REQUIRED_NAMED,
                        hint="add '-%s <%s>'" % (name, self._configuration.help_of(index).placeholder),
                        input=name,
                    )
                case _:
                    raise MissingRequiredPositionalError(
                        Errors.REQUIRED_POSITIONAL_IS_MISSING,
                        title="missing required positional",
                        code=FaultCode.MISSING_REQUIRED_POSITIONAL,
                        hint="add a value for <%s>" % self._configuration.help_of(index).placeholder,
                        argument=argument,
                    )


def parse(tokens, configuration, /):
    """
    Parse `tokens` against `configuration` (see Parser.parse).
    """
    return Parser(configuration).parse(tokens)


__all__ = (
    "ParseResult",
    "Parser",
    "parse",
    "check_for_values",
)
