r"""
cliparse argument model.

Overview
- Variants (a closed set; each class is sealed against subclassing)
  • Named[_T]: option matched by `-name` (or a long alias), consuming exactly one
    value token, optionally restricted to a set of allowed values.
  • Positional[_T]: value bound by order; the Nth positional token goes to the
    Nth declared positional argument.
  • Switch: presence-only option matched by `-name` (or a long alias); no value.

- Dispatch
  The parsing engine and the usage composer tell variants apart with structural
  pattern matching (`match argument: case Named(): ...`), never with flags.

- Identity
  An argument object does not know whether it is required or which aliases it
  has; that is decided by the Configuration, which identifies arguments by their
  index in its ordered argument tuple.

Metadata (sanitized on construction)
- callback: Unset | Callable; Unset turns the argument into a no-op sink.
- name (Named/Switch): non-empty string without whitespace, not starting with
  '-', matched exactly and case-sensitively.
- type (Named/Positional): conversion target, resolved by cliparse.converters.
- allowed (Named): Unset | non-empty iterable; duplicates rejected unless a Set,
  which is sorted by str() for display.
  Compared by the str() form of its values against the raw token.

Quick example:
    >>> from cliparse.arguments import Named, Positional, Switch
    >>> threshold = Named("t", print, type=int)
    >>> path = Positional(print)
    >>> debug = Switch("d", lambda: print("debug"))
"""
import functools
import operator
import re
from collections.abc import Iterable, Set

from . import converters
from .faults import Errors, FaultCode, UnconvertibleValueError, ValueNotAllowedError
from .utils import *


_NAME = re.compile(r"[^\s-]\S*")


def is_valid_name(name, /):
    """
    Whether a string can be used as a short name or a long alias.

    The leading dashes are not part of the name: `-o` is registered as "o" and
    `--output` as "output".
    """
    return isinstance(name, str) and _NAME.fullmatch(name) is not None


class ArgumentType(type):
    """
    Metaclass for argument variants.

    Responsibilities
    - Expose the fields listed in __introspectable__ as read-only properties
      mirroring the private "_{name}" backing fields.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Seal the class when constructed with `final=True`.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

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
            - named(name='o', type=<class 'str'>, allowed=('short', 'long'))
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("final", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_callback(cls, metadata, /):
    """
    Internal: the callback must be Unset or callable.
    """
    if metadata["callback"] is not Unset and not callable(metadata["callback"]):
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the short name of Named and Switch.

    Raises
    - TypeError: when the name is not a string.
    - ValueError: when the name is empty, contains whitespace or starts with '-'.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not is_valid_name(name):
        raise ValueError(f"{cls.__typename__} 'name' must be non-empty, without whitespace and leading '-' (got {name!r})")


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate and normalize metadata for value-bearing arguments.

    Responsibilities
    - type: must resolve to a converter (see cliparse.converters.resolve).
    - allowed (Named only): Unset becomes None (unrestricted). Otherwise it must
      be a non-empty iterable, stored as a tuple. Sets have no order of their
      own and are sorted by str(); other iterables are checked for duplicates
      and keep their order, so display order is stable across processes.
    """
    converters.resolve(metadata["type"])

    if "allowed" not in metadata:
        return

    if (allowed := metadata["allowed"]) is Unset:
        metadata["allowed"] = None
        return
    if not isinstance(allowed, Iterable) or isinstance(allowed, str):
        raise TypeError(f"{cls.__typename__} 'allowed' must be a non-string iterable")
    if isinstance(allowed, Set):
        allowed = tuple(sorted(allowed, key=str))
    else:
        sanitized = []
        for value in allowed:
            if value in sanitized:
                raise ValueError(f"{cls.__typename__} 'allowed' cannot contain duplicates")
            sanitized.append(value)
        allowed = tuple(sanitized)
    if not allowed:
        raise ValueError(f"{cls.__typename__} 'allowed' cannot be empty")
    metadata["allowed"] = allowed


def _convert(argument, token, identifier):
    """
    Internal: convert a raw token for a value-bearing argument.

    Conversion failures are reported as UnconvertibleValueError naming the
    argument by the identifier the user typed.
    """
    try:
        return converters.convert(argument.type, token)
    except converters.ConversionError as exception:
        raise UnconvertibleValueError(
            Errors.unconvertible_value(token, identifier, argument.type, exception.__cause__),
            title="unconvertible value",
            code=FaultCode.UNCONVERTIBLE_VALUE,
            hint="pass a value of type %s" % getattr(argument.type, "__name__", repr(argument.type)),
            input=identifier,
            value=token,
        ) from exception


class Named[_T](metaclass=ArgumentType, final=True):
    """
    Named, value-bearing argument.

    Matched on the command line by `-name` (or by any long alias the
    Configuration registers for it) and consumes exactly one following token.
    """

    __introspectable__ = (
        "name",
        "type",
        "allowed",
    )

    def __new__(cls, name, callback=Unset, /, type=str, allowed=Unset):
        """
        Construct a Named argument.

        Parameters
        - name: str
          Short name, matched via `-name`.
        - callback: Unset | Callable[[_T], Any]
          Receives the converted value.
        - type: type | Callable[[str], _T]
          Conversion target (see cliparse.converters).
        - allowed: Unset | Iterable[_T]
          Values accepted for this argument, compared by their str() form with
          the raw token before conversion.
        """
        metadata = {
            "name": name,
            "callback": callback,
            "type": type,
            "allowed": allowed,
        }
        _sanitize_callback(cls, metadata)
        _sanitize_named_metadata(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, value, /):
        if self._callback is Unset:
            return
        return self._callback(value)

    def accept(self, token, identifier=Unset, /):
        """
        Check and convert the raw value token of this argument.

        Parameters
        - token: the raw value as typed by the user.
        - identifier: how the user referred to the argument (short name or long
          alias); defaults to the short name.

        Raises
        - ValueNotAllowedError: the token is not amongst the allowed values.
        - UnconvertibleValueError: the token cannot be converted to `type`.
        """
        identifier = coalesce(identifier, self.name)
        if self.allowed is not None and token not in {str(value) for value in self.allowed}:
            raise ValueNotAllowedError(
                Errors.value_not_allowed(token, self.allowed),
                title="value not allowed",
                code=FaultCode.VALUE_NOT_ALLOWED,
                hint="use one of: %s" % ", ".join(map(str, self.allowed)),
                input=identifier,
                value=token,
                allowed=self.allowed,
            )
        return _convert(self, token, identifier)


class Positional[_T](metaclass=ArgumentType, final=True):
    """
    Positional, value-bearing argument bound by declaration order.
    """

    __introspectable__ = (
        "type",
    )

    def __new__(cls, callback=Unset, /, type=str):
        metadata = {
            "callback": callback,
            "type": type,
        }
        _sanitize_callback(cls, metadata)
        _sanitize_parametric_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self, value, /):
        if self._callback is Unset:
            return
        return self._callback(value)

    def accept(self, token, identifier="<value>", /):
        """
        Convert the raw token of this argument (see Named.accept).
        """
        return _convert(self, token, identifier)


class Switch(metaclass=ArgumentType, final=True):
    """
    Presence-only argument: its callback runs each time `-name` (or one of its
    long aliases) appears, and no value token is consumed.
    """

    __introspectable__ = (
        "name",
    )

    def __new__(cls, name, callback=Unset, /):
        metadata = {
            "name": name,
            "callback": callback,
        }
        _sanitize_callback(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __call__(self):
        if self._callback is Unset:
            return
        return self._callback()


__all__ = (
    "Named",
    "Positional",
    "Switch",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
