"""
Token conversion capability.

Every value-bearing argument declares a conversion target (its `type`). This
module maps such a target to a FromToken function `str -> value`:

- a registry of scalar types (str, int, float, complex, Decimal, Fraction,
  Path, bool), extendable through register();
- Enum subclasses, converted by member name and then by member value;
- any other callable, used as its own converter (argparse-style `type=`).

Conversion failures surface as ConversionError (a ValueError) chained to the
original exception, so callers can report the cause without guessing which
exceptions a given converter raises.
"""
import builtins
import enum
import pathlib
from decimal import Decimal
from fractions import Fraction

from .utils import Unset, rename


class ConversionError(ValueError):
    """
    A token could not be converted to the requested type.

    Attributes
    - token: the raw string that failed.
    - type: the conversion target.
    """

    def __init__(self, token, type, /):
        super().__init__("invalid %s value %r" % (getattr(type, "__name__", repr(type)), token))
        self.token = token
        self.type = type


def _to_bool(token):
    match token.lower():
        case "true":
            return True
        case "false":
            return False
    raise ValueError("expected 'true' or 'false', got %r" % token)


def _to_enum(type):
    @rename("to_" + type.__name__.lower())
    def convert(token):
        try:
            return type[token]
        except KeyError:
            pass
        for member in type:
            if str(member.value) == token:
                return member
        raise ValueError("expected one of %s, got %r" % (", ".join(type.__members__), token))
    return convert


_registry = {
    str: str,
    int: int,
    float: float,
    complex: complex,
    bool: _to_bool,
    Decimal: Decimal,
    Fraction: Fraction,
    pathlib.Path: pathlib.Path,
}


def register(type, function=Unset, /):
    """
    Register the FromToken function of a type.

    Forms
    - register(type, function) → function
    - @register(type) on a function

    A later registration overrides an earlier one, including built-ins.
    """
    if not isinstance(type, builtins.type):
        raise TypeError("register() first argument must be a type")

    def wrapper(function, /):
        if not callable(function):
            raise TypeError("register() must be given a callable converter")
        _registry[type] = function
        return function

    return wrapper if function is Unset else wrapper(function)


def resolve(type, /):
    """
    Return the FromToken function for a conversion target.

    Raises
    - TypeError: when the target is neither registered nor callable.
    """
    try:
        return _registry[type]
    except (KeyError, TypeError):  # unhashable targets fall through to callables
        pass
    if isinstance(type, enum.EnumType):
        return _to_enum(type)
    if not callable(type):
        raise TypeError("conversion target must be a type or a callable, not %r" % builtins.type(type).__name__)
    return type


def convert(type, token, /):
    """
    Convert a raw token, wrapping converter failures into ConversionError.
    """
    converter = resolve(type)
    try:
        return converter(token)
    except (ValueError, TypeError, ArithmeticError) as exception:
        raise ConversionError(token, type) from exception


__all__ = (
    "ConversionError",
    "register",
    "resolve",
    "convert",
)
