"""
Immutable parsing configuration.

A Configuration is the single input of both the parsing engine and the usage
composer. It bundles:

- arguments: the ordered tuple of all arguments (Named, Positional, Switch
  mixed, in declaration order). The position of an argument in this tuple is
  its index, and the index is its identity everywhere else.
- required: frozenset of indices that must be satisfied by a parse.
- aliases: read-only mapping from long alias (without "--") to index, kept in
  registration order (which is the order aliases are displayed in).
- help: read-only mapping from index to Help.

It is built once (usually by cliparse.configurator.Configurator), never mutated
afterwards, and can be parsed against any number of token vectors, from any
number of threads.
"""
from collections import namedtuple
from collections.abc import Iterable, Mapping

from .arguments import Named, Positional, Switch, is_valid_name
from .utils import *


class Help(namedtuple("Help", ("placeholder", "description"), defaults=("value", ""))):
    """
    Help metadata of a single argument.

    - placeholder: label of the value in usage text (`<placeholder>`); ignored
      for switches.
    - description: free text shown in the options block.
    """
    __slots__ = ()

    def __new__(cls, placeholder="value", description=""):
        if not isinstance(placeholder, str):
            raise TypeError("help 'placeholder' must be a string")
        elif not (placeholder := placeholder.strip()):
            raise ValueError("help 'placeholder' cannot be empty")
        if not isinstance(description, str):
            raise TypeError("help 'description' must be a string")
        return super().__new__(cls, placeholder, description.strip())


def _index(object, count, what):
    if not isinstance(object, int) or isinstance(object, bool):
        raise TypeError(f"configuration {what} must be argument indices")
    if not 0 <= object < count:
        raise ValueError(f"configuration {what} index {object} is out of range")
    return object


def _sanitize_arguments(metadata, /):
    if not isinstance(metadata["arguments"], Iterable):
        raise TypeError("configuration 'arguments' must be iterable")
    arguments = list(metadata["arguments"])
    for argument in arguments:
        if not isinstance(argument, Named | Positional | Switch):
            raise TypeError("configuration 'arguments' must contain named, positional or switch arguments")
    if len(set(map(id, arguments))) != len(arguments):
        raise ValueError("configuration 'arguments' cannot contain the same argument twice")
    metadata["arguments"] = arguments


def _sanitize_required(metadata, /):
    if not isinstance(required := coalesce(metadata["required"], ()), Iterable):
        raise TypeError("configuration 'required' must be iterable")
    count = len(metadata["arguments"])
    metadata["required"] = {_index(index, count, "'required'") for index in required}
    for index in metadata["required"]:
        if isinstance(metadata["arguments"][index], Switch):
            raise ValueError("configuration 'required' cannot contain switches")


def _sanitize_aliases(metadata, /):
    if not isinstance(aliases := coalesce(metadata["aliases"], {}), Mapping):
        raise TypeError("configuration 'aliases' must be a mapping")
    count = len(metadata["arguments"])
    sanitized = {}
    for alias, index in aliases.items():
        if not is_valid_name(alias):
            raise ValueError(f"configuration alias {alias!r} must be non-empty, without whitespace and leading '-'")
        if isinstance(metadata["arguments"][_index(index, count, "'aliases'")], Positional):
            raise ValueError(f"configuration alias {alias!r} cannot target a positional argument")
        sanitized[alias] = index
    metadata["aliases"] = sanitized


def _sanitize_help(metadata, /):
    if not isinstance(help := coalesce(metadata["help"], {}), Mapping):
        raise TypeError("configuration 'help' must be a mapping")
    count = len(metadata["arguments"])
    for index, entry in help.items():
        _index(index, count, "'help'")
        if not isinstance(entry, Help):
            raise TypeError("configuration 'help' values must be Help instances")
    metadata["help"] = help


class Configuration:
    """
    Immutable snapshot of everything the parser and the usage composer need.

    Parameters
    - arguments: Iterable[Named | Positional | Switch]
      Declaration order; each argument object at most once.
    - required: Iterable[int]
      Indices of required arguments.
    - aliases: Mapping[str, int]
      Long alias → index of a Named or Switch.
    - help: Mapping[int, Help]
      Index → help metadata; arguments without an entry use Help().

    Raises
    - TypeError / ValueError on malformed input. These are programming errors
      of the caller, not parse failures.
    """

    __slots__ = ("_arguments", "_required", "_aliases", "_help")

    arguments = mirror("arguments")
    required = mirror("required")
    aliases = mirror("aliases")
    help = mirror("help")

    def __init__(self, arguments, /, required=Unset, aliases=Unset, help=Unset):
        metadata = {
            "arguments": arguments,
            "required": required,
            "aliases": aliases,
            "help": help,
        }
        _sanitize_arguments(metadata)
        _sanitize_required(metadata)
        _sanitize_aliases(metadata)
        _sanitize_help(metadata)

        for name, object in metadata.items():
            super().__setattr__("_" + name, freeze(object))

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def is_required(self, index, /):
        return index in self._required

    def help_of(self, index, /):
        """
        Help metadata of the argument at `index`, or the default Help().
        """
        try:
            return self._help[index]
        except KeyError:
            return Help()

    def aliases_of(self, index, /):
        """
        Long aliases of the argument at `index`, in registration order.
        """
        return tuple(alias for alias, target in self._aliases.items() if target == index)

    def __repr__(self):
        return "configuration(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "arguments", self._arguments
        yield "required", self._required
        yield "aliases", dict(self._aliases)
        yield "help", dict(self._help)


__all__ = (
    "Help",
    "Configuration",
)
