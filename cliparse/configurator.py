"""
Fluent builder for parsing configurations.

Two phases:
- staging: Configurator accumulates argument declarations, required marks,
  long aliases and help in mutable lists and maps. Every with_* call returns a
  sub-configurator refining the argument just declared; sub-configurators also
  forward with_*/build_* so that declarations chain naturally.
- freezing: build_configuration() materializes fresh argument objects and hands
  everything to an immutable Configuration. Building twice yields two
  independent configurations sharing the same callbacks.

Example
    configuration = (
        Configurator.create()
            .with_named("o", set_output)
                .having_long_alias("output")
                .required()
                .restricted_to("short", "long")
                .described_by("method", "specifies the output method.")
            .with_switch("d", enable_debug)
                .described_by("enables debug mode")
            .with_positional(set_path)
                .required()
                .described_by("path", "path to the output file.")
        .build_configuration()
    )

Registration errors (duplicate short names or aliases, malformed names,
non-callable callbacks, unknown conversion targets) raise immediately.
"""
import logging

from .arguments import Named, Positional, Switch, is_valid_name
from .configuration import Configuration, Help
from .parser import Parser
from .utils import *

logger = logging.getLogger(__name__)


class Configurator:
    """
    Entry point of the fluent builder (see module documentation).
    """

    def __init__(self):
        # (factory, arguments, options) per declaration, in declaration order
        self._declarations = []
        self._required = set()
        self._aliases = {}
        self._help = {}
        self._names = set()

    @classmethod
    def create(cls):
        return cls()

    def with_named(self, name, callback, /, type=str):
        """
        Declare a named argument `-name <value>` whose converted value is passed
        to `callback`.
        """
        return NamedConfigurator(self, self._declare(Named, (name, callback), {"type": type}, name=name))

    def with_positional(self, callback, /, type=str):
        """
        Declare the next positional argument; its converted value is passed to
        `callback`.
        """
        return PositionalConfigurator(self, self._declare(Positional, (callback,), {"type": type}))

    def with_switch(self, name, callback, /):
        """
        Declare a switch `-name`; `callback` is called without arguments.
        """
        return SwitchConfigurator(self, self._declare(Switch, (name, callback), {}, name=name))

    def build_configuration(self):
        configuration = Configuration(
            [factory(*arguments, **options) for factory, arguments, options in self._declarations],
            required=self._required,
            aliases=self._aliases,
            help=self._help,
        )
        logger.debug(
            "built configuration: %d argument(s), %d required, %d alias(es)",
            len(configuration.arguments), len(configuration.required), len(configuration.aliases)
        )
        return configuration

    def build_parser(self):
        return Parser(self.build_configuration())

    def _declare(self, factory, arguments, options, *, name=Unset):
        # construct once so that registration errors surface at the faulty call
        factory(*arguments, **options)
        if name is not Unset:
            if name in self._names:
                raise ValueError(f"argument name {name!r} is already in use")
            self._names.add(name)
        self._declarations.append((factory, arguments, options))
        return len(self._declarations) - 1

    def _alias(self, index, alias):
        if not is_valid_name(alias):
            raise ValueError(f"long alias {alias!r} must be non-empty, without whitespace and leading '-'")
        if self._aliases.setdefault(alias, index) != index:
            raise ValueError(f"long alias {alias!r} is already in use")

    def _restrict(self, index, values):
        factory, arguments, options = self._declarations[index]
        factory(*arguments, **(options := options | {"allowed": values}))
        self._declarations[index] = (factory, arguments, options)


class ArgumentConfigurator:
    """
    Base of the per-argument sub-configurators.

    Forwards with_*/build_* to the parent Configurator so that a chain of
    declarations reads top to bottom.
    """

    def __init__(self, parent, index, /):
        self._parent = parent
        self._index = index

    @property
    def index(self):
        """
        Index of the argument in the configuration that will be built.
        """
        return self._index

    def with_named(self, name, callback, /, type=str):
        return self._parent.with_named(name, callback, type=type)

    def with_positional(self, callback, /, type=str):
        return self._parent.with_positional(callback, type=type)

    def with_switch(self, name, callback, /):
        return self._parent.with_switch(name, callback)

    def build_configuration(self):
        return self._parent.build_configuration()

    def build_parser(self):
        return self._parent.build_parser()


class NamedConfigurator(ArgumentConfigurator):
    def having_long_alias(self, alias, /):
        self._parent._alias(self._index, alias)
        return self

    def required(self):
        self._parent._required.add(self._index)
        return self

    def restricted_to(self, *values):
        """
        Accept only these values (compared by str() with the raw token).
        """
        self._parent._restrict(self._index, values)
        return self

    def described_by(self, placeholder, description, /):
        self._parent._help[self._index] = Help(placeholder, description)
        return self


class PositionalConfigurator(ArgumentConfigurator):
    def required(self):
        self._parent._required.add(self._index)
        return self

    def described_by(self, placeholder, description, /):
        self._parent._help[self._index] = Help(placeholder, description)
        return self


class SwitchConfigurator(ArgumentConfigurator):
    def having_long_alias(self, alias, /):
        self._parent._alias(self._index, alias)
        return self

    def described_by(self, description, /):
        self._parent._help[self._index] = Help(description=description)
        return self


__all__ = (
    "Configurator",
    "ArgumentConfigurator",
    "NamedConfigurator",
    "PositionalConfigurator",
    "SwitchConfigurator",
)
