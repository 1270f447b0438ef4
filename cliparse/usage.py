"""
cliparse usage composer.

Renders a Configuration into human-readable help:

- Usage.arguments: one-line synopsis, e.g. `-o <method> <path> [-d]`.
  Required arguments are shown bare, optional ones in brackets.
- Usage.options: one line per argument, the option spec and its description
  separated by a tab, each line terminated by os.linesep, e.g.
  `-o <method = { short | long }> (--output)<TAB>specifies the output method.`

Both are produced in declaration order, which is the order the arguments were
given to the Configuration. Composition has no failure mode and no side effect:
composing twice yields identical strings.

Usage also renders itself with rich (usage line plus a two-column grid);
palette entries can be overridden through __styles__ in __main__.
"""
import os
from collections import defaultdict, namedtuple

from rich.console import Group
from rich.table import Table
from rich.text import Text

from .arguments import Named, Positional, Switch
from .configuration import Configuration


class Usage(namedtuple("Usage", ("arguments", "options"))):
    """
    Composed usage text.

    - arguments: single-line synopsis.
    - options: tab-separated detail block, one os.linesep-terminated line per argument.
    """
    __slots__ = ()

    def __rich__(self):
        styles = defaultdict(str, {
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "usage-section": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "option-name": "bold #FFD600",  # AMBER for option specs
            "argument-description": "#9CA3AF",  # Muted gray
        } | getattr(__import__("__main__"), "__styles__", {}))

        grid = Table.grid(padding=(0, 4))
        grid.add_column(style=styles["option-name"], no_wrap=True)
        grid.add_column(style=styles["argument-description"])
        for line in self.options.splitlines():
            spec, _, description = line.partition("\t")
            grid.add_row(Text(spec), Text(description))

        return Group(
            Text.assemble(("usage: ", styles["usage-label"]), (self.arguments, styles["usage-section"])),
            Text("options", styles["usage-label"]),
            grid,
        )


def _synopsis(argument, help):
    match argument:
        case Named(name=name):
            return "-%s <%s>" % (name, help.placeholder)
        case Positional():
            return "<%s>" % help.placeholder
        case Switch(name=name):
            return "-%s" % name


def _option(argument, help, aliases):
    aliases = " (%s)" % ", ".join("--" + alias for alias in aliases) if aliases else ""
    match argument:
        case Named(name=name, allowed=None):
            spec = "-%s <%s>%s" % (name, help.placeholder, aliases)
        case Named(name=name, allowed=allowed):
            spec = "-%s <%s = { %s }>%s" % (name, help.placeholder, " | ".join(map(str, allowed)), aliases)
        case Positional():
            spec = "<%s>" % help.placeholder
        case Switch(name=name):
            spec = "-%s%s" % (name, aliases)
    return "%s\t%s" % (spec, help.description)


class UsageComposer:
    """
    Composes the Usage of a Configuration.

    Example
        usage = UsageComposer(configuration).compose()
        print(result.message)
        print("usage: " + usage.arguments)
        print("options")
        print(indent(usage.options, 4))
    """

    def __init__(self, configuration, /):
        if not isinstance(configuration, Configuration):
            raise TypeError("UsageComposer() argument must be a configuration")
        self._configuration = configuration

    def compose(self):
        return Usage(self._arguments(), self._options())

    def _arguments(self):
        configuration = self._configuration
        parts = []
        for index, argument in enumerate(configuration.arguments):
            part = _synopsis(argument, configuration.help_of(index))
            parts.append(part if configuration.is_required(index) else "[%s]" % part)
        return " ".join(parts).rstrip()

    def _options(self):
        configuration = self._configuration
        return "".join(
            _option(argument, configuration.help_of(index), configuration.aliases_of(index)) + os.linesep
            for index, argument in enumerate(configuration.arguments)
        )


def compose(configuration, /):
    """
    Compose the Usage of `configuration` (see UsageComposer).
    """
    return UsageComposer(configuration).compose()


def indent(lines, indentation, /):
    """
    Indent every line of an os.linesep-separated block by `indentation` spaces.

    An empty block stays empty.

    Raises
    - TypeError: when lines is not a string or indentation is not an integer.
    """
    if not isinstance(lines, str):
        raise TypeError("indent() first argument must be a string")
    if not isinstance(indentation, int):
        raise TypeError("indent() second argument must be an integer")
    if not lines:
        return ""
    spaces = " " * indentation
    return spaces + lines.replace(os.linesep, os.linesep + spaces)


__all__ = (
    "Usage",
    "UsageComposer",
    "compose",
    "indent",
)
