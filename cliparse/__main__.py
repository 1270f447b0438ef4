"""
cliparse sample program.

    python -m cliparse -o short -t 5 -d ./out.txt

Declares
- -o <method> (--output): required, one of short/long.
- -t <threshold> (--threshold): integer.
- -d (--debug), -v (--verbose): switches; -v turns on debug logging.
- <path>: required positional; <value>: optional positional.

On failure the fault, the synopsis and the indented options go to stderr and
the exit code is 1; on success the parsed values go to stdout.
"""
import functools
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.pretty import Pretty
from rich.text import Text

from .configurator import Configurator
from .parser import Parser
from .usage import compose, indent

__prog__ = "cliparse"

logger = logging.getLogger(__name__)


def _enable_logging(console):
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    logger.debug("verbose logging enabled")


def main(argv=None):
    stdout = Console()
    stderr = Console(stderr=True)

    values = dict.fromkeys(("output", "threshold", "path", "value"))
    values["debug"] = False

    configuration = (
        Configurator.create()
            .with_named("o", functools.partial(values.__setitem__, "output"))
                .having_long_alias("output")
                .required()
                .restricted_to("short", "long")
                .described_by("method", "specifies the output method.")
            .with_named("t", functools.partial(values.__setitem__, "threshold"), type=int)
                .having_long_alias("threshold")
                .described_by("threshold", "specifies the threshold used in output.")
            .with_switch("d", functools.partial(values.__setitem__, "debug", True))
                .having_long_alias("debug")
                .described_by("enables debug mode")
            .with_switch("v", functools.partial(_enable_logging, stderr))
                .having_long_alias("verbose")
                .described_by("logs every parsing step")
            .with_positional(functools.partial(values.__setitem__, "path"))
                .required()
                .described_by("path", "path to the output file.")
            .with_positional(functools.partial(values.__setitem__, "value"))
                .described_by("value", "some optional value.")
        .build_configuration()
    )

    result = Parser(configuration).parse(sys.argv[1:] if argv is None else argv)

    if not result:
        usage = compose(configuration)
        stderr.print(result)
        stderr.print(Text("usage: " + usage.arguments))
        stderr.print(Text("options"))
        stderr.print(Text(indent(usage.options, 4).rstrip(os.linesep)))
        return 1

    stdout.print(Pretty(values))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
