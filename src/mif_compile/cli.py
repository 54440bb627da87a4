"""bin2mif - Binary image to Memory Initialization File converter."""
from __future__ import annotations

import re
import warnings

import click

from mif_core.errors import (
    BadNumberFormat,
    EarlyStop,
    ExitStatus,
    InvalidArguments,
    MifError,
    MifWarning,
    NumericOverflow,
)
from mif_core.protocol import DEFAULT_WIDTH, MAX_DEPTH, MAX_WIDTH, MIN_DEPTH

from mif_compile.depth import resolve_depth
from mif_compile.files import STDIO_PATH, open_input, open_output
from mif_compile.generate import generate_mif

_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_count(text: str, low: int, high: int) -> int:
    """Parse a base-10 integer option value bounded to [low, high]."""
    # Leading blanks are skipped, trailing ones are not part of a number.
    stripped = text.lstrip()
    if not _DECIMAL.fullmatch(stripped):
        raise BadNumberFormat(text)
    num = int(stripped)
    if not low <= num <= high:
        raise NumericOverflow(stripped, low, high)
    return num


class Count(click.ParamType):
    """Integer option whose format and range errors keep their own exit status."""

    name = "integer"

    def __init__(self, low: int, high: int):
        self.low = low
        self.high = high

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        return parse_count(value, self.low, self.high)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_path", metavar="[INPUT]", required=False, default=STDIO_PATH)
@click.option("-w", "--width", type=Count(0, MAX_WIDTH), default=DEFAULT_WIDTH, show_default=True,
              help="Bits per word; has to be a multiple of 8.")
@click.option("-d", "--depth", type=Count(MIN_DEPTH, MAX_DEPTH), default=None,
              help="Number of words. Derived from the input size when omitted.")
@click.option("-o", "--output", "output_path", default=STDIO_PATH,
              help="Destination .mif file (default: standard output).")
def cli(input_path: str, width: int, depth: int | None, output_path: str) -> None:
    """Convert a raw binary INPUT (default: standard input) into a .mif file."""
    if width == 0 or width % 8 != 0:
        raise InvalidArguments(f"width has to be a positive multiple of 8, got {width}")
    if depth is not None and depth < 0:
        raise InvalidArguments(f"depth cannot be negative, got {depth}")

    with open_input(input_path) as source:
        depth = resolve_depth(depth, source, width)
        with open_output(output_path) as sink:
            words_written = generate_mif(source, sink, depth, width)
            if words_written != depth:
                raise EarlyStop(depth, words_written)


def _show_warning(message, category, filename, lineno, file=None, line=None):
    """Print MifWarnings as one line, without the source line that raised them."""
    if issubclass(category, MifWarning):
        text = f"WARNING: {message}\n"
    else:
        text = warnings.formatwarning(message, category, filename, lineno, line)
    click.echo(text, file=file, err=file is None, nl=False)


def main(args: list[str] | None = None) -> None:
    try:
        with warnings.catch_warnings():
            warnings.showwarning = _show_warning
            cli.main(args=args, prog_name="bin2mif", standalone_mode=False)
    except click.UsageError as e:
        e.show()
        raise SystemExit(ExitStatus.INVALID_ARGUMENTS)
    except MifError as e:
        # Fail closed with a single-line reason, no stack trace.
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(e.status)
    except click.Abort:
        click.echo("Aborted!", err=True)
        raise SystemExit(ExitStatus.INTERRUPTED)


if __name__ == "__main__":
    main()
