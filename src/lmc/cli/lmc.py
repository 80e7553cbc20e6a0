"""
lmc - Little Man Computer Command-Line Interface
================================================

Assembles a Little Man Computer source file and either runs it or prints
the assembled memory image.

Usage Examples
--------------
Assemble and run:
    $ lmc countdown.lmc

Show the assembled image instead of running:
    $ lmc --show countdown.lmc

Stop runaway programs and trace execution:
    $ lmc --max-steps 10000 --trace countdown.lmc
"""

from pathlib import Path
from typing import Optional
import dataclasses
import logging
import sys

import click

from lmc import __version__
from lmc.assembler import Assembler
from lmc.cli.errors import ExitCode, handle_cli_exception
from lmc.emulator import ConsoleIO, Emulator, EmulatorConfig, StopReason


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-s", "--show",
    is_flag=True,
    help="Print the assembled memory image instead of running it",
)
@click.option(
    "-n", "--max-steps",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many instructions (default: no limit, "
         "or LMC_MAX_STEPS)",
)
@click.option(
    "-t", "--trace",
    is_flag=True,
    help="Log every executed instruction to stderr",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="lmc")
def main(
    input_file: Path,
    show: bool,
    max_steps: Optional[int],
    trace: bool,
    verbose: bool,
) -> None:
    """
    Assemble and run a Little Man Computer program.

    INPUT_FILE is the assembly source file (.lmc).

    Each INP reads one integer from standard input after an "lmc> "
    prompt; each OUT prints the accumulator on its own line.

    \b
    Examples:
        lmc add.lmc                 # assemble and run
        lmc -s add.lmc              # print the memory image
        lmc -n 10000 loop.lmc       # give up after 10000 instructions
    """
    setup_logging(verbose or trace)

    asm = Assembler(verbose=verbose)
    try:
        image = asm.assemble_file(input_file)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")

    if show:
        for line in image.dump():
            click.echo(line)
        return

    try:
        config = EmulatorConfig.from_env()
    except ValueError as e:
        handle_cli_exception(click.BadParameter(f"LMC_MAX_STEPS: {e}"), verbose=verbose)

    overrides = {}
    if max_steps is not None:
        overrides["max_steps"] = max_steps
    if trace:
        overrides["trace"] = True
    config = dataclasses.replace(config, **overrides)

    emu = Emulator(image, io=ConsoleIO(prompt=config.prompt), config=config)
    try:
        result = emu.run()
    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Runtime")

    if verbose:
        click.echo(str(result), err=True)

    if result.reason is StopReason.MAX_STEPS:
        click.echo(f"Error: {result}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)


if __name__ == "__main__":
    main()
