"""
Main entry point for adcirclive.

Usage:
    adcirclive meshes --as table
    adcirclive config --operator alice --asgsadmin alice@example.com \\
        --met_kind ATCF --gridname HSOFS --ncpu 16
    adcirclive xdmf --mesh HSOFS --fort63 --maxele
    adcirclive xdmftv --mesh HSOFS --fort63 --num-datasets 24 --time-increment 3600
"""

import argparse
import sys
from typing import TextIO

from adcirclive.commands import COMMANDS, DEFAULT_COMMAND, CommandContext, usage
from adcirclive.config import load_config
from adcirclive.errors import AdcircLiveError
from adcirclive.logging_utils import get_logger, set_verbose

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adcirclive",
        description="Client for the tools.adcirc.live API",
        usage="adcirclive [--config PATH] [--verbose] <command> [options]",
        epilog="Run 'adcirclive help' for the list of commands.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="INI file with an [adcirclive] section (default: $HOME/asgs-global.conf)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log requests to stderr")
    parser.add_argument("command", nargs="?", default=DEFAULT_COMMAND)
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def main(
    argv: list[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """
    Run one command and return its exit code.

    Args:
        argv: Command-line arguments without the program name.
        stdout: Stream for command output (default: sys.stdout).
        stderr: Stream for usage and error messages (default: sys.stderr).
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    command = COMMANDS.get(args.command)
    if command is None:
        print(f"adcirclive: unknown command '{args.command}'", file=stderr)
        print(usage(), file=stderr)
        return 2

    context = None
    try:
        context = CommandContext(config=load_config(args.config), stdout=stdout, stderr=stderr)
        return command.handler(args.args, context)
    except AdcircLiveError as e:
        logger.debug("%s failed", command.name, exc_info=True)
        print(f"adcirclive {command.name}: {e}", file=stderr)
        return e.exit_code
    finally:
        if context is not None:
            context.close()


def cli() -> None:
    """Console-script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    cli()
