"""
cli.py

Entry point for the `hostidentity` command-line interface (CLI).

This module sets up the CLI, parses arguments, applies configuration and
dispatches the requested subcommand.

The CLI allows users to:

- Print every fact as a text, JSON or YAML report (`show` command).
- Print a single fact (`realname`, `hostname`, `langs` ...), optionally in
  fallible mode where a missing fact is an error instead of a default.
- Force a platform strategy, e.g. `fake` for reproducible output.

Functions:
    cli(): Parses CLI arguments, configures logging and the strategy, and
           dispatches the requested subcommand.
"""

import argparse
import sys

from pathlib import Path
from typing import List, Optional

from hostidentity import __version__, __package_name__, __package_home__
from hostidentity import fallible
from hostidentity.config import STRATEGY_NAMES, config
from hostidentity.exceptions.exceptions import ConfigurationError, IdentityError
from hostidentity.interface import facts, show
from hostidentity.interface.commands import Command, OutputFormat
from hostidentity.logging.logger import get_logger
from hostidentity.snapshot import take_snapshot
from hostidentity.strategies import select_strategy


def setup_config(
    strategy: Optional[str] = None,
    log_dir: Optional[Path] = None,
    verbose: bool = False,
) -> None:
    """
    Apply CLI options to the package-wide configuration and strategy.

    Args:
        strategy (Optional[str]): Strategy name, None keeps the current one.
        log_dir (Optional[Path]): Directory for log files.
        verbose (bool, optional): Enable verbose logging. Defaults to False.
    """
    config.verbose = verbose or config.verbose
    if log_dir is not None:
        config.log_dir = log_dir
    if strategy is not None:
        config.strategy = strategy
        fallible.set_strategy(
            select_strategy(strategy, browser_host=config.browser_host)
        )


def dispatch_cli(args: argparse.Namespace, logger) -> int:
    """
    Process CLI arguments and dispatch execution of commands.

    Args:
        args (Namespace): Parsed command-line arguments from argparse.
        logger: Current logging instance

    Returns:
        int: Process exit code.
    """
    if args.command == Command.SHOW.value:
        logger.log_debug(f"Rendering snapshot as {args.format}")
        sys.stdout.write(show.render_snapshot(take_snapshot(), OutputFormat(args.format)))
        return 0

    command = Command(args.command)
    lookup = facts.lookups(args.fallible)[command]
    try:
        print(lookup())
    except IdentityError as e:
        logger.log_error(f"{command.value}: {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog=__package_name__,
        description="Print who is running this process, on what machine and in "
        f"what environment. Visit {__package_home__} for more information.",
        epilog=(
            "A command must be supplied. `show` prints every fact; the other "
            "commands print a single fact."
        ),
    )

    parser.add_argument(
        "--strategy",
        "-s",
        choices=STRATEGY_NAMES,
        help="Force a platform strategy instead of detecting one. "
        "`fake` prints fixed values on every machine.",
    )

    parser.add_argument(
        "--log-dir",
        help="Existing directory to write log files into.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging to console."
    )

    parser.add_argument(
        "--version",
        "--ver",
        action="version",
        version=f"{__package_name__}:{__version__}",
        help="Show program's version number and exit.",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Commands",
        description="Available commands:",
    )

    show.add_subcommands(subparsers)
    facts.add_subcommands(subparsers)

    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    """
    Parse CLI arguments, configure logging and strategy, and execute the
    requested subcommand.

    Returns:
        int: Process exit code.
    """
    args = build_parser().parse_args(argv)

    try:
        setup_config(
            strategy=args.strategy,
            log_dir=Path(args.log_dir) if args.log_dir else None,
            verbose=args.verbose,
        )
        logger = get_logger(config.log_dir, config.verbose, __name__)
    except ConfigurationError as e:
        print(f"{__package_name__}: {e}", file=sys.stderr)
        return 2

    logger.log_debug(
        f'Using Package: "{__package_name__}:{__version__}" '
        f"with strategy {fallible.get_strategy().name}"
    )

    return dispatch_cli(args, logger)


def main() -> None:
    """Console script entry point."""
    sys.exit(cli())


if __name__ == "__main__":
    main()
