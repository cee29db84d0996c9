"""
facts.py

Defines one CLI subcommand per fact (`realname`, `hostname`, `langs` ...)
and the lookup each one performs in fallible or infallible mode.
"""

import argparse

from typing import Callable, Dict

from hostidentity import api, fallible
from hostidentity.interface.commands import Command, FACT_COMMANDS

HELP = {
    Command.REALNAME: "Print the user's full name.",
    Command.USERNAME: "Print the user's username.",
    Command.ACCOUNT: "Print the user's account name.",
    Command.DEVICENAME: "Print the device's pretty name.",
    Command.HOSTNAME: "Print the device's hostname.",
    Command.DISTRO: "Print the operating system name and version.",
    Command.DESKTOP_ENV: "Print the desktop environment.",
    Command.PLATFORM: "Print the platform.",
    Command.ARCH: "Print the CPU architecture.",
    Command.LANGS: "Print the user's preferred languages, most preferred first.",
}


def _langs(lookup: Callable) -> Callable[[], str]:
    return lambda: ", ".join(str(lang) for lang in lookup())


def _text(lookup: Callable) -> Callable[[], str]:
    return lambda: str(lookup())


def lookups(use_fallible: bool) -> Dict[Command, Callable[[], str]]:
    """
    Map each fact command to a function returning its printable value.

    Args:
        use_fallible (bool): Use ``hostidentity.fallible`` (raises on failure,
            hostname keeps OS casing) instead of ``hostidentity.api``.
    """
    module = fallible if use_fallible else api
    table = {
        Command.REALNAME: _text(module.realname),
        Command.USERNAME: _text(module.username),
        Command.ACCOUNT: _text(module.account),
        Command.DEVICENAME: _text(module.devicename),
        Command.HOSTNAME: _text(module.hostname),
        Command.DISTRO: _text(module.distro),
        Command.DESKTOP_ENV: _text(module.desktop_env),
        Command.PLATFORM: _text(module.platform),
        Command.ARCH: _text(module.arch),
        Command.LANGS: _langs(module.langs),
    }
    return table


def add_subcommands(parser: argparse._SubParsersAction):
    """
    Add one subcommand per fact to the given parser.

    Args:
        parser (argparse._SubParsersAction): The subparsers object returned by
        parser.add_subparsers().
    """
    for command in FACT_COMMANDS:
        fact_parser = parser.add_parser(command.value, help=HELP[command])
        fact_parser.add_argument(
            "--fallible",
            action="store_true",
            help="Report an error and exit non-zero instead of printing a default value.",
        )
