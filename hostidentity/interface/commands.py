"""
commands.py

Defines the valid CLI commands for the hostidentity package.

This module provides the `Command` enumeration, which centralizes all
subcommand names used by the CLI, and `OutputFormat` for the `show` command.
"""

from enum import Enum


class Command(Enum):
    """
    Enumeration of valid CLI commands for hostidentity.

    Attributes:
        SHOW (str): Print every fact as one report.
        REALNAME ... LANGS (str): Print a single fact.
    """

    SHOW = "show"
    REALNAME = "realname"
    USERNAME = "username"
    ACCOUNT = "account"
    DEVICENAME = "devicename"
    HOSTNAME = "hostname"
    DISTRO = "distro"
    DESKTOP_ENV = "desktop-env"
    PLATFORM = "platform"
    ARCH = "arch"
    LANGS = "langs"


class OutputFormat(Enum):
    """Report formats understood by the `show` command."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


FACT_COMMANDS = tuple(c for c in Command if c is not Command.SHOW)
