"""
fallible.py - Fact lookups that report failure.

Every function here raises an ``IdentityError`` subclass when the OS cannot
provide the fact:

- ``AbsentError``              the OS has no value
- ``PlatformUnsupportedError`` the fact is not meaningful on this OS
- ``IoFailureError``           a read or native call failed
- ``EncodingInvalidError``     native text had an impossible length

The ``*_os`` variants return the exact native text (``OsText``); the plain
variants return validated ``str``. Nothing here normalizes values: in
particular ``hostname()`` keeps the casing the OS reports. See
``hostidentity.api`` for the variants that never fail.
"""

from contextlib import contextmanager
from typing import Iterator, Tuple

from hostidentity.config import config, load_from_environ
from hostidentity.exceptions.exceptions import AbsentError, ConfigurationError
from hostidentity.logging.logger import get_logger
from hostidentity.native.text import OsText, to_validated
from hostidentity.strategies import Strategy, select_strategy
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.language import Language, collect_languages
from hostidentity.taxonomy.platform import Platform


def _initial_strategy() -> Strategy:
    try:
        load_from_environ()
    except ConfigurationError as e:
        get_logger(verbose=config.verbose, log_name=__name__).log_warning(
            f"Ignoring invalid environment configuration: {e}"
        )
    return select_strategy(config.strategy, browser_host=config.browser_host)


# Chosen once per process, like a build-time target selection.
_strategy = _initial_strategy()


def get_strategy() -> Strategy:
    """The strategy currently answering fact lookups."""
    return _strategy


def set_strategy(strategy: Strategy) -> Strategy:
    """
    Replace the active strategy.

    Returns:
        Strategy: The previously active strategy.
    """
    global _strategy
    previous, _strategy = _strategy, strategy
    return previous


@contextmanager
def use_strategy(strategy: Strategy) -> Iterator[Strategy]:
    """Answer lookups with ``strategy`` inside the ``with`` block."""
    previous = set_strategy(strategy)
    try:
        yield strategy
    finally:
        set_strategy(previous)


def realname_os() -> OsText:
    """User's full name as native text."""
    return _strategy.realname_os()


def realname() -> str:
    """User's full name."""
    return to_validated(realname_os())


def username_os() -> OsText:
    """User's login name as native text. Contains no spaces on POSIX."""
    return _strategy.username_os()


def username() -> str:
    """User's login name."""
    return to_validated(username_os())


def account_os() -> OsText:
    """
    User's account name as native text.

    Usually the username, but may carry an account server,
    e.g. ``username@example.com``.
    """
    return _strategy.account_os()


def account() -> str:
    """User's account name."""
    return to_validated(account_os())


def devicename_os() -> OsText:
    """Device's pretty name (the name shown for bluetooth pairing) as native text."""
    return _strategy.devicename_os()


def devicename() -> str:
    """Device's pretty name."""
    return to_validated(devicename_os())


def hostname_os() -> OsText:
    """Device's hostname as native text, in the casing the OS reports."""
    return _strategy.hostname_os()


def hostname() -> str:
    """Device's hostname, in the casing the OS reports."""
    return to_validated(hostname_os())


def distro_os() -> OsText:
    """Operating system distribution and version as native text."""
    return _strategy.distro_os()


def distro() -> str:
    """
    Operating system distribution and version.

    Example: ``"Windows 11 Pro 23H2"`` or ``"Fedora Linux 40 (Workstation Edition)"``.
    """
    return to_validated(distro_os())


def desktop_env() -> DesktopEnv:
    """Desktop environment of the session."""
    return _strategy.desktop_env()


def platform() -> Platform:
    """Operating system family."""
    return _strategy.platform()


def arch() -> Arch:
    """CPU architecture."""
    return _strategy.arch()


def langs() -> Tuple[Language, ...]:
    """
    User's preferred languages, most preferred first, without duplicates.

    Raises:
        AbsentError: No recognizable language is configured.
    """
    languages = collect_languages(_strategy.langs())
    if not languages:
        raise AbsentError(
            message="No recognizable language is configured.",
            step="langs",
            source=_strategy.name,
        )
    return languages
