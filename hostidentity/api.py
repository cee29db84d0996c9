"""
api.py - Fact lookups that never fail.

Each function calls its counterpart in ``hostidentity.fallible`` and, when
that raises an ``IdentityError``, returns a documented default instead:

| Fact                         | Default                       |
|------------------------------|-------------------------------|
| realname, devicename, distro | ``"Unknown"``                 |
| username, account            | ``"unknown"``                 |
| hostname                     | ``"localhost"``               |
| desktop_env                  | ``DesktopEnv.unknown("Unknown")`` |
| platform                     | ``Platform.unknown("Unknown")``   |
| arch                         | ``Arch.unknown("Unknown")``       |
| langs                        | ``(en-US,)``                  |

``hostname()`` is additionally lowercased; ``hostname_os()`` is not.
"""

from typing import Callable, Tuple, TypeVar

from hostidentity import fallible
from hostidentity.exceptions.exceptions import IdentityError
from hostidentity.logging.logger import configured_logger
from hostidentity.native.text import OsText
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.base import UNKNOWN
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.language import Language
from hostidentity.taxonomy.platform import Platform

DEFAULT_NAME = UNKNOWN
DEFAULT_USER = "unknown"
DEFAULT_HOSTNAME = "localhost"
DEFAULT_LANGUAGES = (Language("en", "US"),)

T = TypeVar("T")


def _or_default(fact: str, lookup: Callable[[], T], default: T) -> T:
    try:
        return lookup()
    except IdentityError as e:
        configured_logger(__name__).log_debug(
            f"{fact}: using default {default!s} ({e})"
        )
        return default


def realname_os() -> OsText:
    """User's full name as native text, ``"Unknown"`` when not available."""
    return _or_default("realname", fallible.realname_os, OsText(DEFAULT_NAME.encode()))


def realname() -> str:
    """User's full name, ``"Unknown"`` when not available."""
    return _or_default("realname", fallible.realname, DEFAULT_NAME)


def username_os() -> OsText:
    """User's login name as native text, ``"unknown"`` when not available."""
    return _or_default("username", fallible.username_os, OsText(DEFAULT_USER.encode()))


def username() -> str:
    """User's login name, ``"unknown"`` when not available."""
    return _or_default("username", fallible.username, DEFAULT_USER)


def account_os() -> OsText:
    """User's account name as native text, ``"unknown"`` when not available."""
    return _or_default("account", fallible.account_os, OsText(DEFAULT_USER.encode()))


def account() -> str:
    """User's account name, ``"unknown"`` when not available."""
    return _or_default("account", fallible.account, DEFAULT_USER)


def devicename_os() -> OsText:
    """Device's pretty name as native text, ``"Unknown"`` when not available."""
    return _or_default(
        "devicename", fallible.devicename_os, OsText(DEFAULT_NAME.encode())
    )


def devicename() -> str:
    """Device's pretty name, ``"Unknown"`` when not available."""
    return _or_default("devicename", fallible.devicename, DEFAULT_NAME)


def hostname_os() -> OsText:
    """Device's hostname as native text in OS casing, ``"localhost"`` when not available."""
    return _or_default(
        "hostname", fallible.hostname_os, OsText(DEFAULT_HOSTNAME.encode())
    )


def hostname() -> str:
    """Device's hostname in lowercase, ``"localhost"`` when not available."""
    return _or_default("hostname", fallible.hostname, DEFAULT_HOSTNAME).lower()


def distro_os() -> OsText:
    """Distribution name as native text, ``"Unknown"`` when not available."""
    return _or_default("distro", fallible.distro_os, OsText(DEFAULT_NAME.encode()))


def distro() -> str:
    """Distribution name and version, ``"Unknown"`` when not available."""
    return _or_default("distro", fallible.distro, DEFAULT_NAME)


def desktop_env() -> DesktopEnv:
    """Desktop environment, ``Unknown: Unknown`` when not available."""
    return _or_default("desktop_env", fallible.desktop_env, DesktopEnv.unknown(UNKNOWN))


def platform() -> Platform:
    """Operating system family."""
    return _or_default("platform", fallible.platform, Platform.unknown(UNKNOWN))


def arch() -> Arch:
    """CPU architecture, ``Unknown: Unknown`` when not available."""
    return _or_default("arch", fallible.arch, Arch.unknown(UNKNOWN))


def langs() -> Tuple[Language, ...]:
    """Preferred languages, most preferred first; ``(en-US,)`` when none are configured."""
    return _or_default("langs", fallible.langs, DEFAULT_LANGUAGES)
