"""
hostidentity

Answers who is running this process, on what machine and in what
environment: real name, username, account, device name, hostname, platform,
distribution, desktop environment, CPU architecture and preferred languages.

The functions exported here never fail and fall back to documented defaults.
``hostidentity.fallible`` has the same functions reporting failures as
``IdentityError`` subclasses.
"""

__package_name__ = "hostidentity"
__version__ = "1.0.0"
__package_home__ = "https://pypi.org/project/hostidentity/"

from hostidentity.api import (  # noqa: E402
    account,
    account_os,
    arch,
    desktop_env,
    devicename,
    devicename_os,
    distro,
    distro_os,
    hostname,
    hostname_os,
    langs,
    platform,
    realname,
    realname_os,
    username,
    username_os,
)
from hostidentity.native.text import OsText  # noqa: E402
from hostidentity.taxonomy import Arch, DesktopEnv, Language, Platform, Width  # noqa: E402

__all__ = [
    "account",
    "account_os",
    "arch",
    "desktop_env",
    "devicename",
    "devicename_os",
    "distro",
    "distro_os",
    "hostname",
    "hostname_os",
    "langs",
    "platform",
    "realname",
    "realname_os",
    "username",
    "username_os",
    "OsText",
    "Arch",
    "DesktopEnv",
    "Language",
    "Platform",
    "Width",
]
