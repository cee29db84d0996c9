"""
unix.py - Fact lookups for Linux, the BSDs, illumos and other POSIX systems.

Sources:
- passwd database entry of the effective uid (username, gecos real name)
- ``$USER`` / ``$LOGNAME`` when there is no passwd entry
- ``/etc/machine-info`` for the pretty device name
- ``uname`` for the hostname and machine architecture
- ``/etc/os-release`` for the distribution
- ``$XDG_CURRENT_DESKTOP`` / ``$DESKTOP_SESSION`` for the desktop environment
- ``$LANGUAGE`` / ``$LC_ALL`` / ``$LC_MESSAGES`` / ``$LANG`` for languages
"""

import os

from pathlib import Path
from typing import Callable, List, Mapping, Optional

from hostidentity.exceptions.exceptions import (
    AbsentError,
    IdentityError,
    IoFailureError,
    PlatformUnsupportedError,
)
from hostidentity.native.text import OsText
from hostidentity.strategies.base import Strategy, prettify, read_key
from hostidentity.taxonomy.arch import Arch, classify_arch
from hostidentity.taxonomy.desktop import DesktopEnv, classify_desktop
from hostidentity.taxonomy.platform import CURRENT_PLATFORM, Platform

DESKTOP_VARIABLES = ("XDG_CURRENT_DESKTOP", "DESKTOP_SESSION", "XDG_SESSION_DESKTOP")
LOCALE_VARIABLES = ("LC_ALL", "LC_MESSAGES", "LANG")


def _getpwuid(uid: int):
    import pwd

    return pwd.getpwuid(uid)


def _uname():
    if not hasattr(os, "uname"):
        raise PlatformUnsupportedError(
            message="uname is not available.", step="uname", platform=os.name
        )
    return os.uname()


def gecos_name(gecos: OsText) -> OsText:
    """
    Full-name subfield of a gecos field.

    The gecos field is ``name,office,office phone,home phone,other``; only the
    first subfield is a name. ``"Jeron Lau,,,"`` gives ``"Jeron Lau"``.
    """
    return OsText(gecos.data.split(b",", 1)[0].strip(), gecos.encoding)


class UnixStrategy(Strategy):
    """
    Strategy for POSIX systems.

    Args:
        environ: Environment mapping, defaults to ``os.environ``.
        root (Path): Filesystem root, ``/`` outside of tests.
        passwd (Callable): ``uid -> passwd entry`` lookup.
        uname (Callable): Returns an object with ``nodename`` and ``machine``.
        geteuid (Callable): Returns the effective uid.
        logger: Optional IdentityLogger.
    """

    name = "unix"

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        root: Path = Path("/"),
        passwd: Callable = _getpwuid,
        uname: Callable = _uname,
        geteuid: Optional[Callable[[], int]] = None,
        logger=None,
    ):
        super().__init__(environ, logger)
        self.root = Path(root)
        self._passwd = passwd
        self._uname = uname
        self._geteuid = geteuid or getattr(os, "geteuid", None)

    def _path(self, relative: str) -> Path:
        return self.root / relative

    def _passwd_entry(self):
        if self._geteuid is None:
            raise PlatformUnsupportedError(
                message="Effective uid is not available.", step=self.name
            )
        uid = self._geteuid()
        try:
            return self._passwd(uid)
        except KeyError as e:
            raise AbsentError(
                message=f"No passwd entry for uid {uid}.",
                step=self.name,
                source="passwd",
            ) from e
        except ImportError as e:
            raise PlatformUnsupportedError(
                message="The passwd database is not available.", step=self.name
            ) from e
        except OSError as e:
            raise IoFailureError(
                message="Failed to read the passwd database.",
                step=self.name,
                path="passwd",
                errno=e.errno,
            ) from e

    def realname_os(self) -> OsText:
        name = gecos_name(OsText.from_str(self._passwd_entry().pw_gecos))
        if not name:
            raise AbsentError(
                message="The gecos field holds no name.", step="realname", source="passwd"
            )
        return name

    def username_os(self) -> OsText:
        try:
            name = OsText.from_str(self._passwd_entry().pw_name)
            if name:
                return name
        except IdentityError as e:
            self.logger.log_debug(f"passwd lookup failed, using environment: {e}")
        return self.env_text("USER", "LOGNAME")

    def devicename_os(self) -> OsText:
        try:
            return read_key(
                [self._path("etc/machine-info")], ["PRETTY_HOSTNAME"], "devicename"
            )
        except AbsentError:
            pass

        hostname = self.hostname_os()
        self.logger.log_debug(f"No pretty hostname, deriving one from {hostname}")
        return OsText.from_str(prettify(str(hostname)))

    def hostname_os(self) -> OsText:
        hostname = OsText.from_str(self._uname().nodename).strip()
        if not hostname:
            raise AbsentError(
                message="uname reported an empty hostname.", step="hostname", source="uname"
            )
        return hostname

    def distro_os(self) -> OsText:
        return read_key(
            [self._path("etc/os-release"), self._path("usr/lib/os-release")],
            ["PRETTY_NAME", "NAME"],
            "distro",
        )

    def desktop_env(self) -> DesktopEnv:
        for name in DESKTOP_VARIABLES:
            value = self.environ.get(name, "").strip()
            if value:
                return classify_desktop(value)

        if (
            self.environ.get("XDG_SESSION_TYPE", "").lower() == "tty"
            and not self.environ.get("DISPLAY")
            and not self.environ.get("WAYLAND_DISPLAY")
        ):
            return DesktopEnv.CONSOLE

        raise AbsentError(
            message="No desktop session variables are set.",
            step="desktop_env",
            source=" / ".join(DESKTOP_VARIABLES),
        )

    def platform(self) -> Platform:
        return CURRENT_PLATFORM

    def arch(self) -> Arch:
        machine = self._uname().machine
        if not machine:
            raise AbsentError(
                message="uname reported no machine.", step="arch", source="uname"
            )
        return classify_arch(machine)

    def langs(self) -> List[str]:
        locales = []
        language = self.environ.get("LANGUAGE", "")
        locales.extend(part for part in language.split(":") if part.strip())
        locales.extend(self.env_values(LOCALE_VARIABLES))
        if not locales:
            raise AbsentError(
                message="No locale variables are set.",
                step="langs",
                source="LANGUAGE / " + " / ".join(LOCALE_VARIABLES),
            )
        return locales
