"""
redox.py - Fact lookups for Redox OS.

Redox keeps users in ``/etc/passwd`` with ``;`` separated columns
(``name;uid;gid;full name;home;shell``) and exposes kernel information
through the ``sys:uname`` scheme, one field per line.
"""

import os

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from hostidentity.exceptions.exceptions import AbsentError, PlatformUnsupportedError
from hostidentity.native.text import OsText
from hostidentity.strategies.base import Strategy, read_file, read_key
from hostidentity.taxonomy.arch import Arch, classify_arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform

UNAME_MACHINE_ROW = 4


def _ids():
    if not hasattr(os, "geteuid"):
        raise PlatformUnsupportedError(
            message="Effective uid is not available.", step="redox", platform=os.name
        )
    return os.geteuid(), os.getegid()


class RedoxStrategy(Strategy):
    """
    Strategy for Redox OS.

    Args:
        root (Path): Filesystem root, ``/`` outside of tests.
        uname_path (Path): Location of the uname scheme file.
        ids (Callable): Returns ``(euid, egid)``.
        **kwargs: Passed to ``Strategy``.
    """

    name = "redox"

    def __init__(
        self,
        root: Path = Path("/"),
        uname_path: Optional[Path] = None,
        ids: Callable = _ids,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.root = Path(root)
        self.uname_path = Path(uname_path) if uname_path else Path("sys:uname")
        self._ids = ids

    def _passwd_row(self) -> Sequence[bytes]:
        euid, egid = self._ids()
        content = read_file(self.root / "etc/passwd", "passwd")
        for line in content.splitlines():
            columns = line.split(b";")
            if len(columns) < 3:
                continue
            if columns[1].strip() == str(euid).encode() and columns[2].strip() == str(
                egid
            ).encode():
                return columns
        raise AbsentError(
            message=f"No passwd row for uid {euid} gid {egid}.",
            step="passwd",
            source=str(self.root / "etc/passwd"),
        )

    def _column(self, number: int, step: str) -> OsText:
        columns = self._passwd_row()
        if len(columns) <= number or not columns[number].strip():
            raise AbsentError(
                message=f"passwd column {number} is empty.", step=step, source="passwd"
            )
        return OsText(columns[number].strip())

    def realname_os(self) -> OsText:
        return self._column(3, "realname")

    def username_os(self) -> OsText:
        return self._column(0, "username")

    def devicename_os(self) -> OsText:
        return self.hostname_os()

    def hostname_os(self) -> OsText:
        lines = read_file(self.root / "etc/hostname", "hostname").splitlines()
        if not lines or not lines[0].strip():
            raise AbsentError(
                message="/etc/hostname is empty.", step="hostname", source="/etc/hostname"
            )
        return OsText(lines[0].strip())

    def distro_os(self) -> OsText:
        return read_key([self.root / "etc/os-release"], ["PRETTY_NAME"], "distro")

    def desktop_env(self) -> DesktopEnv:
        return DesktopEnv.ORBITAL

    def platform(self) -> Platform:
        return Platform.REDOX

    def arch(self) -> Arch:
        rows = read_file(self.uname_path, "arch").splitlines()
        if len(rows) <= UNAME_MACHINE_ROW or not rows[UNAME_MACHINE_ROW].strip():
            raise AbsentError(
                message="uname has no machine row.", step="arch", source=str(self.uname_path)
            )
        return classify_arch(rows[UNAME_MACHINE_ROW].decode("utf-8", "replace"))

    def langs(self) -> List[str]:
        langs = self.env_values(("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"))
        if not langs:
            raise AbsentError(
                message="No locale variables are set.", step="langs", source="environment"
            )
        return [part for lang in langs for part in lang.split(":") if part]
