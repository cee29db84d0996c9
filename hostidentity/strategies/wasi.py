"""
wasi.py - Fact lookups for WASI hosts.

WASI has no user database or hostname call, so the host passes identity
through environment variables (the ``wasite`` convention):

- ``USER``      username, account and real name
- ``NAME``      device name
- ``HOSTNAME``  hostname
- ``LANGS``     semicolon separated locale list

An unset variable is reported as absent; nothing is made up.
"""

from typing import List

from hostidentity.exceptions.exceptions import AbsentError
from hostidentity.native.text import OsText
from hostidentity.strategies.base import Strategy
from hostidentity.strategies.web import pointer_width_arch
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform


class WasiStrategy(Strategy):
    """Strategy for WebAssembly System Interface runtimes."""

    name = "wasi"

    def realname_os(self) -> OsText:
        return self.env_text("USER")

    def username_os(self) -> OsText:
        return self.env_text("USER")

    def devicename_os(self) -> OsText:
        return self.env_text("NAME")

    def hostname_os(self) -> OsText:
        return self.env_text("HOSTNAME")

    def distro_os(self) -> OsText:
        raise AbsentError(
            message="WASI hosts do not report a distribution.", step="distro", source="wasi"
        )

    def desktop_env(self) -> DesktopEnv:
        session = self.environ.get("DESKTOP_SESSION", "").strip()
        return DesktopEnv.unknown(session or "Unknown WASI")

    def platform(self) -> Platform:
        return Platform.WASI

    def arch(self) -> Arch:
        return pointer_width_arch()

    def langs(self) -> List[str]:
        langs = [lang for lang in self.environ.get("LANGS", "").split(";") if lang.strip()]
        if not langs:
            raise AbsentError(
                message="LANGS is not set.", step="langs", source="LANGS"
            )
        return langs
