"""
fake.py - Fixed answers for headless builds and for tests.

Used for WebAssembly without a browser host and whenever the strategy is
forced to ``fake``. Every value is a literal so results are identical on
every machine.
"""

from typing import List

from hostidentity.native.text import OsText
from hostidentity.strategies.base import Strategy
from hostidentity.strategies.web import pointer_width_arch
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform


class FakeStrategy(Strategy):
    """Strategy returning fixed literal values."""

    name = "fake"

    def realname_os(self) -> OsText:
        return OsText(b"Anonymous")

    def username_os(self) -> OsText:
        return OsText(b"anonymous")

    def devicename_os(self) -> OsText:
        return OsText(b"Unknown")

    def hostname_os(self) -> OsText:
        return OsText(b"localhost")

    def distro_os(self) -> OsText:
        return OsText(b"Emulated")

    def desktop_env(self) -> DesktopEnv:
        return DesktopEnv.unknown("WebAssembly")

    def platform(self) -> Platform:
        return Platform.unknown("Unknown")

    def arch(self) -> Arch:
        return pointer_width_arch()

    def langs(self) -> List[str]:
        return ["en-US"]
