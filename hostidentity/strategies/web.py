"""
web.py - Fact lookups inside a web browser.

The embedding host supplies a ``BrowserHost``: a snapshot of
``navigator.userAgent``, ``navigator.languages`` and ``navigator.platform``.
Browsers do not reveal the user, so the user facts are fixed placeholders
and the device name is the browser itself.
"""

import struct

from typing import List, Optional, Protocol, Sequence

from hostidentity.exceptions.exceptions import AbsentError, PlatformUnsupportedError
from hostidentity.native.text import OsText
from hostidentity.strategies.base import Strategy
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.browser import browser_name, system_name, system_platform
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform


class BrowserHost(Protocol):
    """Capability provided by the embedding JavaScript host."""

    def user_agent(self) -> str:
        ...

    def languages(self) -> Sequence[str]:
        ...

    def platform(self) -> str:
        ...


def pointer_width_arch() -> Arch:
    """Wasm32 or Wasm64 depending on the interpreter's pointer width."""
    return Arch.WASM64 if struct.calcsize("P") == 8 else Arch.WASM32


class WebStrategy(Strategy):
    """
    Strategy for WebAssembly running in a browser.

    Args:
        host (BrowserHost): Browser capability; without one every browser
            fact reports PlatformUnsupportedError.
        **kwargs: Passed to ``Strategy``.
    """

    name = "web"

    def __init__(self, host: Optional[BrowserHost] = None, **kwargs):
        super().__init__(**kwargs)
        self.host = host

    def _host(self) -> BrowserHost:
        if self.host is None:
            raise PlatformUnsupportedError(
                message="No browser host is registered.", step=self.name, platform="web"
            )
        return self.host

    def _user_agent(self) -> str:
        user_agent = self._host().user_agent() or ""
        if not user_agent.strip():
            raise AbsentError(
                message="The browser reported no user agent.",
                step=self.name,
                source="navigator.userAgent",
            )
        return user_agent

    def realname_os(self) -> OsText:
        return OsText(b"Anonymous")

    def username_os(self) -> OsText:
        return OsText(b"anonymous")

    def devicename_os(self) -> OsText:
        user_agent = self._user_agent()
        browser = browser_name(user_agent)
        if browser is None:
            raise AbsentError(
                message="The user agent names no browser.",
                step="devicename",
                source="navigator.userAgent",
            )
        name, version = browser
        return OsText.from_str(f"{name} {version}" if version else name)

    def hostname_os(self) -> OsText:
        return OsText(b"localhost")

    def distro_os(self) -> OsText:
        system = system_name(self._user_agent())
        if system is None:
            raise AbsentError(
                message="The user agent names no operating system.",
                step="distro",
                source="navigator.userAgent",
            )
        return OsText.from_str(system)

    def desktop_env(self) -> DesktopEnv:
        return DesktopEnv.WEB_BROWSER

    def platform(self) -> Platform:
        host = self._host()
        return system_platform(host.user_agent() or "", host.platform() or "")

    def arch(self) -> Arch:
        return pointer_width_arch()

    def langs(self) -> List[str]:
        langs = [lang for lang in (self._host().languages() or ()) if lang]
        if not langs:
            raise AbsentError(
                message="The browser reported no languages.",
                step="langs",
                source="navigator.languages",
            )
        return langs
