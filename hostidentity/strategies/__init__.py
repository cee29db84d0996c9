"""
Platform strategies and the selection of the one serving this process.

Functions:
- select_strategy(name=None, platform=CURRENT_PLATFORM, browser_host=None) -> Strategy:
    Build the strategy for an explicit name, or for the given platform when
    no name is given.
"""

from typing import Optional

from hostidentity.config import validate_strategy
from hostidentity.strategies.apple import AppleStrategy
from hostidentity.strategies.base import Strategy
from hostidentity.strategies.fake import FakeStrategy
from hostidentity.strategies.redox import RedoxStrategy
from hostidentity.strategies.unix import UnixStrategy
from hostidentity.strategies.wasi import WasiStrategy
from hostidentity.strategies.web import BrowserHost, WebStrategy
from hostidentity.strategies.windows import WindowsStrategy
from hostidentity.taxonomy.platform import CURRENT_PLATFORM, Platform

STRATEGIES = {
    "unix": UnixStrategy,
    "windows": WindowsStrategy,
    "apple": AppleStrategy,
    "web": WebStrategy,
    "wasi": WasiStrategy,
    "redox": RedoxStrategy,
    "fake": FakeStrategy,
}

PLATFORM_STRATEGIES = {
    Platform.WINDOWS: "windows",
    Platform.MACOS: "apple",
    Platform.WASI: "wasi",
    Platform.WEB: "web",
    Platform.REDOX: "redox",
    Platform.LINUX: "unix",
    Platform.BSD: "unix",
    Platform.ILLUMOS: "unix",
}


def strategy_name_for(platform: Platform) -> str:
    """Strategy name serving ``platform``; unknown platforms are treated as POSIX."""
    return PLATFORM_STRATEGIES.get(platform, "unix")


def select_strategy(
    name: Optional[str] = None,
    platform: Platform = CURRENT_PLATFORM,
    browser_host: Optional[BrowserHost] = None,
    logger=None,
) -> Strategy:
    """
    Build the strategy serving this process.

    Args:
        name (Optional[str]): Explicit strategy name, validated against the
            known names. ``None`` selects by ``platform``.
        platform (Platform): Platform to select for.
        browser_host (Optional[BrowserHost]): Browser capability for the web
            strategy. Without one the web strategy degrades to the fake one.
        logger: Optional IdentityLogger handed to the strategy.

    Raises:
        ConfigurationError: ``name`` is not a known strategy.
    """
    chosen = validate_strategy(name) or strategy_name_for(platform)

    if chosen == "web":
        if browser_host is None:
            return FakeStrategy(logger=logger)
        return WebStrategy(host=browser_host, logger=logger)

    return STRATEGIES[chosen](logger=logger)


__all__ = [
    "Strategy",
    "BrowserHost",
    "STRATEGIES",
    "select_strategy",
    "strategy_name_for",
    "AppleStrategy",
    "FakeStrategy",
    "RedoxStrategy",
    "UnixStrategy",
    "WasiStrategy",
    "WebStrategy",
    "WindowsStrategy",
]
