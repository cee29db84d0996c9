"""
apple.py - Fact lookups for macOS.

User and uname facts come from the POSIX sources shared with ``UnixStrategy``.
The computer name and product version come from the system configuration
tools (``scutil``, ``sw_vers``) and the preferred languages from the global
``AppleLanguages`` default.
"""

import re

from typing import Callable, List

from hostidentity.exceptions.exceptions import AbsentError, IoFailureError
from hostidentity.native.text import OsText
from hostidentity.strategies.base import run_command
from hostidentity.strategies.unix import UnixStrategy
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform

_QUOTED_OR_BARE = re.compile(r'"([^"]+)"|([A-Za-z]{2,3}(?:[-_][A-Za-z0-9]+)*)')


def parse_apple_languages(output: str) -> List[str]:
    """
    Entries of the property-list array printed by ``defaults read -g AppleLanguages``.

    The output looks like ``(\\n    "en-US",\\n    "de-DE"\\n)``.
    """
    body = output.strip().strip("()")
    entries = []
    for item in body.split(","):
        match = _QUOTED_OR_BARE.search(item)
        if match:
            entries.append(match.group(1) or match.group(2))
    return entries


class AppleStrategy(UnixStrategy):
    """
    Strategy for macOS.

    Args:
        runner (Callable): ``(argv, step) -> OsText`` used to run the system
            tools, defaults to ``run_command``.
        **kwargs: Passed to ``UnixStrategy``.
    """

    name = "apple"

    def __init__(self, runner: Callable = run_command, **kwargs):
        super().__init__(**kwargs)
        self._run = runner

    def devicename_os(self) -> OsText:
        return self._run(["scutil", "--get", "ComputerName"], "devicename")

    def distro_os(self) -> OsText:
        name = self._run(["sw_vers", "-productName"], "distro")
        try:
            version = self._run(["sw_vers", "-productVersion"], "distro")
        except (AbsentError, IoFailureError) as e:
            self.logger.log_debug(f"sw_vers gave no product version: {e}")
            return name
        return OsText(name.data + b" " + version.data)

    def desktop_env(self) -> DesktopEnv:
        return DesktopEnv.AQUA

    def platform(self) -> Platform:
        return Platform.MACOS

    def langs(self) -> List[str]:
        try:
            output = self._run(["defaults", "read", "-g", "AppleLanguages"], "langs")
            langs = parse_apple_languages(str(output))
            if langs:
                return langs
        except (AbsentError, IoFailureError) as e:
            self.logger.log_debug(f"AppleLanguages unavailable, using locale variables: {e}")
        return super().langs()
