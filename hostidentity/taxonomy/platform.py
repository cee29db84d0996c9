"""
Platform kinds and their classification from ``sys.platform`` style names.
"""

import sys

from dataclasses import dataclass

from hostidentity.taxonomy.base import Rule, Taxon, classify


@dataclass(frozen=True, repr=False)
class Platform(Taxon):
    """Operating system family the process runs on."""


Platform.LINUX = Platform("Linux", "Linux")
Platform.BSD = Platform("Bsd", "BSD")
Platform.MACOS = Platform("MacOS", "Mac OS")
Platform.ILLUMOS = Platform("Illumos", "illumos")
Platform.WINDOWS = Platform("Windows", "Windows")
Platform.WASI = Platform("Wasi", "WASI")
Platform.WEB = Platform("Web", "Web")
Platform.REDOX = Platform("Redox", "Redox")

PLATFORM_RULES = (
    Rule(Platform.LINUX, equals=("linux",), prefixes=("linux",)),
    Rule(Platform.MACOS, equals=("darwin", "macos", "mac os", "mac os x", "macintosh")),
    Rule(Platform.WINDOWS, equals=("win32", "win64", "windows", "cygwin", "msys")),
    Rule(
        Platform.BSD,
        prefixes=("freebsd", "openbsd", "netbsd", "dragonfly", "midnightbsd"),
        contains=("bsd",),
    ),
    Rule(Platform.ILLUMOS, prefixes=("sunos", "illumos", "solaris")),
    Rule(Platform.WASI, equals=("wasi",)),
    Rule(Platform.WEB, equals=("emscripten", "web")),
    Rule(Platform.REDOX, equals=("redox",)),
)


def classify_platform(name: str) -> Platform:
    """Classify a platform name such as ``sys.platform`` or ``uname -s`` output."""
    return classify(name, PLATFORM_RULES, Platform)


# One value per process lifetime.
CURRENT_PLATFORM = classify_platform(sys.platform)
