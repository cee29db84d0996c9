"""
Closed enumerations for enum-typed facts and the rules that classify raw OS strings.
"""

from hostidentity.taxonomy.arch import Arch, Width, classify_arch
from hostidentity.taxonomy.desktop import DesktopEnv, classify_desktop
from hostidentity.taxonomy.language import Language, collect_languages, parse_locale
from hostidentity.taxonomy.platform import CURRENT_PLATFORM, Platform, classify_platform

__all__ = [
    "Arch",
    "Width",
    "classify_arch",
    "DesktopEnv",
    "classify_desktop",
    "Language",
    "collect_languages",
    "parse_locale",
    "Platform",
    "CURRENT_PLATFORM",
    "classify_platform",
]
