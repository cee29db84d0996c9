"""
Language preferences parsed from locale strings.

Accepted inputs include POSIX locales (``en_US.UTF-8``, ``de_DE@euro``),
BCP 47 tags (``en-US``, ``zh-Hant-TW``) and the portable ``C`` / ``POSIX``
locales, which stand for US English.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

DEFAULT_LOCALE = "en-US"
PORTABLE_LOCALES = frozenset({"c", "posix"})


@dataclass(frozen=True)
class Language:
    """
    A (language, region) pair.

    Attributes:
        language (str): Lowercase ISO 639 code, e.g. ``"en"``.
        region (Optional[str]): Region or script subtag, e.g. ``"US"``.
    """

    language: str
    region: Optional[str] = None

    def __str__(self) -> str:
        if self.region:
            return f"{self.language}-{self.region}"
        return self.language


def parse_locale(text: str) -> Optional[Language]:
    """
    Parse one locale string, returning None when it is not a language.

    The encoding (``.UTF-8``) and modifier (``@euro``) parts are dropped.
    """
    locale = text.strip()
    for separator in (".", "@"):
        locale = locale.split(separator, 1)[0]
    if not locale:
        return None
    if locale.lower() in PORTABLE_LOCALES:
        locale = DEFAULT_LOCALE

    parts = locale.replace("_", "-").split("-")
    language = parts[0].lower()
    if not (2 <= len(language) <= 3 and language.isalpha()):
        return None

    # Script subtags (Hant) are skipped in favour of the region when both exist.
    region = None
    for part in parts[1:]:
        if len(part) == 2 and part.isalpha():
            region = part.upper()
            break
        if len(part) == 3 and part.isdigit():
            region = part
            break
        if part and region is None:
            region = part.title()
    return Language(language, region)


def collect_languages(locales: Iterable[str]) -> Tuple[Language, ...]:
    """
    Parse locale strings in preference order, dropping duplicates and junk.

    Returns:
        Tuple[Language, ...]: Finite, restartable sequence, most preferred first.
    """
    seen = []
    for locale in locales:
        language = parse_locale(locale)
        if language is not None and language not in seen:
            seen.append(language)
    return tuple(seen)
