"""
base.py - Closed sets of named categories with an "unknown, but remembered" member.

Each taxonomy (platform, desktop environment, architecture) is a frozen
``Taxon`` subclass. Known members are class attributes; anything the rule
table does not recognize becomes ``<Taxon>.unknown(original_text)`` and keeps
the original text for display.

Classification walks an ordered rule table; the first matching rule wins.
Matching is case-insensitive.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Type, TypeVar

UNKNOWN = "Unknown"

T = TypeVar("T", bound="Taxon")


@dataclass(frozen=True)
class Taxon:
    """
    A member of a taxonomy.

    Attributes:
        key (str): Variant name, ``"Unknown"`` for the catch-all.
        label (str): Display text for known members, original text for unknowns.
    """

    key: str
    label: str

    @classmethod
    def unknown(cls: Type[T], text: str) -> T:
        """Catch-all member remembering ``text``."""
        return cls(UNKNOWN, text)

    @property
    def is_unknown(self) -> bool:
        return self.key == UNKNOWN

    def __str__(self) -> str:
        if self.is_unknown:
            return f"Unknown: {self.label}"
        return self.label

    def __repr__(self) -> str:
        if self.is_unknown:
            return f"{type(self).__name__}.unknown({self.label!r})"
        return f"{type(self).__name__}.{self.key}"


@dataclass(frozen=True)
class Rule:
    """
    One line of a classification table.

    A rule matches when the lowercased input equals one of ``equals``, starts
    with one of ``prefixes`` or contains one of ``contains``. For ``equals`` a
    colon-separated list such as ``ubuntu:mate`` matches on any of its entries.
    """

    member: Taxon
    equals: Sequence[str] = field(default_factory=tuple)
    prefixes: Sequence[str] = field(default_factory=tuple)
    contains: Sequence[str] = field(default_factory=tuple)

    def matches(self, folded: str) -> bool:
        return (
            any(entry in self.equals for entry in folded.split(":"))
            or any(folded.startswith(p) for p in self.prefixes)
            or any(c in folded for c in self.contains)
        )


def first_match(text: str, rules: Iterable[Rule]) -> Optional[Taxon]:
    """Return the member of the first rule matching ``text``, if any."""
    folded = text.strip().lower()
    if not folded:
        return None
    for rule in rules:
        if rule.matches(folded):
            return rule.member
    return None


def classify(text: str, rules: Iterable[Rule], taxonomy: Type[T]) -> T:
    """
    Map ``text`` to a member of ``taxonomy``.

    Unmatched input (including empty input) becomes ``taxonomy.unknown(text)``.
    """
    member = first_match(text, rules)
    if member is None:
        return taxonomy.unknown(text)
    return member
