"""
Browser and host system names from a User-Agent string.

Browsers built on the same engine copy each other's tokens: every Chromium
browser claims ``Chrome/`` and ``Safari/``, and Edge, Opera and Samsung
Internet add their own token on top. The table below is ordered so that the
most specific token wins and the borrowed ones are ignored.
"""

import re

from typing import Optional, Tuple

from hostidentity.taxonomy.platform import Platform, classify_platform

# (token, canonical name, token carrying the version when it is not ``token``)
BROWSER_RULES = (
    ("EdgA/", "Microsoft Edge", None),
    ("EdgiOS/", "Microsoft Edge", None),
    ("Edg/", "Microsoft Edge", None),
    ("Edge/", "Microsoft Edge", None),
    ("OPR/", "Opera", None),
    ("OPT/", "Opera", None),
    ("Opera/", "Opera", "Version/"),
    ("SamsungBrowser/", "Samsung Internet", None),
    ("Vivaldi/", "Vivaldi", None),
    ("YaBrowser/", "Yandex Browser", None),
    ("FxiOS/", "Firefox", None),
    ("Firefox/", "Firefox", None),
    ("CriOS/", "Chrome", None),
    ("Chromium/", "Chromium", None),
    ("Chrome/", "Chrome", None),
    ("Safari/", "Safari", "Version/"),
)

WINDOWS_NT_VERSIONS = {
    "10.0": "10",
    "6.3": "8.1",
    "6.2": "8",
    "6.1": "7",
    "6.0": "Vista",
    "5.2": "XP",
    "5.1": "XP",
}

_VERSION = re.compile(r"[0-9][0-9A-Za-z.]*")


def _version_after(user_agent: str, token: str) -> Optional[str]:
    start = user_agent.find(token)
    if start < 0:
        return None
    match = _VERSION.match(user_agent, start + len(token))
    if match is None:
        return None
    # Major.minor is enough to tell releases apart.
    return ".".join(match.group(0).split(".")[:2])


def browser_name(user_agent: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Canonical browser name and version from a User-Agent.

    Returns:
        Optional[Tuple[str, Optional[str]]]: ``(name, version)``, or None when
        the string names no product at all.
    """
    for token, name, version_token in BROWSER_RULES:
        if token in user_agent:
            version = None
            if version_token is not None:
                version = _version_after(user_agent, version_token)
            return name, version or _version_after(user_agent, token)

    # Fall back to the last product token, e.g. "Foo/1.2".
    products = re.findall(r"([A-Za-z][\w.-]*)/([0-9][0-9A-Za-z.]*)", user_agent)
    if not products:
        return None
    name, version = products[-1]
    if name == "Mozilla":
        return None
    return name, ".".join(version.split(".")[:2])


def _system_token(user_agent: str) -> Optional[str]:
    begin = user_agent.find("(")
    end = user_agent.find(")", begin + 1)
    if begin < 0 or end < 0:
        return None
    return user_agent[begin + 1 : end]


def system_name(user_agent: str) -> Optional[str]:
    """
    Operating system name and version from the User-Agent's system token.

    Examples: ``"Windows 10"``, ``"Mac OS"``, ``"Ubuntu"``, ``"Android 14"``.
    """
    system = _system_token(user_agent)
    if system is None:
        return None

    if "Windows" in system or "Win32" in system or "Win64" in system:
        match = re.search(r"Windows NT (\d+\.\d+)", system)
        if match is None:
            return "Windows"
        return f"Windows {WINDOWS_NT_VERSIONS.get(match.group(1), match.group(1))}"

    if "iPhone" in system or "iPad" in system:
        return "iOS"
    if "Mac OS X" in system or "Macintosh" in system or "OSX" in system:
        return "Mac OS"
    if "CrOS" in system:
        return "Chrome OS"

    android = re.search(r"Android ([0-9.]+)", system)
    if android is not None:
        return f"Android {android.group(1).split('.')[0]}"

    if "Linux" in system:
        fields = [f.strip() for f in system.split(";")]
        if fields and fields[0] in ("X11", "Wayland"):
            fields = fields[1:]
        for field in fields:
            if field and field != "U" and not field.startswith("Linux"):
                return field
        return "Unknown Linux"

    return system.strip() or None


def system_platform(user_agent: str, hint: str = "") -> Platform:
    """
    Platform kind from the User-Agent, consulting ``navigator.platform`` last.
    """
    system = _system_token(user_agent) or ""

    if "Windows" in system or "Win32" in system or "Win64" in system:
        return Platform.WINDOWS
    if "Mac OS X" in system or "Macintosh" in system:
        return Platform.MACOS
    if "BSD" in system:
        return Platform.BSD
    if "Linux" in system or "Android" in system or "CrOS" in system:
        return Platform.LINUX

    if hint:
        guess = classify_platform(hint.split(" ", 1)[0])
        if not guess.is_unknown:
            return guess
        if hint.startswith("Mac"):
            return Platform.MACOS
    return Platform.unknown(system or hint or "Unknown")
