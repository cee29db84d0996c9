"""
snapshot.py - All facts gathered in one pass, for reporting.

The snapshot is built fresh from the infallible API each time it is asked
for; nothing is kept between calls.
"""

from dataclasses import dataclass, fields
from typing import Dict, Tuple

from hostidentity import api
from hostidentity.exceptions.exceptions import IdentityError


@dataclass(frozen=True)
class IdentitySnapshot:
    """
    Immutable record of who runs this process, where, and in what environment.

    Attributes mirror the infallible fact functions; ``width`` is the
    address width of ``arch`` or ``"Unknown"``.
    """

    realname: str
    username: str
    account: str
    devicename: str
    hostname: str
    platform: str
    distro: str
    desktop_env: str
    is_gtk: bool
    is_kde: bool
    arch: str
    width: str
    langs: Tuple[str, ...]

    def to_dict(self) -> Dict[str, object]:
        """Dictionary representation with plain, serializable values."""
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result["langs"] = list(self.langs)
        return result


def take_snapshot() -> IdentitySnapshot:
    """Read every fact once through the infallible API."""
    desktop = api.desktop_env()
    arch = api.arch()
    try:
        width = str(arch.width())
    except IdentityError:
        width = "Unknown"

    return IdentitySnapshot(
        realname=api.realname(),
        username=api.username(),
        account=api.account(),
        devicename=api.devicename(),
        hostname=api.hostname(),
        platform=str(api.platform()),
        distro=api.distro(),
        desktop_env=str(desktop),
        is_gtk=desktop.is_gtk(),
        is_kde=desktop.is_kde(),
        arch=str(arch),
        width=width,
        langs=tuple(str(lang) for lang in api.langs()),
    )
