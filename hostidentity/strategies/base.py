"""
base.py - The capability interface every platform strategy implements.

A strategy answers the ten fallible questions for one OS family. Text facts
come back as ``OsText`` so the exact native data survives; enum facts come
back already classified. Any missing source (file, variable, passwd entry,
helper executable) is reported as a typed ``IdentityError``, never as a bare
``OSError`` and never as a crash.
"""

import os
import subprocess

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from hostidentity.exceptions.exceptions import AbsentError, IoFailureError
from hostidentity.logging.logger import configured_logger
from hostidentity.native.text import OsText
from hostidentity.taxonomy.arch import Arch
from hostidentity.taxonomy.desktop import DesktopEnv
from hostidentity.taxonomy.platform import Platform


class Strategy(ABC):
    """
    Fallible fact lookups for one OS family.

    Args:
        environ (Optional[Mapping[str, str]]): Environment to read, defaults to
            ``os.environ`` (read live, never copied).
        logger: Optional IdentityLogger; when omitted the package logger
            following ``config`` is used.
    """

    name = "base"

    def __init__(self, environ: Optional[Mapping[str, str]] = None, logger=None):
        self.environ = os.environ if environ is None else environ
        self._logger = logger

    @property
    def logger(self):
        return self._logger or configured_logger(__name__)

    @abstractmethod
    def realname_os(self) -> OsText:
        """User's full name."""

    @abstractmethod
    def username_os(self) -> OsText:
        """User's login name."""

    def account_os(self) -> OsText:
        """User's account name; the username unless the OS knows better."""
        return self.username_os()

    @abstractmethod
    def devicename_os(self) -> OsText:
        """Device's pretty name."""

    @abstractmethod
    def hostname_os(self) -> OsText:
        """Device's hostname in the casing the OS reports."""

    @abstractmethod
    def distro_os(self) -> OsText:
        """Operating system distribution name and version."""

    @abstractmethod
    def desktop_env(self) -> DesktopEnv:
        """Desktop environment of the session."""

    @abstractmethod
    def platform(self) -> Platform:
        """Operating system family."""

    @abstractmethod
    def arch(self) -> Arch:
        """CPU architecture."""

    @abstractmethod
    def langs(self) -> List[str]:
        """Locale strings in preference order, unparsed."""

    # Helpers shared by the concrete strategies.

    def env_text(self, *names: str) -> OsText:
        """
        First non-empty environment variable among ``names``.

        Raises:
            AbsentError: None of the variables is set to a non-empty value.
        """
        for name in names:
            value = self.environ.get(name)
            if value and value.strip():
                return OsText.from_str(value)
        raise AbsentError(
            message="Environment variable is not set.",
            step=self.name,
            source=" / ".join(names),
        )

    def env_values(self, names: Iterable[str]) -> List[str]:
        """Values of the set, non-empty variables among ``names``, in order."""
        values = []
        for name in names:
            value = self.environ.get(name)
            if value and value.strip():
                values.append(value.strip())
        return values


def read_file(path: Path, step: str) -> bytes:
    """
    Read a whole file as bytes.

    Raises:
        AbsentError: The file does not exist.
        IoFailureError: The file exists but could not be read.
    """
    try:
        return Path(path).read_bytes()
    except (FileNotFoundError, NotADirectoryError) as e:
        raise AbsentError(
            message=f"{path} does not exist.", step=step, source=str(path)
        ) from e
    except OSError as e:
        raise IoFailureError(
            message=f"Failed to read {path}.", step=step, path=str(path), errno=e.errno
        ) from e


def _unquote(value: bytes) -> bytes:
    value = value.strip()
    if len(value) >= 2 and value[:1] == value[-1:] and value[:1] in (b'"', b"'"):
        value = value[1:-1]
        value = value.replace(b'\\"', b'"').replace(b"\\\\", b"\\")
    return value


def parse_key_values(content: bytes) -> Dict[bytes, bytes]:
    """
    Parse the ``KEY=value`` format of os-release and machine-info.

    Comments and malformed lines are skipped; quotes around values are removed.
    """
    pairs = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith(b"#") or b"=" not in line:
            continue
        key, value = line.split(b"=", 1)
        pairs[key.strip()] = _unquote(value)
    return pairs


def read_key(paths: Sequence[Path], keys: Sequence[str], step: str) -> OsText:
    """
    First non-empty value of ``keys`` in the first readable file of ``paths``.

    Raises:
        AbsentError: No file exists or none carries any of the keys.
        IoFailureError: A file exists but could not be read.
    """
    for path in paths:
        try:
            pairs = parse_key_values(read_file(path, step))
        except AbsentError:
            continue
        for key in keys:
            value = pairs.get(key.encode("ascii"), b"").strip()
            if value:
                return OsText(value)
    raise AbsentError(
        message=f"None of {', '.join(keys)} is set.",
        step=step,
        source=", ".join(str(p) for p in paths),
    )


def run_command(argv: Sequence[str], step: str, timeout: float = 5.0) -> OsText:
    """
    Run a helper executable and return its trimmed standard output.

    Raises:
        AbsentError: The executable is missing or printed nothing.
        IoFailureError: The executable failed or timed out.
    """
    try:
        out = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
            timeout=timeout,
        ).stdout
    except FileNotFoundError as e:
        raise AbsentError(
            message=f"{argv[0]} is not available.", step=step, source=argv[0]
        ) from e
    except subprocess.CalledProcessError as e:
        raise IoFailureError(
            message=f"{' '.join(argv)} failed.",
            step=step,
            path=argv[0],
            errno=e.returncode,
        ) from e
    except (subprocess.TimeoutExpired, OSError) as e:
        raise IoFailureError(
            message=f"{' '.join(argv)} could not be run.", step=step, path=argv[0]
        ) from e

    out = out.strip()
    if not out:
        raise AbsentError(
            message=f"{' '.join(argv)} printed nothing.", step=step, source=argv[0]
        )
    return OsText(out)


def prettify(name: str) -> str:
    """Turn a hostname like ``my-laptop.local`` into ``My Laptop Local``."""
    words = []
    for word in name.replace(".", " ").replace("-", " ").replace("_", " ").split():
        words.append(word[:1].upper() + word[1:])
    return " ".join(words)
