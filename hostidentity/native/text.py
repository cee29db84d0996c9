"""
text.py - Conversion between native OS strings and validated text.

Native strings come in two shapes:

- byte strings in the OS encoding (POSIX, Redox, WASI), and
- UTF-16 code units (Windows).

``OsText`` keeps the exact native data so that nothing is lost, and
``to_validated`` turns it into a Python ``str`` that is always safe to print:
undecodable bytes and unpaired surrogates become U+FFFD instead of raising.
"""

import os

from dataclasses import dataclass
from enum import Enum
from typing import Union

from hostidentity.exceptions.exceptions import EncodingInvalidError

REPLACEMENT_CHARACTER = "�"

BufferLike = Union[bytes, bytearray, memoryview]


class OsEncoding(Enum):
    """Encoding tag of a native string."""

    BYTES = "bytes"
    UTF16 = "utf-16"

    @property
    def unit_size(self) -> int:
        """Size of one logical unit in bytes."""
        return 2 if self is OsEncoding.UTF16 else 1


@dataclass(frozen=True)
class OsText:
    """
    Lossless native string.

    Attributes:
        data (bytes): Exact bytes returned by the OS. For UTF-16 text these are
            little-endian code units, two bytes each.
        encoding (OsEncoding): Encoding the data is expressed in.
    """

    data: bytes
    encoding: OsEncoding = OsEncoding.BYTES

    @classmethod
    def from_str(cls, text: str) -> "OsText":
        """
        Build native text from a string returned by a standard library call.

        Strings decoded by the interpreter with ``surrogateescape`` are turned
        back into their original bytes, so a passwd entry holding invalid
        UTF-8 keeps its exact content.
        """
        try:
            return cls(os.fsencode(text), OsEncoding.BYTES)
        except UnicodeEncodeError:
            return cls(text.encode("utf-8", "surrogatepass"), OsEncoding.BYTES)

    @property
    def units(self) -> int:
        """Number of logical units (bytes or UTF-16 code units)."""
        return len(self.data) // self.encoding.unit_size

    def to_str(self) -> str:
        """Validated text, see ``to_validated``."""
        return to_validated(self)

    def strip(self) -> "OsText":
        """Copy without surrounding whitespace; invalid units are kept as they are."""
        if self.encoding is OsEncoding.UTF16:
            text = self.data.decode("utf-16-le", "surrogatepass").strip()
            return OsText(text.encode("utf-16-le", "surrogatepass"), self.encoding)
        return OsText(self.data.strip(), self.encoding)

    def __bool__(self) -> bool:
        return bool(self.data)

    def __str__(self) -> str:
        return to_validated(self)


def to_raw(
    buffer: BufferLike, length: int, encoding: OsEncoding = OsEncoding.BYTES
) -> OsText:
    """
    Take exactly ``length`` logical units out of a native buffer.

    No validation happens here. The length is clamped to what the buffer
    actually holds so a native call that over-reports cannot cause a read
    past the end.

    Args:
        buffer: bytes-like object or ctypes array filled by a native call.
        length: Number of logical units the OS reported.
        encoding: Encoding of the buffer contents.

    Raises:
        EncodingInvalidError: When ``length`` is negative or the buffer does
            not hold a whole number of units.
    """
    if length < 0:
        raise EncodingInvalidError(
            message="Native text length is negative.",
            step="conversion",
            length=length,
        )

    # tobytes() copies any buffer layout, including ctypes' "<H" arrays.
    raw = memoryview(buffer).tobytes()
    size = encoding.unit_size
    if len(raw) % size:
        raise EncodingInvalidError(
            message="Native buffer does not hold whole UTF-16 code units.",
            step="conversion",
            length=len(raw),
        )

    available = len(raw) // size
    return OsText(raw[: min(length, available) * size], encoding)


def to_validated(raw: OsText) -> str:
    """
    Convert native text into a printable string. Never raises.

    Invalid UTF-8 byte sequences and unpaired UTF-16 surrogates are replaced
    with U+FFFD; valid input comes back unchanged.
    """
    if raw.encoding is OsEncoding.UTF16:
        return raw.data.decode("utf-16-le", "replace")
    return raw.data.decode("utf-8", "replace")


def from_utf16_units(units) -> OsText:
    """Build UTF-16 native text from a sequence of integer code units."""
    data = bytearray()
    for unit in units:
        data += (unit & 0xFFFF).to_bytes(2, "little")
    return OsText(bytes(data), OsEncoding.UTF16)
