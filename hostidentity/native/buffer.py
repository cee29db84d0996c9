"""
buffer.py - Two-phase "probe size, then fill" native calls.

Many native APIs (``GetUserNameExW``, ``GetComputerNameExW``,
``GetUserPreferredUILanguages`` ...) do not state their output length up
front. The caller probes with a small buffer, learns the required size,
allocates and calls again. ``grow_buffer`` is the only place that reasons
about those lengths; strategies hand it a ``fill`` callable that performs a
single native call.

Functions:
- grow_buffer(fill, ...) -> OsText:
    Negotiate a buffer size with a native call and return exactly the units
    the OS reported as written.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from hostidentity.exceptions.exceptions import AbsentError, IoFailureError
from hostidentity.native.text import OsEncoding, OsText, to_raw

MAX_ATTEMPTS = 4


class FillStatus(Enum):
    """Outcome of a single native fill call."""

    OK = "ok"
    INSUFFICIENT = "insufficient"
    FAILED = "failed"


@dataclass(frozen=True)
class NativeReply:
    """
    Result of one native call made by a ``fill`` callable.

    Attributes:
        status (FillStatus): What the call reported.
        length (int): Units written for OK, units required for INSUFFICIENT,
            and the OS error code for FAILED.
        buffer (Optional[Any]): Buffer the call filled; only read for OK.
    """

    status: FillStatus
    length: int
    buffer: Optional[Any] = None


Fill = Callable[[int], NativeReply]


def grow_buffer(
    fill: Fill,
    *,
    encoding: OsEncoding = OsEncoding.UTF16,
    terminator: int = 1,
    initial: int = 0,
    attempts: int = MAX_ATTEMPTS,
    name: str = "native call",
) -> OsText:
    """
    Run ``fill`` until the native call succeeds, growing the buffer as told.

    Args:
        fill: Performs one native call with a fresh buffer of the given
            capacity (in units) and reports the outcome.
        encoding: Encoding of the units the call writes.
        terminator: Extra units allocated for an OS-mandated NUL slot.
        initial: Capacity used for the probing call.
        attempts: Maximum number of calls before giving up.
        name: Native call name used in error context.

    Returns:
        OsText: Exactly the units the final call reported, never more than
        the allocated capacity.

    Raises:
        AbsentError: The OS reported a required size of zero, or the size
            never settled within ``attempts`` calls.
        IoFailureError: The native call failed outright.
    """
    capacity = max(initial, 0)

    for _ in range(attempts):
        reply = fill(capacity)

        if reply.status is FillStatus.OK:
            length = max(0, min(reply.length, capacity))
            if length == 0:
                raise AbsentError(
                    message=f"{name} returned an empty value.",
                    step="buffer",
                    source=name,
                )
            return to_raw(reply.buffer, length, encoding)

        if reply.status is FillStatus.FAILED:
            raise IoFailureError(
                message=f"{name} failed.",
                step="buffer",
                path=name,
                errno=reply.length,
            )

        if reply.length <= 0:
            raise AbsentError(
                message=f"{name} reported a required size of zero.",
                step="buffer",
                source=name,
            )

        # Some APIs count the terminator in the required size and some don't.
        required = reply.length + terminator
        capacity = required if required > capacity else capacity + terminator + 1

    raise AbsentError(
        message=f"{name} did not settle on a buffer size.",
        step="buffer",
        source=name,
        context={"attempts": attempts},
    )
