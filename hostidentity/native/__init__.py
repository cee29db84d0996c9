"""
Native string conversion and buffer negotiation shared by the platform strategies.
"""

from hostidentity.native.text import OsEncoding, OsText, to_raw, to_validated
from hostidentity.native.buffer import FillStatus, NativeReply, grow_buffer

__all__ = [
    "OsEncoding",
    "OsText",
    "to_raw",
    "to_validated",
    "FillStatus",
    "NativeReply",
    "grow_buffer",
]
