"""Variable-length quantities (VLQ).

A VLQ stores an unsigned integer in 7-bit groups, most significant group
first.  Every byte but the last has its high bit set.  SMF caps them at
four bytes (28 significant bits, ``0x0FFFFFFF``).
"""

from __future__ import annotations

from dataclasses import dataclass

from smf_decoder.source import ByteSource

MAX_VLQ_BYTES = 4
MAX_VLQ_VALUE = 0x0FFFFFFF

_CONTINUATION = 0x80
_PAYLOAD_MASK = 0x7F


@dataclass(frozen=True)
class Vlq:
    value: int
    length: int  # bytes consumed


def decode_vlq(data: bytes) -> int:
    """Decode a VLQ from the start of *data*.

    Decoding stops at the first byte <= 127, or after the fourth byte
    whatever its continuation bit says.  Bytes past the end of the
    quantity are ignored, so ``decode_vlq(b"\\x7f\\x00\\x00\\x00") == 127``.
    """
    if not data:
        raise ValueError("cannot decode a VLQ from an empty buffer")
    result = 0
    for byte in data[:MAX_VLQ_BYTES]:
        result = (result << 7) | (byte & _PAYLOAD_MASK)
        if not byte & _CONTINUATION:
            break
    return result


def read_vlq(source: ByteSource) -> Vlq:
    """Consume one VLQ (1-4 bytes) from *source*."""
    consumed = bytearray()
    while len(consumed) < MAX_VLQ_BYTES:
        byte = source.read_byte()
        consumed.append(byte)
        if not byte & _CONTINUATION:
            break
    return Vlq(decode_vlq(bytes(consumed)), len(consumed))
