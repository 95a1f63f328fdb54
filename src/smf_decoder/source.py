"""Sequential byte source the decoder reads from.

The decoder only ever asks for "exactly N more bytes"; it never seeks.
Position tracking exists so errors can report where decoding stopped and
so track lengths can be checked against the bytes actually consumed.
"""

from __future__ import annotations

from io import BytesIO
from typing import BinaryIO

from smf_decoder.errors import SourceReadError


class ByteSource:
    """Exact-read wrapper around a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._position = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteSource":
        return cls(BytesIO(data))

    @property
    def position(self) -> int:
        """Number of bytes consumed so far."""
        return self._position

    def read_exact(self, n: int) -> bytes:
        """Read exactly *n* bytes or raise :class:`SourceReadError`."""
        if n == 0:
            return b""
        chunks: list[bytes] = []
        received = 0
        while received < n:
            try:
                chunk = self._stream.read(n - received)
            except OSError as exc:
                raise SourceReadError(n, received, self._position) from exc
            if not chunk:
                raise SourceReadError(n, received, self._position)
            chunks.append(chunk)
            received += len(chunk)
        self._position += n
        return b"".join(chunks)

    def read_byte(self) -> int:
        return self.read_exact(1)[0]
