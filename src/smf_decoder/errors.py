"""Custom exception hierarchy for smf-decoder."""

from __future__ import annotations


class SmfError(Exception):
    """Base exception for all smf-decoder errors."""


class SourceReadError(SmfError, EOFError):
    """The byte source could not supply the requested bytes.

    Raised for short reads (end of stream) and for I/O faults of the
    underlying medium; in the latter case the ``OSError`` is chained as
    ``__cause__``.
    """

    def __init__(self, requested: int, received: int, offset: int) -> None:
        self.requested = requested
        self.received = received
        self.offset = offset
        super().__init__(
            f"needed {requested} byte(s) at offset {offset}, got {received}"
        )


class FormatError(SmfError, ValueError):
    """The byte stream is not a well-formed Standard MIDI File.

    Subclasses both SmfError and ValueError so callers treating malformed
    input as a bad value keep working.
    """


class SignatureMismatchError(FormatError):
    """A chunk signature did not match ``MThd`` / ``MTrk``."""

    def __init__(self, expected: bytes, found: bytes, offset: int) -> None:
        self.expected = expected
        self.found = found
        self.offset = offset
        super().__init__(
            f"expected chunk signature {expected!r} at offset {offset}, found {found!r}"
        )


class InvalidHeaderLengthError(FormatError):
    """The ``MThd`` chunk declared a length other than 6."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"header chunk length must be 6, got {length}")


class InvalidFormatError(FormatError):
    """The header's format field is not 0, 1 or 2."""

    def __init__(self, format: int) -> None:
        self.format = format
        super().__init__(f"unsupported SMF format {format} (expected 0, 1 or 2)")


class TrackLengthMismatchError(FormatError):
    """A track consumed a different number of bytes than its chunk declared."""

    def __init__(self, track_index: int, declared: int, consumed: int) -> None:
        self.track_index = track_index
        self.declared = declared
        self.consumed = consumed
        super().__init__(
            f"track {track_index} declares {declared} byte(s) but its events "
            f"span {consumed}"
        )


class TrackDecodeError(SmfError):
    """Decoding a track's event stream failed.

    The underlying :class:`SourceReadError` is chained as ``__cause__``.
    ``events_decoded`` tells how many events of the track were complete
    before the failure.
    """

    def __init__(self, track_index: int, events_decoded: int, reason: str) -> None:
        self.track_index = track_index
        self.events_decoded = events_decoded
        super().__init__(
            f"track {track_index}: decoding failed after {events_decoded} "
            f"event(s): {reason}"
        )
