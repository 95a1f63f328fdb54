"""Track event stream decoder.

One :class:`EventStreamDecoder` walks the events of a single track chunk.
Each iteration reads a delta-time VLQ, classifies the status, resolves the
payload size and reads the payload.  Iteration stops right after the first
end-of-track meta event; there is no event-count cap, so a track missing
its end-of-track marker reads until the source runs dry.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator

from smf_decoder.config import DEFAULT_OPTIONS, DecoderOptions, SysExMode
from smf_decoder.model.event_types import EventKind
from smf_decoder.model.smf import TrackEvent
from smf_decoder.parser.classifier import (
    META_STATUS,
    StatusRead,
    is_channel_status,
    read_event_type,
)
from smf_decoder.parser.sizes import (
    VARIABLE,
    SizeDiscipline,
    SizeKind,
    size_discipline,
)
from smf_decoder.parser.vlq import read_vlq
from smf_decoder.source import ByteSource

logger = logging.getLogger(__name__)

SYSEX_TERMINATOR = 0xF7

_ESCAPE_KINDS = (EventKind.SYSTEM_EXCLUSIVE, EventKind.END_OF_EXCLUSIVE)


class DecoderState(str, Enum):
    READING_DELTA_TIME = "reading_delta_time"
    CLASSIFYING_EVENT = "classifying_event"
    RESOLVING_SIZE = "resolving_size"
    READING_PAYLOAD = "reading_payload"
    EVENT_COMPLETE = "event_complete"
    STREAM_TERMINATED = "stream_terminated"


class EventStreamDecoder:
    """Lazily decode the events of one track from *source*."""

    def __init__(
        self,
        source: ByteSource,
        options: DecoderOptions = DEFAULT_OPTIONS,
    ) -> None:
        self._source = source
        self._options = options
        self._running_status: int | None = None
        self.state = DecoderState.READING_DELTA_TIME
        self.events_decoded = 0

    @property
    def terminated(self) -> bool:
        return self.state is DecoderState.STREAM_TERMINATED

    def __iter__(self) -> Iterator[TrackEvent]:
        while not self.terminated:
            yield self.decode_event()

    def decode_event(self) -> TrackEvent:
        """Decode the next event and advance the state machine."""
        if self.terminated:
            raise RuntimeError("end of track already reached")

        self.state = DecoderState.READING_DELTA_TIME
        delta_time = read_vlq(self._source).value

        self.state = DecoderState.CLASSIFYING_EVENT
        running = self._running_status if self._options.running_status else None
        status = read_event_type(self._source, running)

        self.state = DecoderState.RESOLVING_SIZE
        discipline = self._resolve(status)

        self.state = DecoderState.READING_PAYLOAD
        data = status.leading_data + self._read_payload(
            discipline, already_read=len(status.leading_data)
        )

        self.state = DecoderState.EVENT_COMPLETE
        event = TrackEvent(
            delta_time=delta_time,
            event_type=status.event_type,
            data_byte_count=len(data),
            data_bytes=data,
            status=status.status,
            meta_type=status.meta_type,
        )
        self.events_decoded += 1
        self._track_running_status(status.status)

        if event.event_type.is_end_of_track:
            logger.debug("end of track after %d event(s)", self.events_decoded)
            self.state = DecoderState.STREAM_TERMINATED
        return event

    def _resolve(self, status: StatusRead) -> SizeDiscipline:
        discipline = size_discipline(status.event_type)
        kind = status.event_type.kind
        if (
            self._options.sysex_mode is SysExMode.LENGTH_PREFIXED
            and kind in _ESCAPE_KINDS
        ):
            return VARIABLE
        if (
            self._options.unknown_meta_lengths
            and status.status == META_STATUS
            and kind is EventKind.UNDEFINED
        ):
            return VARIABLE
        return discipline

    def _read_payload(self, discipline: SizeDiscipline, already_read: int = 0) -> bytes:
        if discipline.kind is SizeKind.FIXED:
            return self._source.read_exact(discipline.count - already_read)
        if discipline.kind is SizeKind.VARIABLE:
            length = read_vlq(self._source).value
            return self._source.read_exact(length)
        if self._options.sysex_mode is SysExMode.EMPTY:
            return b""
        return self._read_until_terminator()

    def _read_until_terminator(self) -> bytes:
        data = bytearray()
        while True:
            byte = self._source.read_byte()
            data.append(byte)
            if byte == SYSEX_TERMINATOR:
                return bytes(data)

    def _track_running_status(self, status: int) -> None:
        # Channel messages set running status; meta and sysex events clear it.
        if is_channel_status(status):
            self._running_status = status
        elif 0xF0 <= status < 0xF8 or status == META_STATUS:
            self._running_status = None


def decode_track_events(
    source: ByteSource,
    options: DecoderOptions = DEFAULT_OPTIONS,
) -> tuple[TrackEvent, ...]:
    """Decode one track's events up to and including end-of-track."""
    return tuple(EventStreamDecoder(source, options))
