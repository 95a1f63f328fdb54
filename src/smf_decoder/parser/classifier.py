"""Status byte classifier.

Maps a status byte (and, for 0xFF meta events, the sub-type byte that
follows it) onto an :class:`EventType`.  Classification is total: any byte
that is not a known status yields ``UNDEFINED`` rather than an error.
"""

from __future__ import annotations

from dataclasses import dataclass

from smf_decoder.model.event_types import UNDEFINED, EventKind, EventType
from smf_decoder.source import ByteSource

META_STATUS = 0xFF

# High nibble -> channel voice kind
_CHANNEL_VOICE: dict[int, EventKind] = {
    0x80: EventKind.NOTE_OFF,
    0x90: EventKind.NOTE_ON,
    0xA0: EventKind.POLYPHONIC_KEY_PRESSURE,
    0xB0: EventKind.CONTROL_CHANGE,
    0xC0: EventKind.PROGRAM_CHANGE,
    0xD0: EventKind.CHANNEL_PRESSURE,
    0xE0: EventKind.PITCH_WHEEL_CHANGE,
}

# 0xF1, 0xF4, 0xF5, 0xF9 and 0xFD are left out on purpose: undefined in MIDI.
_SYSTEM: dict[int, EventKind] = {
    0xF0: EventKind.SYSTEM_EXCLUSIVE,
    0xF2: EventKind.SONG_POSITION_POINTER,
    0xF3: EventKind.SONG_SELECT,
    0xF6: EventKind.TUNE_REQUEST,
    0xF7: EventKind.END_OF_EXCLUSIVE,
    0xF8: EventKind.RT_TIMING_CLOCK,
    0xFA: EventKind.RT_START,
    0xFB: EventKind.RT_CONTINUE,
    0xFC: EventKind.RT_STOP,
    0xFE: EventKind.RT_ACTIVE_SENSING,
}

_META: dict[int, EventKind] = {
    0x00: EventKind.META_SEQUENCE_NUMBER,
    0x01: EventKind.META_TEXT,
    0x02: EventKind.META_COPYRIGHT_NOTICE,
    0x03: EventKind.META_SEQUENCE_OR_TRACK_NAME,
    0x04: EventKind.META_INSTRUMENT_NAME,
    0x05: EventKind.META_LYRIC_TEXT,
    0x06: EventKind.META_MARKER_TEXT,
    0x07: EventKind.META_CUE_POINT,
    0x20: EventKind.META_MIDI_CHANNEL_PREFIX_ASSIGNMENT,
    0x2F: EventKind.META_END_OF_TRACK,
    0x51: EventKind.META_TEMPO_SETTING,
    0x54: EventKind.META_SMPTE_OFFSET,
    0x58: EventKind.META_TIME_SIGNATURE,
    0x59: EventKind.META_KEY_SIGNATURE,
    0x7F: EventKind.META_SEQUENCER_SPECIFIC_EVENT,
}


def is_channel_status(status: int) -> bool:
    return 0x80 <= status <= 0xEF


def classify_status(status: int, meta_type: int | None = None) -> EventType:
    """Classify *status*; *meta_type* is only consulted when status is 0xFF."""
    if not 0 <= status <= 0xFF:
        raise ValueError(f"status byte out of range: {status!r}")

    kind = _CHANNEL_VOICE.get(status & 0xF0)
    if kind is not None:
        return EventType(kind, status & 0x0F)

    if status == META_STATUS:
        if meta_type is None:
            return UNDEFINED
        kind = _META.get(meta_type)
        return EventType(kind) if kind is not None else UNDEFINED

    kind = _SYSTEM.get(status)
    return EventType(kind) if kind is not None else UNDEFINED


@dataclass(frozen=True)
class StatusRead:
    """Outcome of reading and classifying one event's status."""

    event_type: EventType
    status: int
    meta_type: int | None
    consumed: int  # 1, or 2 with a meta sub-type
    leading_data: bytes = b""  # first data byte when running status applied


def read_event_type(source: ByteSource, running_status: int | None = None) -> StatusRead:
    """Read one status byte (plus the meta sub-type after 0xFF) and classify it.

    With *running_status* set, a data byte (< 0x80) in status position means
    the status was omitted: the running status is classified instead and
    the byte is handed back as the first payload byte.
    """
    status = source.read_byte()
    if status < 0x80 and running_status is not None:
        return StatusRead(
            event_type=classify_status(running_status),
            status=running_status,
            meta_type=None,
            consumed=1,
            leading_data=bytes([status]),
        )

    meta_type = None
    consumed = 1
    if status == META_STATUS:
        meta_type = source.read_byte()
        consumed = 2
    return StatusRead(
        event_type=classify_status(status, meta_type),
        status=status,
        meta_type=meta_type,
        consumed=consumed,
    )
