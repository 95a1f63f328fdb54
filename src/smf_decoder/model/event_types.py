"""Closed set of track event types.

An :class:`EventType` is a tagged variant: an :class:`EventKind` tag plus
the channel number for the kinds that carry one.  Every kind belongs to
exactly one :class:`EventCategory`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventCategory(str, Enum):
    CHANNEL_VOICE = "channel_voice"
    CHANNEL_MODE = "channel_mode"
    SYSTEM = "system"
    META = "meta"


class EventKind(str, Enum):
    # Channel voice messages
    NOTE_OFF = "note_off"
    NOTE_ON = "note_on"
    POLYPHONIC_KEY_PRESSURE = "polyphonic_key_pressure"
    CONTROL_CHANGE = "control_change"
    PROGRAM_CHANGE = "program_change"
    CHANNEL_PRESSURE = "channel_pressure"
    PITCH_WHEEL_CHANGE = "pitch_wheel_change"

    # Channel mode messages
    CHANNEL_MODE = "channel_mode"

    # System common messages
    SYSTEM_EXCLUSIVE = "system_exclusive"
    UNDEFINED = "undefined"
    SONG_POSITION_POINTER = "song_position_pointer"
    SONG_SELECT = "song_select"
    TUNE_REQUEST = "tune_request"
    END_OF_EXCLUSIVE = "end_of_exclusive"

    # System real-time messages
    RT_TIMING_CLOCK = "rt_timing_clock"
    RT_START = "rt_start"
    RT_CONTINUE = "rt_continue"
    RT_STOP = "rt_stop"
    RT_ACTIVE_SENSING = "rt_active_sensing"

    # Meta events
    META_SEQUENCE_NUMBER = "meta_sequence_number"
    META_TEXT = "meta_text"
    META_COPYRIGHT_NOTICE = "meta_copyright_notice"
    META_SEQUENCE_OR_TRACK_NAME = "meta_sequence_or_track_name"
    META_INSTRUMENT_NAME = "meta_instrument_name"
    META_LYRIC_TEXT = "meta_lyric_text"
    META_MARKER_TEXT = "meta_marker_text"
    META_CUE_POINT = "meta_cue_point"
    META_MIDI_CHANNEL_PREFIX_ASSIGNMENT = "meta_midi_channel_prefix_assignment"
    META_END_OF_TRACK = "meta_end_of_track"
    META_TEMPO_SETTING = "meta_tempo_setting"
    META_SMPTE_OFFSET = "meta_smpte_offset"
    META_TIME_SIGNATURE = "meta_time_signature"
    META_KEY_SIGNATURE = "meta_key_signature"
    META_SEQUENCER_SPECIFIC_EVENT = "meta_sequencer_specific_event"

    @property
    def category(self) -> EventCategory:
        return _CATEGORIES[self]

    @property
    def has_channel(self) -> bool:
        return self.category in (EventCategory.CHANNEL_VOICE, EventCategory.CHANNEL_MODE)

    @property
    def is_meta(self) -> bool:
        return self.category is EventCategory.META


CHANNEL_VOICE_KINDS = (
    EventKind.NOTE_OFF,
    EventKind.NOTE_ON,
    EventKind.POLYPHONIC_KEY_PRESSURE,
    EventKind.CONTROL_CHANGE,
    EventKind.PROGRAM_CHANGE,
    EventKind.CHANNEL_PRESSURE,
    EventKind.PITCH_WHEEL_CHANGE,
)

SYSTEM_KINDS = (
    EventKind.SYSTEM_EXCLUSIVE,
    EventKind.UNDEFINED,
    EventKind.SONG_POSITION_POINTER,
    EventKind.SONG_SELECT,
    EventKind.TUNE_REQUEST,
    EventKind.END_OF_EXCLUSIVE,
    EventKind.RT_TIMING_CLOCK,
    EventKind.RT_START,
    EventKind.RT_CONTINUE,
    EventKind.RT_STOP,
    EventKind.RT_ACTIVE_SENSING,
)

META_KINDS = tuple(kind for kind in EventKind if kind.name.startswith("META_"))

_CATEGORIES: dict[EventKind, EventCategory] = {
    **{kind: EventCategory.CHANNEL_VOICE for kind in CHANNEL_VOICE_KINDS},
    EventKind.CHANNEL_MODE: EventCategory.CHANNEL_MODE,
    **{kind: EventCategory.SYSTEM for kind in SYSTEM_KINDS},
    **{kind: EventCategory.META for kind in META_KINDS},
}


@dataclass(frozen=True)
class EventType:
    """Event kind plus channel (0-15) for channel messages, else ``None``."""

    kind: EventKind
    channel: int | None = None

    def __post_init__(self) -> None:
        if self.kind.has_channel:
            if self.channel is None or not 0 <= self.channel <= 0x0F:
                raise ValueError(
                    f"{self.kind.value} requires a channel in 0-15, got {self.channel!r}"
                )
        elif self.channel is not None:
            raise ValueError(f"{self.kind.value} does not carry a channel")

    @property
    def category(self) -> EventCategory:
        return self.kind.category

    @property
    def is_end_of_track(self) -> bool:
        return self.kind is EventKind.META_END_OF_TRACK

    def __str__(self) -> str:
        if self.channel is None:
            return self.kind.value
        return f"{self.kind.value}(ch={self.channel})"


UNDEFINED = EventType(EventKind.UNDEFINED)
END_OF_TRACK = EventType(EventKind.META_END_OF_TRACK)
