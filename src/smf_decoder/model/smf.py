"""Decoded Standard MIDI File model.

Everything here is immutable and produced in one pass by
:mod:`smf_decoder.parser.framing`.  Delta times are kept exactly as read;
:meth:`Track.absolute_times` derives absolute ticks on demand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from smf_decoder.config import DecoderOptions
from smf_decoder.errors import InvalidFormatError, InvalidHeaderLengthError
from smf_decoder.model.event_types import EventType

HEADER_LENGTH = 6
FORMATS = (0, 1, 2)  # single track, synchronous tracks, independent tracks


@dataclass(frozen=True)
class Header:
    length: int
    format: int
    n_tracks: int
    division: int  # signed: ticks per quarter note if > 0, SMPTE if < 0

    def __post_init__(self) -> None:
        if self.length != HEADER_LENGTH:
            raise InvalidHeaderLengthError(self.length)
        if self.format not in FORMATS:
            raise InvalidFormatError(self.format)

    @property
    def uses_smpte(self) -> bool:
        return self.division < 0

    @property
    def ticks_per_quarter_note(self) -> int | None:
        return None if self.uses_smpte else self.division

    @property
    def smpte_frames_per_second(self) -> int | None:
        """Frame rate from the high byte of a negative division (24, 25, 29, 30)."""
        if not self.uses_smpte:
            return None
        return -(self.division >> 8)

    @property
    def ticks_per_frame(self) -> int | None:
        if not self.uses_smpte:
            return None
        return self.division & 0xFF


@dataclass(frozen=True)
class TrackEvent:
    delta_time: int
    event_type: EventType
    data_byte_count: int
    data_bytes: bytes
    status: int | None = None  # status byte actually classified
    meta_type: int | None = None  # meta sub-type byte for 0xFF events

    def __post_init__(self) -> None:
        if len(self.data_bytes) != self.data_byte_count:
            raise ValueError(
                f"data_bytes holds {len(self.data_bytes)} byte(s), "
                f"declared {self.data_byte_count}"
            )


@dataclass(frozen=True)
class Track:
    length: int  # declared chunk length
    events: tuple[TrackEvent, ...]

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[TrackEvent]:
        return iter(self.events)

    @property
    def end_of_track(self) -> TrackEvent | None:
        """The terminating end-of-track event, if the track has one."""
        if self.events and self.events[-1].event_type.is_end_of_track:
            return self.events[-1]
        return None

    def absolute_times(self) -> Iterator[tuple[int, TrackEvent]]:
        """Walk the track yielding ``(absolute_tick, event)`` pairs."""
        abs_tick = 0
        for event in self.events:
            abs_tick += event.delta_time
            yield abs_tick, event


@dataclass(frozen=True)
class MidiFile:
    filename: str
    header: Header
    tracks: tuple[Track, ...]

    @classmethod
    def from_file(cls, path, options: DecoderOptions | None = None) -> "MidiFile":
        from smf_decoder.parser.framing import load

        return load(path, options)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        filename: str = "<bytes>",
        options: DecoderOptions | None = None,
    ) -> "MidiFile":
        from smf_decoder.parser.framing import loads

        return loads(data, filename, options)
