"""smf-decoder — decode Standard MIDI Files into an immutable event model."""

from smf_decoder.config import DecoderOptions, SysExMode
from smf_decoder.errors import SmfError
from smf_decoder.model import EventKind, EventType, Header, MidiFile, Track, TrackEvent
from smf_decoder.parser import load, loads

__all__ = [
    "load",
    "loads",
    "DecoderOptions",
    "EventKind",
    "EventType",
    "Header",
    "MidiFile",
    "SmfError",
    "SysExMode",
    "Track",
    "TrackEvent",
]
