"""Immutable model of a decoded Standard MIDI File."""

from smf_decoder.model.event_types import EventCategory, EventKind, EventType
from smf_decoder.model.smf import Header, MidiFile, Track, TrackEvent

__all__ = [
    "EventCategory",
    "EventKind",
    "EventType",
    "Header",
    "MidiFile",
    "Track",
    "TrackEvent",
]
