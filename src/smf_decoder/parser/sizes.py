"""Payload size disciplines per event kind.

Three disciplines share one byte stream:

- ``FIXED``: exactly ``count`` payload bytes (channel and system messages)
- ``VARIABLE``: a VLQ length followed by that many bytes (meta events)
- ``SYSEX_DELIMITED``: bytes up to a 0xF7 terminator (System Exclusive)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from smf_decoder.model.event_types import (
    META_KINDS,
    SYSTEM_KINDS,
    EventKind,
    EventType,
)


class SizeKind(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"
    SYSEX_DELIMITED = "sysex_delimited"


@dataclass(frozen=True)
class SizeDiscipline:
    kind: SizeKind
    count: int = 0  # only meaningful for FIXED

    def __str__(self) -> str:
        if self.kind is SizeKind.FIXED:
            return f"fixed({self.count})"
        return self.kind.value


def fixed(count: int) -> SizeDiscipline:
    return SizeDiscipline(SizeKind.FIXED, count)


VARIABLE = SizeDiscipline(SizeKind.VARIABLE)
SYSEX_DELIMITED = SizeDiscipline(SizeKind.SYSEX_DELIMITED)

_DISCIPLINES: dict[EventKind, SizeDiscipline] = {
    EventKind.NOTE_OFF: fixed(2),
    EventKind.NOTE_ON: fixed(2),
    EventKind.POLYPHONIC_KEY_PRESSURE: fixed(2),
    EventKind.CONTROL_CHANGE: fixed(2),
    EventKind.PROGRAM_CHANGE: fixed(1),
    EventKind.CHANNEL_PRESSURE: fixed(1),
    EventKind.PITCH_WHEEL_CHANGE: fixed(2),
    EventKind.CHANNEL_MODE: fixed(2),
    **{kind: fixed(0) for kind in SYSTEM_KINDS},
    **{kind: VARIABLE for kind in META_KINDS},
    EventKind.SYSTEM_EXCLUSIVE: SYSEX_DELIMITED,
}


def size_discipline(event_type: EventType) -> SizeDiscipline:
    """Return the payload size discipline for *event_type*."""
    return _DISCIPLINES[event_type.kind]
