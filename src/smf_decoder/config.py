"""Decoder options.

The defaults reproduce the reference decoding rules exactly: no running
status, SysEx blocks scanned up to their 0xF7 terminator, unknown meta
sub-types read as zero-length events and track lengths recorded but not
checked. :meth:`DecoderOptions.full_smf` switches on everything needed to
decode files written by ordinary sequencers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SysExMode(str, Enum):
    """How the payload of a System Exclusive (0xF0) event is read."""

    DELIMITED = "delimited"  # up to and including the 0xF7 terminator
    LENGTH_PREFIXED = "length-prefixed"  # VLQ length, then that many bytes
    EMPTY = "empty"  # zero bytes


@dataclass(frozen=True)
class DecoderOptions:
    running_status: bool = False
    sysex_mode: SysExMode = SysExMode.DELIMITED
    unknown_meta_lengths: bool = False
    verify_track_length: bool = False

    @classmethod
    def full_smf(cls) -> "DecoderOptions":
        """Options for decoding SMF files as written by common tools."""
        return cls(
            running_status=True,
            sysex_mode=SysExMode.LENGTH_PREFIXED,
            unknown_meta_lengths=True,
            verify_track_length=True,
        )


DEFAULT_OPTIONS = DecoderOptions()
