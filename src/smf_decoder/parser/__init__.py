"""Parser package — decode SMF byte streams into the model."""

from smf_decoder.parser.classifier import StatusRead, classify_status, read_event_type
from smf_decoder.parser.events import DecoderState, EventStreamDecoder, decode_track_events
from smf_decoder.parser.framing import load, loads, parse, read_header, read_track
from smf_decoder.parser.sizes import SizeDiscipline, SizeKind, size_discipline
from smf_decoder.parser.vlq import Vlq, decode_vlq, read_vlq

__all__ = [
    "classify_status",
    "decode_track_events",
    "decode_vlq",
    "load",
    "loads",
    "parse",
    "read_event_type",
    "read_header",
    "read_track",
    "read_vlq",
    "size_discipline",
    "DecoderState",
    "EventStreamDecoder",
    "SizeDiscipline",
    "SizeKind",
    "StatusRead",
    "Vlq",
]
