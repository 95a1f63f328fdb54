"""Tests for the per-track event stream decoder."""

from __future__ import annotations

import pytest

from smf_decoder.config import DecoderOptions, SysExMode
from smf_decoder.errors import SourceReadError
from smf_decoder.model.event_types import EventKind, EventType
from smf_decoder.parser.events import DecoderState, EventStreamDecoder, decode_track_events
from smf_decoder.source import ByteSource

from smf_bytes import END_OF_TRACK, vlq


def _decode(body: bytes, options: DecoderOptions | None = None):
    source = ByteSource.from_bytes(body)
    if options is None:
        return decode_track_events(source)
    return decode_track_events(source, options)


# ---------------------------------------------------------------------------
# Termination
# ---------------------------------------------------------------------------

class TestTermination:
    def test_only_end_of_track(self):
        events = _decode(END_OF_TRACK)
        assert len(events) == 1
        assert events[0].event_type.is_end_of_track
        assert events[0].data_bytes == b""

    def test_stops_at_first_end_of_track(self):
        body = b"\x00\x90\x3c\x40" + END_OF_TRACK + b"\x00\x80\x3c\x00" + END_OF_TRACK
        source = ByteSource.from_bytes(body)
        events = decode_track_events(source)
        assert [e.event_type.kind for e in events] == [
            EventKind.NOTE_ON,
            EventKind.META_END_OF_TRACK,
        ]
        assert source.position == 8

    def test_missing_end_of_track_reads_until_exhausted(self):
        with pytest.raises(SourceReadError):
            _decode(b"\x00\x90\x3c\x40\x10\x80\x3c\x00")

    def test_state_machine_terminates(self):
        decoder = EventStreamDecoder(ByteSource.from_bytes(END_OF_TRACK))
        assert decoder.state is DecoderState.READING_DELTA_TIME
        decoder.decode_event()
        assert decoder.state is DecoderState.STREAM_TERMINATED
        assert decoder.terminated
        assert decoder.events_decoded == 1
        assert list(decoder) == []

    def test_decode_after_termination_rejected(self):
        decoder = EventStreamDecoder(ByteSource.from_bytes(END_OF_TRACK))
        decoder.decode_event()
        with pytest.raises(RuntimeError):
            decoder.decode_event()

    def test_lazy_iteration(self):
        body = b"\x00\xc0\x05" + END_OF_TRACK
        source = ByteSource.from_bytes(body)
        decoder = iter(EventStreamDecoder(source))
        first = next(decoder)
        assert first.event_type == EventType(EventKind.PROGRAM_CHANGE, 0)
        assert source.position == 3


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEventRecords:
    def test_note_on(self):
        event = _decode(b"\x00\x90\x3c\x40" + END_OF_TRACK)[0]
        assert event.delta_time == 0
        assert event.event_type == EventType(EventKind.NOTE_ON, 0)
        assert event.data_byte_count == 2
        assert event.data_bytes == b"\x3c\x40"
        assert event.status == 0x90

    def test_multi_byte_delta_time(self):
        event = _decode(vlq(480) + b"\x85\x3c\x00" + END_OF_TRACK)[0]
        assert event.delta_time == 480
        assert event.event_type == EventType(EventKind.NOTE_OFF, 5)

    def test_fixed_sizes_ignore_payload_content(self):
        # Payload bytes with the high bit set are still taken as data.
        events = _decode(b"\x00\xb2\xff\xff\x00\xd2\x90" + END_OF_TRACK)
        assert events[0].data_bytes == b"\xff\xff"
        assert events[1].event_type == EventType(EventKind.CHANNEL_PRESSURE, 2)
        assert events[1].data_bytes == b"\x90"
        assert len(events) == 3

    def test_meta_payload_length_follows_vlq(self):
        name = b"Piano"
        body = b"\x00\xff\x03" + vlq(len(name)) + name + END_OF_TRACK
        event = _decode(body)[0]
        assert event.event_type.kind is EventKind.META_SEQUENCE_OR_TRACK_NAME
        assert event.data_byte_count == 5
        assert event.data_bytes == name
        assert event.meta_type == 0x03

    def test_long_meta_payload(self):
        text = bytes(range(32, 127)) * 2
        body = b"\x00\xff\x01" + vlq(len(text)) + text + END_OF_TRACK
        event = _decode(body)[0]
        assert len(text) > 127
        assert event.data_bytes == text

    def test_tempo(self):
        body = b"\x00\xff\x51\x03\x07\xa1\x20" + END_OF_TRACK
        event = _decode(body)[0]
        assert event.event_type.kind is EventKind.META_TEMPO_SETTING
        assert event.data_bytes == b"\x07\xa1\x20"

    def test_real_time_and_undefined_have_no_payload(self):
        body = b"\x00\xf8\x00\xf4\x00\xfe" + END_OF_TRACK
        events = _decode(body)
        assert [e.event_type.kind for e in events] == [
            EventKind.RT_TIMING_CLOCK,
            EventKind.UNDEFINED,
            EventKind.RT_ACTIVE_SENSING,
            EventKind.META_END_OF_TRACK,
        ]
        assert all(e.data_bytes == b"" for e in events)

    def test_truncated_payload_fails(self):
        with pytest.raises(SourceReadError):
            _decode(b"\x00\x90\x3c")

    def test_truncated_meta_payload_fails(self):
        with pytest.raises(SourceReadError):
            _decode(b"\x00\xff\x01\x05ab")


# ---------------------------------------------------------------------------
# System Exclusive
# ---------------------------------------------------------------------------

class TestSysEx:
    def test_delimited_reads_through_terminator(self):
        body = b"\x00\xf0\x7e\x7f\x09\x01\xf7" + END_OF_TRACK
        events = _decode(body)
        assert events[0].event_type.kind is EventKind.SYSTEM_EXCLUSIVE
        assert events[0].data_bytes == b"\x7e\x7f\x09\x01\xf7"
        assert events[1].event_type.is_end_of_track

    def test_delimited_keeps_length_prefix_as_data(self):
        body = b"\x00\xf0\x05\x7e\x7f\x09\x01\xf7" + END_OF_TRACK
        event = _decode(body)[0]
        assert event.data_bytes == b"\x05\x7e\x7f\x09\x01\xf7"

    def test_unterminated_sysex_fails(self):
        with pytest.raises(SourceReadError):
            _decode(b"\x00\xf0\x7e\x7f")

    def test_length_prefixed(self):
        body = b"\x00\xf0\x05\x7e\x7f\x09\x01\xf7" + END_OF_TRACK
        options = DecoderOptions(sysex_mode=SysExMode.LENGTH_PREFIXED)
        events = _decode(body, options)
        assert events[0].data_bytes == b"\x7e\x7f\x09\x01\xf7"
        assert len(events) == 2

    def test_length_prefixed_escape(self):
        body = b"\x00\xf7\x02\xf3\x01" + END_OF_TRACK
        options = DecoderOptions(sysex_mode=SysExMode.LENGTH_PREFIXED)
        event = _decode(body, options)[0]
        assert event.event_type.kind is EventKind.END_OF_EXCLUSIVE
        assert event.data_bytes == b"\xf3\x01"

    def test_empty_mode_reads_nothing(self):
        body = b"\x00\xf0" + END_OF_TRACK
        options = DecoderOptions(sysex_mode=SysExMode.EMPTY)
        events = _decode(body, options)
        assert events[0].event_type.kind is EventKind.SYSTEM_EXCLUSIVE
        assert events[0].data_byte_count == 0
        assert len(events) == 2

    def test_escape_is_empty_by_default(self):
        events = _decode(b"\x00\xf7" + END_OF_TRACK)
        assert events[0].event_type.kind is EventKind.END_OF_EXCLUSIVE
        assert events[0].data_bytes == b""


# ---------------------------------------------------------------------------
# Running status
# ---------------------------------------------------------------------------

class TestRunningStatus:
    def test_off_by_default(self):
        # Without running status the omitted status byte classifies as
        # undefined and the stream falls out of alignment.
        decoder = EventStreamDecoder(ByteSource.from_bytes(b"\x00\x90\x3c\x40\x00\x3e\x40"))
        decoder.decode_event()
        assert decoder.decode_event().event_type.kind is EventKind.UNDEFINED

    def test_repeated_status_omitted(self):
        body = b"\x00\x90\x3c\x40\x10\x3e\x40\x10\x3c\x00" + END_OF_TRACK
        events = _decode(body, DecoderOptions(running_status=True))
        assert [e.event_type for e in events[:3]] == [EventType(EventKind.NOTE_ON, 0)] * 3
        assert [e.data_bytes for e in events[:3]] == [b"\x3c\x40", b"\x3e\x40", b"\x3c\x00"]
        assert all(e.data_byte_count == 2 for e in events[:3])
        assert events[3].event_type.is_end_of_track

    def test_one_byte_message(self):
        body = b"\x00\xc3\x05\x00\x06" + END_OF_TRACK
        events = _decode(body, DecoderOptions(running_status=True))
        assert events[1].event_type == EventType(EventKind.PROGRAM_CHANGE, 3)
        assert events[1].data_bytes == b"\x06"

    def test_meta_event_cancels_running_status(self):
        body = b"\x00\x90\x3c\x40\x00\xff\x01\x00\x00\x3c" + END_OF_TRACK
        events = _decode(body, DecoderOptions(running_status=True))
        assert events[2].event_type.kind is EventKind.UNDEFINED

    def test_real_time_keeps_running_status(self):
        body = b"\x00\x90\x3c\x40\x00\xf8\x00\x3e\x40" + END_OF_TRACK
        events = _decode(body, DecoderOptions(running_status=True))
        assert events[2].event_type == EventType(EventKind.NOTE_ON, 0)

    def test_fresh_decoder_starts_without_running_status(self):
        options = DecoderOptions(running_status=True)
        _decode(b"\x00\x90\x3c\x40" + END_OF_TRACK, options)
        decoder = EventStreamDecoder(ByteSource.from_bytes(b"\x00\x3c\x40"), options)
        assert decoder.decode_event().event_type.kind is EventKind.UNDEFINED


# ---------------------------------------------------------------------------
# Unknown meta events
# ---------------------------------------------------------------------------

class TestUnknownMeta:
    def test_zero_length_by_default(self):
        events = _decode(b"\x00\xff\x21" + END_OF_TRACK)
        assert events[0].event_type.kind is EventKind.UNDEFINED
        assert events[0].meta_type == 0x21
        assert events[0].data_bytes == b""
        assert events[1].event_type.is_end_of_track

    def test_length_consumed_when_enabled(self):
        body = b"\x00\xff\x21\x01\x00" + END_OF_TRACK
        events = _decode(body, DecoderOptions(unknown_meta_lengths=True))
        assert events[0].event_type.kind is EventKind.UNDEFINED
        assert events[0].data_bytes == b"\x00"
        assert len(events) == 2
