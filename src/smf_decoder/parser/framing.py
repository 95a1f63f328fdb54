"""Chunk framing: the ``MThd`` header chunk and the ``MTrk`` track chunks.

Usage::

    from smf_decoder.parser.framing import load, loads

    midi = load("/path/to/file.mid")
    midi = loads(raw_bytes)

Tracks are decoded strictly in order; a track's start is wherever the
previous one stopped reading, the declared chunk length is never used
to seek.
"""

from __future__ import annotations

import logging
import os

from smf_decoder.config import DEFAULT_OPTIONS, DecoderOptions
from smf_decoder.errors import (
    InvalidFormatError,
    InvalidHeaderLengthError,
    SignatureMismatchError,
    SourceReadError,
    TrackDecodeError,
    TrackLengthMismatchError,
)
from smf_decoder.model.smf import FORMATS, HEADER_LENGTH, Header, MidiFile, Track
from smf_decoder.parser.events import EventStreamDecoder
from smf_decoder.source import ByteSource

logger = logging.getLogger(__name__)

HEADER_SIGNATURE = b"MThd"
TRACK_SIGNATURE = b"MTrk"


# ---------------------------------------------------------------------------
# Field readers
# ---------------------------------------------------------------------------

def _read_u16(source: ByteSource) -> int:
    return int.from_bytes(source.read_exact(2), "big")


def _read_i16(source: ByteSource) -> int:
    return int.from_bytes(source.read_exact(2), "big", signed=True)


def _read_u32(source: ByteSource) -> int:
    return int.from_bytes(source.read_exact(4), "big")


def check_signature(source: ByteSource, expected: bytes) -> None:
    """Consume a 4-byte chunk signature and compare it with *expected*."""
    offset = source.position
    found = source.read_exact(len(expected))
    if found != expected:
        raise SignatureMismatchError(expected, found, offset)


# ---------------------------------------------------------------------------
# Chunks
# ---------------------------------------------------------------------------

def read_header(source: ByteSource) -> Header:
    """Read the ``MThd`` chunk.  Each field is validated as soon as it is read."""
    check_signature(source, HEADER_SIGNATURE)

    length = _read_u32(source)
    if length != HEADER_LENGTH:
        raise InvalidHeaderLengthError(length)

    format = _read_u16(source)
    if format not in FORMATS:
        raise InvalidFormatError(format)

    n_tracks = _read_u16(source)
    division = _read_i16(source)
    logger.debug("format %d, %d track(s), division %d", format, n_tracks, division)
    return Header(length=length, format=format, n_tracks=n_tracks, division=division)


def read_track(
    source: ByteSource,
    index: int = 0,
    options: DecoderOptions = DEFAULT_OPTIONS,
) -> Track:
    """Read one ``MTrk`` chunk and decode its events through end-of-track.

    Read failures anywhere inside the chunk surface as
    :class:`TrackDecodeError` carrying the track index; a bad signature
    stays a :class:`SignatureMismatchError`.
    """
    try:
        check_signature(source, TRACK_SIGNATURE)
        length = _read_u32(source)
    except SourceReadError as exc:
        raise TrackDecodeError(index, 0, str(exc)) from exc
    logger.debug("track %d: declared length %d", index, length)

    start = source.position
    decoder = EventStreamDecoder(source, options)
    events = []
    try:
        for event in decoder:
            events.append(event)
    except SourceReadError as exc:
        raise TrackDecodeError(index, decoder.events_decoded, str(exc)) from exc

    consumed = source.position - start
    if options.verify_track_length and consumed != length:
        raise TrackLengthMismatchError(index, length, consumed)
    return Track(length=length, events=tuple(events))


def parse(
    source: ByteSource,
    filename: str = "<stream>",
    options: DecoderOptions | None = None,
) -> MidiFile:
    """Decode a complete file: the header, then exactly ``n_tracks`` tracks."""
    options = options or DEFAULT_OPTIONS
    header = read_header(source)
    tracks = tuple(
        read_track(source, index, options) for index in range(header.n_tracks)
    )
    return MidiFile(filename=filename, header=header, tracks=tracks)


def load(path: str | os.PathLike, options: DecoderOptions | None = None) -> MidiFile:
    """Open *path* in binary mode and decode it.

    Failing to open the file raises the ``OSError`` from :func:`open`.
    """
    filename = os.fspath(path)
    with open(filename, "rb") as stream:
        return parse(ByteSource(stream), filename, options)


def loads(
    data: bytes,
    filename: str = "<bytes>",
    options: DecoderOptions | None = None,
) -> MidiFile:
    """Decode an in-memory SMF image."""
    return parse(ByteSource.from_bytes(data), filename, options)
