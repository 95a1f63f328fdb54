"""Shared test fixtures for smf-decoder tests."""

from __future__ import annotations

import pytest

from smf_bytes import END_OF_TRACK, smf


@pytest.fixture
def note_on_file() -> bytes:
    """One track: NoteOn(ch 0, 0x3C, 0x40) at delta 0, then end-of-track."""
    return smf(b"\x00\x90\x3c\x40" + END_OF_TRACK)


@pytest.fixture
def midi_path(tmp_path, note_on_file: bytes):
    """The ``note_on_file`` bytes written to disk."""
    path = tmp_path / "note_on.mid"
    path.write_bytes(note_on_file)
    return path
