"""smf-decode — dump the decoded structure of a Standard MIDI File.

Prints the header, then one line per event::

    track 0  tick     0  delta   0  note_on(ch=0)  3c 40
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence, TextIO

from smf_decoder.config import DecoderOptions, SysExMode
from smf_decoder.errors import SmfError
from smf_decoder.logging_config import LEVEL_NAMES, configure_logging
from smf_decoder.model.smf import MidiFile
from smf_decoder.parser.framing import load


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smf-decode",
        description="Decode a Standard MIDI File and list its events.",
    )
    parser.add_argument("path", help="path to a .mid file")
    parser.add_argument(
        "--running-status",
        action="store_true",
        help="accept events that omit a repeated channel status byte",
    )
    parser.add_argument(
        "--sysex",
        choices=[mode.value for mode in SysExMode],
        default=SysExMode.DELIMITED.value,
        help="how System Exclusive payloads are read (default: %(default)s)",
    )
    parser.add_argument(
        "--unknown-meta-lengths",
        action="store_true",
        help="consume the length-prefixed payload of unknown meta events",
    )
    parser.add_argument(
        "--verify-lengths",
        action="store_true",
        help="fail when a track's events do not span its declared chunk length",
    )
    parser.add_argument(
        "--full-smf",
        action="store_true",
        help="shorthand for all of the options above, with length-prefixed SysEx",
    )
    parser.add_argument(
        "--log-level",
        choices=LEVEL_NAMES,
        default=None,
        help="log level (default: $SMF_DECODER_LOG_LEVEL or warning)",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> DecoderOptions:
    if args.full_smf:
        return DecoderOptions.full_smf()
    return DecoderOptions(
        running_status=args.running_status,
        sysex_mode=SysExMode(args.sysex),
        unknown_meta_lengths=args.unknown_meta_lengths,
        verify_track_length=args.verify_lengths,
    )


def format_midi_file(midi: MidiFile, out: TextIO) -> None:
    header = midi.header
    out.write(
        f"{midi.filename}: format {header.format}, {header.n_tracks} track(s), "
        f"division {header.division}\n"
    )
    for index, track in enumerate(midi.tracks):
        out.write(f"track {index}: {len(track)} event(s), length {track.length}\n")
        for abs_tick, event in track.absolute_times():
            line = (
                f"track {index}  tick {abs_tick:>6}  delta {event.delta_time:>4}  "
                f"{event.event_type}"
            )
            if event.data_bytes:
                line += "  " + event.data_bytes.hex(" ")
            out.write(line + "\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        midi = load(args.path, options_from_args(args))
    except (SmfError, OSError) as exc:
        print(f"smf-decode: {args.path}: {exc}", file=sys.stderr)
        return 1
    format_midi_file(midi, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
