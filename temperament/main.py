"""Command line interface for exploring temperaments.

Loads a temperament from a JSON file or a bundled preset and prints note
tables, pitches, nearest-note identifications, MIDI renditions of notes or
the normalised document.
"""

import argparse
import logging
import sys
from typing import Optional

from . import config
from .core import Temperament, list_presets
from .errors import TemperamentError
from .midi import note_sequence, save_midi_file
from .notation import format_cents, prettify_note_name


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the temperament CLI."""
    parser = argparse.ArgumentParser(
        prog="temperament",
        description="Temperament toolkit - note offsets and pitches in any temperament",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--file",
        help="Temperament JSON document to load",
    )
    source.add_argument(
        "--preset",
        default=config.DEFAULT_PRESET,
        help=f"Bundled temperament to load (default: {config.DEFAULT_PRESET})",
    )
    parser.add_argument(
        "--reference-pitch",
        type=float,
        help="Override the reference pitch in Hz",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print debug messages",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("presets", help="List bundled temperaments")

    table = commands.add_parser("table", help="Print the offset and pitch of every note")
    table.add_argument(
        "--radius",
        type=int,
        default=config.DEFAULT_OCTAVE_RADIUS,
        help=f"Octaves around the reference octave (default: {config.DEFAULT_OCTAVE_RADIUS})",
    )

    pitch = commands.add_parser("pitch", help="Print the pitch of a note")
    pitch.add_argument("note", help="Note name")
    pitch.add_argument("octave", type=int, help="Octave number")

    identify = commands.add_parser("identify", help="Find the closest note to pitches")
    identify.add_argument("frequencies", type=float, nargs="+", help="Pitches in Hz")

    midi = commands.add_parser("midi", help="Print (or save) the MIDI messages that play a note")
    midi.add_argument("note", help="Note name")
    midi.add_argument("octave", type=int, help="Octave number")
    midi.add_argument(
        "--channel",
        type=int,
        choices=range(16),
        metavar="0-15",
        default=config.DEFAULT_MIDI_CHANNEL,
        help=f"MIDI channel (default: {config.DEFAULT_MIDI_CHANNEL})",
    )
    midi.add_argument(
        "--velocity",
        type=int,
        choices=range(128),
        metavar="0-127",
        default=config.DEFAULT_VELOCITY,
        help=f"Note on velocity (default: {config.DEFAULT_VELOCITY})",
    )
    midi.add_argument(
        "--bend-range",
        type=int,
        choices=range(1, 128),
        metavar="1-127",
        default=config.PITCH_BEND_RANGE,
        help=f"Pitch bend range in semitones (default: {config.PITCH_BEND_RANGE})",
    )
    midi.add_argument(
        "--output",
        help="Write a standard MIDI file instead of printing the messages",
    )

    commands.add_parser("export", help="Print the normalised temperament document")

    return parser


def load_temperament(args: argparse.Namespace) -> Temperament:
    """Load the temperament selected on the command line."""
    if args.file:
        temperament = Temperament.from_file(args.file)
    else:
        temperament = Temperament.from_preset(args.preset)
    if args.reference_pitch is not None:
        temperament.reference_pitch = args.reference_pitch
    return temperament


def format_table(temperament: Temperament, radius: int) -> str:
    """Return a human-readable table of every note in a range of octaves."""
    lines = [
        f"{temperament.name} "
        f"({temperament.reference_name}{temperament.reference_octave} = "
        f"{temperament.reference_pitch:.2f} Hz)",
        "-" * 50,
    ]
    for octave in temperament.get_octave_range(radius):
        for name in temperament.note_names:
            label = f"{prettify_note_name(name)}{octave}"
            offset = temperament.get_offset(name, octave)
            pitch = temperament.get_pitch(name, octave)
            lines.append(f"{label:6s} {offset:+10.2f}¢ {pitch:10.3f} Hz")
    return "\n".join(lines)


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the temperament CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if args.command == "presets":
        for name in list_presets():
            print(name)
        return 0

    try:
        temperament = load_temperament(args)

        if args.command == "table":
            print(format_table(temperament, args.radius))

        elif args.command == "pitch":
            pitch = temperament.get_pitch(args.note, args.octave)
            print(f"{prettify_note_name(args.note)}{args.octave}: {pitch:.3f} Hz")

        elif args.command == "identify":
            for frequency in args.frequencies:
                note, cents = temperament.get_note_name_from_pitch(frequency)
                print(f"{frequency:.3f} Hz → {prettify_note_name(note)} ({format_cents(cents)})")

        elif args.command == "midi":
            messages = note_sequence(
                temperament,
                args.note,
                args.octave,
                velocity=args.velocity,
                channel=args.channel,
                pitch_bend_range=args.bend_range,
            )
            if args.output:
                save_midi_file(messages, args.output)
                print(f"Wrote {len(messages)} messages to {args.output}")
            else:
                for message in messages:
                    print(message)

        elif args.command == "export":
            print(temperament.to_json())

    except (TemperamentError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
