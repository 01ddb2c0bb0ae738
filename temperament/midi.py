"""MIDI rendition of temperament pitches.

Any synthesizer that honours per-channel pitch bend can play a temperament:
each note is sent as the nearest equal-tempered MIDI note plus a pitch bend
covering the remaining deviation. This module only builds ``mido`` messages;
opening ports and sending them is up to the caller.

The pitch bend range must match the synthesizer's, which
``pitch_bend_range_messages`` configures via RPN 0.
"""

import math
from pathlib import Path
from typing import Iterable, Union

from mido import Message, MidiFile, MidiTrack

from . import config
from .core import Temperament
from .errors import InvalidArgumentError

# Width of an equal-tempered MIDI semitone
SEMITONE_CENTS = config.OCTAVE_SIZE / 12


def frequency_to_midi_float(freq: float) -> float:
    """Convert a frequency in Hz to a fractional MIDI note number.

    Args:
        freq: Frequency in Hz

    Returns:
        Fractional MIDI note number (e.g., 69.5 = A4 + 50 cents)

    Raises:
        InvalidArgumentError: If ``freq`` is not a finite positive number
    """
    if not (math.isfinite(freq) and freq > 0):
        raise InvalidArgumentError(f"Frequency must be positive, got {freq}")
    cents_from_a4 = math.log2(freq / config.FREQ_A4) * config.OCTAVE_SIZE
    return config.MIDI_A4 + cents_from_a4 / SEMITONE_CENTS


def midi_to_frequency(midi_note: float) -> float:
    """Convert a (fractional) MIDI note number to frequency in Hz."""
    cents_from_a4 = (midi_note - config.MIDI_A4) * SEMITONE_CENTS
    return config.FREQ_A4 * 2.0 ** (cents_from_a4 / config.OCTAVE_SIZE)


def frequency_to_note_and_bend(
    frequency: float,
    pitch_bend_range: int = config.PITCH_BEND_RANGE,
) -> tuple[int, int]:
    """Convert a frequency to MIDI note + pitch bend value.

    Args:
        frequency: Target frequency in Hz
        pitch_bend_range: Pitch bend range of the receiver, in semitones

    Returns:
        Tuple of (midi_note, pitch_bend)
        - midi_note: Nearest MIDI note number (0-127)
        - pitch_bend: Signed 14-bit pitch bend (-8192..8191, center=0)
    """
    midi_float = frequency_to_midi_float(frequency)

    midi_note = round(midi_float)
    midi_note = max(config.MIDI_NOTE_MIN, min(config.MIDI_NOTE_MAX, midi_note))

    # Whatever rounding (or clamping) left over goes into the bend
    semitone_offset = midi_float - midi_note
    normalized_bend = semitone_offset / pitch_bend_range
    normalized_bend = max(-1.0, min(1.0, normalized_bend))

    pitch_bend = round(normalized_bend * config.PITCH_BEND_MAX)
    pitch_bend = max(config.PITCH_BEND_MIN, min(config.PITCH_BEND_MAX, pitch_bend))

    return midi_note, pitch_bend


def pitch_bend_range_messages(
    channel: int = config.DEFAULT_MIDI_CHANNEL,
    semitones: int = config.PITCH_BEND_RANGE,
) -> list[Message]:
    """Messages setting a channel's pitch bend sensitivity (RPN 0)."""
    return [
        # CC 101/100 = RPN MSB/LSB (0/0 for pitch bend range)
        Message("control_change", channel=channel, control=101, value=0),
        Message("control_change", channel=channel, control=100, value=0),
        # CC 6/38 = Data Entry MSB (semitones) / LSB (cents)
        Message("control_change", channel=channel, control=6, value=semitones),
        Message("control_change", channel=channel, control=38, value=0),
        # Reset RPN
        Message("control_change", channel=channel, control=101, value=127),
        Message("control_change", channel=channel, control=100, value=127),
    ]


def note_on_messages(
    temperament: Temperament,
    note: str,
    octave: int,
    velocity: int = config.DEFAULT_VELOCITY,
    channel: int = config.DEFAULT_MIDI_CHANNEL,
    pitch_bend_range: int = config.PITCH_BEND_RANGE,
) -> list[Message]:
    """Messages that start a temperament note: pitch bend, then note on.

    Raises:
        UnknownNoteError: If the note is not defined in the temperament
    """
    midi_note, pitch_bend = frequency_to_note_and_bend(
        temperament.get_pitch(note, octave), pitch_bend_range
    )
    return [
        Message("pitchwheel", channel=channel, pitch=pitch_bend),
        Message("note_on", channel=channel, note=midi_note, velocity=velocity),
    ]


def note_off_message(
    temperament: Temperament,
    note: str,
    octave: int,
    channel: int = config.DEFAULT_MIDI_CHANNEL,
    pitch_bend_range: int = config.PITCH_BEND_RANGE,
) -> Message:
    """Message that stops a note started with ``note_on_messages``."""
    midi_note, _ = frequency_to_note_and_bend(
        temperament.get_pitch(note, octave), pitch_bend_range
    )
    return Message("note_off", channel=channel, note=midi_note, velocity=0)


def note_sequence(
    temperament: Temperament,
    note: str,
    octave: int,
    velocity: int = config.DEFAULT_VELOCITY,
    channel: int = config.DEFAULT_MIDI_CHANNEL,
    pitch_bend_range: int = config.PITCH_BEND_RANGE,
    duration: int = config.MIDI_TICKS_PER_BEAT,
) -> list[Message]:
    """Everything needed to play one temperament note on a fresh channel.

    The sequence configures the bend range, starts the note, and stops it
    ``duration`` ticks later.

    Raises:
        UnknownNoteError: If the note is not defined in the temperament
    """
    messages = pitch_bend_range_messages(channel, pitch_bend_range)
    messages += note_on_messages(
        temperament, note, octave, velocity, channel, pitch_bend_range
    )
    note_off = note_off_message(temperament, note, octave, channel, pitch_bend_range)
    messages.append(note_off.copy(time=duration))
    return messages


def save_midi_file(
    messages: Iterable[Message],
    path: Union[str, Path],
    ticks_per_beat: int = config.MIDI_TICKS_PER_BEAT,
) -> MidiFile:
    """Write messages to a single-track standard MIDI file."""
    track = MidiTrack(messages)
    midi_file = MidiFile(ticks_per_beat=ticks_per_beat)
    midi_file.tracks.append(track)
    midi_file.save(str(path))
    return midi_file
