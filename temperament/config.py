"""Configuration constants for the temperament toolkit."""

from pathlib import Path

# =============================================================================
# Octave Geometry
# =============================================================================

# Size of an octave in cents
OCTAVE_SIZE = 1200

# Maximum distance (in cents) between the difference of two deductions for the
# same note and the nearest whole number of octaves before they conflict.
# Chains of fractional offsets (e.g. 696.6¢ meantone fifths) accumulate
# floating-point error well below this.
CONGRUENCE_TOLERANCE = 1e-6

# =============================================================================
# Presets
# =============================================================================

# Bundled temperament documents, one JSON file per preset
PRESETS_DIR = Path(__file__).parent / "presets"

# Preset used by the CLI when no file is given
DEFAULT_PRESET = "equal"

# Octaves on either side of the reference octave shown by `temperament table`
DEFAULT_OCTAVE_RADIUS = 1

# =============================================================================
# MIDI
# =============================================================================

# Reference for MIDI note to frequency conversion
MIDI_A4 = 69
FREQ_A4 = 440.0

# Valid MIDI note numbers
MIDI_NOTE_MIN = 0
MIDI_NOTE_MAX = 127

# Pitch bend range in semitones (standard MPE uses ±48)
PITCH_BEND_RANGE = 48

# Signed 14-bit pitch bend limits (mido 'pitchwheel' convention, center=0)
PITCH_BEND_MIN = -8192
PITCH_BEND_MAX = 8191

DEFAULT_MIDI_CHANNEL = 0
DEFAULT_VELOCITY = 100

# Standard MIDI file resolution; notes written by the CLI last one beat
MIDI_TICKS_PER_BEAT = 480

# =============================================================================
# Note Name Display
# =============================================================================

# `{tag}` markers embedded in note names and their display symbols
NOTE_NAME_SYMBOLS: dict[str, str] = {
    "sharp": "♯",
    "flat": "♭",
    "natural": "♮",
    "double-sharp": "𝄪",
    "double-flat": "𝄫",
}
