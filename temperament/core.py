"""The Temperament class: resolved note offsets and pitch queries.

A temperament is a set of notes with fixed pitch relationships, anchored to
a real frequency by its reference note. Offsets are measured in cents from
the reference pitch; octaves are counted from the octave base note, so that
for a reference of A4 and an octave base of C, C4 lies 900 cents below A4.
"""

import logging
import math
from pathlib import Path
import threading
from typing import Any, NamedTuple, Union

from . import config
from .errors import InvalidArgumentError, UnknownNoteError
from .offsets import resolve_offsets, sort_note_names
from .schema import (
    NoteDefinition,
    TemperamentData,
    load_temperament_data,
    parse_temperament_data,
    validate_temperament,
)

logger = logging.getLogger(__name__)


class NoteMatch(NamedTuple):
    """Closest note to a pitch."""
    note: str       # Name of the closest note
    cents: float    # Deviation from that note (positive = sharp)


def _check_pitch(pitch: Any) -> None:
    """Reject anything but a finite, positive number of Hz."""
    if isinstance(pitch, bool) or not isinstance(pitch, (int, float)):
        raise InvalidArgumentError(f"Pitch must be a number, got {pitch!r}")
    if not (math.isfinite(pitch) and pitch > 0):
        raise InvalidArgumentError("Pitch must be positive and finite")


def list_presets() -> list[str]:
    """Names of the temperaments bundled with the package."""
    return sorted(path.stem for path in config.PRESETS_DIR.glob("*.json"))


class Temperament:
    """A complete description of a musical temperament.

    Metadata (``name``, ``description``, ``source``) is available as plain
    attributes, since it has no effect on the structure of the temperament;
    ``description`` and ``source`` are ``None`` when the document omits them.
    Everything else is read through properties and query methods.

    The reference pitch is the only mutable state. Its writes are guarded by
    a lock and each query reads it once, so queries running in other threads
    never see a half-applied update.
    """

    def __init__(self, data: Union[TemperamentData, dict[str, Any]]):
        """Create a temperament from a document.

        Args:
            data: The temperament document, as a mapping or validated model

        Raises:
            InvalidTemperamentError: If the document is malformed
            ResolutionError: If the note definitions cannot be resolved
        """
        data = validate_temperament(data)

        # "Metadata" fields
        self.name = data.name
        self.description = data.description
        self.source = data.source

        self._octave_base_name = data.octave_base_name
        self._reference_name = data.reference_name
        self._reference_octave = data.reference_octave
        self._reference_pitch = data.reference_pitch
        self._lock = threading.Lock()

        self._offsets = resolve_offsets(
            data.notes, data.reference_name, data.octave_base_name
        )
        # Always sorted in increasing order of offset from the octave base
        self._note_names = sort_note_names(self._offsets)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Temperament":
        """Create a temperament from a JSON document."""
        return cls(parse_temperament_data(text))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Temperament":
        """Create a temperament from a JSON file."""
        return cls(load_temperament_data(path))

    @classmethod
    def from_preset(cls, name: str) -> "Temperament":
        """Create one of the bundled temperaments (see ``list_presets``).

        Raises:
            InvalidArgumentError: If there is no preset with that name
        """
        path = config.PRESETS_DIR / f"{name}.json"
        if not path.is_file():
            raise InvalidArgumentError(f"Unknown preset '{name}'")
        return cls.from_file(path)

    def __repr__(self) -> str:
        return f"Temperament({self.name!r})"

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def note_names(self) -> list[str]:
        """Note names sorted by pitch, starting with the octave base.

        Returns a new list on every access.
        """
        return list(self._note_names)

    @property
    def offsets(self) -> dict[str, float]:
        """Copy of the offset table at the reference octave."""
        return dict(self._offsets)

    @property
    def octave_base_name(self) -> str:
        return self._octave_base_name

    @property
    def reference_name(self) -> str:
        return self._reference_name

    @property
    def reference_octave(self) -> int:
        return self._reference_octave

    @property
    def reference_pitch(self) -> float:
        """The pitch of the reference note, in Hz."""
        with self._lock:
            return self._reference_pitch

    @reference_pitch.setter
    def reference_pitch(self, pitch: float) -> None:
        self.set_reference_pitch(pitch)

    def set_reference_pitch(self, pitch: float) -> None:
        """Set the pitch of the reference note.

        Args:
            pitch: The new reference pitch in Hz

        Raises:
            InvalidArgumentError: If ``pitch`` is not a positive number; the
                previous pitch is kept
        """
        _check_pitch(pitch)
        with self._lock:
            self._reference_pitch = pitch
        logger.debug("%s: reference pitch set to %.3f Hz", self.name, pitch)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_offset(self, note: str, octave: int) -> float:
        """Get the offset of a note from the reference pitch.

        Args:
            note: Name of the note
            octave: Octave number of the note

        Returns:
            Offset in cents (negative below the reference pitch)

        Raises:
            UnknownNoteError: If the note is not defined
        """
        offset = self._offsets.get(note)
        if offset is None:
            raise UnknownNoteError(note)
        return offset + (octave - self._reference_octave) * config.OCTAVE_SIZE

    def get_pitch(self, note: str, octave: int) -> float:
        """Get the pitch of a note, in Hz.

        Raises:
            UnknownNoteError: If the note is not defined
        """
        offset = self.get_offset(note, octave)
        return self.reference_pitch * 2.0 ** (offset / config.OCTAVE_SIZE)

    def get_octave_range(self, radius: int) -> list[int]:
        """Octave numbers from ``radius`` below to ``radius`` above the
        reference octave, in order.

        Raises:
            InvalidArgumentError: If ``radius`` is negative
        """
        if radius < 0:
            raise InvalidArgumentError("Radius must not be negative")
        return list(range(self._reference_octave - radius,
                          self._reference_octave + radius + 1))

    def get_note_name_from_pitch(self, pitch: float) -> NoteMatch:
        """Find the closest note to a pitch.

        Args:
            pitch: Pitch to identify, in Hz

        Returns:
            NoteMatch of the closest note name and the deviation from it in
            cents (positive when the pitch is sharp of the note)

        Raises:
            InvalidArgumentError: If ``pitch`` is not a positive number
        """
        _check_pitch(pitch)

        # Fold the pitch into the octave starting at the octave base, at the
        # reference octave, where the offset table lives
        base_offset = self._offsets[self._octave_base_name]
        raw = math.log2(pitch / self.reference_pitch) * config.OCTAVE_SIZE
        offset = (raw - base_offset) % config.OCTAVE_SIZE + base_offset

        names = self._note_names
        start = 0
        end = len(names)
        while end - start > 1:
            mid = (start + end) // 2
            mid_offset = self._offsets[names[mid]]
            if offset > mid_offset:
                start = mid
            elif offset < mid_offset:
                end = mid
            else:
                return NoteMatch(names[mid], 0.0)

        start_note = names[start]
        start_difference = offset - self._offsets[start_note]
        if end == len(names):
            # Past the last note: compare with the octave base one octave up
            end_note = names[0]
            end_difference = offset - self._offsets[end_note] - config.OCTAVE_SIZE
        else:
            end_note = names[end]
            end_difference = offset - self._offsets[end_note]

        if abs(start_difference) < abs(end_difference):
            return NoteMatch(start_note, start_difference)
        return NoteMatch(end_note, end_difference)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_data(self) -> TemperamentData:
        """Describe this temperament as a document.

        The result is equivalent to, but generally not equal to, the input
        document: every note is expressed relative to the reference note.
        """
        metadata = {
            key: value
            for key, value in (("description", self.description), ("source", self.source))
            if value is not None
        }
        return TemperamentData(
            name=self.name,
            **metadata,
            octave_base_name=self._octave_base_name,
            reference_name=self._reference_name,
            reference_pitch=self.reference_pitch,
            reference_octave=self._reference_octave,
            notes={
                name: NoteDefinition(self._reference_name, self._offsets[name])
                for name in self._note_names
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready document describing this temperament."""
        return self.to_data().to_document()

    def to_json(self, indent: int = 2) -> str:
        """JSON document describing this temperament."""
        return self.to_data().model_dump_json(
            by_alias=True, exclude_none=True, indent=indent
        )
