"""Resolution of note definitions into a complete offset table.

A temperament document defines each note relative to some other note. Taken
together the definitions form a graph whose edges can be walked in both
directions (an offset is trivially inverted). Starting from the reference
note, which sits at 0 cents, every note reachable in that graph gets an
offset; the table is then normalised so that it spans exactly one octave
starting at the octave base.
"""

from collections import deque
import logging
import math
from typing import Mapping

from . import config
from .errors import (
    ConflictingDefinitionError,
    IndeterminatePitchError,
    UndefinedOctaveBaseError,
)
from .schema import NoteDefinition

logger = logging.getLogger(__name__)

OffsetGraph = dict[str, list[tuple[str, float]]]


def build_offset_graph(notes: Mapping[str, NoteDefinition]) -> OffsetGraph:
    """Build the adjacency lists of the note definition graph.

    A definition ``name: (base, delta)`` yields the edge ``name -> base``
    weighted ``-delta`` and the edge ``base -> name`` weighted ``+delta``.
    Each note's own definition comes first in its adjacency list, followed
    by the notes defined relative to it, in definition order.

    Args:
        notes: Note definitions, keyed by note name

    Returns:
        Dict mapping note name -> list of (peer name, signed offset)
    """
    graph: OffsetGraph = {}
    for name, (base, delta) in notes.items():
        graph.setdefault(name, []).append((base, -delta))
    for name, (base, delta) in notes.items():
        # A note defined relative to itself only needs its own edge
        if name != base:
            graph.setdefault(base, []).append((name, delta))
    return graph


def is_octave_congruent(a: float, b: float) -> bool:
    """Whether two offsets differ by a whole number of octaves.

    The test is sign-independent: -1200 and +2400 both count.
    """
    return abs(math.remainder(a - b, config.OCTAVE_SIZE)) <= config.CONGRUENCE_TOLERANCE


def define_offset(offsets: dict[str, float], note: str, offset: float) -> None:
    """Record the offset of a note, checking it against any earlier deduction.

    Args:
        offsets: The offset table to update in place
        note: Name of the note
        offset: Offset (in cents) of the note from the reference pitch

    Raises:
        ConflictingDefinitionError: If the note already has an offset that
            is not octave-congruent to ``offset``
    """
    existing = offsets.get(note)
    if existing is not None and not is_octave_congruent(existing, offset):
        raise ConflictingDefinitionError(note)
    offsets[note] = offset


def normalize_octave_base(offset: float) -> float:
    """Move an octave base offset into (-OCTAVE_SIZE, 0]."""
    reduced = offset % config.OCTAVE_SIZE
    if reduced > 0:
        reduced -= config.OCTAVE_SIZE
    return reduced


def normalize_offset(offset: float, base_offset: float) -> float:
    """Move an offset into [base_offset, base_offset + OCTAVE_SIZE)."""
    relative = (offset - base_offset) % config.OCTAVE_SIZE
    # Float modulo of a tiny negative value can round up to the divisor
    if relative >= config.OCTAVE_SIZE:
        relative = 0.0
    return base_offset + relative


def resolve_offsets(
    notes: Mapping[str, NoteDefinition],
    reference_name: str,
    octave_base_name: str,
) -> dict[str, float]:
    """Compute the offset of every note named in the definitions.

    Args:
        notes: Note definitions, keyed by note name
        reference_name: The note fixed at 0 cents
        octave_base_name: The note at which each octave begins

    Returns:
        Dict mapping note name -> offset in cents from the reference pitch,
        with the octave base in (-1200, 0] and every other note within one
        octave above it

    Raises:
        ConflictingDefinitionError: If the definitions contradict each other
        IndeterminatePitchError: If a note is not connected to the reference
        UndefinedOctaveBaseError: If the octave base has no offset
    """
    graph = build_offset_graph(notes)
    offsets: dict[str, float] = {reference_name: 0.0}
    # Notes whose offsets are known but not yet used for deduction
    todo: deque[tuple[str, float]] = deque([(reference_name, 0.0)])

    while todo:
        current_name, current_offset = todo.popleft()
        for name, delta in graph.get(current_name, ()):
            computed = current_offset + delta
            # Only queue each note once, or cycles would never drain
            if name != current_name and name not in offsets:
                todo.append((name, computed))
            define_offset(offsets, name, computed)

    for name in notes:
        if name not in offsets:
            raise IndeterminatePitchError(name)

    if octave_base_name not in offsets:
        raise UndefinedOctaveBaseError(octave_base_name)

    base_offset = normalize_octave_base(offsets[octave_base_name])
    resolved = {
        name: normalize_offset(offset, base_offset)
        for name, offset in offsets.items()
    }
    resolved[octave_base_name] = base_offset

    logger.debug(
        "Resolved %d note offsets (octave base %r at %.3f¢)",
        len(resolved), octave_base_name, base_offset,
    )
    return resolved


def sort_note_names(offsets: Mapping[str, float]) -> list[str]:
    """Return the note names in increasing order of offset.

    Ties keep the order of the table.
    """
    return sorted(offsets, key=offsets.__getitem__)
