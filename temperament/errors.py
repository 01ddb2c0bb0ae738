"""Exceptions raised by the temperament toolkit.

Every error is terminal for the call that raised it. The library never logs
or swallows them; reporting is left to the caller.
"""

from typing import Optional


class TemperamentError(Exception):
    """Base class for all temperament errors."""


class InvalidTemperamentError(TemperamentError, ValueError):
    """The temperament document does not match the expected format."""


class InvalidArgumentError(TemperamentError, ValueError):
    """A query or setter received an out-of-range argument."""


class UnknownNoteError(TemperamentError, LookupError):
    """A query named a note that the temperament does not define."""

    def __init__(self, note: str):
        super().__init__(f"Note '{note}' is not defined")
        self.note = note


class ResolutionError(TemperamentError):
    """The note definitions could not be resolved into offsets."""

    def __init__(self, message: str, note: Optional[str] = None):
        super().__init__(message)
        self.note = note


class ConflictingDefinitionError(ResolutionError):
    """Two deductions for the same note disagree by more than whole octaves."""

    def __init__(self, note: str):
        super().__init__(f"Conflicting definition for '{note}' found", note)


class IndeterminatePitchError(ResolutionError):
    """A note is not connected to the reference note."""

    def __init__(self, note: str):
        super().__init__(f"Not able to determine the pitch of '{note}'", note)


class UndefinedOctaveBaseError(ResolutionError):
    """The octave base does not appear among the resolved notes."""

    def __init__(self, note: str):
        super().__init__("Octave base not defined as a note", note)
