"""Temperament document format and validation.

A temperament document is a JSON object such as::

    {
        "name": "Equal temperament",
        "octaveBaseName": "C",
        "referenceName": "A",
        "referencePitch": 440,
        "referenceOctave": 4,
        "notes": {"C": ["A", -900], "A": ["A", 0]}
    }

Each entry of ``notes`` says "this note is ``offset`` cents above ``base``".
"""

import json
from pathlib import Path
from typing import Annotated, Any, NamedTuple, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
)

from .errors import InvalidTemperamentError


class NoteDefinition(NamedTuple):
    """A note expressed as an offset from another note."""
    base: str       # The base note from which to offset
    # The offset (in cents) from the base note
    offset: Annotated[float, Field(strict=True, allow_inf_nan=False)]


class TemperamentData(BaseModel):
    """A complete description of a musical temperament with metadata."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: Optional[str] = None
    source: Optional[str] = None
    octave_base_name: str = Field(alias="octaveBaseName")
    reference_name: str = Field(alias="referenceName")
    reference_pitch: float = Field(
        alias="referencePitch", gt=0, strict=True, allow_inf_nan=False
    )
    reference_octave: StrictInt = Field(alias="referenceOctave")
    notes: dict[str, NoteDefinition] = Field(min_length=1)

    @field_validator("description", "source", mode="before")
    @classmethod
    def _present_as_string(cls, value: Any) -> Any:
        # Optional fields may be omitted, but not given as null
        if value is None:
            raise ValueError("must be a string when present")
        return value

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready document, omitting absent metadata."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def validate_temperament(data: Union[TemperamentData, dict[str, Any]]) -> TemperamentData:
    """Validate a temperament document.

    Args:
        data: A parsed document (mapping) or an already validated model

    Returns:
        The validated document

    Raises:
        InvalidTemperamentError: If the document is malformed
    """
    if isinstance(data, TemperamentData):
        return data
    try:
        return TemperamentData.model_validate(data)
    except ValidationError as exc:
        raise InvalidTemperamentError(
            f"Incorrect temperament format: {_describe(exc)}"
        ) from exc


def parse_temperament_data(text: Union[str, bytes]) -> TemperamentData:
    """Parse and validate a JSON temperament document."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidTemperamentError(
            f"Incorrect temperament format: invalid JSON ({exc})"
        ) from exc
    return validate_temperament(document)


def load_temperament_data(path: Union[str, Path]) -> TemperamentData:
    """Read and validate a JSON temperament document from a file."""
    return parse_temperament_data(Path(path).read_bytes())
