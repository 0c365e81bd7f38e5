"""Pydantic models for exchanging cue lists as JSON.

WHY: The editing surface loads and saves cue lists as JSON. Pydantic
validates what comes back from the editor (types, non-negative times,
end after start) and gives a JSON Schema for the frontend to share.

HOW: CueModel mirrors the Cue dataclass; CueListModel wraps a list of
them with the language tag. cues_to_json() / cues_from_json() convert
between the dataclasses and JSON text.

RULES:
- All fields use Field(description=...) so the JSON Schema documents them.
- end must be strictly greater than start; validation errors surface as
  pydantic.ValidationError (a ValueError).
- Overlaps between cues are not rejected here: run normalize_timing()
  after loading edited cues.
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from titlovi.core.ir import Cue


class CueModel(BaseModel):
    """One timed subtitle entry as exchanged with the editor."""

    index: int = Field(ge=1, description="1-based sequence number.")
    start: float = Field(ge=0, description="Start time in seconds.")
    end: float = Field(ge=0, description="End time in seconds; must be after start.")
    text: str = Field(description="Display text; lines separated by '\\n'.")
    original_text: Optional[str] = Field(
        default=None,
        description="Text before script conversion, when converted.",
    )

    @model_validator(mode="after")
    def _end_after_start(self) -> "CueModel":
        if self.end <= self.start:
            raise ValueError(
                "cue {}: end {} must be greater than start {}".format(
                    self.index, self.end, self.start
                )
            )
        return self

    @classmethod
    def from_cue(cls, cue: Cue) -> "CueModel":
        return cls(
            index=cue.index,
            start=cue.start,
            end=cue.end,
            text=cue.text,
            original_text=cue.original_text,
        )

    def to_cue(self) -> Cue:
        return Cue(
            index=self.index,
            start=self.start,
            end=self.end,
            text=self.text,
            original_text=self.original_text,
        )


class CueListModel(BaseModel):
    """A complete cue list with its language tag."""

    language: str = Field(default="sr", description="Language tag of the cue text.")
    cues: List[CueModel] = Field(default_factory=list, description="Cues in time order.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "language": "sr",
                "cues": [
                    {
                        "index": 1,
                        "start": 0.0,
                        "end": 3.0,
                        "text": "Добродошли у апликацију.",
                        "original_text": "Dobrodošli u aplikaciju.",
                    }
                ],
            }
        ]
    }}


def cues_to_json(cues: List[Cue], language: str = "sr", indent: Optional[int] = 2) -> str:
    """Serialize cues to the editor JSON format."""
    model = CueListModel(language=language, cues=[CueModel.from_cue(c) for c in cues])
    return model.model_dump_json(indent=indent)


def cues_from_json(raw: str) -> List[Cue]:
    """Load and validate cues from editor JSON.

    Raises:
        pydantic.ValidationError: If the JSON is malformed or a cue is invalid.
    """
    return [m.to_cue() for m in CueListModel.model_validate_json(raw).cues]


def cue_list_schema() -> Dict[str, Any]:
    """JSON Schema of the editor format, for the frontend."""
    return CueListModel.model_json_schema()
