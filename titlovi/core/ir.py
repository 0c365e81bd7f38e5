"""Intermediate representation dataclasses for the cue pipeline.

WHY: Speech recognition returns either word-level or segment-level timing,
editors work with numbered cues, and the layout stage needs a line/char
budget. Typed dataclasses make every stage boundary explicit.

HOW: Six types:
  Word                — one recognised word with start/end seconds
  RawSegment          — a coarse recognised span (or a grouped run of words)
  Cue                 — one numbered, timed subtitle entry
  AspectRatio         — the three supported video shapes
  LayoutConfig        — max chars per line and max lines per cue
  TranscriptionResult — what the recognition step hands over

RULES:
- All times are float seconds.
- Word is frozen: it is external input and must not be edited.
- Cue is mutable: callers edit cue lists and re-normalize before export.
- LayoutConfig validates itself; a non-positive budget raises
  InvalidLayoutError at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from titlovi.errors import InvalidLayoutError


@dataclass(frozen=True)
class Word:
    """A single recognised word.

    Attributes:
        text: Word text exactly as recognised (may carry punctuation).
        start: Start time in seconds.
        end: End time in seconds. Expected > start; the segmenter treats
             end <= start as a zero-width word.
    """

    text: str
    start: float
    end: float


@dataclass
class RawSegment:
    """A recognised span of speech before display formatting."""

    start: float
    end: float
    text: str

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class Cue:
    """One timed subtitle entry.

    Attributes:
        index: 1-based sequence number, contiguous and chronological.
        start: Start time in seconds.
        end: End time in seconds.
        text: Display text; may contain "\\n" line breaks.
        original_text: Text before script conversion, when converted.
    """

    index: int
    start: float
    end: float
    text: str
    original_text: str | None = None

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")


class AspectRatio(str, Enum):
    """Supported output video shapes."""

    landscape = "16:9"
    vertical = "9:16"
    square = "1:1"

    @classmethod
    def parse(cls, value: str | AspectRatio) -> AspectRatio:
        """Resolve a tag such as "9:16" (or "9x16") to an AspectRatio.

        Raises:
            InvalidLayoutError: If the tag is not one of the three ratios.
        """
        if isinstance(value, cls):
            return value
        tag = str(value).strip().lower().replace("x", ":")
        for member in cls:
            if member.value == tag:
                return member
        raise InvalidLayoutError(
            "Unknown aspect ratio '{}'. Available: {}".format(
                value, ", ".join(m.value for m in cls)
            )
        )

    @property
    def file_tag(self) -> str:
        """Filename-safe form, e.g. "16x9"."""
        return self.value.replace(":", "x")


@dataclass(frozen=True)
class LayoutConfig:
    """Per-cue display budget.

    Attributes:
        max_chars_per_line: Maximum visible characters on one line (> 0).
        max_lines: Maximum lines in one cue (> 0).
        aspect_ratio: The ratio this budget was derived from, if any.
    """

    max_chars_per_line: int
    max_lines: int
    aspect_ratio: AspectRatio | None = None

    def __post_init__(self) -> None:
        if self.max_chars_per_line <= 0:
            raise InvalidLayoutError(
                "max_chars_per_line must be positive, got {}".format(
                    self.max_chars_per_line
                )
            )
        if self.max_lines <= 0:
            raise InvalidLayoutError(
                "max_lines must be positive, got {}".format(self.max_lines)
            )


@dataclass
class TranscriptionResult:
    """Timing data handed over by the speech-recognition step.

    Word timing is preferred; segments are the coarse fallback when the
    recogniser did not return words.
    """

    words: list[Word] = field(default_factory=list)
    segments: list[RawSegment] = field(default_factory=list)
    language: str = "sr"
    duration: float = 0.0

    @property
    def has_words(self) -> bool:
        return bool(self.words)
