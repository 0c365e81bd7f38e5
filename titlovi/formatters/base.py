"""Abstract base formatter and output container.

WHY: Cue lists leave the engine as subtitle files (for download) and as a
single text blob (for the burn-in step), and come back as files the user
edited elsewhere. Every format needs the same two operations, so the
pipeline and CLI can treat formats generically.

HOW: BaseFormatter is an ABC with name/extension/media_type and the
serialize()/parse() pair. FormatterOutput bundles a file suffix with its
content and MIME type, as returned by the pipeline's export step.

RULES:
- serialize() never mutates cues and numbers blocks 1..N in list order.
- parse() never raises on bad blocks: it skips them and returns what it
  could read, renumbered 1..N.
- ``suffix`` starts with a hyphen, e.g. ``"-16x9.srt"``; the caller
  prepends the source filename stem.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from titlovi.core.ir import Cue

_BLOCK_SPLIT_RE = re.compile(r"\n(?:[ \t]*\n)+")


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-9x16.vtt"`` → ``"interview-9x16.vtt"``.
        content: The file content.
        media_type: MIME type for the content.
    """

    suffix: str
    content: str
    media_type: str


def split_blocks(text: str) -> List[List[str]]:
    """Split subtitle file text into blocks of non-empty lines.

    Handles a leading BOM, CRLF/CR line endings and runs of blank (or
    whitespace-only) separator lines. Non-blank lines are kept as they are,
    trailing spaces included; the timing and index parsers tolerate them.
    """
    normalized = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    blocks = []
    for chunk in _BLOCK_SPLIT_RE.split(normalized):
        lines = [line for line in chunk.split("\n") if line.strip()]
        if lines:
            blocks.append(lines)
    return blocks


def cue_text_lines(cue: Cue) -> List[str]:
    """Return the cue's non-blank text lines (blank lines would end the block)."""
    return [line for line in cue.text.split("\n") if line.strip()]


class BaseFormatter(ABC):
    """Abstract base for subtitle file formats.

    To add a new format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement name, extension, media_type, serialize() and parse()
    4. Register it in FORMATTERS in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SubRip'."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension including the dot, e.g. '.srt'."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of the serialized text."""

    @abstractmethod
    def serialize(self, cues: List[Cue]) -> str:
        """Render cues as file text."""

    @abstractmethod
    def parse(self, text: str) -> List[Cue]:
        """Read cues from file text, skipping malformed blocks."""

    def format(self, cues: List[Cue], stem_suffix: str = "") -> FormatterOutput:
        """Serialize cues into a FormatterOutput.

        Args:
            cues: Cues to write.
            stem_suffix: Text placed before the extension, e.g. "-16x9".
        """
        return FormatterOutput(
            suffix="{}{}".format(stem_suffix, self.extension),
            content=self.serialize(cues),
            media_type=self.media_type,
        )
