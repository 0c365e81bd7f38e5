"""SubRip (.srt) formatter.

WHY: SRT is what editors, players and the video encoder's subtitle filter
all accept, and it is the blob handed to the burn-in step.

HOW: Each cue becomes "index\\nHH:MM:SS,mmm --> HH:MM:SS,mmm\\ntext",
blocks separated by one blank line. Parsing splits on blank lines and
reads index, timing line and text from each block.

RULES:
- Indices are written 1..N in list order, whatever Cue.index says.
- Blank lines inside cue text are dropped on write (they would end the
  block); the remaining lines are kept in order.
- Blocks with fewer than three lines, a non-integer index, or a bad
  timing line are skipped and logged at DEBUG.
"""

from __future__ import annotations

import logging
from typing import List

from titlovi.core.ir import Cue
from titlovi.formatters.base import BaseFormatter, cue_text_lines, split_blocks
from titlovi.formatters.timecode import parse_timing_line, seconds_to_timecode

logger = logging.getLogger(__name__)


class SRTFormatter(BaseFormatter):
    """SubRip text with comma-millisecond timecodes."""

    @property
    def name(self) -> str:
        return "SubRip"

    @property
    def extension(self) -> str:
        return ".srt"

    @property
    def media_type(self) -> str:
        return "application/x-subrip"

    def serialize(self, cues: List[Cue]) -> str:
        if not cues:
            return ""
        blocks = []
        for i, cue in enumerate(cues, 1):
            blocks.append("{}\n{} --> {}\n{}".format(
                i,
                seconds_to_timecode(cue.start, ","),
                seconds_to_timecode(cue.end, ","),
                "\n".join(cue_text_lines(cue)),
            ))
        return "\n\n".join(blocks) + "\n"

    def parse(self, text: str) -> List[Cue]:
        cues = []  # type: List[Cue]
        for lines in split_blocks(text):
            if len(lines) < 3:
                logger.debug("Skipping SRT block with %d lines", len(lines))
                continue
            try:
                int(lines[0].strip())
            except ValueError:
                logger.debug("Skipping SRT block with bad index %r", lines[0])
                continue
            try:
                start, end = parse_timing_line(lines[1])
            except ValueError:
                logger.debug("Skipping SRT block with bad timing %r", lines[1])
                continue
            cues.append(Cue(
                index=len(cues) + 1,
                start=start,
                end=end,
                text="\n".join(lines[2:]),
            ))
        return cues
