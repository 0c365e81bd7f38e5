"""WebVTT (.vtt) formatter.

WHY: Browsers only play WebVTT through the <track> element, so the editor
preview and the downloadable web subtitles use it.

HOW: A "WEBVTT" header, then one block per cue: a numeric cue identifier,
"HH:MM:SS.mmm --> HH:MM:SS.mmm", and the text with &, < and > escaped.
Parsing skips the header and NOTE/STYLE/REGION blocks, accepts blocks with
or without an identifier, short MM:SS.mmm timecodes and cue settings after
the end time, and unescapes entities in the text.

RULES:
- Identifiers are written 1..N; parsed cues are renumbered 1..N in file
  order whatever their identifiers say.
- A missing header is tolerated on parse.
- Blocks without a timing line or without text are skipped.
"""

from __future__ import annotations

import html
import logging
from typing import List

from titlovi.core.ir import Cue
from titlovi.formatters.base import BaseFormatter, cue_text_lines, split_blocks
from titlovi.formatters.timecode import parse_timing_line, seconds_to_timecode

logger = logging.getLogger(__name__)

HEADER = "WEBVTT"
_SKIPPED_BLOCKS = ("NOTE", "STYLE", "REGION")


def _escape(line: str) -> str:
    return line.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class WebVTTFormatter(BaseFormatter):
    """WebVTT text with dot-millisecond timecodes and a header."""

    @property
    def name(self) -> str:
        return "WebVTT"

    @property
    def extension(self) -> str:
        return ".vtt"

    @property
    def media_type(self) -> str:
        return "text/vtt"

    def serialize(self, cues: List[Cue]) -> str:
        parts = [HEADER]
        for i, cue in enumerate(cues, 1):
            parts.append("{}\n{} --> {}\n{}".format(
                i,
                seconds_to_timecode(cue.start, "."),
                seconds_to_timecode(cue.end, "."),
                "\n".join(_escape(line) for line in cue_text_lines(cue)),
            ))
        return "\n\n".join(parts) + "\n"

    def parse(self, text: str) -> List[Cue]:
        blocks = split_blocks(text)
        if blocks and blocks[0][0].startswith(HEADER):
            blocks = blocks[1:]
        else:
            logger.debug("WebVTT input has no %s header", HEADER)

        cues = []  # type: List[Cue]
        for lines in blocks:
            if lines[0].split(" ", 1)[0] in _SKIPPED_BLOCKS:
                continue

            if "-->" in lines[0]:
                timing_at = 0
            elif len(lines) > 1 and "-->" in lines[1]:
                timing_at = 1
            else:
                logger.debug("Skipping WebVTT block without timing: %r", lines[0])
                continue

            body = lines[timing_at + 1:]
            if not body:
                logger.debug("Skipping WebVTT block without text")
                continue
            try:
                start, end = parse_timing_line(lines[timing_at])
            except ValueError:
                logger.debug("Skipping WebVTT block with bad timing %r", lines[timing_at])
                continue

            cues.append(Cue(
                index=len(cues) + 1,
                start=start,
                end=end,
                text="\n".join(html.unescape(line) for line in body),
            ))
        return cues
