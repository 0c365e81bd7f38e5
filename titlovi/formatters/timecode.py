"""Millisecond timecodes shared by the SRT and WebVTT formatters.

WHY: Both formats write time as HH:MM:SS plus milliseconds and differ only
in the separator (comma for SRT, dot for WebVTT). Rounding must be to the
nearest millisecond; truncating with int() drifts by a millisecond on
values like 2.9999999.

RULES:
- Negative seconds are written as 00:00:00,000.
- Hours are at least two digits and may grow beyond 99.
- Parsing accepts either separator and an optional hours field
  (WebVTT allows MM:SS.mmm). Anything else raises ValueError.
"""

from __future__ import annotations

import re
from typing import Tuple

TIMECODE_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{2})[,.](\d{3})$")
TIMING_LINE_RE = re.compile(r"^\s*(\S+)\s+-->\s+(\S+)(?:\s+.*)?$")


def seconds_to_timecode(seconds: float, separator: str = ",") -> str:
    """Format seconds as HH:MM:SS<sep>mmm."""
    total_ms = int(round(max(0.0, seconds) * 1000))
    hours, rest = divmod(total_ms, 3600000)
    minutes, rest = divmod(rest, 60000)
    secs, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d}{}{:03d}".format(hours, minutes, secs, separator, millis)


def timecode_to_seconds(timecode: str) -> float:
    """Parse HH:MM:SS,mmm / HH:MM:SS.mmm / MM:SS.mmm into seconds.

    Raises:
        ValueError: If the string is not a timecode.
    """
    match = TIMECODE_RE.match(timecode.strip())
    if not match:
        raise ValueError("Not a timecode: {!r}".format(timecode))
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2))
    secs = int(match.group(3))
    millis = int(match.group(4))
    if minutes > 59 or secs > 59:
        raise ValueError("Timecode field out of range: {!r}".format(timecode))
    return hours * 3600 + minutes * 60 + secs + millis / 1000.0


def parse_timing_line(line: str) -> Tuple[float, float]:
    """Parse "start --> end [settings]" into a (start, end) pair.

    Raises:
        ValueError: If the line is not a valid timing line.
    """
    match = TIMING_LINE_RE.match(line)
    if not match:
        raise ValueError("Not a timing line: {!r}".format(line))
    return timecode_to_seconds(match.group(1)), timecode_to_seconds(match.group(2))
