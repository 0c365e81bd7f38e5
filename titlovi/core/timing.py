"""Cue timing normalisation: duration bounds and overlap removal.

WHY: Even slicing and manual edits can leave cues that flash by too fast,
linger too long, or overlap the next cue. Players handle overlaps badly
and burn-in renders both cues on top of each other.

HOW: One left-to-right pass over cues sorted by start. For each cue:
  1. Clamp the duration to [CUE_MIN_DURATION, CUE_MAX_DURATION], measured
     from the cue's own start, by moving only the end.
  2. Clip the end to next.start - CUE_MIN_GAP when it would overlap.
  3. start = max(start, 0) and, after the first cue, at least the previous
     end + CUE_MIN_GAP.
  4. Re-clamp end >= start + CUE_ABSOLUTE_MIN_DURATION.
The carry in step 3 means a cue pushed long by step 4 moves the next
cue's start forward instead of overlapping it.

RULES:
- No backtracking: an earlier cue is never revisited.
- Output cues are new objects, renumbered 1..N, rounded to milliseconds.
- After the pass: end > start for every cue and
  cue[i].end + CUE_MIN_GAP <= cue[i+1].start (to the millisecond).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from titlovi.core.ir import Cue
from titlovi.core.presets import (
    CUE_ABSOLUTE_MIN_DURATION,
    CUE_MAX_DURATION,
    CUE_MIN_DURATION,
    CUE_MIN_GAP,
)

logger = logging.getLogger(__name__)


def _ms(value: float) -> float:
    return round(value, 3)


def normalize_timing(cues: Iterable[Cue]) -> List[Cue]:
    """Enforce duration bounds and remove overlaps between cues.

    Args:
        cues: Cues sorted by start time. Not modified.

    Returns:
        New list of cues satisfying the timing invariants.
    """
    source = list(cues)
    result = []  # type: List[Cue]
    prev_end = None  # type: Optional[float]
    adjusted = 0

    for i, cue in enumerate(source):
        end = cue.end
        duration = end - cue.start
        if duration < CUE_MIN_DURATION:
            end = cue.start + CUE_MIN_DURATION
        elif duration > CUE_MAX_DURATION:
            end = cue.start + CUE_MAX_DURATION

        if i + 1 < len(source):
            next_start = source[i + 1].start
            if end > next_start - CUE_MIN_GAP:
                end = next_start - CUE_MIN_GAP

        start = max(0.0, cue.start)
        if prev_end is not None:
            start = max(start, _ms(prev_end + CUE_MIN_GAP))

        end = max(end, start + CUE_ABSOLUTE_MIN_DURATION)

        start, end = _ms(start), _ms(end)
        if start != cue.start or end != cue.end:
            adjusted += 1
        result.append(replace(cue, index=len(result) + 1, start=start, end=end))
        prev_end = end

    if adjusted:
        logger.debug("Adjusted timing of %d/%d cues", adjusted, len(result))
    return result
