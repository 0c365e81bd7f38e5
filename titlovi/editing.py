"""Manual cue-list edits: merge, split and shift.

WHY: Automatic segmentation is never perfect, so the editor lets users
join two cues, cut one in two, or slide everything when audio and
subtitles drift. These operations live in the engine so the editing
surface and any scripted clean-up share the same rules.

RULES:
- Every operation returns a new list numbered 1..N; input is untouched.
- Invalid requests (index out of range, split time outside the cue)
  return an unchanged copy instead of raising.
- Edits may break the timing invariants; run normalize_timing() on the
  result before export.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List

from titlovi.core.ir import Cue


def _renumber(cues: List[Cue]) -> List[Cue]:
    return [replace(cue, index=i) for i, cue in enumerate(cues, 1)]


def merge_cues(cues: List[Cue], first: int, second: int) -> List[Cue]:
    """Merge the cues at list positions first and second into one.

    The merged cue spans both windows, takes the earlier cue's place, and
    joins the texts with a space (earlier cue first). original_text is
    joined the same way when both cues have one.
    """
    if not (0 <= first < len(cues) and 0 <= second < len(cues)) or first == second:
        return _renumber(list(cues))

    lo, hi = min(first, second), max(first, second)
    a, b = cues[lo], cues[hi]
    original = None
    if a.original_text is not None and b.original_text is not None:
        original = "{} {}".format(a.original_text, b.original_text)

    merged = Cue(
        index=a.index,
        start=min(a.start, b.start),
        end=max(a.end, b.end),
        text="{} {}".format(a.text, b.text),
        original_text=original,
    )
    rest = [cue for i, cue in enumerate(cues) if i not in (lo, hi)]
    rest.insert(lo, merged)
    return _renumber(rest)


def split_cue(cues: List[Cue], position: int, split_time: float) -> List[Cue]:
    """Split the cue at list position into two at split_time.

    The words are divided at len(words) // 2; the first half runs from
    the cue start to split_time, the second from split_time to the end.
    split_time must lie strictly inside the cue.
    """
    if not 0 <= position < len(cues):
        return _renumber(list(cues))

    cue = cues[position]
    if not cue.start < split_time < cue.end:
        return _renumber(list(cues))

    words = cue.text.split()
    mid = len(words) // 2
    first = Cue(index=cue.index, start=cue.start, end=split_time,
                text=" ".join(words[:mid]))
    second = Cue(index=cue.index + 1, start=split_time, end=cue.end,
                 text=" ".join(words[mid:]))

    result = list(cues)
    result[position:position + 1] = [first, second]
    return _renumber(result)


def shift_cues(cues: List[Cue], offset: float) -> List[Cue]:
    """Move every cue by offset seconds, clamping times at zero."""
    return _renumber([
        replace(cue, start=max(0.0, round(cue.start + offset, 3)),
                end=max(0.0, round(cue.end + offset, 3)))
        for cue in cues
    ])
