"""Cue text layout: line wrapping, cue grouping and even time slicing.

WHY: A recognised segment can hold more text than fits on screen. The
layout stage turns one timed segment into as many cues as needed so that
no line exceeds the character budget and no cue exceeds the line budget
of the target aspect ratio.

HOW: Four steps, all greedy and left to right:
  1. normalize_text() — collapse whitespace and newlines to single spaces.
  2. wrap_lines()     — bin-pack words into lines under max_chars_per_line.
  3. group_lines()    — pack up to max_lines consecutive lines into a cue.
  4. format_cue_text() — split the segment's time window evenly across
     the resulting cues and number them.

RULES:
- Text is never altered beyond whitespace normalisation; words are never
  split, so a single word longer than the budget sits alone on its line.
- max_lines == 1 yields one line per cue with no internal line breaks.
- A single resulting cue keeps the original window exactly; otherwise
  slice boundaries are rounded to the millisecond.
- Packing is greedy: a line is closed as soon as the next word would
  overflow it.
"""

from __future__ import annotations

import logging
from typing import List

from titlovi.core.ir import AspectRatio, Cue, LayoutConfig
from titlovi.core.presets import DEFAULT_MAX_CHARS_PER_LINE, DEFAULT_MAX_LINES, LAYOUTS

logger = logging.getLogger(__name__)


# =============================================================================
# Budgets
# =============================================================================

def layout_for_aspect_ratio(aspect_ratio: str | AspectRatio) -> LayoutConfig:
    """Look up the fixed layout budget for an aspect-ratio tag.

    Raises:
        InvalidLayoutError: If the tag is not "16:9", "9:16" or "1:1".
    """
    return LAYOUTS[AspectRatio.parse(aspect_ratio)]


def resolve_layout(
    aspect_ratio: str | AspectRatio | None = None,
    max_chars_per_line: int | None = None,
    max_lines: int | None = None,
) -> LayoutConfig:
    """Build a LayoutConfig from a ratio tag and/or explicit overrides.

    Explicit numbers win over the ratio's defaults. With neither, the
    generic 40x2 budget is used.

    Raises:
        InvalidLayoutError: Unknown ratio or non-positive budget.
    """
    if aspect_ratio is not None:
        base = layout_for_aspect_ratio(aspect_ratio)
    else:
        base = LayoutConfig(DEFAULT_MAX_CHARS_PER_LINE, DEFAULT_MAX_LINES)

    if max_chars_per_line is None and max_lines is None:
        return base

    return LayoutConfig(
        max_chars_per_line=base.max_chars_per_line if max_chars_per_line is None else max_chars_per_line,
        max_lines=base.max_lines if max_lines is None else max_lines,
        aspect_ratio=base.aspect_ratio,
    )


# =============================================================================
# Text utilities
# =============================================================================

def normalize_text(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to one space and trim."""
    return " ".join((text or "").split())


def wrap_lines(text: str, max_chars_per_line: int) -> List[str]:
    """Greedily pack words into lines of at most max_chars_per_line.

    A word is appended to the current line while the line plus a space
    plus the word still fits; otherwise the line is closed and the word
    starts a new one. An overlong word gets a line of its own, unsplit.

    Args:
        text: Cue text (whitespace is normalised first).
        max_chars_per_line: Character budget per line.

    Returns:
        List of lines; empty for empty text.
    """
    lines = []  # type: List[str]
    current = ""
    for word in normalize_text(text).split(" "):
        if not word:
            continue
        candidate = "{} {}".format(current, word) if current else word
        if len(candidate) <= max_chars_per_line:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def group_lines(lines: List[str], max_lines: int) -> List[str]:
    """Pack up to max_lines consecutive lines into each cue text."""
    return [
        "\n".join(lines[i:i + max_lines])
        for i in range(0, len(lines), max_lines)
    ]


def format_for_display(text: str, max_chars_per_line: int = DEFAULT_MAX_CHARS_PER_LINE,
                       max_lines: int = DEFAULT_MAX_LINES) -> str:
    """Wrap a single cue's text for display.

    Text that already contains line breaks is treated as hand-formatted
    and returned unchanged. Otherwise it is wrapped and cut to max_lines;
    callers that must not lose words should use format_cue_text() instead.
    """
    if "\n" in text:
        return text
    return "\n".join(wrap_lines(text, max_chars_per_line)[:max_lines])


# =============================================================================
# Segment → cues
# =============================================================================

def format_cue_text(
    text: str,
    start: float,
    end: float,
    layout: LayoutConfig,
    first_index: int = 1,
) -> List[Cue]:
    """Split one timed segment into cues that fit the layout budget.

    WHY: The segmenter groups words by timing, not by screen space. This
    function enforces the screen budget and shares the segment's time
    window out between the cues it creates.

    HOW: wrap_lines() then group_lines(), then an even split of the
    window: cue k covers [start + k*d, start + (k+1)*d) with
    d = (end - start) / N.

    RULES:
    - Every line is <= max_chars_per_line unless it is one overlong word.
    - Every cue has <= max_lines lines.
    - N == 1 keeps (start, end) exactly.
    - Indices run first_index, first_index + 1, ...

    Args:
        text: Segment text.
        start: Window start in seconds.
        end: Window end in seconds.
        layout: Character/line budget.
        first_index: Sequence number of the first produced cue.

    Returns:
        List of Cue objects in time order; empty for blank text.
    """
    lines = wrap_lines(text, layout.max_chars_per_line)
    if not lines:
        return []

    texts = group_lines(lines, layout.max_lines)
    if len(texts) == 1:
        return [Cue(index=first_index, start=start, end=end, text=texts[0])]

    step = (end - start) / len(texts)
    cues = []  # type: List[Cue]
    for k, cue_text in enumerate(texts):
        cue_start = start + k * step
        cue_end = end if k == len(texts) - 1 else cue_start + step
        cues.append(Cue(
            index=first_index + k,
            start=round(cue_start, 3),
            end=round(cue_end, 3),
            text=cue_text,
        ))

    logger.debug(
        "Split %d chars into %d cues (%d lines, budget %dx%d)",
        len(text), len(cues), len(lines),
        layout.max_chars_per_line, layout.max_lines,
    )
    return cues
