"""Group word timestamps into raw subtitle segments.

WHY: Word-level timing from speech recognition is far too fine for
subtitles, and whole recognition segments are often too long. Segments
here are the middle ground: a few words that belong together in time,
closed at pauses and punctuation.

HOW: group_words() walks the words once. Before appending a word it closes
the running segment if any of these holds:
  (a) the segment already has SEGMENT_MAX_WORDS words,
  (b) the word would stretch the segment past SEGMENT_MAX_DURATION,
  (c) the silence before the word exceeds SEGMENT_PAUSE_THRESHOLD,
  (d) the previous word ends in . , ; : ! or ?
extend_short_segments() then lengthens segments shorter than
SEGMENT_MIN_DURATION without running into the next one.

RULES:
- Greedy and left to right; no look-ahead.
- A word is never split: one word longer than the duration cap still
  forms its own segment.
- Malformed words (end <= start) are treated as zero-width, negative
  offsets as 0. Neither raises.
- Commas close segments just like full stops.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from titlovi.core.ir import RawSegment, Word
from titlovi.core.presets import (
    CUE_MIN_GAP,
    SEGMENT_BREAK_PUNCTUATION,
    SEGMENT_MAX_DURATION,
    SEGMENT_MAX_WORDS,
    SEGMENT_MIN_DURATION,
    SEGMENT_PAUSE_THRESHOLD,
)

logger = logging.getLogger(__name__)


def _ends_with_break(text: str) -> bool:
    return bool(text) and text[-1] in SEGMENT_BREAK_PUNCTUATION


def _sanitize(word: Word) -> Word:
    """Clamp a word's timing to a non-negative, zero-or-more width span."""
    start = max(0.0, word.start)
    end = max(start, word.end)
    if word.end <= word.start:
        logger.warning(
            "Word %r has end %.3f <= start %.3f; treating as zero-width",
            word.text, word.end, word.start,
        )
    if start == word.start and end == word.end:
        return word
    return Word(text=word.text, start=start, end=end)


def group_words(words: Iterable[Word]) -> List[RawSegment]:
    """Group words into segments using the four closing rules.

    Args:
        words: Words in time order.

    Returns:
        Segments spanning first word start to last word end, without the
        minimum-duration post-pass.
    """
    segments = []  # type: List[RawSegment]
    current = []  # type: List[str]
    seg_start = 0.0
    last_end = 0.0

    for raw in words:
        word = _sanitize(raw)
        text = word.text.strip()
        if not text:
            continue

        if current:
            should_close = (
                len(current) >= SEGMENT_MAX_WORDS
                or word.end - seg_start > SEGMENT_MAX_DURATION
                or word.start - last_end > SEGMENT_PAUSE_THRESHOLD
                or _ends_with_break(current[-1])
            )
            if should_close:
                segments.append(RawSegment(seg_start, last_end, " ".join(current)))
                current = []

        if not current:
            seg_start = word.start
        current.append(text)
        last_end = word.end

    if current:
        segments.append(RawSegment(seg_start, last_end, " ".join(current)))

    return segments


def extend_short_segments(segments: List[RawSegment]) -> List[RawSegment]:
    """Lengthen segments shorter than SEGMENT_MIN_DURATION.

    The end moves to start + SEGMENT_MIN_DURATION, but never past
    next.start - CUE_MIN_GAP, and never earlier than the segment's own
    end. The last segment is extended without a cap.

    Returns:
        New RawSegment objects; the input list is left untouched.
    """
    extended = []  # type: List[RawSegment]
    for i, seg in enumerate(segments):
        end = seg.end
        if seg.end - seg.start < SEGMENT_MIN_DURATION:
            end = seg.start + SEGMENT_MIN_DURATION
            if i + 1 < len(segments):
                end = min(end, segments[i + 1].start - CUE_MIN_GAP)
            end = max(end, seg.end)
        extended.append(RawSegment(seg.start, end, seg.text))
    return extended


def segment_words(words: Iterable[Word]) -> List[RawSegment]:
    """Turn word timestamps into display-ready raw segments.

    Empty input gives an empty list.
    """
    segments = extend_short_segments(group_words(words))
    logger.debug("Grouped words into %d segments", len(segments))
    return segments


def segments_from_coarse(segments: Iterable[RawSegment]) -> List[RawSegment]:
    """Identity pass for recognisers that only return coarse segments.

    Text is stripped, blank segments are dropped, timing is clamped the
    same way as for words (start >= 0, end >= start).
    """
    result = []  # type: List[RawSegment]
    for seg in segments:
        text = seg.text.strip()
        if not text:
            continue
        start = max(0.0, seg.start)
        result.append(RawSegment(start, max(start, seg.end), text))
    return result
