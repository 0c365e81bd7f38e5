"""Pipeline orchestration: transcription + layout → final cue list → files.

WHY: Callers (the upload flow, the export flow, the CLI) should not have
to know the stage order or the rules that tie the stages together. This
module is the one place that composes them.

HOW: build_cues() runs
    segmenter → layout (format_cue_text) → script mapper → timing
over a TranscriptionResult. optimize_cues() re-runs the layout and timing
stages over an existing (possibly hand-edited) cue list, which is what the
export flow does for a chosen aspect ratio. export_cues() and
burn_in_text() hand the final list to the formatters.

RULES:
- Word timing is used when present; otherwise the recogniser's coarse
  segments pass straight through to the layout stage.
- Cue indices are contiguous 1..N across segment boundaries.
- Script conversion keeps the pre-conversion text in Cue.original_text.
- Nothing here mutates its inputs; every function returns new cues.
- The layout budget is validated before any work is done.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Union

from titlovi.config import DEFAULT_ASPECT_RATIO, target_is_cyrillic
from titlovi.core.ir import AspectRatio, Cue, LayoutConfig, RawSegment, TranscriptionResult
from titlovi.core.layout import format_cue_text, resolve_layout
from titlovi.core.script import Script, ScriptMapper
from titlovi.core.segmenter import segment_words, segments_from_coarse
from titlovi.core.timing import normalize_timing
from titlovi.formatters import FormatterOutput, get_formatter

logger = logging.getLogger(__name__)

LayoutLike = Union[LayoutConfig, AspectRatio, str, None]


def _layout(layout: LayoutLike) -> LayoutConfig:
    if isinstance(layout, LayoutConfig):
        return layout
    return resolve_layout(aspect_ratio=layout or DEFAULT_ASPECT_RATIO)


def _mapper(target_script: Optional[str], ascii_digraphs: bool) -> ScriptMapper:
    target = Script.cyrillic if target_is_cyrillic(target_script) else Script.latin
    return ScriptMapper(target=target, ascii_digraphs=ascii_digraphs)


def layout_segments(segments: Iterable[RawSegment], layout: LayoutConfig) -> List[Cue]:
    """Run the layout stage over segments, numbering cues across all of them."""
    cues = []  # type: List[Cue]
    for seg in segments:
        cues.extend(format_cue_text(
            seg.text, seg.start, seg.end, layout, first_index=len(cues) + 1
        ))
    return cues


def convert_script(cues: Iterable[Cue], mapper: ScriptMapper) -> List[Cue]:
    """Convert every cue to the mapper's target script.

    original_text keeps the text as it was before conversion; cues that
    already had an original_text keep the older value.
    """
    converted = []  # type: List[Cue]
    for cue in cues:
        text = mapper.ensure_target_script(cue.text)
        original = cue.original_text if cue.original_text is not None else cue.text
        converted.append(replace(cue, text=text, original_text=original))
    return converted


def convert_to_cyrillic(cues: Iterable[Cue], ascii_digraphs: bool = False) -> List[Cue]:
    """Convert cue texts to Cyrillic, skipping ones that already are."""
    return convert_script(cues, ScriptMapper(Script.cyrillic, ascii_digraphs=ascii_digraphs))


def build_cues(
    transcription: TranscriptionResult,
    layout: LayoutLike = None,
    target_script: Optional[str] = None,
    ascii_digraphs: bool = False,
) -> List[Cue]:
    """Turn a transcription into the final, normalised cue list.

    Args:
        transcription: Word or segment timing from speech recognition.
        layout: A LayoutConfig, an aspect-ratio tag ("16:9", "9:16",
                "1:1"), or None for the configured
                default ratio (TITLOVI_DEFAULT_ASPECT_RATIO).
        target_script: "cyrillic" or "latin"; None uses the configured
                       default (TITLOVI_TARGET_SCRIPT).
        ascii_digraphs: Treat "Dj"/"Dz" as Đ/Dž when converting to Cyrillic.

    Returns:
        Cues numbered 1..N with end > start and no overlaps.

    Raises:
        InvalidLayoutError: If the layout budget is impossible.
    """
    budget = _layout(layout)
    mapper = _mapper(target_script, ascii_digraphs)

    if transcription.has_words:
        segments = segment_words(transcription.words)
    else:
        segments = segments_from_coarse(transcription.segments)

    cues = layout_segments(segments, budget)
    cues = convert_script(cues, mapper)
    cues = normalize_timing(cues)

    logger.info(
        "Built %d cues from %d segments (%s, %dx%d, %s)",
        len(cues), len(segments),
        "words" if transcription.has_words else "segments",
        budget.max_chars_per_line, budget.max_lines, mapper.target.value,
    )
    return cues


def optimize_cues(cues: Iterable[Cue], layout: LayoutLike = None) -> List[Cue]:
    """Re-lay out an existing cue list for a (new) budget.

    Each cue's text is re-wrapped and split evenly over its own window,
    then timing is normalised. original_text is carried onto every piece
    of a split cue.
    """
    budget = _layout(layout)
    result = []  # type: List[Cue]
    for cue in sorted(cues, key=lambda c: c.start):
        for piece in format_cue_text(cue.text, cue.start, cue.end, budget,
                                     first_index=len(result) + 1):
            result.append(replace(piece, original_text=cue.original_text))
    return normalize_timing(result)


def optimize_for_aspect_ratio(cues: Iterable[Cue], aspect_ratio: Union[AspectRatio, str]) -> List[Cue]:
    """optimize_cues() with the fixed budget of an aspect ratio."""
    return optimize_cues(cues, resolve_layout(aspect_ratio=aspect_ratio))


def export_cues(
    cues: List[Cue],
    fmt: str = "srt",
    aspect_ratio: Union[AspectRatio, str, None] = None,
) -> FormatterOutput:
    """Serialize cues as a downloadable subtitle file.

    The suffix carries the aspect ratio when one is given, e.g.
    ``"-9x16.srt"``, so exports for different ratios do not collide.

    Raises:
        UnknownFormatError: If fmt is not a registered format.
    """
    stem_suffix = ""
    if aspect_ratio is not None:
        stem_suffix = "-" + AspectRatio.parse(aspect_ratio).file_tag
    return get_formatter(fmt).format(cues, stem_suffix)


def burn_in_text(cues: List[Cue]) -> str:
    """Return the single SRT blob the video burn-in step consumes."""
    return get_formatter("srt").serialize(cues)
