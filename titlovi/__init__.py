"""titlovi — subtitle segmentation, timing, layout and script conversion.

WHY: Speech recognition hands back word timestamps in Serbian Latin script.
Editors and the video burn-in step need readable, correctly timed cues in
Cyrillic, laid out for the target aspect ratio, and exportable as SRT or
WebVTT. This package is the pure, in-memory engine that does that work.

HOW: Five leaf stages composed by the pipeline:
  segmenter  — word timestamps → raw segments
  layout     — raw segment → 1..N cues under a line/char budget
  script     — Latin ↔ Cyrillic transliteration
  timing     — min/max duration and overlap removal
  formatters — SRT / WebVTT serialization and parsing

RULES:
- No I/O, no global mutable state. Every call works on its own values.
- Data-quality problems degrade gracefully; only impossible layout
  budgets and unknown format names raise.
"""

__version__ = "0.1.0"

from titlovi.core.ir import (  # noqa: E402
    AspectRatio,
    Cue,
    LayoutConfig,
    RawSegment,
    TranscriptionResult,
    Word,
)
from titlovi.core.script import cyrillic_to_latin, latin_to_cyrillic  # noqa: E402
from titlovi.errors import (  # noqa: E402
    InvalidLayoutError,
    TitloviError,
    TranscriptionInputError,
    UnknownFormatError,
)
from titlovi.pipeline import build_cues, export_cues  # noqa: E402

__all__ = [
    "AspectRatio",
    "Cue",
    "LayoutConfig",
    "RawSegment",
    "TranscriptionResult",
    "Word",
    "latin_to_cyrillic",
    "cyrillic_to_latin",
    "build_cues",
    "export_cues",
    "TitloviError",
    "InvalidLayoutError",
    "UnknownFormatError",
    "TranscriptionInputError",
]
