"""Layout budgets and tuning constants for segmentation and timing.

WHY: Each stage has a handful of thresholds (word count, pause length,
min/max durations) and the layout stage needs a fixed budget per aspect
ratio. Keeping them in one place makes them easy to find and review
without reading the algorithms.

HOW: Plain module constants. The layout table is a read-only mapping
from AspectRatio to LayoutConfig, built once at import.

RULES:
- Constants are never mutated at runtime; LAYOUTS is a MappingProxyType
  and LayoutConfig is frozen.
- Widescreen gets the widest line; vertical and square are narrower,
  all with two lines per cue.
- SEGMENT_BREAK_PUNCTUATION treats comma the same as a full stop.
"""

from types import MappingProxyType
from typing import Mapping

from titlovi.core.ir import AspectRatio, LayoutConfig

# -----------------------------------------------------------------------------
# Layout budgets per aspect ratio
# -----------------------------------------------------------------------------

LAYOUTS: Mapping[AspectRatio, LayoutConfig] = MappingProxyType({
    AspectRatio.landscape: LayoutConfig(42, 2, AspectRatio.landscape),
    AspectRatio.vertical: LayoutConfig(40, 2, AspectRatio.vertical),
    AspectRatio.square: LayoutConfig(35, 2, AspectRatio.square),
})

# Budget used when the caller gives neither a ratio nor explicit numbers.
DEFAULT_MAX_CHARS_PER_LINE = 40
DEFAULT_MAX_LINES = 2

# -----------------------------------------------------------------------------
# Segmenter
# -----------------------------------------------------------------------------

SEGMENT_MAX_WORDS = 8
SEGMENT_MAX_DURATION = 4.0     # seconds, last word end minus segment start
SEGMENT_PAUSE_THRESHOLD = 0.7  # seconds of silence that closes a segment
SEGMENT_MIN_DURATION = 1.0
SEGMENT_BREAK_PUNCTUATION = frozenset(".,;:!?")

# -----------------------------------------------------------------------------
# Timing normalizer
# -----------------------------------------------------------------------------

CUE_MIN_DURATION = 1.0
CUE_MAX_DURATION = 5.0
CUE_MIN_GAP = 0.1
CUE_ABSOLUTE_MIN_DURATION = 0.5
