"""Subtitle format registry and the serialize/parse entry points.

WHY: The pipeline, CLI and editing surface name formats by string ("srt",
"vtt"). A central dict maps those names to formatter classes so adding a
format means one new module and one new line here.

HOW: FORMATTERS maps keys to BaseFormatter subclasses (not instances).
get_formatter() resolves a name (case-insensitive, "webvtt" is an alias)
and instantiates it; serialize() and parse() are thin wrappers.

RULES:
- Keys are lower-case short names, also used for CLI flags.
- Unknown names raise UnknownFormatError.
"""

from __future__ import annotations

from typing import Dict, List, Type

from titlovi.core.ir import Cue
from titlovi.errors import UnknownFormatError
from titlovi.formatters.base import BaseFormatter, FormatterOutput
from titlovi.formatters.srt import SRTFormatter
from titlovi.formatters.vtt import WebVTTFormatter

FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    "srt": SRTFormatter,
    "vtt": WebVTTFormatter,
}

_ALIASES = {"webvtt": "vtt", "subrip": "srt"}

__all__ = [
    "FORMATTERS",
    "BaseFormatter",
    "FormatterOutput",
    "get_formatter",
    "serialize",
    "parse",
]


def get_formatter(fmt: str) -> BaseFormatter:
    """Return a formatter instance for a format name.

    Raises:
        UnknownFormatError: If fmt is not registered.
    """
    key = (fmt or "").strip().lower().lstrip(".")
    key = _ALIASES.get(key, key)
    if key not in FORMATTERS:
        raise UnknownFormatError(
            "Unknown subtitle format '{}'. Available: {}".format(
                fmt, ", ".join(FORMATTERS.keys())
            )
        )
    return FORMATTERS[key]()


def serialize(cues: List[Cue], fmt: str = "srt") -> str:
    """Render cues as subtitle file text in the given format."""
    return get_formatter(fmt).serialize(cues)


def parse(text: str, fmt: str = "srt") -> List[Cue]:
    """Read cues from subtitle file text, skipping malformed blocks."""
    return get_formatter(fmt).parse(text)
