"""Configuration defaults and .env loading.

WHY: The CLI and any embedding service need sensible defaults (aspect
ratio, output format, target script, log level) that operators can
override without touching code.

HOW: python-dotenv loads a .env file on import. Each default is a
module-level constant read from the environment with a hard-coded
fallback. Algorithm constants (segmenter thresholds, timing bounds,
layout budgets) are not here: they live next to the code that uses them.

RULES:
- Defaults are read once at import time; they are plain strings.
- DEFAULT_TARGET_SCRIPT is "cyrillic" or "latin"; anything else falls
  back to "cyrillic".
- The language is fixed to Serbian; TITLOVI_LANGUAGE only labels output.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_ASPECT_RATIO = os.getenv("TITLOVI_DEFAULT_ASPECT_RATIO", "16:9")
DEFAULT_FORMAT = os.getenv("TITLOVI_DEFAULT_FORMAT", "srt").lower()
DEFAULT_LANGUAGE = os.getenv("TITLOVI_LANGUAGE", "sr")
LOG_LEVEL = os.getenv("TITLOVI_LOG_LEVEL", "WARNING").upper()

_TARGET_SCRIPTS = {"cyrillic", "latin"}

DEFAULT_TARGET_SCRIPT = os.getenv("TITLOVI_TARGET_SCRIPT", "cyrillic").lower()
if DEFAULT_TARGET_SCRIPT not in _TARGET_SCRIPTS:
    DEFAULT_TARGET_SCRIPT = "cyrillic"


def target_is_cyrillic(script: str | None = None) -> bool:
    """Return True when cues should end up in Cyrillic.

    Args:
        script: "cyrillic" or "latin"; None means DEFAULT_TARGET_SCRIPT.
    """
    value = (script or DEFAULT_TARGET_SCRIPT).lower()
    return value != "latin"
