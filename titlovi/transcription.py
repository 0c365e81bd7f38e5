"""Loading speech-recognition output into a TranscriptionResult.

WHY: The engine itself never calls the recogniser, but the CLI and tests
feed it saved recogniser output. That JSON comes in a few shapes (Whisper
verbose JSON, flat word lists, segments with nested words) and is
sometimes a truncated snippet of a larger file.

HOW: try_parse_json() closes JSON that was cut off; validate() checks
the data against schemas/transcription.schema.json with jsonschema; and
load_transcription() normalises any accepted shape into Word and
RawSegment lists.

RULES:
- Field names are flexible: word/text/t for text, start/s, end/e.
- Missing start defaults to 0, missing end to start.
- Word text is stripped (Whisper prefixes words with a space); empty
  words are dropped.
- With no words and no segments but a top-level "text", one segment
  spanning [0, duration or 10] is produced.
- Unparsable or schema-invalid input raises TranscriptionInputError.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import jsonschema

from titlovi.config import DEFAULT_LANGUAGE
from titlovi.core.ir import RawSegment, TranscriptionResult, Word
from titlovi.errors import TranscriptionInputError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "transcription.schema.json"

# Used for the single fallback segment when the recogniser gave no duration.
FALLBACK_DURATION = 10.0


@lru_cache(maxsize=1)
def load_schema() -> Dict[str, Any]:
    """Load the bundled transcription JSON Schema."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return json.load(f)


def _unclosed(raw: str) -> Tuple[bool, str]:
    """Scan raw JSON text for what is still open at its end.

    Returns:
        (inside_string, closers): whether the text stops inside a string
        literal, and the brackets that close every open array/object,
        innermost first.
    """
    closers = []  # type: List[str]
    in_string = False
    escaped = False
    for ch in raw:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "[":
            closers.append("]")
        elif ch == "{":
            closers.append("}")
        elif closers and ch == closers[-1]:
            closers.pop()
    return in_string, "".join(reversed(closers))


def try_parse_json(raw: str) -> Any:
    """Parse recogniser JSON, closing it first if it was cut off.

    WHY: Saved recogniser output is often copied out of a larger file and
    stops mid-word or before its closing brackets.

    HOW:
      1. Normalize line endings, strip whitespace, try json.loads().
      2. Otherwise scan the text: terminate an open string literal, drop a
         dangling comma, and append the closers for every array/object
         still open, in nesting order.

    RULES:
    - A cut inside a key or right after a colon is not repaired.
    - A repaired parse logs a warning with the appended text.

    Raises:
        TranscriptionInputError: If the closed text still does not parse.
    """
    raw = raw.replace("\r\n", "\n").replace("\r", "\n").strip()

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass

    in_string, closers = _unclosed(raw)
    if in_string:
        repaired = raw + '"'
    else:
        repaired = raw.rstrip(",").rstrip()
    try:
        data = json.loads(repaired + closers)
    except json.JSONDecodeError as e:
        raise TranscriptionInputError(
            "Could not parse JSON input (even after closing it): {}".format(e)
        ) from e
    logger.warning("Recovered truncated JSON by appending %r", repaired[len(raw):] + closers)
    return data


def validate(data: Any) -> None:
    """Check data against the transcription schema.

    Raises:
        TranscriptionInputError: With the most relevant schema error.
    """
    try:
        jsonschema.validate(instance=data, schema=load_schema())
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise TranscriptionInputError(
            "Invalid transcription at {}: {}".format(location, e.message)
        ) from e


def _word_from(item: Dict[str, Any]) -> Word | None:
    text = item.get("word", item.get("text", item.get("t", ""))).strip()
    if not text:
        return None
    start = float(item.get("start", item.get("s", 0)))
    end = float(item.get("end", item.get("e", start)))
    return Word(text=text, start=start, end=end)


def _segment_from(item: Dict[str, Any]) -> RawSegment | None:
    text = str(item.get("text", "")).strip()
    if not text:
        return None
    start = float(item.get("start", 0))
    end = float(item.get("end", start))
    return RawSegment(start=start, end=end, text=text)


def _looks_like_segment(item: Dict[str, Any]) -> bool:
    """A segment has nested words or more than one word of text."""
    if "words" in item:
        return True
    text = item.get("text", item.get("word", item.get("t", "")))
    return len(str(text).split()) > 1


def load_transcription(data: Any) -> TranscriptionResult:
    """Build a TranscriptionResult from parsed recogniser JSON.

    Accepts:
      1. {"words": [...], "segments": [...], "text", "language", "duration"}
      2. A list of segments, each with a nested "words" list
      3. A flat list of word objects

    Raises:
        TranscriptionInputError: If the data does not match the schema.
    """
    validate(data)

    words = []  # type: List[Word]
    segments = []  # type: List[RawSegment]
    language = DEFAULT_LANGUAGE
    duration = 0.0
    full_text = ""

    if isinstance(data, dict):
        language = data.get("language") or DEFAULT_LANGUAGE
        duration = float(data.get("duration") or 0.0)
        full_text = (data.get("text") or "").strip()
        items = list(data.get("segments") or [])
        top_words = data.get("words") or []
        for w in top_words:
            word = _word_from(w)
            if word is not None:
                words.append(word)
    else:
        items = []
        if any(_looks_like_segment(item) for item in data):
            items = list(data)
        else:
            for item in data:
                word = _word_from(item)
                if word is not None:
                    words.append(word)

    nested_words = not words
    for item in items:
        seg = _segment_from(item)
        if seg is not None:
            segments.append(seg)
        if nested_words:
            for w in item.get("words") or []:
                word = _word_from(w)
                if word is not None:
                    words.append(word)

    if not words and not segments and full_text:
        segments.append(RawSegment(0.0, duration or FALLBACK_DURATION, full_text))

    if not duration:
        ends = [w.end for w in words] + [s.end for s in segments]
        duration = max(ends) if ends else 0.0

    logger.debug(
        "Loaded transcription: %d words, %d segments, %.2fs",
        len(words), len(segments), duration,
    )
    return TranscriptionResult(
        words=words, segments=segments, language=language, duration=duration
    )


def load_transcription_text(raw: str) -> TranscriptionResult:
    """try_parse_json() followed by load_transcription()."""
    return load_transcription(try_parse_json(raw))
