"""Shared test fixtures for the titlovi test suite.

WHY: Several test modules need the same word timings, transcription JSON
and cue lists. Centralizing them here keeps the expected values in one
place.

HOW: Pytest fixtures provide the four-word greeting from the reference
example, a longer Serbian transcript with pauses and punctuation, the
matching Whisper-style JSON, and a small normalised cue list.

RULES:
- Word timings for the greeting match the documented example exactly:
  Zdravo(0.0-0.5) svete(0.6-1.0) Kako(2.5-2.9) si(3.0-3.3).
- Fixtures return fresh lists so tests may mutate them freely.
"""

import json
from typing import List

import pytest

from titlovi.core.ir import Cue, TranscriptionResult, Word


GREETING_WORDS = [
    ("Zdravo", 0.0, 0.5),
    ("svete", 0.6, 1.0),
    ("Kako", 2.5, 2.9),
    ("si", 3.0, 3.3),
]

# 26 words, about 13 seconds, with a long pause after "aplikaciju."
LONG_TEXT = (
    "Dobrodošli u našu aplikaciju. Ovo je test titlova na srpskom jeziku, "
    "aplikacija automatski konvertuje latinicu u ćirilicu i možete editovati "
    "titlove pre nego što exportujete video."
)


def _timed_words(text, start=0.0, width=0.3, gap=0.15, pause_after=None, pause=1.2):
    """Spread the words of text evenly in time."""
    words = []  # type: List[Word]
    t = start
    for token in text.split():
        words.append(Word(text=token, start=round(t, 3), end=round(t + width, 3)))
        t += width + gap
        if pause_after and token == pause_after:
            t += pause
    return words


@pytest.fixture
def greeting_words():
    """The four-word greeting with a 1.5s pause in the middle."""
    return [Word(text=t, start=s, end=e) for t, s, e in GREETING_WORDS]


@pytest.fixture
def long_words():
    """A realistic 26-word transcript with one long pause."""
    return _timed_words(LONG_TEXT, pause_after="aplikaciju.")


@pytest.fixture
def long_transcription(long_words):
    return TranscriptionResult(
        words=long_words,
        language="sr",
        duration=long_words[-1].end,
    )


@pytest.fixture
def whisper_json(long_words):
    """Whisper verbose_json-style payload for the long transcript."""
    return json.dumps({
        "task": "transcribe",
        "language": "sr",
        "duration": long_words[-1].end,
        "text": LONG_TEXT,
        "words": [
            {"word": " " + w.text, "start": w.start, "end": w.end}
            for w in long_words
        ],
        "segments": [
            {"id": 0, "start": 0.0, "end": long_words[-1].end, "text": LONG_TEXT},
        ],
    })


@pytest.fixture
def sample_cues():
    """Three valid, non-overlapping cues, one with two lines."""
    return [
        Cue(index=1, start=0.0, end=2.5, text="Добродошли у нашу апликацију.",
            original_text="Dobrodošli u našu aplikaciju."),
        Cue(index=2, start=2.6, end=5.123, text="Ово је тест титлова\nна српском језику."),
        Cue(index=3, start=3725.004, end=3727.5, text="Хвала & довиђења!"),
    ]


@pytest.fixture
def long_text():
    return LONG_TEXT
