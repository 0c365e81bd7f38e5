"""Unit tests for grouping word timestamps into segments.

WHY: Segment boundaries decide where one subtitle ends and the next
begins. Merging across a long pause shows text before it is spoken;
never closing on punctuation gives run-on cues.

HOW: One test per closing rule (word count, duration cap, pause,
punctuation), plus the minimum-duration extension and the handling of
malformed input.
"""

import pytest

from titlovi.core.ir import RawSegment, Word
from titlovi.core.segmenter import (
    extend_short_segments,
    group_words,
    segment_words,
    segments_from_coarse,
)


def _words(count, width=0.1, gap=0.05, text="rec"):
    step = width + gap
    return [
        Word(text="{}{}".format(text, i), start=round(i * step, 3), end=round(i * step + width, 3))
        for i in range(count)
    ]


class TestGroupWords:
    def test_pause_closes_segment(self, greeting_words):
        segments = group_words(greeting_words)
        assert segments == [
            RawSegment(0.0, 1.0, "Zdravo svete"),
            RawSegment(2.5, 3.3, "Kako si"),
        ]

    def test_word_count_cap(self):
        segments = group_words(_words(10))
        assert [len(s.text.split()) for s in segments] == [8, 2]

    def test_duration_cap(self):
        segments = group_words(_words(10, width=0.9))
        assert len(segments[0].text.split()) == 4
        assert all(s.duration <= 4.0 for s in segments)

    @pytest.mark.parametrize("mark", [".", ",", ";", ":", "!", "?"])
    def test_punctuation_closes_segment(self, mark):
        words = [Word("Dobro" + mark, 0.0, 0.4), Word("hvala", 0.5, 0.9)]
        assert [s.text for s in group_words(words)] == ["Dobro" + mark, "hvala"]

    def test_overlong_word_forms_own_segment(self):
        words = [Word("dugooo", 0.0, 6.0), Word("kraj", 6.1, 6.3)]
        segments = group_words(words)
        assert segments == [RawSegment(0.0, 6.0, "dugooo"), RawSegment(6.1, 6.3, "kraj")]

    def test_empty_input(self):
        assert group_words([]) == []
        assert segment_words([]) == []

    def test_blank_words_are_skipped(self):
        words = [Word(" ", 0.0, 0.2), Word("da", 0.3, 0.5)]
        assert group_words(words) == [RawSegment(0.3, 0.5, "da")]

    def test_malformed_word_is_zero_width(self):
        segments = group_words([Word("x", 2.0, 1.5)])
        assert segments == [RawSegment(2.0, 2.0, "x")]

    def test_negative_start_is_clamped(self):
        segments = group_words([Word("y", -0.5, 0.3)])
        assert segments[0].start == 0.0

    def test_realistic_transcript(self, long_words):
        segments = group_words(long_words)
        assert segments[0].text == "Dobrodošli u našu aplikaciju."
        assert " ".join(s.text for s in segments) == " ".join(w.text for w in long_words)
        for seg in segments:
            assert len(seg.text.split()) <= 8
            assert seg.duration <= 4.0


class TestExtendShortSegments:
    def test_greeting_example(self, greeting_words):
        segments = segment_words(greeting_words)
        assert [(s.start, s.end) for s in segments] == [(0.0, 1.0), (2.5, 3.5)]

    def test_clipped_by_next_segment(self):
        segments = extend_short_segments([
            RawSegment(0.0, 0.3, "a"),
            RawSegment(0.6, 2.0, "b"),
        ])
        assert segments[0].end == pytest.approx(0.5)
        assert segments[1].end == 2.0

    def test_never_shortens(self):
        segments = extend_short_segments([
            RawSegment(0.0, 0.3, "a"),
            RawSegment(0.35, 2.0, "b"),
        ])
        assert segments[0].end == 0.3

    def test_input_untouched(self):
        original = [RawSegment(0.0, 0.3, "a")]
        extend_short_segments(original)
        assert original[0].end == 0.3


class TestCoarseSegments:
    def test_passthrough(self):
        segments = segments_from_coarse([
            RawSegment(-1.0, 2.0, " Dobar dan "),
            RawSegment(3.0, 2.0, "kraj"),
            RawSegment(4.0, 5.0, "   "),
        ])
        assert segments == [
            RawSegment(0.0, 2.0, "Dobar dan"),
            RawSegment(3.0, 3.0, "kraj"),
        ]
