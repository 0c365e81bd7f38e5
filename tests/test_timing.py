"""Unit tests for cue timing normalisation.

WHY: normalize_timing() is the last step before export. Whatever layout
or hand edits produced, its output must have positive durations and no
overlaps, or players stack cues on top of each other.

HOW: The documented examples first, then a seeded random sweep that
checks the invariants on arbitrary (sorted) input.
"""

import random

import pytest

from titlovi.core.ir import Cue
from titlovi.core.timing import normalize_timing


def _cue(start, end, index=1, text="tekst"):
    return Cue(index=index, start=start, end=end, text=text)


def _assert_invariants(cues):
    for i, cue in enumerate(cues):
        assert cue.index == i + 1
        assert cue.end > cue.start
        assert cue.start >= 0
        assert cue.end - cue.start <= 5.0 + 1e-9
    for a, b in zip(cues, cues[1:]):
        assert a.end + 0.1 <= b.start + 1e-6


class TestNormalizeTiming:
    def test_short_cue_extended(self):
        assert normalize_timing([_cue(5.0, 5.2)])[0].end == 6.0

    def test_long_cue_capped(self):
        assert normalize_timing([_cue(0.0, 10.0)])[0].end == 5.0

    def test_overlap_clipped(self):
        cues = normalize_timing([_cue(0.0, 3.0, 1), _cue(2.0, 4.0, 2)])
        assert [(c.start, c.end) for c in cues] == [(0.0, 1.9), (2.0, 4.0)]

    def test_absolute_floor_pushes_next_cue(self):
        cues = normalize_timing([_cue(0.0, 1.0, 1), _cue(0.2, 1.5, 2)])
        assert [(c.start, c.end) for c in cues] == [(0.0, 0.5), (0.6, 1.5)]

    def test_negative_start(self):
        cue = normalize_timing([_cue(-1.0, 2.0)])[0]
        assert (cue.start, cue.end) == (0.0, 2.0)

    def test_duration_measured_from_original_start(self):
        cue = normalize_timing([_cue(-0.5, 0.2)])[0]
        assert (cue.start, cue.end) == (0.0, 0.5)

    def test_carried_start_keeps_clamped_end(self):
        cues = normalize_timing([_cue(0.0, 0.3, 1), _cue(0.35, 3.0, 2)])
        assert [(c.start, c.end) for c in cues] == [(0.0, 0.5), (0.6, 3.0)]

    def test_valid_cues_unchanged(self, sample_cues):
        cues = normalize_timing(sample_cues)
        assert [(c.start, c.end) for c in cues] == [(c.start, c.end) for c in sample_cues]

    def test_renumbers_and_does_not_mutate(self):
        source = [_cue(0.0, 3.0, 5), _cue(2.0, 4.0, 9)]
        cues = normalize_timing(source)
        assert [c.index for c in cues] == [1, 2]
        assert source[0].end == 3.0 and source[0].index == 5

    def test_keeps_text_and_original(self, sample_cues):
        cues = normalize_timing(sample_cues)
        assert cues[0].original_text == "Dobrodošli u našu aplikaciju."
        assert cues[1].text == sample_cues[1].text

    def test_rounds_to_milliseconds(self):
        cue = normalize_timing([_cue(0.1234, 2.9877)])[0]
        assert (cue.start, cue.end) == (0.123, 2.988)

    def test_empty(self):
        assert normalize_timing([]) == []

    @pytest.mark.parametrize("seed", range(5))
    def test_random_invariants(self, seed):
        rng = random.Random(42 + seed)
        starts = sorted(rng.uniform(0, 60) for _ in range(40))
        source = [
            _cue(s, s + rng.uniform(-0.5, 8.0), i + 1)
            for i, s in enumerate(starts)
        ]
        _assert_invariants(normalize_timing(source))
