"""Integration tests for the cue pipeline.

WHY: Each stage is tested on its own; these tests check that build_cues()
composes them in the right order and that the invariants hold on the
final list, which is what editors and the burn-in step actually see.

HOW: The documented greeting example end to end, the coarse-segment
fallback, re-layout of edited cues for another aspect ratio, and the
export helpers.
"""

import pytest

from titlovi.core.ir import Cue, LayoutConfig, RawSegment, TranscriptionResult
from titlovi.core.script import Script, ScriptMapper, latin_to_cyrillic
from titlovi.errors import InvalidLayoutError, UnknownFormatError
from titlovi.pipeline import (
    build_cues,
    burn_in_text,
    convert_script,
    convert_to_cyrillic,
    export_cues,
    layout_segments,
    optimize_cues,
    optimize_for_aspect_ratio,
)


def _assert_final(cues, max_chars, max_lines):
    assert [c.index for c in cues] == list(range(1, len(cues) + 1))
    for cue in cues:
        assert cue.end > cue.start
        assert len(cue.lines) <= max_lines
        assert all(len(line) <= max_chars for line in cue.lines)
    for a, b in zip(cues, cues[1:]):
        assert a.end + 0.1 <= b.start + 1e-6


class TestBuildCues:
    def test_greeting_example(self, greeting_words):
        cues = build_cues(TranscriptionResult(words=greeting_words), target_script="cyrillic")
        assert [(c.index, c.start, c.end, c.text) for c in cues] == [
            (1, 0.0, 1.0, "Здраво свете"),
            (2, 2.5, 3.5, "Како си"),
        ]
        assert [c.original_text for c in cues] == ["Zdravo svete", "Kako si"]

    def test_latin_target(self, greeting_words):
        cues = build_cues(TranscriptionResult(words=greeting_words), target_script="latin")
        assert [c.text for c in cues] == ["Zdravo svete", "Kako si"]

    def test_long_transcript(self, long_transcription, long_text):
        cues = build_cues(long_transcription, layout="16:9", target_script="cyrillic")
        _assert_final(cues, 42, 2)
        rejoined = " ".join(c.text.replace("\n", " ") for c in cues)
        assert rejoined == latin_to_cyrillic(long_text)

    def test_coarse_segment_fallback(self, long_text):
        transcription = TranscriptionResult(
            segments=[RawSegment(0.0, 12.0, long_text)], duration=12.0,
        )
        cues = build_cues(transcription, layout="9:16", target_script="cyrillic")
        assert len(cues) > 1
        _assert_final(cues, 40, 2)
        assert cues[0].start == 0.0

    def test_explicit_layout_config(self, long_transcription):
        cues = build_cues(long_transcription, layout=LayoutConfig(20, 1), target_script="latin")
        _assert_final(cues, 20, 1)

    def test_invalid_layout(self, greeting_words):
        with pytest.raises(InvalidLayoutError):
            build_cues(TranscriptionResult(words=greeting_words), layout="4:3")

    def test_empty_transcription(self):
        assert build_cues(TranscriptionResult()) == []

    def test_input_not_mutated(self, greeting_words):
        before = list(greeting_words)
        build_cues(TranscriptionResult(words=greeting_words))
        assert greeting_words == before


class TestLayoutSegments:
    def test_indices_run_across_segments(self):
        cues = layout_segments(
            [RawSegment(0.0, 2.0, "jedan dva tri"), RawSegment(3.0, 5.0, "četiri pet")],
            LayoutConfig(8, 1),
        )
        assert [(c.index, c.text) for c in cues] == [
            (1, "jedan"), (2, "dva tri"), (3, "četiri"), (4, "pet"),
        ]


class TestConvertScript:
    def test_keeps_earliest_original(self):
        cues = convert_script(
            [Cue(1, 0.0, 1.0, "Zdravo", original_text="zdravo!!")],
            ScriptMapper(Script.cyrillic),
        )
        assert cues[0].text == "Здраво"
        assert cues[0].original_text == "zdravo!!"

    def test_convert_to_cyrillic_skips_cyrillic(self):
        cues = convert_to_cyrillic([Cue(1, 0.0, 1.0, "Ћирилица, OK")])
        assert cues[0].text == "Ћирилица, OK"

    def test_ascii_digraphs(self):
        cues = convert_to_cyrillic([Cue(1, 0.0, 1.0, "Djordje")], ascii_digraphs=True)
        assert cues[0].text == "Ђорђе"


class TestOptimize:
    def test_relayout_for_square(self):
        cues = [Cue(1, 0.0, 6.0,
                    "Ово је једна прилично дуга реченица која се не уклапа у један ред",
                    original_text="Ovo je jedna prilično duga rečenica koja se ne uklapa u jedan red")]
        result = optimize_for_aspect_ratio(cues, "1:1")
        assert len(result) == 1
        _assert_final(result, 35, 2)
        assert result[0].original_text == cues[0].original_text

    def test_relayout_splits_when_needed(self):
        cues = [Cue(1, 0.0, 6.0, "jedan dva tri četiri pet šest sedam osam")]
        result = optimize_cues(cues, LayoutConfig(10, 1))
        assert len(result) > 1
        _assert_final(result, 10, 1)

    def test_default_layout_follows_configured_ratio(self, monkeypatch):
        monkeypatch.setattr("titlovi.pipeline.DEFAULT_ASPECT_RATIO", "1:1")
        cues = [Cue(1, 0.0, 3.0, "jedan dva tri četiri pet šest sedam osam")]
        assert optimize_cues(cues)[0].text == "jedan dva tri četiri pet šest sedam\nosam"

    def test_build_cues_default_matches_configured_ratio(self, monkeypatch, long_transcription):
        monkeypatch.setattr("titlovi.pipeline.DEFAULT_ASPECT_RATIO", "9:16")
        assert build_cues(long_transcription) == build_cues(long_transcription, layout="9:16")

    def test_sorts_by_start(self):
        cues = [Cue(1, 5.0, 7.0, "drugi"), Cue(2, 0.0, 2.0, "prvi")]
        assert [c.text for c in optimize_cues(cues)] == ["prvi", "drugi"]


class TestExport:
    def test_export_suffix(self, sample_cues):
        out = export_cues(sample_cues, "vtt", "9:16")
        assert out.suffix == "-9x16.vtt"
        assert out.content.startswith("WEBVTT\n")

    def test_export_default(self, sample_cues):
        out = export_cues(sample_cues)
        assert out.suffix == ".srt"
        assert out.media_type == "application/x-subrip"

    def test_unknown_format(self, sample_cues):
        with pytest.raises(UnknownFormatError):
            export_cues(sample_cues, "ass")

    def test_burn_in_text(self, sample_cues):
        text = burn_in_text(sample_cues)
        assert text.startswith("1\n00:00:00,000 --> 00:00:02,500\n")
        assert text == export_cues(sample_cues).content
