"""Tests for timing estimation."""

import pytest

from reelplan.services.timing import (
    calculate_segment_boundaries,
    distribute_frames_across_words,
    estimate_syllables,
    estimate_word_duration,
    estimate_word_frame_duration,
    frames_to_seconds,
    round_frame,
    seconds_to_frames,
)


class TestFrameConversion:
    def test_seconds_to_frames(self) -> None:
        assert seconds_to_frames(1.5, 30) == 45
        assert seconds_to_frames(10.0, 30) == 300

    def test_rounds_half_up(self) -> None:
        assert round_frame(2.5) == 3
        assert round_frame(3.5) == 4
        assert seconds_to_frames(0.05, 30) == 2

    def test_frames_to_seconds(self) -> None:
        assert frames_to_seconds(45, 30) == 1.5

    def test_estimate_word_duration(self) -> None:
        assert estimate_word_duration(140) == pytest.approx(60.0)
        assert estimate_word_duration(70, words_per_minute=70) == pytest.approx(60.0)


class TestEstimateSyllables:
    @pytest.mark.parametrize(
        "word,expected",
        [
            ("cat", 1),
            ("make", 1),
            ("table", 2),
            ("simple", 2),
            ("hello!", 2),
            ("beautiful", 3),
            ("rhythm", 1),
            ("queue", 1),
        ],
    )
    def test_counts(self, word: str, expected: int) -> None:
        assert estimate_syllables(word) == expected

    def test_minimum_one(self) -> None:
        assert estimate_syllables("") == 1
        assert estimate_syllables("$20") == 1

    def test_word_frame_duration_has_floor(self) -> None:
        assert estimate_word_frame_duration("a", 10) == 3
        # 2 syllables * 0.2s + 0.05s = 0.45s
        assert estimate_word_frame_duration("table", 100) == 45


class TestDistributeFramesAcrossWords:
    def test_empty(self) -> None:
        assert distribute_frames_across_words([], 100) == []

    def test_weighted_by_syllables(self) -> None:
        result = distribute_frames_across_words(["a", "table"], 9)
        assert result == [("a", 0, 3), ("table", 3, 9)]

    def test_last_word_absorbs_rounding(self) -> None:
        result = distribute_frames_across_words(["one", "two", "six"], 10)
        assert result == [("one", 0, 3), ("two", 3, 6), ("six", 6, 10)]

    @pytest.mark.parametrize("total", [1, 7, 29, 100, 1001])
    def test_spans_contiguous_and_exact(self, total: int) -> None:
        words = "the remarkable table is wonderfully simple to assemble".split()
        result = distribute_frames_across_words(words, total)

        assert result[0][1] == 0
        assert result[-1][2] == total
        for (_, _, prev_end), (_, next_start, _) in zip(result, result[1:]):
            assert prev_end == next_start

    def test_rounding_never_overshoots_total(self) -> None:
        result = distribute_frames_across_words(["a", "b", "c", "d"], 2)

        assert result == [("a", 0, 1), ("b", 1, 2), ("c", 2, 2), ("d", 2, 2)]
        assert all(end >= start for _, start, end in result)


class TestSegmentBoundaries:
    def test_last_segment_absorbs_rounding(self) -> None:
        assert calculate_segment_boundaries([1, 1, 1], 10) == [(0, 3, 3), (3, 6, 3), (6, 10, 4)]

    def test_sum_matches_total(self) -> None:
        boundaries = calculate_segment_boundaries([7, 3, 11, 5, 2], 997)
        assert sum(d for _, _, d in boundaries) == 997
        assert boundaries[-1][1] == 997

    def test_rounding_never_overshoots_total(self) -> None:
        boundaries = calculate_segment_boundaries([1, 1, 1, 1], 2)

        assert boundaries == [(0, 1, 1), (1, 2, 1), (2, 2, 0), (2, 2, 0)]
        assert all(d >= 0 for _, _, d in boundaries)
