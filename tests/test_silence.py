"""Tests for silence-based avatar trimming."""

import pytest

from reelplan.errors import SilenceParseError
from reelplan.models.avatar import AvatarClip, SilenceInput, SilenceRange
from reelplan.services.silence import (
    get_silence_stats,
    merge_close_clips,
    merge_processed_avatar,
    parse_ffmpeg_silence_output,
    process_avatar_with_silences,
    process_avatar_without_trimming,
)


def _make_silence_input(*ranges: tuple[float, float], total: float = 10.0) -> SilenceInput:
    return SilenceInput(
        silences=[SilenceRange(start_seconds=s, end_seconds=e) for s, e in ranges],
        total_duration_seconds=total,
    )


def _make_clip(output: tuple[int, int], original: tuple[int, int]) -> AvatarClip:
    return AvatarClip(
        src="avatar.mp4",
        start_frame=output[0],
        end_frame=output[1],
        original_start_frame=original[0],
        original_end_frame=original[1],
    )


class TestProcessAvatarWithSilences:
    def test_single_silence(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4", _make_silence_input((2.0, 3.0)), fps=30
        )

        assert processed.original_duration_frames == 300
        assert processed.processed_duration_frames == 270
        assert [(c.start_frame, c.end_frame) for c in processed.clips] == [(0, 60), (60, 270)]
        assert [(c.original_start_frame, c.original_end_frame) for c in processed.clips] == [
            (0, 60),
            (90, 300),
        ]
        region = processed.silence_regions[0]
        assert (region.start_frame, region.end_frame, region.duration_frames) == (60, 90, 30)
        assert processed.removed_frames == 30
        assert processed.is_trimmed

    def test_short_silences_ignored(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4", _make_silence_input((2.0, 2.3)), fps=30
        )

        assert processed.silence_regions == []
        assert len(processed.clips) == 1
        assert processed.processed_duration_frames == 300

    def test_short_speech_spans_dropped(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4", _make_silence_input((1.0, 2.0), (2.5, 4.0)), fps=30
        )

        assert [(c.original_start_frame, c.original_end_frame) for c in processed.clips] == [
            (0, 30),
            (120, 300),
        ]
        assert [(c.start_frame, c.end_frame) for c in processed.clips] == [(0, 30), (30, 210)]
        assert processed.processed_duration_frames == 210

    def test_clips_are_contiguous(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4",
            _make_silence_input((0.0, 0.8), (3.1, 4.0), (6.0, 6.7), (9.5, 10.0)),
            fps=30,
        )

        assert processed.clips[0].start_frame == 0
        for prev, nxt in zip(processed.clips, processed.clips[1:]):
            assert prev.end_frame == nxt.start_frame
            assert prev.original_end_frame <= nxt.original_start_frame
        assert processed.clips[-1].end_frame == processed.processed_duration_frames

    def test_silence_past_the_end_is_clamped(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4", _make_silence_input((12.0, 13.0)), fps=30
        )

        assert [(c.original_start_frame, c.original_end_frame) for c in processed.clips] == [(0, 300)]
        assert processed.processed_duration_frames == 300

    def test_silence_running_past_the_end(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4", _make_silence_input((9.0, 12.0)), fps=30
        )

        assert [(c.original_start_frame, c.original_end_frame) for c in processed.clips] == [(0, 270)]
        assert processed.processed_duration_frames == 270


class TestWithoutTrimming:
    def test_single_full_clip(self) -> None:
        processed = process_avatar_without_trimming("avatar.mp4", 450)

        assert len(processed.clips) == 1
        clip = processed.clips[0]
        assert (clip.start_frame, clip.end_frame) == (0, 450)
        assert (clip.original_start_frame, clip.original_end_frame) == (0, 450)
        assert not processed.is_trimmed


class TestMergeCloseClips:
    def test_merges_small_gaps(self) -> None:
        clips = [
            _make_clip((0, 30), (0, 30)),
            _make_clip((30, 58), (32, 60)),
            _make_clip((58, 108), (100, 150)),
        ]
        merged = merge_close_clips(clips, max_gap_frames=3)

        assert [(c.original_start_frame, c.original_end_frame) for c in merged] == [
            (0, 60),
            (100, 150),
        ]
        assert [(c.start_frame, c.end_frame) for c in merged] == [(0, 60), (60, 110)]

    def test_single_clip_untouched(self) -> None:
        clip = _make_clip((0, 30), (0, 30))
        assert merge_close_clips([clip]) == [clip]

    def test_merge_processed_avatar_updates_duration(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4", _make_silence_input((2.0, 3.0)), fps=30
        )
        merged = merge_processed_avatar(processed, max_gap_frames=30)

        assert len(merged.clips) == 1
        assert merged.processed_duration_frames == 300


class TestParseFfmpegOutput:
    def test_parses_pairs_and_closes_trailing_start(self) -> None:
        log = (
            "[silencedetect @ 0x1] silence_start: 1.5\n"
            "[silencedetect @ 0x1] silence_end: 2.5 | silence_duration: 1.0\n"
            "[silencedetect @ 0x1] silence_start: 8.0\n"
        )
        result = parse_ffmpeg_silence_output(log, 10.0)

        assert [(s.start_seconds, s.end_seconds) for s in result.silences] == [
            (1.5, 2.5),
            (8.0, 10.0),
        ]
        assert result.total_duration_seconds == 10.0

    def test_no_silences(self) -> None:
        assert parse_ffmpeg_silence_output("nothing here", 5.0).silences == []

    def test_unbalanced_log_raises(self) -> None:
        with pytest.raises(SilenceParseError):
            parse_ffmpeg_silence_output("silence_end: 2.0 | silence_duration: 1.0", 10.0)


class TestSilenceStats:
    def test_stats(self) -> None:
        processed = process_avatar_with_silences(
            "avatar.mp4", _make_silence_input((2.0, 3.0)), fps=30
        )

        assert get_silence_stats(processed, fps=30) == {
            "original_duration": "10.00s",
            "processed_duration": "9.00s",
            "removed_duration": "1.00s",
            "silence_count": 1,
            "compression_ratio": "90.0%",
        }
