"""Tests for data models and configuration."""

import pytest
from pydantic import ValidationError

from reelplan.config import Settings
from reelplan.models import (
    AvatarClip,
    LayoutType,
    ProcessedAvatar,
    SfxConfig,
    SilenceRange,
    SilenceRegion,
    StageResult,
    StageStatus,
    TextOverlay,
)


class TestAvatarModels:
    def test_silence_region_rejects_inverted_range(self) -> None:
        with pytest.raises(ValidationError):
            SilenceRegion(start_frame=90, end_frame=60, duration_frames=0)

    def test_silence_range_duration(self) -> None:
        assert SilenceRange(start_seconds=2.0, end_seconds=3.5).duration_seconds == 1.5

    def test_clip_overlap(self) -> None:
        clip = AvatarClip(src="a.mp4", start_frame=0, end_frame=210, original_start_frame=90, original_end_frame=300)

        assert clip.duration_frames == 210
        assert clip.contains_original(100, 200)
        assert not clip.contains_original(0, 100)
        assert clip.original_overlap(0, 100) == 10
        assert clip.original_overlap(0, 50) == 0

    def test_processed_avatar_removed_frames(self) -> None:
        processed = ProcessedAvatar(original_duration_frames=300, processed_duration_frames=270)
        assert processed.removed_frames == 30


class TestLayoutModels:
    def test_needs_helper(self) -> None:
        assert not LayoutType.A.needs_helper
        assert LayoutType.B.needs_helper
        assert LayoutType.C.needs_helper

    def test_overlay_window_must_not_be_inverted(self) -> None:
        with pytest.raises(ValidationError):
            TextOverlay(primary="HI", start_frame=50, end_frame=10)

    def test_sfx_slots(self) -> None:
        sfx = SfxConfig(click="click.wav")
        assert sfx.get("click") == "click.wav"
        assert sfx.get("impact") is None


class TestStageResult:
    def test_factories(self) -> None:
        assert StageResult.success("ok", warnings=["w"]).warnings == ["w"]
        assert StageResult.failure("bad").status == StageStatus.FAILED


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.fps == 30
        assert settings.min_relevance_score == 0.15

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("REELPLAN_FPS", "25")
        monkeypatch.setenv("REELPLAN_RANDOM_SEED", "11")
        settings = Settings()

        assert settings.fps == 25
        assert settings.random_seed == 11
        assert settings.project_config().fps == 25
