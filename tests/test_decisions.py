"""Tests for loading and applying editorial decisions."""

import json
import logging

import pytest

from reelplan.errors import DecisionLoadError
from reelplan.models.assets import AssetType
from reelplan.models.decisions import EditorialDecision, EditorialDecisions
from reelplan.models.layout import LayoutType, TransitionType
from reelplan.models.project import SfxConfig
from reelplan.models.script import ScriptSegment
from reelplan.services.decisions import (
    create_helper_asset_from_decision,
    decisions_to_layout_decisions,
    load_editorial_decisions,
    validate_decisions,
)

SFX = SfxConfig(swoosh="sfx/swoosh.wav", click="sfx/click.wav")


def _make_segments(count: int) -> list[ScriptSegment]:
    return [
        ScriptSegment(
            id=f"segment-{n}",
            text="Plain words here",
            start_frame=(n - 1) * 90,
            end_frame=n * 90,
            duration_frames=90,
        )
        for n in range(1, count + 1)
    ]


def _make_record() -> EditorialDecisions:
    return EditorialDecisions(
        video_id="demo",
        segments=[
            EditorialDecision(id="segment-1", layout=LayoutType.C, asset="media/widget-shot.png",
                              transition=TransitionType.ZOOM, transition_duration=10,
                              reasoning="Product reveal"),
            EditorialDecision(id="segment-2", layout=LayoutType.A, transition=TransitionType.CUT),
        ],
    )


class TestLoadEditorialDecisions:
    def test_load_camel_case_file(self, tmp_path) -> None:
        path = tmp_path / "decisions.json"
        path.write_text(json.dumps({
            "videoId": "demo",
            "segments": [
                {"id": "segment-1", "layout": "B", "asset": "clip.mp4",
                 "transition": "slide-left", "transitionDuration": 12, "reasoning": "Demo"},
            ],
        }))

        record = load_editorial_decisions(path)

        assert record.video_id == "demo"
        decision = record.get("segment-1")
        assert decision.layout == LayoutType.B
        assert decision.transition == TransitionType.SLIDE_LEFT
        assert decision.transition_duration == 12
        assert record.get("segment-2") is None

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(DecisionLoadError, match="not found"):
            load_editorial_decisions(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "decisions.json"
        path.write_text("{not json")

        with pytest.raises(DecisionLoadError, match="Invalid JSON"):
            load_editorial_decisions(path)

    def test_invalid_record(self, tmp_path) -> None:
        path = tmp_path / "decisions.json"
        path.write_text(json.dumps({"segments": [{"id": "segment-1", "layout": "Z"}]}))

        with pytest.raises(DecisionLoadError, match="Invalid decisions record"):
            load_editorial_decisions(path)


class TestValidateDecisions:
    def test_missing_and_extra(self) -> None:
        record = _make_record()
        coverage = validate_decisions(record, ["segment-2", "segment-3"])

        assert not coverage.valid
        assert coverage.missing == ["segment-3"]
        assert coverage.extra == ["segment-1"]

    def test_full_coverage(self) -> None:
        assert validate_decisions(_make_record(), ["segment-1", "segment-2"]).valid


class TestHelperAssetFromDecision:
    def test_typed_by_extension(self) -> None:
        image = create_helper_asset_from_decision(
            EditorialDecision(id="segment-1", layout=LayoutType.B, asset="shots/Widget.JPG")
        )
        video = create_helper_asset_from_decision(
            EditorialDecision(id="segment-1", layout=LayoutType.B, asset="shots/widget.mov")
        )

        assert image.type == AssetType.IMAGE
        assert video.type == AssetType.VIDEO

    def test_no_asset(self) -> None:
        assert create_helper_asset_from_decision(EditorialDecision(id="segment-1", layout=LayoutType.A)) is None


class TestDecisionsToLayoutDecisions:
    def test_applies_record(self) -> None:
        decisions, warnings = decisions_to_layout_decisions(_make_record(), _make_segments(2), SFX)

        assert warnings == []
        first, second = decisions
        assert first.layout == LayoutType.C
        assert first.helper_asset.src == "media/widget-shot.png"
        assert first.transition.type == TransitionType.ZOOM
        assert first.transition.duration_frames == 10
        assert first.transition.sfx == "sfx/swoosh.wav"
        assert first.transition.sfx_volume == 0.3
        assert first.reasoning == "Product reveal"
        assert second.transition.sfx is None

    def test_missing_decision_falls_back(self) -> None:
        decisions, warnings = decisions_to_layout_decisions(_make_record(), _make_segments(3), SFX)

        fallback = decisions[2]
        assert fallback.segment_id == "segment-3"
        assert fallback.layout == LayoutType.A
        assert fallback.transition.type == TransitionType.FADE
        assert fallback.transition.duration_frames == 8
        assert fallback.helper_asset is None
        assert warnings == ["No editorial decision for segment-3; using layout A with fade"]

    def test_missing_decision_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="reelplan.services.decisions"):
            decisions_to_layout_decisions(_make_record(), _make_segments(3), SFX)

        records = [r for r in caplog.records if r.name == "reelplan.services.decisions"]
        assert [r.levelno for r in records] == [logging.WARNING]
        assert "segment-3" in records[0].getMessage()
