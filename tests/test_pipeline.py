"""End-to-end tests for the pipeline runner and executor."""

import logging
import random

import pytest

from reelplan.config import Settings
from reelplan.errors import PipelineError, ScriptParseError, TimelineValidationError
from reelplan.models.avatar import SilenceInput, SilenceRange
from reelplan.models.decisions import EditorialDecision, EditorialDecisions
from reelplan.models.layout import LayoutType, TransitionType
from reelplan.models.pipeline import PipelineEvent, StageResult, StageStatus
from reelplan.models.project import PipelineInput
from reelplan.pipeline.base import PipelineStage
from reelplan.pipeline.context import PipelineContext
from reelplan.pipeline.executor import PipelineExecutor
from reelplan.pipeline.runner import PLANNED_STAGES, create_executor, run_pipeline, run_pipeline_with_decisions

WIDGET_SCRIPT = "Introducing Widget X. It costs $20. Buy it now."


def _make_settings(**overrides) -> Settings:
    values = {"min_segment_words": 3, "max_segment_words": 3}
    values.update(overrides)
    return Settings(**values)


def _make_input(**overrides) -> PipelineInput:
    values = {
        "script_text": WIDGET_SCRIPT,
        "avatar_src": "avatar.mp4",
        "avatar_duration_seconds": 9.0,
    }
    values.update(overrides)
    return PipelineInput(**values)


class _BoomStage(PipelineStage):
    @property
    def name(self) -> str:
        return "boom"

    @property
    def display_name(self) -> str:
        return "Exploding"

    def execute(self, context, progress_callback=None) -> StageResult:
        raise RuntimeError("boom")


class TestRunPipeline:
    def test_without_assets_everything_is_full_avatar(self) -> None:
        result = run_pipeline(_make_input(), rng=random.Random(1), settings=_make_settings())

        assert [i.layout for i in result.timeline.items] == [LayoutType.A] * 3
        assert result.timeline.total_duration_frames == 270
        assert result.validation.valid
        assert result.timeline.items[0].transition.type == TransitionType.NONE
        overlay = result.timeline.items[0].text_overlay
        assert overlay is not None
        assert "WIDGET" in overlay.primary

    def test_matched_high_importance_segment_gets_full_helper(self) -> None:
        run_input = _make_input(helper_video_paths=["assets/widget-x-demo.mp4"])
        result = run_pipeline(run_input, rng=random.Random(1), settings=_make_settings())

        first = result.timeline.items[0]
        assert first.layout == LayoutType.C
        assert first.helper_asset.src == "assets/widget-x-demo.mp4"
        assert first.text_overlay is None
        assert [i.layout for i in result.timeline.items[1:]] == [LayoutType.A, LayoutType.A]
        assert result.match_result.unmatched_segments == ["segment-2", "segment-3"]

    def test_seeded_runs_are_identical(self) -> None:
        run_input = _make_input(helper_video_paths=["assets/widget-x-demo.mp4"])
        first = run_pipeline(run_input, rng=random.Random(99), settings=_make_settings())
        second = run_pipeline(run_input, rng=random.Random(99), settings=_make_settings())

        assert first.timeline.to_json() == second.timeline.to_json()

    def test_seed_from_settings(self) -> None:
        settings = _make_settings(random_seed=5)
        first = run_pipeline(_make_input(), settings=settings)
        second = run_pipeline(_make_input(), settings=settings)

        assert first.timeline.to_json() == second.timeline.to_json()

    def test_silence_trimming(self) -> None:
        silence = SilenceInput(
            silences=[SilenceRange(start_seconds=2.0, end_seconds=3.0)],
            total_duration_seconds=10.0,
        )
        run_input = _make_input(avatar_duration_seconds=10.0, silence=silence)
        result = run_pipeline(run_input, rng=random.Random(1), settings=_make_settings())

        assert len(result.processed_avatar.clips) == 2
        assert [i.duration_frames for i in result.timeline.items] == [60, 100, 100]
        assert result.timeline.total_duration_frames == 260
        assert result.validation.valid
        assert "[timeline] segment-1 spans a trim cut; kept 60 of 100 source frames, 40 dropped" in result.warnings

    def test_empty_script_raises(self) -> None:
        with pytest.raises(PipelineError) as exc_info:
            run_pipeline(_make_input(script_text="   "), rng=random.Random(1), settings=_make_settings())

        assert isinstance(exc_info.value.__cause__, ScriptParseError)

    def test_events_emitted(self) -> None:
        events: list[PipelineEvent] = []
        run_pipeline(_make_input(), rng=random.Random(1), on_event=events.append, settings=_make_settings())

        completed = [e.stage for e in events if e.status == StageStatus.COMPLETED]
        assert completed == PLANNED_STAGES
        assert events[0].stage == "script"
        assert events[-1].progress == 1.0

    def test_raise_for_errors(self) -> None:
        result = run_pipeline(_make_input(avatar_src=""), rng=random.Random(1), settings=_make_settings())

        assert not result.validation.valid
        with pytest.raises(TimelineValidationError) as exc_info:
            result.raise_for_errors()
        assert "Item item-1 has no avatar source" in exc_info.value.errors


class TestRunPipelineWithDecisions:
    def test_applies_decisions_and_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        record = EditorialDecisions(
            video_id="widget",
            segments=[
                EditorialDecision(id="segment-1", layout=LayoutType.C, asset="shots/widget.png",
                                  transition=TransitionType.ZOOM, transition_duration=10),
                EditorialDecision(id="segment-7", layout=LayoutType.A),
            ],
        )
        with caplog.at_level(logging.WARNING, logger="reelplan.services.decisions"):
            result = run_pipeline_with_decisions(
                _make_input(), record, rng=random.Random(1), settings=_make_settings()
            )

        items = result.timeline.items
        assert items[0].layout == LayoutType.C
        assert items[0].helper_asset.src == "shots/widget.png"
        assert [i.transition.type for i in items[1:]] == [TransitionType.FADE, TransitionType.FADE]
        assert result.match_result is None
        assert "[decisions] No editorial decision for segment-2; using layout A with fade" in result.warnings
        assert "[decisions] Decisions for unknown segments: segment-7" in result.warnings
        logged = [
            r.getMessage()
            for r in caplog.records
            if r.name == "reelplan.services.decisions" and r.levelno == logging.WARNING
        ]
        assert any("segment-2" in m for m in logged)
        assert any("segment-3" in m for m in logged)


class TestPipelineExecutor:
    def test_registered_stages(self) -> None:
        executor = create_executor()
        names = [name for name, _ in executor.list_stages()]

        assert names == ["script", "avatar", "matching", "layout", "decisions", "timeline"]
        assert executor.get_stage("matching") is not None
        assert executor.get_stage("render") is None

    def test_unknown_stage_fails(self) -> None:
        context = PipelineContext(input=_make_input(), settings=_make_settings(), rng=random.Random(1))
        results = PipelineExecutor().execute(context, ["render"])

        assert results["render"].status == StageStatus.FAILED

    def test_prerequisites_checked(self) -> None:
        context = PipelineContext(input=_make_input(), settings=_make_settings(), rng=random.Random(1))
        results = create_executor().execute(context, ["timeline"])

        assert results["timeline"].status == StageStatus.FAILED
        assert "Prerequisites" in results["timeline"].message

    def test_stage_exception_recorded(self) -> None:
        executor = PipelineExecutor()
        executor.register_stage(_BoomStage())
        events: list[PipelineEvent] = []
        context = PipelineContext(input=_make_input(), settings=_make_settings(), rng=random.Random(1))

        results = executor.execute(context, ["boom"], events.append)

        assert results["boom"].status == StageStatus.FAILED
        assert isinstance(executor.error_for("boom"), RuntimeError)
        assert events[-1].status == StageStatus.FAILED

    def test_warnings_prefixed_with_stage(self) -> None:
        context = PipelineContext(input=_make_input(), settings=_make_settings(), rng=random.Random(1))
        context.add_warnings("avatar", ["no clips"])

        assert context.warnings == ["[avatar] no clips"]
