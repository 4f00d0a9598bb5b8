"""Entry points that run the full editorial pipeline."""

import logging
import random

from pydantic import BaseModel, Field

from reelplan.config import Settings, settings as default_settings
from reelplan.errors import PipelineError, TimelineValidationError
from reelplan.models.assets import AssetMatchResult
from reelplan.models.avatar import ProcessedAvatar
from reelplan.models.decisions import EditorialDecisions
from reelplan.models.layout import LayoutDecision
from reelplan.models.pipeline import StageStatus
from reelplan.models.project import PipelineInput
from reelplan.models.script import ParsedScript
from reelplan.models.timeline import Timeline, TimelineStats, TimelineValidation
from reelplan.pipeline.context import PipelineContext
from reelplan.pipeline.executor import EventCallback, PipelineExecutor
from reelplan.pipeline.stages import (
    AvatarStage,
    DecisionsStage,
    LayoutStage,
    MatchingStage,
    ScriptStage,
    TimelineStage,
)

logger = logging.getLogger(__name__)

PLANNED_STAGES = ["script", "avatar", "matching", "layout", "timeline"]
DECISION_STAGES = ["script", "avatar", "decisions", "timeline"]


class PipelineResult(BaseModel):
    """Everything a pipeline run produced."""

    timeline: Timeline
    parsed_script: ParsedScript
    processed_avatar: ProcessedAvatar
    layout_decisions: list[LayoutDecision]
    match_result: AssetMatchResult | None = None
    validation: TimelineValidation
    stats: TimelineStats
    warnings: list[str] = Field(default_factory=list)

    def raise_for_errors(self) -> None:
        """Raise if the timeline has structural errors.

        Raises:
            TimelineValidationError: If validation reported errors
        """
        if not self.validation.valid:
            raise TimelineValidationError(self.validation.errors)


def create_executor() -> PipelineExecutor:
    """Executor with every built-in stage registered."""
    executor = PipelineExecutor()
    for stage in (
        ScriptStage(),
        AvatarStage(),
        MatchingStage(),
        LayoutStage(),
        DecisionsStage(),
        TimelineStage(),
    ):
        executor.register_stage(stage)
    return executor


def _run(
    context: PipelineContext,
    stages: list[str],
    on_event: EventCallback | None,
) -> PipelineResult:
    executor = create_executor()
    results = executor.execute(context, stages, on_event)

    for name in stages:
        result = results.get(name)
        if result is None or result.status != StageStatus.COMPLETED:
            message = result.message if result else "not executed"
            raise PipelineError(f"Stage '{name}' failed: {message}") from executor.error_for(name)

    validation = context.validation
    if not validation.valid:
        logger.error(f"Timeline validation errors: {validation.errors}")
    for warning in context.warnings:
        logger.warning(warning)

    return PipelineResult(
        timeline=context.timeline,
        parsed_script=context.parsed_script,
        processed_avatar=context.processed_avatar,
        layout_decisions=context.layout_decisions,
        match_result=context.match_result,
        validation=validation,
        stats=context.stats,
        warnings=list(context.warnings),
    )


def _make_context(
    run_input: PipelineInput,
    rng: random.Random | None,
    settings: Settings | None,
    decisions: EditorialDecisions | None = None,
) -> PipelineContext:
    settings = settings or default_settings
    if rng is None:
        rng = random.Random(settings.random_seed)
    return PipelineContext(
        input=run_input,
        settings=settings,
        rng=rng,
        decisions_record=decisions,
    )


def run_pipeline(
    run_input: PipelineInput,
    rng: random.Random | None = None,
    on_event: EventCallback | None = None,
    settings: Settings | None = None,
) -> PipelineResult:
    """Run segmentation, trimming, matching, planning and timeline building.

    Args:
        run_input: Script, avatar, helper assets, sfx and project config
        rng: Random source for transition choices; seed it for reproducible
            plans. Defaults to ``Random(settings.random_seed)``.
        on_event: Optional callback receiving PipelineEvents
        settings: Pipeline settings; defaults to the global settings

    Returns:
        PipelineResult with timeline, validation and stats

    Raises:
        PipelineError: If any stage fails (e.g. the script has no segments)
    """
    context = _make_context(run_input, rng, settings)
    logger.info(f"Running pipeline for {run_input.avatar_src} ({run_input.avatar_duration_seconds}s)")
    return _run(context, PLANNED_STAGES, on_event)


def run_pipeline_with_decisions(
    run_input: PipelineInput,
    decisions: EditorialDecisions,
    rng: random.Random | None = None,
    on_event: EventCallback | None = None,
    settings: Settings | None = None,
) -> PipelineResult:
    """Run the pipeline with precomputed editorial decisions.

    Matching and layout planning are skipped; segments without a decision
    fall back to layout A with a fade and are reported as warnings.
    """
    context = _make_context(run_input, rng, settings, decisions)
    logger.info(f"Running pipeline with {len(decisions.segments)} editorial decisions")
    return _run(context, DECISION_STAGES, on_event)
