"""Timeline building stage."""

from reelplan.models.pipeline import StageResult
from reelplan.pipeline.base import PipelineStage, ProgressCallback
from reelplan.pipeline.context import PipelineContext
from reelplan.services.timeline_builder import build_timeline, get_timeline_stats, validate_timeline


class TimelineStage(PipelineStage):
    """Builds, validates and summarizes the output timeline.

    Validation runs on the finished timeline rather than trusting earlier
    stages. Structural errors do not fail the stage; they are returned on
    the context for the caller to act on.
    """

    @property
    def name(self) -> str:
        return "timeline"

    @property
    def display_name(self) -> str:
        return "Building timeline"

    def validate(self, context: PipelineContext) -> bool:
        return (
            context.parsed_script is not None
            and context.processed_avatar is not None
            and context.layout_decisions is not None
        )

    def execute(
        self,
        context: PipelineContext,
        progress_callback: ProgressCallback | None = None,
    ) -> StageResult:
        built = build_timeline(
            context.parsed_script,
            context.processed_avatar,
            context.layout_decisions,
            context.input.config,
        )
        self._report_progress(progress_callback, 0.6, "Validating timeline")

        validation = validate_timeline(built.timeline)
        stats = get_timeline_stats(built.timeline, context.fps)

        context.timeline = built.timeline
        context.validation = validation
        context.stats = stats

        self._report_progress(progress_callback, 1.0, "Timeline built")
        return StageResult.success(
            message=f"{stats.item_count} items, {stats.total_duration}",
            data={**stats.model_dump(), "errors": validation.errors},
            warnings=built.warnings + validation.warnings,
        )
