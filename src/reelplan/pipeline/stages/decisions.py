"""Editorial decisions stage - replaces matching and layout planning."""

from reelplan.models.pipeline import StageResult
from reelplan.pipeline.base import PipelineStage, ProgressCallback
from reelplan.pipeline.context import PipelineContext
from reelplan.services.decisions import decisions_to_layout_decisions, validate_decisions


class DecisionsStage(PipelineStage):
    """Applies a precomputed editorial decisions record."""

    @property
    def name(self) -> str:
        return "decisions"

    @property
    def display_name(self) -> str:
        return "Applying editorial decisions"

    def validate(self, context: PipelineContext) -> bool:
        return context.parsed_script is not None and context.decisions_record is not None

    def execute(
        self,
        context: PipelineContext,
        progress_callback: ProgressCallback | None = None,
    ) -> StageResult:
        record = context.decisions_record
        segments = context.parsed_script.segments

        coverage = validate_decisions(record, [s.id for s in segments])
        decisions, warnings = decisions_to_layout_decisions(
            record,
            segments,
            context.input.sfx_paths,
            fallback_transition_frames=context.settings.transition_duration_frames,
        )
        if coverage.extra:
            warnings.append(f"Decisions for unknown segments: {', '.join(coverage.extra)}")

        context.layout_decisions = decisions
        self._report_progress(progress_callback, 1.0, "Decisions applied")
        return StageResult.success(
            message=f"{len(record.segments)} decisions for '{record.video_id}'",
            data={"missing": coverage.missing, "extra": coverage.extra},
            warnings=warnings,
        )
