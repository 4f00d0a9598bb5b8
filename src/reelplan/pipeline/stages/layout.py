"""Layout planning stage."""

from reelplan.models.pipeline import StageResult
from reelplan.pipeline.base import PipelineStage, ProgressCallback
from reelplan.pipeline.context import PipelineContext
from reelplan.services.layout_planner import LayoutPlannerOptions, plan_layouts, validate_layout_plan


class LayoutStage(PipelineStage):
    """Chooses layout, transition and text overlay for every segment."""

    @property
    def name(self) -> str:
        return "layout"

    @property
    def display_name(self) -> str:
        return "Planning layouts"

    def validate(self, context: PipelineContext) -> bool:
        return context.parsed_script is not None and context.match_result is not None

    def execute(
        self,
        context: PipelineContext,
        progress_callback: ProgressCallback | None = None,
    ) -> StageResult:
        settings = context.settings
        options = LayoutPlannerOptions(
            transition_duration_frames=settings.transition_duration_frames,
            transition_sfx_probability=context.input.config.settings.transition_sfx_probability,
            sfx_volume=settings.sfx_volume,
            sfx_sources=context.input.sfx_paths,
        )
        segments = context.parsed_script.segments

        decisions = plan_layouts(segments, context.match_result.matches, context.rng, options)
        validation = validate_layout_plan(decisions, segments)
        if not validation.valid:
            return StageResult.failure("; ".join(validation.errors))

        context.layout_decisions = decisions
        self._report_progress(progress_callback, 1.0, "Layouts planned")
        return StageResult.success(
            message=f"{len(decisions)} layout decisions",
            data={
                "decisions": [
                    {
                        "segment_id": d.segment_id,
                        "layout": d.layout.value,
                        "transition": d.transition.type.value,
                        "reasoning": d.reasoning,
                    }
                    for d in decisions
                ]
            },
        )
