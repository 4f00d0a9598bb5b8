"""Avatar clip stage: silence trimming and script re-alignment."""

from reelplan.models.pipeline import StageResult
from reelplan.pipeline.base import PipelineStage, ProgressCallback
from reelplan.pipeline.context import PipelineContext
from reelplan.services.script_parser import realign_segment_timings
from reelplan.services.silence import (
    get_silence_stats,
    merge_processed_avatar,
    process_avatar_with_silences,
    process_avatar_without_trimming,
)


class AvatarStage(PipelineStage):
    """Turns external silence ranges into avatar clips.

    Without silence data the avatar passes through as one clip. When the
    silence data reports a different source length than the one the script
    was timed against, the script is re-aligned to the measured length.
    """

    @property
    def name(self) -> str:
        return "avatar"

    @property
    def display_name(self) -> str:
        return "Processing avatar"

    def validate(self, context: PipelineContext) -> bool:
        return context.parsed_script is not None

    def execute(
        self,
        context: PipelineContext,
        progress_callback: ProgressCallback | None = None,
    ) -> StageResult:
        run_input = context.input
        parsed = context.parsed_script
        project_settings = run_input.config.settings

        if run_input.silence is None:
            processed = process_avatar_without_trimming(run_input.avatar_src, parsed.total_frames)
        else:
            processed = process_avatar_with_silences(
                run_input.avatar_src,
                run_input.silence,
                fps=context.fps,
                silence_threshold_seconds=project_settings.silence_threshold,
                min_clip_duration_seconds=project_settings.min_clip_duration,
            )
            processed = merge_processed_avatar(processed, context.settings.merge_gap_frames)

            if processed.original_duration_frames != parsed.total_frames:
                self._report_progress(progress_callback, 0.5, "Re-aligning script")
                context.parsed_script = realign_segment_timings(parsed, processed.original_duration_frames)

        context.processed_avatar = processed
        warnings = []
        if not processed.clips:
            warnings.append("Silence removal left no avatar clips")

        self._report_progress(progress_callback, 1.0, "Avatar processed")
        return StageResult.success(
            message=f"{len(processed.clips)} clip(s)",
            data={"clip_count": len(processed.clips), **get_silence_stats(processed, context.fps)},
            warnings=warnings,
        )
