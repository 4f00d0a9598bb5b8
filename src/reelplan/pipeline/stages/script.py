"""Script segmentation stage."""

from reelplan.models.pipeline import StageResult
from reelplan.pipeline.base import PipelineStage, ProgressCallback
from reelplan.pipeline.context import PipelineContext
from reelplan.services.script_parser import parse_script
from reelplan.services.timing import seconds_to_frames


class ScriptStage(PipelineStage):
    """Splits the script into timed segments spanning the avatar duration."""

    @property
    def name(self) -> str:
        return "script"

    @property
    def display_name(self) -> str:
        return "Parsing script"

    @property
    def description(self) -> str:
        return "Splits the script into sentences and word-bounded segments"

    def execute(
        self,
        context: PipelineContext,
        progress_callback: ProgressCallback | None = None,
    ) -> StageResult:
        settings = context.settings
        total_frames = seconds_to_frames(context.input.avatar_duration_seconds, context.fps)

        parsed = parse_script(
            context.input.script_text,
            fps=context.fps,
            total_duration_frames=total_frames,
            min_segment_words=settings.min_segment_words,
            max_segment_words=settings.max_segment_words,
        )
        context.parsed_script = parsed

        self._report_progress(progress_callback, 1.0, "Script parsed")
        return StageResult.success(
            message=f"{len(parsed.segments)} segments, {parsed.total_words} words",
            data={
                "segment_count": len(parsed.segments),
                "total_words": parsed.total_words,
                "total_frames": parsed.total_frames,
                "keywords": parsed.all_keywords[:10],
                "key_phrases": parsed.key_phrases,
            },
        )
