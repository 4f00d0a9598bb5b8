"""Asset matching stage."""

from reelplan.models.pipeline import StageResult
from reelplan.pipeline.base import PipelineStage, ProgressCallback
from reelplan.pipeline.context import PipelineContext
from reelplan.services.asset_matcher import create_assets_from_paths, match_assets_to_segments


class MatchingStage(PipelineStage):
    """Scores helper assets against segments and assigns them."""

    @property
    def name(self) -> str:
        return "matching"

    @property
    def display_name(self) -> str:
        return "Matching assets to segments"

    def validate(self, context: PipelineContext) -> bool:
        return context.parsed_script is not None

    def execute(
        self,
        context: PipelineContext,
        progress_callback: ProgressCallback | None = None,
    ) -> StageResult:
        settings = context.settings
        assets = create_assets_from_paths(
            context.input.helper_video_paths, context.input.helper_image_paths
        )
        self._report_progress(progress_callback, 0.3, f"{len(assets)} helper assets available")

        result = match_assets_to_segments(
            context.parsed_script.segments,
            assets,
            min_relevance_score=settings.min_relevance_score,
            max_assets_per_segment=settings.max_assets_per_segment,
            allow_asset_reuse=settings.allow_asset_reuse,
        )
        context.match_result = result

        self._report_progress(progress_callback, 1.0, "Assets matched")
        return StageResult.success(
            message=f"{len(result.matches)} matches for {len(assets)} assets",
            data={
                "matches": [
                    {
                        "segment_id": m.segment_id,
                        "asset": m.asset.title,
                        "score": round(m.relevance_score, 4),
                    }
                    for m in result.matches
                ],
                "unmatched_segments": result.unmatched_segments,
                "unmatched_assets": result.unmatched_assets,
            },
        )
