"""Pipeline execution context."""

import random

from pydantic import BaseModel, ConfigDict, Field

from reelplan.config import Settings
from reelplan.models.assets import AssetMatchResult
from reelplan.models.avatar import ProcessedAvatar
from reelplan.models.decisions import EditorialDecisions
from reelplan.models.layout import LayoutDecision
from reelplan.models.project import PipelineInput
from reelplan.models.script import ParsedScript
from reelplan.models.timeline import Timeline, TimelineStats, TimelineValidation


class PipelineContext(BaseModel):
    """Shared context for one pipeline run.

    Holds the run's inputs and its own random source, and accumulates each
    stage's output as the pipeline progresses. Nothing here is shared
    between runs.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    input: PipelineInput = Field(..., description="Run inputs")
    settings: Settings = Field(..., description="Segmenter, matcher and planner knobs")
    rng: random.Random = Field(..., description="Random source for transition choices")
    decisions_record: EditorialDecisions | None = Field(
        None, description="External editorial decisions, bypassing matching and planning"
    )

    parsed_script: ParsedScript | None = None
    processed_avatar: ProcessedAvatar | None = None
    match_result: AssetMatchResult | None = None
    layout_decisions: list[LayoutDecision] | None = None
    timeline: Timeline | None = None
    validation: TimelineValidation | None = None
    stats: TimelineStats | None = None

    warnings: list[str] = Field(default_factory=list, description="Warnings from all stages")

    @property
    def fps(self) -> int:
        return self.input.config.fps

    def add_warnings(self, stage_name: str, warnings: list[str]) -> None:
        """Record warnings raised by a stage."""
        self.warnings.extend(f"[{stage_name}] {w}" for w in warnings)
