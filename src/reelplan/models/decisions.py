"""Externally supplied editorial decisions."""

from pydantic import BaseModel, ConfigDict, Field

from reelplan.models.layout import LayoutType, TransitionType


class EditorialDecision(BaseModel):
    """A precomputed decision for one segment."""

    id: str = Field(..., description="Segment ID this decision applies to")
    layout: LayoutType
    asset: str | None = Field(default=None, description="Helper asset reference")
    transition: TransitionType = TransitionType.CUT
    transition_duration: int = Field(default=0, ge=0, alias="transitionDuration")
    reasoning: str = ""

    model_config = ConfigDict(populate_by_name=True)


class EditorialDecisions(BaseModel):
    """Decisions record keyed by segment id."""

    video_id: str = Field(default="", alias="videoId")
    segments: list[EditorialDecision] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def get(self, segment_id: str) -> EditorialDecision | None:
        """Get the decision for a segment, if any."""
        for decision in self.segments:
            if decision.id == segment_id:
                return decision
        return None


class DecisionCoverage(BaseModel):
    """How well a decisions record covers the parsed segments."""

    valid: bool
    missing: list[str] = Field(default_factory=list)
    extra: list[str] = Field(default_factory=list)
