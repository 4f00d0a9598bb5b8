"""Helper asset and asset-matching data models."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AssetType(str, Enum):
    """Kind of helper asset."""

    VIDEO = "video"
    IMAGE = "image"


class HelperAsset(BaseModel):
    """A supporting video or image, described by its filename."""

    model_config = ConfigDict(frozen=True)

    type: AssetType = Field(..., description="Asset kind")
    src: str = Field(..., description="Asset reference (file path or URL)")
    title: str = Field(..., description="Display title derived from the filename")
    keywords: list[str] = Field(default_factory=list)
    start_frame: int | None = Field(default=None, ge=0, description="Trim start inside the asset")
    end_frame: int | None = Field(default=None, ge=0, description="Trim end inside the asset")
    fit: Literal["cover", "contain"] = "cover"


class AssetMatch(BaseModel):
    """A scored pairing of a segment and a helper asset."""

    model_config = ConfigDict(frozen=True)

    segment_id: str
    asset: HelperAsset
    relevance_score: float = Field(..., ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)


class AssetMatchResult(BaseModel):
    """Outcome of greedy asset assignment."""

    model_config = ConfigDict(frozen=True)

    matches: list[AssetMatch] = Field(default_factory=list)
    unmatched_segments: list[str] = Field(
        default_factory=list, description="Segment IDs with no assigned asset"
    )
    unmatched_assets: list[str] = Field(
        default_factory=list, description="Asset sources never assigned"
    )

    def matches_for(self, segment_id: str) -> list[AssetMatch]:
        """Get all accepted matches for a segment."""
        return [m for m in self.matches if m.segment_id == segment_id]
