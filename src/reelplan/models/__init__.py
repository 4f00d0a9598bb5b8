"""Data models for reelplan."""

from reelplan.models.assets import AssetMatch, AssetMatchResult, AssetType, HelperAsset
from reelplan.models.avatar import (
    AvatarClip,
    CropConfig,
    ProcessedAvatar,
    SilenceInput,
    SilenceRange,
    SilenceRegion,
)
from reelplan.models.decisions import DecisionCoverage, EditorialDecision, EditorialDecisions
from reelplan.models.layout import (
    LayoutDecision,
    LayoutType,
    LayoutValidation,
    TextAnimation,
    TextOverlay,
    TransitionConfig,
    TransitionType,
)
from reelplan.models.pipeline import PipelineEvent, StageResult, StageStatus
from reelplan.models.project import PipelineInput, ProjectConfig, ProjectSettings, SfxConfig
from reelplan.models.script import ImportanceLevel, ParsedScript, ScriptSegment, Word
from reelplan.models.style import CaptionStyle, FontConfig, TextOverlayStyle
from reelplan.models.timeline import (
    CaptionData,
    CaptionWord,
    Timeline,
    TimelineBuildResult,
    TimelineItem,
    TimelineStats,
    TimelineValidation,
)

__all__ = [
    # Script
    "Word",
    "ScriptSegment",
    "ParsedScript",
    "ImportanceLevel",
    # Avatar
    "SilenceRange",
    "SilenceInput",
    "SilenceRegion",
    "CropConfig",
    "AvatarClip",
    "ProcessedAvatar",
    # Assets
    "AssetType",
    "HelperAsset",
    "AssetMatch",
    "AssetMatchResult",
    # Layout
    "LayoutType",
    "TransitionType",
    "TextAnimation",
    "TransitionConfig",
    "TextOverlay",
    "LayoutDecision",
    "LayoutValidation",
    # Style
    "FontConfig",
    "TextOverlayStyle",
    "CaptionStyle",
    # Timeline
    "CaptionWord",
    "CaptionData",
    "TimelineItem",
    "TimelineBuildResult",
    "Timeline",
    "TimelineValidation",
    "TimelineStats",
    # Decisions
    "EditorialDecision",
    "EditorialDecisions",
    "DecisionCoverage",
    # Project
    "SfxConfig",
    "ProjectSettings",
    "ProjectConfig",
    "PipelineInput",
    # Pipeline
    "StageStatus",
    "StageResult",
    "PipelineEvent",
]
