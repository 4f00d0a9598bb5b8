"""Timeline data models - the output contract consumed by the renderer."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from reelplan.models.assets import HelperAsset
from reelplan.models.avatar import AvatarClip
from reelplan.models.layout import LayoutType, TextOverlay, TransitionConfig
from reelplan.models.style import CaptionStyle


class CaptionWord(BaseModel):
    """A caption word in output frames."""

    model_config = ConfigDict(frozen=True)

    text: str
    start_frame: int = Field(..., ge=0)
    end_frame: int = Field(..., ge=0)


class CaptionData(BaseModel):
    """Word-level captions of one timeline item."""

    model_config = ConfigDict(frozen=True)

    words: list[CaptionWord] = Field(default_factory=list)
    style: CaptionStyle = Field(default_factory=CaptionStyle)


class TimelineItem(BaseModel):
    """One scheduled segment on the output timeline."""

    model_config = ConfigDict(frozen=True)

    id: str
    segment_id: str
    start_frame: int = Field(..., ge=0)
    end_frame: int
    duration_frames: int
    layout: LayoutType
    avatar_clip: AvatarClip
    helper_asset: HelperAsset | None = None
    text_overlay: TextOverlay | None = None
    caption: CaptionData = Field(default_factory=CaptionData)
    transition: TransitionConfig = Field(default_factory=TransitionConfig)


class Timeline(BaseModel):
    """Frame-accurate edit plan.

    Items are ordered by segment, each starting where the previous one ended;
    ``total_duration_frames`` equals the last item's end frame.
    """

    model_config = ConfigDict(frozen=True)

    total_duration_frames: int = 0
    items: list[TimelineItem] = Field(default_factory=list)

    def get_item_at(self, frame: int) -> TimelineItem | None:
        """Get the item playing at an output frame."""
        for item in self.items:
            if item.start_frame <= frame < item.end_frame:
                return item
        return None

    # --- Serialization ---

    def to_json(self) -> str:
        """Serialize to a stable JSON string."""
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False, indent=2)

    def save(self, path: Path) -> Path:
        """Save timeline to JSON file.

        Args:
            path: Output file path

        Returns:
            Path to saved file
        """
        path = Path(path)
        if not path.suffix:
            path = path.with_suffix(".timeline.json")

        path.write_text(self.to_json(), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: Path) -> "Timeline":
        """Load timeline from JSON file."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)


class TimelineValidation(BaseModel):
    """Structural errors and consistency warnings of a timeline."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class TimelineStats(BaseModel):
    """Summary statistics of a timeline."""

    total_duration_frames: int
    total_duration_seconds: float
    item_count: int
    layout_breakdown: dict[str, int]
    transition_count: int
    caption_word_count: int

    @property
    def total_duration(self) -> str:
        """Duration formatted like '12.34s'."""
        return f"{self.total_duration_seconds:.2f}s"


class TimelineBuildResult(BaseModel):
    """Timeline plus the data-inconsistency warnings raised while building it."""

    timeline: Timeline
    warnings: list[str] = Field(default_factory=list)
