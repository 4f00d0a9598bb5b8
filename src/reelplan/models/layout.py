"""Layout, transition and text overlay data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from reelplan.models.assets import HelperAsset
from reelplan.models.style import TextOverlayStyle


class LayoutType(str, Enum):
    """Visual arrangement of a segment."""

    A = "A"  # full avatar
    B = "B"  # split screen
    C = "C"  # full helper, avatar picture-in-picture

    @property
    def needs_helper(self) -> bool:
        return self in (LayoutType.B, LayoutType.C)


class TransitionType(str, Enum):
    """Transition played when entering a segment."""

    CUT = "cut"
    FADE = "fade"
    SLIDE_LEFT = "slide-left"
    SLIDE_RIGHT = "slide-right"
    ZOOM = "zoom"
    WIPE_LEFT = "wipe-left"
    WIPE_RIGHT = "wipe-right"
    FLASH = "flash"
    NONE = "none"


class TextAnimation(str, Enum):
    """Entrance animation of a text overlay."""

    FADE = "fade"
    SCALE = "scale"
    SLIDE_UP = "slide-up"
    SLIDE_DOWN = "slide-down"
    POP = "pop"


class TransitionConfig(BaseModel):
    """How the renderer moves from the previous segment into this one."""

    model_config = ConfigDict(frozen=True)

    type: TransitionType = TransitionType.NONE
    duration_frames: int = Field(default=0, ge=0)
    sfx: str | None = Field(default=None, description="Sound effect reference")
    sfx_volume: float = Field(default=0.0, ge=0.0, le=1.0)


class TextOverlay(BaseModel):
    """On-screen key phrase; frames are relative to the owning segment
    until the timeline builder rebases them to output frames."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str | None = None
    style: TextOverlayStyle = Field(default_factory=TextOverlayStyle)
    animation: TextAnimation = TextAnimation.SCALE
    start_frame: int = Field(..., ge=0)
    end_frame: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_window(self) -> "TextOverlay":
        """Ensure the visible window is not inverted."""
        if self.end_frame < self.start_frame:
            raise ValueError("end_frame must not be before start_frame")
        return self


class LayoutDecision(BaseModel):
    """Layout, helper, overlay and transition chosen for one segment."""

    model_config = ConfigDict(frozen=True)

    segment_id: str
    layout: LayoutType
    helper_asset: HelperAsset | None = None
    text_overlay: TextOverlay | None = None
    transition: TransitionConfig = Field(default_factory=TransitionConfig)
    reasoning: str = Field(default="", description="Human-readable rationale")


class LayoutValidation(BaseModel):
    """Result of checking a layout plan against its segments."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
