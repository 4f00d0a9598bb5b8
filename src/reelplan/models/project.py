"""Project configuration models - the input contract of a pipeline run."""

from pydantic import BaseModel, ConfigDict, Field

from reelplan.models.avatar import SilenceInput
from reelplan.models.style import CaptionStyle


class SfxConfig(BaseModel):
    """Sound effect references by slot name."""

    model_config = ConfigDict(frozen=True)

    click: str | None = None
    swoosh: str | None = None
    impact: str | None = None

    def get(self, slot: str) -> str | None:
        """Return the reference for a slot, or None if unset."""
        return getattr(self, slot, None)


class ProjectSettings(BaseModel):
    """Editorial settings of a project."""

    model_config = ConfigDict(frozen=True)

    silence_threshold: float = Field(
        default=0.5, ge=0.0, description="Minimum silence duration in seconds"
    )
    min_clip_duration: float = Field(
        default=1.0, ge=0.0, description="Minimum clip length after cutting, in seconds"
    )
    transition_sfx_probability: float = Field(
        default=0.7, ge=0.0, le=1.0, description="Chance of attaching an sfx to a transition"
    )
    music_volume: float = Field(default=-20.0, description="Background music volume in dB")
    caption_style: CaptionStyle = Field(default_factory=CaptionStyle)


class ProjectConfig(BaseModel):
    """Frame rate, canvas and editorial settings of a project."""

    model_config = ConfigDict(frozen=True)

    fps: int = Field(default=30, gt=0, description="Frames per second")
    width: int = Field(default=1080, gt=0, description="Canvas width in pixels")
    height: int = Field(default=1920, gt=0, description="Canvas height in pixels")
    settings: ProjectSettings = Field(default_factory=ProjectSettings)


class PipelineInput(BaseModel):
    """Everything a pipeline run needs.

    Helper paths are parsed into keyword lists and titles from their
    filenames, so ``product-demo-walkthrough.mp4`` is matched on
    ``product``, ``demo`` and ``walkthrough``.
    """

    script_text: str = Field(..., description="Spoken script, sentence-terminated")
    avatar_src: str = Field(..., description="Talking-head clip reference")
    avatar_duration_seconds: float = Field(..., gt=0, description="Avatar clip length")
    helper_video_paths: list[str] = Field(default_factory=list)
    helper_image_paths: list[str] = Field(default_factory=list)
    sfx_paths: SfxConfig = Field(default_factory=SfxConfig)
    config: ProjectConfig = Field(default_factory=ProjectConfig)
    silence: SilenceInput | None = Field(
        default=None, description="External silence ranges; None disables trimming"
    )
