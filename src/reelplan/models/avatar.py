"""Avatar clip and silence data models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SilenceRange(BaseModel):
    """A silent range reported by an external tool, in seconds."""

    model_config = ConfigDict(frozen=True)

    start_seconds: float = Field(..., ge=0.0)
    end_seconds: float = Field(..., ge=0.0)

    @property
    def duration_seconds(self) -> float:
        return self.end_seconds - self.start_seconds


class SilenceInput(BaseModel):
    """Silence analysis handed in from outside (e.g. ffmpeg silencedetect)."""

    model_config = ConfigDict(frozen=True)

    silences: list[SilenceRange] = Field(default_factory=list)
    total_duration_seconds: float = Field(..., gt=0.0)


class SilenceRegion(BaseModel):
    """A silence in frames that passed the duration threshold."""

    model_config = ConfigDict(frozen=True)

    start_frame: int = Field(..., ge=0)
    end_frame: int = Field(..., ge=0)
    duration_frames: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_range(self) -> "SilenceRegion":
        """Ensure end is not before start."""
        if self.end_frame < self.start_frame:
            raise ValueError("end_frame must not be before start_frame")
        return self


class CropConfig(BaseModel):
    """Crop window applied to the avatar video."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    scale: float = 1.0


class AvatarClip(BaseModel):
    """A piece of the avatar video placed on the output timeline.

    ``start_frame``/``end_frame`` are output frames; ``original_*`` are
    frames in the untrimmed source.
    """

    model_config = ConfigDict(frozen=True)

    src: str = Field(..., description="Avatar video reference")
    start_frame: int = Field(..., ge=0, description="Output start frame")
    end_frame: int = Field(..., ge=0, description="Output end frame")
    original_start_frame: int = Field(..., ge=0, description="Source start frame")
    original_end_frame: int = Field(..., ge=0, description="Source end frame")
    crop: CropConfig | None = None
    volume: float = Field(default=1.0, ge=0.0)

    @property
    def duration_frames(self) -> int:
        return self.end_frame - self.start_frame

    def contains_original(self, start_frame: int, end_frame: int) -> bool:
        """Check if a source frame range lies entirely inside this clip."""
        return self.original_start_frame <= start_frame and self.original_end_frame >= end_frame

    def original_overlap(self, start_frame: int, end_frame: int) -> int:
        """Number of source frames shared with a range."""
        return max(
            0,
            min(self.original_end_frame, end_frame) - max(self.original_start_frame, start_frame),
        )


class ProcessedAvatar(BaseModel):
    """Avatar video after silence removal."""

    model_config = ConfigDict(frozen=True)

    original_duration_frames: int = Field(..., ge=0)
    processed_duration_frames: int = Field(..., ge=0)
    silence_regions: list[SilenceRegion] = Field(default_factory=list)
    clips: list[AvatarClip] = Field(default_factory=list)

    @property
    def removed_frames(self) -> int:
        return self.original_duration_frames - self.processed_duration_frames

    @property
    def is_trimmed(self) -> bool:
        return len(self.clips) > 1
