"""Text and caption styling models handed through to the renderer."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FontConfig(BaseModel):
    """Font settings for a text element."""

    model_config = ConfigDict(frozen=True)

    family: str = Field(default="Inter", description="Font family")
    size: int = Field(default=48, gt=0, description="Font size in pixels")
    weight: int = Field(default=700, description="CSS font weight")
    color: str = Field(default="#FFFFFF", description="Fill color")
    shadow: str | None = Field(default=None, description="CSS text-shadow")
    letter_spacing: float | None = Field(default=None, description="Letter spacing in pixels")


class TextOverlayStyle(BaseModel):
    """Style reference for an on-screen key-phrase overlay."""

    model_config = ConfigDict(frozen=True)

    primary_font: FontConfig = Field(
        default_factory=lambda: FontConfig(
            size=72, weight=800, shadow="0 4px 12px rgba(0,0,0,0.8)"
        )
    )
    secondary_font: FontConfig | None = Field(
        default_factory=lambda: FontConfig(size=36, weight=500, color="#CCCCCC")
    )
    background: str | None = None
    padding: int = 24


class CaptionStyle(BaseModel):
    """Word-level caption styling."""

    model_config = ConfigDict(frozen=True)

    font: FontConfig = Field(
        default_factory=lambda: FontConfig(shadow="0 2px 8px rgba(0,0,0,0.8)")
    )
    highlight_color: str = "#FFD700"
    background_color: str = "rgba(0,0,0,0.6)"
    position: Literal["bottom", "center", "top"] = "bottom"
    max_width: int = 900
