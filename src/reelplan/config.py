"""Configuration management for reelplan."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from reelplan.models.project import ProjectConfig, ProjectSettings


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REELPLAN_",
        case_sensitive=False,
    )

    # Canvas
    fps: int = 30
    width: int = 1080
    height: int = 1920

    # Avatar trimming
    silence_threshold: float = 0.5
    min_clip_duration: float = 1.0
    merge_gap_frames: int = 3

    # Segmenter
    min_segment_words: int = 5
    max_segment_words: int = 15

    # Asset matching
    min_relevance_score: float = 0.15
    max_assets_per_segment: int = 1
    allow_asset_reuse: bool = True

    # Layout planning
    transition_duration_frames: int = 8
    transition_sfx_probability: float = 0.7
    sfx_volume: float = 0.6
    random_seed: int | None = None

    log_level: str = "INFO"

    def project_config(self) -> ProjectConfig:
        """Build a ProjectConfig from these settings."""
        return ProjectConfig(
            fps=self.fps,
            width=self.width,
            height=self.height,
            settings=ProjectSettings(
                silence_threshold=self.silence_threshold,
                min_clip_duration=self.min_clip_duration,
                transition_sfx_probability=self.transition_sfx_probability,
            ),
        )


# Global settings instance
settings = Settings()
