"""Script and segment data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ImportanceLevel(str, Enum):
    """How strongly a segment should be emphasised on screen."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Word(BaseModel):
    """A single spoken word with absolute frame timing."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Word as written in the script")
    start_frame: int = Field(..., ge=0, description="Absolute start frame")
    end_frame: int = Field(..., ge=0, description="Absolute end frame")
    is_keyword: bool = Field(default=False, description="Highlight in captions")

    @property
    def duration_frames(self) -> int:
        return self.end_frame - self.start_frame


class ScriptSegment(BaseModel):
    """A contiguous, timed unit of script text."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Segment identifier, e.g. 'segment-1'")
    text: str = Field(..., description="Source text of the segment")
    words: list[Word] = Field(default_factory=list)
    start_frame: int = Field(..., ge=0)
    end_frame: int = Field(..., ge=0)
    duration_frames: int = Field(..., description="end_frame - start_frame")
    keywords: list[str] = Field(default_factory=list)
    importance: ImportanceLevel = ImportanceLevel.LOW
    has_key_phrase: bool = False

    @property
    def word_count(self) -> int:
        return len(self.text.split())


class ParsedScript(BaseModel):
    """Result of splitting a script into timed segments."""

    model_config = ConfigDict(frozen=True)

    segments: list[ScriptSegment] = Field(default_factory=list)
    total_words: int = Field(default=0, ge=0)
    total_frames: int = Field(default=0, ge=0, description="Frames the segments span")
    all_keywords: list[str] = Field(default_factory=list)
    key_phrases: list[str] = Field(default_factory=list)

    def get_segment(self, segment_id: str) -> ScriptSegment | None:
        """Get a segment by ID."""
        for segment in self.segments:
            if segment.id == segment_id:
                return segment
        return None
