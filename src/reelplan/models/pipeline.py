"""Stage results and progress events of a pipeline run."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class StageStatus(str, Enum):
    """Lifecycle state of a stage within one run."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StageResult(BaseModel):
    """Outcome of one stage: status, summary message and data, warnings."""

    status: StageStatus = Field(..., description="Lifecycle state")
    message: str | None = Field(None, description="Summary line, or the reason for failure")
    data: dict[str, Any] | None = Field(None, description="Stage summary data")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal findings")

    @classmethod
    def success(
        cls,
        message: str | None = None,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> "StageResult":
        """Stage finished; warnings are consistency findings that did not stop it."""
        return cls(
            status=StageStatus.COMPLETED, message=message, data=data, warnings=warnings or []
        )

    @classmethod
    def failure(cls, message: str, data: dict[str, Any] | None = None) -> "StageResult":
        """Stage could not produce its output."""
        return cls(status=StageStatus.FAILED, message=message, data=data)


class PipelineEvent(BaseModel):
    """Structured progress event emitted while the pipeline runs."""

    stage: str = Field(..., description="Stage name")
    status: StageStatus
    progress: float = Field(..., ge=0.0, le=1.0, description="Overall progress")
    message: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
