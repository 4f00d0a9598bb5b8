"""Pipeline module for reelplan."""

from reelplan.pipeline.base import PipelineStage
from reelplan.pipeline.context import PipelineContext
from reelplan.pipeline.executor import PipelineExecutor
from reelplan.pipeline.runner import PipelineResult, run_pipeline, run_pipeline_with_decisions

__all__ = [
    "PipelineStage",
    "PipelineContext",
    "PipelineExecutor",
    "PipelineResult",
    "run_pipeline",
    "run_pipeline_with_decisions",
]
