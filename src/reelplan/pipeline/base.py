"""Stage interface shared by every step of the editorial pipeline."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from reelplan.models.pipeline import StageResult
from reelplan.pipeline.context import PipelineContext

# (fraction of the stage done, status line)
ProgressCallback = Callable[[float, str], None]


class PipelineStage(ABC):
    """One step of the editorial pipeline.

    A stage reads what earlier stages left on the context (parsed script,
    avatar clips, matches, layout decisions), computes its own output and
    stores it back on the context. Stages never print; progress goes through
    the callback.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Key used to register and schedule the stage."""
        ...

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Short label shown in progress events."""
        ...

    @property
    def description(self) -> str:
        return ""

    @abstractmethod
    def execute(
        self,
        context: PipelineContext,
        progress_callback: ProgressCallback | None = None,
    ) -> StageResult:
        """Run the stage against the shared context.

        Args:
            context: Run inputs plus the outputs of earlier stages
            progress_callback: Receives (fraction done, status line)

        Returns:
            StageResult carrying a summary message, summary data and any
            consistency warnings
        """
        ...

    def validate(self, context: PipelineContext) -> bool:
        """Whether the outputs this stage depends on are present."""
        return True

    def _report_progress(
        self,
        callback: ProgressCallback | None,
        progress: float,
        message: str,
    ) -> None:
        if callback is not None:
            callback(min(max(progress, 0.0), 1.0), message)
