"""Sequential stage runner that reports structured progress events."""

import logging
from collections.abc import Callable

from reelplan.models.pipeline import PipelineEvent, StageResult, StageStatus
from reelplan.pipeline.base import PipelineStage
from reelplan.pipeline.context import PipelineContext

logger = logging.getLogger(__name__)

EventCallback = Callable[[PipelineEvent], None]


class PipelineExecutor:
    """Runs registered stages by name, in the order requested."""

    def __init__(self) -> None:
        self._stages: dict[str, PipelineStage] = {}
        self._errors: dict[str, Exception] = {}

    def register_stage(self, stage: PipelineStage) -> None:
        self._stages[stage.name] = stage
        logger.debug(f"Stage registered: {stage.name}")

    def get_stage(self, name: str) -> PipelineStage | None:
        return self._stages.get(name)

    def list_stages(self) -> list[tuple[str, str]]:
        """(name, display_name) of every registered stage, in registration order."""
        return [(stage.name, stage.display_name) for stage in self._stages.values()]

    def error_for(self, stage_name: str) -> Exception | None:
        """Exception raised by a stage during the last execution, if any."""
        return self._errors.get(stage_name)

    def execute(
        self,
        context: PipelineContext,
        stages: list[str],
        on_event: EventCallback | None = None,
    ) -> dict[str, StageResult]:
        """Run the named stages in order, stopping at the first failure.

        An unknown name, unmet prerequisites, a raised exception and a
        FAILED result all end the run. Raised exceptions are logged and kept
        for ``error_for``. Stage warnings are added to the context.

        Args:
            context: Shared run context
            stages: Stage names in execution order
            on_event: Receives a PipelineEvent when a stage starts, reports
                progress, and finishes

        Returns:
            Result per executed stage, keyed by stage name
        """
        outcome: dict[str, StageResult] = {}
        self._errors = {}
        count = len(stages)

        for position, stage_name in enumerate(stages):
            stage = self._stages.get(stage_name)
            if stage is None:
                logger.error(f"No stage registered as '{stage_name}'")
                outcome[stage_name] = StageResult.failure(f"Unknown stage: {stage_name}")
                break

            self._emit(on_event, stage_name, StageStatus.RUNNING, position / count, stage.display_name)

            if not stage.validate(context):
                logger.error(f"Prerequisites missing for stage '{stage_name}'")
                outcome[stage_name] = StageResult.failure(f"Prerequisites missing for stage: {stage_name}")
                break

            def on_progress(fraction: float, message: str, position: int = position) -> None:
                self._emit(on_event, stage_name, StageStatus.RUNNING, (position + fraction) / count, message)

            try:
                result = stage.execute(context, on_progress)
            except Exception as e:
                logger.exception(f"Stage '{stage_name}' raised")
                self._errors[stage_name] = e
                outcome[stage_name] = StageResult.failure(str(e))
                self._emit(on_event, stage_name, StageStatus.FAILED, position / count, str(e))
                break

            outcome[stage_name] = result
            if result.warnings:
                context.add_warnings(stage_name, result.warnings)

            self._emit(
                on_event,
                stage_name,
                result.status,
                (position + 1) / count,
                result.message or "",
                result.data or {},
            )

            if result.status == StageStatus.FAILED:
                logger.error(f"Stage '{stage_name}' failed: {result.message}")
                break
            logger.info(f"Stage '{stage_name}' done: {result.message}")

        return outcome

    @staticmethod
    def _emit(
        callback: EventCallback | None,
        stage_name: str,
        status: StageStatus,
        progress: float,
        message: str,
        data: dict | None = None,
    ) -> None:
        if callback is None:
            return
        callback(
            PipelineEvent(
                stage=stage_name,
                status=status,
                progress=min(max(progress, 0.0), 1.0),
                message=message,
                data=data or {},
            )
        )
