"""Custom exceptions for reelplan."""


class ReelPlanError(Exception):
    """Base exception for reelplan."""

    pass


class ScriptParseError(ReelPlanError):
    """Script text could not be turned into segments."""

    pass


class SilenceParseError(ReelPlanError):
    """External silence data could not be parsed."""

    pass


class DecisionLoadError(ReelPlanError):
    """Editorial decisions file could not be loaded."""

    pass


class TimelineValidationError(ReelPlanError):
    """Timeline has structural errors and cannot be rendered."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors) if errors else "Timeline is invalid")


class PipelineError(ReelPlanError):
    """Pipeline execution failed."""

    pass
