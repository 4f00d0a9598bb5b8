"""Export module for reelplan."""

from reelplan.export.report import generate_plan_report, generate_timeline_report

__all__ = ["generate_plan_report", "generate_timeline_report"]
