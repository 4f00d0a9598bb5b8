"""Edit plan report generator.

Generates human-readable Markdown reports of a timeline with the reasoning
behind each layout decision.
"""

from reelplan.models.layout import LayoutDecision, LayoutType
from reelplan.models.timeline import Timeline, TimelineStats, TimelineValidation
from reelplan.pipeline.runner import PipelineResult
from reelplan.services.timeline_builder import get_timeline_stats, validate_timeline

_LAYOUT_NAMES = {
    LayoutType.A: "Full Avatar",
    LayoutType.B: "Split Screen",
    LayoutType.C: "Full Helper",
}


def _frames_to_timestamp(frames: int, fps: int) -> str:
    """Convert frames to MM:SS.mmm (HH:MM:SS.mmm past an hour)."""
    ms = round(frames * 1000 / fps)
    hours = ms // 3600000
    minutes = (ms % 3600000) // 60000
    seconds = (ms % 60000) // 1000
    millis = ms % 1000

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"
    return f"{minutes:02d}:{seconds:02d}.{millis:03d}"


def _summary_lines(stats: TimelineStats) -> list[str]:
    breakdown = ", ".join(f"{k}={v}" for k, v in stats.layout_breakdown.items())
    return [
        "## Summary",
        "",
        f"- Duration: {stats.total_duration} ({stats.total_duration_frames} frames)",
        f"- Items: {stats.item_count}",
        f"- Layouts: {breakdown}",
        f"- Transitions: {stats.transition_count}",
        f"- Caption words: {stats.caption_word_count}",
        "",
    ]


def _item_lines(
    timeline: Timeline,
    fps: int,
    decisions: dict[str, LayoutDecision],
) -> list[str]:
    lines = [
        "## Items",
        "",
        "| # | Segment | Time | Layout | Helper | Transition | Overlay |",
        "|---|---------|------|--------|--------|------------|---------|",
    ]
    for item in timeline.items:
        time_range = (
            f"{_frames_to_timestamp(item.start_frame, fps)} - "
            f"{_frames_to_timestamp(item.end_frame, fps)}"
        )
        helper = item.helper_asset.title if item.helper_asset else "-"
        transition = item.transition.type.value
        if item.transition.sfx:
            transition += " + sfx"
        overlay = item.text_overlay.primary if item.text_overlay else "-"
        lines.append(
            f"| {item.id} | {item.segment_id} | {time_range} | "
            f"{item.layout.value} ({_LAYOUT_NAMES[item.layout]}) | {helper} | {transition} | {overlay} |"
        )
    lines.append("")

    if decisions:
        lines.extend(["## Reasoning", ""])
        for item in timeline.items:
            decision = decisions.get(item.segment_id)
            if decision and decision.reasoning:
                lines.append(f"- **{item.segment_id}**: {decision.reasoning}")
        lines.append("")

    return lines


def _validation_lines(validation: TimelineValidation, warnings: list[str]) -> list[str]:
    lines = ["## Validation", "", f"- Valid: {'yes' if validation.valid else 'no'}"]
    for error in validation.errors:
        lines.append(f"- Error: {error}")
    for warning in warnings:
        lines.append(f"- Warning: {warning}")
    lines.append("")
    return lines


def generate_timeline_report(timeline: Timeline, fps: int) -> str:
    """Generate a Markdown report for a bare timeline."""
    validation = validate_timeline(timeline)
    lines = ["# Edit Plan", ""]
    lines.extend(_summary_lines(get_timeline_stats(timeline, fps)))
    lines.extend(_item_lines(timeline, fps, {}))
    lines.extend(_validation_lines(validation, validation.warnings))
    return "\n".join(lines)


def generate_plan_report(result: PipelineResult, fps: int) -> str:
    """Generate a Markdown report for a pipeline run.

    Args:
        result: Pipeline result
        fps: Frames per second of the project

    Returns:
        Markdown formatted report string
    """
    decisions = {d.segment_id: d for d in result.layout_decisions}
    lines = ["# Edit Plan", ""]
    lines.extend(_summary_lines(result.stats))
    lines.extend(_item_lines(result.timeline, fps, decisions))

    if result.match_result is not None:
        lines.extend(["## Asset Matching", ""])
        for match in result.match_result.matches:
            keywords = ", ".join(match.matched_keywords) or "title"
            lines.append(
                f"- {match.segment_id} -> {match.asset.title} "
                f"({match.relevance_score:.2f}; {keywords})"
            )
        if result.match_result.unmatched_segments:
            lines.append(f"- Segments without asset: {', '.join(result.match_result.unmatched_segments)}")
        if result.match_result.unmatched_assets:
            lines.append(f"- Unused assets: {', '.join(result.match_result.unmatched_assets)}")
        lines.append("")

    lines.extend(_validation_lines(result.validation, result.warnings))
    return "\n".join(lines)
