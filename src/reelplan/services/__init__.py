"""Editorial decision components for reelplan."""

from reelplan.services.asset_matcher import create_assets_from_paths, match_assets_to_segments
from reelplan.services.decisions import decisions_to_layout_decisions, load_editorial_decisions
from reelplan.services.layout_planner import LayoutPlannerOptions, plan_layouts, validate_layout_plan
from reelplan.services.script_parser import parse_script, realign_segment_timings
from reelplan.services.silence import (
    merge_processed_avatar,
    process_avatar_with_silences,
    process_avatar_without_trimming,
)
from reelplan.services.timeline_builder import build_timeline, get_timeline_stats, validate_timeline

__all__ = [
    "parse_script",
    "realign_segment_timings",
    "process_avatar_with_silences",
    "process_avatar_without_trimming",
    "merge_processed_avatar",
    "create_assets_from_paths",
    "match_assets_to_segments",
    "LayoutPlannerOptions",
    "plan_layouts",
    "validate_layout_plan",
    "load_editorial_decisions",
    "decisions_to_layout_decisions",
    "build_timeline",
    "validate_timeline",
    "get_timeline_stats",
]
