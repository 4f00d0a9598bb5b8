"""Pipeline stages.

Available stages:
- ScriptStage: Script segmentation and timing
- AvatarStage: Silence-based clip generation and script re-alignment
- MatchingStage: Helper asset scoring and greedy assignment
- LayoutStage: Layout, transition and overlay planning
- DecisionsStage: External editorial decisions (replaces matching + layout)
- TimelineStage: Timeline building, validation and statistics
"""

from reelplan.pipeline.stages.avatar import AvatarStage
from reelplan.pipeline.stages.decisions import DecisionsStage
from reelplan.pipeline.stages.layout import LayoutStage
from reelplan.pipeline.stages.matching import MatchingStage
from reelplan.pipeline.stages.script import ScriptStage
from reelplan.pipeline.stages.timeline import TimelineStage

__all__ = [
    "ScriptStage",
    "AvatarStage",
    "MatchingStage",
    "LayoutStage",
    "DecisionsStage",
    "TimelineStage",
]
