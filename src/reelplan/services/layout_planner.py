"""Layout planner: chooses layout, transition and text overlay per segment."""

import logging
import random
import re
from dataclasses import dataclass, field

from reelplan.models.assets import AssetMatch
from reelplan.models.layout import (
    LayoutDecision,
    LayoutType,
    LayoutValidation,
    TextAnimation,
    TextOverlay,
    TransitionConfig,
    TransitionType,
)
from reelplan.models.project import SfxConfig
from reelplan.models.script import ImportanceLevel, ScriptSegment
from reelplan.models.style import TextOverlayStyle
from reelplan.services.timing import round_frame

logger = logging.getLogger(__name__)

OVERLAY_START_RATIO = 0.2
OVERLAY_END_RATIO = 0.8

_QUOTED = re.compile(r'"([^"]+)"')
_NUMBERED_PHRASE = re.compile(r"\b(\d+\s+\w+(?:\s+\w+)?)\b")


@dataclass
class LayoutPlannerOptions:
    """Tunables of the layout planner."""

    transition_duration_frames: int = 8
    transition_sfx_probability: float = 0.7
    sfx_volume: float = 0.6
    sfx_sources: SfxConfig = field(default_factory=SfxConfig)
    text_overlay_style: TextOverlayStyle = field(default_factory=TextOverlayStyle)


def best_matches_by_segment(matches: list[AssetMatch]) -> dict[str, AssetMatch]:
    """Keep the highest-scoring match per segment (first one wins ties)."""
    best: dict[str, AssetMatch] = {}
    for match in matches:
        existing = best.get(match.segment_id)
        if existing is None or match.relevance_score > existing.relevance_score:
            best[match.segment_id] = match
    return best


def decide_layout(segment: ScriptSegment, match: AssetMatch | None) -> tuple[LayoutType, str]:
    """Pick a layout and explain why."""
    if match is not None and segment.importance == ImportanceLevel.HIGH:
        return (
            LayoutType.C,
            f"High importance segment with matched asset ({match.relevance_score:.2f} relevance)",
        )

    if match is not None:
        return (
            LayoutType.B,
            f"Matched asset: {match.asset.title} ({match.relevance_score:.2f} relevance)",
        )

    if segment.has_key_phrase:
        return LayoutType.A, "Key phrase detected, will use text overlay"

    return LayoutType.A, "Default full avatar layout"


def decide_transition(
    from_layout: LayoutType,
    to_layout: LayoutType,
    is_first: bool,
    rng: random.Random,
    options: LayoutPlannerOptions,
) -> TransitionConfig:
    """Choose the transition into ``to_layout``.

    Draws from ``rng`` once for the type when the table offers a choice,
    then once for whether to attach the slot's sound effect.
    """
    if is_first:
        return TransitionConfig(type=TransitionType.NONE, duration_frames=0, sfx_volume=0.0)

    helper_layouts = (LayoutType.B, LayoutType.C)

    if from_layout == LayoutType.A and to_layout == LayoutType.A:
        kind = TransitionType.CUT if rng.random() > 0.4 else TransitionType.FADE
        slot = "click"
    elif from_layout == LayoutType.A and to_layout in helper_layouts:
        kind = TransitionType.SLIDE_LEFT if rng.random() > 0.5 else TransitionType.ZOOM
        slot = "swoosh"
    elif from_layout in helper_layouts and to_layout == LayoutType.A:
        kind = TransitionType.SLIDE_RIGHT if rng.random() > 0.5 else TransitionType.FADE
        slot = "swoosh"
    elif from_layout == LayoutType.B and to_layout == LayoutType.C:
        kind = TransitionType.ZOOM
        slot = "impact"
    elif from_layout == LayoutType.C and to_layout == LayoutType.B:
        kind = TransitionType.FADE
        slot = "swoosh"
    else:
        kind = TransitionType.CUT
        slot = "click"

    play_sfx = rng.random() < options.transition_sfx_probability
    return TransitionConfig(
        type=kind,
        duration_frames=0 if kind == TransitionType.CUT else options.transition_duration_frames,
        sfx=options.sfx_sources.get(slot) if play_sfx else None,
        sfx_volume=options.sfx_volume,
    )


def extract_display_phrase(segment: ScriptSegment) -> str | None:
    """Find the phrase to show on screen.

    Priority: first quoted phrase, first "number + 1-2 words", the first
    2-3 keywords upper-cased, the first 1-2 keyword words upper-cased.
    """
    quoted = _QUOTED.search(segment.text)
    if quoted:
        return quoted.group(1)

    numbered = _NUMBERED_PHRASE.search(segment.text)
    if numbered:
        return numbered.group(1)

    if len(segment.keywords) >= 2:
        return " ".join(segment.keywords[:3]).upper()

    keyword_words = [w.text for w in segment.words if w.is_keyword]
    if keyword_words:
        return " ".join(keyword_words[:2]).upper()

    return None


def decide_text_overlay(
    segment: ScriptSegment,
    layout: LayoutType,
    match: AssetMatch | None,
    style: TextOverlayStyle,
) -> TextOverlay | None:
    """Build an overlay for full-avatar key-phrase segments without a helper.

    The overlay is visible from 20% to 80% of the segment, in frames
    relative to the segment start.
    """
    if layout != LayoutType.A or match is not None or not segment.has_key_phrase:
        return None

    primary = extract_display_phrase(segment)
    if not primary:
        return None

    duration = max(segment.duration_frames, 0)
    return TextOverlay(
        primary=primary,
        style=style,
        animation=TextAnimation.POP if segment.importance == ImportanceLevel.HIGH else TextAnimation.SCALE,
        start_frame=round_frame(duration * OVERLAY_START_RATIO),
        end_frame=round_frame(duration * OVERLAY_END_RATIO),
    )


def plan_layouts(
    segments: list[ScriptSegment],
    matches: list[AssetMatch],
    rng: random.Random,
    options: LayoutPlannerOptions | None = None,
) -> list[LayoutDecision]:
    """Plan layout, transition and overlay for every segment in order.

    Args:
        segments: Segments in script order
        matches: Accepted asset matches; the best one per segment is used
        rng: Random source for transition and sfx choices
        options: Planner tunables

    Returns:
        One LayoutDecision per segment
    """
    options = options or LayoutPlannerOptions()
    best = best_matches_by_segment(matches)

    decisions: list[LayoutDecision] = []
    previous = LayoutType.A

    for index, segment in enumerate(segments):
        match = best.get(segment.id)
        layout, reasoning = decide_layout(segment, match)
        transition = decide_transition(previous, layout, index == 0, rng, options)
        overlay = decide_text_overlay(segment, layout, match, options.text_overlay_style)

        decisions.append(
            LayoutDecision(
                segment_id=segment.id,
                layout=layout,
                helper_asset=match.asset if match else None,
                text_overlay=overlay,
                transition=transition,
                reasoning=reasoning,
            )
        )
        logger.debug(f"{segment.id}: layout {layout.value}, {transition.type.value} ({reasoning})")
        previous = layout

    return decisions


def validate_layout_plan(decisions: list[LayoutDecision], segments: list[ScriptSegment]) -> LayoutValidation:
    """Check every segment has a decision and B/C decisions carry a helper."""
    errors: list[str] = []

    decided = {d.segment_id for d in decisions}
    for segment in segments:
        if segment.id not in decided:
            errors.append(f"Missing layout decision for segment: {segment.id}")

    for decision in decisions:
        if decision.layout.needs_helper and decision.helper_asset is None:
            errors.append(
                f"Layout {decision.layout.value} requires helper asset for segment: {decision.segment_id}"
            )

    return LayoutValidation(valid=not errors, errors=errors)
