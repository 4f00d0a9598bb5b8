"""Timeline builder: merges segments, avatar clips and layout decisions into
a contiguous frame schedule, then validates and summarizes it."""

import logging

from reelplan.models.avatar import AvatarClip, ProcessedAvatar
from reelplan.models.layout import LayoutDecision, LayoutType, TextOverlay, TransitionConfig, TransitionType
from reelplan.models.project import ProjectConfig
from reelplan.models.script import ParsedScript, ScriptSegment
from reelplan.models.timeline import (
    CaptionData,
    CaptionWord,
    Timeline,
    TimelineBuildResult,
    TimelineItem,
    TimelineStats,
    TimelineValidation,
)
from reelplan.services.timing import frames_to_seconds, round_frame

logger = logging.getLogger(__name__)


def resolve_avatar_clip(
    segment: ScriptSegment,
    processed: ProcessedAvatar,
    output_start: int,
) -> tuple[AvatarClip, str | None]:
    """Find the avatar footage that plays under a segment.

    Segments are timed against the untrimmed avatar. With a single clip the
    segment range is used as-is. With several clips, the clip whose source
    range contains the segment is used. Otherwise the clip sharing the most
    source frames with it is used, trimmed to the shared span, and a warning
    reports the dropped frames. When no clip overlaps at all the first clip
    is used, also with a warning.

    Returns:
        Tuple of (clip placed at ``output_start``, warning or None)
    """
    seg_start, seg_end = segment.start_frame, segment.end_frame
    duration = segment.duration_frames

    def placed(src: str, original_start: int, length: int) -> AvatarClip:
        return AvatarClip(
            src=src,
            start_frame=output_start,
            end_frame=max(output_start + length, 0),
            original_start_frame=original_start,
            original_end_frame=max(original_start + length, 0),
        )

    if not processed.clips:
        warning = f"No avatar clips available for {segment.id}"
        return placed("", seg_start, duration), warning

    if len(processed.clips) == 1:
        return placed(processed.clips[0].src, seg_start, duration), None

    for clip in processed.clips:
        if clip.contains_original(seg_start, seg_end):
            offset = seg_start - clip.original_start_frame
            return placed(clip.src, clip.original_start_frame + offset, duration), None

    best = max(processed.clips, key=lambda c: c.original_overlap(seg_start, seg_end))
    overlap = best.original_overlap(seg_start, seg_end)
    if overlap > 0:
        start = max(best.original_start_frame, seg_start)
        warning = (
            f"{segment.id} spans a trim cut; kept {overlap} of {duration} source frames, "
            f"{duration - overlap} dropped"
        )
        return placed(best.src, start, overlap), warning

    first = processed.clips[0]
    warning = (
        f"No avatar clip covers {segment.id} (frames {seg_start}-{seg_end}); "
        f"falling back to first clip"
    )
    return placed(first.src, seg_start, duration), warning


def _scale(relative_frame: int, time_scale: float) -> int:
    return round_frame(relative_frame * time_scale)


def build_caption_data(
    segment: ScriptSegment,
    output_start: int,
    time_scale: float,
    config: ProjectConfig,
) -> CaptionData:
    """Rebase word timings from the segment to output frames."""
    words = [
        CaptionWord(
            text=word.text,
            start_frame=max(output_start + _scale(word.start_frame - segment.start_frame, time_scale), 0),
            end_frame=max(output_start + _scale(word.end_frame - segment.start_frame, time_scale), 0),
        )
        for word in segment.words
    ]
    return CaptionData(words=words, style=config.settings.caption_style)


def rebase_text_overlay(overlay: TextOverlay | None, output_start: int, time_scale: float) -> TextOverlay | None:
    """Move a segment-relative overlay onto output frames."""
    if overlay is None:
        return None
    return overlay.model_copy(
        update={
            "start_frame": output_start + _scale(overlay.start_frame, time_scale),
            "end_frame": output_start + _scale(overlay.end_frame, time_scale),
        }
    )


def build_timeline(
    parsed_script: ParsedScript,
    processed_avatar: ProcessedAvatar,
    layout_decisions: list[LayoutDecision],
    config: ProjectConfig,
) -> TimelineBuildResult:
    """Build the output timeline.

    Items follow segment order. Each item starts at the running output
    cursor and advances it by its own duration, so items are contiguous and
    the total equals the last item's end.

    Args:
        parsed_script: Segments to schedule
        processed_avatar: Avatar clips after optional trimming
        layout_decisions: One decision per segment
        config: Project configuration (caption style)

    Returns:
        TimelineBuildResult with the timeline and builder warnings
    """
    decisions = {d.segment_id: d for d in layout_decisions}
    items: list[TimelineItem] = []
    warnings: list[str] = []
    cursor = 0

    for index, segment in enumerate(parsed_script.segments):
        decision = decisions.get(segment.id)
        if decision is None:
            message = f"No layout decision for segment: {segment.id}"
            logger.warning(message)
            warnings.append(message)
            continue

        clip, warning = resolve_avatar_clip(segment, processed_avatar, cursor)
        if warning:
            logger.warning(warning)
            warnings.append(warning)

        item_duration = clip.end_frame - clip.start_frame
        time_scale = item_duration / max(segment.duration_frames, 1)

        items.append(
            TimelineItem(
                id=f"item-{index + 1}",
                segment_id=segment.id,
                start_frame=cursor,
                end_frame=cursor + item_duration,
                duration_frames=item_duration,
                layout=decision.layout,
                avatar_clip=clip,
                helper_asset=decision.helper_asset,
                text_overlay=rebase_text_overlay(decision.text_overlay, cursor, time_scale),
                caption=build_caption_data(segment, cursor, time_scale, config),
                transition=decision.transition,
            )
        )
        cursor += item_duration

    logger.info(f"Built timeline: {len(items)} items, {cursor} frames")
    return TimelineBuildResult(
        timeline=Timeline(total_duration_frames=cursor, items=items),
        warnings=warnings,
    )


def build_simple_timeline(segments: list[ScriptSegment], avatar_src: str, config: ProjectConfig) -> Timeline:
    """Timeline of full-avatar items with hard cuts, straight from segment timing."""
    items = [
        TimelineItem(
            id=f"item-{index + 1}",
            segment_id=segment.id,
            start_frame=segment.start_frame,
            end_frame=segment.end_frame,
            duration_frames=segment.duration_frames,
            layout=LayoutType.A,
            avatar_clip=AvatarClip(
                src=avatar_src,
                start_frame=segment.start_frame,
                end_frame=segment.end_frame,
                original_start_frame=segment.start_frame,
                original_end_frame=segment.end_frame,
            ),
            caption=CaptionData(
                words=[
                    CaptionWord(text=w.text, start_frame=w.start_frame, end_frame=w.end_frame)
                    for w in segment.words
                ],
                style=config.settings.caption_style,
            ),
            transition=TransitionConfig(
                type=TransitionType.NONE if index == 0 else TransitionType.CUT,
                duration_frames=0,
                sfx_volume=0.5,
            ),
        )
        for index, segment in enumerate(segments)
    ]
    total = segments[-1].end_frame if segments else 0
    return Timeline(total_duration_frames=total, items=items)


def validate_timeline(timeline: Timeline) -> TimelineValidation:
    """Check a timeline before rendering.

    Errors: no items, non-positive total, non-positive item duration,
    missing avatar source. Warnings: gaps or overlaps between consecutive
    items (with the frame delta), B/C layouts without a helper asset.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not timeline.items:
        errors.append("Timeline has no items")

    if timeline.total_duration_frames <= 0:
        errors.append("Timeline has zero or negative duration")

    for prev, curr in zip(timeline.items, timeline.items[1:]):
        if curr.start_frame < prev.end_frame:
            warnings.append(
                f"Overlap between items {prev.id} and {curr.id} "
                f"({prev.end_frame - curr.start_frame} frames)"
            )
        elif curr.start_frame > prev.end_frame:
            warnings.append(
                f"Gap between items {prev.id} and {curr.id} "
                f"({curr.start_frame - prev.end_frame} frames)"
            )

    for item in timeline.items:
        if item.duration_frames <= 0:
            errors.append(f"Item {item.id} has zero or negative duration")

        if not item.avatar_clip.src:
            errors.append(f"Item {item.id} has no avatar source")

        if item.layout.needs_helper and item.helper_asset is None:
            warnings.append(f"Item {item.id} uses layout {item.layout.value} but has no helper asset")

    return TimelineValidation(valid=not errors, errors=errors, warnings=warnings)


def get_timeline_stats(timeline: Timeline, fps: int) -> TimelineStats:
    """Summarize duration, layout mix, transitions and caption words."""
    breakdown = {layout.value: 0 for layout in LayoutType}
    transitions = 0
    caption_words = 0

    for item in timeline.items:
        breakdown[item.layout.value] += 1
        if item.transition.type != TransitionType.NONE:
            transitions += 1
        caption_words += len(item.caption.words)

    return TimelineStats(
        total_duration_frames=timeline.total_duration_frames,
        total_duration_seconds=frames_to_seconds(timeline.total_duration_frames, fps),
        item_count=len(timeline.items),
        layout_breakdown=breakdown,
        transition_count=transitions,
        caption_word_count=caption_words,
    )
