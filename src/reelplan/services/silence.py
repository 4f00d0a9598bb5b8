"""Clip generation from externally detected silence ranges."""

import logging
import re

from reelplan.errors import SilenceParseError
from reelplan.models.avatar import (
    AvatarClip,
    ProcessedAvatar,
    SilenceInput,
    SilenceRange,
    SilenceRegion,
)
from reelplan.services.timing import frames_to_seconds, seconds_to_frames

logger = logging.getLogger(__name__)

DEFAULT_SILENCE_THRESHOLD_SECONDS = 0.5
DEFAULT_MIN_CLIP_DURATION_SECONDS = 1.0
DEFAULT_MERGE_GAP_FRAMES = 3

_SILENCE_START = re.compile(r"silence_start:\s*([\d.]+)")
_SILENCE_END = re.compile(r"silence_end:\s*([\d.]+)")


def silence_regions_from_input(
    silence_input: SilenceInput,
    fps: int,
    silence_threshold_seconds: float = DEFAULT_SILENCE_THRESHOLD_SECONDS,
) -> list[SilenceRegion]:
    """Convert silence ranges to frames, keeping those at or above the threshold."""
    regions: list[SilenceRegion] = []
    for silence in silence_input.silences:
        if silence.duration_seconds < silence_threshold_seconds:
            continue
        regions.append(
            SilenceRegion(
                start_frame=seconds_to_frames(silence.start_seconds, fps),
                end_frame=seconds_to_frames(silence.end_seconds, fps),
                duration_frames=seconds_to_frames(silence.duration_seconds, fps),
            )
        )
    return regions


def generate_clips_from_silences(
    src: str,
    total_frames: int,
    silences: list[SilenceRegion],
    min_clip_frames: int,
) -> list[AvatarClip]:
    """Emit one clip per non-silent span of at least ``min_clip_frames``.

    Output ranges are packed from frame 0 without gaps; original ranges
    keep the position in the untrimmed source. Spans shorter than the
    minimum are dropped.
    """
    clips: list[AvatarClip] = []
    current = 0
    output = 0

    def emit(original_start: int, original_end: int) -> None:
        nonlocal output
        length = original_end - original_start
        if length < min_clip_frames or length <= 0:
            return
        clips.append(
            AvatarClip(
                src=src,
                start_frame=output,
                end_frame=output + length,
                original_start_frame=original_start,
                original_end_frame=original_end,
            )
        )
        output += length

    for silence in sorted(silences, key=lambda s: s.start_frame):
        emit(current, min(silence.start_frame, total_frames))
        current = max(current, min(silence.end_frame, total_frames))

    emit(current, total_frames)
    return clips


def process_avatar_with_silences(
    avatar_src: str,
    silence_input: SilenceInput,
    fps: int,
    silence_threshold_seconds: float = DEFAULT_SILENCE_THRESHOLD_SECONDS,
    min_clip_duration_seconds: float = DEFAULT_MIN_CLIP_DURATION_SECONDS,
) -> ProcessedAvatar:
    """Cut silences out of the avatar clip.

    Args:
        avatar_src: Avatar video reference
        silence_input: Silence ranges from an external detector
        fps: Frames per second
        silence_threshold_seconds: Shorter silences are ignored
        min_clip_duration_seconds: Shorter speech spans are dropped

    Returns:
        ProcessedAvatar with ordered, contiguous output clips
    """
    total_frames = seconds_to_frames(silence_input.total_duration_seconds, fps)
    regions = silence_regions_from_input(silence_input, fps, silence_threshold_seconds)
    clips = generate_clips_from_silences(
        avatar_src,
        total_frames,
        regions,
        seconds_to_frames(min_clip_duration_seconds, fps),
    )
    processed = sum(c.duration_frames for c in clips)

    logger.info(
        f"Avatar trimmed: {len(regions)} silences, {len(clips)} clips, "
        f"{total_frames} -> {processed} frames"
    )

    return ProcessedAvatar(
        original_duration_frames=total_frames,
        processed_duration_frames=processed,
        silence_regions=regions,
        clips=clips,
    )


def process_avatar_without_trimming(avatar_src: str, total_duration_frames: int) -> ProcessedAvatar:
    """Wrap the whole avatar video in a single clip."""
    return ProcessedAvatar(
        original_duration_frames=total_duration_frames,
        processed_duration_frames=total_duration_frames,
        silence_regions=[],
        clips=[
            AvatarClip(
                src=avatar_src,
                start_frame=0,
                end_frame=total_duration_frames,
                original_start_frame=0,
                original_end_frame=total_duration_frames,
            )
        ],
    )


def merge_close_clips(clips: list[AvatarClip], max_gap_frames: int = DEFAULT_MERGE_GAP_FRAMES) -> list[AvatarClip]:
    """Fuse clips separated by a source gap of at most ``max_gap_frames``.

    The earlier clip is extended over the gap and the later clip, avoiding
    micro-cuts. Output ranges are re-packed so they stay contiguous from 0.
    """
    if len(clips) <= 1:
        return list(clips)

    spans: list[tuple[AvatarClip, int, int]] = [
        (clips[0], clips[0].original_start_frame, clips[0].original_end_frame)
    ]
    for clip in clips[1:]:
        first, start, end = spans[-1]
        if clip.original_start_frame - end <= max_gap_frames:
            spans[-1] = (first, start, clip.original_end_frame)
        else:
            spans.append((clip, clip.original_start_frame, clip.original_end_frame))

    merged: list[AvatarClip] = []
    output = clips[0].start_frame
    for clip, start, end in spans:
        length = end - start
        merged.append(
            clip.model_copy(
                update={
                    "start_frame": output,
                    "end_frame": output + length,
                    "original_start_frame": start,
                    "original_end_frame": end,
                }
            )
        )
        output += length

    if len(merged) < len(clips):
        logger.debug(f"Merged {len(clips)} clips into {len(merged)} (gap <= {max_gap_frames} frames)")
    return merged


def merge_processed_avatar(
    processed: ProcessedAvatar, max_gap_frames: int = DEFAULT_MERGE_GAP_FRAMES
) -> ProcessedAvatar:
    """Apply ``merge_close_clips`` and recompute the processed duration."""
    clips = merge_close_clips(processed.clips, max_gap_frames)
    return processed.model_copy(
        update={
            "clips": clips,
            "processed_duration_frames": sum(c.duration_frames for c in clips),
        }
    )


def parse_ffmpeg_silence_output(ffmpeg_output: str, total_duration_seconds: float) -> SilenceInput:
    """Parse ``silencedetect`` log lines into a SilenceInput.

    A trailing ``silence_start`` without a matching ``silence_end`` is closed
    at the total duration.

    Raises:
        SilenceParseError: If the log has more ends than starts
    """
    starts = [float(m) for m in _SILENCE_START.findall(ffmpeg_output)]
    ends = [float(m) for m in _SILENCE_END.findall(ffmpeg_output)]

    if len(ends) > len(starts):
        raise SilenceParseError(
            f"silencedetect output has {len(ends)} silence_end for {len(starts)} silence_start"
        )

    silences = [SilenceRange(start_seconds=s, end_seconds=e) for s, e in zip(starts, ends)]
    if len(starts) > len(ends):
        silences.append(
            SilenceRange(start_seconds=starts[-1], end_seconds=total_duration_seconds)
        )

    return SilenceInput(silences=silences, total_duration_seconds=total_duration_seconds)


def get_silence_stats(processed: ProcessedAvatar, fps: int) -> dict[str, str | int]:
    """Summarize how much the avatar was trimmed."""
    original = frames_to_seconds(processed.original_duration_frames, fps)
    kept = frames_to_seconds(processed.processed_duration_frames, fps)
    ratio = (kept / original * 100) if original > 0 else 0.0

    return {
        "original_duration": f"{original:.2f}s",
        "processed_duration": f"{kept:.2f}s",
        "removed_duration": f"{original - kept:.2f}s",
        "silence_count": len(processed.silence_regions),
        "compression_ratio": f"{ratio:.1f}%",
    }
