"""Timing estimation: frame conversion and syllable-weighted word timing."""

import math
import re

# Average speaking pace in words per minute (conversational 120-150).
SPEAKING_PACE_WPM = 140

_NON_ALPHA = re.compile(r"[^a-z]")
_VOWEL_GROUPS = re.compile(r"[aeiouy]+")


def round_frame(value: float) -> int:
    """Round to the nearest frame, halves rounding up."""
    return math.floor(value + 0.5)


def seconds_to_frames(seconds: float, fps: float) -> int:
    """Convert seconds to the nearest frame."""
    return round_frame(seconds * fps)


def frames_to_seconds(frames: int, fps: float) -> float:
    """Convert frames to seconds."""
    return frames / fps


def estimate_word_duration(word_count: int, words_per_minute: float = SPEAKING_PACE_WPM) -> float:
    """Estimate speaking time in seconds for a number of words."""
    return (word_count / words_per_minute) * 60


def estimate_syllables(word: str) -> int:
    """Rough syllable count for an English word (at least 1)."""
    cleaned = _NON_ALPHA.sub("", word.lower())
    if len(cleaned) <= 3:
        return 1

    groups = _VOWEL_GROUPS.findall(cleaned)
    count = len(groups) if groups else 1

    # silent trailing e
    if cleaned.endswith("e") and count > 1:
        count -= 1

    # consonant + "le" is its own syllable ("table", "simple")
    if cleaned.endswith("le") and cleaned[-3] not in "aeiou":
        count += 1

    return max(count, 1)


def estimate_word_frame_duration(word: str, fps: float) -> int:
    """Estimate frames needed to say a word: ~200ms per syllable plus a short gap."""
    seconds = estimate_syllables(word) * 0.2 + 0.05
    return max(seconds_to_frames(seconds, fps), 3)


def distribute_frames_across_words(words: list[str], total_frames: int) -> list[tuple[str, int, int]]:
    """Split ``total_frames`` across words in proportion to their syllables.

    Returns ``(word, start_frame, end_frame)`` tuples relative to 0. Spans are
    contiguous and the last word always ends at ``total_frames``, absorbing
    any rounding error.
    """
    if not words:
        return []

    weights = [estimate_syllables(w) for w in words]
    total_weight = sum(weights)

    result: list[tuple[str, int, int]] = []
    current = 0
    last = len(words) - 1
    for i, word in enumerate(words):
        span = round_frame(weights[i] / total_weight * total_frames)
        end = total_frames if i == last else min(current + span, total_frames)
        result.append((word, current, end))
        current = end

    return result


def calculate_segment_boundaries(word_counts: list[int], total_frames: int) -> list[tuple[int, int, int]]:
    """Allocate frames to segments in proportion to their word counts.

    Returns ``(start_frame, end_frame, duration_frames)`` per segment; the
    last segment ends exactly at ``total_frames``.
    """
    total_words = sum(word_counts)
    result: list[tuple[int, int, int]] = []
    current = 0
    last = len(word_counts) - 1

    for i, count in enumerate(word_counts):
        proportion = count / total_words if total_words else 0.0
        span = round_frame(proportion * total_frames)
        end = total_frames if i == last else min(current + span, total_frames)
        result.append((current, end, end - current))
        current = end

    return result
