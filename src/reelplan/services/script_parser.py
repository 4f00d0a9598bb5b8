"""Script segmenter: splits raw script text into timed, analyzed segments."""

import logging
import re

from reelplan.errors import ScriptParseError
from reelplan.models.script import ParsedScript, ScriptSegment, Word
from reelplan.services.keywords import (
    determine_importance,
    extract_key_phrases,
    extract_keywords,
    is_stop_word,
    normalize_word,
)
from reelplan.services.timing import (
    SPEAKING_PACE_WPM,
    calculate_segment_boundaries,
    distribute_frames_across_words,
    estimate_word_duration,
    seconds_to_frames,
)

logger = logging.getLogger(__name__)

DEFAULT_MIN_SEGMENT_WORDS = 5
DEFAULT_MAX_SEGMENT_WORDS = 25

_MISSING_SPACE = re.compile(r"([.!?])([A-Z])")
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+(?=[A-Z])|(?<=\n)\s*(?=\S)")


def clean_script_text(text: str) -> str:
    """Normalize line endings and whitespace.

    Sentence punctuation directly followed by a capital letter gets a space
    inserted. Paragraph breaks are kept as single newlines so they still
    act as sentence boundaries.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _MISSING_SPACE.sub(r"\1 \2", text)
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n+ *", "\n", text)
    return text.strip()


def split_into_sentences(text: str) -> list[str]:
    """Split on '.!?' + whitespace + capital letter, or on a line break."""
    parts = _SENTENCE_BOUNDARY.split(text)
    return [" ".join(p.split()) for p in parts if p.strip()]


def group_into_segments(sentences: list[str], min_words: int, max_words: int) -> list[str]:
    """Greedily group sentences into segments of bounded word count.

    The current group is flushed when adding the next sentence would exceed
    ``max_words`` and the group already holds ``min_words``. A sentence
    longer than ``max_words`` becomes a segment of its own and is never split.
    """
    segments: list[str] = []
    current: list[str] = []
    current_words = 0

    for sentence in sentences:
        sentence_words = len(sentence.split())

        if sentence_words > max_words:
            if current:
                segments.append(" ".join(current))
                current = []
                current_words = 0
            segments.append(sentence)
            continue

        if current_words + sentence_words > max_words and current_words >= min_words:
            segments.append(" ".join(current))
            current = []
            current_words = 0

        current.append(sentence)
        current_words += sentence_words

    if current:
        segments.append(" ".join(current))

    return segments


def _words_with_timing(
    text: str,
    segment_start: int,
    segment_duration: int,
    keywords: list[str],
) -> list[Word]:
    timings = distribute_frames_across_words(text.split(), segment_duration)
    return [
        Word(
            text=word,
            start_frame=segment_start + start,
            end_frame=segment_start + end,
            is_keyword=normalize_word(word) in keywords and not is_stop_word(word),
        )
        for word, start, end in timings
    ]


def _has_key_phrase(text: str, key_phrases: list[str]) -> bool:
    lowered = text.lower()
    return any(phrase.lower() in lowered for phrase in key_phrases)


def parse_script(
    script_text: str,
    fps: int,
    total_duration_frames: int | None = None,
    min_segment_words: int = DEFAULT_MIN_SEGMENT_WORDS,
    max_segment_words: int = DEFAULT_MAX_SEGMENT_WORDS,
) -> ParsedScript:
    """Parse a script into analyzed, timed segments.

    Args:
        script_text: Raw script text
        fps: Frames per second
        total_duration_frames: Frames the script must span (e.g. the avatar
            length). Estimated from the word count when omitted.
        min_segment_words: Minimum words before a segment may be flushed
        max_segment_words: Maximum words per multi-sentence segment

    Returns:
        ParsedScript whose segment durations sum to the total exactly

    Raises:
        ScriptParseError: If the script yields no segments
    """
    if min_segment_words < 1 or max_segment_words < min_segment_words:
        raise ValueError("segment word limits must satisfy 1 <= min <= max")

    cleaned = clean_script_text(script_text)
    sentences = split_into_sentences(cleaned)
    texts = group_into_segments(sentences, min_segment_words, max_segment_words)
    if not texts:
        raise ScriptParseError("Script produced no segments")

    word_counts = [len(t.split()) for t in texts]
    total_words = sum(word_counts)

    if total_duration_frames is None:
        estimated = estimate_word_duration(total_words, SPEAKING_PACE_WPM)
        total_duration_frames = seconds_to_frames(estimated, fps)
        logger.debug(f"Estimated script duration: {estimated:.2f}s ({total_duration_frames} frames)")

    key_phrases = extract_key_phrases(cleaned)
    boundaries = calculate_segment_boundaries(word_counts, total_duration_frames)

    segments: list[ScriptSegment] = []
    for index, (text, (start, end, duration)) in enumerate(zip(texts, boundaries)):
        keywords = extract_keywords(text)
        segments.append(
            ScriptSegment(
                id=f"segment-{index + 1}",
                text=text,
                words=_words_with_timing(text, start, duration, keywords),
                start_frame=start,
                end_frame=end,
                duration_frames=duration,
                keywords=keywords,
                importance=determine_importance(text),
                has_key_phrase=_has_key_phrase(text, key_phrases),
            )
        )

    logger.info(
        f"Parsed script: {len(sentences)} sentences, {len(segments)} segments, "
        f"{total_words} words over {total_duration_frames} frames"
    )

    return ParsedScript(
        segments=segments,
        total_words=total_words,
        total_frames=total_duration_frames,
        all_keywords=extract_keywords(cleaned),
        key_phrases=key_phrases,
    )


def realign_segment_timings(parsed: ParsedScript, actual_total_frames: int) -> ParsedScript:
    """Re-time segments and words against a measured total frame count.

    Sentences are not re-split; keywords, importance and key-phrase flags are
    carried over. Returns a new ParsedScript.
    """
    boundaries = calculate_segment_boundaries(
        [s.word_count for s in parsed.segments], actual_total_frames
    )

    segments = [
        segment.model_copy(
            update={
                "start_frame": start,
                "end_frame": end,
                "duration_frames": duration,
                "words": _words_with_timing(segment.text, start, duration, segment.keywords),
            }
        )
        for segment, (start, end, duration) in zip(parsed.segments, boundaries)
    ]

    logger.info(f"Realigned {len(segments)} segments: {parsed.total_frames} -> {actual_total_frames} frames")
    return parsed.model_copy(update={"segments": segments, "total_frames": actual_total_frames})
