"""Lexical keyword extraction and importance classification."""

import re
from collections.abc import Iterable

from reelplan.models.script import ImportanceLevel

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "shall", "can", "need", "dare", "ought",
    "used", "it", "its", "this", "that", "these", "those", "i", "you", "he",
    "she", "we", "they", "what", "which", "who", "whom", "when", "where",
    "why", "how", "all", "each", "every", "both", "few", "more", "most",
    "other", "some", "such", "no", "nor", "not", "only", "own", "same", "so",
    "than", "too", "very", "just", "also", "now", "here", "there", "then",
    "once", "if", "about", "into", "through", "during", "before", "after",
    "above", "below", "between", "under", "again", "further", "while",
    "get", "got", "getting", "go", "going", "goes", "went", "come", "coming",
    "came", "let", "lets", "like", "know", "think", "want", "see", "look",
    "make", "way", "well", "back", "being", "because", "even", "still",
    "actually", "really", "basically", "literally", "um", "uh", "yeah", "okay",
})

# Launch words, superlatives, urgency and money/percentage/multiplier figures
HIGH_IMPORTANCE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(introducing|announcing|presenting|launching)", re.IGNORECASE),
    re.compile(r"^(new|first|only|best|top|leading)", re.IGNORECASE),
    re.compile(r"\b(revolutionary|groundbreaking|game-?changing|innovative)\b", re.IGNORECASE),
    re.compile(r"\b(exclusive|limited|special|premium)\b", re.IGNORECASE),
    re.compile(r"\b(free|save|discount|offer|deal)\b", re.IGNORECASE),
    re.compile(r"\b(now|today|finally|available)\b", re.IGNORECASE),
    re.compile(r"\b(secret|key|important|crucial|essential)\b", re.IGNORECASE),
    re.compile(r"\b(step|tip|trick|hack|strategy)\b", re.IGNORECASE),
    re.compile(r"\b\d+%|\$\d+|\d+x\b", re.IGNORECASE),
)

CTA_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(click|tap|swipe|subscribe|follow|like|share|comment)\b", re.IGNORECASE),
    re.compile(r"\b(sign up|get started|join|download|try|buy|order)\b", re.IGNORECASE),
    re.compile(r"\b(link in bio|check out|learn more|find out)\b", re.IGNORECASE),
    re.compile(r"\b(don't miss|don't wait|act now|hurry)\b", re.IGNORECASE),
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_QUOTED = re.compile(r'"([^"]+)"')
_BRAND_NAME = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)\b")
_NUMBERED = re.compile(r"\b(\d+\s+\w+)\b")


def _unique(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def normalize_word(word: str) -> str:
    """Lowercase and strip everything but ASCII letters and digits."""
    return _NON_ALNUM.sub("", word.lower())


def is_stop_word(word: str, stop_words: frozenset[str] = STOP_WORDS) -> bool:
    """Check if a word is a stop word."""
    return normalize_word(word) in stop_words


def extract_keywords(text: str, stop_words: frozenset[str] = STOP_WORDS) -> list[str]:
    """Extract normalized keywords from text.

    A token is kept when its normalized form has at least 3 characters, it
    is not a stop word, and it is capitalized, contains a digit, or is at
    least 5 characters long. Duplicates are dropped, first occurrence wins.
    """
    keywords: list[str] = []
    for word in text.split():
        normalized = normalize_word(word)
        if len(normalized) < 3 or normalized in stop_words:
            continue

        is_proper_noun = word[0].isupper() and len(word) > 1
        has_digit = any(ch.isdigit() for ch in word)
        is_long_word = len(normalized) >= 5

        if is_proper_noun or has_digit or is_long_word:
            keywords.append(normalized)

    return _unique(keywords)


def has_high_importance_indicator(
    text: str, patterns: Iterable[re.Pattern[str]] = HIGH_IMPORTANCE_PATTERNS
) -> bool:
    """Check if text contains a high-importance indicator."""
    return any(p.search(text) for p in patterns)


def has_cta(text: str, patterns: Iterable[re.Pattern[str]] = CTA_PATTERNS) -> bool:
    """Check if text contains a call to action."""
    return any(p.search(text) for p in patterns)


def determine_importance(
    text: str,
    high_patterns: Iterable[re.Pattern[str]] = HIGH_IMPORTANCE_PATTERNS,
    cta_patterns: Iterable[re.Pattern[str]] = CTA_PATTERNS,
) -> ImportanceLevel:
    """Classify text as high, medium or low importance.

    High: any high-impact or call-to-action pattern matches.
    Medium: keyword density above 0.3 or at least 3 keywords.
    Low: everything else.
    """
    if has_high_importance_indicator(text, high_patterns) or has_cta(text, cta_patterns):
        return ImportanceLevel.HIGH

    word_count = max(len(text.split()), 1)
    keywords = extract_keywords(text)
    density = len(keywords) / word_count
    if density > 0.3 or len(keywords) >= 3:
        return ImportanceLevel.MEDIUM

    return ImportanceLevel.LOW


def is_highlight_word(word: str, segment_keywords: list[str]) -> bool:
    """Check if a word should be highlighted in captions."""
    return normalize_word(word) in segment_keywords or has_high_importance_indicator(word)


def extract_brand_names(text: str) -> list[str]:
    """Extract capitalized multi-word sequences such as 'Superheat Water Heater'."""
    return _unique(_BRAND_NAME.findall(text))


def extract_key_phrases(text: str) -> list[str]:
    """Extract phrases worth showing on screen.

    Collects quoted phrases, brand-like capitalized sequences and
    "number + word" patterns such as "3 steps".
    """
    phrases: list[str] = []
    phrases.extend(_QUOTED.findall(text))
    phrases.extend(extract_brand_names(text))
    phrases.extend(_NUMBERED.findall(text))
    return _unique(phrases)


def calculate_relevance_score(source_keywords: list[str], target_keywords: list[str]) -> float:
    """Overlap between two keyword lists, normalized by the smaller set.

    Exact matches count 1, substring matches count 0.5. The result is not
    clamped and may exceed 1 when many partial matches occur.
    """
    if not source_keywords or not target_keywords:
        return 0.0

    source = _unique(normalize_word(k) for k in source_keywords)
    target = _unique(normalize_word(k) for k in target_keywords)
    target_set = set(target)

    matches = 0.0
    for keyword in source:
        if keyword in target_set:
            matches += 1
        for other in target:
            if keyword in other or other in keyword:
                matches += 0.5

    max_possible = min(len(source), len(target))
    return matches / max_possible if max_possible else 0.0
