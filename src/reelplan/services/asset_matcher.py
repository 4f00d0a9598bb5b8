"""Asset relevance matching: scores helper assets against script segments
and assigns them greedily by global score."""

import logging
import re
from collections import Counter
from dataclasses import dataclass

from reelplan.models.assets import AssetMatch, AssetMatchResult, AssetType, HelperAsset
from reelplan.models.script import ScriptSegment
from reelplan.services.keywords import normalize_word

logger = logging.getLogger(__name__)

DEFAULT_MIN_RELEVANCE_SCORE = 0.15
DEFAULT_MAX_ASSETS_PER_SEGMENT = 1

DIRECT_WEIGHT = 0.6
PARTIAL_WEIGHT = 0.25
TITLE_WEIGHT = 0.15

_EXTENSION = re.compile(r"\.[^.]+$")
_KEYWORD_SEPARATORS = re.compile(r"[-_\s]+")
_TITLE_SEPARATORS = re.compile(r"[-_]+")


@dataclass(frozen=True)
class Relevance:
    """Score of one segment/asset pair."""

    score: float
    matched_keywords: list[str]


def _basename(path: str) -> str:
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    return _EXTENSION.sub("", name)


def extract_keywords_from_filename(filename: str) -> list[str]:
    """Parse keywords from a filename.

    ``product-demo-walkthrough.mp4`` -> ``["product", "demo", "walkthrough"]``
    """
    parts = _KEYWORD_SEPARATORS.split(_basename(filename))
    return [p for p in (normalize_word(part) for part in parts) if len(p) >= 3]


def title_from_filename(filename: str) -> str:
    """``widget-x_demo.mp4`` -> ``Widget X Demo``"""
    base = _basename(filename) or filename
    return " ".join(w[:1].upper() + w[1:].lower() for w in _TITLE_SEPARATORS.split(base))


def create_helper_asset_from_path(file_path: str, asset_type: AssetType | str) -> HelperAsset:
    """Create a HelperAsset whose title and keywords come from the filename."""
    return HelperAsset(
        type=AssetType(asset_type),
        src=file_path,
        title=title_from_filename(file_path),
        keywords=extract_keywords_from_filename(file_path),
        fit="cover",
    )


def create_assets_from_paths(video_paths: list[str], image_paths: list[str]) -> list[HelperAsset]:
    """Create helper assets for videos first, then images."""
    return [create_helper_asset_from_path(p, AssetType.VIDEO) for p in video_paths] + [
        create_helper_asset_from_path(p, AssetType.IMAGE) for p in image_paths
    ]


def calculate_asset_relevance(segment: ScriptSegment, asset: HelperAsset) -> Relevance:
    """Score how well an asset fits a segment, in [0, 1].

    Combines direct keyword overlap (0.6), substring overlap at half value
    (0.25) and the share of title words of 4+ letters found in the segment
    text (0.15).
    """
    matched: list[str] = []
    direct = 0
    partial = 0

    for seg_kw in segment.keywords:
        for asset_kw in asset.keywords:
            if seg_kw == asset_kw:
                direct += 1
                matched.append(seg_kw)
            elif seg_kw in asset_kw or asset_kw in seg_kw:
                partial += 1
                matched.append(seg_kw)

    title_words = asset.title.lower().split()
    text = segment.text.lower()
    title_hits = sum(1 for w in title_words if len(w) >= 4 and w in text)

    max_possible = max(len(segment.keywords), len(asset.keywords), 1)
    direct_score = min(direct / max_possible, 1.0)
    partial_score = min((partial * 0.5) / max_possible, 1.0)
    title_score = min(title_hits / max(len(title_words), 1), 1.0)

    score = min(
        direct_score * DIRECT_WEIGHT + partial_score * PARTIAL_WEIGHT + title_score * TITLE_WEIGHT,
        1.0,
    )
    return Relevance(score=score, matched_keywords=list(dict.fromkeys(matched)))


def match_assets_to_segments(
    segments: list[ScriptSegment],
    assets: list[HelperAsset],
    min_relevance_score: float = DEFAULT_MIN_RELEVANCE_SCORE,
    max_assets_per_segment: int = DEFAULT_MAX_ASSETS_PER_SEGMENT,
    allow_asset_reuse: bool = True,
) -> AssetMatchResult:
    """Assign assets to segments greedily by global score.

    Every pair scoring at least ``min_relevance_score`` is sorted by score
    (highest first, ties keep segment-then-asset order) and accepted unless
    the segment is full, the asset is taken and reuse is off, or the same
    pair was already accepted. A strong asset therefore goes to its
    best-fitting segment first.
    """
    candidates: list[tuple[str, HelperAsset, Relevance]] = []
    for segment in segments:
        for asset in assets:
            relevance = calculate_asset_relevance(segment, asset)
            if relevance.score >= min_relevance_score:
                candidates.append((segment.id, asset, relevance))

    candidates.sort(key=lambda c: c[2].score, reverse=True)

    matches: list[AssetMatch] = []
    per_segment: Counter[str] = Counter()
    used_assets: set[str] = set()
    used_pairs: set[tuple[str, str]] = set()

    for segment_id, asset, relevance in candidates:
        if per_segment[segment_id] >= max_assets_per_segment:
            continue
        if not allow_asset_reuse and asset.src in used_assets:
            continue
        if (segment_id, asset.src) in used_pairs:
            continue

        matches.append(
            AssetMatch(
                segment_id=segment_id,
                asset=asset,
                relevance_score=relevance.score,
                matched_keywords=relevance.matched_keywords,
            )
        )
        per_segment[segment_id] += 1
        used_assets.add(asset.src)
        used_pairs.add((segment_id, asset.src))
        logger.debug(f"Matched {segment_id} -> {asset.title} ({relevance.score:.2f})")

    result = AssetMatchResult(
        matches=matches,
        unmatched_segments=[s.id for s in segments if per_segment[s.id] == 0],
        unmatched_assets=[a.src for a in assets if a.src not in used_assets],
    )
    logger.info(
        f"Asset matching: {len(candidates)} candidates, {len(matches)} matches, "
        f"{len(result.unmatched_segments)} segments and {len(result.unmatched_assets)} assets unassigned"
    )
    return result


def get_best_asset_for_segment(
    segment: ScriptSegment, assets: list[HelperAsset], min_score: float = 0.2
) -> HelperAsset | None:
    """Return the single highest-scoring asset for a segment, if any clears ``min_score``."""
    best: HelperAsset | None = None
    best_score = 0.0
    for asset in assets:
        score = calculate_asset_relevance(segment, asset).score
        if score > best_score and score >= min_score:
            best, best_score = asset, score
    return best
