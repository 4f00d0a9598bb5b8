"""Loading and applying externally prepared editorial decisions."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from reelplan.errors import DecisionLoadError
from reelplan.models.assets import AssetType, HelperAsset
from reelplan.models.decisions import DecisionCoverage, EditorialDecision, EditorialDecisions
from reelplan.models.layout import LayoutDecision, LayoutType, TransitionConfig, TransitionType
from reelplan.models.project import SfxConfig
from reelplan.models.script import ScriptSegment
from reelplan.services.asset_matcher import create_helper_asset_from_path

logger = logging.getLogger(__name__)

DECISION_SFX_VOLUME = 0.3
FALLBACK_TRANSITION_FRAMES = 8

_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".svg"}


def load_editorial_decisions(path: Path) -> EditorialDecisions:
    """Load a decisions record from a JSON file.

    Raises:
        DecisionLoadError: If the file is missing, not JSON, or malformed
    """
    path = Path(path)
    if not path.exists():
        raise DecisionLoadError(f"Decisions file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return EditorialDecisions.model_validate(data)
    except json.JSONDecodeError as e:
        raise DecisionLoadError(f"Invalid JSON in {path}: {e}") from e
    except ValidationError as e:
        raise DecisionLoadError(f"Invalid decisions record in {path}: {e}") from e


def create_helper_asset_from_decision(decision: EditorialDecision) -> HelperAsset | None:
    """Turn a decision's asset reference into a HelperAsset, typed by extension."""
    if not decision.asset:
        return None
    asset_type = AssetType.IMAGE if Path(decision.asset).suffix.lower() in _IMAGE_EXTENSIONS else AssetType.VIDEO
    return create_helper_asset_from_path(decision.asset, asset_type)


def validate_decisions(record: EditorialDecisions, segment_ids: list[str]) -> DecisionCoverage:
    """Compare decision ids with segment ids."""
    decided = [d.id for d in record.segments]
    missing = [sid for sid in segment_ids if sid not in decided]
    known = set(segment_ids)
    extra = [did for did in decided if did not in known]
    return DecisionCoverage(valid=not missing, missing=missing, extra=extra)


def decisions_to_layout_decisions(
    record: EditorialDecisions,
    segments: list[ScriptSegment],
    sfx: SfxConfig,
    fallback_transition_frames: int = FALLBACK_TRANSITION_FRAMES,
) -> tuple[list[LayoutDecision], list[str]]:
    """Convert a decisions record into layout decisions, one per segment.

    A segment without a decision falls back to layout A with a fade. That
    usually means the record is stale, so every fallback is returned as a
    warning.

    Returns:
        Tuple of (layout decisions, warnings)
    """
    decisions: list[LayoutDecision] = []
    warnings: list[str] = []

    for segment in segments:
        decision = record.get(segment.id)
        if decision is None:
            message = f"No editorial decision for {segment.id}; using layout A with fade"
            logger.warning(message)
            warnings.append(message)
            decisions.append(
                LayoutDecision(
                    segment_id=segment.id,
                    layout=LayoutType.A,
                    transition=TransitionConfig(
                        type=TransitionType.FADE,
                        duration_frames=fallback_transition_frames,
                        sfx_volume=DECISION_SFX_VOLUME,
                    ),
                    reasoning="Default fallback - no editorial decision",
                )
            )
            continue

        has_motion = decision.transition not in (TransitionType.CUT, TransitionType.NONE)
        decisions.append(
            LayoutDecision(
                segment_id=segment.id,
                layout=decision.layout,
                helper_asset=create_helper_asset_from_decision(decision),
                transition=TransitionConfig(
                    type=decision.transition,
                    duration_frames=decision.transition_duration,
                    sfx=sfx.swoosh if has_motion else None,
                    sfx_volume=DECISION_SFX_VOLUME,
                ),
                reasoning=decision.reasoning,
            )
        )
        logger.debug(f"{segment.id}: layout {decision.layout.value} -> {decision.asset or 'no asset'}")

    return decisions, warnings
