from __future__ import annotations
import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from . import config
from . import taxonomy
from .responses import NOT_APPLICABLE, try_map_response
from .types import AssessmentResults, RawResponse, ScoredResponse

log = logging.getLogger(__name__)

ResponseLike = Any  # RawResponse | (item_id, label) | {"item_id"/"itemId", "label"/"response"}


def _as_raw(resp: ResponseLike) -> RawResponse:
    if isinstance(resp, RawResponse):
        return resp
    if isinstance(resp, Mapping):
        iid = resp.get("item_id", resp.get("itemId"))
        label = resp.get("label", resp.get("response"))
        return RawResponse(item_id=iid, label=label)
    if isinstance(resp, (tuple, list)) and len(resp) == 2:
        return RawResponse(item_id=resp[0], label=resp[1])
    # objects exposing item_id/label, e.g. ORM rows
    return RawResponse(
        item_id=getattr(resp, "item_id", None),
        label=getattr(resp, "label", getattr(resp, "response", None)),
    )


def normalize_responses(responses: Iterable[ResponseLike]) -> List[RawResponse]:
    return [_as_raw(r) for r in (responses or [])]


def _blank(keys: Sequence[str]) -> Dict[str, int]:
    return {k: 0 for k in keys}


def score_responses(responses: Iterable[ResponseLike]) -> Tuple[List[ScoredResponse], List[str]]:
    """Validate ids and map labels. Returns (scored, invalid messages)."""
    scored: List[ScoredResponse] = []
    invalid: List[str] = []
    for r in normalize_responses(responses):
        if not taxonomy.is_valid_item_id(r.item_id):
            invalid.append(f"Invalid item ID: {r.item_id}")
            continue
        mapped = try_map_response(r.label)
        if not mapped.ok:
            invalid.append(f"Item {r.item_id}: {mapped.error}")
            continue
        scored.append(ScoredResponse(item_id=r.item_id, value=int(mapped.value or 0)))
    return scored, invalid


def calculate_section_scores(responses: Iterable[ResponseLike]) -> Tuple[Dict[str, int], List[str]]:
    scores = _blank(taxonomy.SECTIONS)
    invalid: List[str] = []
    for r in normalize_responses(responses):
        if not taxonomy.is_valid_item_id(r.item_id):
            invalid.append(f"Invalid item ID: {r.item_id}")
            continue
        if taxonomy.is_excluded_from_section_score(r.item_id):
            continue
        mapped = try_map_response(r.label)
        if not mapped.ok:
            invalid.append(f"Item {r.item_id}: {mapped.error}")
            continue
        if mapped.value == NOT_APPLICABLE:
            continue
        sec = taxonomy.section(r.item_id)
        if sec is None:
            invalid.append(f"No section mapping for item {r.item_id}")
            continue
        scores[sec] += int(mapped.value or 0)
    return scores, invalid


def calculate_quadrant_scores(responses: Iterable[ResponseLike]) -> Tuple[Dict[str, int], List[str]]:
    scores = _blank(taxonomy.QUADRANTS)
    scored, invalid = score_responses(responses)
    for sr in scored:
        quad = taxonomy.quadrant(sr.item_id)
        if quad is not None:
            scores[quad] += sr.value
    return scores, invalid


def calculate_scores(responses: Iterable[ResponseLike]) -> AssessmentResults:
    """
    Section and quadrant raw scores for one response set.
    Both score maps are always fully populated; bad items are listed in
    invalid_responses rather than raised.
    """
    raw = normalize_responses(responses)
    section_scores, section_invalid = calculate_section_scores(raw)
    quadrant_scores, quadrant_invalid = calculate_quadrant_scores(raw)
    invalid = list(dict.fromkeys(section_invalid + quadrant_invalid))
    if invalid:
        log.debug("scoring: %d of %d responses invalid", len(invalid), len(raw))
    return AssessmentResults(
        section_scores=section_scores,
        quadrant_scores=quadrant_scores,
        total_items=len(raw),
        valid_responses=len(raw) - len(invalid),
        invalid_responses=invalid,
    )


def expected_score_ranges() -> Dict[str, Any]:
    lo, hi = config.SCALE_MIN, config.SCALE_MAX
    sections: Dict[str, Tuple[int, int]] = {}
    total_items = 0
    for tag in taxonomy.SECTIONS:
        n = len(taxonomy.section_scoring_item_ids(tag))
        sections[tag] = (n * lo, n * hi)
        total_items += n
    return {"sections": sections, "total": (total_items * lo, total_items * hi)}


def validate_scores(results: AssessmentResults) -> List[str]:
    ranges = expected_score_ranges()
    warnings: List[str] = []
    for tag, score in results.section_scores.items():
        lo, hi = ranges["sections"][tag]
        if score < lo or score > hi:
            warnings.append(f"{tag} score {score} is outside expected range {lo}-{hi}")
    total = results.total_score
    lo, hi = ranges["total"]
    if total < lo or total > hi:
        warnings.append(f"Total score {total} is outside expected range {lo}-{hi}")
    return warnings


__all__ = [
    "normalize_responses",
    "score_responses",
    "calculate_section_scores",
    "calculate_quadrant_scores",
    "calculate_scores",
    "expected_score_ranges",
    "validate_scores",
]
