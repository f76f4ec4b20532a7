"""Item taxonomy of the 86-item Sensory Profile 2 caregiver questionnaire.

Single source of truth for which section and quadrant an item belongs to and
which items are left out of section raw scores. Nothing else in the package
hardcodes item facts.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from . import config
from .types import Item

SECTIONS: Tuple[str, ...] = (
    "auditoryProcessing",
    "visualProcessing",
    "tactileProcessing",
    "movementProcessing",
    "bodyPositionProcessing",
    "oralSensitivityProcessing",
    "behavioralResponses",
    "socialEmotionalResponses",
    "attentionResponses",
)

QUADRANTS: Tuple[str, ...] = (
    "registrationIncreased",
    "sensorySeek",
    "sensorySensitivity",
    "sensoryAvoidance",
)

SECTION_LABELS: Mapping[str, str] = MappingProxyType({
    "auditoryProcessing": "Processamento AUDITIVO",
    "visualProcessing": "Processamento VISUAL",
    "tactileProcessing": "Processamento do TATO",
    "movementProcessing": "Processamento de MOVIMENTOS",
    "bodyPositionProcessing": "Processamento da POSIÇÃO DO CORPO",
    "oralSensitivityProcessing": "Processamento de SENSIBILIDADE ORAL",
    "behavioralResponses": "CONDUTA associada ao processamento sensorial",
    "socialEmotionalResponses": "Respostas SOCIOEMOCIONAIS",
    "attentionResponses": "Respostas de ATENÇÃO",
})

# form color codes: OB purple, EX orange, SN green, EV blue
QUADRANT_CODES: Mapping[str, str] = MappingProxyType({
    "registrationIncreased": "OB",
    "sensorySeek": "EX",
    "sensorySensitivity": "SN",
    "sensoryAvoidance": "EV",
})

FIRST_ITEM_ID = 1
LAST_ITEM_ID = config.ITEM_COUNT

# inclusive id ranges as printed on the form
_SECTION_RANGES: Mapping[str, Tuple[int, int]] = MappingProxyType({
    "auditoryProcessing": (1, 8),
    "visualProcessing": (9, 15),
    "tactileProcessing": (16, 26),
    "movementProcessing": (27, 34),
    "bodyPositionProcessing": (35, 42),
    "oralSensitivityProcessing": (43, 52),
    "behavioralResponses": (53, 61),
    "socialEmotionalResponses": (62, 75),
    "attentionResponses": (76, 86),
})

EXCLUDED_FROM_SECTION_SCORE: frozenset[int] = frozenset({15, 86})

_QUADRANT_ITEMS: Mapping[str, Tuple[int, ...]] = MappingProxyType({
    "sensorySeek": (
        14, 21, 22, 25, 27, 28, 30, 31, 32, 41, 48, 49, 50, 51, 55, 56, 60, 82, 83,
    ),
    "sensoryAvoidance": (
        1, 2, 5, 15, 18, 58, 59, 61, 63, 64, 65, 66, 67, 68, 70, 71, 72, 74, 75, 81,
    ),
    "sensorySensitivity": (
        3, 6, 9, 13, 16, 19, 20, 44, 45, 46, 47, 52, 69, 73, 77, 78, 84,
    ),
    "registrationIncreased": (
        8, 12, 23, 24, 26, 33, 34, 35, 36, 37, 38, 39, 40, 53, 54, 57, 62, 76, 79, 80, 85, 86,
    ),
})

# Item whose quadrant assignment depends on config.ITEM_86_REGISTRATION.
FLAGGED_QUADRANT_ITEM = 86


def _build_section_map() -> Mapping[int, str]:
    out: Dict[int, str] = {}
    for tag, (lo, hi) in _SECTION_RANGES.items():
        for iid in range(lo, hi + 1):
            out[iid] = tag
    return MappingProxyType(out)


def _build_quadrant_map() -> Mapping[int, str]:
    out: Dict[int, str] = {}
    for tag, ids in _QUADRANT_ITEMS.items():
        for iid in ids:
            out[iid] = tag
    return MappingProxyType(out)


_SECTION_BY_ITEM = _build_section_map()
_QUADRANT_BY_ITEM = _build_quadrant_map()


def is_valid_item_id(item_id: Any) -> bool:
    # bool is an int subclass; True is not item 1
    if isinstance(item_id, bool) or not isinstance(item_id, int):
        return False
    return FIRST_ITEM_ID <= item_id <= LAST_ITEM_ID


def section(item_id: Any) -> Optional[str]:
    if not is_valid_item_id(item_id):
        return None
    return _SECTION_BY_ITEM.get(item_id)


def quadrant(item_id: Any, include_item_86: Optional[bool] = None) -> Optional[str]:
    if not is_valid_item_id(item_id):
        return None
    if item_id == FLAGGED_QUADRANT_ITEM:
        flag = config.ITEM_86_REGISTRATION if include_item_86 is None else include_item_86
        if not flag:
            return None
    return _QUADRANT_BY_ITEM.get(item_id)


def is_excluded_from_section_score(item_id: Any) -> bool:
    return is_valid_item_id(item_id) and item_id in EXCLUDED_FROM_SECTION_SCORE


def get_item(item_id: Any) -> Optional[Item]:
    sec = section(item_id)
    if sec is None:
        return None
    return Item(
        id=item_id,
        section=sec,
        quadrant=quadrant(item_id),
        excluded_from_section_score=is_excluded_from_section_score(item_id),
    )


def all_items() -> Tuple[Item, ...]:
    return tuple(get_item(iid) for iid in range(FIRST_ITEM_ID, LAST_ITEM_ID + 1))  # type: ignore[misc]


def section_id_range(tag: str) -> Tuple[int, int]:
    return _SECTION_RANGES[tag]


def section_item_ids(tag: str) -> Tuple[int, ...]:
    lo, hi = _SECTION_RANGES[tag]
    return tuple(range(lo, hi + 1))


def section_scoring_item_ids(tag: str) -> Tuple[int, ...]:
    return tuple(i for i in section_item_ids(tag) if i not in EXCLUDED_FROM_SECTION_SCORE)


def quadrant_item_ids(tag: str, include_item_86: Optional[bool] = None) -> Tuple[int, ...]:
    return tuple(i for i in _QUADRANT_ITEMS[tag] if quadrant(i, include_item_86) == tag)


__all__ = [
    "SECTIONS",
    "QUADRANTS",
    "SECTION_LABELS",
    "QUADRANT_CODES",
    "EXCLUDED_FROM_SECTION_SCORE",
    "FLAGGED_QUADRANT_ITEM",
    "is_valid_item_id",
    "section",
    "quadrant",
    "is_excluded_from_section_score",
    "get_item",
    "all_items",
    "section_id_range",
    "section_item_ids",
    "section_scoring_item_ids",
    "quadrant_item_ids",
]
