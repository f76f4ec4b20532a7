from __future__ import annotations
from types import MappingProxyType
from typing import Any, Mapping

from .errors import InvalidResponse
from .types import MappedValue

NOT_APPLICABLE = 0

# Official Portuguese labels from the Sensory Profile 2 form
CANONICAL_LABELS: Mapping[str, int] = MappingProxyType({
    "quase sempre": 5,        # 90% or more
    "frequentemente": 4,      # 75%
    "metade do tempo": 3,     # 50%
    "ocasionalmente": 2,      # 25%
    "quase nunca": 1,         # 10% or less
    "não se aplica": NOT_APPLICABLE,
})

ENGLISH_LABELS: Mapping[str, int] = MappingProxyType({
    "almost always": 5,
    "frequently": 4,
    "half the time": 3,
    "occasionally": 2,
    "almost never": 1,
    "does not apply": NOT_APPLICABLE,
})

# Older five-point form. Values follow the canonical scale, so the old
# "occasionally = 3" reading is not carried over.
LEGACY_LABELS: Mapping[str, int] = MappingProxyType({
    "always": 5,
    "rarely": 2,
    "never": 1,
    "sempre": 5,
    "raramente": 2,
    "nunca": 1,
})

RESPONSE_VALUES: Mapping[str, int] = MappingProxyType({
    **CANONICAL_LABELS,
    **ENGLISH_LABELS,
    **LEGACY_LABELS,
})

_EXPECTED = ", ".join(CANONICAL_LABELS)


def _normalize(label: Any) -> str | None:
    if not isinstance(label, str):
        return None
    return label.strip().lower()


def try_map_response(label: Any) -> MappedValue:
    """Map a label without raising; failures carry the message instead."""
    key = _normalize(label)
    if key is not None and key in RESPONSE_VALUES:
        return MappedValue(value=RESPONSE_VALUES[key])
    return MappedValue(error=f'Invalid response value: "{label}". Expected: {_EXPECTED}')


def map_response_to_value(label: Any) -> int:
    """
    Returns the 0..5 value for an answer label.
    Case-insensitive and trimmed; 0 is "not applicable".
    Raises InvalidResponse quoting the label exactly as received.
    """
    res = try_map_response(label)
    if not res.ok:
        raise InvalidResponse(label, res.error or "")
    return int(res.value or 0)


def is_recognized(label: Any) -> bool:
    return try_map_response(label).ok


__all__ = [
    "NOT_APPLICABLE",
    "CANONICAL_LABELS",
    "ENGLISH_LABELS",
    "LEGACY_LABELS",
    "RESPONSE_VALUES",
    "try_map_response",
    "map_response_to_value",
    "is_recognized",
]
