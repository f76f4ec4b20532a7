"""Helpers to export scoring results in JSON/CSV formats."""
from __future__ import annotations

from typing import Any, Dict, List
import csv
import io

from . import taxonomy
from .scoring import expected_score_ranges, validate_scores
from .types import AssessmentResults

_FIELDS: tuple[str, ...] = (
    "kind",
    "name",
    "code",
    "label",
    "score",
    "min",
    "max",
)


def _rows(results: AssessmentResults) -> List[Dict[str, Any]]:
    ranges = expected_score_ranges()
    rows: List[Dict[str, Any]] = []
    for tag in taxonomy.SECTIONS:
        lo, hi = ranges["sections"][tag]
        rows.append({
            "kind": "section",
            "name": tag,
            "code": "",
            "label": taxonomy.SECTION_LABELS[tag],
            "score": int(results.section_scores.get(tag, 0)),
            "min": lo,
            "max": hi,
        })
    lo, hi = ranges["total"]
    rows.append({
        "kind": "total",
        "name": "total",
        "code": "",
        "label": "",
        "score": results.total_score,
        "min": lo,
        "max": hi,
    })
    for tag in taxonomy.QUADRANTS:
        rows.append({
            "kind": "quadrant",
            "name": tag,
            "code": taxonomy.QUADRANT_CODES[tag],
            "label": "",
            "score": int(results.quadrant_scores.get(tag, 0)),
            "min": "",
            "max": "",
        })
    return rows


def to_json(results: AssessmentResults) -> Dict[str, Any]:
    """Return a JSON-safe payload with results, range warnings and score rows."""

    payload = results.to_dict()
    payload["warnings"] = validate_scores(results)
    payload["rows"] = _rows(results)
    return payload


def to_csv(results: AssessmentResults) -> str:
    """Render section, total and quadrant scores as CSV with a fixed header."""

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=_FIELDS)
    writer.writeheader()
    for row in _rows(results):
        writer.writerow(row)
    return buf.getvalue()


__all__ = ["to_json", "to_csv"]
