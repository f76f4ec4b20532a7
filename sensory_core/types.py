
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

DateLike = Union[date, datetime]

@dataclass(frozen=True)
class Item:
    id: int
    section: str
    quadrant: Optional[str] = None
    excluded_from_section_score: bool = False

@dataclass(frozen=True)
class RawResponse:
    item_id: Any; label: Any

@dataclass(frozen=True)
class ScoredResponse:
    item_id: int; value: int

@dataclass(frozen=True)
class MappedValue:
    """Outcome of mapping one label: either a value or an error message."""
    value: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

@dataclass(frozen=True)
class AssessmentResults:
    section_scores: Dict[str, int]
    quadrant_scores: Dict[str, int]
    total_items: int
    valid_responses: int
    invalid_responses: List[str] = field(default_factory=list)

    @property
    def total_score(self) -> int:
        return sum(self.section_scores.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "section_scores": dict(self.section_scores),
            "quadrant_scores": dict(self.quadrant_scores),
            "total_score": self.total_score,
            "total_items": self.total_items,
            "valid_responses": self.valid_responses,
            "invalid_responses": list(self.invalid_responses),
        }

@dataclass
class ConsistencyCheckResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    checked_fields: List[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)
        self.is_valid = False

    def merge(self, others: Iterable["ConsistencyCheckResult"]) -> "ConsistencyCheckResult":
        for other in others:
            self.errors.extend(other.errors)
            self.warnings.extend(other.warnings)
            self.checked_fields.extend(other.checked_fields)
            if not other.is_valid:
                self.is_valid = False
        self.checked_fields = list(dict.fromkeys(self.checked_fields))
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "checked_fields": list(self.checked_fields),
        }

@dataclass(frozen=True)
class StoredAssessment:
    """Assessment record as persisted by the caller, re-read for validation."""
    assessment_date: DateLike
    section_scores: Dict[str, Optional[int]] = field(default_factory=dict)
    id: Optional[str] = None
    created_at: Optional[DateLike] = None
