"""Consistency checks for stored assessments and their responses.

Every check returns a ``ConsistencyCheckResult`` and never raises; callers
merge results with ``validate_full_assessment`` and decide whether to escalate
through ``throw_if_invalid``.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime
from typing import Iterable, List, Optional

from . import config
from . import taxonomy
from .errors import DataConsistencyError
from .scoring import ResponseLike, calculate_scores, normalize_responses, validate_scores
from .types import ConsistencyCheckResult, DateLike, StoredAssessment

log = logging.getLogger(__name__)


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _as_datetime(value: DateLike, tzinfo=None) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day, tzinfo=tzinfo)


def _days_between(a: DateLike, b: DateLike) -> float:
    """Absolute distance in fractional days; plain dates count from midnight."""
    tz = next((v.tzinfo for v in (a, b) if isinstance(v, datetime)), None)
    first, second = _as_datetime(a, tz), _as_datetime(b, tz)
    return abs((first - second).total_seconds()) / 86400


def _today(today: Optional[DateLike]) -> date:
    return _as_date(today) if today is not None else date.today()


def age_in_years(birth_date: DateLike, today: Optional[DateLike] = None) -> int:
    birth = _as_date(birth_date)
    now = _today(today)
    age = now.year - birth.year
    if (now.month, now.day) < (birth.month, birth.day):
        age -= 1
    return age


def validate_assessment_score_consistency(
    assessment: StoredAssessment,
    responses: Iterable[ResponseLike],
) -> ConsistencyCheckResult:
    result = ConsistencyCheckResult()
    calculated = calculate_scores(responses)

    for tag in taxonomy.SECTIONS:
        stored = assessment.section_scores.get(tag) or 0
        computed = calculated.section_scores[tag]
        result.checked_fields.append(f"{tag}Score")
        if stored != computed:
            result.error(f"{tag} score mismatch: stored={stored}, calculated={computed}")

    if calculated.invalid_responses:
        result.error(f"Invalid responses detected: {', '.join(calculated.invalid_responses)}")

    result.warnings.extend(validate_scores(calculated))

    log.debug(
        "score consistency assessment=%s valid=%s errors=%d warnings=%d",
        assessment.id, result.is_valid, len(result.errors), len(result.warnings),
    )
    return result


def validate_child_age_consistency(
    birth_date: DateLike,
    expected_age: Optional[int] = None,
    today: Optional[DateLike] = None,
) -> ConsistencyCheckResult:
    result = ConsistencyCheckResult(checked_fields=["birthDate", "age"])
    now = _today(today)
    birth = _as_date(birth_date)
    age = age_in_years(birth, now)

    if birth > now:
        result.error("Birth date cannot be in the future")

    lo, hi = config.AGE_MIN_YEARS, config.AGE_MAX_YEARS
    if age < lo or age > hi:
        result.error(f"Child age {age} is outside valid range ({lo}-{hi} years)")

    if expected_age is not None and expected_age != age:
        result.warnings.append(f"Age mismatch: expected={expected_age}, calculated={age}")

    return result


def validate_response_completeness(responses: Iterable[ResponseLike]) -> ConsistencyCheckResult:
    result = ConsistencyCheckResult(checked_fields=["responses"])
    item_ids = [r.item_id for r in normalize_responses(responses)]

    valid_ids = [iid for iid in item_ids if taxonomy.is_valid_item_id(iid)]
    for tag in taxonomy.SECTIONS:
        lo, hi = taxonomy.section_id_range(tag)
        expected = hi - lo + 1
        actual = sum(1 for iid in valid_ids if lo <= iid <= hi)
        pct = actual / expected * 100
        if actual == 0:
            result.error(f"No responses found for {tag} section")
        elif pct < config.COMPLETENESS_WARN_PCT:
            result.warnings.append(
                f"{tag} section is {pct:.1f}% complete ({actual}/{expected} items)"
            )

    # True == 1 and 2.0 == 2 as Counter keys, so only well-formed ids are counted
    counts = Counter(valid_ids)
    duplicates = [iid for iid in dict.fromkeys(valid_ids) if counts[iid] > 1]
    if duplicates:
        result.error(f"Duplicate responses found for items: {', '.join(str(i) for i in duplicates)}")

    invalid_ids = [iid for iid in item_ids if not taxonomy.is_valid_item_id(iid)]
    if invalid_ids:
        result.error(f"Invalid item IDs found: {', '.join(str(i) for i in invalid_ids)}")

    return result


def validate_assessment_date_consistency(
    assessment_date: DateLike,
    child_birth_date: DateLike,
    created_at: Optional[DateLike] = None,
    today: Optional[DateLike] = None,
) -> ConsistencyCheckResult:
    result = ConsistencyCheckResult(
        checked_fields=["assessmentDate", "childBirthDate", "createdAt"]
    )
    now = _today(today)
    assessed = _as_date(assessment_date)
    birth = _as_date(child_birth_date)

    if assessed > now:
        result.error("Assessment date cannot be in the future")
    if assessed < birth:
        result.error("Assessment date cannot be before child's birth date")

    age_days = (now - assessed).days
    if age_days > config.STALE_ASSESSMENT_DAYS:
        result.warnings.append(f"Assessment is {age_days // 365} years old")

    if created_at is not None:
        drift = _days_between(assessment_date, created_at)
        if drift > config.CREATED_AT_DRIFT_DAYS:
            result.warnings.append(
                f"Assessment date differs from creation date by {int(drift)} days"
            )

    return result


def validate_full_assessment(
    assessment: StoredAssessment,
    responses: Iterable[ResponseLike],
    child_birth_date: Optional[DateLike] = None,
    expected_age: Optional[int] = None,
    today: Optional[DateLike] = None,
) -> ConsistencyCheckResult:
    raw = normalize_responses(responses)
    checks: List[ConsistencyCheckResult] = [
        validate_assessment_score_consistency(assessment, raw),
        validate_response_completeness(raw),
    ]
    if child_birth_date is not None:
        checks.append(validate_child_age_consistency(child_birth_date, expected_age, today))
        checks.append(
            validate_assessment_date_consistency(
                assessment.assessment_date, child_birth_date, assessment.created_at, today
            )
        )

    result = ConsistencyCheckResult().merge(checks)
    log.info(
        "full validation assessment=%s valid=%s errors=%d warnings=%d fields=%d",
        assessment.id, result.is_valid, len(result.errors), len(result.warnings),
        len(result.checked_fields),
    )
    return result


def throw_if_invalid(result: ConsistencyCheckResult, context: Optional[str] = None) -> None:
    if not result.is_valid:
        prefix = f"{context}: " if context else ""
        raise DataConsistencyError(
            prefix + "; ".join(result.errors),
            inconsistent_field="multiple_fields",
            errors=result.errors,
            warnings=result.warnings,
        )
    if result.warnings:
        log.warning("data consistency warnings context=%s: %s", context, "; ".join(result.warnings))


__all__ = [
    "age_in_years",
    "validate_assessment_score_consistency",
    "validate_child_age_consistency",
    "validate_response_completeness",
    "validate_assessment_date_consistency",
    "validate_full_assessment",
    "throw_if_invalid",
]
