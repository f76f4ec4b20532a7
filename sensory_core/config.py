from __future__ import annotations
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


ITEM_COUNT: int = 86
SCALE_MIN: int = 1
SCALE_MAX: int = 5

# Item 86 is excluded from section scoring, but the printed quadrant table lists
# it under registrationIncreased. Pending product clarification both readings
# are supported; on keeps the quadrant table as printed.
ITEM_86_REGISTRATION: bool = True

AGE_MIN_YEARS: int = 3
AGE_MAX_YEARS: int = 14

COMPLETENESS_WARN_PCT: float = 75.0
STALE_ASSESSMENT_DAYS: int = 365 * 2
CREATED_AT_DRIFT_DAYS: int = 30

LOG_LEVEL: str = "INFO"

# // env overrides for staging/ops; defaults follow the printed form.
ITEM_86_REGISTRATION = _env_bool("ITEM_86_REGISTRATION", ITEM_86_REGISTRATION)
AGE_MIN_YEARS = _env_int("AGE_MIN_YEARS", AGE_MIN_YEARS)
AGE_MAX_YEARS = _env_int("AGE_MAX_YEARS", AGE_MAX_YEARS)
COMPLETENESS_WARN_PCT = _env_float("COMPLETENESS_WARN_PCT", COMPLETENESS_WARN_PCT)
STALE_ASSESSMENT_DAYS = _env_int("STALE_ASSESSMENT_DAYS", STALE_ASSESSMENT_DAYS)
CREATED_AT_DRIFT_DAYS = _env_int("CREATED_AT_DRIFT_DAYS", CREATED_AT_DRIFT_DAYS)
LOG_LEVEL = os.getenv("LOG_LEVEL", LOG_LEVEL).upper()
