"""Error classes raised at the edges of the scoring engine.

Each class carries the HTTP status family it maps to, so the API adapter can
translate without a lookup table. The engine itself accumulates problems into
result objects; these are raised only by ``map_response_to_value``,
``throw_if_invalid`` and the adapters in strict mode.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class SensoryError(Exception):
    status_code: int = 500
    is_operational: bool = False

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


# 400
class ValidationError(SensoryError):
    status_code = 400
    is_operational = True

    def __init__(self, message: str, details: Any = None, cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.details = details


class InvalidResponse(ValidationError):
    """An answer label outside the accepted vocabulary."""

    def __init__(self, label: Any, message: str) -> None:
        super().__init__(message, details={"label": label})
        self.label = label


class ScoringError(SensoryError):
    status_code = 400
    is_operational = True

    def __init__(
        self,
        message: str,
        invalid_items: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause)
        self.invalid_items = list(invalid_items or [])


# 422
class BusinessLogicError(SensoryError):
    status_code = 422
    is_operational = True

    def __init__(
        self,
        message: str,
        business_rule: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, cause)
        self.business_rule = business_rule


class DataConsistencyError(BusinessLogicError):
    def __init__(
        self,
        message: str,
        inconsistent_field: Optional[str] = None,
        errors: Optional[List[str]] = None,
        warnings: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, "data_consistency", cause)
        self.inconsistent_field = inconsistent_field
        self.errors = list(errors or [])
        self.warnings = list(warnings or [])


def serialize_error(exc: BaseException) -> Dict[str, Any]:
    """JSON-safe description of an exception for logs and API bodies."""

    out: Dict[str, Any] = {
        "type": type(exc).__name__,
        "message": str(exc),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if not isinstance(exc, SensoryError):
        return out
    out["statusCode"] = exc.status_code
    out["isOperational"] = exc.is_operational
    if isinstance(exc, ValidationError) and exc.details is not None:
        out["details"] = exc.details
    if isinstance(exc, ScoringError):
        out["invalidItems"] = exc.invalid_items
    if isinstance(exc, BusinessLogicError):
        out["businessRule"] = exc.business_rule
    if isinstance(exc, DataConsistencyError):
        out["inconsistentField"] = exc.inconsistent_field
        out["errors"] = exc.errors
        out["warnings"] = exc.warnings
    return out


__all__ = [
    "SensoryError",
    "ValidationError",
    "InvalidResponse",
    "ScoringError",
    "BusinessLogicError",
    "DataConsistencyError",
    "serialize_error",
]
