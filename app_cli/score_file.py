
from __future__ import annotations
import argparse, json, logging, sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from sensory_core import config
from sensory_core.errors import DataConsistencyError
from sensory_core.export import to_csv, to_json
from sensory_core.scoring import calculate_scores
from sensory_core.types import StoredAssessment
from sensory_core.validators import throw_if_invalid, validate_full_assessment

log = logging.getLogger("app_cli.score_file")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_WARNINGS = 2

def _parse_date(raw: Any) -> Optional[date]:
    if raw in (None, ""): return None
    if isinstance(raw, date): return raw
    s = str(raw)
    return datetime.fromisoformat(s).date() if "T" in s else date.fromisoformat(s)

def _stored(payload: Dict[str, Any]) -> Optional[StoredAssessment]:
    a = payload.get("assessment")
    if not isinstance(a, dict): return None
    return StoredAssessment(
        id=a.get("id"),
        assessment_date=_parse_date(a.get("assessment_date")) or date.today(),
        created_at=_parse_date(a.get("created_at")),
        section_scores=dict(a.get("section_scores") or {}),
    )

def load_submission(path: Path) -> Dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        data = {"responses": data}
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object or list, got {type(data).__name__}")
    return data

def run(payload: Dict[str, Any], strict: bool = False, csv_out: Optional[Path] = None) -> int:
    responses: List[Any] = list(payload.get("responses") or [])
    results = calculate_scores(responses)
    report = to_json(results)
    print(json.dumps(report, indent=2, ensure_ascii=False))
    if csv_out:
        csv_out.parent.mkdir(parents=True, exist_ok=True)
        csv_out.write_text(to_csv(results), encoding="utf-8")
        log.info("scores written to %s", csv_out)

    code = EXIT_WARNINGS if report["warnings"] else EXIT_OK
    if results.invalid_responses:
        for msg in results.invalid_responses: log.error("%s", msg)
        if strict: code = EXIT_INVALID

    stored = _stored(payload)
    if stored is not None:
        check = validate_full_assessment(
            stored,
            responses,
            child_birth_date=_parse_date(payload.get("child_birth_date")),
            expected_age=payload.get("expected_age"),
        )
        print(json.dumps({"validation": check.to_dict()}, indent=2, ensure_ascii=False))
        try:
            throw_if_invalid(check, context=f"Assessment {stored.id}" if stored.id else None)
        except DataConsistencyError as exc:
            log.error("%s", exc)
            return EXIT_INVALID
        if check.warnings: code = max(code, EXIT_WARNINGS)
    return code

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Score a Sensory Profile 2 submission file.")
    ap.add_argument("path", type=Path, help="JSON file: list of responses or {responses, assessment, child_birth_date}")
    ap.add_argument("--strict", action="store_true", help="treat unrecognized answers as a failure")
    ap.add_argument("--csv", type=Path, default=None, help="also write a CSV of scores")
    a = ap.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format="[%(levelname)s] %(message)s")
    try:
        payload = load_submission(a.path)
        return run(payload, strict=a.strict, csv_out=a.csv)
    except (OSError, ValueError) as exc:
        log.error("invalid submission %s: %s", a.path, exc)
        return EXIT_INVALID

if __name__ == "__main__":
    sys.exit(main())
