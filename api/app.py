from __future__ import annotations
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any
import datetime as dt, logging, os

# ---- Engine imports ----
from sensory_core import config
from sensory_core.errors import ScoringError, SensoryError, serialize_error
from sensory_core.export import to_csv, to_json
from sensory_core.scoring import calculate_scores
from sensory_core.taxonomy import SECTIONS, all_items
from sensory_core.types import RawResponse, StoredAssessment
from sensory_core.validators import throw_if_invalid, validate_full_assessment

log = logging.getLogger(__name__)

app = FastAPI(title="Sensory Profile Scoring API")

ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)


@app.exception_handler(SensoryError)
async def _sensory_error_handler(request: Request, exc: SensoryError):
    body = serialize_error(exc)
    if exc.is_operational:
        log.warning("operational error %s %s: %s", request.method, request.url.path, exc)
    else:
        log.error("system error %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": body})


# ---- Schemas ----
class ResponseIn(BaseModel):
    # left loose so bad items reach the engine and land in invalid_responses
    item_id: Any = None
    response: Any = None

class ScoreReq(BaseModel):
    responses: list[ResponseIn] = Field(default_factory=list)
    strict: bool = False

class StoredAssessmentIn(BaseModel):
    id: str | None = None
    assessment_date: dt.date
    created_at: dt.datetime | None = None
    section_scores: dict[str, int | None] = Field(default_factory=dict)

class ValidateReq(BaseModel):
    assessment: StoredAssessmentIn
    responses: list[ResponseIn] = Field(default_factory=list)
    child_birth_date: dt.date | None = None
    expected_age: int | None = None
    raise_on_invalid: bool = False

# ---- Helpers ----
def _raw(responses: list[ResponseIn]) -> list[RawResponse]:
    return [RawResponse(item_id=r.item_id, label=r.response) for r in responses]


def _score(req: ScoreReq):
    results = calculate_scores(_raw(req.responses))
    if req.strict and results.invalid_responses:
        raise ScoringError(
            f"Invalid responses: {'; '.join(results.invalid_responses)}",
            invalid_items=results.invalid_responses,
        )
    return results

# ---- Health ----
@app.get("/")
def root():
    return {"status": "ok", "service": "sensory-profile-scoring"}

@app.get("/health")
def health():
    return {"status": "ok", "item_86_registration": bool(config.ITEM_86_REGISTRATION)}

# ---- Taxonomy ----
@app.get("/items")
def list_items():
    return {"items": [it.__dict__ for it in all_items()]}

# ---- Scoring ----
@app.post("/scores")
def score(req: ScoreReq):
    return to_json(_score(req))

@app.post("/scores/export.csv")
def score_csv(req: ScoreReq):
    body = to_csv(_score(req))
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=\"scores.csv\""},
    )

# ---- Validation ----
@app.post("/assessments/validate")
def validate_assessment(req: ValidateReq):
    a = req.assessment
    stored = StoredAssessment(
        id=a.id,
        assessment_date=a.assessment_date,
        created_at=a.created_at,
        section_scores=dict(a.section_scores),
    )
    unknown = sorted(set(a.section_scores) - set(SECTIONS))
    if unknown:
        raise HTTPException(400, f"unknown sections: {', '.join(unknown)}")
    result = validate_full_assessment(
        stored,
        _raw(req.responses),
        child_birth_date=req.child_birth_date,
        expected_age=req.expected_age,
    )
    if req.raise_on_invalid:
        throw_if_invalid(result, context=f"Assessment {a.id}" if a.id else None)
    return result.to_dict()
