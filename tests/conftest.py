from __future__ import annotations

from datetime import date
from typing import Iterable

import pytest

from sensory_core import taxonomy
from sensory_core.types import RawResponse, StoredAssessment


TODAY = date(2024, 6, 15)


def build_responses(
    label: str = "quase sempre",
    *,
    item_ids: Iterable[int] | None = None,
    overrides: dict[int, str] | None = None,
) -> list[RawResponse]:
    """Deterministic response set; every listed item gets ``label`` unless overridden."""

    ids = list(item_ids) if item_ids is not None else list(range(1, 87))
    extra = overrides or {}
    return [RawResponse(item_id=iid, label=extra.get(iid, label)) for iid in ids]


def build_stored_assessment(
    *,
    scores: dict[str, int | None] | None = None,
    assessment_date: date = TODAY,
    created_at: date | None = None,
    assessment_id: str = "a-1",
) -> StoredAssessment:
    section_scores: dict[str, int | None] = {tag: 0 for tag in taxonomy.SECTIONS}
    section_scores.update(scores or {})
    return StoredAssessment(
        id=assessment_id,
        assessment_date=assessment_date,
        created_at=created_at,
        section_scores=section_scores,
    )


FULL_FIVES_SECTIONS = {
    "auditoryProcessing": 40,
    "visualProcessing": 30,
    "tactileProcessing": 55,
    "movementProcessing": 40,
    "bodyPositionProcessing": 40,
    "oralSensitivityProcessing": 50,
    "behavioralResponses": 45,
    "socialEmotionalResponses": 70,
    "attentionResponses": 50,
}


@pytest.fixture
def full_responses() -> list[RawResponse]:
    return build_responses()


@pytest.fixture
def item_86_on(monkeypatch):
    from sensory_core import config

    monkeypatch.setattr(config, "ITEM_86_REGISTRATION", True, raising=False)
