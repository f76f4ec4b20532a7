from __future__ import annotations

from sensory_core import config, taxonomy
from sensory_core.scoring import (
    calculate_quadrant_scores,
    calculate_scores,
    calculate_section_scores,
    expected_score_ranges,
    validate_scores,
)
from sensory_core.types import AssessmentResults, RawResponse

from tests.conftest import FULL_FIVES_SECTIONS, build_responses


def test_empty_response_set_is_fully_populated():
    res = calculate_scores([])
    assert res.section_scores == {tag: 0 for tag in taxonomy.SECTIONS}
    assert res.quadrant_scores == {q: 0 for q in taxonomy.QUADRANTS}
    assert res.total_items == 0
    assert res.valid_responses == 0
    assert res.invalid_responses == []


def test_full_form_of_fives(full_responses, item_86_on):
    res = calculate_scores(full_responses)
    assert res.section_scores == FULL_FIVES_SECTIONS
    assert res.total_score == 420
    assert res.quadrant_scores == {
        "registrationIncreased": 110,
        "sensorySeek": 95,
        "sensorySensitivity": 85,
        "sensoryAvoidance": 100,
    }
    assert res.total_items == 86 and res.valid_responses == 86
    assert validate_scores(res) == []


def test_single_response_lands_only_in_its_section():
    for iid in range(1, 87):
        if iid in (15, 86):
            continue
        for label, value in (("quase nunca", 1), ("metade do tempo", 3), ("almost always", 5)):
            scores, invalid = calculate_section_scores([RawResponse(iid, label)])
            assert invalid == []
            home = taxonomy.section(iid)
            assert scores[home] == value
            assert sum(scores.values()) == value


def test_excluded_items_never_reach_sections(item_86_on):
    res = calculate_scores(build_responses(item_ids=[15, 86]))
    assert all(v == 0 for v in res.section_scores.values())
    assert res.quadrant_scores["sensoryAvoidance"] == 5
    assert res.quadrant_scores["registrationIncreased"] == 5


def test_item_86_quadrant_can_be_switched_off(monkeypatch):
    monkeypatch.setattr(config, "ITEM_86_REGISTRATION", False, raising=False)
    scores, invalid = calculate_quadrant_scores(build_responses(item_ids=[86]))
    assert invalid == []
    assert scores == {q: 0 for q in taxonomy.QUADRANTS}


def test_not_applicable_contributes_nothing_and_is_not_an_error():
    res = calculate_scores(build_responses("não se aplica", item_ids=[1, 2, 3]))
    assert res.section_scores["auditoryProcessing"] == 0
    assert res.invalid_responses == []
    assert res.valid_responses == 3


def test_items_without_quadrant_are_silently_skipped():
    # item 4 has a section but no quadrant
    scores, invalid = calculate_quadrant_scores(build_responses(item_ids=[4]))
    assert invalid == []
    assert sum(scores.values()) == 0


def test_invalid_ids_are_reported_once_and_skipped():
    res = calculate_scores(
        [RawResponse(87, "quase sempre"), RawResponse(0, "quase sempre"), RawResponse(1, "quase sempre")]
    )
    assert res.invalid_responses == ["Invalid item ID: 87", "Invalid item ID: 0"]
    assert res.section_scores["auditoryProcessing"] == 5
    assert res.valid_responses == 1


def test_non_integer_ids_are_rejected():
    res = calculate_scores([RawResponse("3", "quase sempre"), RawResponse(2.0, "quase sempre")])
    assert res.invalid_responses == ["Invalid item ID: 3", "Invalid item ID: 2.0"]
    assert res.total_score == 0


def test_bad_label_keeps_siblings_scoring():
    res = calculate_scores(build_responses(item_ids=[1, 2, 3], overrides={2: "bogus"}))
    assert len(res.invalid_responses) == 1
    msg = res.invalid_responses[0]
    assert msg.startswith('Item 2: Invalid response value: "bogus"')
    assert res.section_scores["auditoryProcessing"] == 10
    assert res.valid_responses == 2


def test_bad_label_on_excluded_item_is_still_reported():
    sections, section_invalid = calculate_section_scores(build_responses("bogus", item_ids=[15]))
    assert section_invalid == []
    assert sum(sections.values()) == 0
    res = calculate_scores(build_responses("bogus", item_ids=[15]))
    assert len(res.invalid_responses) == 1
    assert res.invalid_responses[0].startswith('Item 15: Invalid response value: "bogus"')


def test_accepts_pairs_and_mappings():
    res = calculate_scores([(1, "quase sempre"), {"itemId": 2, "response": "frequentemente"}, {"item_id": 3, "label": "never"}])
    assert res.section_scores["auditoryProcessing"] == 10
    assert res.invalid_responses == []


def test_scoring_is_idempotent(full_responses):
    assert calculate_scores(full_responses) == calculate_scores(full_responses)


def test_expected_ranges_come_from_item_counts():
    ranges = expected_score_ranges()
    assert ranges["sections"]["auditoryProcessing"] == (8, 40)
    assert ranges["sections"]["visualProcessing"] == (6, 30)
    assert ranges["sections"]["attentionResponses"] == (10, 50)
    assert ranges["sections"]["socialEmotionalResponses"] == (14, 70)
    assert ranges["total"] == (84, 420)


def test_top_of_range_produces_no_warning():
    res = calculate_scores(build_responses(item_ids=range(1, 9)))
    assert res.section_scores["auditoryProcessing"] == 40
    warnings = validate_scores(res)
    assert not any(w.startswith("auditoryProcessing") for w in warnings)


def test_partial_submission_warns_but_never_raises():
    res = calculate_scores(build_responses(item_ids=range(1, 9)))
    warnings = validate_scores(res)
    assert "visualProcessing score 0 is outside expected range 6-30" in warnings
    assert "Total score 40 is outside expected range 84-420" in warnings


def test_all_minimum_answers_sit_on_lower_bound():
    res = calculate_scores(build_responses("quase nunca"))
    assert res.total_score == 84
    assert validate_scores(res) == []


def test_score_above_range_is_flagged():
    scores = dict(FULL_FIVES_SECTIONS)
    scores["auditoryProcessing"] = 41
    res = AssessmentResults(
        section_scores=scores,
        quadrant_scores={q: 0 for q in taxonomy.QUADRANTS},
        total_items=86,
        valid_responses=86,
    )
    warnings = validate_scores(res)
    assert "auditoryProcessing score 41 is outside expected range 8-40" in warnings
    assert "Total score 421 is outside expected range 84-420" in warnings
