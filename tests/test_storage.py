import json
import logging
from pathlib import Path

import pytest

from easttle_scorer.feedback import FeedbackGrid, FeedbackShape, compose_feedback
from easttle_scorer.models import Assessment, NextSteps
from easttle_scorer.storage import (
    InMemoryAssessmentStore,
    JsonFileAssessmentStore,
    assessment_from_dict,
    assessment_to_dict,
)


def _assessment(idx: int, **extra: object) -> Assessment:
    scores = {"Ideas": idx % 9, "Spelling": 8}
    return Assessment(
        id=str(idx),
        text=f"Sample {idx}.",
        scores=scores,
        feedback=compose_feedback(scores, f"Sample {idx}."),
        timestamp=f"2025-03-{idx + 1:02d}T09:00:00+00:00",
        **extra,  # type: ignore[arg-type]
    )


def test_in_memory_store_keeps_ten_newest():
    """The store keeps only the ten newest assessments."""
    store = InMemoryAssessmentStore()
    for idx in range(12):
        store.save(_assessment(idx))

    ids = [item.id for item in store.list()]
    assert ids == [str(idx) for idx in range(11, 1, -1)]
    assert store.get("0") is None
    assert store.get("5") is not None


def test_store_requires_positive_capacity():
    """A capacity below one is rejected."""
    with pytest.raises(ValueError):
        InMemoryAssessmentStore(max_assessments=0)


def test_json_store_round_trip(tmp_path: Path):
    """Saved assessments load back unchanged."""
    path = tmp_path / "assessments.json"
    original = _assessment(
        3,
        student_name="Aroha",
        year_level=2,
        justifications={"Ideas": "Short."},
        next_steps=NextSteps(["Plan."], "Great job!"),
    )

    JsonFileAssessmentStore(path).save(original)
    loaded = JsonFileAssessmentStore(path).get("3")

    assert loaded is not None
    assert loaded == original
    assert isinstance(loaded.feedback, FeedbackGrid)


def test_json_store_evicts_oldest_and_clears(tmp_path: Path):
    """The JSON store evicts the oldest and clear empties it."""
    store = JsonFileAssessmentStore(tmp_path / "assessments.json", max_assessments=3)
    for idx in range(5):
        store.save(_assessment(idx))

    assert [item.id for item in store.list()] == ["4", "3", "2"]
    store.clear()
    assert store.list() == []


def test_json_store_reads_legacy_feedback(tmp_path: Path):
    """Legacy feedback layouts load as grids."""
    path = tmp_path / "assessments.json"
    legacy = [
        {
            "id": "1700000000000",
            "text": "I like my cat.",
            "scores": {"Ideas": 0},
            "feedback": {"simple": "S", "report": "R", "advanced": "A"},
            "timestamp": "2024-11-14T22:13:20.000Z",
        },
        {
            "id": "1690000000000",
            "text": "Old.",
            "scores": {"Ideas": 1},
            "feedback": "Keep writing!",
            "timestamp": "2023-07-22T04:26:40.000Z",
        },
    ]
    path.write_text(json.dumps(legacy), encoding="utf-8")

    items = JsonFileAssessmentStore(path).list()

    assert items[0].feedback.source_shape is FeedbackShape.MODES
    assert items[0].feedback.get("teacher", "comprehensive") == "A"
    assert items[1].feedback.get("parent", "simple") == "Keep writing!"
    assert items[1].student_name is None


def test_json_store_rejects_non_list_file(tmp_path: Path):
    """A store file that is not a list raises ValueError."""
    path = tmp_path / "assessments.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonFileAssessmentStore(path).list()


def test_assessment_dict_uses_record_keys():
    """Records use camelCase keys and omit unset fields."""
    payload = assessment_to_dict(
        _assessment(1, student_name="Tama", next_steps=NextSteps(["A"], "B"))
    )

    assert payload["studentName"] == "Tama"
    assert payload["nextSteps"] == {"teacherNextSteps": ["A"], "studentBookFeedback": "B"}
    assert "yearLevel" not in payload
    assert set(payload["feedback"]) == {"student", "teacher", "parent"}
    assert assessment_from_dict(payload).student_name == "Tama"


def test_json_store_skips_unreadable_records(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
):
    """One damaged record does not hide the rest of the history."""
    path = tmp_path / "assessments.json"
    good = assessment_to_dict(_assessment(1))
    records = [
        {"id": "null-feedback", "scores": {"Ideas": 2}, "feedback": None, "timestamp": ""},
        {"id": "empty-feedback", "scores": {"Ideas": 2}, "feedback": {}, "timestamp": ""},
        {"text": "No id.", "scores": {}, "feedback": "Hi", "timestamp": ""},
        {"id": "odd-feedback", "scores": {}, "feedback": {"foo": "bar"}, "timestamp": ""},
        good,
    ]
    path.write_text(json.dumps(records), encoding="utf-8")
    store = JsonFileAssessmentStore(path)

    with caplog.at_level(logging.WARNING, logger="easttle_scorer.storage"):
        items = store.list()

    assert [item.id for item in items] == ["null-feedback", "empty-feedback", "1"]
    assert items[0].feedback.get("teacher", "standard") == ""
    assert store.get("1") is not None
    assert caplog.text.count("Skipping unreadable assessment") == 2
