from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

from .feedback import FeedbackGrid, normalize_feedback
from .models import Assessment, NextSteps

logger = logging.getLogger(__name__)

DEFAULT_MAX_ASSESSMENTS = 10


class AssessmentStore(ABC):
    """Keeps the most recent assessments, newest first."""

    def __init__(self, max_assessments: int = DEFAULT_MAX_ASSESSMENTS) -> None:
        if max_assessments < 1:
            raise ValueError("max_assessments must be at least 1.")
        self.max_assessments = max_assessments

    @abstractmethod
    def list(self) -> List[Assessment]:
        """Return stored assessments, newest first."""
        raise NotImplementedError

    @abstractmethod
    def save(self, assessment: Assessment) -> None:
        """Store an assessment, evicting the oldest beyond the retention limit."""
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    def get(self, assessment_id: str) -> Assessment | None:
        for assessment in self.list():
            if assessment.id == assessment_id:
                return assessment
        return None


class InMemoryAssessmentStore(AssessmentStore):
    def __init__(self, max_assessments: int = DEFAULT_MAX_ASSESSMENTS) -> None:
        super().__init__(max_assessments)
        self._lock = threading.Lock()
        self._items: List[Assessment] = []

    def list(self) -> List[Assessment]:
        with self._lock:
            return list(self._items)

    def save(self, assessment: Assessment) -> None:
        with self._lock:
            self._items.insert(0, assessment)
            del self._items[self.max_assessments :]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class JsonFileAssessmentStore(AssessmentStore):
    """Stores assessments as a JSON array, newest first."""

    def __init__(
        self, path: str | Path, max_assessments: int = DEFAULT_MAX_ASSESSMENTS
    ) -> None:
        super().__init__(max_assessments)
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def list(self) -> List[Assessment]:
        with self._lock:
            records = self._read()
        assessments: List[Assessment] = []
        for index, item in enumerate(records):
            try:
                assessments.append(assessment_from_dict(item))
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.warning(
                    "Skipping unreadable assessment #%d in %s: %s", index, self._path, exc
                )
        return assessments

    def save(self, assessment: Assessment) -> None:
        with self._lock:
            records = self._read()
            records.insert(0, assessment_to_dict(assessment))
            evicted = len(records) - self.max_assessments
            if evicted > 0:
                logger.debug("Evicting %d oldest assessment(s)", evicted)
            self._write(records[: self.max_assessments])

    def clear(self) -> None:
        with self._lock:
            if self._path.exists():
                self._path.unlink()
                logger.info("Cleared assessments at %s", self._path)

    def _read(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            return []
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"Assessment store {self._path} must contain a JSON list.")
        return data

    def _write(self, records: List[Dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        tmp_path.replace(self._path)


def assessment_to_dict(assessment: Assessment) -> dict[str, Any]:
    """Serialise an assessment using the stored record's camelCase keys."""
    feedback = assessment.feedback
    if isinstance(feedback, FeedbackGrid):
        feedback = feedback.to_dict()
    payload: dict[str, Any] = {
        "id": assessment.id,
        "text": assessment.text,
        "scores": dict(assessment.scores),
        "feedback": feedback,
        "timestamp": assessment.timestamp,
    }
    if assessment.student_name is not None:
        payload["studentName"] = assessment.student_name
    if assessment.year_level is not None:
        payload["yearLevel"] = assessment.year_level
    if assessment.justifications:
        payload["justifications"] = dict(assessment.justifications)
    if assessment.next_steps is not None:
        payload["nextSteps"] = assessment.next_steps.to_dict()
    return payload


def assessment_from_dict(data: Dict[str, Any]) -> Assessment:
    """Load a stored record, normalising whichever feedback layout it used."""
    next_steps = data.get("nextSteps")
    year_level = data.get("yearLevel")
    return Assessment(
        id=str(data["id"]),
        text=str(data.get("text", "")),
        scores={str(k): int(v) for k, v in data.get("scores", {}).items()},
        feedback=normalize_feedback(data.get("feedback") or ""),
        timestamp=str(data.get("timestamp", "")),
        student_name=data.get("studentName"),
        year_level=int(year_level) if year_level is not None else None,
        justifications=dict(data.get("justifications") or {}),
        next_steps=NextSteps.from_dict(next_steps) if next_steps else None,
    )
