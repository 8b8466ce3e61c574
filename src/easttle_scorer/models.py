from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True, slots=True)
class TextAnalysis:
    """Shallow statistics computed from a writing sample."""

    sentence_count: int
    paragraph_count: int
    word_count: int
    unique_words: int
    average_word_length: float
    average_sentence_length: float
    transition_words: int
    complex_sentences: int
    spelling_errors: int
    punctuation_score: int
    vocabulary_richness: float


@dataclass(frozen=True, slots=True)
class ScoringChartEntry:
    """One row of the raw score to scale score conversion table."""

    total_score: int
    scale_score: int
    error_margin: int
    curriculum_level: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalScore": self.total_score,
            "scaleScore": self.scale_score,
            "errorMargin": self.error_margin,
            "curriculumLevel": self.curriculum_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringChartEntry":
        return cls(
            total_score=int(data["totalScore"]),
            scale_score=int(data["scaleScore"]),
            error_margin=int(data["errorMargin"]),
            curriculum_level=str(data["curriculumLevel"]),
        )


@dataclass(frozen=True, slots=True)
class ScoringChart:
    """An ordered conversion table plus provenance metadata."""

    entries: tuple[ScoringChartEntry, ...]
    last_updated: str
    is_custom: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "lastUpdated": self.last_updated,
            "isCustom": self.is_custom,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoringChart":
        return cls(
            entries=tuple(
                ScoringChartEntry.from_dict(item) for item in data.get("entries", [])
            ),
            last_updated=str(data.get("lastUpdated", "")),
            is_custom=bool(data.get("isCustom", False)),
        )


@dataclass(frozen=True, slots=True)
class NextSteps:
    """Teaching points plus a sentence for the student's writing book."""

    teacher_next_steps: List[str]
    student_book_feedback: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "teacherNextSteps": list(self.teacher_next_steps),
            "studentBookFeedback": self.student_book_feedback,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NextSteps":
        return cls(
            teacher_next_steps=[str(step) for step in data.get("teacherNextSteps", [])],
            student_book_feedback=str(data.get("studentBookFeedback", "")),
        )


@dataclass(frozen=True, slots=True)
class Assessment:
    """A persisted, immutable record of one scored writing sample.

    ``feedback`` holds whatever shape was stored; the feedback module
    normalises it on read.
    """

    id: str
    text: str
    scores: Dict[str, int]
    feedback: Any
    timestamp: str
    student_name: str | None = None
    year_level: int | None = None
    justifications: Dict[str, str] = field(default_factory=dict)
    next_steps: NextSteps | None = None


@dataclass(frozen=True, slots=True)
class AssessmentResult:
    """An assessment together with its derived totals and scale conversion."""

    assessment: Assessment
    conversion: ScoringChartEntry
    total_score: int
    average_score: float
    max_possible_score: int
