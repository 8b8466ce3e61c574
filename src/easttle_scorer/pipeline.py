from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List

from .analysis import analyze_text
from .charts.store import ChartStore
from .conversion import lookup_scale_score, year_expectation
from .feedback import (
    compose_feedback,
    justify_scores,
    normalize_feedback,
    suggest_next_steps,
)
from .models import Assessment, AssessmentResult
from .curriculum import curriculum_for_year
from .scoring import (
    CATEGORIES,
    MAX_CATEGORY_SCORE,
    describe_level,
    level_from_score,
    score_analysis,
)
from .storage import AssessmentStore

logger = logging.getLogger(__name__)


class EmptySubmissionError(ValueError):
    """Raised when there is no text to assess."""


def assess_text(
    text: str,
    *,
    chart_store: ChartStore | None = None,
    assessment_store: AssessmentStore | None = None,
    student_name: str | None = None,
    year_level: int | None = None,
    id_factory: Callable[[], str] | None = None,
    clock: Callable[[], datetime] | None = None,
) -> AssessmentResult:
    """Score a writing sample, convert its total and build the assessment record."""
    if not text.strip():
        raise EmptySubmissionError("No text to score.")

    analysis = analyze_text(text)
    scores = score_analysis(analysis)
    assessment = Assessment(
        id=(id_factory or _new_id)(),
        text=text,
        scores=scores,
        feedback=compose_feedback(scores, text),
        timestamp=(clock or _utc_now)().isoformat(),
        student_name=student_name,
        year_level=year_level,
        justifications=justify_scores(analysis, scores),
        next_steps=suggest_next_steps(scores, year_level=year_level),
    )
    if assessment_store is not None:
        assessment_store.save(assessment)
        logger.info("Saved assessment %s", assessment.id)
    return build_result(assessment, chart_store)


def build_result(
    assessment: Assessment, chart_store: ChartStore | None = None
) -> AssessmentResult:
    """Derive totals and the scale conversion for an existing assessment."""
    total = sum(assessment.scores.values())
    count = len(assessment.scores)
    conversion = lookup_scale_score(total, store=chart_store)
    logger.debug(
        "Assessment %s total=%d scale=%d level=%s",
        assessment.id,
        total,
        conversion.scale_score,
        conversion.curriculum_level,
    )
    return AssessmentResult(
        assessment=assessment,
        conversion=conversion,
        total_score=total,
        average_score=total / count if count else 0.0,
        max_possible_score=count * MAX_CATEGORY_SCORE,
    )


def render_report(
    result: AssessmentResult, audience: str = "teacher", depth: str = "standard"
) -> str:
    """Render a plain-text assessment report for one feedback audience and depth."""
    assessment = result.assessment
    conversion = result.conversion
    lines: List[str] = [
        "Writing Assessment Report",
        f"Student: {assessment.student_name or 'Not specified'}",
    ]
    if assessment.year_level is not None:
        lines.append(f"Year level: {assessment.year_level}")
    lines.extend(
        [
            f"Date: {assessment.timestamp}",
            "",
            f"Total score: {result.total_score}/{result.max_possible_score}",
            f"Average score: {result.average_score:.1f}",
            f"Scale score: {conversion.scale_score} aWs (±{conversion.error_margin})",
            f"Curriculum level: {conversion.curriculum_level} "
            f"({year_expectation(conversion.curriculum_level)})",
            "",
            "Category scores:",
        ]
    )
    for category in CATEGORIES:
        if category not in assessment.scores:
            continue
        score = assessment.scores[category]
        line = (
            f"  {category}: {score}/8 ({level_from_score(score)}) "
            f"{describe_level(category, score)}"
        )
        justification = assessment.justifications.get(category)
        if justification:
            line += f" - {justification}"
        lines.append(line)

    lines.extend(["", f"Feedback ({audience}, {depth}):"])
    lines.append(normalize_feedback(assessment.feedback).get(audience, depth))

    curriculum = curriculum_for_year(assessment.year_level)
    if curriculum is not None:
        lines.extend(["", f"{curriculum.label} expectations (NZC phase {curriculum.phase}):"])
        lines.extend(
            f"  {strand.capitalize()}: {expectation.current}"
            for strand, expectation in curriculum.strands.items()
        )

    if assessment.next_steps is not None:
        lines.extend(["", "Next steps:"])
        lines.extend(f"  - {step}" for step in assessment.next_steps.teacher_next_steps)
        lines.append(f"Writing book: {assessment.next_steps.student_book_feedback}")
    return "\n".join(lines)


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
