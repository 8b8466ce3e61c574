from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping

from .curriculum import curriculum_for_year
from .models import NextSteps, TextAnalysis
from .scoring import CATEGORIES, level_from_score

AUDIENCES: tuple[str, ...] = ("student", "teacher", "parent")
DEPTHS: tuple[str, ...] = ("simple", "standard", "comprehensive")
MODES: tuple[str, ...] = ("simple", "report", "advanced")

STRENGTH_THRESHOLD = 6
IMPROVEMENT_THRESHOLD = 3

STUDENT_TIPS: dict[str, str] = {
    "Ideas": "add more details about what happened",
    "Structure": "give your writing a clear beginning, middle and end",
    "Organisation": "use linking words like 'then', 'next' and 'because'",
    "Vocabulary": "try some new and interesting describing words",
    "Sentence Style": "make some sentences longer by joining ideas together",
    "Punctuation": "finish every sentence with a full stop",
    "Spelling": "check the spelling of your tricky words",
}

HOME_SUPPORT: dict[str, str] = {
    "Ideas": "talk together about an event before your child writes about it",
    "Structure": "retell favourite stories together, naming the beginning, middle and end",
    "Organisation": "play 'first, next, then, finally' when describing everyday routines",
    "Vocabulary": "read aloud together and collect interesting new words",
    "Sentence Style": "read sentences aloud and talk about ways to join short ones",
    "Punctuation": "read your child's writing aloud together and listen for where sentences stop",
    "Spelling": "practise a few high-frequency words each week",
}

TEACHING_POINTS: dict[str, str] = {
    "Ideas": "Model brainstorming and elaboration so ideas are developed with supporting detail.",
    "Structure": "Teach text structure explicitly using planning frames (orientation, events, conclusion).",
    "Organisation": "Introduce a bank of connectives and practise paragraphing around single ideas.",
    "Vocabulary": "Build a word wall of precise verbs and adjectives and model their use.",
    "Sentence Style": "Practise sentence combining to vary sentence length and openings.",
    "Punctuation": "Use shared editing to reinforce capital letters, full stops and commas.",
    "Spelling": "Target high-frequency words and common spelling patterns through word study.",
}


class FeedbackShape(str, Enum):
    """Stored feedback layouts, oldest first."""

    TEXT = "text"
    MODES = "modes"
    AUDIENCES = "audiences"
    GRID = "grid"


class FeedbackShapeError(ValueError):
    """Raised when stored feedback does not match any known layout."""


@dataclass(frozen=True, slots=True)
class FeedbackGrid:
    """Feedback for every audience at every depth."""

    messages: Dict[str, Dict[str, str]]
    source_shape: FeedbackShape = FeedbackShape.GRID

    def get(self, audience: str, depth: str = "standard") -> str:
        if audience not in AUDIENCES:
            raise ValueError(f"Unknown feedback audience '{audience}'.")
        if depth not in DEPTHS:
            raise ValueError(f"Unknown feedback depth '{depth}'.")
        return self.messages[audience][depth]

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {audience: dict(self.messages[audience]) for audience in AUDIENCES}


def generate_feedback(scores: Mapping[str, int], text: str, mode: str) -> str:
    """Produce the single-string feedback used by the simple/report/advanced modes."""
    strengths, improvements = _classify(scores)
    if mode == "report":
        return _report_feedback(strengths, improvements)
    if mode == "advanced":
        return _advanced_feedback(scores, improvements)
    return _simple_feedback(_average(scores), strengths[0] if strengths else None)


def compose_feedback(scores: Mapping[str, int], text: str) -> FeedbackGrid:
    """Build the full audience x depth feedback grid for a set of scores."""
    strengths, improvements = _classify(scores)
    average = _average(scores)
    weakest = _weakest(scores)
    word_count = len(text.split())

    student_simple = _simple_feedback(average, strengths[0] if strengths else None)
    student_standard = student_simple
    if strengths:
        student_standard += f" You did really well with your {strengths[0].lower()}."
    student_standard += f" Next time, try to {STUDENT_TIPS[weakest]}."
    student_comprehensive = (
        f"You wrote {word_count} words. That is great effort! {student_standard}"
    )
    for category in strengths[1:]:
        student_comprehensive += f" Your {category.lower()} is a real strength too."

    messages = {
        "student": {
            "simple": student_simple,
            "standard": student_standard,
            "comprehensive": student_comprehensive,
        },
        "teacher": {
            "simple": _teacher_summary(scores, average, strengths, weakest),
            "standard": _report_feedback(strengths, improvements),
            "comprehensive": _advanced_feedback(scores, improvements),
        },
        "parent": {
            "simple": _parent_summary(average),
            "standard": (
                f"{_parent_summary(average)} The area to focus on next is "
                f"{weakest.lower()}. At home you could {HOME_SUPPORT[weakest]}."
            ),
            "comprehensive": _parent_report(scores, strengths, improvements, weakest),
        },
    }
    return FeedbackGrid(messages=messages)


def detect_feedback_shape(raw: Any) -> FeedbackShape:
    """Work out which stored feedback layout ``raw`` uses."""
    if isinstance(raw, FeedbackGrid):
        return FeedbackShape.GRID
    if isinstance(raw, str):
        return FeedbackShape.TEXT
    if isinstance(raw, Mapping):
        if any(mode in raw for mode in MODES) and not any(a in raw for a in AUDIENCES):
            return FeedbackShape.MODES
        if any(audience in raw for audience in AUDIENCES):
            values = [raw[a] for a in AUDIENCES if a in raw]
            if all(isinstance(value, Mapping) for value in values):
                return FeedbackShape.GRID
            if all(isinstance(value, str) for value in values):
                return FeedbackShape.AUDIENCES
    raise FeedbackShapeError(f"Unrecognised feedback layout: {type(raw).__name__}")


def normalize_feedback(raw: Any) -> FeedbackGrid:
    """Map any stored feedback layout onto the audience x depth grid."""
    shape = detect_feedback_shape(raw)
    if isinstance(raw, FeedbackGrid):
        return raw
    if shape is FeedbackShape.TEXT:
        messages = _uniform_messages({audience: raw for audience in AUDIENCES})
        return FeedbackGrid(messages=messages, source_shape=shape)
    if shape is FeedbackShape.MODES:
        simple = str(raw.get("simple", ""))
        report = str(raw.get("report", simple))
        advanced = str(raw.get("advanced", report))
        messages = {
            "student": {depth: simple for depth in DEPTHS},
            "teacher": {"simple": report, "standard": report, "comprehensive": advanced},
            "parent": {depth: report for depth in DEPTHS},
        }
        return FeedbackGrid(messages=messages, source_shape=shape)
    if shape is FeedbackShape.AUDIENCES:
        fallback = next(str(raw[a]) for a in AUDIENCES if a in raw)
        messages = _uniform_messages({a: str(raw.get(a, fallback)) for a in AUDIENCES})
        if raw.get("formal"):
            messages["teacher"]["comprehensive"] = str(raw["formal"])
        return FeedbackGrid(messages=messages, source_shape=shape)
    return FeedbackGrid(
        messages={audience: _fill_depths(raw.get(audience) or {}) for audience in AUDIENCES},
        source_shape=shape,
    )


def justify_scores(analysis: TextAnalysis, scores: Mapping[str, int]) -> Dict[str, str]:
    """Explain each category score in terms of the statistics behind it."""
    return {
        "Ideas": (
            f"{analysis.word_count} words with {analysis.unique_words} different "
            f"words gives an Ideas score of {scores['Ideas']}."
        ),
        "Structure": (
            f"{analysis.paragraph_count} paragraph(s) and {analysis.complex_sentences} "
            f"of {analysis.sentence_count} sentences using commas, semicolons or colons."
        ),
        "Organisation": (
            f"{analysis.paragraph_count} paragraph(s) and {analysis.transition_words} "
            "transition word(s) linking ideas."
        ),
        "Vocabulary": (
            f"Vocabulary richness of {analysis.vocabulary_richness:.0f}% and an average "
            f"word length of {analysis.average_word_length:.1f} letters."
        ),
        "Sentence Style": (
            f"Sentences average {analysis.average_sentence_length:.1f} words; "
            f"{analysis.complex_sentences} show more complex construction."
        ),
        "Punctuation": f"Punctuation check scored {analysis.punctuation_score}/100.",
        "Spelling": (
            f"{analysis.spelling_errors} word(s) fall outside the common-word list."
        ),
    }


def suggest_next_steps(
    scores: Mapping[str, int], count: int = 3, year_level: int | None = None
) -> NextSteps:
    """
    Pick teaching points for the weakest categories plus a note for the student.

    With a year level in Years 0-8 the teaching points come from that year's
    curriculum next steps; otherwise general teaching points are used.
    """
    ranked = sorted(CATEGORIES, key=lambda category: scores.get(category, 0))
    focus = ranked[:count]
    strongest = max(CATEGORIES, key=lambda category: scores.get(category, 0))
    curriculum = curriculum_for_year(year_level)
    if curriculum is None:
        teacher_steps = [TEACHING_POINTS[category] for category in focus]
        tip = STUDENT_TIPS[focus[0]]
    else:
        teacher_steps = curriculum.next_steps_for(focus)
        tip = teacher_steps[0][0].lower() + teacher_steps[0][1:]
    return NextSteps(
        teacher_next_steps=teacher_steps,
        student_book_feedback=(
            f"Great job with your {strongest.lower()}! Now you need to {tip}."
        ),
    )


def _classify(scores: Mapping[str, int]) -> tuple[List[str], List[str]]:
    strengths = [c for c, s in scores.items() if s >= STRENGTH_THRESHOLD]
    improvements = [c for c, s in scores.items() if s <= IMPROVEMENT_THRESHOLD]
    return strengths, improvements


def _average(scores: Mapping[str, int]) -> float:
    return sum(scores.values()) / len(scores) if scores else 0.0


def _weakest(scores: Mapping[str, int]) -> str:
    return min(CATEGORIES, key=lambda category: scores.get(category, 0))


def _simple_feedback(average: float, top_strength: str | None) -> str:
    if average >= 6:
        return "Wow! Your writing is really wonderful and shows great thinking!"
    if average >= 4:
        if top_strength:
            return f"Great work! Your {top_strength.lower()} is really good! Keep practicing!"
        return "Nice job! Your writing is getting better and better! Keep it up!"
    return "You're doing great by practicing your writing! Every story makes you better!"


def _report_feedback(strengths: List[str], improvements: List[str]) -> str:
    feedback = "**Assessment Summary**\n\n"
    if strengths:
        feedback += "**Strengths:**\n"
        feedback += (
            f"The student demonstrates good ability in {', '.join(strengths).lower()}. "
        )
        if "Ideas" in strengths:
            feedback += "Ideas are well-developed and show clear thinking. "
        if "Vocabulary" in strengths:
            feedback += "Word choice is varied and appropriate. "
        if "Structure" in strengths:
            feedback += "The writing is well-organized with clear structure. "
    feedback += "\n\n"
    if improvements:
        feedback += "**Areas for Growth:**\n"
        feedback += (
            "With focused practice, the student can strengthen "
            f"{', '.join(improvements).lower()}. "
        )
        if "Spelling" in improvements:
            feedback += "Encourage regular spelling practice and word study. "
        if "Punctuation" in improvements:
            feedback += "Review punctuation rules and model correct usage. "
        if "Organisation" in improvements:
            feedback += (
                "Practice planning writing with clear beginnings, middles, and endings. "
            )
    feedback += "\n\n**Next Steps:**\n"
    feedback += (
        "Continue to encourage regular writing practice and celebrate progress. "
        "Focus on one or two areas at a time for improvement."
    )
    return feedback


def _advanced_feedback(scores: Mapping[str, int], improvements: List[str]) -> str:
    feedback = "**Advanced Writing Analysis**\n\n**Quantitative Assessment:**\n"
    for category, score in scores.items():
        feedback += f"- {category}: Level {level_from_score(score)} (Score: {score}/8)\n"

    feedback += "\n**Qualitative Analysis:**\n\n**Ideas and Content:** "
    ideas = scores.get("Ideas", 0)
    if ideas >= 6:
        feedback += (
            "The writer demonstrates sophisticated thinking with well-developed ideas "
            "that show depth and complexity. "
        )
    elif ideas >= 4:
        feedback += (
            "Ideas are present and show developing understanding, though further "
            "elaboration would strengthen the piece. "
        )
    else:
        feedback += (
            "Ideas require further development. Encourage the writer to explore topics "
            "more deeply through questioning and brainstorming. "
        )

    feedback += "\n\n**Structure and Organisation:** "
    if scores.get("Structure", 0) >= 6 or scores.get("Organisation", 0) >= 6:
        feedback += (
            "The writing exhibits strong organizational coherence with effective use of "
            "paragraphing and logical progression of ideas. "
        )
    else:
        feedback += (
            "Structural elements require attention. Explicit instruction in text "
            "structure and organizational frameworks would be beneficial. "
        )

    feedback += "\n\n**Language Features:** "
    language = (scores.get("Vocabulary", 0) + scores.get("Sentence Style", 0)) / 2
    if language >= 6:
        feedback += (
            "The writer demonstrates sophisticated control of language features, "
            "including varied vocabulary and complex sentence structures. "
        )
    else:
        feedback += (
            "Language use is developing. Encourage exposure to rich texts and explicit "
            "vocabulary instruction. "
        )

    feedback += "\n\n**Surface Features (Spelling and Punctuation):** "
    surface = (scores.get("Spelling", 0) + scores.get("Punctuation", 0)) / 2
    if surface >= 6:
        feedback += (
            "Surface features are well-controlled with accurate spelling and "
            "punctuation throughout. "
        )
    else:
        feedback += (
            "Surface features require attention through systematic instruction and "
            "regular editing practice. "
        )

    feedback += "\n\n**Pedagogical Recommendations:**\n"
    for area in improvements:
        feedback += (
            f"- Implement targeted instruction in {area.lower()} through scaffolded "
            "activities and modeled writing.\n"
        )
    return feedback


def _teacher_summary(
    scores: Mapping[str, int], average: float, strengths: List[str], weakest: str
) -> str:
    lead = strengths[0] if strengths else max(CATEGORIES, key=lambda c: scores.get(c, 0))
    return (
        f"Average category score {average:.1f}/8. Strongest area: {lead}. "
        f"Priority teaching focus: {weakest}."
    )


def _parent_summary(average: float) -> str:
    if average >= 6:
        return "Your child is writing with real confidence and skill."
    if average >= 4:
        return "Your child's writing is developing well."
    return "Your child is building the foundations of writing and making progress."


def _parent_report(
    scores: Mapping[str, int],
    strengths: List[str],
    improvements: List[str],
    weakest: str,
) -> str:
    report = _parent_summary(_average(scores))
    if strengths:
        report += f" Particular strengths are {', '.join(strengths).lower()}."
    focus = improvements or [weakest]
    report += f" Areas that will grow with practice: {', '.join(focus).lower()}."
    report += " Ways to help at home:"
    for category in focus:
        report += f"\n- {HOME_SUPPORT[category][0].upper()}{HOME_SUPPORT[category][1:]}."
    return report


def _uniform_messages(by_audience: Dict[str, str]) -> Dict[str, Dict[str, str]]:
    return {
        audience: {depth: by_audience[audience] for depth in DEPTHS}
        for audience in AUDIENCES
    }


def _fill_depths(cells: Mapping[str, Any]) -> Dict[str, str]:
    """Copy the first available depth into any depth left empty."""
    available = [str(cells[depth]) for depth in DEPTHS if cells.get(depth)]
    default = available[0] if available else ""
    return {
        depth: str(cells[depth]) if cells.get(depth) else default for depth in DEPTHS
    }
