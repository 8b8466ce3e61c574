from __future__ import annotations

import math
from typing import Dict, Mapping

from .analysis import analyze_text
from .models import TextAnalysis

CATEGORIES: tuple[str, ...] = (
    "Ideas",
    "Structure",
    "Organisation",
    "Vocabulary",
    "Sentence Style",
    "Punctuation",
    "Spelling",
)

CATEGORY_LEVELS: tuple[str, ...] = ("1B", "1P", "1A", "2B", "2P", "2A", "3B", "3P", "3A")

# Rubric wording for each category, one entry per level in CATEGORY_LEVELS.
LEVEL_DESCRIPTIONS: dict[str, tuple[str, ...]] = {
    "Ideas": (
        "Simple, minimal ideas",
        "Some development of ideas",
        "Clear ideas with some detail",
        "Ideas are developed",
        "Ideas show good understanding",
        "Ideas are well developed",
        "Complex ideas presented",
        "Sophisticated ideas",
        "Highly sophisticated ideas",
    ),
    "Structure": (
        "Little structure",
        "Basic structure emerging",
        "Simple structure present",
        "Clear structure",
        "Good organization",
        "Well-organized",
        "Complex structure",
        "Sophisticated structure",
        "Highly sophisticated structure",
    ),
    "Organisation": (
        "Minimal organization",
        "Some sentence connection",
        "Basic paragraphing",
        "Clear paragraphs",
        "Good flow between ideas",
        "Well-connected ideas",
        "Complex connections",
        "Sophisticated transitions",
        "Highly sophisticated flow",
    ),
    "Vocabulary": (
        "Simple words",
        "Basic vocabulary",
        "Some variety",
        "Good word choice",
        "Varied vocabulary",
        "Precise words",
        "Rich vocabulary",
        "Sophisticated words",
        "Highly sophisticated vocabulary",
    ),
    "Sentence Style": (
        "Simple sentences",
        "Basic sentences",
        "Some variety",
        "Good variety",
        "Varied structures",
        "Complex sentences",
        "Sophisticated structures",
        "Highly varied",
        "Expertly crafted",
    ),
    "Punctuation": (
        "Minimal punctuation",
        "Basic punctuation",
        "Simple punctuation correct",
        "Most punctuation correct",
        "Good punctuation use",
        "Accurate punctuation",
        "Complex punctuation",
        "Sophisticated punctuation",
        "Expert punctuation",
    ),
    "Spelling": (
        "Many errors",
        "Frequent errors",
        "Some errors",
        "Mostly correct",
        "Few errors",
        "Accurate",
        "Very accurate",
        "Consistently accurate",
        "Expert spelling",
    ),
}


MAX_CATEGORY_SCORE = 8


def score_writing(text: str) -> Dict[str, int]:
    """Score a writing sample in all seven e-asTTle categories (0-8 each)."""
    return score_analysis(analyze_text(text))


def score_analysis(analysis: TextAnalysis) -> Dict[str, int]:
    """Apply the fixed category formulas to a precomputed analysis."""
    spelling = max(0, MAX_CATEGORY_SCORE - math.floor(analysis.spelling_errors / 5))
    if analysis.word_count == 0:
        # Blank submissions score nothing except the error-free spelling.
        scores = {category: 0 for category in CATEGORIES}
        scores["Spelling"] = _clamp(spelling)
        return scores

    complexity = (
        analysis.complex_sentences / analysis.sentence_count * 4
        if analysis.sentence_count
        else 0.0
    )
    raw = {
        "Ideas": analysis.word_count / 50 + analysis.unique_words / 30,
        "Structure": analysis.paragraph_count * 2 + complexity,
        "Organisation": analysis.paragraph_count * 1.5 + analysis.transition_words / 2,
        "Vocabulary": analysis.vocabulary_richness / 15
        + (analysis.average_word_length - 3),
        "Sentence Style": analysis.average_sentence_length / 5 + complexity,
        "Punctuation": analysis.punctuation_score / 12.5,
        "Spelling": spelling,
    }
    return {category: _clamp(math.floor(raw[category])) for category in CATEGORIES}


def total_score(scores: Mapping[str, int]) -> int:
    """Sum category scores into the raw total used for scale conversion."""
    return sum(int(value) for value in scores.values())


def level_from_score(score: int) -> str:
    """Map a single 0-8 category score to its rubric level label."""
    return CATEGORY_LEVELS[_clamp(int(score))]


def _clamp(value: int) -> int:
    return max(0, min(MAX_CATEGORY_SCORE, value))


def describe_level(category: str, score: int) -> str:
    """Return the rubric wording for a category score, or '' for unknown categories."""
    descriptions = LEVEL_DESCRIPTIONS.get(category)
    if descriptions is None:
        return ""
    return descriptions[_clamp(int(score))]
