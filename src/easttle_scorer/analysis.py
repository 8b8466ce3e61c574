from __future__ import annotations

from .models import TextAnalysis
from .textutils import (
    COMMON_WORDS,
    TRANSITION_WORDS,
    UNTERMINATED_RUN_RE,
    letters_only,
    split_paragraphs,
    split_sentences,
    split_words,
)


def analyze_text(text: str) -> TextAnalysis:
    """Compute the surface statistics used by the category formulas.

    Ratios fall back to 0 when their denominator is zero so blank input
    yields a well-formed analysis instead of NaN.
    """
    sentences = split_sentences(text)
    sentence_count = len(sentences)
    paragraph_count = max(1, len(split_paragraphs(text)))

    words = split_words(text)
    word_count = len(words)
    unique_words = len(set(words))

    average_word_length = (
        sum(len(word) for word in words) / word_count if word_count else 0.0
    )
    average_sentence_length = word_count / sentence_count if sentence_count else 0.0

    transition_words = sum(1 for word in words if letters_only(word) in TRANSITION_WORDS)
    complex_sentences = sum(
        1 for s in sentences if "," in s or ";" in s or ":" in s
    )
    spelling_errors = sum(1 for word in words if _looks_misspelled(word))

    return TextAnalysis(
        sentence_count=sentence_count,
        paragraph_count=paragraph_count,
        word_count=word_count,
        unique_words=unique_words,
        average_word_length=average_word_length,
        average_sentence_length=average_sentence_length,
        transition_words=transition_words,
        complex_sentences=complex_sentences,
        spelling_errors=spelling_errors,
        punctuation_score=punctuation_score(text, sentence_count),
        vocabulary_richness=(unique_words / word_count) * 100 if word_count else 0.0,
    )


def punctuation_score(text: str, sentence_count: int) -> int:
    """Start from 100 and deduct for missing full stops, commas and terminators."""
    score = 100
    if "." not in text:
        score -= 30
    if sentence_count > 3 and "," not in text:
        score -= 20
    if any(
        not run.strip().endswith(".") for run in UNTERMINATED_RUN_RE.findall(text)
    ):
        score -= 20
    return max(0, score)


def _looks_misspelled(word: str) -> bool:
    cleaned = letters_only(word)
    return len(cleaned) > 2 and cleaned not in COMMON_WORDS
