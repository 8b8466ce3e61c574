from __future__ import annotations

import re
from typing import List

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
WHITESPACE_RE = re.compile(r"\s+")
NON_LETTER_RE = re.compile(r"[^a-z]")
# A capitalised run ending in a lowercase letter; terminators stop the run.
UNTERMINATED_RUN_RE = re.compile(r"[A-Z][^.!?]*[a-z]")

TRANSITION_WORDS = frozenset(
    {
        "however",
        "therefore",
        "furthermore",
        "moreover",
        "additionally",
        "consequently",
        "meanwhile",
        "nevertheless",
        "although",
        "because",
        "since",
        "while",
        "whereas",
        "firstly",
        "secondly",
        "finally",
        "also",
        "then",
        "next",
        "after",
        "before",
        "during",
    }
)

# Words treated as correctly spelled. Anything longer than two letters that is
# not listed here counts as a spelling error.
COMMON_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were", "be",
        "been", "have", "has", "had", "do", "does", "did", "will", "would",
        "could", "should", "may", "might", "must", "can", "i", "you", "he",
        "she", "it", "we", "they", "this", "that", "these", "those", "what",
        "which", "who", "when", "where", "why", "how", "not", "no", "yes",
    }
)


def split_sentences(text: str) -> List[str]:
    """Split on runs of terminal punctuation, dropping blank fragments."""
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def split_paragraphs(text: str) -> List[str]:
    """Split on blank lines, dropping blank fragments."""
    return [p for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def split_words(text: str) -> List[str]:
    """Lowercase and split on whitespace; punctuation stays attached."""
    cleaned = text.strip().lower()
    return [w for w in WHITESPACE_RE.split(cleaned) if w]


def letters_only(word: str) -> str:
    return NON_LETTER_RE.sub("", word)
