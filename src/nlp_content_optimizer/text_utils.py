"""
Sentence splitting and token helpers shared by every pipeline stage.

Sentences are plain strings. Each stage re-splits the current content when it
needs sentences and never edits a sentence in place; it builds a new list.
"""

import re
from dataclasses import dataclass
from functools import cached_property

# A run of non-terminators followed by terminators, or a trailing fragment.
_SENTENCE_RE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_TOKEN_RE = re.compile(r"[a-z0-9]+(?:['’-][a-z0-9]+)*")
_TERMINATORS = ".!?"

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "is", "are", "was", "were", "be", "been", "being", "have",
    "has", "had", "do", "does", "did", "will", "would", "could", "should",
    "may", "might", "can", "this", "that", "these", "those",
})


@dataclass(frozen=True)
class Sentence:
    """A trimmed sentence with derived token attributes."""
    text: str

    @cached_property
    def words(self) -> list[str]:
        """Lowercase word tokens with punctuation stripped."""
        return tokenize(self.text)

    @property
    def word_count(self) -> int:
        """Number of whitespace-separated words."""
        return len(self.text.split())

    @property
    def terminator(self) -> str:
        """Trailing run of sentence terminators (may be empty)."""
        body = self.text.rstrip(_TERMINATORS)
        return self.text[len(body):]


def split_sentences(text: str) -> list[str]:
    """
    Split text into trimmed, non-empty sentences.

    Splits on runs of '.', '!' and '?', keeping the terminator run with its
    sentence. Pieces without any letter or digit are dropped. The first
    letter of each sentence is capitalized.

    Args:
        text: Content to split.

    Returns:
        List of sentence strings.
    """
    if not text or not text.strip():
        return []

    sentences = []
    for match in _SENTENCE_RE.finditer(text):
        piece = match.group(0).strip()
        body = piece.rstrip(_TERMINATORS).strip()
        if not any(ch.isalnum() for ch in body):
            continue
        terminator = piece[len(piece.rstrip(_TERMINATORS)):]
        sentences.append(capitalize_first(body + terminator))

    return sentences


def parse_sentences(text: str) -> list[Sentence]:
    """Split text into Sentence objects."""
    return [Sentence(s) for s in split_sentences(text)]


def join_sentences(sentences: list[str]) -> str:
    """Join sentences back into content with single spaces."""
    return " ".join(sentences)


def capitalize_first(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens, punctuation stripped (hyphens and apostrophes kept inside words)."""
    return _TOKEN_RE.findall(text.lower())


def extract_keywords(sentence: str) -> list[str]:
    """Content tokens of a sentence: longer than two characters and not a stop word."""
    return [
        word for word in tokenize(sentence)
        if len(word) > 2 and word not in STOP_WORDS
    ]


def sentence_similarity(sentence1: str, sentence2: str) -> float:
    """
    Token Jaccard similarity between two sentences.

    Shared content tokens divided by the union of content tokens. Returns 0
    when either sentence has no content tokens.
    """
    words1 = set(extract_keywords(sentence1))
    words2 = set(extract_keywords(sentence2))

    if not words1 or not words2:
        return 0.0

    return len(words1 & words2) / len(words1 | words2)


def contains_term(text_lower: str, term: str) -> bool:
    """Check if a lowercase text contains a word or phrase on word boundaries."""
    return re.search(rf"\b{re.escape(term)}\b", text_lower) is not None


def count_term(text: str, term: str) -> int:
    """Count case-insensitive whole-word occurrences of a term."""
    return len(re.findall(rf"\b{re.escape(term)}\b", text, flags=re.IGNORECASE))
