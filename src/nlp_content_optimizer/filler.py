"""
Filler content detection and elimination.

Default filler collaborator for the pipeline. Drops sentences that are
nothing but a filler phrase or transitional fluff, strips filler phrases
embedded in otherwise useful sentences, and reports how much of a text
carries direct value.
"""

import logging
import re
from dataclasses import dataclass, field

from .models import ChangeRecord, ChangeStage, StageResult
from .text_utils import capitalize_first, join_sentences, split_sentences, tokenize

logger = logging.getLogger(__name__)

FILLER_PHRASES = (
    "it is important to note that",
    "it should be mentioned that",
    "it is worth noting that",
    "as we all know",
    "needless to say",
    "without a doubt",
    "it goes without saying",
    "obviously",
    "clearly",
    "of course",
    "as you can see",
    "as mentioned before",
    "as previously stated",
    "in conclusion",
    "to sum up",
    "in summary",
    "all in all",
    "at the end of the day",
    "when all is said and done",
    "the bottom line is",
    "what this means is",
    "the point is",
    "the fact of the matter is",
    "the truth is",
    "believe it or not",
    "as a matter of fact",
    "in actual fact",
    "in reality",
    "in other words",
    "that is to say",
    "to put it simply",
    "to put it another way",
    "in simple terms",
    "basically",
    "essentially",
    "fundamentally",
    "ultimately",
    "at its core",
    "when you think about it",
    "if you really think about it",
    "upon closer inspection",
    "upon further reflection",
)

TRANSITION_FLUFF = frozenset({
    "furthermore", "moreover", "additionally", "similarly", "likewise",
    "correspondingly", "comparatively", "conversely", "however", "nevertheless",
    "nonetheless", "notwithstanding", "yet", "still", "although", "though",
    "while", "whereas", "also", "so", "and", "then",
})

# Indicators used by the filler metric: a sentence without any of them is filler.
DIRECT_VALUE_INDICATORS = (
    "how to", "steps to", "method", "technique", "strategy",
    "benefit", "advantage", "result", "outcome", "solution",
    "example", "instance", "case", "data", "research",
)

# Broader signals the detector uses before deleting a sentence.
VALUE_INDICATORS = DIRECT_VALUE_INDICATORS + (
    "approach", "process", "procedure", "system", "framework", "model",
    "answer", "study", "analysis", "findings", "evidence", "proof",
    "statistics", "metrics", "measurement", "tool", "resource", "tip",
    "advice", "recommendation", "best practice", "guideline", "principle",
    "formula", "calculation", "implementation", "application", "usage",
)
ACTION_WORDS = (
    "create", "build", "develop", "implement", "execute", "perform",
    "achieve", "obtain", "generate", "produce",
)

_SPECIFIC_TERMS_RE = re.compile(
    r"\d|%|\$|\b(?:percent|percentage|dollars?|years?|months?|days?|hours?|minutes?)\b",
    re.IGNORECASE,
)

SHORT_SENTENCE_CHARS = 50
FLUFF_MAX_WORDS = 5
FLUFF_RATIO = 0.6


def _starts_word(text_lower: str, term: str) -> bool:
    """Check for a term starting on a word boundary ("results" matches "result")."""
    return re.search(rf"\b{re.escape(term)}", text_lower) is not None


def has_direct_value(sentence: str) -> bool:
    """Check if a sentence contains one of the direct-value indicators."""
    lowered = sentence.lower()
    return any(_starts_word(lowered, indicator) for indicator in DIRECT_VALUE_INDICATORS)


def _filler_pattern(phrase: str) -> re.Pattern:
    return re.compile(rf",?\s*\b{re.escape(phrase)}\b,?", re.IGNORECASE)


_FILLER_PATTERNS = tuple((phrase, _filler_pattern(phrase)) for phrase in FILLER_PHRASES)


def _tidy(sentence: str) -> str:
    """Normalize spacing and punctuation left behind by phrase removal."""
    cleaned = re.sub(r"\s+", " ", sentence)
    cleaned = re.sub(r"\s+([,.!?;:])", r"\1", cleaned)
    cleaned = re.sub(r",(?=[,.!?;:])", "", cleaned)
    cleaned = cleaned.strip().lstrip(",;: ").strip()
    return capitalize_first(cleaned)


@dataclass
class ContentValueReport:
    """How much of a text carries direct value."""
    total_sentences: int
    valuable_sentences: int
    filler_sentences: int
    filler_percentage: float
    value_score: float
    recommendations: list[str] = field(default_factory=list)


class FillerContentDetector:
    """Removes filler sentences and phrases."""

    def __init__(self, remove_low_value_sentences: bool = False):
        """
        Initialize the detector.

        Args:
            remove_low_value_sentences: Also drop sentences with no value
                signal at all (no indicator, action word, number or concrete
                noun).
        """
        self.remove_low_value_sentences = remove_low_value_sentences

    def has_value(self, sentence: str) -> bool:
        """Check for any value signal: indicators, action words or specifics."""
        lowered = sentence.lower()
        return (
            any(_starts_word(lowered, term) for term in VALUE_INDICATORS)
            or any(_starts_word(lowered, word) for word in ACTION_WORDS)
            or _SPECIFIC_TERMS_RE.search(sentence) is not None
        )

    def is_filler_phrase(self, sentence: str) -> bool:
        """Check if a sentence is only a filler phrase, or short filler without value."""
        body = " ".join(tokenize(sentence))
        for phrase in FILLER_PHRASES:
            if body == phrase:
                return True
            if (
                len(sentence) < SHORT_SENTENCE_CHARS
                and re.search(rf"\b{re.escape(phrase)}\b", body)
                and not self.has_value(sentence)
            ):
                return True
        return False

    def is_transition_fluff(self, sentence: str) -> bool:
        """Check if a short sentence is mostly transition words."""
        words = tokenize(sentence)
        if not words or len(words) > FLUFF_MAX_WORDS:
            return False
        fluff = sum(1 for word in words if word in TRANSITION_FLUFF)
        return fluff / len(words) > FLUFF_RATIO

    def _removal_reason(self, sentence: str) -> str:
        if self.is_filler_phrase(sentence):
            return "Removed filler phrase that adds no informational value"
        if self.is_transition_fluff(sentence):
            return "Removed transitional fluff that interrupts content flow"
        if self.remove_low_value_sentences and not self.has_value(sentence):
            return "Removed sentence lacking actionable information or specific value"
        return ""

    def strip_filler_phrases(self, sentence: str) -> str:
        """Remove filler phrases embedded in a sentence."""
        cleaned = sentence
        for _, pattern in _FILLER_PATTERNS:
            cleaned = pattern.sub(" ", cleaned)
        if cleaned == sentence:
            return sentence
        return _tidy(cleaned)

    def eliminate(self, content: str) -> StageResult:
        """
        Remove filler sentences and phrases from the content.

        Returns the input verbatim when nothing was removed.
        """
        changes: list[ChangeRecord] = []
        kept = []

        for sentence in split_sentences(content):
            reason = self._removal_reason(sentence)
            if reason:
                changes.append(ChangeRecord(
                    stage=ChangeStage.FILLER,
                    original=sentence,
                    optimized="",
                    reason=reason,
                ))
                continue

            cleaned = self.strip_filler_phrases(sentence)
            if cleaned != sentence:
                if not any(ch.isalnum() for ch in cleaned.rstrip(".!?")):
                    cleaned = ""
                changes.append(ChangeRecord(
                    stage=ChangeStage.FILLER,
                    original=sentence,
                    optimized=cleaned,
                    reason="Removed filler phrases while preserving core message",
                ))
                if not cleaned:
                    continue
            kept.append(cleaned)

        if not changes:
            return StageResult(content=content)

        logger.info(f"Filler stage recorded {len(changes)} change(s)")
        return StageResult(content=join_sentences(kept), changes=changes)

    def analyze_content_value(self, content: str) -> ContentValueReport:
        """
        Report the share of valuable and filler sentences.

        Args:
            content: Text to analyze.

        Returns:
            ContentValueReport with percentages rounded to two decimals.
        """
        sentences = split_sentences(content)
        total = len(sentences)
        valuable = sum(1 for s in sentences if self.has_value(s))
        filler = sum(
            1 for s in sentences
            if self.is_filler_phrase(s) or self.is_transition_fluff(s) or not self.has_value(s)
        )

        filler_percentage = filler / total * 100 if total else 0.0
        value_score = valuable / total * 100 if total else 0.0

        recommendations = []
        if filler_percentage > 20:
            recommendations.append("Consider removing filler sentences to improve content density")
        if value_score < 70:
            recommendations.append("Add more actionable information and specific details")
        if total and valuable / total < 0.6:
            recommendations.append("Focus on sentences that provide direct value to readers")

        return ContentValueReport(
            total_sentences=total,
            valuable_sentences=valuable,
            filler_sentences=filler,
            filler_percentage=round(filler_percentage, 2),
            value_score=round(value_score, 2),
            recommendations=recommendations,
        )
