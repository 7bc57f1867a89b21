"""
Quality metrics for optimized content.

All five metrics are computed from the final text on a 0-100 scale and
rounded to two decimals. Content without sentences scores 0 everywhere.
"""

import re
from typing import Optional

from .coherence import calculate_coherence_score
from .filler import has_direct_value
from .models import MetricsBundle
from .svo import calculate_svo_compliance
from .text_utils import split_sentences, tokenize
from .topics import TopicClassifier

VAGUE_TERMS = frozenset({"things", "stuff", "very", "really", "quite", "somewhat"})

GRAMMAR_ERROR_PATTERNS = (
    re.compile(r"\s{2,}"),   # doubled whitespace
    re.compile(r"\.{2,}"),   # doubled period
    re.compile(r",{2,}"),    # doubled comma
)


def calculate_precision_score(content: str) -> float:
    """100 minus the share of vague terms among all tokens, floored at 0."""
    tokens = tokenize(content)
    if not tokens:
        return 0.0
    vague = sum(1 for token in tokens if token in VAGUE_TERMS)
    return round(max(0.0, 100 - vague / len(tokens) * 100), 2)


def calculate_filler_percentage(sentences: list[str]) -> float:
    """Share of sentences without a direct-value indicator."""
    if not sentences:
        return 0.0
    filler = sum(1 for s in sentences if not has_direct_value(s))
    return round(filler / len(sentences) * 100, 2)


def calculate_grammar_accuracy(content: str, sentence_count: int) -> float:
    """100 minus 10 points per mechanical error per sentence, floored at 0."""
    if sentence_count == 0:
        return 0.0
    hits = sum(len(pattern.findall(content)) for pattern in GRAMMAR_ERROR_PATTERNS)
    return round(max(0.0, 100 - hits / sentence_count * 10), 2)


class MetricsCalculator:
    """Derives the MetricsBundle of a piece of content."""

    def __init__(self, classifier: Optional[TopicClassifier] = None):
        self.classifier = classifier or TopicClassifier()

    def calculate(self, content: str, coherence_score: Optional[float] = None) -> MetricsBundle:
        """
        Compute every metric for the content.

        Args:
            content: Final optimized text.
            coherence_score: Score reported by the coherence stage. Computed
                from the content when omitted.

        Returns:
            MetricsBundle (all zeros when the content has no sentences).
        """
        sentences = split_sentences(content)
        if not sentences:
            return MetricsBundle()

        if coherence_score is None:
            coherence_score = calculate_coherence_score(sentences, self.classifier)

        return MetricsBundle(
            svo_compliance=calculate_svo_compliance(sentences),
            language_precision_score=calculate_precision_score(content),
            filler_content_percentage=calculate_filler_percentage(sentences),
            grammar_accuracy=calculate_grammar_accuracy(content, len(sentences)),
            semantic_coherence_score=round(coherence_score, 2),
        )
