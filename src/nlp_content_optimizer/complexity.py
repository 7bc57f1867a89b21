"""
Sentence complexity scoring and simplification.

Complexity is a small additive score over sentence length, subordination
cues and comma count. Sentences above the configured threshold are
simplified by truncate_at_second_clause, which is lossy: every clause after
the second comma-delimited segment is dropped.
"""

import logging
from dataclasses import dataclass, field

from .config import PipelineConfig
from .models import ChangeRecord, ChangeStage, StageResult
from .text_utils import join_sentences, split_sentences, tokenize

logger = logging.getLogger(__name__)

SUBORDINATION_CUES = ("which", "that", "where", "when", "although", "because", "since")

LONG_SENTENCE_WORDS = 25
MAX_SUBORDINATION_CUES = 2
MAX_COMMAS = 3


@dataclass(frozen=True)
class ComplexityScore:
    """Complexity of one sentence (0 to 0.9) and the factors behind it."""
    score: float
    factors: tuple[str, ...] = field(default_factory=tuple)


def sentence_complexity(sentence: str) -> ComplexityScore:
    """
    Score the complexity of a sentence.

    +0.3 when it has more than 25 words, +0.4 when more than two distinct
    subordination cues occur, +0.2 when it has more than three commas.
    """
    score = 0.0
    factors = []

    if len(sentence.split()) > LONG_SENTENCE_WORDS:
        score += 0.3
        factors.append("long sentence")

    words = set(tokenize(sentence))
    if sum(1 for cue in SUBORDINATION_CUES if cue in words) > MAX_SUBORDINATION_CUES:
        score += 0.4
        factors.append("multiple subordinate clauses")

    if sentence.count(",") > MAX_COMMAS:
        score += 0.2
        factors.append("excessive commas")

    return ComplexityScore(score=round(score, 2), factors=tuple(factors))


def truncate_at_second_clause(sentence: str, min_length: int = 150) -> str:
    """
    Keep the first two comma-delimited segments of a long sentence.

    Lossy: the remaining clauses are discarded and the result ends with a
    period. Sentences of min_length characters or fewer, or with fewer than
    two commas, are returned unchanged.

    Args:
        sentence: Sentence to shorten.
        min_length: Length (characters) the sentence must exceed.

    Returns:
        The truncated sentence, or the input when no truncation applies.
    """
    if len(sentence) <= min_length:
        return sentence

    parts = sentence.split(",")
    if len(parts) <= 2:
        return sentence

    return ",".join(parts[:2]).rstrip() + "."


class ComplexityOptimizer:
    """Pipeline stage simplifying overly complex sentences."""

    def __init__(self, config: PipelineConfig = None):
        self.config = config or PipelineConfig()

    @property
    def change_stage(self) -> ChangeStage:
        """Stage tag recorded for truncations."""
        return ChangeStage(self.config.complexity_change_stage)

    def optimize(self, content: str) -> StageResult:
        """Truncate every sentence scoring above the complexity threshold."""
        changes: list[ChangeRecord] = []
        rewritten = []

        for sentence in split_sentences(content):
            if sentence_complexity(sentence).score > self.config.complexity_threshold:
                simplified = truncate_at_second_clause(sentence, self.config.truncation_min_length)
                if simplified != sentence:
                    changes.append(ChangeRecord(
                        stage=self.change_stage,
                        original=sentence,
                        optimized=simplified,
                        reason="simplified overly complex sentence",
                    ))
                    sentence = simplified
            rewritten.append(sentence)

        if not changes:
            return StageResult(content=content)

        logger.info(f"Complexity stage truncated {len(changes)} sentence(s)")
        return StageResult(content=join_sentences(rewritten), changes=changes)
