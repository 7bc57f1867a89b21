"""
Data models for the NLP Content Optimizer.

This module defines the core data structures shared by every pipeline stage:
change records, stage results, phrase rules, topic groups and the final
pipeline result with its metrics bundle.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ChangeStage(Enum):
    """Pipeline stage that produced a change."""
    SVO = "svo"
    PROHIBITED = "prohibited"
    PRECISION = "precision"
    FILLER = "filler"
    COMPLEXITY = "complexity"
    GRAMMAR = "grammar"
    COHERENCE = "coherence"


@dataclass(frozen=True)
class ChangeRecord:
    """A single edit made by one pipeline stage. Never modified after creation."""
    stage: ChangeStage
    original: str
    optimized: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to plain data."""
        return {
            "stage": self.stage.value,
            "original": self.original,
            "optimized": self.optimized,
            "reason": self.reason,
        }


@dataclass
class StageResult:
    """Output of a stage: the rewritten content and the edits that produced it."""
    content: str
    changes: list[ChangeRecord] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Check if the stage recorded any edit."""
        return len(self.changes) > 0


@dataclass(frozen=True)
class PhraseRule:
    """
    A prohibited phrase and its approved alternatives.

    Attributes:
        phrase: The blacklisted word or phrase (matched case-insensitively,
            whole word).
        replacements: Ordered candidate replacements.
        severity: 1 (mild) to 5 (must fix).
        category: Rule family, e.g. "overused_seo", "cliche", "redundant".
    """
    phrase: str
    replacements: tuple[str, ...]
    severity: int = 3
    category: str = "overused_seo"

    def __post_init__(self) -> None:
        """Normalize fields while keeping the instance immutable."""
        object.__setattr__(self, "phrase", self.phrase.strip())
        object.__setattr__(self, "replacements", tuple(self.replacements))

    @property
    def is_high_severity(self) -> bool:
        """Check if the rule is high priority (severity 4 or 5)."""
        return self.severity >= 4


@dataclass
class TopicGroup:
    """Sentences sharing the same dominant topic tag."""
    topic: str
    sentences: list[str] = field(default_factory=list)
    coherence_score: float = 100.0

    @property
    def size(self) -> int:
        """Number of sentences in the group."""
        return len(self.sentences)


@dataclass(frozen=True)
class MetricsBundle:
    """Quality metrics on a 0-100 scale."""
    svo_compliance: float = 0.0
    language_precision_score: float = 0.0
    filler_content_percentage: float = 0.0
    grammar_accuracy: float = 0.0
    semantic_coherence_score: float = 0.0

    def to_dict(self) -> dict[str, float]:
        """Serialize using the camelCase names consumed downstream."""
        return {
            "svoCompliance": self.svo_compliance,
            "languagePrecisionScore": self.language_precision_score,
            "fillerContentPercentage": self.filler_content_percentage,
            "grammarAccuracy": self.grammar_accuracy,
            "semanticCoherenceScore": self.semantic_coherence_score,
        }


@dataclass
class PipelineResult:
    """
    Result of one pipeline invocation.

    Created once per call and owned by the caller; nothing in it is shared
    with the pipeline that produced it.

    Attributes:
        optimized_content: Final prose.
        changes: Every edit in stage-execution order.
        metrics: Quality metrics of the final prose.
        stage_trace: States visited by the orchestrator.
        failed_stages: Collaborator stages that fell back to a no-op.
    """
    optimized_content: str
    changes: list[ChangeRecord] = field(default_factory=list)
    metrics: MetricsBundle = field(default_factory=MetricsBundle)
    stage_trace: list[str] = field(default_factory=list)
    failed_stages: list[str] = field(default_factory=list)

    def changes_for(self, stage: ChangeStage) -> list[ChangeRecord]:
        """Get the changes recorded by one stage."""
        return [change for change in self.changes if change.stage == stage]

    @property
    def prohibited_phrases_removed(self) -> int:
        """Number of prohibited-phrase rules that fired."""
        return len(self.changes_for(ChangeStage.PROHIBITED))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-compatible data."""
        return {
            "optimizedContent": self.optimized_content,
            "changes": [change.to_dict() for change in self.changes],
            "metrics": self.metrics.to_dict(),
            "failedStages": list(self.failed_stages),
        }
