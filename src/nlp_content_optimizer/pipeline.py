"""
Content optimization pipeline.

Runs the optimization stages in a fixed order:

    SVO -> prohibited phrases -> precision* -> filler* -> complexity
        -> grammar* -> coherence -> metrics

Stages marked * are collaborators: injected objects that may be sync or
async. A collaborator that raises or returns something unusable is treated
as a no-op so one failing stage never aborts the run.
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Iterable, Mapping, Optional, Protocol, Union

from .coherence import CoherenceOptimizer
from .complexity import ComplexityOptimizer
from .config import PipelineConfig
from .filler import FillerContentDetector
from .grammar import RuleBasedGrammarValidator
from .metrics import MetricsCalculator
from .models import ChangeRecord, ChangeStage, PhraseRule, PipelineResult, StageResult
from .phrase_rules import PhraseRuleProvider, StaticPhraseRuleProvider
from .precision import LanguagePrecisionEngine
from .prohibited import ProhibitedPhraseRewriter
from .svo import SVORestructurer
from .topics import TopicClassifier

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    """States visited by the orchestrator, in order."""
    IDLE = "idle"
    SVO = "svo"
    PROHIBITED = "prohibited"
    PRECISION = "precision"
    FILLER = "filler"
    COMPLEXITY = "complexity"
    GRAMMAR = "grammar"
    COHERENCE = "coherence"
    METRICS_COMPUTED = "metrics_computed"
    DONE = "done"


CollaboratorOutput = Union[StageResult, Mapping[str, Any]]


class PrecisionEngine(Protocol):
    def enhance(self, content: str) -> Union[CollaboratorOutput, Awaitable[CollaboratorOutput]]:
        ...


class FillerDetector(Protocol):
    def eliminate(self, content: str) -> Union[CollaboratorOutput, Awaitable[CollaboratorOutput]]:
        ...


class GrammarValidator(Protocol):
    def validate_and_correct(self, content: str) -> Union[CollaboratorOutput, Awaitable[CollaboratorOutput]]:
        ...


class CollaboratorResultError(Exception):
    """Raised when a collaborator returns a result the pipeline cannot use."""
    pass


def _coerce_change(change: Any, default_stage: ChangeStage) -> ChangeRecord:
    if isinstance(change, ChangeRecord):
        return change
    if isinstance(change, Mapping):
        stage = change.get("stage", change.get("type", default_stage))
        try:
            stage = stage if isinstance(stage, ChangeStage) else ChangeStage(str(stage))
        except ValueError:
            raise CollaboratorResultError(f"Unknown change stage: {stage!r}")
        return ChangeRecord(
            stage=stage,
            original=str(change.get("original", "")),
            optimized=str(change.get("optimized", "")),
            reason=str(change.get("reason", "")),
        )
    raise CollaboratorResultError(f"Unusable change record: {change!r}")


def coerce_stage_result(outcome: Any, stage: ChangeStage) -> StageResult:
    """
    Normalize a collaborator's output into a StageResult.

    Accepts a StageResult or a mapping with "content" and optional
    "changes" keys; change entries may be ChangeRecords or mappings.

    Raises:
        CollaboratorResultError: If the output has no string content or
            carries malformed changes.
    """
    if isinstance(outcome, StageResult):
        content, changes = outcome.content, outcome.changes
    elif isinstance(outcome, Mapping):
        content, changes = outcome.get("content"), outcome.get("changes") or []
    else:
        raise CollaboratorResultError(f"Unusable stage result: {type(outcome).__name__}")

    if not isinstance(content, str):
        raise CollaboratorResultError("Stage result content must be a string")

    return StageResult(content=content, changes=[_coerce_change(c, stage) for c in changes])


class ContentOptimizationPipeline:
    """
    Orchestrates the optimization stages over one piece of content.

    The pipeline holds only immutable tables and stateless stage objects, so
    one instance can serve concurrent optimize() calls on different inputs.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        phrase_rules: Optional[Union[PhraseRuleProvider, Iterable[PhraseRule]]] = None,
        topic_classifier: Optional[TopicClassifier] = None,
        precision_engine: Optional[PrecisionEngine] = None,
        filler_detector: Optional[FillerDetector] = None,
        grammar_validator: Optional[GrammarValidator] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration. Defaults to PipelineConfig().
            phrase_rules: A PhraseRuleProvider, or a plain iterable of rules.
                Defaults to the built-in table.
            topic_classifier: Classifier for coherence grouping.
            precision_engine: Precision collaborator.
            filler_detector: Filler collaborator.
            grammar_validator: Grammar collaborator.
        """
        self.config = config or PipelineConfig()

        if phrase_rules is None or hasattr(phrase_rules, "phrase_rules"):
            provider = phrase_rules
        else:
            provider = StaticPhraseRuleProvider(phrase_rules)

        classifier = topic_classifier or TopicClassifier()

        self.svo = SVORestructurer()
        self.prohibited = ProhibitedPhraseRewriter(provider, self.config.replacement_strategy)
        self.complexity = ComplexityOptimizer(self.config)
        self.coherence = CoherenceOptimizer(classifier)
        self.metrics = MetricsCalculator(classifier)

        self.precision_engine = precision_engine or LanguagePrecisionEngine(
            semantic_min_count=self.config.semantic_enhancement_min_count
        )
        self.filler_detector = filler_detector or FillerContentDetector(
            remove_low_value_sentences=self.config.filler_remove_low_value_sentences
        )
        self.grammar_validator = grammar_validator or RuleBasedGrammarValidator()

    async def optimize(self, content: str) -> PipelineResult:
        """
        Optimize content and compute its quality metrics.

        Args:
            content: Raw prose.

        Returns:
            A new PipelineResult owned by the caller.
        """
        trace = [PipelineState.IDLE.value]

        if not content or len(content.strip()) < self.config.short_circuit_min_length:
            trace.append(PipelineState.DONE.value)
            return PipelineResult(
                optimized_content=content,
                metrics=self.metrics.calculate(content or ""),
                stage_trace=trace,
            )

        changes: list[ChangeRecord] = []
        failed_stages: list[str] = []
        current = content

        def apply(state: PipelineState, result: StageResult) -> None:
            nonlocal current
            trace.append(state.value)
            current = result.content
            changes.extend(result.changes)

        apply(PipelineState.SVO, self.svo.enforce(current))
        apply(PipelineState.PROHIBITED, self.prohibited.rewrite(current))

        apply(PipelineState.PRECISION, await self._run_collaborator(
            ChangeStage.PRECISION, self.config.enable_precision,
            getattr(self.precision_engine, "enhance", None), current, failed_stages,
        ))
        apply(PipelineState.FILLER, await self._run_collaborator(
            ChangeStage.FILLER, self.config.enable_filler,
            getattr(self.filler_detector, "eliminate", None), current, failed_stages,
        ))

        apply(PipelineState.COMPLEXITY, self.complexity.optimize(current))

        apply(PipelineState.GRAMMAR, await self._run_collaborator(
            ChangeStage.GRAMMAR, self.config.enable_grammar,
            getattr(self.grammar_validator, "validate_and_correct", None), current, failed_stages,
        ))

        coherence_result = self.coherence.optimize(current)
        apply(PipelineState.COHERENCE, coherence_result)

        metrics = self.metrics.calculate(current, coherence_score=coherence_result.coherence_score)
        trace.append(PipelineState.METRICS_COMPUTED.value)
        trace.append(PipelineState.DONE.value)

        logger.info(
            f"Optimization complete: {len(changes)} change(s), "
            f"{len(failed_stages)} failed stage(s)"
        )

        return PipelineResult(
            optimized_content=current,
            changes=changes,
            metrics=metrics,
            stage_trace=trace,
            failed_stages=failed_stages,
        )

    async def _run_collaborator(
        self,
        stage: ChangeStage,
        enabled: bool,
        method,
        content: str,
        failed_stages: list[str],
    ) -> StageResult:
        """Call a collaborator, falling back to a no-op on any failure."""
        if not enabled:
            return StageResult(content=content)

        try:
            if method is None:
                raise CollaboratorResultError(f"{stage.value} collaborator has no entry point")
            outcome = method(content)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            result = coerce_stage_result(outcome, stage)
        except Exception as e:
            logger.warning(f"{stage.value} stage failed, passing content through: {e}")
            failed_stages.append(stage.value)
            return StageResult(content=content)

        if result.content != content and not result.changes:
            result.changes.append(ChangeRecord(
                stage=stage,
                original=content,
                optimized=result.content,
                reason=f"{stage.value} collaborator rewrote content",
            ))

        return result


def optimize_content(content: str, **kwargs) -> PipelineResult:
    """
    Optimize content synchronously.

    Convenience wrapper around ContentOptimizationPipeline.optimize; keyword
    arguments are passed to the pipeline constructor. Must not be called from
    a running event loop.
    """
    pipeline = ContentOptimizationPipeline(**kwargs)
    return asyncio.run(pipeline.optimize(content))
