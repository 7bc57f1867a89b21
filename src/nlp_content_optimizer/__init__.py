"""
NLP Content Optimizer

A deterministic content optimization pipeline that:
- Restructures passive sentences and rewrites prohibited phrases
- Removes filler, vague language and overly complex clauses
- Reorders sentences for coherence and adds transitions
- Records every edit and scores the result
"""

__version__ = "1.0.0"
__author__ = "NLP Content Optimizer Team"

from .config import PipelineConfig, ReplacementStrategy

from .models import (
    ChangeRecord,
    ChangeStage,
    MetricsBundle,
    PhraseRule,
    PipelineResult,
    StageResult,
    TopicGroup,
)

from .phrase_rules import (
    DEFAULT_PHRASE_RULES,
    FilePhraseRuleProvider,
    PhraseRuleLoadError,
    PhraseRuleProvider,
    StaticPhraseRuleProvider,
    calculate_phrase_quality_score,
    detect_prohibited_phrases,
    load_phrase_rules,
)

from .topics import DEFAULT_TOPIC_KEYWORDS, TopicClassifier

from .pipeline import (
    ContentOptimizationPipeline,
    PipelineState,
    optimize_content,
)

__all__ = [
    "__version__",
    # Config
    "PipelineConfig",
    "ReplacementStrategy",
    # Models
    "ChangeRecord",
    "ChangeStage",
    "MetricsBundle",
    "PhraseRule",
    "PipelineResult",
    "StageResult",
    "TopicGroup",
    # Phrase rules
    "DEFAULT_PHRASE_RULES",
    "FilePhraseRuleProvider",
    "PhraseRuleLoadError",
    "PhraseRuleProvider",
    "StaticPhraseRuleProvider",
    "calculate_phrase_quality_score",
    "detect_prohibited_phrases",
    "load_phrase_rules",
    # Topics
    "DEFAULT_TOPIC_KEYWORDS",
    "TopicClassifier",
    # Pipeline
    "ContentOptimizationPipeline",
    "PipelineState",
    "optimize_content",
]
