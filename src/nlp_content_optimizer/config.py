# -*- coding: utf-8 -*-
"""
Centralized configuration for the NLP Content Optimizer.

This module provides a single configuration dataclass that controls
pipeline behavior: short-circuit length, complexity thresholds, replacement
selection, change tagging and which collaborator stages run.
"""

from dataclasses import dataclass
from typing import Literal


# Type alias for prohibited-phrase replacement selection
# - "first": Always use the first candidate of a rule.
# - "hashed": Pick a candidate from a checksum of the phrase. Deterministic,
#   but spreads choices across candidates for different phrases.
ReplacementStrategy = Literal["first", "hashed"]

# Stage tag used for complexity-driven truncation.
# "grammar" reproduces the legacy tagging where truncation and grammar edits
# shared a tag.
ComplexityTag = Literal["complexity", "grammar"]


@dataclass
class PipelineConfig:
    """
    Central configuration for the content optimization pipeline.

    Attributes:
        short_circuit_min_length: Content whose trimmed length is below this
            value bypasses every stage and is returned unchanged.
        complexity_threshold: Sentences scoring above this value are
            simplified. Scores range from 0 to 0.9.
        truncation_min_length: Minimum sentence length (characters) before
            truncation at the second clause is allowed.
        complexity_change_stage: Tag for complexity-driven edits.
        replacement_strategy: How a prohibited phrase's replacement is chosen.

        enable_precision: Run the language-precision collaborator.
        enable_filler: Run the filler collaborator.
        enable_grammar: Run the grammar collaborator.

        filler_remove_low_value_sentences: When True the default filler
            detector also drops sentences lacking any direct-value signal.
            Off by default because it deletes most short marketing copy.
        semantic_enhancement_min_count: A generic verb must repeat at least
            this many times before the precision engine replaces it.
    """

    short_circuit_min_length: int = 5
    complexity_threshold: float = 0.8
    truncation_min_length: int = 150
    complexity_change_stage: ComplexityTag = "complexity"
    replacement_strategy: ReplacementStrategy = "first"

    # Collaborator stages
    enable_precision: bool = True
    enable_filler: bool = True
    enable_grammar: bool = True

    # Default collaborator tuning
    filler_remove_low_value_sentences: bool = False
    semantic_enhancement_min_count: int = 3

    def __post_init__(self):
        """Validate configuration values."""
        if self.short_circuit_min_length < 0:
            raise ValueError(
                f"short_circuit_min_length must be >= 0, got {self.short_circuit_min_length}"
            )
        if not 0.0 <= self.complexity_threshold <= 1.0:
            raise ValueError(
                f"complexity_threshold must be between 0 and 1, got {self.complexity_threshold}"
            )
        if self.truncation_min_length < 0:
            raise ValueError(
                f"truncation_min_length must be >= 0, got {self.truncation_min_length}"
            )
        if self.complexity_change_stage not in ("complexity", "grammar"):
            raise ValueError(
                f"complexity_change_stage must be 'complexity' or 'grammar', "
                f"got '{self.complexity_change_stage}'"
            )
        if self.replacement_strategy not in ("first", "hashed"):
            raise ValueError(
                f"replacement_strategy must be 'first' or 'hashed', "
                f"got '{self.replacement_strategy}'"
            )
        if self.semantic_enhancement_min_count < 1:
            raise ValueError(
                f"semantic_enhancement_min_count must be >= 1, "
                f"got {self.semantic_enhancement_min_count}"
            )

    @property
    def uses_legacy_tags(self) -> bool:
        """Check if complexity edits are reported under the grammar tag."""
        return self.complexity_change_stage == "grammar"

    @classmethod
    def strict(cls, **overrides) -> "PipelineConfig":
        """Create config for rule-only stages.

        Strict mode:
        - Only the core stages run (SVO, prohibited, complexity, coherence)
        - No precision, filler or grammar collaborators

        Args:
            **overrides: Override any config values

        Returns:
            PipelineConfig with collaborators disabled
        """
        defaults = {
            "enable_precision": False,
            "enable_filler": False,
            "enable_grammar": False,
        }
        defaults.update(overrides)
        return cls(**defaults)

    @classmethod
    def legacy(cls, **overrides) -> "PipelineConfig":
        """Create config reproducing the legacy change tagging.

        Complexity truncations are reported as grammar edits.
        """
        defaults = {"complexity_change_stage": "grammar"}
        defaults.update(overrides)
        return cls(**defaults)
