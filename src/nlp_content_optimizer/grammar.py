"""
Grammar validation and correction.

Two grammar collaborators share the async validate_and_correct contract:

- RuleBasedGrammarValidator: dictionary and regex repairs, no network.
- LLMGrammarValidator: sends the content to Claude for minimal correction.
"""

import logging
import re
from typing import Optional

from .llm_client import LLMClient, create_llm_client
from .models import ChangeRecord, ChangeStage, StageResult

logger = logging.getLogger(__name__)

SPELLING_CORRECTIONS = {
    "recieve": "receive",
    "seperate": "separate",
    "definately": "definitely",
    "occured": "occurred",
    "neccessary": "necessary",
    "accomodate": "accommodate",
    "embarass": "embarrass",
    "existance": "existence",
    "maintainance": "maintenance",
    "occassion": "occasion",
}

GRAMMAR_CORRECTIONS = {
    "could of": "could have",
    "would of": "would have",
    "should of": "should have",
    "alot": "a lot",
    "there own": "their own",
    "your welcome": "you're welcome",
    "loose weight": "lose weight",
}

# Applied in order: repeated marks collapse before spacing is repaired.
PUNCTUATION_RULES = (
    (re.compile(r"\.{2,}"), ".", "Replace multiple periods with single period"),
    (re.compile(r",{2,}"), ",", "Replace multiple commas with single comma"),
    (re.compile(r"\?{2,}"), "?", "Replace multiple question marks with single"),
    (re.compile(r"!{2,}"), "!", "Replace multiple exclamation marks with single"),
    (re.compile(r"[ \t]+([,.!?;:])"), r"\1", "Remove space before punctuation"),
    (re.compile(r" {2,}"), " ", "Replace multiple spaces with single space"),
)

STYLE_RULES = (
    (re.compile(r"\bin order to\b", re.IGNORECASE), "to", 'Simplify "in order to" to "to"'),
    (re.compile(r"\bdue to the fact that\b", re.IGNORECASE), "because",
     'Simplify "due to the fact that" to "because"'),
    (re.compile(r"\bat this point in time\b", re.IGNORECASE), "now",
     'Simplify "at this point in time" to "now"'),
    (re.compile(r"\bin the event that\b", re.IGNORECASE), "if",
     'Simplify "in the event that" to "if"'),
)

_SENTENCE_START_RE = re.compile(r"(^\s*|[.!?]\s+)([a-z])")


def _keep_initial_case(matched: str, replacement: str) -> str:
    if matched[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


class RuleBasedGrammarValidator:
    """Corrects common spelling, grammar, punctuation and style errors."""

    async def validate_and_correct(self, content: str) -> StageResult:
        """
        Apply every correction pass to the content.

        Each rule that fires records exactly one change, however many
        occurrences it fixed. Returns the input verbatim when nothing fired.
        """
        changes: list[ChangeRecord] = []
        corrected = content

        corrected = self._apply_dictionary(corrected, SPELLING_CORRECTIONS, "spelling", changes)
        corrected = self._apply_dictionary(corrected, GRAMMAR_CORRECTIONS, "grammar", changes)
        corrected = self._apply_punctuation(corrected, changes)
        corrected = self._apply_style(corrected, changes)
        corrected = self._capitalize_sentences(corrected, changes)

        if not changes:
            return StageResult(content=content)

        logger.info(f"Grammar stage applied {len(changes)} correction(s)")
        return StageResult(content=corrected, changes=changes)

    def _apply_dictionary(self, content: str, corrections: dict[str, str], label: str,
                          changes: list[ChangeRecord]) -> str:
        for incorrect, correct in corrections.items():
            pattern = re.compile(rf"\b{re.escape(incorrect)}\b", re.IGNORECASE)
            if not pattern.search(content):
                continue
            content = pattern.sub(lambda m: _keep_initial_case(m.group(0), correct), content)
            changes.append(ChangeRecord(
                stage=ChangeStage.GRAMMAR,
                original=incorrect,
                optimized=correct,
                reason=f'Corrected {label}: "{incorrect}" -> "{correct}"',
            ))
        return content

    def _apply_punctuation(self, content: str, changes: list[ChangeRecord]) -> str:
        for pattern, replacement, reason in PUNCTUATION_RULES:
            match = pattern.search(content)
            if not match:
                continue
            content = pattern.sub(replacement, content)
            changes.append(ChangeRecord(
                stage=ChangeStage.GRAMMAR,
                original=match.group(0),
                optimized=match.expand(replacement),
                reason=reason,
            ))
        return content

    def _apply_style(self, content: str, changes: list[ChangeRecord]) -> str:
        for pattern, replacement, reason in STYLE_RULES:
            match = pattern.search(content)
            if not match:
                continue
            content = pattern.sub(lambda m: _keep_initial_case(m.group(0), replacement), content)
            changes.append(ChangeRecord(
                stage=ChangeStage.GRAMMAR,
                original=match.group(0),
                optimized=replacement,
                reason=reason,
            ))
        return content

    def _capitalize_sentences(self, content: str, changes: list[ChangeRecord]) -> str:
        fixed = _SENTENCE_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), content)
        if fixed != content:
            changes.append(ChangeRecord(
                stage=ChangeStage.GRAMMAR,
                original=content,
                optimized=fixed,
                reason="Capitalized sentence starts",
            ))
        return fixed


class LLMGrammarValidator:
    """
    Grammar collaborator backed by Claude.

    The client is created on first use, so a missing API key surfaces as an
    LLMClientError inside the grammar stage rather than at construction.
    """

    def __init__(self, client: Optional[LLMClient] = None, api_key: Optional[str] = None,
                 model: Optional[str] = None):
        self._client = client
        self._api_key = api_key
        self._model = model

    @property
    def client(self) -> LLMClient:
        if self._client is None:
            if self._model:
                self._client = create_llm_client(api_key=self._api_key, model=self._model)
            else:
                self._client = create_llm_client(api_key=self._api_key)
        return self._client

    async def validate_and_correct(self, content: str) -> StageResult:
        """
        Send the content for correction; one change when the text came back different.

        Client errors propagate unlogged; the pipeline reports the failed stage.
        """
        corrected = await self.client.correct_grammar(content)

        if not corrected or corrected == content:
            return StageResult(content=content)

        return StageResult(
            content=corrected,
            changes=[ChangeRecord(
                stage=ChangeStage.GRAMMAR,
                original=content,
                optimized=corrected,
                reason="Corrected grammar and punctuation with language model",
            )],
        )
