"""
Prohibited phrase rewriting.

Replaces blacklisted phrases with an approved alternative, one rule at a
time, in rule-table order. Replacement selection is deterministic so that
the same input always produces the same output.
"""

import logging
import re
import zlib
from typing import Optional

from .config import ReplacementStrategy
from .models import ChangeRecord, ChangeStage, PhraseRule, StageResult
from .phrase_rules import PhraseRuleProvider, StaticPhraseRuleProvider, category_label, phrase_pattern

logger = logging.getLogger(__name__)


def select_replacement(
    rule: PhraseRule,
    strategy: ReplacementStrategy = "first",
    prohibited: tuple[re.Pattern, ...] = (),
) -> str:
    """
    Choose the replacement for a rule.

    Candidates that themselves contain a prohibited phrase are skipped
    unless no other candidate is left.

    Args:
        rule: The matched rule.
        strategy: "first" takes the first candidate; "hashed" indexes the
            candidates by the CRC32 of the lowercase phrase.
        prohibited: Patterns of every prohibited phrase in the table.

    Returns:
        The chosen replacement ("" when the rule has no candidates).
    """
    candidates = list(rule.replacements)
    if not candidates:
        return ""

    clean = [c for c in candidates if not any(p.search(c) for p in prohibited)]
    if clean:
        candidates = clean

    if strategy == "hashed":
        index = zlib.crc32(rule.phrase.lower().encode("utf-8")) % len(candidates)
        return candidates[index]

    return candidates[0]


def _match_case(matched: str, replacement: str) -> str:
    """Carry an initial capital from the matched text over to the replacement."""
    if replacement and matched[:1].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


class ProhibitedPhraseRewriter:
    """Pipeline stage replacing prohibited phrases."""

    def __init__(
        self,
        provider: Optional[PhraseRuleProvider] = None,
        strategy: ReplacementStrategy = "first",
    ):
        """
        Initialize the rewriter.

        Args:
            provider: Source of the rule table. Defaults to the built-in table.
            strategy: Replacement selection strategy.
        """
        self.provider = provider or StaticPhraseRuleProvider()
        self.strategy = strategy

    def rewrite(self, content: str) -> StageResult:
        """
        Replace every prohibited phrase in the content.

        Each matching rule replaces all of its occurrences in one pass and
        emits exactly one ChangeRecord, whatever the occurrence count.
        """
        rules = self.provider.phrase_rules()
        patterns = tuple(phrase_pattern(rule.phrase) for rule in rules)
        changes: list[ChangeRecord] = []
        rewritten = content

        for rule, pattern in zip(rules, patterns):
            occurrences = len(pattern.findall(rewritten))
            if occurrences == 0:
                continue

            replacement = select_replacement(rule, self.strategy, patterns)
            if replacement:
                rewritten = pattern.sub(lambda m: _match_case(m.group(0), replacement), rewritten)
            else:
                rewritten = re.sub(rf"{pattern.pattern}\s*", "", rewritten, flags=re.IGNORECASE)

            noun = "occurrence" if occurrences == 1 else "occurrences"
            changes.append(ChangeRecord(
                stage=ChangeStage.PROHIBITED,
                original=rule.phrase,
                optimized=replacement,
                reason=(
                    f'Replaced {category_label(rule.category)} term "{rule.phrase}" '
                    f"({occurrences} {noun}) with a more natural alternative"
                ),
            ))

        if not changes:
            return StageResult(content=content)

        logger.info(f"Prohibited phrase stage applied {len(changes)} rule(s)")
        return StageResult(content=rewritten, changes=changes)
