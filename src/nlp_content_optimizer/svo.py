"""
Subject-verb-object analysis and restructuring.

Flags sentences that contain passive auxiliaries or subordination cues and
rewrites the one passive shape the rules can handle safely:
"<X> was|were <verb>ed by <Y>" becomes "<Y> <verb>ed <x>".
"""

import logging
import re
from dataclasses import dataclass

from .models import ChangeRecord, ChangeStage, StageResult
from .text_utils import capitalize_first, join_sentences, split_sentences, tokenize

logger = logging.getLogger(__name__)

PASSIVE_INDICATORS = frozenset({"was", "were", "been", "being", "is", "are", "am"})
COMPLEX_INDICATORS = frozenset({"which", "that", "where", "when", "although", "however"})

_PASSIVE_BY_RE = re.compile(
    r"^(?P<obj>.+?)\s+(?:was|were)\s+(?P<verb>\w+ed)\s+by\s+(?P<agent>.+?)(?P<end>[.!?]*)$",
    re.IGNORECASE,
)

_DETERMINERS = frozenset({
    "the", "a", "an", "this", "that", "these", "those",
    "our", "their", "its", "his", "her", "my", "your",
})


@dataclass(frozen=True)
class SVOAnalysis:
    """Result of checking one sentence for SVO compliance."""
    needs_restructuring: bool
    has_passive: bool
    is_complex: bool


def analyze_svo(sentence: str) -> SVOAnalysis:
    """
    Check whether a sentence departs from plain subject-verb-object order.

    Args:
        sentence: A single sentence.

    Returns:
        SVOAnalysis with passive and complexity flags.
    """
    words = set(tokenize(sentence))
    has_passive = not words.isdisjoint(PASSIVE_INDICATORS)
    is_complex = not words.isdisjoint(COMPLEX_INDICATORS)

    return SVOAnalysis(
        needs_restructuring=has_passive or is_complex,
        has_passive=has_passive,
        is_complex=is_complex,
    )


def _lower_leading_determiner(phrase: str) -> str:
    first, _, rest = phrase.partition(" ")
    if first.lower() in _DETERMINERS:
        return f"{first.lower()} {rest}" if rest else first.lower()
    return phrase


def restructure_to_svo(sentence: str) -> str:
    """
    Rewrite a simple passive sentence into active voice.

    Only the whole-sentence shape "<X> was|were <verb>ed by <Y>" is handled.
    Any other sentence is returned unchanged.

    Example:
        "The report was completed by the team." -> "The team completed the report."
    """
    match = _PASSIVE_BY_RE.match(sentence.strip())
    if not match:
        return sentence

    agent = match.group("agent").strip()
    obj = _lower_leading_determiner(match.group("obj").strip())
    verb = match.group("verb").lower()

    return f"{capitalize_first(agent)} {verb} {obj}{match.group('end')}"


def calculate_svo_compliance(sentences: list[str]) -> float:
    """Percentage of sentences that need no restructuring (0 for no sentences)."""
    if not sentences:
        return 0.0

    compliant = sum(1 for s in sentences if not analyze_svo(s).needs_restructuring)
    return round(compliant / len(sentences) * 100, 2)


class SVORestructurer:
    """Pipeline stage enforcing SVO order sentence by sentence."""

    def enforce(self, content: str) -> StageResult:
        """
        Restructure flagged sentences of the content.

        Returns the input verbatim when no sentence was rewritten.
        """
        sentences = split_sentences(content)
        changes: list[ChangeRecord] = []
        rewritten = []

        for sentence in sentences:
            if analyze_svo(sentence).needs_restructuring:
                restructured = restructure_to_svo(sentence)
                if restructured != sentence:
                    changes.append(ChangeRecord(
                        stage=ChangeStage.SVO,
                        original=sentence,
                        optimized=restructured,
                        reason="converted passive voice to subject-verb-object order",
                    ))
                    sentence = restructured
            rewritten.append(sentence)

        if not changes:
            return StageResult(content=content)

        logger.info(f"SVO stage restructured {len(changes)} sentence(s)")
        return StageResult(content=join_sentences(rewritten), changes=changes)
