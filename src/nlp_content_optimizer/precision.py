"""
Language precision enhancement.

Default precision collaborator for the pipeline: replaces vague terms,
rewrites wordy phrases and swaps generic verbs that repeat too often for
more specific ones.
"""

import logging
import math
import re

from .models import ChangeRecord, ChangeStage, StageResult

logger = logging.getLogger(__name__)

# An empty replacement removes the term.
VAGUE_TERM_REPLACEMENTS: dict[str, tuple[str, ...]] = {
    "things": ("elements", "components", "factors", "aspects"),
    "stuff": ("components", "materials", "elements", "items"),
    "very": ("",),
    "really": ("",),
    "quite": ("",),
    "somewhat": ("",),
    "pretty": ("",),
    "rather": ("",),
    "fairly": ("",),
    "good": ("effective", "valuable", "beneficial", "useful"),
    "bad": ("ineffective", "problematic", "detrimental", "harmful"),
    "big": ("significant", "substantial", "major", "extensive"),
    "small": ("minor", "limited", "minimal", "specific"),
    "nice": ("beneficial", "valuable", "effective", "useful"),
    "great": ("excellent", "outstanding", "exceptional", "superior"),
    "amazing": ("remarkable", "exceptional", "outstanding", "impressive"),
    "awesome": ("impressive", "remarkable", "excellent", "outstanding"),
}

CLARITY_ENHANCEMENTS: dict[str, tuple[str, ...]] = {
    "a lot of": ("numerous", "many", "multiple", "several"),
    "lots of": ("numerous", "many", "multiple", "several"),
    "tons of": ("numerous", "many", "multiple", "extensive"),
    "bunch of": ("several", "multiple", "numerous", "various"),
    "kind of": ("partially", "moderately"),
    "sort of": ("partially", "moderately"),
    "type of": ("form of", "variety of", "category of"),
    "in order to": ("to",),
    "due to the fact that": ("because",),
    "for the reason that": ("because",),
    "in spite of the fact that": ("although",),
    "at this point in time": ("now", "currently"),
    "in the event that": ("if",),
    "with regard to": ("regarding", "about"),
    "in relation to": ("regarding", "about"),
    "as a matter of fact": ("actually", "in fact"),
}

SEMANTIC_ENHANCEMENTS: dict[str, tuple[str, ...]] = {
    "help": ("assist", "support", "facilitate", "enable"),
    "make": ("create", "develop", "generate", "produce"),
    "get": ("obtain", "acquire", "receive", "achieve"),
    "do": ("perform", "execute", "implement", "conduct"),
    "use": ("utilize", "employ", "apply", "implement"),
    "show": ("demonstrate", "illustrate", "display", "reveal"),
    "tell": ("inform", "explain", "communicate", "describe"),
    "give": ("provide", "offer", "supply", "deliver"),
    "take": ("require", "demand", "necessitate", "involve"),
    "put": ("place", "position", "install", "implement"),
}

TECHNICAL_INDICATORS = ("system", "process", "method", "algorithm", "data", "analysis")
BUSINESS_INDICATORS = ("strategy", "market", "customer", "revenue", "growth", "business")

# Keeps "rather than" intact when "rather" is removed.
_REMOVAL_GUARDS = {"rather": r"(?!\s+than\b)"}


def select_contextual_replacement(replacements: tuple[str, ...], content: str) -> str:
    """
    Pick a replacement suited to the content's register.

    Technical content prefers "implement" then "execute"; business content
    prefers "facilitate" then "enable". Otherwise the first candidate wins.
    """
    if not replacements:
        return ""
    if len(replacements) == 1:
        return replacements[0]

    lowered = content.lower()
    is_technical = any(indicator in lowered for indicator in TECHNICAL_INDICATORS)
    is_business = any(indicator in lowered for indicator in BUSINESS_INDICATORS)

    preferences = []
    if is_technical:
        preferences += ["implement", "execute"]
    if is_business:
        preferences += ["facilitate", "enable"]
    for preferred in preferences:
        if preferred in replacements:
            return preferred

    return replacements[0]


def _with_case(matched: str, replacement: str) -> str:
    if replacement and matched[:1].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


class LanguagePrecisionEngine:
    """Replaces vague and wordy language with precise alternatives."""

    def __init__(self, semantic_min_count: int = 3):
        """
        Initialize the engine.

        Args:
            semantic_min_count: Occurrences a generic verb needs before it is
                replaced.
        """
        self.semantic_min_count = semantic_min_count

    def enhance(self, content: str) -> StageResult:
        """Run the vague-term, clarity and semantic passes in order."""
        changes: list[ChangeRecord] = []

        result = content
        for step in (self._replace_vague_terms, self._improve_clarity, self._maximize_semantic_value):
            result, step_changes = step(result)
            changes.extend(step_changes)

        if not changes:
            return StageResult(content=content)

        logger.info(f"Precision stage recorded {len(changes)} change(s)")
        return StageResult(content=result, changes=changes)

    def _replace_vague_terms(self, content: str) -> tuple[str, list[ChangeRecord]]:
        changes = []

        for term, replacements in VAGUE_TERM_REPLACEMENTS.items():
            guard = _REMOVAL_GUARDS.get(term, "")
            pattern = re.compile(rf"\b{term}\b{guard}", re.IGNORECASE)
            if not pattern.search(content):
                continue

            replacement = select_contextual_replacement(replacements, content)
            if replacement:
                content = pattern.sub(lambda m: _with_case(m.group(0), replacement), content)
                reason = f'Replaced vague term "{term}" with more specific "{replacement}"'
            else:
                removal = re.compile(rf"\b{term}\b{guard}\s*(\w?)", re.IGNORECASE)
                content = removal.sub(
                    lambda m: m.group(1).upper() if m.group(0)[:1].isupper() else m.group(1),
                    content,
                )
                reason = f'Removed vague intensifier "{term}"'

            changes.append(ChangeRecord(
                stage=ChangeStage.PRECISION,
                original=term,
                optimized=replacement or "[removed]",
                reason=reason,
            ))

        return content, changes

    def _improve_clarity(self, content: str) -> tuple[str, list[ChangeRecord]]:
        changes = []

        for phrase, replacements in CLARITY_ENHANCEMENTS.items():
            pattern = re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE)
            if not pattern.search(content):
                continue

            replacement = select_contextual_replacement(replacements, content)
            content = pattern.sub(lambda m: _with_case(m.group(0), replacement), content)
            changes.append(ChangeRecord(
                stage=ChangeStage.PRECISION,
                original=phrase,
                optimized=replacement,
                reason=f'Enhanced clarity by replacing "{phrase}" with "{replacement}"',
            ))

        return content, changes

    def _maximize_semantic_value(self, content: str) -> tuple[str, list[ChangeRecord]]:
        changes = []

        for word, candidates in SEMANTIC_ENHANCEMENTS.items():
            pattern = re.compile(rf"\b{word}\b", re.IGNORECASE)
            occurrences = len(pattern.findall(content))
            if occurrences < self.semantic_min_count:
                continue

            replacement = select_contextual_replacement(candidates, content)
            # Replace only the first half so the text keeps some variety
            content = pattern.sub(
                lambda m: _with_case(m.group(0), replacement),
                content,
                count=math.ceil(occurrences / 2),
            )
            changes.append(ChangeRecord(
                stage=ChangeStage.PRECISION,
                original=word,
                optimized=replacement,
                reason=f'Enhanced semantic value by replacing generic "{word}" with specific "{replacement}"',
            ))

        return content, changes
