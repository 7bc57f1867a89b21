"""
Topic classification of sentences.

Each sentence gets one dominant topic tag from a keyword-category table.
The table is injected so callers and tests can substitute their own.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from .text_utils import tokenize

GENERAL_TOPIC = "general"

# Declaration order matters: ties resolve to the earlier category.
DEFAULT_TOPIC_KEYWORDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "technology": ("system", "software", "algorithm", "data", "digital", "computer",
                   "technology", "platform", "application"),
    "business": ("strategy", "market", "customer", "revenue", "growth", "business",
                 "company", "organization", "management"),
    "process": ("method", "procedure", "process", "approach", "technique", "system",
                "framework", "methodology"),
    "analysis": ("analysis", "research", "study", "data", "findings", "results",
                 "evidence", "statistics", "metrics"),
    "optimization": ("optimization", "improvement", "enhancement", "efficiency",
                     "performance", "quality", "effectiveness"),
    "content": ("content", "text", "writing", "article", "document", "information",
                "material", "copy"),
})


class TopicClassifier:
    """Assigns a dominant topic to sentences from an immutable keyword table."""

    def __init__(self, topic_keywords: Optional[Mapping[str, Sequence[str]]] = None):
        """
        Initialize the classifier.

        Args:
            topic_keywords: Ordered mapping of topic -> keywords. Defaults to
                DEFAULT_TOPIC_KEYWORDS.
        """
        source = DEFAULT_TOPIC_KEYWORDS if topic_keywords is None else topic_keywords
        self._table = MappingProxyType({
            topic: tuple(keyword.lower() for keyword in keywords)
            for topic, keywords in source.items()
        })

    @property
    def topics(self) -> tuple[str, ...]:
        """Topic names in declaration order."""
        return tuple(self._table)

    def topic_scores(self, sentence: str) -> dict[str, int]:
        """Count keyword hits per topic for one sentence."""
        tokens = set(tokenize(sentence))
        return {
            topic: sum(1 for keyword in keywords if _keyword_hit(keyword, tokens))
            for topic, keywords in self._table.items()
        }

    def classify(self, sentence: str) -> str:
        """
        Get the dominant topic of a sentence.

        The topic with the most keyword hits wins; ties go to the topic
        declared first. A sentence without hits is "general".
        """
        best_topic = GENERAL_TOPIC
        best_score = 0

        for topic, score in self.topic_scores(sentence).items():
            if score > best_score:
                best_score = score
                best_topic = topic

        return best_topic


def _keyword_hit(keyword: str, tokens: set[str]) -> bool:
    """Check a keyword against a token set, accepting simple plurals."""
    if " " in keyword:
        return all(part in tokens for part in keyword.split())
    return (
        keyword in tokens
        or f"{keyword}s" in tokens
        or f"{keyword}es" in tokens
    )
