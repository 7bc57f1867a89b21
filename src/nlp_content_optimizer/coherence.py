"""
Semantic coherence optimization.

Three pure steps composed in a fixed order by CoherenceOptimizer.optimize:

1. reorder_by_flow: greedy nearest-neighbour chain over token similarity.
2. insert_transitions: prepend a transition phrase where adjacent sentences
   relate but lack a connective.
3. reorder_by_topic_groups: group sentences by dominant topic and put the
   largest groups first.

The final order is the one produced by step 3, applied to the output of
steps 1 and 2.
"""

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Optional

from .models import ChangeRecord, ChangeStage, StageResult, TopicGroup
from .text_utils import Sentence, contains_term, join_sentences, sentence_similarity, split_sentences
from .topics import TopicClassifier

logger = logging.getLogger(__name__)

TRANSITION_WORDS: dict[str, tuple[str, ...]] = {
    "addition": ("furthermore", "moreover", "additionally", "also", "besides", "in addition"),
    "contrast": ("however", "nevertheless", "nonetheless", "conversely", "on the other hand",
                 "in contrast"),
    "cause": ("therefore", "consequently", "as a result", "thus", "hence", "accordingly"),
    "sequence": ("first", "second", "third", "next", "then", "finally", "subsequently"),
    "example": ("for example", "for instance", "specifically", "namely"),
    "emphasis": ("indeed", "in fact", "certainly", "undoubtedly", "clearly"),
    "conclusion": ("in conclusion", "to summarize", "in summary", "ultimately", "overall"),
}

# Recognized at a sentence start but never inserted.
DETECTION_ONLY_TRANSITIONS = ("such as",)

ALL_TRANSITIONS: tuple[str, ...] = tuple(
    t for words in TRANSITION_WORDS.values() for t in words
) + DETECTION_ONLY_TRANSITIONS

CONTRAST_INDICATORS = ("but", "however", "although", "despite", "while", "whereas",
                       "different", "opposite", "unlike")
CONTRAST_PAIRS = (("positive", "negative"), ("advantage", "disadvantage"))
CAUSE_INDICATORS = ("because", "since", "due to", "as a result", "therefore", "consequently",
                    "result", "outcome", "consequence", "effect", "impact")
EXAMPLE_INDICATORS = ("example", "instance", "such as", "including", "like", "specifically")

# Similarity below which each relationship type gets a transition.
TRANSITION_THRESHOLDS = {"contrast": 0.3, "cause": 0.4, "example": 0.5}
ADDITION_BAND = (0.2, 0.6)

TRANSITION_BONUS = 0.2
PAIR_WEIGHT = 0.7
GROUP_WEIGHT = 0.3


@dataclass(frozen=True)
class Relationship:
    """How a sentence relates to the one before it."""
    type: str
    needs_transition: bool
    similarity: float


def has_transition(sentence: str) -> bool:
    """Check if a sentence already opens with a transition word or phrase."""
    lowered = sentence.lower()
    for transition in ALL_TRANSITIONS:
        if lowered.startswith(transition):
            rest = lowered[len(transition):]
            if not rest or not rest[0].isalnum():
                return True
    return False


def analyze_relationship(previous: str, sentence: str) -> Relationship:
    """
    Classify the relationship between two adjacent sentences.

    Lexicons are checked in priority order: contrast, cause, example. Anything
    else is an addition, which only needs a transition when the sentences are
    moderately similar.
    """
    similarity = sentence_similarity(previous, sentence)
    prev_lower = previous.lower()
    lower = sentence.lower()

    if any(contains_term(lower, w) for w in CONTRAST_INDICATORS) or any(
        contains_term(prev_lower, a) and contains_term(lower, b) for a, b in CONTRAST_PAIRS
    ):
        kind = "contrast"
    elif any(contains_term(lower, w) for w in CAUSE_INDICATORS):
        kind = "cause"
    elif any(contains_term(lower, w) for w in EXAMPLE_INDICATORS):
        kind = "example"
    else:
        low, high = ADDITION_BAND
        return Relationship("addition", low < similarity < high, similarity)

    return Relationship(kind, similarity < TRANSITION_THRESHOLDS[kind], similarity)


def _lower_first_word(sentence: str) -> str:
    """Lowercase the first letter unless the first word is "I" or an acronym."""
    first_word = sentence.split(" ", 1)[0]
    letters = [ch for ch in first_word if ch.isalpha()]
    if first_word == "I" or first_word.startswith(("I'", "I’")):
        return sentence
    if len(letters) > 1 and all(ch.isupper() for ch in letters):
        return sentence
    return sentence[:1].lower() + sentence[1:]


def reorder_by_flow(sentences: list[str]) -> list[str]:
    """
    Chain sentences by similarity, starting from the first one.

    Each step appends the remaining sentence most similar to the last placed
    one; ties go to the sentence that came first in the input. Lists of two
    sentences or fewer are returned as they are.
    """
    if len(sentences) <= 2:
        return list(sentences)

    ordered = [sentences[0]]
    remaining = list(sentences[1:])

    while remaining:
        last = ordered[-1]
        best_index = 0
        best_score = 0.0
        for index, candidate in enumerate(remaining):
            score = sentence_similarity(last, candidate)
            if score > best_score:
                best_score = score
                best_index = index
        ordered.append(remaining.pop(best_index))

    return ordered


def insert_transitions(sentences: list[str]) -> tuple[list[str], list[ChangeRecord]]:
    """
    Prepend transition phrases between related sentences.

    Phrases rotate through each category's list, starting from the first
    entry on every call, so output is deterministic.

    Returns:
        Tuple of (new sentence list, one ChangeRecord per insertion).
    """
    rotation: dict[str, int] = {}
    changes: list[ChangeRecord] = []
    result = list(sentences[:1])

    for previous, sentence in zip(sentences, sentences[1:]):
        relationship = analyze_relationship(previous, sentence)
        if not relationship.needs_transition or has_transition(sentence):
            result.append(sentence)
            continue

        phrases = TRANSITION_WORDS[relationship.type]
        index = rotation.get(relationship.type, 0)
        rotation[relationship.type] = index + 1
        transition = phrases[index % len(phrases)]

        rewritten = f"{transition[0].upper()}{transition[1:]}, {_lower_first_word(sentence)}"
        changes.append(ChangeRecord(
            stage=ChangeStage.COHERENCE,
            original=sentence,
            optimized=rewritten,
            reason=f"Added {relationship.type} transition for better flow",
        ))
        result.append(rewritten)

    return result, changes


def group_by_topic(sentences: list[str], classifier: Optional[TopicClassifier] = None) -> list[TopicGroup]:
    """Group sentences by dominant topic, in order of first appearance."""
    classifier = classifier or TopicClassifier()
    groups: dict[str, TopicGroup] = {}

    for sentence in sentences:
        topic = classifier.classify(sentence)
        groups.setdefault(topic, TopicGroup(topic=topic)).sentences.append(sentence)

    for group in groups.values():
        group.coherence_score = topic_group_coherence(group.sentences)

    return list(groups.values())


def reorder_by_topic_groups(sentences: list[str], classifier: Optional[TopicClassifier] = None) -> list[str]:
    """Concatenate topic groups, largest first; equal sizes keep first-appearance order."""
    groups = sorted(group_by_topic(sentences, classifier), key=lambda g: -g.size)
    return [sentence for group in groups for sentence in group.sentences]


def analyze_topic_progression(sentences: list[str], classifier: Optional[TopicClassifier] = None) -> list[TopicGroup]:
    """Topic groups of the sentences sorted by descending size."""
    return sorted(group_by_topic(sentences, classifier), key=lambda g: -g.size)


def topic_group_coherence(sentences: list[str]) -> float:
    """Mean pairwise similarity within a group on a 0-100 scale (100 for one sentence)."""
    if len(sentences) <= 1:
        return 100.0

    pairs = list(combinations(sentences, 2))
    return sum(sentence_similarity(a, b) for a, b in pairs) / len(pairs) * 100


def calculate_coherence_score(sentences: list[str], classifier: Optional[TopicClassifier] = None) -> float:
    """
    Composite coherence score on a 0-100 scale.

    70% adjacent-pair similarity (each pair gets a 0.2 bonus when the second
    sentence opens with a transition, capped at 1.0) and 30% mean topic-group
    coherence. One sentence scores 100, no sentences score 0.
    """
    if not sentences:
        return 0.0
    if len(sentences) == 1:
        return 100.0

    pair_scores = [
        min(1.0, sentence_similarity(a, b) + (TRANSITION_BONUS if has_transition(b) else 0.0))
        for a, b in zip(sentences, sentences[1:])
    ]
    pair_mean = sum(pair_scores) / len(pair_scores) * 100

    groups = group_by_topic(sentences, classifier)
    group_mean = sum(g.coherence_score for g in groups) / len(groups)

    return round(pair_mean * PAIR_WEIGHT + group_mean * GROUP_WEIGHT, 2)


@dataclass
class CoherenceResult(StageResult):
    """Coherence stage output with the score of the final sentence order."""
    coherence_score: float = 0.0
    topic_progression: list[TopicGroup] = field(default_factory=list)


class CoherenceOptimizer:
    """Pipeline stage composing flow reordering, transitions and topic grouping."""

    def __init__(self, classifier: Optional[TopicClassifier] = None):
        self.classifier = classifier or TopicClassifier()

    def optimize(self, content: str) -> CoherenceResult:
        """Apply the three coherence steps to the content."""
        sentences = split_sentences(content)
        changes: list[ChangeRecord] = []

        flowed = reorder_by_flow(sentences)
        if flowed != sentences:
            changes.append(ChangeRecord(
                stage=ChangeStage.COHERENCE,
                original=join_sentences(sentences),
                optimized=join_sentences(flowed),
                reason="Reordered sentences for logical flow",
            ))

        transitioned, transition_changes = insert_transitions(flowed)
        changes.extend(transition_changes)

        grouped = reorder_by_topic_groups(transitioned, self.classifier)
        # An unterminated fragment moved off the end would merge with its successor
        grouped = [
            s if i == len(grouped) - 1 or Sentence(s).terminator else f"{s}."
            for i, s in enumerate(grouped)
        ]
        if grouped != transitioned:
            changes.append(ChangeRecord(
                stage=ChangeStage.COHERENCE,
                original=join_sentences(transitioned),
                optimized=join_sentences(grouped),
                reason="Grouped related topics together for better coherence",
            ))

        score = calculate_coherence_score(grouped, self.classifier)
        topic_progression = analyze_topic_progression(grouped, self.classifier)

        if not changes:
            return CoherenceResult(content=content, coherence_score=score,
                                   topic_progression=topic_progression)

        logger.info(f"Coherence stage recorded {len(changes)} change(s), score {score}")
        return CoherenceResult(
            content=join_sentences(grouped),
            changes=changes,
            coherence_score=score,
            topic_progression=topic_progression,
        )
