"""Tests for semantic coherence optimization."""

import pytest

from nlp_content_optimizer.coherence import (
    CoherenceOptimizer,
    analyze_relationship,
    analyze_topic_progression,
    calculate_coherence_score,
    group_by_topic,
    has_transition,
    insert_transitions,
    reorder_by_flow,
    reorder_by_topic_groups,
    topic_group_coherence,
)
from nlp_content_optimizer.models import ChangeStage
from nlp_content_optimizer.text_utils import split_sentences
from nlp_content_optimizer.topics import TopicClassifier

CLOUD = "Cloud software powers the platform."
CUSTOMERS = "Customers dislike pricing while revenue grows."
PLATFORM = "The platform software runs in the cloud."


class TestReorderByFlow:
    """Tests for greedy similarity chaining."""

    def test_similar_sentences_become_adjacent(self):
        """Test the most similar sentence follows the first."""
        assert reorder_by_flow([CLOUD, CUSTOMERS, PLATFORM]) == [CLOUD, PLATFORM, CUSTOMERS]

    def test_ties_keep_input_order(self):
        """Test unrelated sentences keep their order."""
        sentences = ["Alpha beta.", "Gamma delta.", "Epsilon zeta."]
        assert reorder_by_flow(sentences) == sentences

    def test_two_sentences_untouched(self):
        """Test short lists are returned as they are."""
        assert reorder_by_flow([CUSTOMERS, CLOUD]) == [CUSTOMERS, CLOUD]

    def test_is_permutation(self):
        """Test no sentence is created or lost."""
        sentences = [CLOUD, CUSTOMERS, PLATFORM, "Alpha beta."]
        assert sorted(reorder_by_flow(sentences)) == sorted(sentences)


class TestTransitions:
    """Tests for relationship analysis and transition insertion."""

    def test_contrast(self):
        """Test contrast indicators insert a contrast transition."""
        sentences, changes = insert_transitions(
            ["Remote work improves focus.", "Meetings suffer while teams travel."]
        )

        assert sentences[1] == "However, meetings suffer while teams travel."
        assert changes[0].stage == ChangeStage.COHERENCE
        assert changes[0].original == "Meetings suffer while teams travel."
        assert "contrast" in changes[0].reason

    def test_cause(self):
        """Test cause indicators insert a cause transition."""
        sentences, _ = insert_transitions(["Prices fell sharply.", "Sales rose because prices fell."])
        assert sentences[1] == "Therefore, sales rose because prices fell."

    def test_example(self):
        """Test example indicators insert an example transition."""
        sentences, _ = insert_transitions(["Tools matter.", "Hammers, for instance, last decades."])
        assert sentences[1] == "For example, hammers, for instance, last decades."

    def test_addition_band(self):
        """Test moderately similar sentences get an addition transition."""
        relationship = analyze_relationship(
            "Solar panels cut energy bills.", "Solar panels need sunny roofs."
        )
        assert relationship.type == "addition"
        assert relationship.needs_transition

        sentences, _ = insert_transitions(
            ["Solar panels cut energy bills.", "Solar panels need sunny roofs."]
        )
        assert sentences[1] == "Furthermore, solar panels need sunny roofs."

    def test_unrelated_addition_skipped(self):
        """Test unrelated sentences get no transition."""
        sentences, changes = insert_transitions(["Alpha beta.", "Gamma delta."])

        assert sentences == ["Alpha beta.", "Gamma delta."]
        assert changes == []

    def test_existing_transition_respected(self):
        """Test sentences already opening with a transition are left alone."""
        sentences, changes = insert_transitions(
            ["Remote work improves focus.", "However, meetings suffer while teams travel."]
        )
        assert changes == []

    def test_rotation_within_call(self):
        """Test phrases rotate per category and restart on each call."""
        sentences = [
            "Remote work improves focus.",
            "Meetings suffer while teams travel.",
            "Costs drop while output grows.",
        ]
        first, _ = insert_transitions(sentences)
        second, _ = insert_transitions(sentences)

        assert first[1].startswith("However, ")
        assert first[2].startswith("Nevertheless, ")
        assert first == second

    def test_acronyms_and_i_keep_case(self):
        """Test that acronyms and 'I' are not lowercased."""
        sentences, _ = insert_transitions([
            "Remote work improves focus.",
            "NASA launches rockets while budgets shrink.",
            "I agree while others doubt.",
        ])

        assert sentences[1] == "However, NASA launches rockets while budgets shrink."
        assert sentences[2] == "Nevertheless, I agree while others doubt."

    def test_has_transition_word_boundary(self):
        """Test transitions must be whole leading words."""
        assert has_transition("Thus we win.")
        assert has_transition("For example, this.")
        assert not has_transition("Thesis statements matter.")
        assert not has_transition("Alsoran horses lose.")

    def test_such_as_recognized_not_inserted(self):
        """Test 'such as' counts as an opener but example rotation never uses it."""
        assert has_transition("Such as this one.")

        sentences, changes = insert_transitions([
            "Tools matter.",
            "Hammers, for instance, last decades.",
            "Saws, for instance, cut wood.",
            "Drills, for instance, bore holes.",
            "Chisels, for instance, shape oak.",
            "Files, for instance, smooth edges.",
        ])

        assert [s.split(",")[0] for s in sentences[1:]] == [
            "For example", "For instance", "Specifically", "Namely", "For example",
        ]
        assert len(changes) == 5
        assert not any(s.startswith("Such as") for s in sentences)


class TestTopicGroups:
    """Tests for topic grouping and reordering."""

    def test_largest_group_first(self):
        """Test groups are concatenated by descending size."""
        a = "The software platform scales."
        b = "Customers trust the brand."
        c = "Our data system is fast."

        assert reorder_by_topic_groups([a, b, c]) == [a, c, b]

    def test_equal_sizes_keep_first_appearance(self):
        """Test the sort is stable."""
        sentences = ["Customers trust the brand.", "The software platform scales."]
        assert reorder_by_topic_groups(sentences) == sentences

    def test_group_coherence(self):
        """Test group coherence values."""
        groups = group_by_topic(
            ["The software platform scales.", "Customers trust the brand.", "Our data system is fast."]
        )

        assert [g.topic for g in groups] == ["technology", "business"]
        assert groups[0].coherence_score == 0.0
        assert groups[1].coherence_score == 100.0

    def test_topic_progression_sorted(self):
        """Test progression is sorted by descending size."""
        groups = analyze_topic_progression(
            ["Customers trust the brand.", "The software platform scales.", "Our data system is fast."]
        )
        assert [g.size for g in groups] == [2, 1]

    def test_injected_classifier(self):
        """Test a custom classifier drives grouping."""
        classifier = TopicClassifier({"pets": ["cat"], "food": ["bread"]})
        sentences = ["Fresh bread.", "A cat naps.", "The cat eats."]

        assert reorder_by_topic_groups(sentences, classifier) == [
            "A cat naps.", "The cat eats.", "Fresh bread.",
        ]


class TestCoherenceScore:
    """Tests for calculate_coherence_score."""

    def test_empty_and_single(self):
        """Test boundary values."""
        assert calculate_coherence_score([]) == 0
        assert calculate_coherence_score(["One sentence."]) == 100

    def test_pair_and_group_weighting(self):
        """Test 70/30 weighting of pair and group coherence."""
        score = calculate_coherence_score(
            ["Solar panels cut energy bills.", "Solar panels need sunny roofs."]
        )
        assert score == pytest.approx(25.0)

    def test_transition_bonus(self):
        """Test a leading transition raises the score."""
        plain = calculate_coherence_score(
            ["Solar panels cut energy bills.", "Solar panels need sunny roofs."]
        )
        with_transition = calculate_coherence_score(
            ["Solar panels cut energy bills.", "Furthermore, solar panels need sunny roofs."]
        )
        assert with_transition > plain

    def test_single_group_coherence(self):
        """Test one-sentence groups score 100."""
        assert topic_group_coherence(["Only one."]) == 100


class TestCoherenceOptimizer:
    """Tests for the composed coherence stage."""

    def test_reorders_and_adds_transition(self):
        """Test similar sentences become adjacent and a transition is added."""
        content = f"{CLOUD} {CUSTOMERS} {PLATFORM}"
        result = CoherenceOptimizer().optimize(content)

        assert result.content == (
            "Cloud software powers the platform. "
            "The platform software runs in the cloud. "
            "However, customers dislike pricing while revenue grows."
        )
        assert len(result.changes) == 2
        assert result.changes[0].reason == "Reordered sentences for logical flow"
        assert result.changes[0].original == content
        assert 0 <= result.coherence_score <= 100

    def test_sentence_count_preserved(self):
        """Test the stage neither creates nor drops sentences."""
        content = f"{CLOUD} {CUSTOMERS} {PLATFORM} Alpha beta."
        result = CoherenceOptimizer().optimize(content)

        assert len(split_sentences(result.content)) == 4

    def test_topic_progression_follows_final_order(self):
        """Test progression groups hold the final sentences, transitions included."""
        result = CoherenceOptimizer().optimize(f"{CLOUD} {CUSTOMERS} {PLATFORM}")

        assert [g.topic for g in result.topic_progression] == ["technology", "business"]
        assert [g.sentences for g in result.topic_progression] == [
            [CLOUD, PLATFORM],
            ["However, customers dislike pricing while revenue grows."],
        ]

    def test_moved_fragment_gets_terminated(self):
        """Test an unterminated fragment moved off the end gets a period."""
        content = "Customers buy plans. The software platform scales. Software platform data"
        result = CoherenceOptimizer().optimize(content)

        assert result.content == (
            "The software platform scales. Furthermore, software platform data. Customers buy plans."
        )
        assert len(split_sentences(result.content)) == 3

    def test_single_sentence_untouched(self):
        """Test a single sentence passes through with score 100."""
        result = CoherenceOptimizer().optimize("Just one sentence here.")

        assert result.content == "Just one sentence here."
        assert result.changes == []
        assert result.coherence_score == 100
