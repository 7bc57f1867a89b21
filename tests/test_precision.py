"""Tests for language precision enhancement."""

from nlp_content_optimizer.metrics import calculate_precision_score
from nlp_content_optimizer.models import ChangeStage
from nlp_content_optimizer.precision import LanguagePrecisionEngine, select_contextual_replacement


class TestVagueTerms:
    """Tests for the vague-term pass."""

    def test_replace_and_remove(self):
        """Test vague nouns are replaced and intensifiers removed."""
        result = LanguagePrecisionEngine().enhance("These things are very good.")

        assert result.content == "These elements are effective."
        assert [(c.original, c.optimized) for c in result.changes] == [
            ("things", "elements"),
            ("very", "[removed]"),
            ("good", "effective"),
        ]
        assert all(c.stage == ChangeStage.PRECISION for c in result.changes)

    def test_removal_keeps_sentence_capital(self):
        """Test removing a leading intensifier capitalizes the next word."""
        result = LanguagePrecisionEngine().enhance("Very few remain.")
        assert result.content == "Few remain."

    def test_rather_than_kept(self):
        """Test 'rather than' survives intensifier removal."""
        content = "Pick tools rather than guesses."
        result = LanguagePrecisionEngine().enhance(content)

        assert result.content == content
        assert result.changes == []


class TestClarity:
    """Tests for wordy phrase replacement."""

    def test_in_order_to(self):
        """Test wordy phrases are shortened."""
        result = LanguagePrecisionEngine().enhance("We did this in order to win.")

        assert result.content == "We did this to win."
        assert len(result.changes) == 1
        assert result.changes[0].original == "in order to"

    def test_hedges_become_precise(self):
        """Test 'kind of' and 'sort of' are not rewritten to another vague term."""
        engine = LanguagePrecisionEngine()

        kind = engine.enhance("It is kind of slow.")
        sort = engine.enhance("It is sort of slow.")

        assert kind.content == "It is partially slow."
        assert sort.content == "It is partially slow."
        assert calculate_precision_score(kind.content) == 100


class TestSemanticValue:
    """Tests for generic verb replacement."""

    def test_first_half_replaced(self):
        """Test only the first half of repeated verbs is replaced."""
        result = LanguagePrecisionEngine().enhance("Use it, use them, use us.")
        assert result.content == "Utilize it, utilize them, use us."

    def test_below_min_count_untouched(self):
        """Test verbs under the repeat threshold are kept."""
        content = "Help me, help you."
        assert LanguagePrecisionEngine().enhance(content).content == content

    def test_custom_min_count(self):
        """Test the threshold is configurable."""
        result = LanguagePrecisionEngine(semantic_min_count=2).enhance("Help me, help you.")
        assert result.content == "Assist me, help you."


class TestContextualReplacement:
    """Tests for select_contextual_replacement."""

    def test_business_preference(self):
        """Test business content prefers facilitate."""
        replacements = ("assist", "support", "facilitate", "enable")
        assert select_contextual_replacement(replacements, "Our business strategy") == "facilitate"

    def test_technical_preference(self):
        """Test technical content prefers implement."""
        replacements = ("utilize", "employ", "apply", "implement")
        assert select_contextual_replacement(replacements, "The data system") == "implement"

    def test_default_first(self):
        """Test other content takes the first candidate."""
        assert select_contextual_replacement(("a", "b"), "plain words") == "a"
        assert select_contextual_replacement((), "plain words") == ""
