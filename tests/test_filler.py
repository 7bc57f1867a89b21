"""Tests for filler content detection and elimination."""

from nlp_content_optimizer.filler import FillerContentDetector, has_direct_value
from nlp_content_optimizer.models import ChangeStage


class TestDetection:
    """Tests for sentence classification."""

    def test_filler_phrase_sentence(self):
        """Test a sentence that is only a filler phrase."""
        assert FillerContentDetector().is_filler_phrase("Basically.")

    def test_short_filler_with_value_kept(self):
        """Test a short sentence with a value signal is not filler."""
        assert not FillerContentDetector().is_filler_phrase("Obviously the data helps.")

    def test_transition_fluff(self):
        """Test a short run of transition words."""
        detector = FillerContentDetector()

        assert detector.is_transition_fluff("And so then.")
        assert not detector.is_transition_fluff("And so the data grew.")

    def test_direct_value_prefix_match(self):
        """Test indicators match at word starts."""
        assert has_direct_value("Results improved.")
        assert not has_direct_value("Cats sleep.")


class TestEliminate:
    """Tests for FillerContentDetector.eliminate."""

    def test_removes_sentences_and_phrases(self):
        """Test filler sentences go and embedded phrases are stripped."""
        result = FillerContentDetector().eliminate(
            "Basically. The data improved, obviously, over time."
        )

        assert result.content == "The data improved over time."
        assert len(result.changes) == 2
        assert result.changes[0].optimized == ""
        assert result.changes[0].stage == ChangeStage.FILLER
        assert result.changes[1].reason == "Removed filler phrases while preserving core message"

    def test_leading_phrase_stripped(self):
        """Test a leading filler phrase is removed and the sentence recapitalized."""
        stripped = FillerContentDetector().strip_filler_phrases(
            "It is important to note that the data improved."
        )
        assert stripped == "The data improved."

    def test_fluff_reason(self):
        """Test transitional fluff gets its own reason."""
        result = FillerContentDetector().eliminate("And so then. The data improved.")

        assert result.content == "The data improved."
        assert "transitional fluff" in result.changes[0].reason

    def test_unchanged_returned_verbatim(self):
        """Test spacing survives when nothing is removed."""
        content = "The data  improved."
        result = FillerContentDetector().eliminate(content)

        assert result.content == content
        assert not result.changed

    def test_low_value_removal_opt_in(self):
        """Test sentences without value signals are only dropped when enabled."""
        content = "Cats sleep. We build tools."

        assert FillerContentDetector().eliminate(content).content == content
        assert FillerContentDetector(True).eliminate(content).content == "We build tools."


class TestContentValue:
    """Tests for analyze_content_value."""

    def test_report(self):
        """Test value and filler shares with recommendations."""
        report = FillerContentDetector().analyze_content_value("The data shows 5 results. Cats sleep.")

        assert report.total_sentences == 2
        assert report.valuable_sentences == 1
        assert report.filler_sentences == 1
        assert report.filler_percentage == 50.0
        assert report.value_score == 50.0
        assert len(report.recommendations) == 3

    def test_empty(self):
        """Test empty content reports zeros."""
        report = FillerContentDetector().analyze_content_value("")

        assert report.total_sentences == 0
        assert report.filler_percentage == 0.0
