"""
Unit tests for technical term detection
"""

import pytest

from synapse_reader.services.term_detector import detect_technical_term, should_show_deep_dive


@pytest.mark.unit
class TestDetectTechnicalTerm:
    """Test detect_technical_term"""

    @pytest.mark.parametrize("term", ["NaCl", "5 GHz", "DNA", "α decay", "JavaScript"])
    def test_patterns(self, term):
        result = detect_technical_term(term)

        assert result.is_technical is True
        assert result.reason == "pattern_match"
        assert result.confidence == pytest.approx(0.9)

    def test_prefix(self):
        result = detect_technical_term("thermodynamics")

        assert (result.is_technical, result.reason) == (True, "prefix_match")

    def test_suffix(self):
        result = detect_technical_term("replication")

        assert (result.is_technical, result.reason) == (True, "suffix_match")
        assert result.confidence == pytest.approx(0.7)

    def test_capitalized_phrase(self):
        assert detect_technical_term("Krebs Cycle").reason == "capitalized_phrase"

    def test_capitalized_word(self):
        result = detect_technical_term("Newton")

        assert (result.is_technical, result.reason) == (True, "capitalized_word")
        assert result.confidence == pytest.approx(0.5)

    def test_capitalized_word_rejects_trailing_newline(self):
        assert detect_technical_term("Entropy\n").reason == "uncertain"
        assert detect_technical_term("Entropy").reason == "capitalized_word"

    def test_common_word(self):
        result = detect_technical_term("therefore")

        assert (result.is_technical, result.confidence, result.reason) == (False, 1.0, "common_word")

    def test_length_limits(self):
        assert detect_technical_term(" x ").reason == "too_short"
        assert detect_technical_term("a" * 101).reason == "too_long"

    def test_uncertain(self):
        result = detect_technical_term("apple")

        assert (result.is_technical, result.reason) == (False, "uncertain")
        assert result.confidence == pytest.approx(0.4)


@pytest.mark.unit
class TestShouldShowDeepDive:
    """Test should_show_deep_dive"""

    def test_technical_term(self):
        assert should_show_deep_dive("mitochondria") is True

    def test_unknown_word_offered(self):
        assert should_show_deep_dive("apple") is True

    def test_common_word_rejected(self):
        assert should_show_deep_dive("the") is False

    def test_sentences_rejected(self):
        assert should_show_deep_dive("Cells divide. Then they grow") is False

    def test_trailing_period_allowed(self):
        assert should_show_deep_dive("photosynthesis.") is True

    def test_too_many_words(self):
        assert should_show_deep_dive("one two three four five six") is False

    def test_too_short(self):
        assert should_show_deep_dive("ab") is False
