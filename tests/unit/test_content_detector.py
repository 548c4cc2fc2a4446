"""
Unit tests for equation, code block and technical term detection
"""

import pytest

from synapse_reader.services.content_detector import (
    contains_code,
    contains_latex,
    contains_technical_term,
    detect_code_blocks,
    detect_content,
    detect_equations,
    detect_technical_terms,
    selection_content_type,
)


@pytest.mark.unit
class TestDetectEquations:
    """Test detect_equations"""

    def test_display_math(self):
        text = "Energy: $$ E = mc^2 $$ holds."
        equations = detect_equations(text)

        assert len(equations) == 1
        assert equations[0].latex == "E = mc^2"
        assert equations[0].display_mode is True
        assert text[equations[0].start:equations[0].end] == "$$ E = mc^2 $$"

    def test_inline_math(self):
        equations = detect_equations("where $x^2$ is the square")

        assert [(eq.latex, eq.display_mode) for eq in equations] == [("x^2", False)]

    def test_bare_command(self):
        equations = detect_equations(r"half is \frac{1}{2} exactly")

        assert [eq.latex for eq in equations] == [r"\frac{1}{2}"]

    def test_commands_inside_math_not_repeated(self):
        equations = detect_equations(r"$$\frac{a}{b}$$ and $\sqrt{x}$")

        assert [eq.latex for eq in equations] == [r"\frac{a}{b}", r"\sqrt{x}"]
        assert [eq.display_mode for eq in equations] == [True, False]

    def test_sorted_by_position(self):
        equations = detect_equations(r"\alpha{1} then $$y$$ then $z$")

        assert [eq.latex for eq in equations] == [r"\alpha{1}", "y", "z"]

    def test_plain_text(self):
        assert detect_equations("no math here") == []


@pytest.mark.unit
class TestDetectCodeBlocks:
    """Test detect_code_blocks"""

    def test_language_tag(self):
        blocks = detect_code_blocks("See:\n```python\ndef f():\n    return 1\n```\n")

        assert len(blocks) == 1
        assert blocks[0].language == "python"
        assert blocks[0].code == "def f():\n    return 1"

    def test_no_language(self):
        blocks = detect_code_blocks("```\nx = 1\n```")

        assert [(b.code, b.language) for b in blocks] == [("x = 1", None)]

    def test_unterminated_fence(self):
        assert detect_code_blocks("```python\nx = 1") == []


@pytest.mark.unit
class TestDetectTechnicalTerms:
    """Test detect_technical_terms"""

    def test_vocabulary(self):
        terms = detect_technical_terms("The gradient of the entropy is a vector.")

        assert [t.term for t in terms] == ["gradient", "entropy", "vector"]
        assert all(t.confidence == pytest.approx(0.9) for t in terms)

    def test_duplicates_reported_once(self):
        terms = detect_technical_terms("Entropy rises. entropy never falls.")

        assert [t.term for t in terms] == ["Entropy"]

    def test_multi_word_vocabulary(self):
        terms = detect_technical_terms("Use a hash table or dynamic programming.")

        assert [t.term for t in terms] == ["hash table", "dynamic programming"]

    def test_capitalized_phrase(self):
        terms = detect_technical_terms("We follow Krebs Cycle intermediates.")

        assert [(t.term, t.confidence) for t in terms] == [("Krebs Cycle", pytest.approx(0.7))]

    def test_common_phrases_skipped(self):
        text = "The Results came from New York and In Summary nothing else."

        assert detect_technical_terms(text) == []

    def test_word_boundaries(self):
        assert detect_technical_terms("cellular atomic") == []


@pytest.mark.unit
class TestSelectionContentType:
    """Test selection_content_type and the contains_* checks"""

    def test_equation(self):
        assert contains_latex("$a+b$") is True
        assert selection_content_type(r"\int{f}") == "equation"

    def test_code(self):
        assert contains_code("```js\nlet x\n```") is True
        assert selection_content_type("```js\nlet x\n```") == "code"

    def test_term(self):
        assert selection_content_type("eigenvalue") == "term"
        assert selection_content_type("Krebs Cycle") == "term"

    def test_long_selection_is_not_a_term(self):
        text = "entropy " + "x" * 100

        assert contains_technical_term(text) is False
        assert selection_content_type(text) == "general"

    def test_general(self):
        assert selection_content_type("once upon a time") == "general"

    def test_equation_wins_over_code(self):
        assert selection_content_type("```\n$x$\n```") == "equation"


@pytest.mark.unit
class TestDetectContent:
    """Test detect_content"""

    def test_groups_everything(self):
        text = "The derivative $f'(x)$ in code:\n```python\nd = f(x)\n```"
        result = detect_content(text)

        assert [eq.latex for eq in result.equations] == ["f'(x)"]
        assert [b.language for b in result.code_blocks] == ["python"]
        assert [t.term for t in result.technical_terms] == ["derivative"]
