"""
Detection of interactive content in page text and selections

Finds LaTeX equations, fenced code blocks and STEM vocabulary so the reader
can offer equation parsing, code explanation or a term deep dive for a
selection. Pure regex heuristics, no model calls.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

DISPLAY_MATH = re.compile(r"\$\$([\s\S]+?)\$\$")
INLINE_MATH = re.compile(r"\$([^$\n]+)\$")
LATEX_COMMAND = re.compile(r"\\[a-zA-Z]+(?:\{[^}]*\})+")

CODE_BLOCK = re.compile(r"```(\w+)?\n([\s\S]+?)```")

TECHNICAL_TERM_PATTERNS = tuple(
    re.compile(rf"\b(?:{words})\b", re.IGNORECASE)
    for words in (
        # mathematics
        "theorem|lemma|corollary|proposition|definition|proof|axiom|postulate",
        "integral|derivative|differential|gradient|divergence|curl|laplacian",
        "matrix|vector|tensor|eigenvalue|eigenvector|determinant",
        "function|equation|inequality|expression|polynomial|series",
        # physics
        "momentum|velocity|acceleration|force|energy|entropy|enthalpy",
        "quantum|photon|electron|proton|neutron|particle|wave",
        "electromagnetic|gravitational|nuclear|thermodynamic",
        # chemistry
        "molecule|atom|ion|compound|reaction|catalyst|enzyme",
        "oxidation|reduction|equilibrium|concentration|molarity",
        # computer science
        "algorithm|complexity|recursion|iteration|heuristic",
        "array|linked list|tree|graph|hash table|heap|stack|queue",
        "sorting|searching|traversal|optimization|dynamic programming",
        # biology
        "DNA|RNA|protein|cell|membrane|nucleus|mitochondria",
        "gene|chromosome|allele|mutation|transcription|translation",
        # general science
        "hypothesis|experiment|observation|analysis|synthesis",
        "correlation|causation|variable|parameter|constant",
    )
)

CAPITALIZED_PHRASE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")

# Capitalized phrases that are sentence openers or place names
COMMON_LEADING_WORDS = frozenset({"The", "In", "On", "At", "For", "With", "About", "From", "To"})
COMMON_PHRASES = ("New York", "United States", "United Kingdom")

MAX_TERM_SELECTION = 100


@dataclass(frozen=True)
class DetectedEquation:
    latex: str
    display_mode: bool
    start: int
    end: int


@dataclass(frozen=True)
class DetectedCodeBlock:
    code: str
    language: Optional[str]
    start: int
    end: int


@dataclass(frozen=True)
class DetectedTerm:
    term: str
    start: int
    end: int
    confidence: float


@dataclass
class ContentDetection:
    equations: List[DetectedEquation] = field(default_factory=list)
    code_blocks: List[DetectedCodeBlock] = field(default_factory=list)
    technical_terms: List[DetectedTerm] = field(default_factory=list)


def _covered(position: int, equations: List[DetectedEquation]) -> bool:
    return any(eq.start <= position < eq.end for eq in equations)


def detect_equations(text: str) -> List[DetectedEquation]:
    """
    Find display math, inline math and bare LaTeX commands

    Inline math inside a display block and commands inside either are not
    reported twice. Results are ordered by position.

    Example:
        >>> [eq.latex for eq in detect_equations("where $x^2$ and \\\\frac{1}{2}")]
        ['x^2', '\\\\frac{1}{2}']
    """
    equations = [
        DetectedEquation(m.group(1).strip(), True, m.start(), m.end())
        for m in DISPLAY_MATH.finditer(text)
    ]

    # Blank out display blocks so their dollars never pair with inline ones
    masked = DISPLAY_MATH.sub(lambda m: " " * len(m.group(0)), text)
    for m in INLINE_MATH.finditer(masked):
        equations.append(DetectedEquation(m.group(1).strip(), False, m.start(), m.end()))

    for m in LATEX_COMMAND.finditer(text):
        if not _covered(m.start(), equations):
            equations.append(DetectedEquation(m.group(0), False, m.start(), m.end()))

    return sorted(equations, key=lambda eq: eq.start)


def detect_code_blocks(text: str) -> List[DetectedCodeBlock]:
    """Fenced ``` blocks with their optional language tag"""
    return [
        DetectedCodeBlock(m.group(2).strip(), m.group(1) or None, m.start(), m.end())
        for m in CODE_BLOCK.finditer(text)
    ]


def is_common_phrase(phrase: str) -> bool:
    return phrase.split()[0] in COMMON_LEADING_WORDS or phrase.startswith(COMMON_PHRASES)


def detect_technical_terms(text: str) -> List[DetectedTerm]:
    """
    Known STEM vocabulary (confidence 0.9) plus capitalized multi-word
    phrases (confidence 0.7), each term reported once case-insensitively
    """
    terms: List[DetectedTerm] = []
    seen = set()

    for pattern in TECHNICAL_TERM_PATTERNS:
        for m in pattern.finditer(text):
            normalized = m.group(0).lower()
            if normalized in seen:
                continue
            seen.add(normalized)
            terms.append(DetectedTerm(m.group(0), m.start(), m.end(), 0.9))

    for m in CAPITALIZED_PHRASE.finditer(text):
        normalized = m.group(0).lower()
        if normalized in seen or is_common_phrase(m.group(0)):
            continue
        seen.add(normalized)
        terms.append(DetectedTerm(m.group(0), m.start(), m.end(), 0.7))

    return sorted(terms, key=lambda term: term.start)


def detect_content(text: str) -> ContentDetection:
    return ContentDetection(
        equations=detect_equations(text),
        code_blocks=detect_code_blocks(text),
        technical_terms=detect_technical_terms(text),
    )


def contains_latex(text: str) -> bool:
    return any(p.search(text) for p in (DISPLAY_MATH, INLINE_MATH, LATEX_COMMAND))


def contains_code(text: str) -> bool:
    return CODE_BLOCK.search(text) is not None


def contains_technical_term(text: str) -> bool:
    """Short selections only; longer text is a passage, not a term"""
    if len(text) > MAX_TERM_SELECTION:
        return False
    if any(p.search(text) for p in TECHNICAL_TERM_PATTERNS):
        return True
    return CAPITALIZED_PHRASE.search(text) is not None


def selection_content_type(text: str) -> str:
    """
    Classify a selection as "equation", "code", "term" or "general"

    Checked in that order, so a selection holding both LaTeX and a code
    fence is an equation.
    """
    if contains_latex(text):
        return "equation"
    if contains_code(text):
        return "code"
    if contains_technical_term(text):
        return "term"
    return "general"
