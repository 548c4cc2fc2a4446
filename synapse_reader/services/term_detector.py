"""
Fast heuristic detection of technical terms in a selection

Decides whether a short selection looks like a STEM term worth a
"deep dive" explanation, without calling a model.
"""

import re
from dataclasses import dataclass

TECHNICAL_PREFIXES = (
    "anti", "auto", "bio", "cyber", "eco", "electro", "geo", "hydro",
    "macro", "micro", "nano", "neuro", "photo", "poly", "pseudo",
    "quasi", "semi", "thermo", "ultra",
)

TECHNICAL_SUFFIXES = (
    "ation", "ism", "ity", "ment", "ness", "ology", "osis", "tion",
    "ance", "ence", "oid", "ase", "ide", "ine", "yte",
)

TECHNICAL_PATTERNS = (
    # quantities with SI units
    re.compile(
        r"\b\d+(?:\.\d+)?(?:e[+-]?\d+)?\s*(?:Hz|kHz|MHz|GHz|nm|mm|cm|m|km|mg|g|kg|ml|L|mol|K|Pa|V|A|W|J|N)\b",
        re.IGNORECASE,
    ),
    # chemical formulas
    re.compile(r"\b[A-Z][a-z]?(?:\d+)?(?:[A-Z][a-z]?(?:\d+)?)+\b"),
    # greek letters
    re.compile(r"[αβγδεζηθικλμνξοπρστυφχψω]", re.IGNORECASE),
    # acronyms
    re.compile(r"\b[A-Z]{3,}\b"),
    # CamelCase
    re.compile(r"\b[A-Z][a-z]+(?:[A-Z][a-z]+)+\b"),
)

COMMON_WORDS = frozenset({
    "the", "a", "an", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "can", "this", "that", "these",
    "those", "what", "which", "who", "whom", "where", "when", "why", "how",
    "all", "each", "every", "both", "few", "more", "most", "other", "some",
    "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
    "very", "just", "also", "now", "then", "here", "there", "however",
    "therefore", "thus", "although", "because", "since", "while", "if",
})

# Sentence punctuation anywhere but at the very end
SENTENCE_BREAK = re.compile(r"[.!?](?!\s*$)")
CAPITALIZED_WORD = re.compile(r"[A-Z][a-z]+")

MAX_TERM_LENGTH = 100
MAX_TERM_WORDS = 5


@dataclass(frozen=True)
class TermDetection:
    is_technical: bool
    confidence: float
    reason: str


def detect_technical_term(term: str) -> TermDetection:
    """
    Classify a selection as technical or not

    Checks run from most to least reliable: known patterns (units, formulas,
    greek letters, acronyms, CamelCase), STEM prefixes and suffixes,
    capitalized phrases, then a list of common English words.

    Example:
        >>> detect_technical_term("NaCl").reason
        'pattern_match'
    """
    normalized = term.strip().lower()

    if len(normalized) < 2:
        return TermDetection(False, 1.0, "too_short")
    if len(normalized) > MAX_TERM_LENGTH:
        return TermDetection(False, 0.9, "too_long")

    for pattern in TECHNICAL_PATTERNS:
        if pattern.search(term):
            return TermDetection(True, 0.9, "pattern_match")

    for prefix in TECHNICAL_PREFIXES:
        if normalized.startswith(prefix) and len(normalized) > len(prefix) + 3:
            return TermDetection(True, 0.7, "prefix_match")

    for suffix in TECHNICAL_SUFFIXES:
        if normalized.endswith(suffix) and len(normalized) > len(suffix) + 3:
            return TermDetection(True, 0.7, "suffix_match")

    words = term.strip().split()
    if 2 <= len(words) <= MAX_TERM_WORDS and all("A" <= w[0] <= "Z" for w in words):
        return TermDetection(True, 0.6, "capitalized_phrase")

    if len(words) == 1 and CAPITALIZED_WORD.fullmatch(term) and len(term) > 4:
        return TermDetection(True, 0.5, "capitalized_word")

    if normalized in COMMON_WORDS:
        return TermDetection(False, 1.0, "common_word")

    return TermDetection(False, 0.4, "uncertain")


def should_show_deep_dive(selection: str) -> bool:
    """True for short, sentence-free selections that look technical or unknown"""
    trimmed = selection.strip()

    if len(trimmed) < 3 or len(trimmed) > MAX_TERM_LENGTH:
        return False
    if SENTENCE_BREAK.search(trimmed):
        return False
    if len(trimmed.split()) > MAX_TERM_WORDS:
        return False

    result = detect_technical_term(trimmed)
    return result.is_technical or result.confidence < 0.6
