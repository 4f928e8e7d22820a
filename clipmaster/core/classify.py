"""Clipboard content classification utilities."""

from __future__ import annotations

from typing import Optional, Tuple

from clipmaster.core.constants import (
    BALANCE_WEIGHT,
    BRACKET_PAIRS,
    CODE_INDICATORS,
    GRAMMAR_PROBE_MIN_CONFIDENCE,
    GRAMMAR_WEIGHT,
    INDENTATION_WEIGHT,
    INDENTED_LINE_PATTERN,
    INDICATOR_CAP,
    INDICATOR_WEIGHT,
    LANGUAGE_PATTERNS,
    MINIMUM_CODE_CONFIDENCE,
    PATTERN_WEIGHT,
    URL_PREFIXES,
)
from clipmaster.core.grammars import DEFAULT_GRAMMARS, GrammarCatalog
from clipmaster.core.models import CodeClassification, ContentClassification


def _match_language(text: str) -> Optional[str]:
    for language, pattern in LANGUAGE_PATTERNS:
        if pattern.search(text):
            return language
    return None


def count_indicators(text: str) -> int:
    """Total occurrences of every code indicator token, counted per token."""
    return sum(text.count(indicator) for indicator in CODE_INDICATORS)


def _indicator_score(text: str) -> float:
    return min(count_indicators(text) * INDICATOR_WEIGHT, INDICATOR_CAP)


def has_indentation(text: str) -> bool:
    """True for multi-line text where some line starts indented."""
    lines = text.split("\n")
    return len(lines) > 1 and any(INDENTED_LINE_PATTERN.match(line) for line in lines)


def brackets_balanced(text: str) -> bool:
    """Coarse symmetry check: each bracket pair occurs equally often."""
    return all(text.count(opening) == text.count(closing) for opening, closing in BRACKET_PAIRS)


def probe_grammars(text: str, grammars: GrammarCatalog) -> Optional[str]:
    """Return the first grammar in catalog order that marks up the text."""
    for language, probe in grammars:
        try:
            if probe(text):
                return language
        except Exception:
            continue
    return None


def meets_code_threshold(confidence: float, threshold: float = MINIMUM_CODE_CONFIDENCE) -> bool:
    return round(confidence, 6) >= threshold


def _score(text: str, grammars: GrammarCatalog) -> Tuple[float, Optional[str]]:
    confidence = 0.0

    language = _match_language(text)
    if language:
        confidence += PATTERN_WEIGHT

    confidence += _indicator_score(text)

    if has_indentation(text):
        confidence += INDENTATION_WEIGHT

    if brackets_balanced(text):
        confidence += BALANCE_WEIGHT

    if language is None and round(confidence, 6) > GRAMMAR_PROBE_MIN_CONFIDENCE:
        language = probe_grammars(text, grammars)
        if language:
            confidence += GRAMMAR_WEIGHT

    return round(confidence, 6), language


def classify(text: str, grammars: GrammarCatalog = DEFAULT_GRAMMARS) -> CodeClassification:
    """Score text as source code and guess its language.

    The score is accumulated from a language signature match, indicator
    density, indentation, bracket balance and, when no signature matched, a
    grammar probe. It is intentionally not clamped, so strong inputs score
    above 1.0. ``language`` may be set on a below-threshold result; gate on
    ``is_code`` before using it.
    """
    if not text.strip():
        return CodeClassification(is_code=False, language=None, confidence=0)

    confidence, language = _score(text, grammars)
    return CodeClassification(
        is_code=meets_code_threshold(confidence),
        language=language,
        confidence=confidence,
    )


def is_url(text: str) -> bool:
    return text.startswith(URL_PREFIXES)


def content_from_code(detection: CodeClassification) -> ContentClassification:
    """Map a code score onto a content verdict for non-URL text."""
    if detection.is_code:
        return ContentClassification(
            type="code",
            language=detection.language,
            confidence=detection.confidence,
        )
    return ContentClassification(type="text")


def classify_content(
    text: str,
    grammars: GrammarCatalog = DEFAULT_GRAMMARS,
) -> ContentClassification:
    """Tag a clipboard capture as url, code or text.

    URLs short-circuit before any code scoring, so a link full of
    punctuation is never reported as code.
    """
    if is_url(text):
        return ContentClassification(type="url")
    return content_from_code(classify(text, grammars=grammars))
