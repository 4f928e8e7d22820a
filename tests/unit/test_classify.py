from __future__ import annotations

from typing import List

import pytest

from clipmaster.core.classify import (
    brackets_balanced,
    classify,
    classify_content,
    count_indicators,
    has_indentation,
    meets_code_threshold,
    probe_grammars,
)
from clipmaster.core.constants import CODE_INDICATORS, LANGUAGE_PATTERNS
from clipmaster.core.grammars import DEFAULT_GRAMMARS, lexer_probe
from clipmaster.core.models import CodeClassification, ContentClassification


def _always(text: str) -> bool:
    return True


def _never(text: str) -> bool:
    return False


def _explode(text: str) -> bool:
    raise RuntimeError("grammar failed")


@pytest.mark.parametrize("text", ["", "   ", "\n\t  \n"])
def test_blank_text_scores_zero(text: str) -> None:
    assert classify(text) == CodeClassification(is_code=False, language=None, confidence=0)


def test_classify_is_deterministic(js_snippet: str) -> None:
    assert classify(js_snippet) == classify(js_snippet)
    assert classify_content(js_snippet) == classify_content(js_snippet)


def test_score_of_exactly_threshold_is_code() -> None:
    # python signature 0.4 + one ";" 0.1 + balanced brackets 0.1
    result = classify("from os import path;")
    assert result.confidence == pytest.approx(0.6)
    assert result.is_code is True
    assert result.language == "python"


def test_score_below_threshold_keeps_advisory_language() -> None:
    result = classify("from os import path")
    assert result.confidence == pytest.approx(0.5)
    assert result.is_code is False
    assert result.language == "python"


def test_threshold_boundary() -> None:
    assert meets_code_threshold(0.6) is True
    assert meets_code_threshold(0.59) is False
    assert meets_code_threshold(0.1 + 0.2 + 0.3) is True


def test_language_pattern_order_is_fixed() -> None:
    assert [language for language, _ in LANGUAGE_PATTERNS] == [
        "javascript",
        "python",
        "html",
        "css",
        "sql",
        "json",
        "typescript",
    ]


def test_json_prefix_wins_over_typescript_keywords() -> None:
    result = classify('{ "type": "interface" }')
    assert result.language == "json"
    assert result.confidence == pytest.approx(0.7)


def test_typescript_detected_when_nothing_earlier_matches() -> None:
    result = classify("interface Point {\n  x: number;\n}")
    assert result.language == "typescript"
    assert result.is_code is True


def test_class_keyword_resolves_to_javascript_first() -> None:
    assert classify("class Foo {}").language == "javascript"


def test_import_keyword_resolves_to_javascript_first() -> None:
    assert classify("import os").language == "javascript"


def test_language_signature_matches_on_any_line() -> None:
    text = "// helpers\nexport default function main() {}"
    assert classify(text).language == "javascript"


@pytest.mark.parametrize("newline", ["\r", "\r\n", "\u2028", "\u2029"])
def test_language_signature_matches_after_any_line_break(newline: str) -> None:
    text = newline.join(["// c", "const x = 1;", "let y = 2;"])
    result = classify(text)
    assert result.language == "javascript"
    assert result.is_code is True


def test_carriage_return_line_start_keeps_pattern_order() -> None:
    assert classify("-- query\rSELECT id FROM t").language == "sql"
    assert classify("x\rinterface Point {}").language == "typescript"


def test_json_signature_only_matches_at_text_start() -> None:
    result = classify("payload:\n{ }", grammars=())
    assert result.language is None


@pytest.mark.parametrize(
    "text,language",
    [
        ("<div>hello</div>", "html"),
        ("<!DOCTYPE html>\n<html>\n  <body></body>\n</html>", "html"),
        ("body {\n  margin: 0;\n}", "css"),
        ("select * from users where id = 1", "sql"),
        ("SELECT name\n  FROM users\n  WHERE id IN (1, 2);", "sql"),
        ("[1, 2, 3]", "json"),
        ("async def main():\n    await run()", "python"),
    ],
)
def test_language_signatures(text: str, language: str) -> None:
    assert classify(text).language == language


def test_indicator_contribution_is_capped() -> None:
    text = " ".join(token for token in CODE_INDICATORS for _ in range(10))
    assert count_indicators(text) == 160

    result = classify("x " + text, grammars=())
    # capped indicator score 0.3 + balanced brackets 0.1
    assert result.confidence == pytest.approx(0.4)
    assert result.language is None


def test_indicators_counted_per_token() -> None:
    # "===" counts once; "=>" is a separate token
    assert count_indicators("a === b") == 1
    assert count_indicators("f(x) => x") == 3
    assert count_indicators("plain words only") == 0


def test_unbalanced_brackets_get_no_balance_bonus() -> None:
    unbalanced = classify("function f() { return 1;")
    balanced = classify("function f() { return 1; }")
    assert brackets_balanced("function f() { return 1;") is False
    assert unbalanced.confidence == pytest.approx(0.7)
    assert balanced.confidence == pytest.approx(0.8)


def test_brackets_balanced_counts_each_pair() -> None:
    assert brackets_balanced("no brackets") is True
    assert brackets_balanced("[(])") is True
    assert brackets_balanced("[[]") is False
    assert brackets_balanced("(()") is False


def test_indentation_requires_multiple_lines() -> None:
    assert has_indentation("    single line") is False
    assert has_indentation("first\n  second") is True
    assert has_indentation("first\n\tsecond") is True
    assert has_indentation("first\n second") is False


def test_url_short_circuits_code_scoring() -> None:
    assert classify_content("https://example.com/path") == ContentClassification(type="url")
    assert classify_content("http://x.test/?q=(1);{a}").type == "url"


def test_url_prefix_must_start_the_text() -> None:
    assert classify_content("see https://example.com").type == "text"


def test_javascript_scenario(js_snippet: str) -> None:
    result = classify(js_snippet)
    assert result.is_code is True
    assert result.language == "javascript"
    assert result.confidence == pytest.approx(0.8)

    content = classify_content(js_snippet)
    assert content == ContentClassification(type="code", language="javascript", confidence=result.confidence)


def test_plain_sentence_scenario() -> None:
    text = "just a plain sentence with no symbols"
    result = classify(text)
    assert result.is_code is False
    assert result.language is None
    # bracket-free text still counts as balanced
    assert result.confidence == pytest.approx(0.1)
    assert classify_content(text) == ContentClassification(type="text")


def test_python_scenario(python_snippet: str) -> None:
    result = classify(python_snippet)
    assert result.is_code is True
    assert result.language == "python"
    assert result.confidence >= 0.6


def test_confidence_is_not_clamped() -> None:
    result = classify("function f() {\n  return a && b;\n}")
    assert result.confidence == pytest.approx(1.0)
    assert result.language == "javascript"


def test_grammar_probe_labels_unmatched_code() -> None:
    text = "x = foo(a, b);\ny = bar(c);"
    result = classify(text, grammars=[("broken", _explode), ("nope", _never), ("found", _always)])
    assert result.language == "found"
    assert result.confidence == pytest.approx(0.6)
    assert result.is_code is True


def test_grammar_probe_first_match_wins() -> None:
    text = "x = foo(a, b);\ny = bar(c);"
    assert classify(text, grammars=[("first", _always), ("second", _always)]).language == "first"


def test_grammar_probe_no_match_leaves_language_empty() -> None:
    result = classify("x = foo(a, b);\ny = bar(c);", grammars=[("nope", _never)])
    assert result.language is None
    assert result.confidence == pytest.approx(0.4)


def test_grammar_probe_skipped_when_signature_matched() -> None:
    calls: List[str] = []

    def _record(text: str) -> bool:
        calls.append(text)
        return True

    result = classify("from os import path;", grammars=[("recorded", _record)])
    assert result.language == "python"
    assert calls == []


def test_grammar_probe_skipped_at_low_confidence() -> None:
    calls: List[str] = []

    def _record(text: str) -> bool:
        calls.append(text)
        return True

    # two indicators 0.2 + balance 0.1 does not exceed 0.3
    result = classify("a (b) c", grammars=[("recorded", _record)])
    assert calls == []
    assert result.language is None
    assert result.confidence == pytest.approx(0.3)


def test_grammar_probe_skips_unknown_lexer() -> None:
    grammars = [("missing", lexer_probe("no-such-lexer-anywhere")), ("found", _always)]
    assert probe_grammars("x = 1;", grammars) == "found"


def test_default_grammar_catalog_labels_code() -> None:
    result = classify('x = foo(a, "b");\ny = 42;')
    assert result.language in {language for language, _ in DEFAULT_GRAMMARS}
    assert result.confidence == pytest.approx(0.6)


def test_huge_input_is_handled() -> None:
    result = classify("a" * 200_000)
    assert result.is_code is False
    assert result.language is None
