"""Static tables for clipboard content classification."""

from __future__ import annotations

import re

URL_PREFIXES = ("http://", "https://")

CONTENT_TYPES = ("url", "code", "text")

# Line start after \n, \r, U+2028 or U+2029, like a JavaScript multiline anchor.
LINE_START = r"(?:^|(?<=[\r\u2028\u2029]))"

# Evaluated in order; the first matching signature wins.
LANGUAGE_PATTERNS = (
    ("javascript", re.compile(LINE_START + r"(const|let|var|function|class|import|export|=>)", re.MULTILINE)),
    ("python", re.compile(LINE_START + r"(def|class|import|from|if __name__|async def)", re.MULTILINE)),
    ("html", re.compile(LINE_START + r"(?:<!DOCTYPE|<html|<[a-z]+>)", re.IGNORECASE | re.MULTILINE)),
    ("css", re.compile(LINE_START + r"(\.|#|@media|@import|body|html)\s*\{", re.MULTILINE)),
    (
        "sql",
        re.compile(LINE_START + r"(SELECT|INSERT|UPDATE|DELETE|CREATE|ALTER|DROP)\s+", re.IGNORECASE | re.MULTILINE),
    ),
    ("json", re.compile(r"^[\s\n]*[{\[]")),
    (
        "typescript",
        re.compile(
            LINE_START + r"(interface|type|enum|namespace|abstract|private|public|protected)",
            re.MULTILINE,
        ),
    ),
)

CODE_INDICATORS = (
    "{",
    "}",
    "(",
    ")",
    ";",
    "=>",
    "===",
    "!==",
    "+=",
    "-=",
    "*=",
    "/=",
    "++",
    "--",
    "&&",
    "||",
)

BRACKET_PAIRS = (("{", "}"), ("(", ")"), ("[", "]"))

INDENTED_LINE_PATTERN = re.compile(r"^(\s{2,}|\t+)")

MINIMUM_CODE_CONFIDENCE = 0.6

PATTERN_WEIGHT = 0.4
INDICATOR_WEIGHT = 0.1
INDICATOR_CAP = 0.3
INDENTATION_WEIGHT = 0.2
BALANCE_WEIGHT = 0.1
GRAMMAR_WEIGHT = 0.2
GRAMMAR_PROBE_MIN_CONFIDENCE = 0.3

# (language id, Pygments lexer alias), in probe order.
GRAMMAR_CATALOG = (
    ("markup", "html"),
    ("css", "css"),
    ("clike", "c"),
    ("javascript", "javascript"),
)

TYPE_LABELS = {
    "url": "URL",
    "code": "Code",
    "text": "Text",
}

TYPE_STYLES = {
    "url": "green",
    "code": "magenta",
    "text": "blue",
}
