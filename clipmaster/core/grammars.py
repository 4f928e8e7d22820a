"""Grammar probes used to label code that matched no language signature."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

from pygments.lexers import get_lexer_by_name
from pygments.token import Error, Name, Operator, Other, Punctuation, Text, _TokenType

from clipmaster.core.config import ConfigError
from clipmaster.core.constants import GRAMMAR_CATALOG

Probe = Callable[[str], bool]
GrammarCatalog = Sequence[Tuple[str, Probe]]


def _is_plain(ttype: _TokenType) -> bool:
    # Bare names and operators carry no grammar knowledge; subtypes such as
    # Name.Function or Operator.Word do.
    if ttype in Text or ttype in Error or ttype in Other or ttype in Punctuation:
        return True
    return ttype is Name or ttype is Operator


def lexer_probe(alias: str) -> Probe:
    """Build a probe reporting whether the named lexer marks up any token."""

    def _probe(text: str) -> bool:
        lexer = get_lexer_by_name(alias, stripnl=False, ensurenl=False)
        return any(not _is_plain(ttype) for ttype, _ in lexer.get_tokens(text))

    _probe.__name__ = f"probe_{alias}"
    return _probe


def build_catalog(entries: Iterable[Tuple[str, str]]) -> List[Tuple[str, Probe]]:
    """Build an ordered probe catalog from (language id, lexer alias) pairs."""
    return [(language, lexer_probe(alias)) for language, alias in entries]


DEFAULT_GRAMMARS: Tuple[Tuple[str, Probe], ...] = tuple(build_catalog(GRAMMAR_CATALOG))


def _catalog_entry(raw: Any) -> Tuple[str, str]:
    if isinstance(raw, str) and raw.strip():
        alias = raw.strip().lower()
        return alias, alias
    if isinstance(raw, dict):
        lexer = str(raw.get("lexer") or "").strip().lower()
        language = str(raw.get("id") or lexer).strip().lower()
        if lexer:
            return language, lexer
    raise ConfigError(f"Invalid grammar entry in classification.grammars: {raw!r}")


def catalog_entries_from_config(config: Dict[str, Any]) -> List[Tuple[str, str]]:
    """Return the configured (language id, lexer alias) pairs in probe order."""
    section = config.get("classification", {})
    if not section.get("grammar_probe", True):
        return []

    configured = section.get("grammars") or []
    if not isinstance(configured, list):
        raise ConfigError("classification.grammars must be a list")
    if not configured:
        return list(GRAMMAR_CATALOG)
    return [_catalog_entry(item) for item in configured]


def catalog_from_config(config: Dict[str, Any]) -> List[Tuple[str, Probe]]:
    """Build the probe catalog described by config, defaulting to the built-in order."""
    entries = catalog_entries_from_config(config)
    if entries == list(GRAMMAR_CATALOG):
        return list(DEFAULT_GRAMMARS)
    return build_catalog(entries)
