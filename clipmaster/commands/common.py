"""Shared command helpers."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

import typer

from clipmaster.core.config import ConfigError
from clipmaster.core.grammars import Probe, catalog_from_config
from clipmaster.core.models import CodeClassification, ContentClassification
from clipmaster.core.state import CLIState


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def resolve_grammars(state: CLIState, no_probe: bool = False) -> List[Tuple[str, Probe]]:
    """Resolve the grammar probe catalog, exiting on invalid configuration."""
    if no_probe:
        return []
    try:
        grammars = catalog_from_config(state.config)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)
    state.debug(f"Grammar probe order: {', '.join(language for language, _ in grammars) or '(disabled)'}")
    return grammars


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def classification_payload(
    content: ContentClassification,
    detection: Optional[CodeClassification] = None,
) -> Dict[str, Any]:
    """Merge the content verdict with the raw code score for output.

    ``detection`` is None for URLs, which skip code scoring.
    """
    return {
        "type": content.type,
        "language": content.language,
        "confidence": content.confidence,
        "isCode": detection.is_code if detection else False,
        "score": detection.confidence if detection else None,
        "detectedLanguage": detection.language if detection else None,
    }
