"""Classification commands."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from clipmaster.commands.common import (
    classification_payload,
    get_state,
    print_json_payload,
    resolve_grammars,
)
from clipmaster.core.classify import classify, content_from_code, is_url
from clipmaster.core.clipboard import Clipboard, ClipboardError
from clipmaster.core.config import ConfigError, resolve_preview_chars
from clipmaster.core.grammars import catalog_entries_from_config
from clipmaster.core.models import ContentClassification
from clipmaster.utils.formatting import format_confidence, format_language, preview, type_badge


def _read_source(text: Optional[str], stdin: bool, clipboard: bool) -> str:
    chosen = sum([text is not None, stdin, clipboard])
    if chosen != 1:
        raise typer.BadParameter("provide exactly one of TEXT, --stdin or --clipboard")
    if stdin:
        return typer.get_text_stream("stdin").read()
    if clipboard:
        try:
            return Clipboard().read_text()
        except ClipboardError as exc:
            typer.echo(str(exc))
            raise typer.Exit(code=1)
    return text or ""


def classify_command(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Text to classify"),
    stdin: bool = typer.Option(False, "--stdin", help="Read text from standard input"),
    clipboard: bool = typer.Option(False, "--clipboard", help="Classify current clipboard text"),
    no_probe: bool = typer.Option(False, "--no-probe", help="Skip the grammar probe fallback"),
) -> None:
    """Classify text as url, code or plain text."""
    state = get_state(ctx)
    content = _read_source(text, stdin, clipboard)
    grammars = resolve_grammars(state, no_probe=no_probe)

    if is_url(content):
        verdict, detection = ContentClassification(type="url"), None
    else:
        detection = classify(content, grammars=grammars)
        verdict = content_from_code(detection)
    state.debug(f"Classified {len(content)} characters as {verdict.type}")

    payload = classification_payload(verdict, detection)

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for key in ("type", "language", "confidence", "isCode", "score", "detectedLanguage"):
            value = payload[key]
            typer.echo(f"{key}\t{'-' if value is None else value}")
        return

    table = Table(title=preview(content, resolve_preview_chars(state.config)) or "(empty)")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("type", type_badge(verdict.type))
    table.add_row("language", format_language(verdict.language))
    table.add_row("confidence", format_confidence(verdict.confidence))
    if detection is not None:
        table.add_row("code score", format_confidence(detection.confidence))
        table.add_row("detected language", format_language(detection.language))
    state.console.print(table)


def grammars_command(ctx: typer.Context) -> None:
    """List grammar probes in the order they are tried."""
    state = get_state(ctx)
    try:
        entries = catalog_entries_from_config(state.config)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    rows = [{"order": index, "id": language, "lexer": alias} for index, (language, alias) in enumerate(entries, 1)]

    if state.json_output:
        print_json_payload(state, {"grammars": rows})
        return

    if state.plain_output:
        for row in rows:
            typer.echo(f"{row['order']}\t{row['id']}\t{row['lexer']}")
        return

    if not rows:
        state.console.print("Grammar probe disabled")
        return

    table = Table(title="Grammar probe order")
    table.add_column("#")
    table.add_column("Language")
    table.add_column("Lexer")
    for row in rows:
        table.add_row(str(row["order"]), row["id"], row["lexer"])
    state.console.print(table)
