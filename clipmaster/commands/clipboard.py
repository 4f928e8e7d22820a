"""Clipboard watch/copy commands."""

from __future__ import annotations

from collections import Counter
from contextlib import nullcontext
from functools import partial
from typing import Any, Dict, Optional

import typer
from rich.table import Table

from clipmaster.commands.common import (
    get_state,
    print_json_payload,
    resolve_grammars,
)
from clipmaster.core.classify import classify_content
from clipmaster.core.clipboard import Clipboard, ClipboardError, ClipboardWatcher
from clipmaster.core.config import (
    ConfigError,
    resolve_history_limit,
    resolve_poll_interval,
    resolve_preview_chars,
)
from clipmaster.core.history import ClipboardHistory
from clipmaster.core.models import ClipboardItem
from clipmaster.core.state import CLIState
from clipmaster.utils.formatting import (
    format_confidence,
    format_language,
    item_plain_row,
    preview,
    type_badge,
)


def _summary(history: ClipboardHistory) -> Dict[str, Any]:
    by_type = Counter(item.type for item in history.items())
    by_language = Counter(item.language for item in history.items() if item.language)
    return {
        "total": len(history),
        "by_type": dict(by_type),
        "by_language": dict(by_language),
    }


def _print_item(state: CLIState, item: ClipboardItem, preview_chars: int) -> None:
    if state.json_output:
        return
    if state.plain_output:
        typer.echo(item_plain_row(item, preview_chars))
        return
    line = type_badge(item.type)
    line.append(f"  {format_language(item.language)}  {format_confidence(item.confidence)}  ")
    line.append(preview(item.content, preview_chars))
    state.console.print(line)


def watch_command(
    ctx: typer.Context,
    interval: Optional[float] = typer.Option(None, help="Seconds between clipboard polls"),
    limit: Optional[int] = typer.Option(None, help="Maximum history entries kept"),
    max_changes: Optional[int] = typer.Option(None, help="Stop after N clipboard changes"),
    no_probe: bool = typer.Option(False, "--no-probe", help="Skip the grammar probe fallback"),
    include_current: bool = typer.Option(
        False,
        "--include-current",
        help="Capture the clipboard text present at startup",
    ),
) -> None:
    """Watch the clipboard and classify every new capture."""
    state = get_state(ctx)
    try:
        poll_interval = resolve_poll_interval(state.config, explicit=interval)
        history_limit = resolve_history_limit(state.config, explicit=limit)
        preview_chars = resolve_preview_chars(state.config)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    grammars = resolve_grammars(state, no_probe=no_probe)
    history = ClipboardHistory(limit=history_limit, classifier=partial(classify_content, grammars=grammars))
    watcher = ClipboardWatcher(Clipboard(), interval=poll_interval)

    def _capture(text: str) -> None:
        if text in history:
            state.debug("Clipboard text already in history")
            return
        item = history.add(text)
        if item is None:
            state.debug("Ignored blank clipboard text")
            return
        _print_item(state, item, preview_chars)

    unsubscribe = watcher.on_change(_capture)
    state.debug(f"Polling clipboard every {poll_interval}s (history limit {history_limit})")

    status_ctx = (
        state.console.status("Watching clipboard... (Ctrl-C to stop)")
        if not state.plain_output and not state.json_output
        else nullcontext()
    )
    try:
        with status_ctx:
            watcher.run(max_changes=max_changes, notify_initial=include_current)
    except KeyboardInterrupt:
        watcher.stop()
    except ClipboardError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1)
    finally:
        unsubscribe()

    summary = _summary(history)
    if state.json_output:
        print_json_payload(
            state,
            {"items": [item.to_dict() for item in history.items()], "summary": summary},
        )
        return

    if state.plain_output:
        typer.echo(f"total\t{summary['total']}")
        return

    table = Table(title=f"Captured {summary['total']} item(s)")
    table.add_column("Type")
    table.add_column("Count")
    for content_type, count in sorted(summary["by_type"].items()):
        table.add_row(type_badge(content_type), str(count))
    state.console.print(table)


def copy_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Text to place on the clipboard"),
    no_probe: bool = typer.Option(False, "--no-probe", help="Skip the grammar probe fallback"),
) -> None:
    """Copy text to the clipboard and report how it classifies."""
    state = get_state(ctx)
    grammars = resolve_grammars(state, no_probe=no_probe)

    if not Clipboard().write_text(text):
        typer.echo("Failed to write clipboard: no copy mechanism available")
        raise typer.Exit(code=1)

    verdict = classify_content(text, grammars=grammars)
    payload = {
        "status": "copied",
        "type": verdict.type,
        "language": verdict.language,
        "confidence": verdict.confidence,
    }

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo("status\tcopied")
        typer.echo(f"type\t{verdict.type}")
        typer.echo(f"language\t{format_language(verdict.language)}")
        return

    line = type_badge(verdict.type)
    line.append(f"  {format_language(verdict.language)}  {format_confidence(verdict.confidence)}")
    state.console.print("Copied to clipboard")
    state.console.print(line)
