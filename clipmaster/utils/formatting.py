"""Formatting helpers used by console output."""

from __future__ import annotations

from typing import Optional

from rich.text import Text

from clipmaster.core.constants import TYPE_LABELS, TYPE_STYLES
from clipmaster.core.models import ClipboardItem


def preview(content: str, max_chars: int = 60) -> str:
    """Collapse whitespace and truncate content for one-line display."""
    flat = " ".join(content.split())
    if len(flat) <= max_chars:
        return flat
    return flat[: max(max_chars - 3, 0)] + "..."


def format_confidence(confidence: Optional[float]) -> str:
    if confidence is None:
        return "-"
    return f"{confidence:.2f}"


def format_language(language: Optional[str]) -> str:
    return language or "-"


def type_badge(content_type: str) -> Text:
    """Colored label for a content type."""
    label = TYPE_LABELS.get(content_type, content_type.title())
    return Text(label, style=TYPE_STYLES.get(content_type, ""))


def item_plain_row(item: ClipboardItem, max_chars: int = 60) -> str:
    """Tab-separated row for plain output."""
    return "\t".join(
        [
            item.timestamp.strftime("%H:%M:%S"),
            item.type,
            format_language(item.language),
            format_confidence(item.confidence),
            preview(item.content, max_chars),
        ]
    )
