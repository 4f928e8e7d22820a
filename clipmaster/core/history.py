"""In-memory clipboard history."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, List, Optional

from clipmaster.core.classify import classify_content
from clipmaster.core.constants import CONTENT_TYPES
from clipmaster.core.models import ClipboardItem, ContentClassification

Classifier = Callable[[str], ContentClassification]


class HistoryError(KeyError):
    """Raised when a history item id is unknown."""


class ClipboardHistory:
    """Newest-first list of classified clipboard items.

    Content is de-duplicated by exact text and the list is capped at ``limit``
    entries; the oldest items fall off the end.
    """

    def __init__(
        self,
        limit: int = 100,
        classifier: Classifier = classify_content,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        if limit <= 0:
            raise ValueError(f"history limit must be positive, got {limit}")
        self.limit = limit
        self._classifier = classifier
        self._now = now
        self._items: List[ClipboardItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, content: object) -> bool:
        return isinstance(content, str) and self._find_content(content) is not None

    def items(self) -> List[ClipboardItem]:
        return list(self._items)

    def by_type(self, content_type: str) -> List[ClipboardItem]:
        if content_type not in CONTENT_TYPES:
            raise ValueError(f"unknown content type {content_type!r}, expected one of {CONTENT_TYPES}")
        return [item for item in self._items if item.type == content_type]

    def get(self, item_id: str) -> Optional[ClipboardItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def _require(self, item_id: str) -> ClipboardItem:
        item = self.get(item_id)
        if item is None:
            raise HistoryError(item_id)
        return item

    def _find_content(self, content: str) -> Optional[ClipboardItem]:
        for item in self._items:
            if item.content == content:
                return item
        return None

    def add(self, content: str) -> Optional[ClipboardItem]:
        """Classify and store content; returns the stored (or existing) item."""
        if not content.strip():
            return None

        existing = self._find_content(content)
        if existing is not None:
            return existing

        classification = self._classifier(content)
        item = ClipboardItem(
            id=uuid.uuid4().hex,
            content=content,
            timestamp=self._now(),
            type=classification.type,
            language=classification.language,
            confidence=classification.confidence,
        )
        self._items = [item, *self._items[: self.limit - 1]]
        return item

    def toggle_favorite(self, item_id: str) -> ClipboardItem:
        item = self._require(item_id)
        item.is_favorite = not item.is_favorite
        return item

    def update_content(self, item_id: str, content: str) -> ClipboardItem:
        """Replace an item's content and re-run classification.

        Blank content, or content already held by another item, raises
        ValueError and leaves the item unchanged.
        """
        item = self._require(item_id)
        if not content.strip():
            raise ValueError("history content cannot be blank")
        existing = self._find_content(content)
        if existing is not None and existing is not item:
            raise ValueError(f"content already in history as item {existing.id}")
        classification = self._classifier(content)
        item.content = content
        item.type = classification.type
        item.language = classification.language
        item.confidence = classification.confidence
        return item

    def delete(self, item_id: str) -> bool:
        remaining = [item for item in self._items if item.id != item_id]
        removed = len(remaining) != len(self._items)
        self._items = remaining
        return removed

    def clear(self) -> int:
        count = len(self._items)
        self._items = []
        return count
