"""Lightweight data models shared by the classifier, history and commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CodeClassification:
    """Result of scoring a text as source code."""

    is_code: bool
    language: Optional[str] = None
    confidence: float = 0.0


@dataclass(frozen=True)
class ContentClassification:
    """Content type of a clipboard capture with code metadata when relevant."""

    type: str
    language: Optional[str] = None
    confidence: Optional[float] = None


@dataclass
class ClipboardItem:
    """One captured clipboard entry."""

    id: str
    content: str
    timestamp: datetime
    type: str
    is_favorite: bool = False
    language: Optional[str] = None
    confidence: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
            "isFavorite": self.is_favorite,
            "type": self.type,
            "language": self.language,
            "confidence": self.confidence,
        }
