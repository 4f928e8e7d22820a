"""OS clipboard access and change notification."""

from __future__ import annotations

import time
from typing import Callable, List, Optional

import pyperclip

ChangeHandler = Callable[[str], None]


class ClipboardError(RuntimeError):
    """Raised when the clipboard cannot be read."""


class Clipboard:
    """Thin wrapper around pyperclip."""

    def read_text(self) -> str:
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Failed to read clipboard: {exc}") from exc
        return content or ""

    def write_text(self, text: str) -> bool:
        """Copy text to the clipboard; returns False when no mechanism is available."""
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException:
            return False
        return True


class ClipboardWatcher:
    """Poll the clipboard and notify subscribers when its text changes."""

    def __init__(self, clipboard: Optional[Clipboard] = None, interval: float = 0.5) -> None:
        if interval <= 0:
            raise ValueError(f"poll interval must be positive, got {interval}")
        self.clipboard = clipboard or Clipboard()
        self.interval = interval
        self._handlers: List[ChangeHandler] = []
        self._last_text: Optional[str] = None
        self._running = False

    def on_change(self, handler: ChangeHandler) -> Callable[[], None]:
        """Subscribe to clipboard changes and return an unsubscribe callable."""
        self._handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return _unsubscribe

    def poll(self, notify_initial: bool = False) -> Optional[str]:
        """Read the clipboard once; notify and return the text when it changed."""
        text = self.clipboard.read_text()
        primed = self._last_text is not None
        if primed and text == self._last_text:
            return None

        self._last_text = text
        if not primed and not notify_initial:
            return None

        for handler in list(self._handlers):
            handler(text)
        return text

    def stop(self) -> None:
        self._running = False

    def run(self, max_changes: Optional[int] = None, notify_initial: bool = False) -> int:
        """Poll until stopped or ``max_changes`` notifications fired; returns the count."""
        changes = 0
        self._running = True
        first = True
        while self._running:
            if self.poll(notify_initial=notify_initial and first) is not None:
                changes += 1
                if max_changes is not None and changes >= max_changes:
                    break
            first = False
            if self._running:
                time.sleep(self.interval)
        self._running = False
        return changes
