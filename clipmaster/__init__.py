"""Clipboard content classifier and history manager."""

__version__ = "0.1.0"
