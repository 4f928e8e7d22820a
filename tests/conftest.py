from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import pytest
from typer.testing import CliRunner


class FakeClipboard:
    """Clipboard stand-in that replays a fixed sequence of reads."""

    def __init__(self, reads: List[str] | None = None, writable: bool = True) -> None:
        self.reads = list(reads or [""])
        self.writable = writable
        self.written: List[str] = []
        self.read_count = 0

    def read_text(self) -> str:
        index = min(self.read_count, len(self.reads) - 1)
        self.read_count += 1
        return self.reads[index]

    def write_text(self, text: str) -> bool:
        if not self.writable:
            return False
        self.written.append(text)
        return True


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "missing-config.toml"
    monkeypatch.setenv("CLIPMASTER_CONFIG_FILE", str(path))
    return path


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def fake_clipboard_factory():
    def _make(reads: List[str] | None = None, writable: bool = True) -> FakeClipboard:
        return FakeClipboard(reads=reads, writable=writable)

    return _make


@pytest.fixture()
def js_snippet() -> str:
    return "const x = 1; function f() { return x + 1; }"


@pytest.fixture()
def python_snippet() -> str:
    return "def foo():\n    return 1"


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
