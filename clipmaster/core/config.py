"""Configuration loading."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]


class ConfigError(RuntimeError):
    """Raised when config file parsing or validation fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("CLIPMASTER_CONFIG_FILE", "~/.config/clipmaster/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "classification": {
            "grammar_probe": True,
            "grammars": [],
        },
        "clipboard": {
            "poll_interval": 0.5,
        },
        "history": {
            "limit": 100,
        },
        "output": {
            "preview_chars": 60,
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))

    return cfg


def _positive_number(config: Dict[str, Any], section: str, key: str) -> float:
    raw = config.get(section, {}).get(key, DEFAULT_CONFIG[section][key])
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{section}.{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{section}.{key} must be positive, got {raw!r}")
    return value


def resolve_poll_interval(config: Dict[str, Any], explicit: Optional[float] = None) -> float:
    """Resolve clipboard poll interval in seconds with CLI override first."""
    if explicit is not None:
        return _positive_number({"clipboard": {"poll_interval": explicit}}, "clipboard", "poll_interval")
    return _positive_number(config, "clipboard", "poll_interval")


def resolve_history_limit(config: Dict[str, Any], explicit: Optional[int] = None) -> int:
    """Resolve the history size cap with CLI override first."""
    if explicit is not None:
        return int(_positive_number({"history": {"limit": explicit}}, "history", "limit"))
    return int(_positive_number(config, "history", "limit"))


def resolve_preview_chars(config: Dict[str, Any]) -> int:
    return int(_positive_number(config, "output", "preview_chars"))
