"""Static configuration for eventdrop.

All user-editable settings (processors, logging) live in a single JSON file
for quick edits without touching Python.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict

from eventdrop.core.errors import ConfigError

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

# Default location of the config file, overridable from the CLI.
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")


@dataclass(frozen=True)
class Settings:
    """Resolved settings loaded from config.json."""

    # Ordered {name: {type: options}} mapping; JSON object order is kept.
    processors: Dict[str, Any] = field(default_factory=dict)
    logging: Dict[str, Any] = field(default_factory=dict)
    path: str = CONFIG_PATH


def _load_json_config(path: str) -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc


def _section(config: dict, name: str) -> dict:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be an object")
    return section


def load_settings(path: str = CONFIG_PATH) -> Settings:
    """Read the config file and return its processors and logging sections."""

    config = _load_json_config(path)
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return Settings(
        processors=_section(config, "processors"),
        logging=_section(config, "logging"),
        path=path,
    )
