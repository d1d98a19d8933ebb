from __future__ import annotations

import json
from pathlib import Path

import pytest

from eventdrop.core.errors import ConfigError
from eventdrop.settings import load_settings


def test_load_settings_keeps_processor_order(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "processors": {
                    "zeta": {"event-drop": {"tags": ["a"]}},
                    "alpha": {"event-drop": {"tags": ["b"]}},
                },
                "logging": {"enabled": False},
            }
        ),
        encoding="utf-8",
    )
    settings = load_settings(str(path))
    assert list(settings.processors) == ["zeta", "alpha"]
    assert settings.logging == {"enabled": False}
    assert settings.path == str(path)


def test_load_settings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "missing.json"))


def test_load_settings_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(str(path))


def test_load_settings_rejects_non_object_section(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"processors": ["nope"]}), encoding="utf-8")
    with pytest.raises(ConfigError, match="'processors' must be an object"):
        load_settings(str(path))
