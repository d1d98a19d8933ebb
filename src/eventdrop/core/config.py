"""Core configuration dataclasses.

We keep file loading outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from eventdrop.core.errors import ConfigError

_PATTERN_FIELDS = {
    "tag-names": "tag_names",
    "value-names": "value_names",
    "tags": "tags",
    "values": "values",
}


@dataclass(frozen=True)
class DropConfig:
    """Declarative settings for one event-drop processor."""

    condition: str = ""
    tag_names: Tuple[str, ...] = ()
    value_names: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    values: Tuple[str, ...] = ()
    debug: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Return the dashed document, omitting empty fields."""

        document: Dict[str, Any] = {}
        if self.condition:
            document["condition"] = self.condition
        for key, attr in _PATTERN_FIELDS.items():
            patterns = getattr(self, attr)
            if patterns:
                document[key] = list(patterns)
        if self.debug:
            document["debug"] = True
        return document


def _pattern_list(raw: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = raw.get(key)
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"'{key}' must be a list of regular expressions")
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"'{key}' entries must be strings, got {item!r}")
    return tuple(value)


def parse_drop_config(raw: Mapping[str, Any]) -> DropConfig:
    """Decode a raw processor mapping; unknown keys are ignored."""

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"processor options must be an object, got {type(raw).__name__}")

    condition = raw.get("condition")
    if condition is None:
        condition = ""
    if not isinstance(condition, str):
        raise ConfigError("'condition' must be a string")
    debug = raw.get("debug", False)
    if not isinstance(debug, bool):
        raise ConfigError("'debug' must be a boolean")

    patterns = {attr: _pattern_list(raw, key) for key, attr in _PATTERN_FIELDS.items()}
    return DropConfig(condition=condition.strip(), debug=debug, **patterns)
