"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any transport-specific event types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

Value = Union[str, int, float, bool]


@dataclass(frozen=True)
class Event:
    """One telemetry data point: a tag mapping plus a value mapping."""

    name: str = ""
    timestamp: int = 0
    tags: Dict[str, str] = field(default_factory=dict)
    values: Dict[str, Value] = field(default_factory=dict)
    deletes: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Event":
        """Build an Event from its JSON document."""

        tags = raw.get("tags") or {}
        values = raw.get("values") or {}
        if not isinstance(tags, Mapping):
            raise ValueError(f"event tags must be an object, got {type(tags).__name__}")
        if not isinstance(values, Mapping):
            raise ValueError(f"event values must be an object, got {type(values).__name__}")
        for key, tag_value in tags.items():
            if not isinstance(tag_value, str):
                raise ValueError(f"tag '{key}' must be a string, got {type(tag_value).__name__}")
        return cls(
            name=str(raw.get("name", "")),
            timestamp=int(raw.get("timestamp") or 0),
            tags=dict(tags),
            values=dict(values),
            deletes=list(raw.get("deletes") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON document; conditions are evaluated against it."""

        document: Dict[str, Any] = {"name": self.name, "timestamp": self.timestamp}
        if self.tags:
            document["tags"] = dict(self.tags)
        if self.values:
            document["values"] = dict(self.values)
        if self.deletes:
            document["deletes"] = list(self.deletes)
        return document


@dataclass(frozen=True)
class DropMatch:
    """The criterion that decided an event must be dropped."""

    criterion: str
    subject: str
    pattern: str

    @property
    def reason(self) -> str:
        return f"{self.criterion} '{self.subject}' matched regex '{self.pattern}'"
