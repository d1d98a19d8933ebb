"""JSON Lines event adapter.

This keeps file and serialization details out of the core pipeline.
"""

from __future__ import annotations

import json
from typing import IO, Iterable, List, Optional

from eventdrop.core.models import Event


def read_events(lines: Iterable[str]) -> List[Optional[Event]]:
    """Parse JSON Lines into a batch; blank lines and ``null`` become holes."""

    batch: List[Optional[Event]] = []
    for line_number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            batch.append(None)
            continue
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"line {line_number}: invalid JSON: {exc.msg}") from exc
        if raw is None:
            batch.append(None)
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"line {line_number}: event must be a JSON object")
        try:
            batch.append(Event.from_dict(raw))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"line {line_number}: {exc}") from exc
    return batch


def write_events(events: Iterable[Optional[Event]], handle: IO[str]) -> int:
    """Write events as JSON Lines and return how many were written."""

    written = 0
    for event in events:
        if event is None:
            continue
        handle.write(json.dumps(event.to_dict(), ensure_ascii=False))
        handle.write("\n")
        written += 1
    return written
