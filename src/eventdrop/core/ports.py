"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for event processors so that a chain can
mix the built-in drop processor with other implementations.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol, Sequence

from eventdrop.core.models import Event


class EventProcessor(Protocol):
    """Batch operation required by the processor chain."""

    def apply(self, batch: Sequence[Optional[Event]]) -> Sequence[Optional[Event]]:
        ...


class ProcessorFactory(Protocol):
    """Builds a configured processor from its raw options."""

    def __call__(
        self, options: Mapping[str, Any], logger: Optional[logging.Logger] = None
    ) -> EventProcessor:
        ...

