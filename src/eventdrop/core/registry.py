"""Explicit processor registry and processor chain.

Processor types are registered on a registry object built at startup, so
tests can construct their own registries without global side effects.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from eventdrop.core.errors import ConfigError
from eventdrop.core.models import Event
from eventdrop.core.ports import EventProcessor, ProcessorFactory
from eventdrop.core.processor import PROCESSOR_TYPE, EventDropProcessor

LOGGER = logging.getLogger(__name__)


class ProcessorRegistry:
    """Maps a stable type name to a processor factory."""

    def __init__(self) -> None:
        self._factories: Dict[str, ProcessorFactory] = {}

    def register(self, type_name: str, factory: ProcessorFactory) -> None:
        if type_name in self._factories:
            raise ValueError(f"Processor type already registered: {type_name}")
        self._factories[type_name] = factory

    def names(self) -> List[str]:
        return sorted(self._factories)

    def create(
        self,
        type_name: str,
        options: Mapping[str, Any],
        logger: Optional[logging.Logger] = None,
    ) -> EventProcessor:
        factory = self._factories.get(type_name)
        if factory is None:
            raise ConfigError(f"Unknown processor type: {type_name}")
        return factory(options, logger)


def default_registry() -> ProcessorRegistry:
    """Return a fresh registry with the built-in processor types."""

    registry = ProcessorRegistry()
    registry.register(PROCESSOR_TYPE, EventDropProcessor.from_config)
    return registry


class ProcessorChain:
    """Applies named processors one after another."""

    def __init__(self, processors: Iterable[tuple[str, EventProcessor]]) -> None:
        self._processors = list(processors)

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self._processors]

    def __iter__(self):
        return iter(self._processors)

    def __len__(self) -> int:
        return len(self._processors)

    def apply(self, batch: Sequence[Optional[Event]]) -> Sequence[Optional[Event]]:
        for name, processor in self._processors:
            before = len(batch)
            batch = processor.apply(batch)
            LOGGER.debug("processor '%s' kept %s of %s events", name, len(batch), before)
        return batch


def _split_processor_entry(name: str, entry: Any) -> tuple[str, Mapping[str, Any]]:
    if not isinstance(entry, Mapping) or len(entry) != 1:
        raise ConfigError(f"processor '{name}' must have exactly one type key")
    (type_name, options), = entry.items()
    return type_name, options or {}


def build_chain(
    processors_config: Mapping[str, Any],
    registry: ProcessorRegistry,
    logger: Optional[logging.Logger] = None,
    only: Optional[Sequence[str]] = None,
) -> ProcessorChain:
    """Build processors from ``{name: {type: options}}`` in config order."""

    names = list(only) if only else list(processors_config)
    processors = []
    for name in names:
        if name not in processors_config:
            raise ConfigError(f"Unknown processor: {name}")
        type_name, options = _split_processor_entry(name, processors_config[name])
        try:
            processors.append((name, registry.create(type_name, options, logger)))
        except ConfigError as exc:
            raise ConfigError(f"processor '{name}': {exc}") from exc
    return ProcessorChain(processors)
