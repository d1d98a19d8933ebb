"""Event drop processor.

This module is integration-agnostic. It evaluates a compiled MatcherSet
against every event of a batch and compacts the batch, keeping survivors in
their original order.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Sequence

from eventdrop.core.compaction import shift
from eventdrop.core.condition import check_condition
from eventdrop.core.config import DropConfig, parse_drop_config
from eventdrop.core.errors import ConditionError
from eventdrop.core.matchers import MatcherSet, build_matcher_set, match_patterns
from eventdrop.core.models import Event

LOGGER = logging.getLogger(__name__)

PROCESSOR_TYPE = "event-drop"


def _discard_logger() -> logging.Logger:
    # Detached from the logging manager so no global state is touched.
    logger = logging.Logger(f"{PROCESSOR_TYPE}.discard")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    logger.disabled = True
    return logger


class _PrefixAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        return f"[{PROCESSOR_TYPE}] {msg}", kwargs


class EventDropProcessor:
    """Drops events when ANY of the condition or tag/value regexes match."""

    def __init__(
        self,
        config: DropConfig,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if config.debug:
            base_logger = logger or LOGGER
        else:
            base_logger = _discard_logger()
        self._logger = _PrefixAdapter(base_logger, {})
        self._matchers: MatcherSet = build_matcher_set(config)
        if config.debug:
            self._logger.info(
                "initialized processor '%s': %s",
                PROCESSOR_TYPE,
                json.dumps(config.to_dict(), sort_keys=True),
            )

    @classmethod
    def from_config(
        cls, options: Mapping[str, Any], logger: Optional[logging.Logger] = None
    ) -> "EventDropProcessor":
        """Decode raw options and build a processor (registry factory)."""

        return cls(parse_drop_config(options), logger=logger)

    @property
    def matchers(self) -> MatcherSet:
        return self._matchers

    def should_drop(self, event: Event) -> bool:
        """Return True when any criterion matches the event."""

        if self._matchers.condition is not None:
            try:
                if check_condition(self._matchers.condition, event):
                    self._logger.info("event '%s' matched condition", event.name)
                    return True
            except ConditionError as exc:
                # Not fatal: the regex criteria still get a chance.
                self._logger.warning("condition check failed: %s", exc)

        match = match_patterns(event, self._matchers)
        if match is None:
            return False
        self._logger.info("%s", match.reason)
        return True

    def apply(self, batch: Sequence[Optional[Event]]) -> Sequence[Optional[Event]]:
        """Return the batch without dropped events.

        When nothing is dropped the input object is returned as is.
        """

        to_drop: List[int] = []
        for index, event in enumerate(batch):
            if event is None:
                continue
            if self.should_drop(event):
                to_drop.append(index)

        if not to_drop:
            return batch
        return shift(list(batch), to_drop)
