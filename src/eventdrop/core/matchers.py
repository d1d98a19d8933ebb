"""Matcher set compilation and per-event matching logic (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, Mapping, Optional, Tuple

from jmespath.parser import ParsedResult

from eventdrop.core.condition import compile_condition
from eventdrop.core.config import DropConfig
from eventdrop.core.errors import ConfigError
from eventdrop.core.models import DropMatch, Event, Value


@dataclass(frozen=True)
class MatcherSet:
    """Compiled, immutable drop criteria for one processor."""

    condition_source: str
    condition: Optional[ParsedResult]
    tag_names: Tuple[re.Pattern, ...]
    tags: Tuple[re.Pattern, ...]
    value_names: Tuple[re.Pattern, ...]
    values: Tuple[re.Pattern, ...]
    debug: bool = False


def _compile_patterns(field_name: str, sources: Iterable[str]) -> Tuple[re.Pattern, ...]:
    compiled = []
    for source in sources:
        try:
            compiled.append(re.compile(source))
        except re.error as exc:
            raise ConfigError(f"invalid {field_name} regex {source!r}: {exc}") from exc
    return tuple(compiled)


def build_matcher_set(config: DropConfig) -> MatcherSet:
    """Compile a DropConfig into a MatcherSet.

    Compilation is all-or-nothing: the first bad condition or pattern raises
    ConfigError and nothing is returned.
    """

    condition = compile_condition(config.condition)
    return MatcherSet(
        condition_source=config.condition,
        condition=condition,
        tag_names=_compile_patterns("tag-names", config.tag_names),
        tags=_compile_patterns("tags", config.tags),
        value_names=_compile_patterns("value-names", config.value_names),
        values=_compile_patterns("values", config.values),
        debug=config.debug,
    )


def _first_key_match(
    criterion: str, mapping: Mapping[str, object], patterns: Tuple[re.Pattern, ...]
) -> Optional[DropMatch]:
    if not patterns:
        return None
    for key in mapping:
        for pattern in patterns:
            if pattern.search(key):
                return DropMatch(criterion=criterion, subject=key, pattern=pattern.pattern)
    return None


def _first_string_match(
    criterion: str, mapping: Mapping[str, Value], patterns: Tuple[re.Pattern, ...]
) -> Optional[DropMatch]:
    if not patterns:
        return None
    for value in mapping.values():
        # Only string values are candidates; numbers and booleans never match.
        if not isinstance(value, str):
            continue
        for pattern in patterns:
            if pattern.search(value):
                return DropMatch(criterion=criterion, subject=value, pattern=pattern.pattern)
    return None


def match_patterns(event: Event, matchers: MatcherSet) -> Optional[DropMatch]:
    """Return the first regex criterion that matches the event, if any.

    Families are checked in a fixed order: value names, values, tag names,
    tags. Any single hit is enough to drop the event.
    """

    return (
        _first_key_match("value name", event.values, matchers.value_names)
        or _first_string_match("value", event.values, matchers.values)
        or _first_key_match("tag name", event.tags, matchers.tag_names)
        or _first_string_match("tag", event.tags, matchers.tags)
    )
