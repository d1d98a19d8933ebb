from __future__ import annotations

from typing import Optional, Sequence

import pytest

from eventdrop.core.errors import ConfigError
from eventdrop.core.models import Event
from eventdrop.core.processor import EventDropProcessor
from eventdrop.core.registry import ProcessorRegistry, build_chain, default_registry


class FakeProcessor:
    def __init__(self, options) -> None:
        self.options = options
        self.seen: list[int] = []

    def apply(self, batch: Sequence[Optional[Event]]) -> Sequence[Optional[Event]]:
        self.seen.append(len(batch))
        return [event for event in batch if event is None or event.name != self.options["name"]]


def test_default_registry_knows_event_drop() -> None:
    registry = default_registry()
    assert registry.names() == ["event-drop"]
    processor = registry.create("event-drop", {"tags": ["x"]})
    assert isinstance(processor, EventDropProcessor)


def test_default_registry_returns_independent_instances() -> None:
    first = default_registry()
    first.register("fake", lambda options, logger=None: FakeProcessor(options))
    assert default_registry().names() == ["event-drop"]


def test_register_duplicate_raises() -> None:
    registry = ProcessorRegistry()
    registry.register("fake", lambda options, logger=None: FakeProcessor(options))
    with pytest.raises(ValueError):
        registry.register("fake", lambda options, logger=None: FakeProcessor(options))


def test_create_unknown_type_raises_config_error() -> None:
    with pytest.raises(ConfigError, match="Unknown processor type"):
        ProcessorRegistry().create("nope", {})


def test_build_chain_applies_processors_in_config_order() -> None:
    registry = default_registry()
    registry.register("fake", lambda options, logger=None: FakeProcessor(options))
    chain = build_chain(
        {
            "drop-debug": {"event-drop": {"tag-names": ["^debug_"]}},
            "drop-b": {"fake": {"name": "b"}},
        },
        registry,
    )
    assert chain.names == ["drop-debug", "drop-b"]

    batch = [
        Event(name="a", tags={"debug_x": "1"}),
        Event(name="b"),
        Event(name="c"),
    ]
    result = chain.apply(batch)

    assert [event.name for event in result] == ["c"]
    _, fake = list(chain)[1]
    assert fake.seen == [2]


def test_build_chain_only_selects_named_processors() -> None:
    config = {
        "first": {"event-drop": {"tags": ["a"]}},
        "second": {"event-drop": {"tags": ["b"]}},
    }
    chain = build_chain(config, default_registry(), only=["second"])
    assert chain.names == ["second"]


def test_build_chain_unknown_name_raises() -> None:
    with pytest.raises(ConfigError, match="Unknown processor: missing"):
        build_chain({"first": {"event-drop": {}}}, default_registry(), only=["missing"])


def test_build_chain_requires_single_type_key() -> None:
    with pytest.raises(ConfigError, match="exactly one type key"):
        build_chain({"bad": {"event-drop": {}, "other": {}}}, default_registry())


def test_build_chain_wraps_processor_errors_with_name() -> None:
    with pytest.raises(ConfigError, match="processor 'broken'"):
        build_chain({"broken": {"event-drop": {"values": ["("]}}}, default_registry())


def test_build_chain_accepts_null_options() -> None:
    chain = build_chain({"empty": {"event-drop": None}}, default_registry())
    batch = [Event(name="a")]
    assert chain.apply(batch) is batch
