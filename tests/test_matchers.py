from __future__ import annotations

import pytest

from eventdrop.core.config import DropConfig, parse_drop_config
from eventdrop.core.errors import ConfigError
from eventdrop.core.matchers import build_matcher_set, match_patterns
from eventdrop.core.models import Event


def test_build_matcher_set_compiles_every_family_in_order() -> None:
    matchers = build_matcher_set(
        parse_drop_config(
            {
                "tag-names": ["^a", "^b"],
                "tags": ["x"],
                "value-names": ["^cpu"],
                "values": ["down"],
                "debug": True,
            }
        )
    )
    assert [p.pattern for p in matchers.tag_names] == ["^a", "^b"]
    assert [p.pattern for p in matchers.tags] == ["x"]
    assert [p.pattern for p in matchers.value_names] == ["^cpu"]
    assert [p.pattern for p in matchers.values] == ["down"]
    assert matchers.condition is None
    assert matchers.debug is True


def test_build_matcher_set_rejects_bad_regex_and_names_it() -> None:
    config = DropConfig(tag_names=("^ok$",), tags=("([unclosed",))
    with pytest.raises(ConfigError, match=r"tags regex '\(\[unclosed'"):
        build_matcher_set(config)


def test_build_matcher_set_rejects_bad_condition() -> None:
    with pytest.raises(ConfigError, match="invalid condition"):
        build_matcher_set(DropConfig(condition="tags.site =="))


def test_matcher_set_is_frozen() -> None:
    matchers = build_matcher_set(DropConfig(tags=("x",)))
    with pytest.raises(AttributeError):
        matchers.tags = ()  # type: ignore[misc]


def test_match_patterns_reports_tag_name() -> None:
    matchers = build_matcher_set(DropConfig(tag_names=("^debug_.*",)))
    match = match_patterns(Event(tags={"site": "a", "debug_level": "3"}), matchers)
    assert match is not None
    assert match.reason == "tag name 'debug_level' matched regex '^debug_.*'"


def test_match_patterns_is_unanchored_search() -> None:
    matchers = build_matcher_set(DropConfig(tags=("lab",)))
    assert match_patterns(Event(tags={"site": "east-lab-2"}), matchers) is not None


def test_match_patterns_value_families_checked_before_tag_families() -> None:
    matchers = build_matcher_set(DropConfig(tag_names=("^site$",), value_names=("^cpu$",)))
    match = match_patterns(Event(tags={"site": "a"}, values={"cpu": 1}), matchers)
    assert match is not None
    assert match.criterion == "value name"


def test_match_patterns_ignores_non_string_values() -> None:
    matchers = build_matcher_set(DropConfig(values=("^42$", "^True$", "1.5")))
    event = Event(values={"answer": 42, "flag": True, "ratio": 1.5})
    assert match_patterns(event, matchers) is None


def test_match_patterns_matches_string_value() -> None:
    matchers = build_matcher_set(DropConfig(values=("^42$",)))
    match = match_patterns(Event(values={"answer": "42"}), matchers)
    assert match is not None
    assert match.criterion == "value"
    assert match.subject == "42"


def test_match_patterns_without_criteria_never_matches() -> None:
    matchers = build_matcher_set(DropConfig())
    assert match_patterns(Event(tags={"a": "b"}, values={"c": "d"}), matchers) is None
