"""Exceptions raised by the eventdrop core."""

from __future__ import annotations


class EventDropError(Exception):
    """Base class for eventdrop errors."""


class ConfigError(EventDropError):
    """Invalid processor configuration; the stage must not start."""


class ConditionError(EventDropError):
    """A condition failed while being evaluated against one event."""
