"""eventdrop: drop telemetry events from a batch by tag/value rules."""

__version__ = "0.1.0"
