"""Adapters between the eventdrop core and the outside world."""
