"""Formatting helpers for the configured processor chain.

Keeping formatting here lets the CLI print rules without the core knowing
anything about terminals.
"""

from __future__ import annotations

import re

from rich.table import Table
from rich.text import Text

from eventdrop.core.processor import EventDropProcessor
from eventdrop.core.registry import ProcessorChain


def _patterns_cell(patterns: tuple[re.Pattern, ...]) -> Text:
    if not patterns:
        return Text("-", style="dim")
    return Text("\n".join(pattern.pattern for pattern in patterns))


def build_rules_table(chain: ProcessorChain) -> Table:
    """Return a rich table describing every processor in the chain."""

    table = Table(title="Configured processors")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Condition")
    table.add_column("Tag names")
    table.add_column("Tags")
    table.add_column("Value names")
    table.add_column("Values")
    table.add_column("Debug")

    for name, processor in chain:
        if not isinstance(processor, EventDropProcessor):
            table.add_row(name, Text(type(processor).__name__, style="dim"), "", "", "", "", "")
            continue
        matchers = processor.matchers
        table.add_row(
            name,
            Text(matchers.condition_source) if matchers.condition_source else Text("-", style="dim"),
            _patterns_cell(matchers.tag_names),
            _patterns_cell(matchers.tags),
            _patterns_cell(matchers.value_names),
            _patterns_cell(matchers.values),
            "yes" if matchers.debug else "no",
        )
    return table
