"""JMESPath condition compilation and evaluation.

A condition is evaluated against the JSON document of one event (``name``,
``timestamp``, ``tags``, ``values``, ``deletes``), e.g.
``tags.source == 'lab' && values.cpu > `80```.
"""

from __future__ import annotations

from typing import Optional

import jmespath
from jmespath.exceptions import JMESPathError
from jmespath.parser import ParsedResult

from eventdrop.core.errors import ConditionError, ConfigError
from eventdrop.core.models import Event


def compile_condition(source: str) -> Optional[ParsedResult]:
    """Compile a condition expression; an empty source means no condition."""

    source = source.strip()
    if not source:
        return None
    try:
        return jmespath.compile(source)
    except JMESPathError as exc:
        raise ConfigError(f"invalid condition {source!r}: {exc}") from exc


def check_condition(program: ParsedResult, event: Event) -> bool:
    """Evaluate a compiled condition against one event.

    A missing result (``null``) counts as False. Any other non-boolean
    result is reported as a ConditionError, same as a runtime failure.
    """

    try:
        result = program.search(event.to_dict())
    # jmespath lets TypeError through for mixed-type comparisons and some functions.
    except (JMESPathError, TypeError, ValueError) as exc:
        raise ConditionError(f"condition {program.expression!r} failed: {exc}") from exc
    if result is None:
        return False
    if not isinstance(result, bool):
        raise ConditionError(
            f"unexpected condition return type: {type(result).__name__} | {result!r}"
        )
    return result
