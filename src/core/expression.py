"""Expression evaluator for SAY, assignment, IF and DO bounds.

The evaluator is deliberately tiny: there is no operator table and no
parenthesis support.  Forms are tried in order and the first match wins:

  1. String literal:   "text"  or  'text'   → the unquoted text
  2. Numeric literal:  42, -3.5, 1e3         → int / float
  3. Variable name:    count                 → its current value
  4. Concatenation:    a || ' and ' || b     → string forms joined, no separator
  5. Anything else                           → the trimmed text itself

Unknown identifiers therefore evaluate to their own name, and
``IF RC = 0 THEN`` is always true (the condition text is echoed back).
"""
from __future__ import annotations

import json
import re
from typing import Any, Mapping, Union

from src.core.variable_store import VariableStore
from src.core.prefix import CONCAT_OPERATOR

Variables = Union[VariableStore, Mapping[str, Any]]

_STRING_RE = re.compile(r"""^(?:"([^"]*)"|'([^']*)')$""")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def _coerce_number(text: str) -> int | float | None:
    """Return the numeric value of ``text`` or None if it is not a number."""
    if not _NUMBER_RE.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        return float(text)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def evaluate(expr: str, variables: Variables) -> Any:
    """Evaluate ``expr`` against ``variables``.  Never raises."""
    text = expr.strip()

    m = _STRING_RE.match(text)
    if m:
        return m.group(1) if m.group(1) is not None else m.group(2)

    number = _coerce_number(text)
    if number is not None:
        return number

    if text in variables:
        return variables.get(text)

    if CONCAT_OPERATOR in text:
        parts = [evaluate(p, variables) for p in text.split(CONCAT_OPERATOR)]
        return "".join(format_value(p) for p in parts)

    return text


def format_value(value: Any) -> str:
    """String form of a script value, as SAY prints it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def is_truthy(value: Any) -> bool:
    """Truthiness used by IF: '', 0, false, None and empty containers are false."""
    return bool(value)
