"""Decoding of ``key=value`` command parameters.

    >>> parse_command_line("goto-slide number=2 verbose=true")
    ('goto-slide', {'number': 2, 'verbose': True})

Values are decoded by coerce_param(): ``true`` / ``false`` become bools,
decimal text becomes int / float, anything else is a string with every
quote character removed.  There is no quoting: ``text=Hello World``
yields ``text="Hello"`` and the bare ``World`` token is ignored.
"""
from __future__ import annotations

import re
from typing import Any, Union

ParamValue = Union[bool, int, float, str]

_NUMBER_RE      = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_QUOTES_RE      = re.compile(r"""['"]""")


def coerce_param(value: str) -> ParamValue:
    """Decode one parameter value."""
    if value == "true":
        return True
    if value == "false":
        return False
    if _NUMBER_RE.match(value):
        try:
            return int(value)
        except ValueError:
            return float(value)
    return _QUOTES_RE.sub("", value)


def parse_params(tokens: list[str]) -> dict[str, ParamValue]:
    """Turn ``["key=value", …]`` into a mapping; tokens without '=' are skipped.

    Only the first '=' splits, so ``text=a=b`` gives ``"a=b"``.
    """
    params: dict[str, ParamValue] = {}
    for tok in tokens:
        key, sep, value = tok.partition("=")
        if key and sep:
            params[key] = coerce_param(value)
    return params


def parse_command_line(line: str) -> tuple[str, dict[str, ParamValue]]:
    """Split a command line into (command name, params)."""
    parts = line.split()
    if not parts:
        return "", {}
    return parts[0], parse_params(parts[1:])


def to_int(value: Any) -> int | None:
    """Integer value of a parameter, or None if it has none.

    Floats are truncated and strings are read up to the first non-digit
    (``"3rd"`` → 3); bools are not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        if m:
            return int(m.group(1))
    return None
