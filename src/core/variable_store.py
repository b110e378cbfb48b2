"""Variable environment for one script run.

Names are case-sensitive (``count`` and ``COUNT`` are different variables).
``RC`` and ``RESULT`` are rewritten after every ADDRESS directive.
"""
from __future__ import annotations

from typing import Any


class VariableStore:
    """Maps 'varname' → Any value (int, float, str, bool, list, dict)."""

    def __init__(self) -> None:
        self._vars: dict[str, Any] = {}

    # ------------------------------------------------------------------
    def get(self, name: str, default: Any = None) -> Any:
        return self._vars.get(name, default)

    def set(self, name: str, value: Any) -> None:
        self._vars[name] = value

    def as_dict(self) -> dict[str, Any]:
        return dict(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __repr__(self) -> str:
        return f"VariableStore({self._vars!r})"
