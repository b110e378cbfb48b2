"""Uniform result records shared by the runner and the command handler.

CommandResult   — returned by every ADDRESS SLIDES command (and by the
                  address router for unknown addresses).
ExecutionResult — returned by ScriptRunner.execute() for a whole script.

Invariant: ``success`` is True exactly when ``error_code`` is 0.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from src.core.constants import OK


@dataclass
class CommandResult:
    success:    bool
    error_code: int = OK
    output:     str = ""
    result:     Any = None

    @classmethod
    def ok(cls, output: str, result: Any = None) -> "CommandResult":
        return cls(success=True, error_code=OK, output=output, result=result)

    @classmethod
    def fail(cls, error_code: int, output: str) -> "CommandResult":
        if error_code == OK:
            raise ValueError("a failed command needs a non-zero error code")
        return cls(success=False, error_code=error_code, output=output, result=None)


@dataclass
class ExecutionResult:
    success:    bool
    output:     str = ""
    variables:  dict[str, Any] = field(default_factory=dict)
    error_code: int = OK
    error:      Optional[str] = None
