"""Script runner — walks the source lines with a cursor and executes them.

Control flow
------------
IF cond THEN … END      — falsy condition skips to the matching END
DO v = a TO b … END     — body (up to the matching END) runs once per value
                          of v in a..b inclusive, then the cursor resumes
                          after END

Both blocks are found with parser.find_block_end(); there is no tree.

Failures
--------
Every exception raised while running aborts the script.  execute() never
raises: the failure is reported as ``ExecutionResult(success=False,
error_code=99)`` with ``ERROR: <message>`` as the last output line.

Usage
-----
    handler = SlidesCommandHandler(store)
    runner  = ScriptRunner(make_address_handler(handler.run), on_output=print)
    result  = await runner.execute(script_text)
"""
from __future__ import annotations

import asyncio
import threading
import time
from typing import Awaitable, Callable

from src.core.ast_nodes import (
    Node, SayNode, AddressNode, AssignNode, IfNode, DoNode, CommentNode,
    UnknownNode,
)
from src.core.expression import evaluate, format_value, is_truthy
from src.core.parser import classify, find_block_end, keyword, split_lines
from src.core.prefix import BLOCK_COMMENT_CLOSE
from src.core.results import CommandResult, ExecutionResult
from src.core.variable_store import VariableStore
from src.core.constants import (
    DEFAULT_TIMEOUT_MS, RC_VAR, RESULT_VAR, SLIDES_ADDRESS,
    OK, ERR_HANDLER_MISSING, ERR_UNKNOWN, ERR_RUN_FAILED,
)

LogFn          = Callable[[str, str], None]                        # (level, message)
OutputFn       = Callable[[str], None]                             # one SAY line
CommandRunFn   = Callable[[str], Awaitable[CommandResult]]         # handler.run
AddressHandler = Callable[[str, str], Awaitable[CommandResult]]    # (address, command)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ScriptError(Exception):
    """Raised for errors that abort a script run."""


class ScriptTimeout(ScriptError):
    """Raised when a run exceeds its time budget."""


# ---------------------------------------------------------------------------
# Address routing
# ---------------------------------------------------------------------------

def make_address_handler(slides_run: CommandRunFn | None = None) -> AddressHandler:
    """Build the (address, command) callback handed to ScriptRunner.

    Only the SLIDES address (any case) is routed, to ``slides_run``.
    """
    async def route(address: str, command: str) -> CommandResult:
        if address.upper() == SLIDES_ADDRESS:
            if slides_run is None:
                return CommandResult.fail(ERR_HANDLER_MISSING, "Slides handler not initialized")
            return await slides_run(command)
        return CommandResult.fail(ERR_UNKNOWN, f"Unknown address: {address}")
    return route


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class ScriptRunner:
    """Executes one script at a time; create one runner per concurrent run."""

    def __init__(
        self,
        address_handler: AddressHandler | None = None,
        timeout_ms:      int                    = DEFAULT_TIMEOUT_MS,
        on_output:       OutputFn | None        = None,
        log_fn:          LogFn | None           = None,
    ) -> None:
        self._address    = address_handler or make_address_handler(None)
        self._timeout_ms = timeout_ms
        self._on_output  = on_output or (lambda line: None)
        self._log        = log_fn or (lambda lvl, msg: None)
        self._stop_event = threading.Event()
        self._lines:    list[str]      = []
        self._output:   list[str]      = []
        self._vars:     VariableStore  = VariableStore()
        self._deadline: float          = 0.0

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    @property
    def stop_event(self) -> threading.Event:
        """Set from any thread to abort the run at the next line."""
        return self._stop_event

    @property
    def variables(self) -> VariableStore:
        return self._vars

    async def execute(self, script: str) -> ExecutionResult:
        """Run ``script`` to completion, timeout or error."""
        self._lines    = split_lines(script)
        self._output   = []
        self._vars     = VariableStore()
        self._deadline = time.monotonic() + self._timeout_ms / 1000.0
        self._stop_event.clear()

        try:
            await self._run_block(0, len(self._lines))
        except Exception as exc:          # noqa: BLE001
            message = str(exc) or exc.__class__.__name__
            self._output.append(f"ERROR: {message}")
            self._log("ERROR", f"Script failed: {message}")
            return ExecutionResult(
                success    = False,
                output     = "\n".join(self._output),
                variables  = self._vars.as_dict(),
                error_code = ERR_RUN_FAILED,
                error      = message,
            )

        return ExecutionResult(
            success    = True,
            output     = "\n".join(self._output),
            variables  = self._vars.as_dict(),
            error_code = OK,
        )

    # ------------------------------------------------------------------
    # Execution loop
    # ------------------------------------------------------------------

    async def _run_block(self, begin: int, end: int) -> None:
        """Execute source lines ``begin`` up to (not including) ``end``."""
        pos = begin
        while pos < end:
            self._check_deadline()

            line_num = pos
            line = self._lines[pos].strip()
            pos += 1
            if not line:
                continue

            node = classify(line, line_num)

            if isinstance(node, CommentNode):
                if node.block:
                    pos = self._skip_block_comment(pos, end)
                continue

            if isinstance(node, IfNode):
                if not is_truthy(evaluate(node.condition, self._vars)):
                    pos = min(find_block_end(self._lines, pos, end) + 1, end)
                continue

            if isinstance(node, DoNode):
                pos = await self._run_loop(node, pos, end)
                continue

            await self._run_node(node)

    async def _run_node(self, node: Node) -> None:
        if   isinstance(node, SayNode):      self._run_say(node)
        elif isinstance(node, AssignNode):   self._run_assign(node)
        elif isinstance(node, AddressNode):  await self._run_address(node)
        elif isinstance(node, UnknownNode):  self._run_unknown(node)
        # EndNode closes a block that was entered: nothing to do

    def _skip_block_comment(self, pos: int, end: int) -> int:
        """Advance past the first later line containing */ (or to ``end``)."""
        while pos < end and BLOCK_COMMENT_CLOSE not in self._lines[pos]:
            pos += 1
        return min(pos + 1, end)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _run_say(self, node: SayNode) -> None:
        text = format_value(evaluate(node.expr, self._vars))
        self._output.append(text)
        self._on_output(text)

    def _run_assign(self, node: AssignNode) -> None:
        value = evaluate(node.expr, self._vars)
        self._vars.set(node.var_name, value)
        self._log("INFO", f"{node.var_name} = {value!r}")

    async def _run_address(self, node: AddressNode) -> None:
        self._log("INFO", f"ADDRESS {node.address} → {node.command}")
        try:
            result = await asyncio.wait_for(
                self._address(node.address, node.command),
                timeout=self._remaining_s(),
            )
        except asyncio.TimeoutError:
            raise ScriptTimeout(self._timeout_message()) from None

        if result.success:
            self._vars.set(RC_VAR, OK)
            self._vars.set(RESULT_VAR, result.result if result.result is not None else result.output)
        else:
            self._vars.set(RC_VAR, result.error_code or 1)
            self._vars.set(RESULT_VAR, result.output)
            self._log("WARNING", f"Line {node.line_num + 1}: RC={self._vars.get(RC_VAR)} {result.output}")

    def _run_unknown(self, node: UnknownNode) -> None:
        if keyword(node.text) == "ADDRESS":
            self._log("WARNING", f"Line {node.line_num + 1}: ADDRESS form not recognised, ignored")

    # ------------------------------------------------------------------
    # DO loop
    # ------------------------------------------------------------------

    async def _run_loop(self, node: DoNode, body_start: int, end: int) -> int:
        """Run the loop body once per value; return the cursor after END."""
        first = self._loop_bound(node.start_expr)
        last  = self._loop_bound(node.end_expr)
        body_end = find_block_end(self._lines, body_start, end)
        self._log("INFO", f"DO {node.var_name} = {first} TO {last}")

        for i in range(first, last + 1):
            self._check_deadline()
            self._vars.set(node.var_name, i)
            await self._run_block(body_start, body_end)

        return min(body_end + 1, end)

    def _loop_bound(self, expr: str) -> int:
        value = evaluate(expr, self._vars)
        if isinstance(value, bool):
            raise ScriptError(f"DO: invalid loop bound {expr!r}")
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ScriptError(f"DO: invalid loop bound {expr!r}")

    # ------------------------------------------------------------------
    # Time budget
    # ------------------------------------------------------------------

    def _timeout_message(self) -> str:
        return f"Script execution timeout after {self._timeout_ms}ms"

    def _remaining_s(self) -> float:
        return max(0.0, self._deadline - time.monotonic())

    def _check_deadline(self) -> None:
        if self._stop_event.is_set():
            raise ScriptError("Script execution stopped")
        if time.monotonic() > self._deadline:
            raise ScriptTimeout(self._timeout_message())


# ---------------------------------------------------------------------------
# Convenience
# ---------------------------------------------------------------------------

async def execute_script(
    script:          str,
    address_handler: AddressHandler | None = None,
    timeout_ms:      int                    = DEFAULT_TIMEOUT_MS,
    on_output:       OutputFn | None        = None,
    log_fn:          LogFn | None           = None,
) -> ExecutionResult:
    """Run ``script`` with a fresh ScriptRunner."""
    runner = ScriptRunner(address_handler, timeout_ms, on_output, log_fn)
    return await runner.execute(script)
