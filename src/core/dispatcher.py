"""ADDRESS SLIDES command handler.

Command line format
-------------------
    command-name key=value key=value …

The first token may be an alias from settings [COMMANDS]; parameters are
decoded by params.parse_params().

History
-------
After a successful mutating command (see STATE_CHANGING_COMMANDS) the
store's slide list is recorded in the History.  The history starts with a
baseline entry holding the deck as it was when the handler was created,
so the first mutation can be undone.

Error codes are listed in src/core/constants.py; every command handler
converts its own exceptions into a CommandResult.
"""
from __future__ import annotations

from typing import Any, Callable

from src.core.commands.slides import (
    cmd_new_slide, cmd_set_slide_title, cmd_add_text, cmd_list_slides,
    cmd_get_current_slide, cmd_goto_slide, cmd_delete_slide,
    cmd_duplicate_slide, cmd_get_slides, cmd_get_slide_info,
)
from src.core.commands.undo import cmd_undo, cmd_redo
from src.core.history import History
from src.core.params import parse_command_line
from src.core.results import CommandResult
from src.core.slide_store import Slide
from src.core.constants import (
    SLIDE_ID_PREFIX, SLIDE_SPACING_X, ERR_UNKNOWN, ERR_RUN_FAILED,
)

LogFn = Callable[[str, str], None]

STATE_CHANGING_COMMANDS: frozenset[str] = frozenset({
    "new-slide", "set-slide-title", "add-text", "delete-slide", "duplicate-slide",
})

# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------

class SlidesCommandHandler:
    """Runs ADDRESS SLIDES commands against a slide store.

    Parameters
    ----------
    store     : object with ``get_state()`` and ``dispatch(action)``
    aliases   : alias → canonical command name (settings [COMMANDS])
    id_prefix : prefix of generated slide ids
    spacing_x : default x offset between consecutive new slides
    log_fn    : optional callback(level, message)
    """

    def __init__(
        self,
        store,
        aliases:   dict[str, str] | None = None,
        id_prefix: str                   = SLIDE_ID_PREFIX,
        spacing_x: int                   = SLIDE_SPACING_X,
        log_fn:    LogFn | None          = None,
    ) -> None:
        self.store      = store
        self.id_prefix  = id_prefix
        self.spacing_x  = spacing_x
        self._aliases   = dict(aliases or {})
        self._log       = log_fn or (lambda lvl, msg: None)
        self.history    = History(baseline=self.slides())

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    async def run(self, command_line: str) -> CommandResult:
        """Decode and execute one command line.  Never raises."""
        try:
            command, params = parse_command_line(command_line)
            command = self.expand_alias(command)

            handler = _DISPATCH.get(command)
            if handler is None:
                self._log("WARNING", f"Unknown command: {command!r}")
                return CommandResult.fail(ERR_UNKNOWN, f"Unknown command: {command}")

            result = await handler(self, params)

            if result.success and command in STATE_CHANGING_COMMANDS:
                self.history.record(command, params, self.slides())
                self._log("INFO", f"{command}: history {self.history.index + 1}/{len(self.history)}")
            elif not result.success:
                self._log("WARNING", f"{command}: [{result.error_code}] {result.output}")
            return result
        except Exception as exc:          # noqa: BLE001
            self._log("ERROR", f"{command_line!r}: {exc!r}")
            return CommandResult.fail(ERR_RUN_FAILED, f"Error: {exc}")

    def expand_alias(self, command: str) -> str:
        """Replace an alias with its canonical command name.

        Aliases that point at unregistered commands are left alone.
        """
        canonical = self._aliases.get(command.lower(), command)
        if is_command(canonical):
            return canonical
        return command

    def slides(self) -> list[Slide]:
        return list(self.store.get_state().slides)


# ---------------------------------------------------------------------------
# Dispatch table — maps command name → handler(self, params)
# ---------------------------------------------------------------------------

_DISPATCH: dict[str, Any] = {
    "new-slide":         cmd_new_slide,
    "set-slide-title":   cmd_set_slide_title,
    "add-text":          cmd_add_text,
    "list-slides":       cmd_list_slides,
    "get-current-slide": cmd_get_current_slide,
    "goto-slide":        cmd_goto_slide,
    "delete-slide":      cmd_delete_slide,
    "duplicate-slide":   cmd_duplicate_slide,
    "undo":              cmd_undo,
    "redo":              cmd_redo,
    "get-slides":        cmd_get_slides,
    "get-slide-info":    cmd_get_slide_info,
}


def is_command(name: str) -> bool:
    return name in _DISPATCH
