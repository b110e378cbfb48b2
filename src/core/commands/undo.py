"""Undo / redo commands for SlidesCommandHandler.

Both move the history cursor and replace the store's whole slide list
with the snapshot at the new position.
"""
from __future__ import annotations

from src.core.results import CommandResult
from src.core.slide_store import ImportSlides
from src.core.constants import (
    ERR_NOTHING_TO_UNDO, ERR_UNDO_FAILED, ERR_NOTHING_TO_REDO, ERR_REDO_FAILED,
)


async def cmd_undo(self, params) -> CommandResult:
    try:
        if not self.history.can_undo:
            return CommandResult.fail(ERR_NOTHING_TO_UNDO, "Nothing to undo")
        self.store.dispatch(ImportSlides(self.history.undo()))
        return CommandResult.ok("Undo executed", {"historyIndex": self.history.index})
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_UNDO_FAILED, f"Failed to undo: {exc}")


async def cmd_redo(self, params) -> CommandResult:
    try:
        if not self.history.can_redo:
            return CommandResult.fail(ERR_NOTHING_TO_REDO, "Nothing to redo")
        self.store.dispatch(ImportSlides(self.history.redo()))
        return CommandResult.ok("Redo executed", {"historyIndex": self.history.index})
    except Exception as exc:          # noqa: BLE001
        return CommandResult.fail(ERR_REDO_FAILED, f"Failed to redo: {exc}")
