"""Linear undo/redo history of slide-list snapshots.

Each entry holds the slide list as it was *after* a mutating command.
The cursor points at the entry that matches the store; undo/redo move the
cursor and hand back the snapshot to restore.

Recording a new entry while the cursor is not at the end discards every
entry after it (the redo lineage).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from src.core.slide_store import Slide


@dataclass(frozen=True)
class HistoryEntry:
    command: Optional[str]                          # None for the baseline entry
    params:  dict[str, Any] = field(default_factory=dict)
    slides:  tuple[Slide, ...] = ()


class History:
    def __init__(self, baseline: Sequence[Slide] | None = None) -> None:
        self._entries: list[HistoryEntry] = []
        self._index = -1
        if baseline is not None:
            self.record(None, {}, baseline)

    # ------------------------------------------------------------------
    @property
    def index(self) -> int:
        return self._index

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    # ------------------------------------------------------------------
    def record(self, command: Optional[str], params: dict[str, Any], slides: Sequence[Slide]) -> None:
        del self._entries[self._index + 1:]
        self._entries.append(HistoryEntry(command, dict(params), tuple(slides)))
        self._index = len(self._entries) - 1

    def undo(self) -> tuple[Slide, ...]:
        if not self.can_undo:
            raise IndexError("Nothing to undo")
        self._index -= 1
        return self._entries[self._index].slides

    def redo(self) -> tuple[Slide, ...]:
        if not self.can_redo:
            raise IndexError("Nothing to redo")
        self._index += 1
        return self._entries[self._index].slides
