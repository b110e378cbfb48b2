"""Script playback bridge for Qt hosts.

Architecture
------------
ScriptPlayer (QObject, main thread)
  ├─ SlideStore / SlidesCommandHandler — shared by every run, so the
  │   undo/redo history spans scripts
  └─ _ScriptThread (QThread, one instance per play() call)
       └─ asyncio.run(ScriptRunner.execute(text))

Signals forwarded to the UI
---------------------------
output_line(text)             — one SAY line
log_message(level, msg)
status_changed("playing" | "stopped")
deck_changed(list[dict])      — slide list after every store action
finished(ExecutionResult)
"""
from __future__ import annotations

import asyncio
from typing import Optional

from PySide6.QtCore import QObject, QThread, Signal

from src.core.dispatcher import SlidesCommandHandler
from src.core.runner import ScriptRunner, make_address_handler
from src.core.slide_store import SlideStore


# ---------------------------------------------------------------------------
# Worker thread
# ---------------------------------------------------------------------------

class _ScriptThread(QThread):
    output_line = Signal(str)
    log_msg     = Signal(str, str)    # (level, message)
    done        = Signal(object)      # ExecutionResult

    def __init__(self, text: str, handler: SlidesCommandHandler, timeout_ms: int) -> None:
        super().__init__()
        self._text    = text
        self._runner  = ScriptRunner(
            address_handler = make_address_handler(handler.run),
            timeout_ms      = timeout_ms,
            on_output       = self.output_line.emit,
            log_fn          = self._emit_log,
        )

    def stop(self) -> None:
        self._runner.stop_event.set()

    def _emit_log(self, level: str, msg: str) -> None:
        self.log_msg.emit(level, msg)

    # ------------------------------------------------------------------

    def run(self) -> None:
        result = asyncio.run(self._runner.execute(self._text))
        if result.success:
            self.log_msg.emit("SUCCESS", "Script finished (RC={})".format(
                result.variables.get("RC", 0)))
        else:
            self.log_msg.emit("ERROR", f"Script failed: {result.error}")
        self.done.emit(result)


# ---------------------------------------------------------------------------
# Public player
# ---------------------------------------------------------------------------

class ScriptPlayer(QObject):
    """Runs slides scripts on a background QThread.

    Parameters
    ----------
    settings : SettingsManager
    store    : deck to drive; a fresh SlideStore when omitted
    """

    output_line    = Signal(str)
    log_message    = Signal(str, str)
    status_changed = Signal(str)
    deck_changed   = Signal(object)
    finished       = Signal(object)

    def __init__(self, settings, store=None) -> None:
        super().__init__()
        self._settings = settings
        self.store     = store if store is not None else SlideStore()
        self.handler   = SlidesCommandHandler(
            self.store,
            aliases   = settings.command_aliases,
            id_prefix = settings.slide_id_prefix,
            spacing_x = settings.slide_spacing_x,
            log_fn    = self.log_message.emit,
        )
        if hasattr(self.store, "subscribe"):
            self.store.subscribe(self._on_store_changed)
        self._thread: Optional[_ScriptThread] = None
        self._last_result = None

    # ------------------------------------------------------------------

    @property
    def is_playing(self) -> bool:
        return self._thread is not None and self._thread.isRunning()

    def play(self, text: str) -> bool:
        """Start ``text`` in the background; False if a script is running."""
        if self.is_playing:
            self.log_message.emit("WARNING", "A script is already running")
            return False

        self._thread = self._make_thread(text)
        self._thread.start()
        self.status_changed.emit("playing")
        return True

    def stop(self) -> None:
        if self._thread:
            self._thread.stop()
            self._thread.wait(3000)

    # ------------------------------------------------------------------

    def _make_thread(self, text: str) -> _ScriptThread:
        thread = _ScriptThread(text, self.handler, self._settings.timeout_ms)
        thread.output_line.connect(self.output_line)
        thread.log_msg.connect(self.log_message)
        thread.done.connect(self._on_result)
        thread.finished.connect(self._on_finished)
        return thread

    def _on_result(self, result) -> None:
        self._last_result = result

    def _on_finished(self) -> None:
        self._thread = None
        self.status_changed.emit("stopped")
        self.finished.emit(self._last_result)

    def _on_store_changed(self) -> None:
        self.deck_changed.emit([s.to_dict() for s in self.store.get_state().slides])
