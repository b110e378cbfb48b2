"""Slides Script — run a script file headless against an in-memory deck."""
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from src.core.settings_manager import SettingsManager
from src.core.player import ScriptPlayer

BASE_DIR = Path(__file__).parent


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: main.py SCRIPT [--verbose]", file=sys.stderr)
        sys.exit(2)

    app = QCoreApplication(sys.argv)
    app.setApplicationName("Slides Script")
    app.setApplicationVersion("0.1.0")

    script = Path(sys.argv[1]).read_text(encoding="utf-8")
    settings = SettingsManager(BASE_DIR / "settings.ini")
    player = ScriptPlayer(settings)

    player.output_line.connect(print)
    if "--verbose" in sys.argv[2:]:
        player.log_message.connect(lambda lvl, msg: print(f"[{lvl}] {msg}", file=sys.stderr))

    def on_finished(result) -> None:
        if not result.success:
            print(f"ERROR: {result.error}", file=sys.stderr)
        app.exit(0 if result.success else 1)

    player.finished.connect(on_finished)

    player.play(script)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
