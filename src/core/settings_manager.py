"""Settings manager — reads/writes settings.ini via configparser."""
from configparser import ConfigParser
from pathlib import Path

from src.core.constants import DEFAULT_TIMEOUT_MS, SLIDE_ID_PREFIX, SLIDE_SPACING_X


class SettingsManager:
    def __init__(self, ini_path: Path) -> None:
        self.ini_path = ini_path
        self.config = ConfigParser(comment_prefixes=("#", ";"), inline_comment_prefixes=("#", ";"))
        if ini_path.exists():
            self.config.read(ini_path, encoding="utf-8")

    # ------------------------------------------------------------------
    # Generic getters
    # ------------------------------------------------------------------
    def get(self, section: str, key: str, fallback: str = "") -> str:
        return self.config.get(section, key, fallback=fallback)

    def getint(self, section: str, key: str, fallback: int = 0) -> int:
        return self.config.getint(section, key, fallback=fallback)

    def getbool(self, section: str, key: str, fallback: bool = False) -> bool:
        return self.config.getboolean(section, key, fallback=fallback)

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, key, value)
        self.save()

    def save(self) -> None:
        with open(self.ini_path, "w", encoding="utf-8") as f:
            self.config.write(f)

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------
    @property
    def timeout_ms(self) -> int:
        return self.getint("INTERPRETER", "timeout_ms", DEFAULT_TIMEOUT_MS)

    @property
    def slide_id_prefix(self) -> str:
        return self.get("SLIDES", "id_prefix", SLIDE_ID_PREFIX)

    @property
    def slide_spacing_x(self) -> int:
        return self.getint("SLIDES", "spacing_x", SLIDE_SPACING_X)

    @property
    def command_aliases(self) -> dict[str, str]:
        """Return alias→command mapping from the [COMMANDS] section."""
        if not self.config.has_section("COMMANDS"):
            return {}
        return {k.lower(): v.strip().lower() for k, v in self.config.items("COMMANDS")}
