"""Settings manager — reads settings.ini via configparser.

The file is optional; every getter falls back to its default when the
file, section or key is missing.  Malformed booleans fall back as well.
"""
from configparser import ConfigParser
from pathlib import Path


class SettingsManager:
    def __init__(self, ini_path: Path) -> None:
        self.ini_path = ini_path
        self.config = ConfigParser(comment_prefixes=("#", ";"), inline_comment_prefixes=("#",))
        if ini_path.exists():
            self.config.read(ini_path, encoding="utf-8")

    # ------------------------------------------------------------------
    # Generic getters
    # ------------------------------------------------------------------
    def get(self, section: str, key: str, fallback: str = "") -> str:
        return self.config.get(section, key, fallback=fallback)

    def getbool(self, section: str, key: str, fallback: bool = False) -> bool:
        try:
            return self.config.getboolean(section, key, fallback=fallback)
        except ValueError:
            return fallback

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------
    @property
    def listen_events(self) -> bool:
        return self.getbool("INPUT", "listen_events", True)

    @property
    def verbose(self) -> bool:
        return self.getbool("LOG", "verbose", False)
