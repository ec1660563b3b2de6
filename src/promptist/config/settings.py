"""Configuration and settings persistence."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from promptist.config.paths import get_paths

logger = logging.getLogger(__name__)

MAX_RECENT_SEARCHES = 5


def get_settings_path() -> Path:
    """Get the path to the settings file."""
    return get_paths().settings_file


def detect_terminal_theme() -> str:
    """Detect terminal light/dark preference."""
    # Check COLORFGBG env var (format: "fg;bg" where bg < 7 means dark)
    colorfgbg = os.environ.get("COLORFGBG", "")
    if colorfgbg:
        try:
            parts = colorfgbg.split(";")
            if len(parts) >= 2:
                bg = int(parts[-1])
                return "textual-light" if bg >= 7 else "textual-dark"
        except (ValueError, IndexError):
            pass

    # Most modern terminals default to dark
    return "textual-dark"


class Settings:
    """Persistent settings for Promptist."""

    _defaults: dict[str, Any] = {
        "v2_migration_complete": False,
    }

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        path = get_settings_path()
        if path.exists():
            try:
                self._data = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                self._data = {}
        else:
            self._data = {}

    def _save(self) -> None:
        """Save settings to disk."""
        path = get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
            logger.info("Saved settings to %s", path)
        except OSError as e:
            logger.error("Failed to save settings: %s", e)

    def get(self, key: str) -> Any:
        """Get a setting value, falling back to default."""
        return self._data.get(key, self._defaults.get(key))

    def set(self, key: str, value: Any) -> None:
        """Set a setting value and persist to disk."""
        self._data[key] = value
        self._save()

    @property
    def theme(self) -> str:
        """Get the current theme, detecting from terminal if not set."""
        saved = self._data.get("theme")
        if saved:
            return str(saved)
        return detect_terminal_theme()

    @theme.setter
    def theme(self, value: str) -> None:
        self.set("theme", value)

    @property
    def data_directory(self) -> Path:
        """Directory holding templates, collections, categories and shortcuts.

        Returns the configured override, or the XDG data directory.
        """
        saved = self._data.get("data_directory")
        if saved:
            return Path(saved).expanduser().resolve()
        return get_paths().data_dir

    @data_directory.setter
    def data_directory(self, value: str | Path) -> None:
        self.set("data_directory", str(value))

    def is_v2_migrated(self, data_dir: Path) -> bool:
        """Whether templates in ``data_dir`` were assigned default categories.

        The completion flag is kept per data directory. The older global
        flag only covers the configured data directory.
        """
        resolved = data_dir.expanduser().resolve()
        if str(resolved) in self._v2_migrated_dirs():
            return True
        return bool(self.get("v2_migration_complete")) and (
            resolved == self.data_directory.resolve()
        )

    def mark_v2_migrated(self, data_dir: Path) -> None:
        migrated = self._v2_migrated_dirs()
        resolved = str(data_dir.expanduser().resolve())
        if resolved not in migrated:
            self.set("v2_migrated_data_dirs", migrated + [resolved])

    def _v2_migrated_dirs(self) -> list[str]:
        raw = self._data.get("v2_migrated_data_dirs", [])
        if isinstance(raw, list):
            return [str(item) for item in raw]
        return []

    # --- Launcher Settings ---

    def _get_launcher_settings(self) -> dict[str, Any]:
        raw = self._data.get("launcher", {})
        if isinstance(raw, dict):
            return raw
        return {}

    def _set_launcher_value(self, key: str, value: Any) -> None:
        launcher = self._get_launcher_settings()
        launcher[key] = value
        self.set("launcher", launcher)

    @property
    def auto_sort_by_usage(self) -> bool:
        """Sort the launcher's main list by usage count instead of sort order."""
        return bool(self._get_launcher_settings().get("auto_sort_by_usage", True))

    @auto_sort_by_usage.setter
    def auto_sort_by_usage(self, value: bool) -> None:
        self._set_launcher_value("auto_sort_by_usage", bool(value))

    @property
    def show_recent_section(self) -> bool:
        """Show recently used prompts above the main list."""
        return bool(self._get_launcher_settings().get("show_recent_section", True))

    @show_recent_section.setter
    def show_recent_section(self, value: bool) -> None:
        self._set_launcher_value("show_recent_section", bool(value))

    @property
    def show_frequent_section(self) -> bool:
        """Show frequently used prompts above the main list."""
        return bool(self._get_launcher_settings().get("show_frequent_section", True))

    @show_frequent_section.setter
    def show_frequent_section(self, value: bool) -> None:
        self._set_launcher_value("show_frequent_section", bool(value))

    @property
    def recent_section_count(self) -> int:
        """Number of prompts in the recent section.

        Non-positive or invalid stored values fall back to 5.
        """
        raw = self._get_launcher_settings().get("recent_section_count", 5)
        try:
            count = int(raw)
        except (TypeError, ValueError):
            return 5
        return count if count > 0 else 5

    @recent_section_count.setter
    def recent_section_count(self, value: int) -> None:
        self._set_launcher_value("recent_section_count", int(value))

    # --- Search History ---

    @property
    def recent_searches(self) -> list[str]:
        """Most recent manager search terms, newest first."""
        raw = self._data.get("recent_searches", [])
        if not isinstance(raw, list):
            return []
        return [str(term) for term in raw][:MAX_RECENT_SEARCHES]

    @recent_searches.setter
    def recent_searches(self, value: list[str]) -> None:
        if value:
            self.set("recent_searches", list(value)[:MAX_RECENT_SEARCHES])
        else:
            self._data.pop("recent_searches", None)
            self._save()


# Global settings instance
settings = Settings()
