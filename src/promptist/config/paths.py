"""Centralized path management for Promptist.

Follows XDG Base Directory Specification:
- Config: $XDG_CONFIG_HOME/promptist (default: ~/.config/promptist)
- Data: $XDG_DATA_HOME/promptist (default: ~/.local/share/promptist)
- State: $XDG_STATE_HOME/promptist (default: ~/.local/state/promptist)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _xdg_config_home() -> Path:
    """Get XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _xdg_data_home() -> Path:
    """Get XDG_DATA_HOME, defaulting to ~/.local/share."""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _xdg_state_home() -> Path:
    """Get XDG_STATE_HOME, defaulting to ~/.local/state."""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


@dataclass
class PromptistPaths:
    """Centralized path management following XDG spec."""

    _config_home: Path = field(default_factory=_xdg_config_home)
    _data_home: Path = field(default_factory=_xdg_data_home)
    _state_home: Path = field(default_factory=_xdg_state_home)

    @property
    def config_dir(self) -> Path:
        """Global config: ~/.config/promptist/"""
        return self._config_home / "promptist"

    @property
    def settings_file(self) -> Path:
        """Settings file: ~/.config/promptist/settings.json"""
        return self.config_dir / "settings.json"

    @property
    def data_dir(self) -> Path:
        """Default data directory: ~/.local/share/promptist/"""
        return self._data_home / "promptist"

    @property
    def state_dir(self) -> Path:
        """State: ~/.local/state/promptist/"""
        return self._state_home / "promptist"

    @property
    def debug_log(self) -> Path:
        """Debug log: ~/.local/state/promptist/debug.log"""
        return self.state_dir / "debug.log"


# Singleton instance
_paths: PromptistPaths | None = None


def get_paths() -> PromptistPaths:
    """Get the paths singleton."""
    global _paths
    if _paths is None:
        _paths = PromptistPaths()
    return _paths


def reset_paths() -> None:
    """Reset paths singleton (for testing)."""
    global _paths
    _paths = None
