"""Configuration management for Promptist."""
from __future__ import annotations

from promptist.config.paths import PromptistPaths, get_paths, reset_paths
from promptist.config.settings import Settings, get_settings_path, settings

__all__ = [
    "PromptistPaths",
    "Settings",
    "get_paths",
    "get_settings_path",
    "reset_paths",
    "settings",
]
