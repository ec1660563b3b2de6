"""Data models for Promptist."""

from .app_target import (
    CustomTarget,
    PromptAppFilter,
    PromptAppTarget,
    TrackedTarget,
    dedupe_targets,
    parse_app_target,
)
from .category import PromptCategory, default_hierarchy
from .collection import PromptTemplateCollection
from .shortcut import KeyCombo, ModifierKey, ShortcutScope, TemplateShortcut
from .template import PromptTemplate, new_id
from .tracked_app import TRACKED_APP_CONFIGS, TrackedApp, resolve_tracked_app

__all__ = [
    "CustomTarget",
    "KeyCombo",
    "ModifierKey",
    "PromptAppFilter",
    "PromptAppTarget",
    "PromptCategory",
    "PromptTemplate",
    "PromptTemplateCollection",
    "ShortcutScope",
    "TRACKED_APP_CONFIGS",
    "TemplateShortcut",
    "TrackedApp",
    "TrackedTarget",
    "dedupe_targets",
    "default_hierarchy",
    "new_id",
    "parse_app_target",
    "resolve_tracked_app",
]
