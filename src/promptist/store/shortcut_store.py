"""Persistence for template keyboard shortcuts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from promptist.models.shortcut import TemplateShortcut
from promptist.store.files import read_json_list, write_json_atomic

logger = logging.getLogger(__name__)

SHORTCUTS_FILE = "shortcuts.json"


class FileShortcutStore:
    """Stores shortcuts as a JSON array in ``shortcuts.json``."""

    def __init__(self, data_dir: Path) -> None:
        self.path = data_dir / SHORTCUTS_FILE

    def load_shortcuts(self) -> list[TemplateShortcut]:
        """Load all shortcuts; a missing or unreadable file yields none."""
        if not self.path.exists():
            return []
        try:
            return [
                TemplateShortcut.from_dict(item) for item in read_json_list(self.path)
            ]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load shortcuts from %s: %s", self.path, e)
            return []

    def save_shortcuts(self, shortcuts: list[TemplateShortcut]) -> None:
        try:
            write_json_atomic(self.path, [s.to_dict() for s in shortcuts])
            logger.info("Saved %d shortcuts", len(shortcuts))
        except OSError as e:
            logger.error("Failed to save shortcuts: %s", e)

    def remove_shortcuts_for_templates(self, template_ids: Iterable[str]) -> int:
        """Remove shortcuts bound to any of the given templates.

        Returns:
            Number of shortcuts removed.
        """
        ids = set(template_ids)
        if not ids:
            return 0
        shortcuts = self.load_shortcuts()
        kept = [s for s in shortcuts if s.template_id not in ids]
        removed = len(shortcuts) - len(kept)
        if removed:
            self.save_shortcuts(kept)
            logger.info("Cascade deleted %d shortcuts for deleted templates", removed)
        return removed

    def shortcut_for_template(self, template_id: str) -> TemplateShortcut | None:
        return next(
            (s for s in self.load_shortcuts() if s.template_id == template_id), None
        )

    def set_shortcut(self, shortcut: TemplateShortcut) -> None:
        """Add a shortcut, replacing any existing one for the same template."""
        shortcuts = [
            s for s in self.load_shortcuts() if s.template_id != shortcut.template_id
        ]
        shortcuts.append(shortcut)
        self.save_shortcuts(shortcuts)

    def remove_shortcut(self, shortcut_id: str) -> bool:
        """Remove one shortcut by id. Returns True if it existed."""
        shortcuts = self.load_shortcuts()
        kept = [s for s in shortcuts if s.id != shortcut_id]
        if len(kept) == len(shortcuts):
            return False
        self.save_shortcuts(kept)
        return True
