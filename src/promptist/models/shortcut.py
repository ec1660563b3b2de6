"""Keyboard shortcut model for triggering templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import IntFlag
from typing import Any, Self

from promptist.models.app_target import PromptAppTarget
from promptist.models.template import new_id

# Typed key names and the glyphs combos are stored with
KEY_NAMES = {
    "space": " ",
    "up": "↑",
    "down": "↓",
    "left": "←",
    "right": "→",
    "esc": "⎋",
    "escape": "⎋",
    "eject": "⏏",
}


class ModifierKey(IntFlag):
    """Bitset of modifier keys."""

    NONE = 0
    COMMAND = 1 << 0
    OPTION = 1 << 1
    CONTROL = 1 << 2
    SHIFT = 1 << 3

    @property
    def display_string(self) -> str:
        """Symbols in macOS order: Control, Option, Shift, Command."""
        result = ""
        if self & ModifierKey.CONTROL:
            result += "⌃"
        if self & ModifierKey.OPTION:
            result += "⌥"
        if self & ModifierKey.SHIFT:
            result += "⇧"
        if self & ModifierKey.COMMAND:
            result += "⌘"
        return result

    @classmethod
    def parse(cls, names: str) -> ModifierKey:
        """Parse ``cmd+shift`` style names into a bitset.

        Raises:
            ValueError: If a name is not a known modifier.
        """
        aliases = {
            "cmd": cls.COMMAND,
            "command": cls.COMMAND,
            "opt": cls.OPTION,
            "option": cls.OPTION,
            "alt": cls.OPTION,
            "ctrl": cls.CONTROL,
            "control": cls.CONTROL,
            "shift": cls.SHIFT,
        }
        result = cls.NONE
        for part in names.lower().split("+"):
            part = part.strip()
            if not part:
                continue
            if part not in aliases:
                raise ValueError(f"Unknown modifier: {part}")
            result |= aliases[part]
        return result


@dataclass(frozen=True, slots=True)
class KeyCombo:
    """A modifier bitset plus a key such as ``P``, ``Return`` or ``F1``."""

    modifiers: ModifierKey
    key: str

    @property
    def display_string(self) -> str:
        return f"{self.modifiers.display_string}{self.key.upper()}"

    def conflicts(self, other: KeyCombo) -> bool:
        """Same modifiers and the same key, ignoring key case."""
        return (
            self.modifiers == other.modifiers
            and self.key.lower() == other.key.lower()
        )

    def to_dict(self) -> dict[str, Any]:
        return {"modifiers": int(self.modifiers), "key": self.key}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            modifiers=ModifierKey(int(data.get("modifiers", 0))),
            key=str(data["key"]),
        )

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse ``cmd+shift+p`` into a combo; the last part is the key.

        Named keys such as ``space`` or ``up`` become their glyphs, and a
        literal space after the last ``+`` is the space key.

        Raises:
            ValueError: If the text has no key or an unknown modifier.
        """
        modifier_part, _, key = text.lstrip().rpartition("+")
        if key != " ":
            key = key.strip()
        if not key:
            raise ValueError(f"Missing key in shortcut: {text!r}")
        key = KEY_NAMES.get(key.lower(), key)
        return cls(modifiers=ModifierKey.parse(modifier_part), key=key)


@dataclass(frozen=True, slots=True)
class ShortcutScope:
    """Global scope (``app`` is None) or scoped to one app."""

    app: PromptAppTarget | None = None

    @property
    def is_global(self) -> bool:
        return self.app is None

    @property
    def display_name(self) -> str:
        return "Global" if self.app is None else self.app.display_name

    def overlaps(self, other: ShortcutScope) -> bool:
        """Global overlaps global, app overlaps the same app only.

        Global and app-specific scopes do not hard-conflict.
        """
        if self.app is None and other.app is None:
            return True
        if self.app is not None and other.app is not None:
            return self.app == other.app
        return False

    def to_dict(self) -> dict[str, Any]:
        if self.app is None:
            return {"global": {}}
        return {"app": {"_0": self.app.to_dict()}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        if "app" in data and isinstance(data["app"], dict):
            payload = data["app"].get("_0", data["app"])
            if isinstance(payload, dict):
                target = PromptAppTarget.from_dict(payload)
                if target is not None:
                    return cls(app=target)
        return cls()


@dataclass(slots=True)
class TemplateShortcut:
    """A key combo bound to a template."""

    template_id: str
    key_combo: KeyCombo
    scope: ShortcutScope = field(default_factory=ShortcutScope)
    id: str = field(default_factory=new_id)
    is_enabled: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    modified_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "templateId": self.template_id,
            "keyCombo": self.key_combo.to_dict(),
            "scope": self.scope.to_dict(),
            "isEnabled": self.is_enabled,
            "createdAt": self.created_at.isoformat(),
            "modifiedAt": self.modified_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        now = datetime.now(UTC)
        return cls(
            id=str(data["id"]),
            template_id=str(data["templateId"]),
            key_combo=KeyCombo.from_dict(data["keyCombo"]),
            scope=ShortcutScope.from_dict(data.get("scope", {})),
            is_enabled=bool(data.get("isEnabled", True)),
            created_at=(
                datetime.fromisoformat(data["createdAt"].replace("Z", "+00:00"))
                if data.get("createdAt")
                else now
            ),
            modified_at=(
                datetime.fromisoformat(data["modifiedAt"].replace("Z", "+00:00"))
                if data.get("modifiedAt")
                else now
            ),
        )
