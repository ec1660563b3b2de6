"""Validation and conflict detection for template shortcuts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from promptist.errors import PromptistError
from promptist.models.shortcut import KeyCombo, ModifierKey, TemplateShortcut

CMD = ModifierKey.COMMAND
OPT = ModifierKey.OPTION
CTRL = ModifierKey.CONTROL
SHIFT = ModifierKey.SHIFT


class ShortcutValidationError(PromptistError):
    """Base class for shortcuts that cannot be registered."""

    pass


class NoModifiersError(ShortcutValidationError):
    pass


class SystemReservedError(ShortcutValidationError):
    pass


class TooSimpleError(ShortcutValidationError):
    pass


class InvalidKeyError(ShortcutValidationError):
    pass


# Reserved by the OS; these can never be bound
SYSTEM_RESERVED: frozenset[KeyCombo] = frozenset(
    {
        KeyCombo(CMD, " "),  # Spotlight
        KeyCombo(CTRL, " "),  # input source
        KeyCombo(CTRL, "↑"),
        KeyCombo(CTRL, "↓"),
        KeyCombo(CTRL, "←"),
        KeyCombo(CTRL, "→"),
        KeyCombo(CMD | SHIFT, "3"),
        KeyCombo(CMD | SHIFT, "4"),
        KeyCombo(CMD | SHIFT, "5"),
        KeyCombo(CMD | OPT, "⎋"),  # Force Quit
        KeyCombo(CTRL | CMD, "q"),  # Lock Screen
        KeyCombo(CTRL | CMD, "⏏"),
        KeyCombo(CMD | OPT, "f5"),
    }
)

# Standard app shortcuts that would shadow editing and window commands
DISCOURAGED: frozenset[KeyCombo] = frozenset(
    {
        KeyCombo(CMD, key)
        for key in (
            "q", "w", "n", "t", "c", "v", "x", "a", "z",
            "s", "o", "p", ",", "h", "m", "`", "tab",
        )
    }
    | {
        KeyCombo(CMD | SHIFT, "z"),
        KeyCombo(CMD | OPT, "h"),
        KeyCombo(CMD | SHIFT, "tab"),
    }
)

INVALID_KEYS = frozenset(
    {
        "⎋", "\r", "\n", "\t", "⌫", "⌦",
        "esc", "escape", "return", "enter", "tab", "delete", "backspace",
    }
)


def _listed(combo: KeyCombo, combos: frozenset[KeyCombo]) -> bool:
    return any(combo.conflicts(candidate) for candidate in combos)


class ShortcutValidator:
    """Rejects key combos that cannot or should not trigger templates."""

    def validate(self, combo: KeyCombo) -> None:
        """Check a key combo.

        Raises:
            NoModifiersError: No modifier key is held.
            SystemReservedError: The combo is reserved by the OS or is a
                common application shortcut.
            TooSimpleError: Shift is the only modifier on a single character.
            InvalidKeyError: The key is escape, return, tab or a delete key.
        """
        if combo.modifiers == ModifierKey.NONE:
            raise NoModifiersError(
                "Shortcut must include at least one modifier key (⌘, ⌥, ⌃, or ⇧)"
            )
        if _listed(combo, SYSTEM_RESERVED):
            raise SystemReservedError(
                "This shortcut is reserved by macOS and cannot be used"
            )
        if _listed(combo, DISCOURAGED):
            raise SystemReservedError(
                f"{combo.display_string} is a common system/app shortcut and "
                "will conflict with most applications."
            )
        if combo.modifiers == SHIFT and len(combo.key) == 1:
            raise TooSimpleError(
                "Shift-only shortcuts are not recommended. Add ⌘, ⌥, or ⌃"
            )
        if combo.key.lower() in INVALID_KEYS:
            raise InvalidKeyError("This key cannot be used for shortcuts")

    def explain_issue(self, combo: KeyCombo) -> str | None:
        """Validation message for the combo, or None if it is usable."""
        try:
            self.validate(combo)
        except ShortcutValidationError as e:
            return str(e)
        return None


@dataclass(frozen=True, slots=True)
class ShortcutConflict:
    first: TemplateShortcut
    second: TemplateShortcut
    reason: str


def detect_conflicts(shortcuts: Sequence[TemplateShortcut]) -> list[ShortcutConflict]:
    """Pairs of shortcuts with the same key combo and overlapping scopes.

    A global and an app-scoped shortcut on the same combo are allowed; the
    app-scoped one wins inside that app.
    """
    conflicts: list[ShortcutConflict] = []
    for i, first in enumerate(shortcuts):
        for second in shortcuts[i + 1 :]:
            if not first.key_combo.conflicts(second.key_combo):
                continue
            if first.scope.overlaps(second.scope):
                conflicts.append(
                    ShortcutConflict(first, second, "Same key combination and scope")
                )
    return conflicts
