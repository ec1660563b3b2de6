"""TUI screens for Promptist."""
from __future__ import annotations

from .confirm import ConfirmDeleteModal
from .editor import TemplateEditorModal
from .launcher import LauncherScreen, PromptPreviewPanel
from .settings import SettingsModal
from .variable_input import VariableInputModal

__all__ = [
    "ConfirmDeleteModal",
    "LauncherScreen",
    "PromptPreviewPanel",
    "SettingsModal",
    "TemplateEditorModal",
    "VariableInputModal",
]
