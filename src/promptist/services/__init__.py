"""Application services: app context, clipboard, execution and shortcuts."""

from .app_context import (
    AppContextService,
    EnvironmentProbe,
    FrontmostApp,
    MacOSFrontmostProbe,
    StaticProbe,
)
from .clipboard import Clipboard, ClipboardHistory
from .execution import DirectCopy, NeedsInput, ParsedExecution, PromptExecutionService
from .shortcuts import (
    ShortcutConflict,
    ShortcutValidationError,
    ShortcutValidator,
    detect_conflicts,
)

__all__ = [
    "AppContextService",
    "Clipboard",
    "ClipboardHistory",
    "DirectCopy",
    "EnvironmentProbe",
    "FrontmostApp",
    "MacOSFrontmostProbe",
    "NeedsInput",
    "ParsedExecution",
    "PromptExecutionService",
    "ShortcutConflict",
    "ShortcutValidationError",
    "ShortcutValidator",
    "StaticProbe",
    "detect_conflicts",
]
