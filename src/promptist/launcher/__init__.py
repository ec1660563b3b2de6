"""View logic for the launcher and the template manager."""

from .filter_state import FilterState, LauncherFilterState, LauncherSettings
from .prompt_list import PromptCreationIntent, PromptListViewModel
from .view_model import LauncherViewModel, launcher_matches

__all__ = [
    "FilterState",
    "LauncherFilterState",
    "LauncherSettings",
    "LauncherViewModel",
    "PromptCreationIntent",
    "PromptListViewModel",
    "launcher_matches",
]
