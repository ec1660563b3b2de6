"""Persistence for templates, collections, categories and shortcuts."""

from .query import (
    filter_by_app,
    fuzzy_match,
    matches_search,
    search_templates,
    sort_templates,
    sort_templates_for_display,
)
from .repository import FileTemplateRepository, default_templates
from .shortcut_store import FileShortcutStore

__all__ = [
    "FileShortcutStore",
    "FileTemplateRepository",
    "default_templates",
    "filter_by_app",
    "fuzzy_match",
    "matches_search",
    "search_templates",
    "sort_templates",
    "sort_templates_for_display",
]
