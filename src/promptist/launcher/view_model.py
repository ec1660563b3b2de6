"""State and list logic behind the keyboard-driven launcher."""

from __future__ import annotations

import logging

from promptist.config import settings
from promptist.launcher.filter_state import LauncherFilterState, LauncherSettings
from promptist.models.collection import PromptTemplateCollection
from promptist.models.shortcut import TemplateShortcut
from promptist.models.template import PromptTemplate
from promptist.services.app_context import AppContextService
from promptist.store.query import filter_by_app, fuzzy_match
from promptist.store.repository import FileTemplateRepository

logger = logging.getLogger(__name__)

FREQUENT_MIN_USAGE = 3
FREQUENT_LIMIT = 5


def launcher_matches(template: PromptTemplate, query: str) -> bool:
    """Title substring, fuzzy title, tag substring, then content substring."""
    query = query.lower()
    title = template.title.lower()
    return (
        query in title
        or fuzzy_match(query, title)
        or any(query in tag.lower() for tag in template.tags)
        or query in template.content.lower()
    )


class LauncherViewModel:
    """Filters, sections and selection for the launcher list.

    The base set is the current app's linked prompts when there are any and
    "show all" is off, otherwise every prompt. A selected collection narrows
    it, then the search text. Without a search, recently and frequently used
    prompts are shown as sections above the main list.
    """

    def __init__(
        self,
        repository: FileTemplateRepository,
        app_context: AppContextService,
        launcher_settings: LauncherSettings | None = None,
    ) -> None:
        self.repository = repository
        self.app_context = app_context
        self.launcher_settings = launcher_settings or LauncherSettings.from_settings(
            settings
        )
        self.filters = LauncherFilterState()
        self.selected_index = 0
        self.showing_all_prompts = False
        self.all_prompts: list[PromptTemplate] = []
        self.all_collections: list[PromptTemplateCollection] = []
        self.shortcuts: dict[str, TemplateShortcut] = {}
        self.load()

    # --- Loading ---

    def load(self) -> None:
        prompts = self.repository.load_templates()
        self.all_prompts = sorted(prompts, key=lambda p: p.usage_count, reverse=True)
        self.all_collections = sorted(
            self.repository.load_collections(), key=lambda c: c.sort_order
        )
        self.shortcuts = {
            s.template_id: s for s in self.repository.shortcut_store.load_shortcuts()
        }

    def refresh(self) -> None:
        """Reload from disk and return to the default view."""
        self.load()
        self.reset_selection()
        self.showing_all_prompts = False
        self.filters.selected_collection_id = None

    # --- Filtering ---

    @property
    def search_text(self) -> str:
        return self.filters.search_text

    @search_text.setter
    def search_text(self, value: str) -> None:
        if value != self.filters.search_text:
            self.filters.search_text = value
            self.reset_selection()

    @property
    def is_searching(self) -> bool:
        return bool(self.filters.search_text.strip())

    @property
    def app_specific_prompts(self) -> list[PromptTemplate]:
        app_filter = self.app_context.app_filter
        if app_filter is None:
            return []
        return filter_by_app(self.all_prompts, app_filter)

    @property
    def has_app_specific_prompts(self) -> bool:
        return bool(self.app_specific_prompts)

    @property
    def filtered_prompts(self) -> list[PromptTemplate]:
        if self.showing_all_prompts or not self.has_app_specific_prompts:
            prompts = list(self.all_prompts)
        else:
            prompts = self.app_specific_prompts

        collection_id = self.filters.selected_collection_id
        if collection_id is not None:
            prompts = [p for p in prompts if p.collection_id == collection_id]

        query = self.filters.search_text.strip()
        if not query:
            return prompts
        return [p for p in prompts if launcher_matches(p, query)]

    @property
    def collections_with_prompts(self) -> list[PromptTemplateCollection]:
        used = {p.collection_id for p in self.all_prompts}
        return [c for c in self.all_collections if c.id in used]

    # --- Sections ---

    @property
    def recent_prompts(self) -> list[PromptTemplate]:
        if self.is_searching or not self.launcher_settings.show_recent_section:
            return []
        used = [p for p in self.all_prompts if p.last_used_at is not None]
        used.sort(key=lambda p: p.last_used_at, reverse=True)
        return used[: self.launcher_settings.recent_section_count]

    @property
    def frequent_prompts(self) -> list[PromptTemplate]:
        if self.is_searching or not self.launcher_settings.show_frequent_section:
            return []
        recent_ids = {p.id for p in self.recent_prompts}
        frequent = [
            p
            for p in self.all_prompts
            if p.usage_count >= FREQUENT_MIN_USAGE and p.id not in recent_ids
        ]
        frequent.sort(key=lambda p: p.usage_count, reverse=True)
        return frequent[:FREQUENT_LIMIT]

    @property
    def main_prompts(self) -> list[PromptTemplate]:
        prompts = self.filtered_prompts
        if not self.is_searching:
            section_ids = {p.id for p in self.recent_prompts + self.frequent_prompts}
            prompts = [p for p in prompts if p.id not in section_ids]

        if self.launcher_settings.auto_sort_by_usage:
            return sorted(prompts, key=lambda p: p.usage_count, reverse=True)
        return sorted(prompts, key=lambda p: p.sort_order)

    @property
    def displayable_prompts(self) -> list[PromptTemplate]:
        """Every visible prompt in display order; keyboard navigation walks this."""
        if self.is_searching:
            return self.main_prompts
        return self.recent_prompts + self.frequent_prompts + self.main_prompts

    # --- Selection ---

    @property
    def selected_prompt(self) -> PromptTemplate | None:
        prompts = self.displayable_prompts
        if 0 <= self.selected_index < len(prompts):
            return prompts[self.selected_index]
        return None

    def move_selection_up(self) -> None:
        if self.displayable_prompts:
            self.selected_index = max(0, self.selected_index - 1)

    def move_selection_down(self) -> None:
        count = len(self.displayable_prompts)
        if count:
            self.selected_index = min(count - 1, self.selected_index + 1)

    def select_index(self, index: int) -> None:
        if 0 <= index < len(self.displayable_prompts):
            self.selected_index = index

    def reset_selection(self) -> None:
        self.selected_index = 0

    def toggle_show_all(self) -> None:
        self.showing_all_prompts = not self.showing_all_prompts
        self.reset_selection()

    # --- Collections ---

    @property
    def current_collection(self) -> PromptTemplateCollection | None:
        collection_id = self.filters.selected_collection_id
        return next((c for c in self.all_collections if c.id == collection_id), None)

    def enter_collection(self, collection_id: str) -> None:
        self.filters.selected_collection_id = collection_id
        self.reset_selection()

    def exit_collection(self) -> None:
        self.filters.selected_collection_id = None
        self.reset_selection()

    # --- Usage ---

    def shortcut_for(self, template_id: str) -> TemplateShortcut | None:
        return self.shortcuts.get(template_id)

    def record_usage(self, template_id: str) -> None:
        self.repository.increment_usage_count(template_id)
        self.load()
