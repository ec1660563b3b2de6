"""List logic for the template manager."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from promptist.config import settings
from promptist.config.settings import MAX_RECENT_SEARCHES
from promptist.launcher.filter_state import FilterState
from promptist.models.app_target import PromptAppFilter, PromptAppTarget
from promptist.models.category import (
    PromptCategory,
    category_ids_including_children,
    category_path,
    child_categories,
    root_categories,
)
from promptist.models.collection import PromptTemplateCollection
from promptist.models.template import PromptTemplate
from promptist.services.app_context import AppContextService
from promptist.store.query import matches_search, sort_templates_for_display
from promptist.store.repository import FileTemplateRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PromptCreationIntent:
    """Defaults for a template about to be created."""

    preset_apps: list[PromptAppTarget] = field(default_factory=list)
    category_id: str | None = None


class PromptListViewModel:
    """Templates, collections and categories for the manager view.

    Filters apply in order: app, category (including subcategories),
    collection, then search. Results are sorted by sort order, then
    case-insensitive title.
    """

    def __init__(
        self,
        repository: FileTemplateRepository,
        app_context: AppContextService | None = None,
    ) -> None:
        self.repository = repository
        self.app_context = app_context
        self.filters = FilterState()
        self.all_templates: list[PromptTemplate] = []
        self.all_collections: list[PromptTemplateCollection] = []
        self.all_categories: list[PromptCategory] = []
        self.recent_searches: list[str] = settings.recent_searches
        self.reload()

    def reload(self) -> None:
        self.all_templates = self.repository.load_templates()
        self.all_collections = self.repository.load_collections()
        self.all_categories = self.repository.load_categories()

    # --- Filtering ---

    @property
    def detected_app_filter(self) -> PromptAppFilter | None:
        """The frontmost app when auto-detecting, else the manual selection."""
        if not self.filters.auto_detected_app:
            return self.filters.selected_app
        if self.app_context is None:
            return None
        return self.app_context.app_filter

    @property
    def filtered_templates(self) -> list[PromptTemplate]:
        templates = self.all_templates

        app_filter = self.detected_app_filter
        if app_filter is not None:
            # Unlinked templates apply to every app
            templates = [
                t for t in templates if not t.linked_apps or t.is_linked_to(app_filter)
            ]

        category_id = self.filters.selected_category_id
        if category_id is not None:
            ids = category_ids_including_children(self.all_categories, category_id)
            templates = [t for t in templates if t.category_id in ids]

        collection_id = self.filters.selected_collection_id
        if collection_id is not None:
            templates = [t for t in templates if t.collection_id == collection_id]

        term = self.filters.search_text
        templates = [t for t in templates if matches_search(t, term)]
        return sort_templates_for_display(templates)

    @property
    def linked_templates_for_current_app(self) -> list[PromptTemplate]:
        app_filter = self.detected_app_filter
        if app_filter is None:
            return []
        return [t for t in self.filtered_templates if t.is_linked_to(app_filter)]

    @property
    def general_templates(self) -> list[PromptTemplate]:
        app_filter = self.detected_app_filter
        if app_filter is None:
            return self.filtered_templates
        return [t for t in self.filtered_templates if not t.is_linked_to(app_filter)]

    def select_app(self, app_filter: PromptAppFilter | None) -> None:
        """Pick an app manually; None returns to auto-detection."""
        self.filters.selected_app = app_filter
        self.filters.auto_detected_app = app_filter is None

    def toggle_auto_detect_app(self) -> None:
        self.filters.auto_detected_app = not self.filters.auto_detected_app
        if self.filters.auto_detected_app:
            self.filters.selected_app = None

    def select_category(self, category_id: str | None) -> None:
        self.filters.selected_category_id = category_id

    def select_collection(self, collection_id: str | None) -> None:
        self.filters.selected_collection_id = collection_id

    def reset_filters(self) -> None:
        self.filters.reset()

    def templates_for_management(self, search_text: str) -> list[PromptTemplate]:
        """All templates matching title or tags, ignoring the app filter."""
        term = search_text.strip().lower()
        if not term:
            return sort_templates_for_display(self.all_templates)
        return sort_templates_for_display(
            t
            for t in self.all_templates
            if term in t.title.lower() or any(term in tag.lower() for tag in t.tags)
        )

    # --- Categories ---

    @property
    def root_categories(self) -> list[PromptCategory]:
        return root_categories(self.all_categories)

    def child_categories(self, parent_id: str) -> list[PromptCategory]:
        return child_categories(self.all_categories, parent_id)

    def category(self, category_id: str) -> PromptCategory | None:
        return next((c for c in self.all_categories if c.id == category_id), None)

    def category_path(self, category_id: str) -> str:
        return category_path(self.all_categories, category_id)

    def template_count_for_category(self, category_id: str) -> int:
        ids = category_ids_including_children(self.all_categories, category_id)
        return sum(1 for t in self.all_templates if t.category_id in ids)

    def template_count_for_collection(self, collection_id: str) -> int:
        return sum(1 for t in self.all_templates if t.collection_id == collection_id)

    # --- Mutations ---

    @property
    def next_sort_order(self) -> int:
        return max((t.sort_order for t in self.all_templates), default=0) + 1

    def creation_intent(self) -> PromptCreationIntent:
        """Preset the current app and selected category for a new template."""
        target = self.app_context.current_target if self.app_context else None
        return PromptCreationIntent(
            preset_apps=[target] if target is not None else [],
            category_id=self.filters.selected_category_id,
        )

    def save_new_or_updated(self, template: PromptTemplate) -> None:
        """Insert or replace a template and persist the whole list."""
        for index, existing in enumerate(self.all_templates):
            if existing.id == template.id:
                self.all_templates[index] = template
                break
        else:
            self.all_templates.append(template)
        self.repository.save_templates(self.all_templates)

    def delete_template(self, template_id: str) -> None:
        self.repository.delete_template(template_id)
        self.all_templates = self.repository.load_templates()

    def reorder_templates(self, template_ids: list[str]) -> None:
        self.repository.reorder_templates(template_ids)
        self.all_templates = self.repository.load_templates()

    def add_collection(self, collection: PromptTemplateCollection) -> None:
        self.repository.add_collection(collection)
        self.all_collections = self.repository.load_collections()

    def delete_collection(self, collection_id: str) -> None:
        self.repository.delete_collection(collection_id)
        self.all_collections = self.repository.load_collections()
        self.all_templates = self.repository.load_templates()

    def move_template_to_collection(
        self, template_id: str, collection_id: str | None
    ) -> None:
        self.repository.move_template_to_collection(template_id, collection_id)
        self.all_templates = self.repository.load_templates()

    def add_category(self, category: PromptCategory) -> None:
        self.repository.add_category(category)
        self.all_categories = self.repository.load_categories()

    def delete_category(self, category_id: str) -> None:
        self.repository.delete_category(category_id)
        self.all_categories = self.repository.load_categories()
        self.all_templates = self.repository.load_templates()

    def move_template_to_category(
        self, template_id: str, category_id: str | None
    ) -> None:
        self.repository.move_template_to_category(template_id, category_id)
        self.all_templates = self.repository.load_templates()

    # --- Search history ---

    def record_recent_search(self, term: str) -> None:
        """Remember a search term, newest first, ignoring case duplicates."""
        trimmed = term.strip()
        if not trimmed:
            return
        key = trimmed.casefold()
        updated = [s for s in self.recent_searches if s.casefold() != key]
        updated.insert(0, trimmed)
        self.recent_searches = updated[:MAX_RECENT_SEARCHES]
        settings.recent_searches = self.recent_searches

    def clear_recent_searches(self) -> None:
        self.recent_searches = []
        settings.recent_searches = []
