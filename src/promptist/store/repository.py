"""File-backed repository for templates, collections and categories.

Each entity kind lives in its own JSON array file under the data directory.
Every mutation loads the file, applies the change and rewrites the whole
file atomically. There is a single writer (the TUI or one CLI process), so
no locking is done.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from promptist.config import settings
from promptist.errors import CategoryNotFoundError, TemplateNotFoundError
from promptist.models.app_target import PromptAppTarget, TrackedTarget, dedupe_targets
from promptist.models.category import (
    GENERAL_QA_NAME,
    PromptCategory,
    category_ids_including_children,
    default_hierarchy,
)
from promptist.models.collection import PromptTemplateCollection
from promptist.models.template import PromptTemplate
from promptist.models.tracked_app import TrackedApp
from promptist.store.files import read_json_list, write_json_atomic
from promptist.store.shortcut_store import FileShortcutStore

logger = logging.getLogger(__name__)

TEMPLATES_FILE = "templates.json"
COLLECTIONS_FILE = "collections.json"
CATEGORIES_FILE = "categories.json"
LEGACY_GROUPS_FILE = "groups.json"


def default_templates() -> list[PromptTemplate]:
    """Starter templates written on first launch."""
    return [
        PromptTemplate(
            title="Summarize",
            content="Summarize the selected content in 3 bullet points.",
            tags=["summary", "quick"],
            linked_apps=[TrackedTarget(TrackedApp.CHATGPT)],
            sort_order=1,
        ),
        PromptTemplate(
            title="Polish Korean",
            content="이 문장을 더 명확하고 자연스럽게 다듬어 주세요.",
            tags=["ko", "edit"],
            sort_order=2,
        ),
        PromptTemplate(
            title="Bug Hunt",
            content="Review the code snippet for potential bugs and risky edge cases.",
            tags=["code", "review"],
            linked_apps=[
                TrackedTarget(TrackedApp.CURSOR),
                TrackedTarget(TrackedApp.CONDUCTOR),
            ],
            sort_order=3,
        ),
    ]


def _index_of(items: list, item_id: str) -> int | None:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None


class FileTemplateRepository:
    """Persists templates, collections and categories as JSON files."""

    def __init__(
        self,
        data_dir: Path | None = None,
        shortcut_store: FileShortcutStore | None = None,
    ) -> None:
        self.data_dir = data_dir or settings.data_directory
        self.templates_path = self.data_dir / TEMPLATES_FILE
        self.collections_path = self.data_dir / COLLECTIONS_FILE
        self.categories_path = self.data_dir / CATEGORIES_FILE
        self.shortcut_store = shortcut_store or FileShortcutStore(self.data_dir)

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create data directory %s: %s", self.data_dir, e)

        self._migrate_groups_to_collections()
        self.migrate_to_v2_if_needed()

    # --- Templates ---

    def load_templates(self) -> list[PromptTemplate]:
        """Load all templates, seeding the defaults when there are none.

        A missing, empty or undecodable file is replaced by the default
        templates. Decoding errors are logged, never raised.
        """
        if not self.templates_path.exists():
            return self._seed_default_templates()

        try:
            templates = [
                PromptTemplate.from_dict(item)
                for item in read_json_list(self.templates_path)
            ]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load templates, using defaults: %s", e)
            return self._seed_default_templates()

        logger.debug("Loaded %d templates", len(templates))
        if not templates:
            return self._seed_default_templates()
        return templates

    def save_templates(self, templates: list[PromptTemplate]) -> None:
        try:
            write_json_atomic(self.templates_path, [t.to_dict() for t in templates])
            logger.info("Saved %d templates", len(templates))
        except OSError as e:
            logger.error("Failed to save templates: %s", e)

    def _seed_default_templates(self) -> list[PromptTemplate]:
        templates = default_templates()
        self.save_templates(templates)
        return templates

    def get_template(self, template_id: str) -> PromptTemplate:
        """Look up a template by id.

        Raises:
            TemplateNotFoundError: If no template has this id.
        """
        for template in self.load_templates():
            if template.id == template_id:
                return template
        raise TemplateNotFoundError(template_id)

    def create_template(
        self,
        title: str,
        content: str,
        *,
        tags: Iterable[str] = (),
        linked_apps: Iterable[PromptAppTarget] = (),
        collection_id: str | None = None,
        category_id: str | None = None,
    ) -> PromptTemplate:
        """Create a template at the end of the list and persist it.

        Templates without a category are filed under General Q&A.
        """
        templates = self.load_templates()
        template = PromptTemplate(
            title=title,
            content=content,
            tags=list(tags),
            linked_apps=dedupe_targets(list(linked_apps)),
            sort_order=max((t.sort_order for t in templates), default=0) + 1,
            collection_id=collection_id,
            category_id=category_id or self.general_qa_category_id(),
        )
        templates.append(template)
        self.save_templates(templates)
        logger.info("Created template %s (%s)", template.id, template.title)
        return template

    def update_template(self, template: PromptTemplate) -> PromptTemplate:
        """Replace the stored template with the same id.

        Raises:
            TemplateNotFoundError: If no template has this id.
        """
        templates = self.load_templates()
        index = _index_of(templates, template.id)
        if index is None:
            raise TemplateNotFoundError(template.id)
        template.linked_apps = dedupe_targets(template.linked_apps)
        templates[index] = template
        self.save_templates(templates)
        return template

    def delete_template(self, template_id: str) -> bool:
        return self.delete_templates([template_id]) > 0

    def delete_templates(self, template_ids: Iterable[str]) -> int:
        """Delete templates and any shortcuts bound to them.

        Returns:
            Number of templates removed.
        """
        ids = set(template_ids)
        if not ids:
            return 0

        templates = self.load_templates()
        kept = [t for t in templates if t.id not in ids]
        removed = len(templates) - len(kept)
        if removed:
            self.save_templates(kept)
            self.shortcut_store.remove_shortcuts_for_templates(ids)
            logger.info("Deleted %d templates with cascade shortcut cleanup", removed)
        return removed

    def increment_usage_count(
        self, template_id: str, now: datetime | None = None
    ) -> PromptTemplate | None:
        """Bump the usage count and last-used time of a template."""
        templates = self.load_templates()
        index = _index_of(templates, template_id)
        if index is None:
            logger.warning("Cannot record usage for unknown template %s", template_id)
            return None
        template = templates[index]
        template.usage_count += 1
        template.last_used_at = now or datetime.now().astimezone()
        self.save_templates(templates)
        return template

    def update_template_sort_order(self, template_id: str, sort_order: int) -> None:
        templates = self.load_templates()
        index = _index_of(templates, template_id)
        if index is not None:
            templates[index].sort_order = sort_order
            self.save_templates(templates)

    def reorder_templates(self, template_ids: Iterable[str]) -> None:
        """Set each listed template's sort order to its position.

        Unknown ids are skipped. Templates not listed keep their order.
        """
        templates = self.load_templates()
        by_id = {t.id: t for t in templates}
        for position, template_id in enumerate(template_ids):
            if template_id in by_id:
                by_id[template_id].sort_order = position
        self.save_templates(templates)

    # --- Collections ---

    def _migrate_groups_to_collections(self) -> None:
        legacy = self.data_dir / LEGACY_GROUPS_FILE
        if not legacy.exists() or self.collections_path.exists():
            return
        try:
            shutil.copyfile(legacy, self.collections_path)
            logger.info("Migrated %s to %s", legacy.name, self.collections_path.name)
        except OSError as e:
            logger.error("Failed to migrate legacy groups: %s", e)

    def load_collections(self) -> list[PromptTemplateCollection]:
        if not self.collections_path.exists():
            return []
        try:
            collections = [
                PromptTemplateCollection.from_dict(item)
                for item in read_json_list(self.collections_path)
            ]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load collections: %s", e)
            return []
        logger.debug("Loaded %d collections", len(collections))
        return collections

    def save_collections(self, collections: list[PromptTemplateCollection]) -> None:
        try:
            write_json_atomic(
                self.collections_path, [c.to_dict() for c in collections]
            )
            logger.info("Saved %d collections", len(collections))
        except OSError as e:
            logger.error("Failed to save collections: %s", e)

    def add_collection(self, collection: PromptTemplateCollection) -> None:
        collections = self.load_collections()
        collections.append(collection)
        self.save_collections(collections)

    def update_collection(self, collection: PromptTemplateCollection) -> None:
        collections = self.load_collections()
        index = _index_of(collections, collection.id)
        if index is not None:
            collections[index] = collection
            self.save_collections(collections)

    def delete_collection(self, collection_id: str) -> None:
        """Delete a collection; its templates become unassigned."""
        collections = [c for c in self.load_collections() if c.id != collection_id]
        self.save_collections(collections)

        templates = self.load_templates()
        for template in templates:
            if template.collection_id == collection_id:
                template.collection_id = None
        self.save_templates(templates)

    def move_template_to_collection(
        self, template_id: str, collection_id: str | None
    ) -> None:
        templates = self.load_templates()
        index = _index_of(templates, template_id)
        if index is None:
            raise TemplateNotFoundError(template_id)
        templates[index].collection_id = collection_id
        self.save_templates(templates)

    def reorder_collections(self, collection_ids: Iterable[str]) -> None:
        collections = self.load_collections()
        by_id = {c.id: c for c in collections}
        for position, collection_id in enumerate(collection_ids):
            if collection_id in by_id:
                by_id[collection_id].sort_order = position
        self.save_collections(collections)

    # --- Categories ---

    def load_categories(self) -> list[PromptCategory]:
        """Load categories, seeding the default hierarchy when there are none."""
        if not self.categories_path.exists():
            return self._seed_default_categories()
        try:
            categories = [
                PromptCategory.from_dict(item)
                for item in read_json_list(self.categories_path)
            ]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Failed to load categories: %s", e)
            return self._seed_default_categories()
        logger.debug("Loaded %d categories", len(categories))
        if not categories:
            return self._seed_default_categories()
        return categories

    def save_categories(self, categories: list[PromptCategory]) -> None:
        try:
            write_json_atomic(self.categories_path, [c.to_dict() for c in categories])
            logger.info("Saved %d categories", len(categories))
        except OSError as e:
            logger.error("Failed to save categories: %s", e)

    def _seed_default_categories(self) -> list[PromptCategory]:
        categories, _ = default_hierarchy()
        self.save_categories(categories)
        return categories

    def add_category(self, category: PromptCategory) -> None:
        categories = self.load_categories()
        categories.append(category)
        self.save_categories(categories)

    def update_category(self, category: PromptCategory) -> None:
        categories = self.load_categories()
        index = _index_of(categories, category.id)
        if index is None:
            raise CategoryNotFoundError(category.id)
        categories[index] = category
        self.save_categories(categories)

    def delete_category(self, category_id: str) -> None:
        """Delete a category together with its subcategories.

        Templates filed under any deleted category move to General Q&A, or
        become uncategorized when General Q&A itself was deleted.
        """
        categories = self.load_categories()
        doomed = category_ids_including_children(categories, category_id)
        fallback_id = self._general_qa_id(categories)
        if fallback_id in doomed:
            fallback_id = None

        self.save_categories([c for c in categories if c.id not in doomed])

        templates = self.load_templates()
        modified = False
        for template in templates:
            if template.category_id in doomed:
                template.category_id = fallback_id
                modified = True
        if modified:
            self.save_templates(templates)

    def move_template_to_category(
        self, template_id: str, category_id: str | None
    ) -> None:
        if category_id is not None:
            if _index_of(self.load_categories(), category_id) is None:
                raise CategoryNotFoundError(category_id)
        templates = self.load_templates()
        index = _index_of(templates, template_id)
        if index is None:
            raise TemplateNotFoundError(template_id)
        templates[index].category_id = category_id
        self.save_templates(templates)

    def reorder_categories(self, category_ids: Iterable[str]) -> None:
        categories = self.load_categories()
        by_id = {c.id: c for c in categories}
        for position, category_id in enumerate(category_ids):
            if category_id in by_id:
                by_id[category_id].sort_order = position
        self.save_categories(categories)

    @staticmethod
    def _general_qa_id(categories: list[PromptCategory]) -> str | None:
        for category in categories:
            if category.name == GENERAL_QA_NAME and category.parent_id is not None:
                return category.id
        return None

    def general_qa_category_id(self) -> str | None:
        """Id of the General Q&A subcategory used as the fallback category."""
        return self._general_qa_id(self.load_categories())

    # --- Migration ---

    def migrate_to_v2_if_needed(self) -> None:
        """Assign every uncategorized template to General Q&A, once per data dir.

        The completion flag is only persisted when the category file holds a
        General Q&A category, so a failed save is retried on next launch.
        """
        if settings.is_v2_migrated(self.data_dir):
            return

        general_qa_id = self.general_qa_category_id()
        if general_qa_id is None:
            logger.warning("V2 migration skipped: no General Q&A category")
            return

        templates = self.load_templates()
        modified = False
        for template in templates:
            if template.category_id is None:
                template.category_id = general_qa_id
                modified = True
        if modified:
            self.save_templates(templates)

        settings.mark_v2_migrated(self.data_dir)
        logger.info("V2 migration completed for %s", self.data_dir)
