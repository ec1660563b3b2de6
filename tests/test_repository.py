"""Tests for the file-backed template repository and shortcut store."""

import json
from pathlib import Path

import pytest

from promptist.config import settings
from promptist.errors import CategoryNotFoundError, TemplateNotFoundError
from promptist.models import (
    KeyCombo,
    PromptCategory,
    PromptTemplateCollection,
    TemplateShortcut,
    TrackedApp,
    TrackedTarget,
)
from promptist.store import FileShortcutStore, FileTemplateRepository


def _write(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


class TestSeeding:
    """Tests for first-launch defaults."""

    def test_default_templates_seeded(
        self, repository: FileTemplateRepository
    ) -> None:
        titles = [t.title for t in repository.load_templates()]
        assert titles == ["Summarize", "Polish Korean", "Bug Hunt"]
        assert repository.templates_path.exists()

    def test_default_categories_seeded(
        self, repository: FileTemplateRepository
    ) -> None:
        categories = repository.load_categories()
        assert any(c.name == "Coding" and c.is_root for c in categories)
        assert repository.general_qa_category_id() is not None

    def test_defaults_assigned_to_general_qa(
        self, repository: FileTemplateRepository
    ) -> None:
        general_qa_id = repository.general_qa_category_id()
        assert all(
            t.category_id == general_qa_id for t in repository.load_templates()
        )
        assert settings.is_v2_migrated(repository.data_dir)

    def test_empty_file_reseeds(self, data_dir: Path) -> None:
        _write(data_dir / "templates.json", [])
        repository = FileTemplateRepository(data_dir)
        assert len(repository.load_templates()) == 3

    def test_corrupt_file_degrades_to_defaults(self, data_dir: Path) -> None:
        data_dir.mkdir(parents=True)
        (data_dir / "templates.json").write_text("{not json", encoding="utf-8")
        repository = FileTemplateRepository(data_dir)
        assert [t.title for t in repository.load_templates()][0] == "Summarize"


class TestTemplates:
    """Tests for template CRUD and ordering."""

    def test_create_appends_with_next_sort_order(
        self, repository: FileTemplateRepository
    ) -> None:
        template = repository.create_template(
            "Translate",
            "Translate {{selection}}",
            tags=["lang"],
            linked_apps=[
                TrackedTarget(TrackedApp.XCODE),
                TrackedTarget(TrackedApp.XCODE),
            ],
        )
        assert template.sort_order == 4
        assert template.linked_apps == [TrackedTarget(TrackedApp.XCODE)]
        assert template.category_id == repository.general_qa_category_id()
        assert repository.get_template(template.id).title == "Translate"

    def test_persists_across_instances(
        self, repository: FileTemplateRepository, data_dir: Path
    ) -> None:
        created = repository.create_template("Keep", "me")
        reloaded = FileTemplateRepository(data_dir)
        assert reloaded.get_template(created.id) == created

    def test_update(self, repository: FileTemplateRepository) -> None:
        template = repository.load_templates()[0]
        template.title = "Summarize briefly"
        repository.update_template(template)
        assert repository.get_template(template.id).title == "Summarize briefly"

    def test_update_unknown_raises(self, repository: FileTemplateRepository) -> None:
        template = repository.load_templates()[0]
        template.id = "MISSING"
        with pytest.raises(TemplateNotFoundError):
            repository.update_template(template)

    def test_get_unknown_raises(self, repository: FileTemplateRepository) -> None:
        with pytest.raises(TemplateNotFoundError):
            repository.get_template("MISSING")

    def test_reorder_survives_reload(
        self, repository: FileTemplateRepository, data_dir: Path
    ) -> None:
        ids = [t.id for t in repository.load_templates()]
        repository.reorder_templates(list(reversed(ids)))

        reloaded = FileTemplateRepository(data_dir)
        by_order = sorted(reloaded.load_templates(), key=lambda t: t.sort_order)
        assert [t.id for t in by_order] == list(reversed(ids))

    def test_increment_usage(self, repository: FileTemplateRepository) -> None:
        template = repository.load_templates()[0]
        updated = repository.increment_usage_count(template.id)
        assert updated is not None
        assert updated.usage_count == 1
        assert updated.last_used_at is not None
        assert repository.get_template(template.id).usage_count == 1

    def test_increment_usage_unknown(
        self, repository: FileTemplateRepository
    ) -> None:
        assert repository.increment_usage_count("MISSING") is None


class TestDeleteCascade:
    """Deleting templates removes their shortcuts."""

    def test_delete_removes_shortcuts(
        self, repository: FileTemplateRepository
    ) -> None:
        doomed, kept = repository.load_templates()[:2]
        store = repository.shortcut_store
        store.set_shortcut(TemplateShortcut(doomed.id, KeyCombo.parse("cmd+shift+d")))
        store.set_shortcut(TemplateShortcut(kept.id, KeyCombo.parse("cmd+shift+k")))

        assert repository.delete_template(doomed.id) is True

        assert [s.template_id for s in store.load_shortcuts()] == [kept.id]
        with pytest.raises(TemplateNotFoundError):
            repository.get_template(doomed.id)

    def test_delete_many(self, repository: FileTemplateRepository) -> None:
        ids = [t.id for t in repository.load_templates()[:2]]
        assert repository.delete_templates(ids + ["MISSING"]) == 2
        assert len(repository.load_templates()) == 1

    def test_delete_unknown(self, repository: FileTemplateRepository) -> None:
        assert repository.delete_template("MISSING") is False
        assert repository.delete_templates([]) == 0


class TestCollections:
    """Tests for collections and the legacy groups file."""

    def test_add_and_delete_unassigns_templates(
        self, repository: FileTemplateRepository
    ) -> None:
        collection = PromptTemplateCollection(name="Work")
        repository.add_collection(collection)
        template = repository.load_templates()[0]
        repository.move_template_to_collection(template.id, collection.id)
        assert repository.get_template(template.id).collection_id == collection.id

        repository.delete_collection(collection.id)

        assert repository.load_collections() == []
        assert repository.get_template(template.id).collection_id is None

    def test_reorder_collections(self, repository: FileTemplateRepository) -> None:
        first = PromptTemplateCollection(name="A", sort_order=0)
        second = PromptTemplateCollection(name="B", sort_order=1)
        repository.save_collections([first, second])
        repository.reorder_collections([second.id, first.id])
        orders = {c.name: c.sort_order for c in repository.load_collections()}
        assert orders == {"A": 1, "B": 0}

    def test_groups_file_migrated(self, data_dir: Path) -> None:
        _write(data_dir / "groups.json", [{"id": "G1", "name": "Legacy"}])
        repository = FileTemplateRepository(data_dir)
        assert [c.name for c in repository.load_collections()] == ["Legacy"]

    def test_existing_collections_not_overwritten(self, data_dir: Path) -> None:
        _write(data_dir / "groups.json", [{"id": "G1", "name": "Legacy"}])
        _write(data_dir / "collections.json", [{"id": "C1", "name": "Current"}])
        repository = FileTemplateRepository(data_dir)
        assert [c.name for c in repository.load_collections()] == ["Current"]


class TestCategories:
    """Tests for category deletion and moves."""

    def test_delete_falls_back_to_general_qa(
        self, repository: FileTemplateRepository
    ) -> None:
        categories = repository.load_categories()
        coding = next(c for c in categories if c.name == "Coding")
        review = next(c for c in categories if c.name == "Code Review")
        template = repository.load_templates()[0]
        repository.move_template_to_category(template.id, review.id)

        repository.delete_category(coding.id)

        remaining = {c.id for c in repository.load_categories()}
        assert coding.id not in remaining
        assert review.id not in remaining
        assert (
            repository.get_template(template.id).category_id
            == repository.general_qa_category_id()
        )

    def test_deleting_general_qa_uncategorizes(
        self, repository: FileTemplateRepository
    ) -> None:
        general_qa_id = repository.general_qa_category_id()
        assert general_qa_id is not None
        repository.delete_category(general_qa_id)
        assert all(t.category_id is None for t in repository.load_templates())

    def test_move_to_unknown_category_raises(
        self, repository: FileTemplateRepository
    ) -> None:
        template = repository.load_templates()[0]
        with pytest.raises(CategoryNotFoundError):
            repository.move_template_to_category(template.id, "MISSING")

    def test_update_unknown_category_raises(
        self, repository: FileTemplateRepository
    ) -> None:
        with pytest.raises(CategoryNotFoundError):
            repository.update_category(PromptCategory(name="Ghost"))


class TestMigration:
    """Tests for the one-time category migration."""

    def test_uncategorized_templates_assigned(self, data_dir: Path) -> None:
        _write(
            data_dir / "templates.json",
            [{"id": "T1", "title": "Old", "content": "Body", "keywords": ["x"]}],
        )
        repository = FileTemplateRepository(data_dir)
        template = repository.get_template("T1")
        assert template.category_id == repository.general_qa_category_id()
        assert template.tags == ["x"]

    def test_runs_once(self, data_dir: Path) -> None:
        settings.mark_v2_migrated(data_dir)
        _write(
            data_dir / "templates.json", [{"id": "T1", "title": "A", "content": "B"}]
        )
        repository = FileTemplateRepository(data_dir)
        assert repository.get_template("T1").category_id is None

    def test_each_data_directory_migrates(self, tmp_path: Path) -> None:
        record = [{"id": "T1", "title": "A", "content": "B"}]
        first_dir = tmp_path / "first"
        second_dir = tmp_path / "second"
        _write(first_dir / "templates.json", record)
        _write(second_dir / "templates.json", record)

        first = FileTemplateRepository(first_dir)
        second = FileTemplateRepository(second_dir)

        assert first.get_template("T1").category_id is not None
        assert (
            second.get_template("T1").category_id
            == second.general_qa_category_id()
        )
        assert settings.is_v2_migrated(second_dir)

    def test_legacy_flag_covers_configured_directory(
        self, data_dir: Path, tmp_path: Path
    ) -> None:
        settings.set("v2_migration_complete", True)
        record = [{"id": "T1", "title": "A", "content": "B"}]
        other_dir = tmp_path / "other"
        _write(data_dir / "templates.json", record)
        _write(other_dir / "templates.json", record)

        assert FileTemplateRepository(data_dir).get_template("T1").category_id is None
        assert FileTemplateRepository(other_dir).get_template("T1").category_id


class TestShortcutStore:
    """Tests for FileShortcutStore."""

    def test_set_replaces_existing_for_template(self, data_dir: Path) -> None:
        store = FileShortcutStore(data_dir)
        store.set_shortcut(TemplateShortcut("T1", KeyCombo.parse("cmd+shift+a")))
        store.set_shortcut(TemplateShortcut("T1", KeyCombo.parse("cmd+shift+b")))
        shortcuts = store.load_shortcuts()
        assert len(shortcuts) == 1
        assert shortcuts[0].key_combo.key == "b"

    def test_remove_shortcut(self, data_dir: Path) -> None:
        store = FileShortcutStore(data_dir)
        shortcut = TemplateShortcut("T1", KeyCombo.parse("cmd+shift+a"))
        store.set_shortcut(shortcut)
        assert store.remove_shortcut(shortcut.id) is True
        assert store.remove_shortcut(shortcut.id) is False
        assert store.shortcut_for_template("T1") is None

    def test_corrupt_file_yields_nothing(self, data_dir: Path) -> None:
        _write(data_dir / "shortcuts.json", {"not": "a list"})
        assert FileShortcutStore(data_dir).load_shortcuts() == []


class TestOrderingOperations:
    """Tests for sort-order and update operations."""

    def test_update_template_sort_order(
        self, repository: FileTemplateRepository
    ) -> None:
        template = repository.load_templates()[0]
        repository.update_template_sort_order(template.id, 42)
        assert repository.get_template(template.id).sort_order == 42

    def test_update_collection(self, repository: FileTemplateRepository) -> None:
        collection = PromptTemplateCollection(name="Draft")
        repository.add_collection(collection)
        collection.name = "Final"
        repository.update_collection(collection)
        assert [c.name for c in repository.load_collections()] == ["Final"]

    def test_add_update_and_reorder_categories(
        self, repository: FileTemplateRepository
    ) -> None:
        category = PromptCategory(name="Personal", sort_order=99)
        repository.add_category(category)
        category.name = "Home"
        repository.update_category(category)

        roots = [c for c in repository.load_categories() if c.is_root]
        repository.reorder_categories([category.id] + [c.id for c in roots[:-1]])

        by_id = {c.id: c for c in repository.load_categories()}
        assert by_id[category.id].name == "Home"
        assert by_id[category.id].sort_order == 0
