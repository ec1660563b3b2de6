"""Unit tests for core models: TrackedApp, app targets, templates, shortcuts."""

from datetime import datetime

import pytest

from promptist.models import (
    CustomTarget,
    KeyCombo,
    ModifierKey,
    PromptAppFilter,
    PromptAppTarget,
    PromptCategory,
    PromptTemplate,
    ShortcutScope,
    TemplateShortcut,
    TrackedApp,
    TrackedTarget,
    dedupe_targets,
    default_hierarchy,
    parse_app_target,
    resolve_tracked_app,
)
from promptist.models.category import (
    category_ids_including_children,
    category_path,
    child_categories,
    root_categories,
)


class TestTrackedApp:
    """Tests for bundle identifier resolution."""

    def test_xcode_bundle_resolves(self) -> None:
        assert resolve_tracked_app("com.apple.dt.Xcode") is TrackedApp.XCODE

    def test_unlisted_bundle_has_no_match(self) -> None:
        assert resolve_tracked_app("com.example.unknown") is None

    def test_lookup_is_case_sensitive(self) -> None:
        assert resolve_tracked_app("com.apple.dt.xcode") is None

    def test_empty_bundle(self) -> None:
        assert resolve_tracked_app(None) is None
        assert resolve_tracked_app("") is None

    def test_app_with_several_bundles(self) -> None:
        assert resolve_tracked_app("com.openai.chatgpt.app") is TrackedApp.CHATGPT
        assert resolve_tracked_app("dev.warp.warp") is TrackedApp.WARP

    def test_display_name(self) -> None:
        assert TrackedApp.CHROME.display_name == "Google Chrome"

    def test_from_value(self) -> None:
        assert TrackedApp.from_value("androidStudio") is TrackedApp.ANDROID_STUDIO
        assert TrackedApp.from_value("nope") is None


class TestPromptAppTarget:
    """Tests for tracked and custom targets."""

    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            PromptAppTarget()  # type: ignore[abstract]

    def test_tracked_target_matches_tracked_filter(self) -> None:
        target = TrackedTarget(TrackedApp.CURSOR)
        assert target.matches(PromptAppFilter(tracked_app=TrackedApp.CURSOR))
        assert not target.matches(PromptAppFilter(tracked_app=TrackedApp.XCODE))

    def test_custom_target_matches_bundle_case_insensitively(self) -> None:
        target = CustomTarget(name="Notes", bundle_id="com.apple.Notes")
        assert target.matches(PromptAppFilter(bundle_identifier="COM.APPLE.NOTES"))

    def test_custom_target_matches_display_name(self) -> None:
        target = CustomTarget(name="Notes")
        assert target.matches(PromptAppFilter(display_name="notes"))
        assert not target.matches(PromptAppFilter(display_name="Mail"))

    def test_empty_filter_matches_nothing(self) -> None:
        assert PromptAppFilter().is_empty
        assert not CustomTarget(name="Notes").matches(PromptAppFilter())

    def test_ids(self) -> None:
        assert TrackedTarget(TrackedApp.XCODE).id == "tracked-xcode"
        assert CustomTarget("Notes", "com.apple.Notes").id == "custom-com.apple.notes"
        assert CustomTarget("Notes").id == "custom-notes"

    def test_round_trip(self) -> None:
        for target in (
            TrackedTarget(TrackedApp.FIGMA),
            CustomTarget("Notes", "com.apple.Notes"),
            CustomTarget("Bear"),
        ):
            assert PromptAppTarget.from_dict(target.to_dict()) == target

    def test_unknown_tracked_app_is_dropped(self) -> None:
        assert PromptAppTarget.from_dict({"tracked": {"_0": "gone"}}) is None
        assert PromptAppTarget.from_dict({"custom": {}}) is None
        assert PromptAppTarget.from_dict({"other": 1}) is None

    def test_parse_app_target(self) -> None:
        assert parse_app_target("xcode") == TrackedTarget(TrackedApp.XCODE)
        assert parse_app_target("Google Chrome") == TrackedTarget(TrackedApp.CHROME)
        assert parse_app_target("Notes=com.apple.Notes") == CustomTarget(
            "Notes", "com.apple.Notes"
        )
        assert parse_app_target(" Bear ") == CustomTarget("Bear")

    def test_dedupe_targets_keeps_first(self) -> None:
        targets = [
            TrackedTarget(TrackedApp.XCODE),
            CustomTarget("Notes"),
            TrackedTarget(TrackedApp.XCODE),
            CustomTarget("notes"),
        ]
        assert dedupe_targets(targets) == [
            TrackedTarget(TrackedApp.XCODE),
            CustomTarget("Notes"),
        ]


class TestPromptTemplate:
    """Tests for PromptTemplate serialization."""

    def test_to_dict_and_back(self) -> None:
        template = PromptTemplate(
            title="Review",
            content="Review {{selection}}",
            tags=["code"],
            linked_apps=[TrackedTarget(TrackedApp.XCODE)],
            sort_order=4,
            usage_count=2,
            last_used_at=datetime(2025, 1, 2, 3, 4).astimezone(),
            collection_id="C1",
            category_id="K1",
        )
        restored = PromptTemplate.from_dict(template.to_dict())
        assert restored == template

    def test_optional_keys_omitted(self) -> None:
        data = PromptTemplate(title="T", content="C").to_dict()
        assert "lastUsedAt" not in data
        assert "collectionId" not in data
        assert "categoryId" not in data

    def test_legacy_keys(self) -> None:
        template = PromptTemplate.from_dict(
            {
                "id": "A",
                "title": "Old",
                "content": "Body",
                "keywords": ["k1", "k2"],
                "linkedTrackedApps": ["xcode", "removedApp", "cursor"],
                "groupId": "G1",
            }
        )
        assert template.tags == ["k1", "k2"]
        assert template.linked_apps == [
            TrackedTarget(TrackedApp.XCODE),
            TrackedTarget(TrackedApp.CURSOR),
        ]
        assert template.collection_id == "G1"
        assert template.sort_order == 0
        assert template.usage_count == 0
        assert template.last_used_at is None

    def test_bad_values_fall_back(self) -> None:
        template = PromptTemplate.from_dict(
            {
                "id": "A",
                "title": "T",
                "content": "C",
                "sortOrder": "x",
                "lastUsedAt": "not a date",
            }
        )
        assert template.sort_order == 0
        assert template.last_used_at is None

    def test_naive_timestamp_becomes_aware(self) -> None:
        template = PromptTemplate.from_dict(
            {"id": "A", "title": "T", "content": "C", "lastUsedAt": "2025-01-02T03:04"}
        )
        assert template.last_used_at is not None
        assert template.last_used_at.tzinfo is not None

    def test_is_linked_to(self) -> None:
        template = PromptTemplate(
            title="T", content="C", linked_apps=[CustomTarget("Notes")]
        )
        assert template.is_linked_to(PromptAppFilter(display_name="Notes"))
        assert not template.is_linked_to(PromptAppFilter(display_name="Mail"))

    def test_new_ids_are_unique_uppercase(self) -> None:
        first = PromptTemplate(title="A", content="")
        second = PromptTemplate(title="B", content="")
        assert first.id != second.id
        assert first.id == first.id.upper()


class TestPromptCategory:
    """Tests for the category tree helpers."""

    def test_default_hierarchy(self) -> None:
        categories, general_qa_id = default_hierarchy()
        roots = root_categories(categories)
        assert [c.name for c in roots][0] == "Coding"
        assert len(roots) == 6
        general_qa = next(c for c in categories if c.id == general_qa_id)
        assert general_qa.name == "General Q&A"
        assert general_qa.parent_id is not None

    def test_children_and_path(self) -> None:
        major = PromptCategory(name="Coding")
        second = PromptCategory(name="Testing", parent_id=major.id, sort_order=1)
        first = PromptCategory(name="Debugging", parent_id=major.id, sort_order=0)
        categories = [major, second, first]

        assert child_categories(categories, major.id) == [first, second]
        assert category_path(categories, first.id) == "Coding > Debugging"
        assert category_path(categories, major.id) == "Coding"
        assert category_path(categories, "missing") == ""
        assert category_ids_including_children(categories, major.id) == {
            major.id,
            first.id,
            second.id,
        }

    def test_round_trip(self) -> None:
        category = PromptCategory(name="Email", parent_id="P", sort_order=3)
        assert PromptCategory.from_dict(category.to_dict()) == category


class TestShortcutModel:
    """Tests for key combos, scopes and shortcuts."""

    def test_modifier_display_order(self) -> None:
        modifiers = ModifierKey.COMMAND | ModifierKey.SHIFT | ModifierKey.CONTROL
        assert modifiers.display_string == "⌃⇧⌘"

    def test_parse_combo(self) -> None:
        combo = KeyCombo.parse("cmd+shift+p")
        assert combo.modifiers == ModifierKey.COMMAND | ModifierKey.SHIFT
        assert combo.key == "p"
        assert combo.display_string == "⇧⌘P"

    def test_parse_rejects_unknown_modifier(self) -> None:
        with pytest.raises(ValueError):
            KeyCombo.parse("hyper+p")
        with pytest.raises(ValueError):
            KeyCombo.parse("cmd+")

    @pytest.mark.parametrize(
        ("text", "key"),
        [
            ("cmd+space", " "),
            ("cmd+ ", " "),
            ("ctrl+Up", "↑"),
            ("ctrl+right", "→"),
            ("cmd+opt+esc", "⎋"),
            ("ctrl+cmd+eject", "⏏"),
        ],
    )
    def test_parse_named_keys(self, text: str, key: str) -> None:
        assert KeyCombo.parse(text).key == key

    def test_conflicts_ignores_key_case(self) -> None:
        assert KeyCombo(ModifierKey.COMMAND, "P").conflicts(
            KeyCombo(ModifierKey.COMMAND, "p")
        )
        assert not KeyCombo(ModifierKey.COMMAND, "p").conflicts(
            KeyCombo(ModifierKey.OPTION, "p")
        )

    def test_scope_overlap(self) -> None:
        global_scope = ShortcutScope()
        xcode = ShortcutScope(TrackedTarget(TrackedApp.XCODE))
        assert global_scope.is_global
        assert not xcode.is_global
        cursor = ShortcutScope(TrackedTarget(TrackedApp.CURSOR))
        assert global_scope.overlaps(ShortcutScope())
        assert xcode.overlaps(ShortcutScope(TrackedTarget(TrackedApp.XCODE)))
        assert not xcode.overlaps(cursor)
        assert not global_scope.overlaps(xcode)

    def test_shortcut_round_trip(self) -> None:
        shortcut = TemplateShortcut(
            template_id="T1",
            key_combo=KeyCombo(ModifierKey.CONTROL | ModifierKey.OPTION, "k"),
            scope=ShortcutScope(CustomTarget("Notes", "com.apple.Notes")),
            is_enabled=False,
        )
        assert TemplateShortcut.from_dict(shortcut.to_dict()) == shortcut
