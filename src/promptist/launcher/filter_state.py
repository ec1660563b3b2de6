"""Filter state for the launcher and the template manager."""

from __future__ import annotations

from dataclasses import dataclass

from promptist.config.settings import Settings
from promptist.models.app_target import PromptAppFilter


@dataclass
class FilterState:
    """Manager filters, applied in order: app, category, collection, search.

    When ``auto_detected_app`` is set the frontmost app is used and
    ``selected_app`` is ignored.
    """

    selected_app: PromptAppFilter | None = None
    auto_detected_app: bool = True
    selected_category_id: str | None = None
    selected_collection_id: str | None = None
    search_text: str = ""

    @property
    def has_active_filters(self) -> bool:
        return (
            self.selected_app is not None
            or not self.auto_detected_app
            or self.selected_category_id is not None
            or self.selected_collection_id is not None
            or bool(self.search_text.strip())
        )

    def reset(self) -> None:
        self.selected_app = None
        self.auto_detected_app = True
        self.selected_category_id = None
        self.selected_collection_id = None
        self.search_text = ""

    def clear_search(self) -> None:
        self.search_text = ""


@dataclass
class LauncherFilterState:
    """Launcher filters: the current app (implicit), a collection and search."""

    selected_collection_id: str | None = None
    search_text: str = ""

    @property
    def is_browsing_collection(self) -> bool:
        return self.selected_collection_id is not None

    def reset(self) -> None:
        self.selected_collection_id = None
        self.search_text = ""


@dataclass
class LauncherSettings:
    """Launcher display preferences."""

    auto_sort_by_usage: bool = True
    show_recent_section: bool = True
    show_frequent_section: bool = True
    recent_section_count: int = 5

    @classmethod
    def from_settings(cls, source: Settings) -> LauncherSettings:
        return cls(
            auto_sort_by_usage=source.auto_sort_by_usage,
            show_recent_section=source.show_recent_section,
            show_frequent_section=source.show_frequent_section,
            recent_section_count=source.recent_section_count,
        )

    def save(self, target: Settings) -> None:
        target.auto_sort_by_usage = self.auto_sort_by_usage
        target.show_recent_section = self.show_recent_section
        target.show_frequent_section = self.show_frequent_section
        target.recent_section_count = self.recent_section_count
