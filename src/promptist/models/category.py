"""Two-level category tree for classifying prompt templates.

Major categories have no parent; subcategories point at their major
category. The default hierarchy is static seed data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Self

from promptist.models.template import new_id

GENERAL_QA_NAME = "General Q&A"


@dataclass(slots=True)
class PromptCategory:
    """A category; ``parent_id`` is None for major categories."""

    name: str
    id: str = field(default_factory=new_id)
    parent_id: str | None = None
    sort_order: int = 0
    icon: str = "folder"

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "sortOrder": self.sort_order,
            "icon": self.icon,
        }
        if self.parent_id is not None:
            data["parentId"] = self.parent_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            parent_id=data.get("parentId"),
            sort_order=int(data.get("sortOrder", 0)),
            icon=str(data.get("icon", "folder")),
        )


# (major name, icon, [(subcategory name, icon), ...])
DEFAULT_CATEGORY_TREE: tuple[tuple[str, str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Coding",
        "chevron.left.forwardslash.chevron.right",
        (
            ("Code Review", "eye.circle"),
            ("Debugging", "ant"),
            ("Refactoring", "arrow.triangle.2.circlepath"),
            ("Testing", "checkmark.shield"),
            ("Explain Code", "questionmark.circle"),
            ("Generate Code", "wand.and.stars"),
            ("Documentation", "doc.text"),
        ),
    ),
    (
        "Writing & Communication",
        "pencil.and.outline",
        (
            ("Rewrite / Polish", "paintbrush"),
            ("Formal Writing", "doc.richtext"),
            ("Creative Writing", "sparkles"),
            ("Email", "envelope"),
            ("Translation", "globe"),
            ("Summarization", "text.alignleft"),
        ),
    ),
    (
        "Productivity",
        "bolt.circle",
        (
            ("Task Automation", "gear"),
            ("Meeting Notes", "note.text"),
            ("Brainstorming", "lightbulb"),
            ("Planning", "calendar"),
            ("Decision Support", "scale.3d"),
        ),
    ),
    (
        "Research & Analysis",
        "magnifyingglass.circle",
        (
            ("Information Extraction", "doc.text.magnifyingglass"),
            ("Comparison", "arrow.left.arrow.right"),
            ("Market/Topic Research", "chart.bar.xaxis"),
            ("Critical Review", "text.badge.checkmark"),
        ),
    ),
    (
        "Image / Media Generation",
        "photo.artframe",
        (
            ("Image", "photo"),
            ("Video", "video"),
            ("Audio", "waveform"),
        ),
    ),
    (
        "General Utilities",
        "square.grid.2x2",
        (
            (GENERAL_QA_NAME, "questionmark.bubble"),
            ("Quick Commands", "command"),
            ("Daily Tools", "wrench.and.screwdriver"),
        ),
    ),
)


def default_hierarchy() -> tuple[list[PromptCategory], str]:
    """Build the default category tree with fresh ids.

    Returns:
        Tuple of (categories, general_qa_id). The General Q&A subcategory is
        the fallback for uncategorized templates.
    """
    categories: list[PromptCategory] = []
    general_qa_id = ""

    for major_order, (major_name, major_icon, subcategories) in enumerate(
        DEFAULT_CATEGORY_TREE
    ):
        major = PromptCategory(name=major_name, sort_order=major_order, icon=major_icon)
        categories.append(major)
        for sub_order, (sub_name, sub_icon) in enumerate(subcategories):
            sub = PromptCategory(
                name=sub_name,
                parent_id=major.id,
                sort_order=sub_order,
                icon=sub_icon,
            )
            categories.append(sub)
            if sub_name == GENERAL_QA_NAME:
                general_qa_id = sub.id

    return categories, general_qa_id


def root_categories(categories: list[PromptCategory]) -> list[PromptCategory]:
    """Major categories sorted by sort order."""
    return sorted((c for c in categories if c.is_root), key=lambda c: c.sort_order)


def child_categories(
    categories: list[PromptCategory], parent_id: str
) -> list[PromptCategory]:
    """Subcategories of a parent sorted by sort order."""
    return sorted(
        (c for c in categories if c.parent_id == parent_id),
        key=lambda c: c.sort_order,
    )


def category_ids_including_children(
    categories: list[PromptCategory], category_id: str
) -> set[str]:
    """The category id plus the ids of all its descendants."""
    ids = {category_id}
    for child in child_categories(categories, category_id):
        ids |= category_ids_including_children(categories, child.id)
    return ids


def category_path(categories: list[PromptCategory], category_id: str) -> str:
    """Display path such as ``Coding > Code Review``; empty when unknown."""
    by_id = {c.id: c for c in categories}
    category = by_id.get(category_id)
    if category is None:
        return ""
    if category.parent_id and category.parent_id in by_id:
        return f"{by_id[category.parent_id].name} > {category.name}"
    return category.name
