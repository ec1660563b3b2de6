"""Prompt template data model."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self

from promptist.models.app_target import PromptAppFilter, PromptAppTarget, TrackedTarget
from promptist.models.tracked_app import TrackedApp

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Generate a new globally unique id."""
    return str(uuid.uuid4()).upper()


def _decode_linked_apps(data: dict[str, Any]) -> list[PromptAppTarget]:
    raw = data.get("linkedApps")
    if isinstance(raw, list):
        targets = []
        for item in raw:
            target = PromptAppTarget.from_dict(item) if isinstance(item, dict) else None
            if target is not None:
                targets.append(target)
        return targets

    # Legacy key: plain list of tracked app raw values
    legacy = data.get("linkedTrackedApps")
    if isinstance(legacy, list):
        targets = []
        for raw_value in legacy:
            app = TrackedApp.from_value(str(raw_value))
            if app is not None:
                targets.append(TrackedTarget(app))
        return targets

    return []


def _decode_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _decode_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Ignoring unparseable timestamp: %r", value)
        return None
    # Naive timestamps are local time
    return parsed if parsed.tzinfo else parsed.astimezone()


@dataclass(slots=True)
class PromptTemplate:
    """A reusable prompt the user can copy quickly."""

    title: str
    content: str
    id: str = field(default_factory=new_id)
    tags: list[str] = field(default_factory=list)
    linked_apps: list[PromptAppTarget] = field(default_factory=list)
    sort_order: int = 0
    usage_count: int = 0
    last_used_at: datetime | None = None
    collection_id: str | None = None
    category_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "linkedApps": [target.to_dict() for target in self.linked_apps],
            "sortOrder": self.sort_order,
            "usageCount": self.usage_count,
        }
        if self.last_used_at is not None:
            data["lastUsedAt"] = self.last_used_at.isoformat()
        if self.collection_id is not None:
            data["collectionId"] = self.collection_id
        if self.category_id is not None:
            data["categoryId"] = self.category_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create from dictionary.

        Renamed legacy keys (``keywords``, ``linkedTrackedApps``, ``groupId``)
        are accepted, and missing optional fields fall back to defaults.
        """
        tags = data.get("tags")
        if not isinstance(tags, list):
            tags = data.get("keywords")
        if not isinstance(tags, list):
            tags = []

        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            content=str(data.get("content", "")),
            tags=[str(tag) for tag in tags],
            linked_apps=_decode_linked_apps(data),
            sort_order=_decode_int(data.get("sortOrder")),
            usage_count=_decode_int(data.get("usageCount")),
            last_used_at=_decode_datetime(data.get("lastUsedAt")),
            collection_id=data.get("collectionId") or data.get("groupId"),
            category_id=data.get("categoryId"),
        )

    def is_linked_to(self, app_filter: PromptAppFilter) -> bool:
        """Check whether any linked app matches the filter."""
        return any(target.matches(app_filter) for target in self.linked_apps)
