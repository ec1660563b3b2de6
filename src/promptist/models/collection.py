"""Collections group prompt templates in the launcher and manager."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Self

from promptist.models.template import new_id


@dataclass(slots=True)
class PromptTemplateCollection:
    """A named collection of prompt templates."""

    name: str
    id: str = field(default_factory=new_id)
    sort_order: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "sortOrder": self.sort_order}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            sort_order=int(data.get("sortOrder", 0)),
        )
