"""Transient values consumed while resolving a template."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from promptist.models.template import new_id

PREVIEW_LIMIT = 80


@dataclass(frozen=True, slots=True)
class VariableResolutionContext:
    """Values available to the resolver for a single resolution."""

    selected_text: str | None = None
    clipboard_selection: str | None = None
    input_responses: dict[str, str] = field(default_factory=dict)

    def merging(self, other: VariableResolutionContext) -> VariableResolutionContext:
        """Combine two contexts; values set on ``other`` win."""
        return VariableResolutionContext(
            selected_text=(
                other.selected_text
                if other.selected_text is not None
                else self.selected_text
            ),
            clipboard_selection=(
                other.clipboard_selection
                if other.clipboard_selection is not None
                else self.clipboard_selection
            ),
            input_responses={**self.input_responses, **other.input_responses},
        )


@dataclass(frozen=True, slots=True)
class ClipboardEntry:
    """A piece of text seen on the clipboard."""

    content: str
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    @property
    def preview(self) -> str:
        """Single-line preview, truncated to 80 characters."""
        single_line = self.content.strip().replace("\n", " ")
        if len(single_line) > PREVIEW_LIMIT:
            return single_line[: PREVIEW_LIMIT - 3] + "..."
        return single_line
