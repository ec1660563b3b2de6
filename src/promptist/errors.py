"""Exceptions shared across Promptist."""

from __future__ import annotations


class PromptistError(Exception):
    """Base exception for Promptist errors."""

    pass


class TemplateNotFoundError(PromptistError):
    """Raised when a template id does not exist in the store."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")


class CategoryNotFoundError(PromptistError):
    """Raised when a category id does not exist in the store."""

    def __init__(self, category_id: str) -> None:
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")


class ClipboardError(PromptistError):
    """Raised when the system clipboard cannot be read or written."""

    pass
