"""Shared context helpers for CLI command modules."""

from __future__ import annotations

import argparse
import sys

from promptist.models.category import PromptCategory
from promptist.models.collection import PromptTemplateCollection
from promptist.models.template import PromptTemplate
from promptist.store.repository import FileTemplateRepository


def open_repository(args: argparse.Namespace) -> FileTemplateRepository:
    """Open the repository in ``--data-dir`` or the configured data directory."""
    data_dir = getattr(args, "data_dir", None)
    return FileTemplateRepository(data_dir.expanduser().resolve() if data_dir else None)


def find_template_or_error(
    repository: FileTemplateRepository, ref: str
) -> PromptTemplate | None:
    """Find a template by id or unique id prefix, or print an error.

    Prefix matching ignores case so ids can be typed in lowercase.
    """
    templates = repository.load_templates()
    for template in templates:
        if template.id == ref:
            return template

    prefix = ref.strip().upper()
    matches = [t for t in templates if prefix and t.id.upper().startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        print(f"Error: Template '{ref}' not found", file=sys.stderr)
    else:
        print(f"Error: Template id '{ref}' is ambiguous", file=sys.stderr)
        for template in matches:
            print(f"  {template.id}  {template.title}", file=sys.stderr)
    return None


def find_category_or_error(
    repository: FileTemplateRepository, ref: str
) -> PromptCategory | None:
    """Find a category by id or case-insensitive name, or print an error."""
    categories = repository.load_categories()
    for category in categories:
        if category.id == ref or category.name.casefold() == ref.casefold():
            return category
    print(f"Error: Category '{ref}' not found", file=sys.stderr)
    return None


def find_collection_or_error(
    repository: FileTemplateRepository, ref: str
) -> PromptTemplateCollection | None:
    """Find a collection by id or case-insensitive name, or print an error."""
    for collection in repository.load_collections():
        if collection.id == ref or collection.name.casefold() == ref.casefold():
            return collection
    print(f"Error: Collection '{ref}' not found", file=sys.stderr)
    return None
