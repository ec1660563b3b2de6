"""Commands that create, change, delete and reorder templates."""

from __future__ import annotations

import argparse
import sys

from promptist.cli.context import (
    find_category_or_error,
    find_collection_or_error,
    find_template_or_error,
    open_repository,
)
from promptist.models.app_target import parse_app_target
from promptist.store.repository import FileTemplateRepository

# Distinguishes "option not given" from a lookup that failed
_MISSING = object()


def _lookup_ids(
    repository: FileTemplateRepository, args: argparse.Namespace
) -> tuple[object, object]:
    """Resolve --category and --collection to ids.

    Returns ``_MISSING`` for options not given and None when a lookup failed
    (the error is already printed).
    """
    category_id: object = _MISSING
    collection_id: object = _MISSING
    if args.category:
        category = find_category_or_error(repository, args.category)
        category_id = category.id if category else None
    if args.collection:
        collection = find_collection_or_error(repository, args.collection)
        collection_id = collection.id if collection else None
    return category_id, collection_id


def cmd_add(args: argparse.Namespace) -> int:
    """Create a template."""
    if not args.title.strip():
        print("Error: Title must not be empty", file=sys.stderr)
        return 1

    repository = open_repository(args)
    category_id, collection_id = _lookup_ids(repository, args)
    if category_id is None or collection_id is None:
        return 1

    template = repository.create_template(
        args.title.strip(),
        args.content,
        tags=args.tags or [],
        linked_apps=[parse_app_target(app) for app in args.apps or []],
        category_id=None if category_id is _MISSING else category_id,
        collection_id=None if collection_id is _MISSING else collection_id,
    )
    print(f"Created {template.id}  {template.title}")
    return 0


def cmd_edit(args: argparse.Namespace) -> int:
    """Update fields of an existing template."""
    repository = open_repository(args)
    template = find_template_or_error(repository, args.template_id)
    if template is None:
        return 1
    category_id, collection_id = _lookup_ids(repository, args)
    if category_id is None or collection_id is None:
        return 1

    if args.title is not None:
        if not args.title.strip():
            print("Error: Title must not be empty", file=sys.stderr)
            return 1
        template.title = args.title.strip()
    if args.content is not None:
        template.content = args.content
    if args.tags:
        template.tags = list(args.tags)
    if args.clear_apps:
        template.linked_apps = []
    if args.apps:
        template.linked_apps = template.linked_apps + [
            parse_app_target(app) for app in args.apps
        ]
    if category_id is not _MISSING:
        template.category_id = category_id
    if collection_id is not _MISSING:
        template.collection_id = collection_id

    repository.update_template(template)
    print(f"Updated {template.id}  {template.title}")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete templates; shortcuts bound to them are removed too."""
    repository = open_repository(args)
    ids: list[str] = []
    for ref in args.template_ids:
        template = find_template_or_error(repository, ref)
        if template is None:
            return 1
        ids.append(template.id)

    removed = repository.delete_templates(ids)
    print(f"Deleted {removed} template(s)")
    return 0


def cmd_reorder(args: argparse.Namespace) -> int:
    """Give each listed template a sort order equal to its position."""
    repository = open_repository(args)
    ids: list[str] = []
    for ref in args.template_ids:
        template = find_template_or_error(repository, ref)
        if template is None:
            return 1
        ids.append(template.id)

    repository.reorder_templates(ids)
    print(f"Reordered {len(ids)} template(s)")
    return 0
