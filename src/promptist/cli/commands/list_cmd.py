"""List and show commands for browsing templates."""

from __future__ import annotations

import argparse
import json

from promptist.cli.context import (
    find_category_or_error,
    find_template_or_error,
    open_repository,
)
from promptist.models.app_target import PromptAppFilter
from promptist.models.category import category_ids_including_children, category_path
from promptist.models.template import PromptTemplate
from promptist.models.tracked_app import TrackedApp, resolve_tracked_app
from promptist.store.query import filter_by_app, search_templates, sort_templates
from promptist.templating import parse


def app_filter_for(value: str) -> PromptAppFilter:
    """Filter for a bundle identifier, tracked-app raw value or app name."""
    text = value.strip()
    tracked = resolve_tracked_app(text) or TrackedApp.from_value(text)
    return PromptAppFilter(
        tracked_app=tracked,
        bundle_identifier=text,
        display_name=text,
    )


def format_template_line(template: PromptTemplate) -> str:
    line = f"{template.id}  {template.title}"
    if template.tags:
        line += f"  [{', '.join(template.tags)}]"
    if template.linked_apps:
        apps = ", ".join(target.display_name for target in template.linked_apps)
        line += f"  ({apps})"
    return line


def cmd_list(args: argparse.Namespace) -> int:
    """List templates in sort order, optionally filtered."""
    repository = open_repository(args)
    templates = sort_templates(repository.load_templates())

    if args.app:
        templates = filter_by_app(templates, app_filter_for(args.app))
    if args.category:
        category = find_category_or_error(repository, args.category)
        if category is None:
            return 1
        ids = category_ids_including_children(repository.load_categories(), category.id)
        templates = [t for t in templates if t.category_id in ids]
    if args.search:
        templates = search_templates(templates, args.search)

    if args.json:
        payload = [t.to_dict() for t in templates]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    if not templates:
        print("No templates found.")
        return 0
    for template in templates:
        print(format_template_line(template))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Print one template with its variables."""
    repository = open_repository(args)
    template = find_template_or_error(repository, args.template_id)
    if template is None:
        return 1

    print(f"ID:       {template.id}")
    print(f"Title:    {template.title}")
    if template.tags:
        print(f"Tags:     {', '.join(template.tags)}")
    if template.linked_apps:
        print(
            "Apps:     "
            + ", ".join(target.display_name for target in template.linked_apps)
        )
    if template.category_id:
        path = category_path(repository.load_categories(), template.category_id)
        if path:
            print(f"Category: {path}")
    print(f"Used:     {template.usage_count} times")
    if template.last_used_at is not None:
        print(f"Last use: {template.last_used_at:%Y-%m-%d %H:%M}")

    result = parse(template.content)
    if not result.is_empty:
        print("Variables:")
        for variable in result.variables:
            print(f"  {variable.raw_match}  ({variable.kind.value})")
    print()
    print(template.content)
    return 0
