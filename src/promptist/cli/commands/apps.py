"""Apps and categories commands."""

from __future__ import annotations

import argparse

from promptist.cli.context import open_repository
from promptist.models.category import child_categories, root_categories
from promptist.models.tracked_app import TRACKED_APP_CONFIGS, resolve_tracked_app


def cmd_apps(args: argparse.Namespace) -> int:
    """List tracked apps, or resolve one bundle identifier."""
    if args.bundle_id:
        app = resolve_tracked_app(args.bundle_id)
        if app is None:
            print(f"{args.bundle_id}: not tracked")
            return 0
        print(f"{args.bundle_id}: {app.value} ({app.display_name})")
        return 0

    for app, config in TRACKED_APP_CONFIGS.items():
        bundles = ", ".join(config.bundle_identifiers)
        print(f"{app.value:<14} {config.display_name:<18} {bundles}")
    return 0


def cmd_categories(args: argparse.Namespace) -> int:
    """Print the category tree with template counts (including children)."""
    repository = open_repository(args)
    categories = repository.load_categories()
    templates = repository.load_templates()

    counts: dict[str, int] = {}
    for template in templates:
        if template.category_id:
            counts[template.category_id] = counts.get(template.category_id, 0) + 1

    for major in root_categories(categories):
        children = child_categories(categories, major.id)
        total = counts.get(major.id, 0) + sum(counts.get(c.id, 0) for c in children)
        print(f"{major.name} ({total})")
        for child in children:
            print(f"  {child.name} ({counts.get(child.id, 0)})")

    uncategorized = sum(
        1 for t in templates if t.category_id not in {c.id for c in categories}
    )
    if uncategorized:
        print(f"Uncategorized ({uncategorized})")
    return 0
