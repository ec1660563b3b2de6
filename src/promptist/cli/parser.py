"""Argument parser construction for Promptist CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        description="Promptist - reusable prompt templates for AI apps"
    )
    parser.add_argument(
        "--data-dir",
        "-d",
        type=Path,
        help="Directory holding templates and shortcuts (default: from settings)",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # List command
    list_parser = subparsers.add_parser("list", help="List templates in sort order")
    list_parser.add_argument(
        "--app",
        help="Only templates linked to this bundle identifier or app name",
    )
    list_parser.add_argument(
        "--search",
        "-s",
        help="Case-insensitive search over title, content and tags",
    )
    list_parser.add_argument(
        "--category",
        help="Only templates in this category (id or name, includes subcategories)",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Print templates as JSON",
    )

    # Show command
    show_parser = subparsers.add_parser("show", help="Show one template")
    show_parser.add_argument("template_id", help="Template id (or unique prefix)")

    # Add command
    add_parser = subparsers.add_parser("add", help="Create a template")
    add_parser.add_argument("--title", "-t", required=True, help="Template title")
    add_parser.add_argument(
        "--content", "-c", required=True, help="Template content with {{variables}}"
    )
    _add_template_options(add_parser)

    # Edit command
    edit_parser = subparsers.add_parser("edit", help="Update a template")
    edit_parser.add_argument("template_id", help="Template id (or unique prefix)")
    edit_parser.add_argument("--title", "-t", help="New title")
    edit_parser.add_argument("--content", "-c", help="New content")
    _add_template_options(edit_parser)
    edit_parser.add_argument(
        "--clear-apps",
        action="store_true",
        help="Remove all linked apps before adding --app values",
    )

    # Delete command
    delete_parser = subparsers.add_parser(
        "delete", help="Delete templates and their shortcuts"
    )
    delete_parser.add_argument(
        "template_ids", nargs="+", help="Template ids (or unique prefixes)"
    )

    # Reorder command
    reorder_parser = subparsers.add_parser(
        "reorder", help="Set sort order to the position of each id"
    )
    reorder_parser.add_argument(
        "template_ids", nargs="+", help="Template ids in the desired order"
    )

    # Resolve command
    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve a template's variables and print or copy it"
    )
    resolve_parser.add_argument("template_id", help="Template id (or unique prefix)")
    resolve_parser.add_argument("--selection", help="Value for {{selection}}")
    resolve_parser.add_argument("--clipboard", help="Value for {{clipboard}}")
    resolve_parser.add_argument(
        "--paste",
        action="store_true",
        help="Read {{clipboard}} from the system clipboard",
    )
    resolve_parser.add_argument(
        "--answer",
        "-a",
        action="append",
        default=[],
        metavar="QUESTION=ANSWER",
        help="Answer for an {{input:QUESTION}} variable (repeatable)",
    )
    resolve_parser.add_argument(
        "--copy",
        action="store_true",
        help="Copy the result to the clipboard and record usage",
    )

    # Apps command
    apps_parser = subparsers.add_parser(
        "apps", help="List tracked apps, or resolve a bundle identifier"
    )
    apps_parser.add_argument(
        "bundle_id", nargs="?", help="Bundle identifier to resolve"
    )

    # Categories command
    subparsers.add_parser("categories", help="Show the category tree with counts")

    # Shortcuts command
    shortcuts_parser = subparsers.add_parser(
        "shortcuts", help="List template shortcuts"
    )
    shortcuts_parser.add_argument(
        "--check",
        action="store_true",
        help="Validate every shortcut and report conflicts",
    )

    # Bind command
    bind_parser = subparsers.add_parser("bind", help="Bind a shortcut to a template")
    bind_parser.add_argument("template_id", help="Template id (or unique prefix)")
    bind_parser.add_argument("combo", help="Key combo such as cmd+shift+p")
    bind_parser.add_argument(
        "--app",
        help="Scope the shortcut to one app (tracked app or Name=bundle.id)",
    )

    # Unbind command
    unbind_parser = subparsers.add_parser(
        "unbind", help="Remove the shortcut bound to a template"
    )
    unbind_parser.add_argument("template_id", help="Template id (or unique prefix)")

    # TUI command
    subparsers.add_parser("tui", help="Open the launcher (default)")

    return parser


def _add_template_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tag",
        action="append",
        dest="tags",
        help="Tag for search (repeatable)",
    )
    parser.add_argument(
        "--app",
        action="append",
        dest="apps",
        help="Linked app: tracked app (xcode), name, or Name=bundle.id (repeatable)",
    )
    parser.add_argument("--category", help="Category id or name")
    parser.add_argument("--collection", help="Collection id or name")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
