"""Shortcut listing, validation and binding commands."""

from __future__ import annotations

import argparse
import sys

from promptist.cli.context import find_template_or_error, open_repository
from promptist.models.app_target import parse_app_target
from promptist.models.shortcut import KeyCombo, ShortcutScope, TemplateShortcut
from promptist.services.shortcuts import (
    ShortcutValidationError,
    ShortcutValidator,
    detect_conflicts,
)


def cmd_shortcuts(args: argparse.Namespace) -> int:
    """List shortcuts; with --check, validate them and report conflicts."""
    repository = open_repository(args)
    shortcuts = repository.shortcut_store.load_shortcuts()
    titles = {t.id: t.title for t in repository.load_templates()}

    if not shortcuts:
        print("No shortcuts defined.")
        return 0

    for shortcut in shortcuts:
        state = "" if shortcut.is_enabled else "  (disabled)"
        title = titles.get(shortcut.template_id, f"<missing {shortcut.template_id}>")
        print(
            f"{shortcut.key_combo.display_string:<8} {shortcut.scope.display_name:<14} "
            f"{title}{state}"
        )

    if not args.check:
        return 0

    problems = 0
    validator = ShortcutValidator()
    for shortcut in shortcuts:
        issue = validator.explain_issue(shortcut.key_combo)
        if issue:
            problems += 1
            print(f"Invalid {shortcut.key_combo.display_string}: {issue}")
    for conflict in detect_conflicts(shortcuts):
        problems += 1
        print(
            f"Conflict {conflict.first.key_combo.display_string}: "
            f"{titles.get(conflict.first.template_id, conflict.first.template_id)} / "
            f"{titles.get(conflict.second.template_id, conflict.second.template_id)} "
            f"({conflict.reason})"
        )

    if problems:
        return 1
    print("All shortcuts OK.")
    return 0


def cmd_bind(args: argparse.Namespace) -> int:
    """Bind a validated key combo to a template."""
    repository = open_repository(args)
    template = find_template_or_error(repository, args.template_id)
    if template is None:
        return 1

    try:
        combo = KeyCombo.parse(args.combo)
        ShortcutValidator().validate(combo)
    except (ValueError, ShortcutValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    scope = ShortcutScope(parse_app_target(args.app)) if args.app else ShortcutScope()
    shortcut = TemplateShortcut(template_id=template.id, key_combo=combo, scope=scope)

    others = [
        s
        for s in repository.shortcut_store.load_shortcuts()
        if s.template_id != template.id
    ]
    conflicts = detect_conflicts(others + [shortcut])
    if conflicts:
        other_id = conflicts[0].first.template_id
        print(
            f"Error: {combo.display_string} is already bound to {other_id} "
            f"in scope {scope.display_name}",
            file=sys.stderr,
        )
        return 1

    repository.shortcut_store.set_shortcut(shortcut)
    print(f"Bound {combo.display_string} to '{template.title}' ({scope.display_name})")
    return 0


def cmd_unbind(args: argparse.Namespace) -> int:
    """Remove the shortcut bound to a template."""
    repository = open_repository(args)
    template = find_template_or_error(repository, args.template_id)
    if template is None:
        return 1

    shortcut = repository.shortcut_store.shortcut_for_template(template.id)
    if shortcut is None:
        print(f"Error: '{template.title}' has no shortcut", file=sys.stderr)
        return 1
    repository.shortcut_store.remove_shortcut(shortcut.id)
    print(f"Removed {shortcut.key_combo.display_string} from '{template.title}'")
    return 0
