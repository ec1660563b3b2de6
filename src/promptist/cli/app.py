"""CLI orchestration and command routing."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence

from promptist.cli.commands import (
    cmd_add,
    cmd_apps,
    cmd_bind,
    cmd_categories,
    cmd_delete,
    cmd_edit,
    cmd_list,
    cmd_reorder,
    cmd_resolve,
    cmd_shortcuts,
    cmd_show,
    cmd_tui,
    cmd_unbind,
)
from promptist.cli.parser import parse_args
from promptist.errors import PromptistError

logger = logging.getLogger(__name__)


def dispatch(args: argparse.Namespace) -> int:
    """Route parsed args to the correct command handler."""
    command_handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "list": cmd_list,
        "show": cmd_show,
        "add": cmd_add,
        "edit": cmd_edit,
        "delete": cmd_delete,
        "reorder": cmd_reorder,
        "resolve": cmd_resolve,
        "apps": cmd_apps,
        "categories": cmd_categories,
        "shortcuts": cmd_shortcuts,
        "bind": cmd_bind,
        "unbind": cmd_unbind,
    }

    if args.command is None:
        return cmd_tui(args)

    handler = command_handlers.get(args.command)
    if handler is None:
        return cmd_tui(args)

    try:
        return handler(args)
    except PromptistError as e:
        logger.error("Command %s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Parse args, apply shared CLI setup, and execute command."""
    args = parse_args(argv)

    if configure_logging is not None:
        configure_logging()

    if args.data_dir:
        logger.info("Data directory override: %s", args.data_dir)
    return dispatch(args)
