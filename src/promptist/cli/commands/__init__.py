"""CLI command handlers."""

from .apps import cmd_apps, cmd_categories
from .edit import cmd_add, cmd_delete, cmd_edit, cmd_reorder
from .list_cmd import cmd_list, cmd_show
from .resolve import cmd_resolve
from .shortcuts import cmd_bind, cmd_shortcuts, cmd_unbind
from .tui import cmd_tui

__all__ = [
    "cmd_add",
    "cmd_apps",
    "cmd_bind",
    "cmd_categories",
    "cmd_delete",
    "cmd_edit",
    "cmd_list",
    "cmd_reorder",
    "cmd_resolve",
    "cmd_shortcuts",
    "cmd_show",
    "cmd_tui",
    "cmd_unbind",
]
