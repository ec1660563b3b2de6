"""TUI launch command."""

from __future__ import annotations

import argparse

from promptist.cli.context import open_repository


def cmd_tui(args: argparse.Namespace) -> int:
    """Launch the TUI application."""
    from promptist.tui.app import PromptistApp

    app = PromptistApp(repository=open_repository(args))
    app.run()
    return 0
