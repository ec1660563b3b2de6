"""System clipboard access and a short in-memory history."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from promptist.errors import ClipboardError
from promptist.templating.context import ClipboardEntry

logger = logging.getLogger(__name__)

MAX_HISTORY_SIZE = 10


def _default_commands() -> tuple[list[str], list[str]]:
    """Pick (copy, paste) commands for this platform."""
    if sys.platform == "darwin":
        return ["pbcopy"], ["pbpaste"]
    if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
        return ["wl-copy"], ["wl-paste", "--no-newline"]
    return (
        ["xclip", "-selection", "clipboard"],
        ["xclip", "-selection", "clipboard", "-o"],
    )


class Clipboard:
    """Read and write the system clipboard through platform commands."""

    def __init__(
        self,
        copy_command: list[str] | None = None,
        paste_command: list[str] | None = None,
        timeout: float = 5.0,
    ) -> None:
        default_copy, default_paste = _default_commands()
        self.copy_command = copy_command or default_copy
        self.paste_command = paste_command or default_paste
        self.timeout = timeout

    def copy(self, text: str) -> None:
        """Place text on the clipboard.

        Raises:
            ClipboardError: If the copy command is missing or fails.
        """
        try:
            subprocess.run(
                self.copy_command,
                input=text,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ClipboardError(f"Could not copy to clipboard: {e}") from e
        logger.info("Copied %d characters to clipboard", len(text))

    def paste(self) -> str:
        """Current clipboard text.

        Raises:
            ClipboardError: If the paste command is missing or fails.
        """
        try:
            result = subprocess.run(
                self.paste_command,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise ClipboardError(f"Could not read clipboard: {e}") from e
        return result.stdout


def read_clipboard(clipboard: Clipboard) -> str | None:
    """Clipboard text, or None when it cannot be read. May block."""
    try:
        return clipboard.paste()
    except ClipboardError as e:
        logger.debug("Skipping clipboard capture: %s", e)
        return None


class ClipboardHistory:
    """Most recent distinct clipboard texts, newest first."""

    def __init__(self, max_size: int = MAX_HISTORY_SIZE) -> None:
        self.max_size = max_size
        self.entries: list[ClipboardEntry] = []

    def add(self, content: str) -> ClipboardEntry | None:
        """Record content; empty text is ignored and duplicates move to the top."""
        if not content:
            return None
        self.entries = [e for e in self.entries if e.content != content]
        entry = ClipboardEntry(content=content)
        self.entries.insert(0, entry)
        del self.entries[self.max_size :]
        return entry

    def add_if_new(self, content: str | None) -> ClipboardEntry | None:
        """Add content unless it is missing or already the newest entry."""
        if content is None:
            return None
        if self.entries and self.entries[0].content == content:
            return None
        return self.add(content)

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)
