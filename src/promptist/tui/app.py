"""Main Promptist TUI application."""

import logging
from typing import Any

from textual import work
from textual.app import App
from textual.binding import Binding
from textual.command import DiscoveryHit, Hit, Hits, Provider
from textual.worker import get_current_worker

from promptist.config import settings
from promptist.launcher.prompt_list import PromptListViewModel
from promptist.launcher.view_model import LauncherViewModel
from promptist.services.app_context import (
    AppContextService,
    FrontmostApp,
    MacOSFrontmostProbe,
)
from promptist.services.clipboard import Clipboard, ClipboardHistory, read_clipboard
from promptist.services.execution import PromptExecutionService
from promptist.store.repository import FileTemplateRepository
from promptist.tui.screens.launcher import LauncherScreen

logger = logging.getLogger(__name__)

# Seconds between frontmost-app and clipboard polls
POLL_INTERVAL = 2.0


class PromptistCommands(Provider):
    """Command provider for Promptist-specific commands."""

    async def discover(self) -> Hits:
        """Return default commands shown before user input."""
        yield DiscoveryHit(
            "Settings",
            self._open_settings,
            help="Open application settings",
        )

    async def search(self, query: str) -> Hits:
        """Search for Promptist commands."""
        matcher = self.matcher(query)
        command = "Settings"

        match = matcher.match(command)
        if match > 0:
            yield Hit(
                match,
                matcher.highlight(command),
                self._open_settings,
                help="Open application settings",
            )

    async def _open_settings(self) -> None:
        """Open the settings modal."""
        screen = self.app.screen
        if isinstance(screen, LauncherScreen):
            screen.action_open_settings()


class PromptistApp(App[None]):
    """Main Promptist TUI application."""

    TITLE = "Promptist"
    SUB_TITLE = "Prompt templates, one keystroke away"

    COMMANDS = App.COMMANDS | {PromptistCommands}

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+d", "toggle_dark", "Toggle Dark Mode"),
    ]

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(
        self,
        repository: FileTemplateRepository | None = None,
        app_context: AppContextService | None = None,
        clipboard: Clipboard | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.repository = repository or FileTemplateRepository()
        self.app_context = app_context or AppContextService()
        self.clipboard = clipboard or Clipboard()
        self.clipboard_history = ClipboardHistory()
        # Track theme before toggling so we can restore it
        self._previous_theme: str | None = None
        # The terminal running the TUI is in front when the first poll lands
        self._ignore_host_terminal = isinstance(
            self.app_context.probe, MacOSFrontmostProbe
        )

    def on_mount(self) -> None:
        """Start app showing the launcher."""
        saved_theme = settings.theme
        logger.info("Loading saved theme: %s", saved_theme)
        self.theme = saved_theme

        self.push_screen(
            LauncherScreen(
                view_model=LauncherViewModel(self.repository, self.app_context),
                execution=PromptExecutionService(
                    self.repository, self.clipboard, self.clipboard_history
                ),
                manager=PromptListViewModel(self.repository, self.app_context),
            )
        )
        self.poll()
        self.set_interval(POLL_INTERVAL, self.poll)

    def poll(self) -> None:
        """Track the frontmost app and new clipboard text.

        A tick is skipped while the previous poll is still running.
        """
        if any(w.group == "poll" and w.is_running for w in self.workers):
            return
        self._poll_in_background()

    @work(thread=True, exclusive=True, group="poll")
    def _poll_in_background(self) -> None:
        """Run the blocking clipboard and frontmost-app reads off the event loop."""
        content, frontmost = self.read_poll_state()
        if not get_current_worker().is_cancelled:
            self.call_from_thread(self.apply_poll, content, frontmost)

    def read_poll_state(self) -> tuple[str | None, FrontmostApp | None]:
        """Current clipboard text and frontmost app. Blocks on subprocesses."""
        return read_clipboard(self.clipboard), self.app_context.read_frontmost()

    def apply_poll(self, content: str | None, frontmost: FrontmostApp | None) -> None:
        """Record polled clipboard text and the frontmost app."""
        if self._ignore_host_terminal:
            self._ignore_host_terminal = False
            self.app_context.ignore(frontmost)
        self.clipboard_history.add_if_new(content)
        screen = self.screen
        if isinstance(screen, LauncherScreen):
            screen.apply_frontmost_app(frontmost)

    def watch_theme(self, new_theme: str) -> None:
        """Save theme whenever it changes (from any source)."""
        logger.info("Theme changed to: %s, saving...", new_theme)
        settings.theme = new_theme

    def action_toggle_dark(self) -> None:
        """Toggle dark mode (saving handled by watch_theme).

        If toggling back, restores the previous theme instead of defaulting
        to textual-dark/textual-light.
        """
        if self._previous_theme is not None:
            restored = self._previous_theme
            self._previous_theme = None
            self.theme = restored
        else:
            self._previous_theme = self.theme
            self.theme = (
                "textual-dark" if self.theme == "textual-light" else "textual-light"
            )
