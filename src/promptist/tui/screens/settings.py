"""Settings modal for application configuration."""

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static, Switch

from promptist.config import get_settings_path, settings
from promptist.launcher.filter_state import LauncherSettings

logger = logging.getLogger(__name__)

# Launcher toggles: (switch id, settings attribute, label, description)
LAUNCHER_TOGGLES = [
    (
        "auto-sort-switch",
        "auto_sort_by_usage",
        "Sort by Usage",
        "Most used prompts first in the launcher",
    ),
    (
        "recent-switch",
        "show_recent_section",
        "Recent Section",
        "Show recently used prompts above the list",
    ),
    (
        "frequent-switch",
        "show_frequent_section",
        "Frequent Section",
        "Show frequently used prompts above the list",
    ),
]


class SettingsModal(ModalScreen[LauncherSettings | None]):
    """Modal for viewing and editing application settings.

    Returns: the launcher settings after a save, or None when closed.
    """

    BINDINGS = [
        Binding("escape", "close", "Close", show=True),
    ]

    DEFAULT_CSS = """
    SettingsModal {
        align: center middle;
    }

    SettingsModal > Vertical {
        width: 70;
        max-width: 90%;
        height: auto;
        max-height: 85%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    SettingsModal .modal-title {
        text-align: center;
        text-style: bold;
        color: $text;
        padding-bottom: 1;
        border-bottom: solid $surface-lighten-1;
        margin-bottom: 1;
    }

    SettingsModal .settings-scroll {
        height: auto;
        max-height: 30;
    }

    SettingsModal .section-header {
        text-style: bold;
        color: $primary;
        padding: 1 0 0 0;
        margin-top: 1;
    }

    SettingsModal .setting-row {
        height: auto;
        padding: 1 0;
        border-bottom: solid $surface-lighten-1;
    }

    SettingsModal .setting-label {
        color: $text;
        text-style: bold;
    }

    SettingsModal .setting-description {
        color: $text-muted;
        margin-bottom: 1;
    }

    SettingsModal Input {
        width: 100%;
    }

    SettingsModal .toggle-row {
        height: auto;
        align: left middle;
    }

    SettingsModal .toggle-row Label {
        margin-right: 2;
    }

    SettingsModal .file-path {
        color: $text-disabled;
        text-style: italic;
        padding: 1 0 0 0;
        text-align: center;
    }

    SettingsModal .button-row {
        padding-top: 1;
        align: center middle;
        height: auto;
    }

    SettingsModal .button-row Button {
        margin: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Settings", classes="modal-title")

            with VerticalScroll(classes="settings-scroll"):
                yield Static("General", classes="section-header")

                with Vertical(classes="setting-row"):
                    yield Static("Theme", classes="setting-label")
                    yield Static(
                        "Application color theme", classes="setting-description"
                    )
                    with Horizontal(classes="toggle-row"):
                        yield Label("Dark")
                        yield Switch(
                            value=settings.theme == "textual-dark", id="theme-switch"
                        )
                        yield Label("Light mode when OFF")

                with Vertical(classes="setting-row"):
                    yield Static("Data Directory", classes="setting-label")
                    yield Static(
                        "Where templates, categories and shortcuts are stored",
                        classes="setting-description",
                    )
                    yield Input(
                        value=str(settings.data_directory),
                        id="data-dir-input",
                    )

                yield Static("Launcher", classes="section-header")

                for switch_id, attribute, label, description in LAUNCHER_TOGGLES:
                    with Vertical(classes="setting-row"):
                        yield Static(label, classes="setting-label")
                        yield Static(description, classes="setting-description")
                        with Horizontal(classes="toggle-row"):
                            yield Label("Enabled")
                            yield Switch(
                                value=getattr(settings, attribute), id=switch_id
                            )

                with Vertical(classes="setting-row"):
                    yield Static("Recent Count", classes="setting-label")
                    yield Static(
                        "How many recent prompts to show",
                        classes="setting-description",
                    )
                    yield Input(
                        value=str(settings.recent_section_count),
                        type="integer",
                        id="recent-count-input",
                    )

            yield Static(
                f"Settings file: {get_settings_path()}",
                classes="file-path",
            )

            with Horizontal(classes="button-row"):
                yield Button("Save", id="btn-save", variant="primary")
                yield Button("Close", id="btn-close")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "btn-save":
            self.dismiss(self._save_settings())
        else:
            self.dismiss(None)

    def on_switch_changed(self, event: Switch.Changed) -> None:
        """Apply the theme as soon as it is toggled."""
        if event.switch.id == "theme-switch":
            new_theme = "textual-dark" if event.value else "textual-light"
            settings.theme = new_theme
            self.app.theme = new_theme

    def _save_settings(self) -> LauncherSettings:
        """Save all settings."""
        new_dir = self.query_one("#data-dir-input", Input).value.strip()
        if new_dir:
            settings.data_directory = new_dir

        launcher = LauncherSettings.from_settings(settings)
        for switch_id, attribute, _, _ in LAUNCHER_TOGGLES:
            setattr(launcher, attribute, self.query_one(f"#{switch_id}", Switch).value)

        count_text = self.query_one("#recent-count-input", Input).value.strip()
        if count_text.isdigit() and int(count_text) > 0:
            launcher.recent_section_count = int(count_text)
        launcher.save(settings)

        self.notify("Settings saved", severity="information")
        logger.info(
            "Settings saved: data_directory=%s, launcher=%s",
            settings.data_directory,
            launcher,
        )
        return launcher

    def action_close(self) -> None:
        """Close the modal."""
        self.dismiss(None)
