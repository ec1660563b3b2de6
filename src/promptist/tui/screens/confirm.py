"""Confirmation modal for deleting a template."""

from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from promptist.models.template import PromptTemplate


class ConfirmDeleteModal(ModalScreen[bool]):
    """Confirmation modal for deleting a template."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
        Binding("enter", "confirm", "Confirm", show=True),
    ]

    DEFAULT_CSS = """
    ConfirmDeleteModal {
        align: center middle;
        background: $surface 60%;
    }

    ConfirmDeleteModal > Vertical {
        width: 60;
        height: auto;
        max-height: 20;
        background: $surface;
        border: solid $surface-lighten-2;
        padding: 1 2;
    }

    ConfirmDeleteModal .modal-title {
        text-style: bold;
        color: $text;
        text-align: center;
        padding: 1 0;
        margin-bottom: 1;
    }

    ConfirmDeleteModal .template-title {
        margin-bottom: 1;
        color: $text;
        text-style: bold;
    }

    ConfirmDeleteModal .warning {
        color: $text-muted;
        margin-top: 1;
    }

    ConfirmDeleteModal .modal-actions {
        height: auto;
        padding: 1 0 0 0;
        margin-top: 1;
        border-top: solid $surface-lighten-1;
        align: center middle;
    }

    ConfirmDeleteModal Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    def __init__(self, template: PromptTemplate, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.template = template

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Delete Prompt?", classes="modal-title")
            yield Static(self.template.title, classes="template-title")
            yield Static(
                "The prompt and its keyboard shortcut will be removed.",
                classes="warning",
            )
            with Horizontal(classes="modal-actions"):
                yield Button("Delete", id="btn-delete", variant="error")
                yield Button("Cancel", id="btn-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-delete")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
