"""Modal collecting clipboard and input values for a template."""

import logging
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, OptionList, Static
from textual.widgets.option_list import Option

from promptist.templating import ClipboardEntry, VariableResolutionContext

logger = logging.getLogger(__name__)


class VariableInputModal(ModalScreen[VariableResolutionContext | None]):
    """Ask for the values a template cannot resolve by itself.

    Shows the clipboard history when the template uses ``{{clipboard}}``
    (the newest entry is preselected) and one input per unique question.

    Returns: the user's context, or None if cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
        Binding("ctrl+s", "submit", "Copy", show=True),
    ]

    DEFAULT_CSS = """
    VariableInputModal {
        align: center middle;
        background: $surface 60%;
    }

    VariableInputModal > Vertical {
        width: 80;
        height: auto;
        max-height: 90%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    VariableInputModal .modal-title {
        text-style: bold;
        color: $text;
        text-align: center;
        padding-bottom: 1;
        border-bottom: solid $surface-lighten-1;
        margin-bottom: 1;
    }

    VariableInputModal .field-label {
        color: $text-muted;
        margin-top: 1;
    }

    VariableInputModal OptionList {
        height: auto;
        max-height: 10;
        border: solid $surface-lighten-1;
    }

    VariableInputModal .empty-clipboard {
        color: $text-disabled;
        text-style: italic;
    }

    VariableInputModal Input {
        width: 100%;
    }

    VariableInputModal .button-row {
        padding-top: 1;
        align: center middle;
        height: auto;
    }

    VariableInputModal .button-row Button {
        margin: 0 1;
    }
    """

    def __init__(
        self,
        prompt_title: str,
        questions: tuple[str, ...] | list[str],
        clipboard_history: list[ClipboardEntry] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.prompt_title = prompt_title
        self.questions = list(questions)
        self.clipboard_history = clipboard_history
        self.selected_clipboard_id: str | None = (
            clipboard_history[0].id if clipboard_history else None
        )

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self.prompt_title, classes="modal-title")
            with VerticalScroll():
                if self.clipboard_history is not None:
                    yield Static("Clipboard", classes="field-label")
                    if self.clipboard_history:
                        yield OptionList(
                            *[
                                Option(entry.preview, id=entry.id)
                                for entry in self.clipboard_history
                            ],
                            id="clipboard-list",
                        )
                    else:
                        yield Static(
                            "Clipboard history is empty", classes="empty-clipboard"
                        )
                for index, question in enumerate(self.questions):
                    yield Static(question, classes="field-label")
                    yield Input(placeholder=question, id=f"answer-{index}")
            with Horizontal(classes="button-row"):
                yield Button("Copy", id="btn-submit", variant="primary")
                yield Button("Cancel", id="btn-cancel")

    def on_mount(self) -> None:
        if self.questions:
            self.query_one("#answer-0", Input).focus()
        elif self.clipboard_history:
            self.query_one("#clipboard-list", OptionList).focus()

    def on_option_list_option_highlighted(
        self, event: OptionList.OptionHighlighted
    ) -> None:
        self.selected_clipboard_id = event.option.id

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Enter moves to the next question, and submits on the last one."""
        current = int((event.input.id or "answer-0").removeprefix("answer-"))
        if current + 1 < len(self.questions):
            self.query_one(f"#answer-{current + 1}", Input).focus()
        else:
            self.action_submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-submit":
            self.action_submit()
        else:
            self.dismiss(None)

    def build_context(self) -> VariableResolutionContext:
        """Collect the selected clipboard entry and typed answers."""
        clipboard_text = None
        if self.clipboard_history and self.selected_clipboard_id:
            for entry in self.clipboard_history:
                if entry.id == self.selected_clipboard_id:
                    clipboard_text = entry.content
                    break

        responses = {
            question: self.query_one(f"#answer-{index}", Input).value
            for index, question in enumerate(self.questions)
        }
        return VariableResolutionContext(
            clipboard_selection=clipboard_text,
            input_responses=responses,
        )

    def action_submit(self) -> None:
        self.dismiss(self.build_context())

    def action_cancel(self) -> None:
        self.dismiss(None)
