"""Modal for creating and editing prompt templates."""

import logging
from dataclasses import replace
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Select, Static, TextArea

from promptist.launcher.prompt_list import PromptCreationIntent
from promptist.models.app_target import (
    CustomTarget,
    PromptAppTarget,
    dedupe_targets,
    parse_app_target,
)
from promptist.models.category import PromptCategory, category_path
from promptist.models.template import PromptTemplate

logger = logging.getLogger(__name__)

AUTO_TITLE_LIMIT = 30
NO_CATEGORY = ""
NO_CATEGORY_LABEL = "Uncategorized"


def derive_title(title: str, content: str) -> str:
    """The trimmed title, or the first line of content when it is blank."""
    title = title.strip()
    if title:
        return title
    first_line = content.strip().splitlines()[0].strip() if content.strip() else ""
    if len(first_line) > AUTO_TITLE_LIMIT:
        return first_line[:AUTO_TITLE_LIMIT] + "..."
    return first_line


def format_app_target(target: PromptAppTarget) -> str:
    """Editor text for a target, the inverse of ``parse_app_target``."""
    if isinstance(target, CustomTarget) and target.bundle_id:
        return f"{target.name}={target.bundle_id}"
    return target.display_name


def split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def build_template(
    *,
    title: str,
    content: str,
    tags: str,
    apps: str,
    category_id: str | None,
    existing: PromptTemplate | None = None,
    next_sort_order: int = 0,
) -> PromptTemplate | None:
    """Build the template described by the editor fields.

    Returns None when the content is blank. Editing keeps the existing id,
    sort order, usage and collection.
    """
    content = content.strip()
    if not content:
        return None

    fields = {
        "title": derive_title(title, content),
        "content": content,
        "tags": split_csv(tags),
        "linked_apps": dedupe_targets([parse_app_target(a) for a in split_csv(apps)]),
        "category_id": category_id,
    }
    if existing is not None:
        return replace(existing, **fields)
    return PromptTemplate(sort_order=next_sort_order, **fields)


class TemplateEditorModal(ModalScreen[PromptTemplate | None]):
    """Edit a template's title, content, tags, linked apps and category.

    Pass ``existing`` to edit, or ``intent`` to create with preset apps and
    category. Returns: the saved template, or None if cancelled.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
        Binding("ctrl+s", "save", "Save", show=True),
    ]

    DEFAULT_CSS = """
    TemplateEditorModal {
        align: center middle;
        background: $surface 60%;
    }

    TemplateEditorModal > Vertical {
        width: 90;
        max-width: 95%;
        height: auto;
        max-height: 90%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    TemplateEditorModal .modal-title {
        text-align: center;
        text-style: bold;
        color: $text;
        padding-bottom: 1;
        border-bottom: solid $surface-lighten-1;
        margin-bottom: 1;
    }

    TemplateEditorModal .field-label {
        color: $text;
        text-style: bold;
        margin-top: 1;
    }

    TemplateEditorModal .field-hint {
        color: $text-disabled;
        text-style: italic;
    }

    TemplateEditorModal TextArea {
        height: 12;
    }

    TemplateEditorModal Input, TemplateEditorModal Select {
        width: 100%;
    }

    TemplateEditorModal .button-row {
        padding-top: 1;
        align: center middle;
        height: auto;
    }

    TemplateEditorModal .button-row Button {
        margin: 0 1;
    }
    """

    def __init__(
        self,
        categories: list[PromptCategory],
        existing: PromptTemplate | None = None,
        intent: PromptCreationIntent | None = None,
        next_sort_order: int = 0,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.categories = categories
        self.existing = existing
        self.intent = intent or PromptCreationIntent()
        self.next_sort_order = next_sort_order

    def _initial_apps(self) -> str:
        apps = self.existing.linked_apps if self.existing else self.intent.preset_apps
        return ", ".join(format_app_target(target) for target in apps)

    def _initial_category(self) -> str | None:
        if self.existing is not None:
            return self.existing.category_id
        return self.intent.category_id

    def _category_options(self) -> list[tuple[str, str]]:
        options = [
            (category_path(self.categories, c.id), c.id) for c in self.categories
        ]
        options.sort(key=lambda option: option[0].casefold())
        return [(NO_CATEGORY_LABEL, NO_CATEGORY), *options]

    def compose(self) -> ComposeResult:
        heading = "Edit Prompt" if self.existing else "New Prompt"
        known_ids = {c.id for c in self.categories}
        category_id = self._initial_category()

        with Vertical():
            yield Static(heading, classes="modal-title")
            with VerticalScroll():
                yield Static("Title", classes="field-label")
                yield Input(
                    value=self.existing.title if self.existing else "",
                    placeholder="Defaults to the first line of the content",
                    id="title-input",
                )

                yield Static("Content", classes="field-label")
                yield TextArea(
                    self.existing.content if self.existing else "",
                    id="content-input",
                )
                yield Static(
                    "Variables: {{selection}} {{clipboard}} {{date}} {{time}} "
                    "{{datetime}} {{input:Question}}",
                    classes="field-hint",
                )

                yield Static("Tags", classes="field-label")
                yield Input(
                    value=", ".join(self.existing.tags) if self.existing else "",
                    placeholder="Comma separated",
                    id="tags-input",
                )

                yield Static("Linked Apps", classes="field-label")
                yield Input(
                    value=self._initial_apps(),
                    placeholder="e.g. Xcode, Cursor, Notes=com.apple.Notes",
                    id="apps-input",
                )

                yield Static("Category", classes="field-label")
                yield Select(
                    self._category_options(),
                    value=category_id if category_id in known_ids else NO_CATEGORY,
                    allow_blank=False,
                    id="category-select",
                )

            with Horizontal(classes="button-row"):
                yield Button("Save", id="btn-save", variant="primary")
                yield Button("Cancel", id="btn-cancel")

    def on_mount(self) -> None:
        self.query_one("#title-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-save":
            self.action_save()
        else:
            self.dismiss(None)

    def action_save(self) -> None:
        category_value = self.query_one("#category-select", Select).value
        template = build_template(
            title=self.query_one("#title-input", Input).value,
            content=self.query_one("#content-input", TextArea).text,
            tags=self.query_one("#tags-input", Input).value,
            apps=self.query_one("#apps-input", Input).value,
            category_id=str(category_value) or None,
            existing=self.existing,
            next_sort_order=self.next_sort_order,
        )
        if template is None:
            self.notify("Content is required", severity="error")
            return
        logger.info("Saving template %s (%s)", template.id, template.title)
        self.dismiss(template)

    def action_cancel(self) -> None:
        self.dismiss(None)
