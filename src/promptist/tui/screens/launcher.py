"""Launcher screen - search, pick and copy a prompt."""

import logging
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Input, OptionList, Static
from textual.widgets.option_list import Option

from promptist.errors import ClipboardError, PromptistError
from promptist.launcher.filter_state import LauncherSettings
from promptist.launcher.prompt_list import PromptListViewModel
from promptist.launcher.view_model import LauncherViewModel
from promptist.models.template import PromptTemplate
from promptist.services.app_context import AppContextService, FrontmostApp
from promptist.services.execution import (
    DirectCopy,
    NeedsInput,
    ParsedExecution,
    PromptExecutionService,
)
from promptist.templating import VariableResolutionContext
from promptist.tui.screens.confirm import ConfirmDeleteModal
from promptist.tui.screens.editor import TemplateEditorModal
from promptist.tui.screens.settings import SettingsModal
from promptist.tui.screens.variable_input import VariableInputModal
from promptist.tui.utils import format_relative_time, highlight_variables, truncate

logger = logging.getLogger(__name__)

COLLECTION_PREFIX = "collection:"
TITLE_WIDTH = 48


def prompt_label(template: PromptTemplate, shortcut: str | None = None) -> str:
    """One-line list label: title, usage count and shortcut."""
    parts = [truncate(template.title, TITLE_WIDTH)]
    if template.usage_count:
        parts.append(f"×{template.usage_count}")
    if shortcut:
        parts.append(shortcut)
    return "  ".join(parts)


def build_options(view_model: LauncherViewModel) -> list[Option]:
    """Options for the launcher list, with disabled section headers.

    Prompt options use the template id; collection options are prefixed
    with ``collection:``.
    """

    def section(title: str, prompts: list[PromptTemplate]) -> list[Option]:
        if not prompts:
            return []
        options = [Option(title.upper(), disabled=True)]
        for template in prompts:
            shortcut = view_model.shortcut_for(template.id)
            label = prompt_label(
                template, shortcut.key_combo.display_string if shortcut else None
            )
            options.append(Option(label, id=template.id))
        return options

    if view_model.is_searching:
        return section("Results", view_model.main_prompts) or [
            Option("No matching prompts", disabled=True)
        ]

    options: list[Option] = []
    options += section("Recent", view_model.recent_prompts)
    options += section("Frequent", view_model.frequent_prompts)

    current = view_model.current_collection
    if current is None and view_model.collections_with_prompts:
        options.append(Option("COLLECTIONS", disabled=True))
        for collection in view_model.collections_with_prompts:
            options.append(
                Option(f"▸ {collection.name}", id=COLLECTION_PREFIX + collection.id)
            )

    main_title = current.name if current else "Prompts"
    options += section(main_title, view_model.main_prompts)
    if not options:
        options.append(
            Option("No prompts yet. Press ctrl+n to create one.", disabled=True)
        )
    return options


class PromptPreviewPanel(VerticalScroll):
    """Right panel showing the highlighted prompt."""

    DEFAULT_CSS = """
    PromptPreviewPanel {
        width: 1fr;
        height: 100%;
        padding: 0 2;
    }

    PromptPreviewPanel .panel-title {
        text-style: bold;
        color: $text;
        padding-top: 1;
        text-align: center;
        border-bottom: solid $surface-lighten-1;
        margin-bottom: 1;
    }

    PromptPreviewPanel .placeholder {
        color: $text-muted;
        text-style: italic;
    }

    PromptPreviewPanel .prompt-title {
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    PromptPreviewPanel .prompt-meta {
        color: $text-muted;
    }

    PromptPreviewPanel .prompt-content {
        color: $text;
        margin-top: 1;
        padding: 1;
        background: $surface-lighten-1;
    }

    PromptPreviewPanel .hint {
        color: $text-disabled;
        text-style: italic;
        margin-top: 2;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("PREVIEW", classes="panel-title")
        yield Static(
            "Select a prompt to preview", classes="placeholder", id="placeholder"
        )
        yield Vertical(id="preview-content")

    def show_prompt(self, template: PromptTemplate | None, category: str = "") -> None:
        """Display prompt preview."""
        placeholder = self.query_one("#placeholder", Static)
        content = self.query_one("#preview-content", Vertical)
        content.remove_children()

        if template is None:
            placeholder.display = True
            return
        placeholder.display = False

        content.mount(Static(template.title, classes="prompt-title"))
        if category:
            content.mount(Static(f"Category: {category}", classes="prompt-meta"))
        if template.tags:
            tags = ", ".join(template.tags)
            content.mount(Static(f"Tags: {tags}", classes="prompt-meta"))
        if template.linked_apps:
            apps = ", ".join(t.display_name for t in template.linked_apps)
            content.mount(Static(f"Apps: {apps}", classes="prompt-meta"))

        usage = f"Used {template.usage_count} times"
        if template.last_used_at is not None:
            usage += f" · last {format_relative_time(template.last_used_at)}"
        content.mount(Static(usage, classes="prompt-meta"))

        content.mount(
            Static(highlight_variables(template.content), classes="prompt-content")
        )
        content.mount(Static("Press Enter to copy", classes="hint"))


class LauncherScreen(Screen[None]):
    """
    Launcher screen - shown on app startup.

    Two-panel layout:
    - Left: search box and prompt list (recent, frequent, collections, main)
    - Right: highlighted prompt preview
    """

    BINDINGS = [
        Binding("ctrl+q", "app.quit", "Quit", show=True),
        Binding("down", "cursor_down", "Down", show=False),
        Binding("up", "cursor_up", "Up", show=False),
        Binding("ctrl+a", "toggle_show_all", "All Apps", show=True, priority=True),
        Binding("ctrl+n", "new_prompt", "New", show=True),
        Binding("ctrl+e", "edit_prompt", "Edit", show=True, priority=True),
        Binding("ctrl+x", "delete_prompt", "Delete", show=True, priority=True),
        Binding("ctrl+s", "open_settings", "Settings", show=True),
        Binding("escape", "back", "Back", show=False),
    ]

    DEFAULT_CSS = """
    LauncherScreen {
        background: $surface;
        overflow: hidden;
    }

    LauncherScreen .main-container {
        width: 100%;
        height: 1fr;
    }

    LauncherScreen .list-panel {
        width: 1fr;
        height: 100%;
        border-right: solid $surface-lighten-1;
        padding: 0 1;
    }

    LauncherScreen .context-line {
        color: $text-muted;
        padding: 1 0 0 0;
    }

    LauncherScreen #prompt-list {
        height: 1fr;
        border: none;
    }
    """

    def __init__(
        self,
        view_model: LauncherViewModel,
        execution: PromptExecutionService,
        manager: PromptListViewModel,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.view_model = view_model
        self.execution = execution
        self.manager = manager

    @property
    def app_context(self) -> AppContextService:
        return self.view_model.app_context

    def compose(self) -> ComposeResult:
        with Horizontal(classes="main-container"):
            with Vertical(classes="list-panel"):
                yield Input(placeholder="Search prompts…", id="search-input")
                yield Static("", classes="context-line", id="context-line")
                yield OptionList(id="prompt-list")
            yield PromptPreviewPanel(id="preview-panel")
        yield Footer()

    def on_mount(self) -> None:
        self.app.sub_title = "Launcher"
        self.refresh_list()
        self.query_one("#search-input", Input).focus()

    # --- Rendering ---

    def refresh_list(self) -> None:
        """Rebuild the list from the view model and restore the selection."""
        self._update_context_line()
        option_list = self.query_one("#prompt-list", OptionList)
        option_list.clear_options()
        option_list.add_options(build_options(self.view_model))

        selected = self.view_model.selected_prompt
        if selected is not None:
            index = self._option_index(selected.id)
            if index is not None:
                option_list.highlighted = index
        self._show_preview(selected)

    def _update_context_line(self) -> None:
        vm = self.view_model
        app_name = self.app_context.display_name
        if app_name is None:
            text = "No app detected"
        elif vm.has_app_specific_prompts and not vm.showing_all_prompts:
            text = f"Prompts for {app_name} (ctrl+a: all)"
        else:
            text = f"All prompts · {app_name}"
        if vm.current_collection is not None:
            text += f" · {vm.current_collection.name} (esc: back)"
        self.query_one("#context-line", Static).update(text)

    def _option_index(self, option_id: str) -> int | None:
        option_list = self.query_one("#prompt-list", OptionList)
        for index in range(option_list.option_count):
            if option_list.get_option_at_index(index).id == option_id:
                return index
        return None

    def _show_preview(self, template: PromptTemplate | None) -> None:
        category = ""
        if template is not None and template.category_id:
            category = self.manager.category_path(template.category_id)
        preview = self.query_one("#preview-panel", PromptPreviewPanel)
        preview.show_prompt(template, category)

    def _sync_selection(self, option_id: str | None) -> None:
        """Point the view model's selection at the highlighted prompt."""
        if option_id is None or option_id.startswith(COLLECTION_PREFIX):
            self._show_preview(None)
            return
        ids = [p.id for p in self.view_model.displayable_prompts]
        if option_id in ids:
            self.view_model.select_index(ids.index(option_id))
        self._show_preview(self.view_model.selected_prompt)

    # --- Events ---

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.view_model.search_text = event.value
            self.refresh_list()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            self._activate_highlighted()

    def on_option_list_option_highlighted(
        self, event: OptionList.OptionHighlighted
    ) -> None:
        self._sync_selection(event.option.id)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self._activate_highlighted()

    def _activate_highlighted(self) -> None:
        option_list = self.query_one("#prompt-list", OptionList)
        if option_list.highlighted is None:
            return
        option_id = option_list.get_option_at_index(option_list.highlighted).id
        if option_id is None:
            return
        if option_id.startswith(COLLECTION_PREFIX):
            self.view_model.enter_collection(option_id.removeprefix(COLLECTION_PREFIX))
            self.refresh_list()
            return
        template = self.view_model.selected_prompt
        if template is not None:
            self.execute_prompt(template)

    # --- Execution ---

    def execute_prompt(self, template: PromptTemplate) -> None:
        """Resolve a prompt, asking for input when needed, and copy it."""
        result = self.execution.prepare(template)
        if isinstance(result, DirectCopy):
            self._copy(template, result.text)
        elif isinstance(result, NeedsInput):
            self._ask_for_input(result.parsed)

    def _ask_for_input(self, parsed: ParsedExecution) -> None:
        """Show the variable input modal for a prompt."""

        def handle_input(context: VariableResolutionContext | None) -> None:
            if context is None:
                return
            self._copy(parsed.template, self.execution.complete(parsed, context))

        history = None
        if parsed.parse_result.has_clipboard_variable:
            history = list(self.execution.history.entries)
        self.app.push_screen(
            VariableInputModal(
                parsed.template.title,
                parsed.parse_result.unique_input_questions,
                history,
            ),
            handle_input,
        )

    def _copy(self, template: PromptTemplate, text: str) -> None:
        try:
            self.execution.copy(template, text)
        except ClipboardError as e:
            logger.error("Copy failed for %s: %s", template.id, e)
            self.notify(f"Copy failed: {e}", severity="error")
            return
        self.notify(f"Copied: {template.title}")
        self.view_model.load()
        self.view_model.search_text = ""
        self.query_one("#search-input", Input).value = ""
        self.refresh_list()

    # --- Actions ---

    def action_cursor_down(self) -> None:
        """Move selection down in the list."""
        self.query_one("#prompt-list", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        """Move selection up in the list."""
        self.query_one("#prompt-list", OptionList).action_cursor_up()

    def action_toggle_show_all(self) -> None:
        self.view_model.toggle_show_all()
        self.refresh_list()

    def action_back(self) -> None:
        """Clear the search, then leave the open collection."""
        search = self.query_one("#search-input", Input)
        if search.value:
            search.value = ""
        elif self.view_model.current_collection is not None:
            self.view_model.exit_collection()
            self.refresh_list()

    def action_new_prompt(self) -> None:
        self.manager.reload()
        self._show_editor(None)

    def action_edit_prompt(self) -> None:
        template = self.view_model.selected_prompt
        if template is not None:
            self.manager.reload()
            self._show_editor(template)

    def _show_editor(self, existing: PromptTemplate | None) -> None:
        """Show the template editor modal."""

        def handle_save(template: PromptTemplate | None) -> None:
            if template is None:
                return
            try:
                self.manager.save_new_or_updated(template)
            except PromptistError as e:
                self.notify(str(e), severity="error")
                return
            self.view_model.load()
            self.refresh_list()
            self.notify(f"Saved: {template.title}")

        self.app.push_screen(
            TemplateEditorModal(
                self.manager.all_categories,
                existing=existing,
                intent=self.manager.creation_intent(),
                next_sort_order=self.manager.next_sort_order,
            ),
            handle_save,
        )

    def action_delete_prompt(self) -> None:
        """Delete the selected prompt with confirmation."""
        template = self.view_model.selected_prompt
        if template is not None:
            self._show_delete_confirmation(template)

    def _show_delete_confirmation(self, template: PromptTemplate) -> None:
        """Show delete confirmation modal."""

        def handle_delete(confirmed: bool | None) -> None:
            if confirmed:
                self.manager.delete_template(template.id)
                self.view_model.load()
                self.view_model.reset_selection()
                self.refresh_list()
                self.notify(f"Deleted: {template.title}")

        self.app.push_screen(ConfirmDeleteModal(template), handle_delete)

    def action_open_settings(self) -> None:
        """Open the settings modal."""

        def handle_settings(launcher: LauncherSettings | None) -> None:
            if launcher is not None:
                self.view_model.launcher_settings = launcher
                self.refresh_list()

        self.app.push_screen(SettingsModal(), handle_settings)

    def apply_frontmost_app(self, app: FrontmostApp | None) -> None:
        """Record a polled frontmost app and rebuild the list when it changes."""
        if self.app_context.update(app):
            logger.debug("Frontmost app changed: %s", self.app_context.display_name)
            self.view_model.showing_all_prompts = False
            self.view_model.reset_selection()
            self.refresh_list()
