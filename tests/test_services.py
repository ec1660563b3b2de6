"""Tests for clipboard, app context, execution and query helpers."""

import subprocess
from datetime import datetime
from typing import Any

import pytest

from promptist.errors import ClipboardError
from promptist.models import (
    CustomTarget,
    PromptAppFilter,
    PromptTemplate,
    TrackedApp,
    TrackedTarget,
)
from promptist.services.app_context import (
    APP_NAME_ENV,
    BUNDLE_ID_ENV,
    AppContextService,
    EnvironmentProbe,
    FrontmostApp,
    StaticProbe,
    default_probe,
)
from promptist.services.clipboard import Clipboard, ClipboardHistory, read_clipboard
from promptist.services.execution import (
    DirectCopy,
    NeedsInput,
    PromptExecutionService,
)
from promptist.store import FileTemplateRepository
from promptist.store.query import (
    filter_by_app,
    fuzzy_match,
    search_templates,
    sort_templates_for_display,
)
from promptist.templating import VariableResolutionContext

NOW = datetime(2025, 3, 14, 9, 26)


class FakeClipboard(Clipboard):
    """In-memory clipboard."""

    def __init__(self, content: str = "", fail: bool = False) -> None:
        super().__init__(copy_command=["true"], paste_command=["true"])
        self.content = content
        self.fail = fail

    def copy(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("no clipboard")
        self.content = text

    def paste(self) -> str:
        if self.fail:
            raise ClipboardError("no clipboard")
        return self.content


class TestClipboard:
    """Tests for the command-backed Clipboard."""

    def test_copy_runs_command_with_input(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[tuple[list[str], dict[str, Any]]] = []

        def fake_run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
            calls.append((args, kwargs))
            return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        Clipboard(copy_command=["pbcopy"], paste_command=["pbpaste"]).copy("hi")

        assert calls[0][0] == ["pbcopy"]
        assert calls[0][1]["input"] == "hi"

    def test_paste_returns_stdout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
            return subprocess.CompletedProcess(args, 0, stdout="clip", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)
        assert Clipboard(["pbcopy"], ["pbpaste"]).paste() == "clip"

    def test_missing_command_raises_clipboard_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fake_run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
            raise FileNotFoundError(args[0])

        monkeypatch.setattr(subprocess, "run", fake_run)
        clipboard = Clipboard(["pbcopy"], ["pbpaste"])
        with pytest.raises(ClipboardError):
            clipboard.copy("x")
        with pytest.raises(ClipboardError):
            clipboard.paste()


class TestClipboardHistory:
    """Tests for ClipboardHistory."""

    def test_newest_first_and_deduplicated(self) -> None:
        history = ClipboardHistory()
        history.add("a")
        history.add("b")
        history.add("a")
        assert [e.content for e in history.entries] == ["a", "b"]

    def test_capped(self) -> None:
        history = ClipboardHistory(max_size=10)
        for i in range(12):
            history.add(f"item {i}")
        assert len(history) == 10
        assert history.entries[0].content == "item 11"

    def test_empty_ignored(self) -> None:
        history = ClipboardHistory()
        assert history.add("") is None
        assert len(history) == 0

    def test_add_if_new_from_clipboard(self) -> None:
        history = ClipboardHistory()
        clipboard = FakeClipboard("copied")
        assert history.add_if_new(read_clipboard(clipboard)) is not None
        assert history.add_if_new(read_clipboard(clipboard)) is None
        assert read_clipboard(FakeClipboard(fail=True)) is None
        assert history.add_if_new(None) is None
        assert len(history) == 1


class TestAppContext:
    """Tests for AppContextService and probes."""

    def test_refresh_resolves_tracked_app(self) -> None:
        probe = StaticProbe(FrontmostApp("Xcode", "com.apple.dt.Xcode"))
        service = AppContextService(probe)
        assert service.refresh() is True
        assert service.current_tracked_app is TrackedApp.XCODE
        assert service.display_name == "Xcode"
        assert service.refresh() is False

    def test_unknown_app_keeps_name_and_bundle(self) -> None:
        service = AppContextService(
            StaticProbe(FrontmostApp("Notes", "com.apple.Notes"))
        )
        service.refresh()
        assert service.current_tracked_app is None
        assert service.app_filter == PromptAppFilter(
            bundle_identifier="com.apple.Notes", display_name="Notes"
        )
        assert service.current_target == CustomTarget("Notes", "com.apple.Notes")

    def test_no_app(self) -> None:
        service = AppContextService(StaticProbe(None))
        service.refresh()
        assert service.app_filter is None
        assert service.current_target is None
        assert service.display_name is None

    def test_read_frontmost_does_not_change_state(self) -> None:
        service = AppContextService(
            StaticProbe(FrontmostApp("Xcode", "com.apple.dt.Xcode"))
        )
        app = service.read_frontmost()
        assert app == FrontmostApp("Xcode", "com.apple.dt.Xcode")
        assert service.current_tracked_app is None

        assert service.update(app) is True
        assert service.current_tracked_app is TrackedApp.XCODE
        assert service.update(app) is False

    def test_probe_exception_is_no_app(self) -> None:
        class BrokenProbe:
            def probe(self) -> FrontmostApp | None:
                raise RuntimeError("boom")

        service = AppContextService(BrokenProbe())
        service.refresh()
        assert service.app_filter is None

    def test_ignore_host_app(self) -> None:
        probe = StaticProbe(FrontmostApp("Terminal", "com.apple.Terminal"))
        service = AppContextService(probe)
        assert service.ignore(service.read_frontmost()) == "com.apple.Terminal"
        assert service.ignore(None) is None

        assert service.refresh() is False
        assert service.frontmost_bundle_identifier is None

        probe.app = FrontmostApp("Cursor", "com.todesktop.230313mzl4w4u92")
        service.refresh()
        probe.app = FrontmostApp("Terminal", "com.apple.Terminal")
        service.refresh()
        assert service.current_tracked_app is TrackedApp.CURSOR

    def test_environment_probe(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(BUNDLE_ID_ENV, "md.obsidian")
        monkeypatch.delenv(APP_NAME_ENV, raising=False)
        assert isinstance(default_probe(), EnvironmentProbe)

        service = AppContextService(EnvironmentProbe())
        service.refresh()
        assert service.current_tracked_app is TrackedApp.OBSIDIAN

    def test_environment_probe_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(BUNDLE_ID_ENV, raising=False)
        monkeypatch.delenv(APP_NAME_ENV, raising=False)
        assert EnvironmentProbe().probe() is None


class TestExecution:
    """Tests for PromptExecutionService."""

    @pytest.fixture
    def clipboard(self) -> FakeClipboard:
        return FakeClipboard()

    @pytest.fixture
    def service(
        self, repository: FileTemplateRepository, clipboard: FakeClipboard
    ) -> PromptExecutionService:
        return PromptExecutionService(repository, clipboard, ClipboardHistory())

    def test_plain_template_copied_directly(
        self, service: PromptExecutionService
    ) -> None:
        template = PromptTemplate(title="T", content="Just text")
        assert service.prepare(template) == DirectCopy("Just text")

    def test_date_only_template_resolved(
        self, service: PromptExecutionService
    ) -> None:
        template = PromptTemplate(title="T", content="Today {{date}}")
        assert service.prepare(template, now=NOW) == DirectCopy("Today 2025-03-14")

    def test_selection_resolved_from_context(
        self, service: PromptExecutionService
    ) -> None:
        template = PromptTemplate(title="T", content="Explain {{selection}}")
        context = VariableResolutionContext(selected_text="x = 1")
        assert service.prepare(template, context) == DirectCopy("Explain x = 1")

    def test_interactive_template_needs_input(
        self, service: PromptExecutionService
    ) -> None:
        template = PromptTemplate(
            title="T", content="{{clipboard}} for {{input:Audience}}"
        )
        result = service.prepare(template)
        assert isinstance(result, NeedsInput)
        assert result.parsed.parse_result.unique_input_questions == ("Audience",)

        text = service.complete(
            result.parsed,
            VariableResolutionContext(
                clipboard_selection="notes", input_responses={"Audience": "execs"}
            ),
        )
        assert text == "notes for execs"

    def test_copy_records_usage(
        self,
        service: PromptExecutionService,
        repository: FileTemplateRepository,
        clipboard: FakeClipboard,
    ) -> None:
        template = repository.load_templates()[0]
        service.copy(template, "resolved")

        assert clipboard.content == "resolved"
        assert service.history.entries[0].content == "resolved"
        assert repository.get_template(template.id).usage_count == 1

    def test_failed_copy_does_not_record_usage(
        self, repository: FileTemplateRepository
    ) -> None:
        service = PromptExecutionService(repository, FakeClipboard(fail=True))
        template = repository.load_templates()[0]
        with pytest.raises(ClipboardError):
            service.copy(template, "resolved")
        assert repository.get_template(template.id).usage_count == 0


class TestQuery:
    """Tests for store.query helpers."""

    def test_fuzzy_match(self) -> None:
        assert fuzzy_match("fb", "foobar")
        assert not fuzzy_match("bf", "foobar")
        assert not fuzzy_match("", "foobar")

    def test_search_covers_title_content_tags(self) -> None:
        templates = [
            PromptTemplate(title="Alpha", content="x"),
            PromptTemplate(title="B", content="has alpha inside"),
            PromptTemplate(title="C", content="y", tags=["ALPHA"]),
            PromptTemplate(title="D", content="z"),
        ]
        assert [t.title for t in search_templates(templates, "alpha")] == [
            "Alpha",
            "B",
            "C",
        ]
        assert len(search_templates(templates, "  ")) == 4

    def test_display_sort_breaks_ties_by_title(self) -> None:
        templates = [
            PromptTemplate(title="beta", content="", sort_order=1),
            PromptTemplate(title="Alpha", content="", sort_order=1),
            PromptTemplate(title="zeta", content="", sort_order=0),
        ]
        titles = [t.title for t in sort_templates_for_display(templates)]
        assert titles == ["zeta", "Alpha", "beta"]

    def test_filter_by_app(self) -> None:
        linked = PromptTemplate(
            title="L", content="", linked_apps=[TrackedTarget(TrackedApp.XCODE)]
        )
        unlinked = PromptTemplate(title="U", content="")
        app_filter = PromptAppFilter(tracked_app=TrackedApp.XCODE)

        assert filter_by_app([linked, unlinked], app_filter) == [linked]
        assert filter_by_app(
            [linked, unlinked], app_filter, include_unlinked=True
        ) == [linked, unlinked]
        assert filter_by_app([linked, unlinked], None) == [linked, unlinked]
