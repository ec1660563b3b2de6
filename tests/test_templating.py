"""Tests for template variable parsing and resolution."""

from datetime import datetime

from promptist.templating import (
    ClipboardEntry,
    VariableKind,
    VariableResolutionContext,
    extract_variables,
    parse,
    resolve,
)

NOW = datetime(2025, 3, 14, 9, 26)


class TestParse:
    """Tests for parse() and extract_variables()."""

    def test_no_variables(self) -> None:
        result = parse("Plain text with { single braces }")
        assert result.is_empty
        assert result.has_interactive_variables is False
        assert result.unique_input_questions == ()

    def test_recognizes_every_kind(self) -> None:
        content = (
            "{{selection}} {{clipboard}} {{date}} {{time}} {{datetime}} "
            "{{input:Tone}} {{foo}}"
        )
        kinds = [v.kind for v in extract_variables(content)]
        assert kinds == [
            VariableKind.SELECTION,
            VariableKind.CLIPBOARD,
            VariableKind.DATE,
            VariableKind.TIME,
            VariableKind.DATETIME,
            VariableKind.INPUT,
            VariableKind.UNKNOWN,
        ]

    def test_names_are_case_insensitive(self) -> None:
        variables = extract_variables("{{ Selection }} {{CLIPBOARD}} {{Input:Who}}")
        assert [v.kind for v in variables] == [
            VariableKind.SELECTION,
            VariableKind.CLIPBOARD,
            VariableKind.INPUT,
        ]
        assert variables[2].argument == "Who"

    def test_offsets_cover_token(self) -> None:
        content = "Hi {{date}}!"
        (variable,) = extract_variables(content)
        assert content[variable.start : variable.end] == "{{date}}"
        assert variable.raw_match == "{{date}}"

    def test_empty_input_question_is_unknown(self) -> None:
        (variable,) = extract_variables("{{input:   }}")
        assert variable.kind is VariableKind.UNKNOWN
        assert variable.is_valid is False

    def test_duplicate_questions_collapse(self) -> None:
        result = parse("{{input:Name}} and {{input:Topic}} and {{input:Name}}")
        assert result.unique_input_questions == ("Name", "Topic")
        assert result.has_interactive_variables is True

    def test_clipboard_flag(self) -> None:
        result = parse("Fix {{clipboard}}")
        assert result.has_clipboard_variable is True
        assert result.has_interactive_variables is True

    def test_date_only_is_not_interactive(self) -> None:
        result = parse("Today is {{date}}")
        assert result.is_empty is False
        assert result.has_interactive_variables is False

    def test_needs_selection(self) -> None:
        assert parse("Explain {{selection}}").needs_selection is True
        assert parse("Explain {{clipboard}}").needs_selection is False


class TestResolve:
    """Tests for resolve()."""

    def test_clipboard_selection_is_substituted(self) -> None:
        context = VariableResolutionContext(clipboard_selection="X")
        assert resolve("{{clipboard}}", context, now=NOW) == "X"

    def test_missing_clipboard_is_empty(self) -> None:
        assert resolve("[{{clipboard}}]", now=NOW) == "[]"

    def test_duplicate_inputs_both_substituted(self) -> None:
        context = VariableResolutionContext(input_responses={"Name": "Ada"})
        result = resolve("{{input:Name}} meets {{input:Name}}", context, now=NOW)
        assert result == "Ada meets Ada"

    def test_unanswered_input_is_empty(self) -> None:
        assert resolve("Hi {{input:Name}}!", now=NOW) == "Hi !"

    def test_unknown_placeholder_left_verbatim(self) -> None:
        assert resolve("Keep {{foo}} here", now=NOW) == "Keep {{foo}} here"

    def test_date_and_time_formats(self) -> None:
        result = resolve("{{date}}|{{time}}|{{datetime}}", now=NOW)
        assert result == "2025-03-14|09:26|2025-03-14 09:26"

    def test_selection(self) -> None:
        context = VariableResolutionContext(selected_text="code")
        assert resolve("Review: {{selection}}", context, now=NOW) == "Review: code"

    def test_resolution_is_deterministic(self) -> None:
        content = "{{date}} {{clipboard}} {{input:Q}} {{unknown}}"
        context = VariableResolutionContext(
            clipboard_selection="clip", input_responses={"Q": "A"}
        )
        assert resolve(content, context, now=NOW) == resolve(content, context, now=NOW)

    def test_plain_content_unchanged(self) -> None:
        assert resolve("no variables", now=NOW) == "no variables"


class TestContext:
    """Tests for VariableResolutionContext and ClipboardEntry."""

    def test_merging_prefers_other(self) -> None:
        base = VariableResolutionContext(
            selected_text="sel", input_responses={"A": "1", "B": "2"}
        )
        other = VariableResolutionContext(
            clipboard_selection="clip", input_responses={"B": "3"}
        )
        merged = base.merging(other)
        assert merged.selected_text == "sel"
        assert merged.clipboard_selection == "clip"
        assert merged.input_responses == {"A": "1", "B": "3"}

    def test_preview_is_single_line_and_truncated(self) -> None:
        entry = ClipboardEntry(content="line one\nline two")
        assert entry.preview == "line one line two"

        long_entry = ClipboardEntry(content="x" * 100)
        assert len(long_entry.preview) == 80
        assert long_entry.preview.endswith("...")
