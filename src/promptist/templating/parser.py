"""Parsing of ``{{...}}`` template variables in prompt content.

Recognized variables (names are case-insensitive):

- ``{{selection}}``: text selected in the frontmost app
- ``{{clipboard}}``: text chosen from the clipboard
- ``{{date}}``, ``{{time}}``, ``{{datetime}}``: current local time
- ``{{input:<question>}}``: an answer the user types in

Anything else inside braces is an unknown variable and is left untouched
when the template is resolved.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# --- Patterns ---

# Matches {{ inner }} where inner is non-empty and contains no closing brace
VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

INPUT_PREFIX = "input:"


# --- Data Structures ---


class VariableKind(Enum):
    """Kinds of template variables."""

    SELECTION = "selection"
    CLIPBOARD = "clipboard"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    INPUT = "input"
    UNKNOWN = "unknown"

    @property
    def is_interactive(self) -> bool:
        """Whether resolving this kind needs the user's help."""
        return self in (VariableKind.CLIPBOARD, VariableKind.INPUT)


@dataclass(frozen=True, slots=True)
class TemplateVariable:
    """A single ``{{...}}`` occurrence in template content."""

    raw_match: str  # Full token including braces
    kind: VariableKind
    start: int  # Offset of the opening brace
    end: int  # Offset just past the closing brace
    argument: str = ""  # Question text for input variables, raw text for unknown

    @property
    def is_valid(self) -> bool:
        return self.kind is not VariableKind.UNKNOWN


@dataclass(frozen=True, slots=True)
class TemplateParseResult:
    """Variables found in a template plus derived flags."""

    variables: tuple[TemplateVariable, ...] = ()
    has_interactive_variables: bool = False
    has_clipboard_variable: bool = False
    unique_input_questions: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.variables

    @property
    def needs_selection(self) -> bool:
        return any(v.kind is VariableKind.SELECTION for v in self.variables)


# --- Parsing ---


def parse_variable(inner: str) -> tuple[VariableKind, str]:
    """Classify the trimmed text between the braces.

    Returns:
        Tuple of (kind, argument). For input variables the argument is the
        question with its original case; for unknown variables it is the
        inner text.
    """
    lowered = inner.lower()
    for kind in (
        VariableKind.SELECTION,
        VariableKind.CLIPBOARD,
        VariableKind.DATE,
        VariableKind.TIME,
        VariableKind.DATETIME,
    ):
        if lowered == kind.value:
            return kind, ""

    if lowered.startswith(INPUT_PREFIX):
        question = inner[len(INPUT_PREFIX) :].strip()
        if question:
            return VariableKind.INPUT, question

    return VariableKind.UNKNOWN, inner


def extract_variables(content: str) -> list[TemplateVariable]:
    """Find every variable token in content, in document order."""
    variables: list[TemplateVariable] = []
    for match in VARIABLE_PATTERN.finditer(content):
        inner = match.group(1).strip()
        kind, argument = parse_variable(inner)
        variables.append(
            TemplateVariable(
                raw_match=match.group(0),
                kind=kind,
                start=match.start(),
                end=match.end(),
                argument=argument,
            )
        )
    return variables


def parse(content: str) -> TemplateParseResult:
    """Parse template content into variables and summary flags.

    Input questions are deduplicated by exact question text so that the user
    is asked each question once, in order of first appearance.
    """
    variables = extract_variables(content)
    if not variables:
        return TemplateParseResult()

    questions: list[str] = []
    for variable in variables:
        if variable.kind is VariableKind.INPUT and variable.argument not in questions:
            questions.append(variable.argument)

    return TemplateParseResult(
        variables=tuple(variables),
        has_interactive_variables=any(v.kind.is_interactive for v in variables),
        has_clipboard_variable=any(
            v.kind is VariableKind.CLIPBOARD for v in variables
        ),
        unique_input_questions=tuple(questions),
    )
