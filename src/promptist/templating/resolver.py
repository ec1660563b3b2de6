"""Substitution of template variables with their values."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from promptist.templating.context import VariableResolutionContext
from promptist.templating.parser import (
    TemplateVariable,
    VariableKind,
    extract_variables,
)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def resolve_variable(
    variable: TemplateVariable,
    context: VariableResolutionContext,
    now: datetime,
) -> str:
    """Value for one variable. Unknown variables resolve to their raw token."""
    kind = variable.kind
    if kind is VariableKind.SELECTION:
        return context.selected_text or ""
    if kind is VariableKind.CLIPBOARD:
        return context.clipboard_selection or ""
    if kind is VariableKind.DATE:
        return now.strftime(DATE_FORMAT)
    if kind is VariableKind.TIME:
        return now.strftime(TIME_FORMAT)
    if kind is VariableKind.DATETIME:
        return now.strftime(DATETIME_FORMAT)
    if kind is VariableKind.INPUT:
        return context.input_responses.get(variable.argument, "")
    return variable.raw_match


def resolve(
    template: str,
    context: VariableResolutionContext | None = None,
    *,
    now: datetime | None = None,
    variables: Sequence[TemplateVariable] | None = None,
) -> str:
    """Resolve every well-formed variable in the template.

    A single timestamp is used for all date/time variables so one resolution
    is internally consistent. The function has no side effects: the same
    template, context and ``now`` always produce the same output.

    Args:
        template: Template content containing ``{{...}}`` tokens.
        context: Values for selection, clipboard and input variables.
        now: Timestamp for date/time variables (defaults to the local time).
        variables: Pre-parsed variables for ``template``, if already known.

    Returns:
        The template with recognized variables substituted.
    """
    context = context or VariableResolutionContext()
    now = now or datetime.now()
    if variables is None:
        variables = extract_variables(template)
    if not variables:
        return template

    parts: list[str] = []
    cursor = 0
    for variable in sorted(variables, key=lambda v: v.start):
        parts.append(template[cursor : variable.start])
        parts.append(resolve_variable(variable, context, now))
        cursor = variable.end
    parts.append(template[cursor:])
    return "".join(parts)
