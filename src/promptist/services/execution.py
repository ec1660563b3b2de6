"""Turning a selected template into the text placed on the clipboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from promptist.models.template import PromptTemplate
from promptist.services.clipboard import Clipboard, ClipboardHistory
from promptist.store.repository import FileTemplateRepository
from promptist.templating import (
    TemplateParseResult,
    VariableResolutionContext,
    parse,
    resolve,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParsedExecution:
    """A template waiting for interactive values."""

    template: PromptTemplate
    parse_result: TemplateParseResult
    initial_context: VariableResolutionContext = field(
        default_factory=VariableResolutionContext
    )


@dataclass(frozen=True, slots=True)
class DirectCopy:
    """Fully resolved text, ready to copy."""

    text: str


@dataclass(frozen=True, slots=True)
class NeedsInput:
    """The template has clipboard or input variables to ask for."""

    parsed: ParsedExecution


ExecutionResult = DirectCopy | NeedsInput


class PromptExecutionService:
    """Prepares, resolves and copies templates, recording their usage."""

    def __init__(
        self,
        repository: FileTemplateRepository,
        clipboard: Clipboard | None = None,
        history: ClipboardHistory | None = None,
    ) -> None:
        self.repository = repository
        self.clipboard = clipboard or Clipboard()
        self.history = history or ClipboardHistory()

    def prepare(
        self,
        template: PromptTemplate,
        context: VariableResolutionContext | None = None,
        *,
        now: datetime | None = None,
    ) -> ExecutionResult:
        """Resolve what can be resolved without asking the user.

        Args:
            template: Template to execute.
            context: Values known up front, such as the selected text.
            now: Timestamp for date/time variables.

        Returns:
            ``DirectCopy`` when no interactive variables remain, otherwise
            ``NeedsInput`` carrying the parse result for the input dialog.
        """
        context = context or VariableResolutionContext()
        result = parse(template.content)
        if result.is_empty:
            return DirectCopy(template.content)

        if result.has_interactive_variables:
            logger.debug(
                "Template %s needs input: %s",
                template.id,
                result.unique_input_questions,
            )
            return NeedsInput(ParsedExecution(template, result, context))

        return DirectCopy(
            resolve(template.content, context, now=now, variables=result.variables)
        )

    def complete(
        self,
        parsed: ParsedExecution,
        user_context: VariableResolutionContext,
        *,
        now: datetime | None = None,
    ) -> str:
        """Resolve a prepared template with values collected from the user."""
        merged = parsed.initial_context.merging(user_context)
        return resolve(
            parsed.template.content,
            merged,
            now=now,
            variables=parsed.parse_result.variables,
        )

    def copy(self, template: PromptTemplate, text: str) -> None:
        """Copy resolved text and record one use of the template.

        Raises:
            ClipboardError: If the clipboard cannot be written. Usage is not
                recorded in that case.
        """
        self.clipboard.copy(text)
        self.history.add(text)
        self.repository.increment_usage_count(template.id)
        logger.info("Copied template %s (%s)", template.id, template.title)
