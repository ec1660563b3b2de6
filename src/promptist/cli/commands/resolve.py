"""Resolve command: substitute variables and print or copy the result."""

from __future__ import annotations

import argparse
import sys

from promptist.cli.context import find_template_or_error, open_repository
from promptist.errors import ClipboardError
from promptist.services.clipboard import Clipboard
from promptist.services.execution import DirectCopy, PromptExecutionService
from promptist.templating import VariableResolutionContext


def parse_answers(values: list[str]) -> dict[str, str] | None:
    """Parse ``QUESTION=ANSWER`` pairs, printing an error on bad input."""
    answers: dict[str, str] = {}
    for value in values:
        question, sep, answer = value.partition("=")
        if not sep or not question.strip():
            print(f"Error: Expected QUESTION=ANSWER, got '{value}'", file=sys.stderr)
            return None
        answers[question.strip()] = answer
    return answers


def cmd_resolve(args: argparse.Namespace) -> int:
    """Resolve a template with values from the command line."""
    repository = open_repository(args)
    template = find_template_or_error(repository, args.template_id)
    if template is None:
        return 1

    answers = parse_answers(args.answer)
    if answers is None:
        return 1

    clipboard = Clipboard()
    clipboard_text = args.clipboard
    if clipboard_text is None and args.paste:
        try:
            clipboard_text = clipboard.paste()
        except ClipboardError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    service = PromptExecutionService(repository, clipboard=clipboard)
    prepared = service.prepare(
        template, VariableResolutionContext(selected_text=args.selection)
    )
    if isinstance(prepared, DirectCopy):
        text = prepared.text
    else:
        questions = prepared.parsed.parse_result.unique_input_questions
        missing = [q for q in questions if q not in answers]
        if missing:
            print("Error: Missing answers for input variables:", file=sys.stderr)
            for question in missing:
                print(f"  --answer '{question}=...'", file=sys.stderr)
            return 1
        text = service.complete(
            prepared.parsed,
            VariableResolutionContext(
                clipboard_selection=clipboard_text,
                input_responses=answers,
            ),
        )

    if args.copy:
        try:
            service.copy(template, text)
        except ClipboardError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Copied '{template.title}' to clipboard")
        return 0

    print(text)
    return 0
